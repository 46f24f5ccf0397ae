from common.errors import ValidationError
from designs.models import Design
from testing.lifecycle.base import cleanup_scenario_data, ensure_test_users, submit_scenario_design


def run():
    print("Running: scenario_page_rule_rejected")
    cleanup_scenario_data("scenario_page_rule_rejected")
    _, owner, _ = ensure_test_users()
    before = Design.objects.filter(owner_id=owner.pk).count()
    try:
        submit_scenario_design(
            scenario_name="scenario_page_rule_rejected",
            owner=owner,
            type="website",
            pages_count=2,
        )
    except ValidationError:
        pass
    else:
        raise Exception("Expected a 2-page website to be rejected.")
    if Design.objects.filter(owner_id=owner.pk).count() != before:
        raise Exception("Expected no design to be stored after a failed submission.")
    print("✓ Passed")
