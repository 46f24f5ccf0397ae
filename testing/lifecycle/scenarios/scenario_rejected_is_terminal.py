from common.errors import InvalidTransitionError
from designs import services as design_services
from designs.models import Design, DesignStatusHistory
from testing.lifecycle.base import cleanup_scenario_data, ensure_test_users, submit_scenario_design


def run():
    print("Running: scenario_rejected_is_terminal")
    cleanup_scenario_data("scenario_rejected_is_terminal")
    reviewer, owner, _ = ensure_test_users()
    design = submit_scenario_design(scenario_name="scenario_rejected_is_terminal", owner=owner)
    design_services.reject_design(reviewer, design.id, notes="Out of scope")
    history_before = DesignStatusHistory.objects.filter(design_id=design.id).count()
    try:
        design_services.accept_design(reviewer, design.id)
    except InvalidTransitionError:
        pass
    else:
        raise Exception("Expected accepting a rejected design to fail.")
    design = Design.objects.get(id=design.id)
    if design.status != "rejected":
        raise Exception(f"Expected status to stay rejected, got {design.status}.")
    if DesignStatusHistory.objects.filter(design_id=design.id).count() != history_before:
        raise Exception("Expected no history entry for a refused transition.")
    print("✓ Passed")
