from common.errors import PolicyError
from designs import services as design_services
from development.models import TeamMembership
from development.services import join_team
from testing.lifecycle.base import (
    cleanup_scenario_data,
    create_design_in_development,
    ensure_test_users,
    submit_scenario_design,
)


def run():
    print("Running: scenario_one_active_project")
    cleanup_scenario_data()
    reviewer, member_a, _ = ensure_test_users()
    active = create_design_in_development(
        scenario_name="scenario_one_active_project",
        owner=member_a,
        reviewer=reviewer,
        name="Scenario active project",
    )
    join_team(member_a, active.id)

    other = submit_scenario_design(
        scenario_name="scenario_one_active_project",
        owner=member_a,
        type="web_application",
        pages_count=2,
        name="Scenario second project",
    )
    design_services.accept_design(reviewer, other.id)
    try:
        join_team(member_a, other.id)
    except PolicyError:
        pass
    else:
        raise Exception("Expected joining a second project while one is in development to fail.")
    if TeamMembership.objects.filter(design_id=other.id).exists():
        raise Exception("Expected no membership on the second project.")
    print("✓ Passed")
