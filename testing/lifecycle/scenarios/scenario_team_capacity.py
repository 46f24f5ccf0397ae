from common.errors import CapacityError
from development.models import TeamMembership
from development.services import join_team
from testing.lifecycle.base import cleanup_scenario_data, create_design_in_development, ensure_test_users


def run():
    print("Running: scenario_team_capacity")
    # Team state of every earlier scenario would trip the one-project rule
    cleanup_scenario_data()
    reviewer, member_a, member_b = ensure_test_users()
    design = create_design_in_development(
        scenario_name="scenario_team_capacity", owner=member_a, reviewer=reviewer,
    )
    join_team(member_a, design.id)
    try:
        join_team(member_b, design.id)
    except CapacityError:
        pass
    else:
        raise Exception("Expected the second join on a 1-page design to hit capacity.")
    if TeamMembership.objects.filter(design=design).count() != 1:
        raise Exception("Expected exactly one team member.")
    print("✓ Passed")
