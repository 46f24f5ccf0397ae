from achievements.stats import load_profile_stats
from designs import services as design_services
from development.services import join_team
from testing.lifecycle.base import (
    ensure_user,
    cleanup_scenario_data,
    create_design_in_development,
    ensure_test_users,
)


def run():
    print("Running: scenario_points_and_level")
    cleanup_scenario_data()
    reviewer, _, _ = ensure_test_users()
    # Dedicated user so designs from other runs do not count
    scorer = ensure_user("test_scorer@local.test", "Test", "Scorer", "student")
    scorer.profile.designs.all().delete()
    scorer.profile.team_memberships.all().delete()

    design = create_design_in_development(
        scenario_name="scenario_points_and_level",
        owner=scorer,
        reviewer=reviewer,
        type="web_application",
        pages_count=4,
    )
    join_team(scorer, design.id)
    design_services.complete_development(reviewer, design.id)

    stats = load_profile_stats(scorer.profile)
    if stats.points != 70:
        raise Exception(f"Expected 70 points, got {stats.points}.")
    if stats.level != 1:
        raise Exception(f"Expected level 1, got {stats.level}.")
    if load_profile_stats(scorer.profile) != stats:
        raise Exception("Expected stats to be identical on a second read.")
    print("✓ Passed")
