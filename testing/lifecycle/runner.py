from testing.lifecycle.base import assert_scenarios_enabled
from testing.lifecycle.scenarios import (
    scenario_one_active_project,
    scenario_page_rule_rejected,
    scenario_points_and_level,
    scenario_rejected_is_terminal,
    scenario_team_capacity,
)

AVAILABLE_SCENARIOS = {
    "page_rule": scenario_page_rule_rejected,
    "team_capacity": scenario_team_capacity,
    "one_active_project": scenario_one_active_project,
    "rejected_terminal": scenario_rejected_is_terminal,
    "points_and_level": scenario_points_and_level,
}


def run_scenario(name):
    assert_scenarios_enabled()
    if name not in AVAILABLE_SCENARIOS:
        raise Exception(f"Unknown scenario '{name}'. Available: {', '.join(AVAILABLE_SCENARIOS.keys())}")
    AVAILABLE_SCENARIOS[name].run()


def run_all():
    assert_scenarios_enabled()
    for _, scenario in AVAILABLE_SCENARIOS.items():
        scenario.run()
