"""Shared fixtures: a small two-department strategic plan."""
import pytest

from strategic_performance import Goal, Indicator, Measurement, Objective, Plan, TargetOverride


@pytest.fixture
def plan_records():
    indicators = [
        # G1 (dept D1): weighted 60/40
        Indicator(id="I1", goal_id="G1", code="1.1.1", calculation_method="cumulative",
                  baseline_value=1000, target_value=1200, impact_weight=60),
        Indicator(id="I2", goal_id="G1", code="1.1.2", calculation_method="percentage",
                  target_value=90, impact_weight=40),
        # G2 (dept D2): no weights, one indicator without a target
        Indicator(id="I3", goal_id="G2", code="1.2.1", calculation_method="increasing",
                  baseline_value=0, target_value=100),
        Indicator(id="I4", goal_id="G2", code="1.2.2", calculation_method="increasing",
                  baseline_value=0, target_value=None),
        # G3 (dept D2): cumulative decreasing to a zero target, so G3 has no scored indicator
        Indicator(id="I5", goal_id="G3", code="2.1.1", calculation_method="cumulative_decreasing",
                  baseline_value=100, target_value=0),
    ]
    measurements = [
        Measurement("I1", 2025, 1, 50), Measurement("I1", 2025, 2, 60),
        Measurement("I1", 2025, 3, 40), Measurement("I1", 2025, 4, 0),
        Measurement("I2", 2025, 1, 80), Measurement("I2", 2025, 2, 85),
        Measurement("I2", 2025, 3, 10, approval_status="submitted"),
        Measurement("I3", 2025, 1, 30), Measurement("I3", 2025, 2, 30),
        Measurement("I4", 2025, 1, 999),
        Measurement("I5", 2025, 1, 10), Measurement("I5", 2025, 2, 20),
        Measurement("I3", 2024, 1, 20),
    ]
    goals = [
        Goal(id="G1", objective_id="O1", department_id="D1"),
        Goal(id="G2", objective_id="O1", department_id="D2"),
        Goal(id="G3", objective_id="O2", department_id="D2"),
    ]
    objectives = [
        Objective(id="O1", plan_id="P1"),
        Objective(id="O2", plan_id="P1"),
    ]
    plans = [Plan(id="P1", name="Strategic Plan 2024-2028", start_year=2024, end_year=2028)]
    overrides = [TargetOverride(indicator_id="I3", year=2024, target_value=50)]
    return {
        "indicators": indicators,
        "measurements": measurements,
        "goals": goals,
        "objectives": objectives,
        "plans": plans,
        "overrides": overrides,
    }
