"""Unit tests for quarter target allocation and quarterly breakdowns."""
import pytest

from strategic_performance import (
    Indicator,
    PerformanceBand,
    allocate_quarter_targets,
    build_quarter_breakdown,
    periods_per_year,
    quarter_achievement,
    score_selected_quarters,
)


def test_cumulative_quarter_targets():
    assert allocate_quarter_targets("cumulative", 400) == [100, 200, 300, 400]
    assert allocate_quarter_targets("decreasing", 400) == [100, 200, 300, 400]


def test_equal_quarter_targets():
    assert allocate_quarter_targets("percentage", 400) == [100, 100, 100, 100]
    assert allocate_quarter_targets("maintenance_decreasing", 400) == [100, 100, 100, 100]


def test_explicit_quarter_targets_win():
    assert allocate_quarter_targets("cumulative", 400, [10, 20, 30, 40]) == [10, 20, 30, 40]
    assert allocate_quarter_targets("cumulative", 400, [0, 0, 0, 0]) == [100, 200, 300, 400]
    assert allocate_quarter_targets("percentage", 400, [50, None]) == [50, 0, 0, 0]


def test_missing_yearly_target_allocates_zero():
    assert allocate_quarter_targets("cumulative", None) == [0, 0, 0, 0]
    assert allocate_quarter_targets("cumulative", float("nan")) == [0, 0, 0, 0]
    assert allocate_quarter_targets("percentage", 400, [50, float("nan")]) == [50, 0, 0, 0]


def test_quarter_achievement():
    assert quarter_achievement(50, 100) == pytest.approx(50.0)
    assert quarter_achievement(50, 0) == 0.0
    assert quarter_achievement(None, 100) == 0.0


def test_cumulative_breakdown_uses_running_total():
    indicator = Indicator(id="X", calculation_method="cumulative", target_value=400)
    breakdown = build_quarter_breakdown(indicator, {1: 100, 2: 50, 3: 200})

    actuals = [row.actual for row in breakdown.rows]
    assert actuals == [100, 150, 350, None]
    assert [row.target for row in breakdown.rows] == [100, 200, 300, 400]
    assert breakdown.rows[1].achievement == pytest.approx(75.0)
    assert breakdown.rows[3].achievement == 0.0
    assert breakdown.total == 350


def test_average_breakdown_uses_quarter_values():
    indicator = Indicator(id="X", calculation_method="percentage", target_value=80)
    breakdown = build_quarter_breakdown(indicator, {1: 60, 2: 100}, yearly_target=400)

    assert breakdown.yearly_target == 400
    assert [row.target for row in breakdown.rows] == [100, 100, 100, 100]
    assert breakdown.rows[0].achievement == pytest.approx(60.0)
    assert breakdown.total == pytest.approx(80.0)
    assert len(breakdown.to_records()) == 4


def test_empty_breakdown_total_is_none():
    indicator = Indicator(id="X", calculation_method="percentage", target_value=80)
    assert build_quarter_breakdown(indicator, {}).total is None


def test_selected_quarters_progress():
    indicator = Indicator(id="X", calculation_method="cumulative", baseline_value=1000, target_value=1200)
    values = {1: 50, 2: 60, 3: 40, 4: 0}
    result = score_selected_quarters(indicator, values, [1, 2])
    assert result.progress_percentage == pytest.approx(55.0)
    assert result.band == PerformanceBand.MODERATE
    assert score_selected_quarters(indicator, values, []).progress_percentage == 0.0


def test_periods_per_year():
    assert periods_per_year("monthly") == 12
    assert periods_per_year("quarterly") == 4
    assert periods_per_year("semi-annual") == 2
    assert periods_per_year(None) == 1


def test_breakdown_with_missing_yearly_target():
    indicator = Indicator(id="X", calculation_method="cumulative", target_value=float("nan"))
    breakdown = build_quarter_breakdown(indicator, {1: 10})
    assert breakdown.yearly_target == 0.0
    assert [row.target for row in breakdown.rows] == [0, 0, 0, 0]
    assert breakdown.rows[0].achievement == 0.0


def test_selected_quarters_with_zero_target_are_very_weak():
    indicator = Indicator(id="X", calculation_method="decreasing", baseline_value=100, target_value=0)
    result = score_selected_quarters(indicator, {1: 80, 2: 70}, [1, 2])
    assert result.progress_percentage == pytest.approx(150.0)
    assert result.band == PerformanceBand.VERY_WEAK
