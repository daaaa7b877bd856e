"""Unit tests for the calculation method table."""
import pytest

from strategic_performance import (
    CalculationMethod,
    PerformanceBand,
    aggregate_periods,
    calculate_achieved_value,
    calculate_progress_percentage,
    classify,
    has_usable_target,
    resolve_method,
)


def test_resolve_method_known_and_unknown_tags():
    assert resolve_method("percentage_decreasing") == CalculationMethod.PERCENTAGE_DECREASING
    assert resolve_method("  Maintenance ") == CalculationMethod.MAINTENANCE
    assert resolve_method(None) == CalculationMethod.CUMULATIVE_INCREASING
    assert resolve_method("ratio") == CalculationMethod.CUMULATIVE_INCREASING


def test_method_families():
    assert CalculationMethod.CUMULATIVE.is_cumulative
    assert CalculationMethod.DECREASING.is_cumulative
    assert CalculationMethod.DECREASING.is_decreasing
    assert not CalculationMethod.PERCENTAGE.is_cumulative
    assert CalculationMethod.MAINTENANCE_DECREASING.is_average


def test_aggregate_periods_skips_missing_values():
    agg = aggregate_periods([10, None, float("nan"), 20])
    assert agg.total == 30
    assert agg.count == 2
    assert agg.average == 15
    assert aggregate_periods([]).average is None


def test_cumulative_increasing_example():
    periods = [50, 60, 40, 0]
    achieved = calculate_achieved_value("cumulative", 1000, periods)
    progress = calculate_progress_percentage("cumulative", 1000, 1200, periods)
    assert achieved == 1150
    assert progress == pytest.approx(75.0)
    assert classify(progress) == PerformanceBand.GOOD


def test_cumulative_decreasing_example():
    achieved = calculate_achieved_value("cumulative_decreasing", 100, [30])
    progress = calculate_progress_percentage("cumulative_decreasing", 100, 0, [30])
    assert achieved == 70
    assert progress == pytest.approx(30.0)
    assert classify(progress) == PerformanceBand.VERY_WEAK


def test_percentage_example():
    achieved = calculate_achieved_value("percentage", 0, [80, 85])
    progress = calculate_progress_percentage("percentage", 0, 90, [80, 85])
    assert achieved == 82.5
    assert progress == pytest.approx(91.67, abs=0.01)
    assert classify(progress) == PerformanceBand.EXCELLENT


def test_decreasing_average_methods():
    assert calculate_progress_percentage("maintenance_decreasing", 0, 10, [20, 20]) == pytest.approx(50.0)
    assert calculate_progress_percentage("percentage_decreasing", 0, 10, [0, 0]) == 0.0


def test_target_equal_to_baseline():
    # Denominator target - baseline is zero: compare achieved with target
    assert calculate_progress_percentage("increasing", 100, 100, [20]) == pytest.approx(120.0)
    assert calculate_progress_percentage("decreasing", 50, 50, [10]) == pytest.approx(80.0)


def test_progress_is_not_capped():
    assert calculate_progress_percentage("increasing", 0, 10, [100]) == pytest.approx(1000.0)


def test_missing_or_zero_target_scores_zero():
    assert calculate_progress_percentage("cumulative", 0, None, [10]) == 0.0
    assert calculate_progress_percentage("percentage", 0, 0, [10]) == 0.0
    assert not has_usable_target(0)
    assert not has_usable_target(None)
    assert not has_usable_target(float("nan"))
    assert has_usable_target(0.5)


def test_zero_target_decreasing_still_reports_progress():
    assert calculate_progress_percentage("decreasing", 100, 0, [30]) == pytest.approx(30.0)
    assert calculate_progress_percentage("cumulative_decreasing", 100, -5, [30]) == 0.0


def test_no_periods_scores_zero():
    assert calculate_progress_percentage("cumulative", 10, 100, []) == 0.0
    assert calculate_progress_percentage("maintenance", 0, 100, []) == 0.0


def test_standard_uses_supplied_current_value():
    assert calculate_achieved_value("standard", 0, [], current_value=45) == 45
    assert calculate_progress_percentage("standard", 0, 90, [10], current_value=45) == pytest.approx(50.0)
    assert calculate_progress_percentage("standard", 0, 90, [10]) == pytest.approx(11.1111, abs=1e-3)


def test_standard_without_approved_periods_scores_zero():
    assert calculate_progress_percentage("standard", 0, 90, [], current_value=45) == 0.0
    assert calculate_progress_percentage("standard", 0, 90, []) == 0.0


def test_unknown_method_uses_cumulative_increasing():
    assert calculate_progress_percentage("bogus", 1000, 1200, [150]) == \
        calculate_progress_percentage("cumulative_increasing", 1000, 1200, [150])


def test_regression_is_floored_at_zero():
    # Moving away from the target gives negative raw progress
    assert calculate_progress_percentage("increasing", 100, 200, [-50]) == 0.0
