"""Unit tests for impact-weight validation."""
from strategic_performance import Indicator, validate_goal_impact_weights


def _indicators():
    return [
        Indicator(id="A", goal_id="G1", impact_weight=60),
        Indicator(id="B", goal_id="G1", impact_weight=30),
        Indicator(id="C", goal_id="G2", impact_weight=100),
    ]


def test_first_indicator_of_goal():
    check = validate_goal_impact_weights(_indicators(), "G3", new_weight=40)
    assert not check.is_valid
    assert check.message == "First indicator of the goal"


def test_weights_summing_to_100_are_valid():
    check = validate_goal_impact_weights(_indicators(), "G1", current_indicator_id="B", new_weight=40)
    assert check.is_valid
    assert check.current_total == 100
    assert check.remaining == 0
    assert not check.should_block


def test_weights_above_100_block():
    check = validate_goal_impact_weights(_indicators(), "G1", new_weight=20)
    assert check.current_total == 110
    assert check.should_block
    assert "cannot exceed" in check.message


def test_weights_below_100_report_remaining():
    check = validate_goal_impact_weights(_indicators(), "G1")
    assert check.current_total == 90
    assert check.remaining == 10
    assert not check.is_valid
    assert not check.should_block
