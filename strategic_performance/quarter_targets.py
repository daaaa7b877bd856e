# strategic_performance/quarter_targets.py
"""
Quarter Target Allocator & Quarterly Breakdown

VERSION: 1.1.1
CHANGELOG:
- v1.1.1: NaN yearly or quarter targets allocate as 0
- v1.1.0: Added score_selected_quarters() for partial-year progress
- v1.0.0: Quarter targets derived from the yearly target when the plan
          has no explicit per-quarter targets

Used by quarterly breakdown tables only. Nothing here feeds the yearly
progress percentage computed by metrics.py.

Allocation (no explicit quarter targets):
- Cumulative family: Q1..Q4 = 25% / 50% / 75% / 100% of the yearly target
- Other methods:     Q1..Q4 = 25% each
"""

import logging
import math
from dataclasses import dataclass
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from .calculation_methods import (
    _is_number,
    aggregate_periods,
    calculate_progress_percentage,
    has_usable_target,
    resolve_method,
)
from .constants import (
    CUMULATIVE_QUARTER_FRACTIONS,
    EQUAL_QUARTER_FRACTION,
    MEASUREMENT_FREQUENCY_PERIODS,
    QUARTERS,
)
from .models import Indicator, PerformanceResult
from .status import to_result

logger = logging.getLogger(__name__)


def periods_per_year(frequency: Optional[str]) -> int:
    """Number of measurement periods in a year; unknown frequencies count as annual."""
    key = (frequency or 'annual').strip().lower().replace('-', '_')
    return MEASUREMENT_FREQUENCY_PERIODS.get(key, 1)


def _has_explicit_targets(explicit: Optional[Sequence[float]]) -> bool:
    if not explicit:
        return False
    for value in explicit:
        if value is None:
            continue
        try:
            if not math.isnan(float(value)) and float(value) != 0:
                return True
        except (TypeError, ValueError):
            continue
    return False


def allocate_quarter_targets(
    method,
    yearly_target: Optional[float],
    explicit_targets: Optional[Sequence[float]] = None,
) -> List[float]:
    """
    Quarter targets for Q1..Q4.

    Explicit targets are used as given (missing entries become 0) as soon as
    any of them is non-zero. Otherwise the yearly target is split.
    """
    if _has_explicit_targets(explicit_targets):
        padded = list(explicit_targets)[:len(QUARTERS)]
        padded += [0.0] * (len(QUARTERS) - len(padded))
        return [float(v) if _is_number(v) else 0.0 for v in padded]

    target = float(yearly_target) if _is_number(yearly_target) else 0.0
    if resolve_method(method).is_cumulative:
        return [target * fraction for fraction in CUMULATIVE_QUARTER_FRACTIONS]
    return [target * EQUAL_QUARTER_FRACTION for _ in QUARTERS]


def quarter_achievement(quarter_actual: Optional[float], quarter_target: Optional[float]) -> float:
    """Per-quarter achievement rate; 0 when the target is zero or missing."""
    if not quarter_target or quarter_actual is None:
        return 0.0
    return float(quarter_actual) / float(quarter_target) * 100


# =====================================================================
# QUARTERLY BREAKDOWN
# =====================================================================

@dataclass(frozen=True)
class QuarterRow:
    """
    One row of a quarterly breakdown table.

    value is the quarter's own entry. actual is what the quarter target is
    compared with: the running total for cumulative methods, the quarter's
    value otherwise.
    """
    quarter: int
    value: Optional[float]
    actual: Optional[float]
    target: float
    achievement: float


@dataclass(frozen=True)
class QuarterBreakdown:
    indicator_id: str
    rows: Tuple[QuarterRow, ...]
    yearly_target: float
    total: Optional[float]

    def to_records(self) -> List[Dict]:
        return [
            {
                'indicator_id': self.indicator_id,
                'quarter': row.quarter,
                'value': row.value,
                'actual': row.actual,
                'target': row.target,
                'achievement': row.achievement,
            }
            for row in self.rows
        ]


def build_quarter_breakdown(
    indicator: Indicator,
    quarter_values: Mapping[int, float],
    yearly_target: Optional[float] = None,
) -> QuarterBreakdown:
    """
    Build per-quarter target/actual/achievement rows for one indicator.

    Args:
        indicator: Indicator being reported
        quarter_values: Dict quarter (1-4) -> approved value; missing quarters
                        have no entry yet
        yearly_target: Year-specific target; defaults to indicator.target_value

    Returns:
        QuarterBreakdown, whose total is the sum of entries for cumulative
        methods and their average otherwise (None when nothing is entered)
    """
    method = resolve_method(indicator.calculation_method)
    target = yearly_target if yearly_target is not None else indicator.target_value
    target = float(target) if _is_number(target) else 0.0
    quarter_targets = allocate_quarter_targets(method, target, indicator.quarter_targets)

    rows = []
    running = 0.0
    for quarter, q_target in zip(QUARTERS, quarter_targets):
        value = quarter_values.get(quarter)
        if value is not None:
            running += float(value)

        if method.is_cumulative:
            actual = running if value is not None else None
        else:
            actual = float(value) if value is not None else None

        rows.append(QuarterRow(
            quarter=quarter,
            value=float(value) if value is not None else None,
            actual=actual,
            target=q_target,
            achievement=quarter_achievement(actual, q_target),
        ))

    aggregate = aggregate_periods(quarter_values.get(q) for q in QUARTERS)
    if aggregate.is_empty:
        total = None
    elif method.is_cumulative:
        total = aggregate.total
    else:
        total = aggregate.average

    return QuarterBreakdown(
        indicator_id=indicator.id,
        rows=tuple(rows),
        yearly_target=target,
        total=total,
    )


def score_selected_quarters(
    indicator: Indicator,
    quarter_values: Mapping[int, float],
    selected_quarters: Iterable[int],
    target_value: Optional[float] = None,
    baseline_value: Optional[float] = None,
) -> PerformanceResult:
    """
    Progress over a subset of quarters with the indicator's own formula.

    Quarters that are selected but have no entry count as 0, as in the
    period comparison reports.
    """
    selected = sorted(set(q for q in selected_quarters if q in QUARTERS))
    if not selected:
        return to_result(0.0)

    values = [quarter_values.get(q) or 0.0 for q in selected]
    target = target_value if target_value is not None else indicator.target_value
    baseline = baseline_value if baseline_value is not None else indicator.baseline_value

    progress = calculate_progress_percentage(
        indicator.calculation_method,
        baseline,
        target,
        values,
        current_value=indicator.current_value,
    )
    return to_result(progress, has_target=has_usable_target(target))
