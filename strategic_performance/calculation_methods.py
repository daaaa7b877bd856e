# strategic_performance/calculation_methods.py
"""
Calculation Method Resolver, Period Aggregator & Progress Scorer

VERSION: 1.3.0
CHANGELOG:
- v1.3.0: has_usable_target() requires a positive target; standard
          method scores 0 without approved periods
- v1.2.0: percentage/maintenance families average over eligible periods
          (was: over measurement frequency count)
- v1.1.0: target == baseline no longer scores 0 for cumulative methods
- v1.0.0: Canonical 12-method table replacing the per-screen formulas

Formulas (sum/count/average over eligible period values):

    cumulative, cumulative_increasing, increasing
        achieved = baseline + sum
        progress = sum / (target - baseline) * 100
    cumulative_decreasing, decreasing
        achieved = baseline - sum
        progress = -sum / (target - baseline) * 100
    percentage, percentage_increasing, maintenance, maintenance_increasing
        achieved = average
        progress = average / target * 100
    percentage_decreasing, maintenance_decreasing
        achieved = average
        progress = target / average * 100   (0 when average is 0)
    standard
        achieved = externally supplied current value
        progress = current / target * 100   (0 until a period is approved)

A target of 0 is scored only for the decreasing cumulative family;
has_usable_target() is still False for it, so it is banded very_weak and
left out of goal averages.

Per-indicator progress is never capped above; it is floored at 0.
"""

import logging
import math
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Optional

from .constants import (
    AVERAGE_DECREASING_METHODS,
    AVERAGE_INCREASING_METHODS,
    CUMULATIVE_METHODS,
    DECREASING_METHODS,
    DEFAULT_CALCULATION_METHOD,
    INCREASING_METHODS,
)

logger = logging.getLogger(__name__)


class CalculationMethod(str, Enum):
    STANDARD = 'standard'
    CUMULATIVE = 'cumulative'
    CUMULATIVE_INCREASING = 'cumulative_increasing'
    CUMULATIVE_DECREASING = 'cumulative_decreasing'
    PERCENTAGE = 'percentage'
    PERCENTAGE_INCREASING = 'percentage_increasing'
    PERCENTAGE_DECREASING = 'percentage_decreasing'
    MAINTENANCE = 'maintenance'
    MAINTENANCE_INCREASING = 'maintenance_increasing'
    MAINTENANCE_DECREASING = 'maintenance_decreasing'
    INCREASING = 'increasing'
    DECREASING = 'decreasing'

    @property
    def is_cumulative(self) -> bool:
        return self.value in CUMULATIVE_METHODS

    @property
    def is_decreasing(self) -> bool:
        return self.value in DECREASING_METHODS

    @property
    def is_average(self) -> bool:
        return self.value in AVERAGE_INCREASING_METHODS + AVERAGE_DECREASING_METHODS


def resolve_method(tag) -> CalculationMethod:
    """
    Resolve a calculation-method tag to a CalculationMethod.

    Case and surrounding whitespace are ignored. Missing or unrecognized tags
    fall back to cumulative_increasing.
    """
    if isinstance(tag, CalculationMethod):
        return tag
    if tag is None:
        return CalculationMethod(DEFAULT_CALCULATION_METHOD)

    key = str(tag).strip().lower()
    try:
        return CalculationMethod(key)
    except ValueError:
        logger.debug(f"Unknown calculation method '{tag}', using {DEFAULT_CALCULATION_METHOD}")
        return CalculationMethod(DEFAULT_CALCULATION_METHOD)


# =====================================================================
# PERIOD AGGREGATOR
# =====================================================================

@dataclass(frozen=True)
class PeriodAggregate:
    """Sum, count and average of eligible period values."""
    total: float
    count: int

    @property
    def average(self) -> Optional[float]:
        # Undefined for zero periods
        if self.count == 0:
            return None
        return self.total / self.count

    @property
    def is_empty(self) -> bool:
        return self.count == 0


def _is_number(value) -> bool:
    if value is None or isinstance(value, bool):
        return False
    try:
        return not math.isnan(float(value))
    except (TypeError, ValueError):
        return False


def aggregate_periods(values: Iterable[float]) -> PeriodAggregate:
    """Reduce period values to sum and count. None/NaN entries are skipped."""
    total = 0.0
    count = 0
    for value in values:
        if not _is_number(value):
            continue
        total += float(value)
        count += 1
    return PeriodAggregate(total=total, count=count)


def has_usable_target(target_value: Optional[float]) -> bool:
    """
    Whether an indicator has a defined target.

    Only a positive target counts. Indicators without one are banded
    very_weak and left out of goal averages, whatever their progress.
    """
    return _is_number(target_value) and float(target_value) > 0


def _can_compute_progress(method, target_value: Optional[float]) -> bool:
    # Reducing to zero is a real goal for the decreasing cumulative family,
    # so its progress is still reported (the band stays very_weak).
    if has_usable_target(target_value):
        return True
    return _is_number(target_value) and float(target_value) == 0 and resolve_method(method).is_decreasing


# =====================================================================
# ACHIEVED VALUE
# =====================================================================

def calculate_achieved_value(
    method,
    baseline_value: float,
    period_values: Iterable[float],
    current_value: Optional[float] = None,
) -> Optional[float]:
    """
    Reduce period values (plus baseline) to the indicator's achieved value.

    Returns None for average-based methods with no eligible periods.
    """
    method = resolve_method(method)
    baseline = float(baseline_value) if _is_number(baseline_value) else 0.0
    periods = aggregate_periods(period_values)

    if method == CalculationMethod.STANDARD:
        if _is_number(current_value):
            return float(current_value)
        return baseline + periods.total

    if method.value in INCREASING_METHODS:
        return baseline + periods.total

    if method.value in DECREASING_METHODS:
        return baseline - periods.total

    return periods.average


# =====================================================================
# PROGRESS SCORER
# =====================================================================

def _cumulative_progress(signed_sum: float, achieved: float, baseline: float, target: float) -> float:
    denominator = target - baseline
    if denominator == 0:
        if target != 0:
            return achieved / target * 100
        return 100.0 if achieved > 0 else 0.0
    return signed_sum / denominator * 100


def calculate_progress_percentage(
    method,
    baseline_value: float,
    target_value: Optional[float],
    period_values: Iterable[float],
    current_value: Optional[float] = None,
) -> float:
    """
    Progress percentage of one indicator against its target.

    Never raises for bad business data: an unusable target, no eligible
    periods or a zero divisor all score 0.
    """
    method = resolve_method(method)
    if not _can_compute_progress(method, target_value):
        logger.debug(f"No usable target ({target_value}) for method {method.value}, progress = 0")
        return 0.0

    target = float(target_value)
    baseline = float(baseline_value) if _is_number(baseline_value) else 0.0
    periods = aggregate_periods(period_values)

    if periods.is_empty:
        logger.debug(f"No eligible periods for method {method.value}, progress = 0")
        return 0.0

    if method == CalculationMethod.STANDARD:
        if _is_number(current_value):
            achieved = float(current_value)
        else:
            achieved = baseline + periods.total
        progress = achieved / target * 100

    elif method.value in INCREASING_METHODS:
        achieved = baseline + periods.total
        progress = _cumulative_progress(periods.total, achieved, baseline, target)

    elif method.value in DECREASING_METHODS:
        achieved = baseline - periods.total
        progress = _cumulative_progress(-periods.total, achieved, baseline, target)

    elif method.value in AVERAGE_DECREASING_METHODS:
        average = periods.average
        if average == 0:
            logger.debug(f"Zero average for {method.value}, progress = 0")
            return 0.0
        progress = target / average * 100

    else:
        progress = periods.average / target * 100

    if not math.isfinite(progress):
        return 0.0
    return max(0.0, progress)
