# strategic_performance/models.py
"""
Record types for the scoring engine.

Inputs (Indicator, Measurement, TargetOverride, Goal, Objective, Plan) are
snapshots handed over by the data-access layer. Outputs (PerformanceResult,
BandStats) are never persisted by the engine.

All records are frozen so a computation can never mutate its inputs.
"""

from dataclasses import dataclass, fields, replace
from enum import Enum
from typing import Dict, Optional, Tuple

from .constants import APPROVED_STATUS


class PerformanceBand(str, Enum):
    """Six qualitative tiers derived from a progress percentage."""

    EXCEEDING_TARGET = 'exceeding_target'
    EXCELLENT = 'excellent'
    GOOD = 'good'
    MODERATE = 'moderate'
    WEAK = 'weak'
    VERY_WEAK = 'very_weak'


# =====================================================================
# INPUT RECORDS
# =====================================================================

@dataclass(frozen=True)
class Indicator:
    """
    A single measurable performance metric tied to a goal.

    target_value of None or 0 means "undefined target".
    impact_weight is the indicator's declared share (0-100) of its goal.
    current_value is only read by the 'standard' calculation method.
    quarter_targets holds explicit per-quarter targets, when the plan has any.
    """
    id: str
    goal_id: Optional[str] = None
    code: str = ''
    name: str = ''
    unit: str = ''
    calculation_method: Optional[str] = None
    baseline_value: float = 0.0
    target_value: Optional[float] = None
    impact_weight: Optional[float] = None
    measurement_frequency: str = 'quarterly'
    current_value: Optional[float] = None
    quarter_targets: Optional[Tuple[float, ...]] = None


@dataclass(frozen=True)
class Measurement:
    """One period entry for an indicator (quarter, month, half or year)."""
    indicator_id: str
    period_year: int
    period_index: int
    value: float
    approval_status: str = APPROVED_STATUS

    @property
    def is_approved(self) -> bool:
        return (self.approval_status or '').lower() == APPROVED_STATUS


@dataclass(frozen=True)
class TargetOverride:
    """Year-specific target/baseline; None fields fall back to the indicator."""
    indicator_id: str
    year: int
    target_value: Optional[float] = None
    baseline_value: Optional[float] = None


@dataclass(frozen=True)
class Goal:
    id: str
    objective_id: Optional[str] = None
    code: str = ''
    title: str = ''
    department_id: Optional[str] = None
    indicator_ids: Tuple[str, ...] = ()


@dataclass(frozen=True)
class Objective:
    id: str
    plan_id: Optional[str] = None
    code: str = ''
    title: str = ''
    goal_ids: Tuple[str, ...] = ()


@dataclass(frozen=True)
class Plan:
    id: str
    name: str = ''
    start_year: Optional[int] = None
    end_year: Optional[int] = None
    objective_ids: Tuple[str, ...] = ()

    def covers_year(self, year: int) -> bool:
        if self.start_year is not None and year < self.start_year:
            return False
        if self.end_year is not None and year > self.end_year:
            return False
        return True


# =====================================================================
# OUTPUT RECORDS
# =====================================================================

@dataclass(frozen=True)
class PerformanceResult:
    """Progress percentage and its band, for any hierarchy level."""
    progress_percentage: float
    band: PerformanceBand

    def to_dict(self) -> Dict:
        return {
            'progress_percentage': self.progress_percentage,
            'band': self.band.value,
        }


_BAND_FIELDS = {
    PerformanceBand.EXCEEDING_TARGET: 'exceeding_target',
    PerformanceBand.EXCELLENT: 'excellent',
    PerformanceBand.GOOD: 'good',
    PerformanceBand.MODERATE: 'moderate',
    PerformanceBand.WEAK: 'weak',
    PerformanceBand.VERY_WEAK: 'very_weak',
}


@dataclass(frozen=True)
class BandStats:
    """
    Count of indicators per performance band.

    Combinable by element-wise sum, so department-level stats add up to the
    organization-level view without recomputation:

        org_stats = sum(dept_stats.values(), BandStats())
    """
    total: int = 0
    exceeding_target: int = 0
    excellent: int = 0
    good: int = 0
    moderate: int = 0
    weak: int = 0
    very_weak: int = 0

    def __add__(self, other: 'BandStats') -> 'BandStats':
        if not isinstance(other, BandStats):
            return NotImplemented
        return BandStats(**{
            f.name: getattr(self, f.name) + getattr(other, f.name)
            for f in fields(self)
        })

    def __radd__(self, other):
        # Lets the builtin sum() start from 0
        if other == 0:
            return self
        return self.__add__(other)

    def increment(self, band: PerformanceBand) -> 'BandStats':
        """Return a copy with `band` and `total` incremented by one."""
        name = _BAND_FIELDS[PerformanceBand(band)]
        return replace(self, total=self.total + 1, **{name: getattr(self, name) + 1})

    def count(self, band: PerformanceBand) -> int:
        return getattr(self, _BAND_FIELDS[PerformanceBand(band)])

    def to_dict(self) -> Dict[str, int]:
        return {f.name: getattr(self, f.name) for f in fields(self)}
