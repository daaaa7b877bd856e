# strategic_performance/metrics.py
"""
Indicator Scoring & Hierarchical Rollup

VERSION: 2.1.1
CHANGELOG:
- v2.1.1: Zero-target indicators banded very_weak and left out of goal
          averages for every method
- v2.1.0: Added compare_years() and completion_rate()
- v2.0.0: Unified scoring for every report screen:
          - Zero-target indicators excluded from goal averages,
            still counted as very_weak in BandStats
          - Impact weights normalized to 100 (fallback: equal weights)
          - Contributions capped at 200 inside goal averages only
- v1.0.0: Goal / Objective / Plan rollup

Rollup chain:
    measurements -> indicator progress -> goal (weighted)
                 -> objective (mean of goals) -> plan (mean of objectives)
"""

import logging
import math
from collections import defaultdict
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from .calculation_methods import (
    aggregate_periods,
    calculate_achieved_value,
    calculate_progress_percentage,
    has_usable_target,
    resolve_method,
)
from .constants import FULL_WEIGHT, ROLLUP_PROGRESS_CAP
from .models import (
    BandStats,
    Goal,
    Indicator,
    Measurement,
    Objective,
    PerformanceBand,
    PerformanceResult,
    Plan,
    TargetOverride,
)
from .quarter_targets import periods_per_year
from .status import accumulate_stats, to_result

logger = logging.getLogger(__name__)


# =====================================================================
# RESULT TYPES
# =====================================================================

@dataclass(frozen=True)
class IndicatorScore:
    """Scored indicator. progress_percentage is uncapped."""
    indicator_id: str
    goal_id: Optional[str]
    result: PerformanceResult
    achieved_value: Optional[float]
    target_value: Optional[float]
    baseline_value: float
    has_target: bool
    impact_weight: Optional[float]
    period_count: int

    @property
    def progress_percentage(self) -> float:
        return self.result.progress_percentage

    @property
    def band(self) -> PerformanceBand:
        return self.result.band


@dataclass(frozen=True)
class WeightedProgress:
    """Minimal goal-rollup input when no IndicatorScore is at hand."""
    progress_percentage: float
    impact_weight: Optional[float] = None
    has_target: bool = True


@dataclass(frozen=True)
class GoalScore:
    goal_id: str
    result: PerformanceResult
    indicator_scores: Tuple[IndicatorScore, ...]
    stats: BandStats
    weighting: str  # 'weighted' | 'equal' | 'empty'
    department_id: Optional[str] = None

    @property
    def progress_percentage(self) -> float:
        return self.result.progress_percentage


@dataclass(frozen=True)
class ObjectiveScore:
    objective_id: str
    result: PerformanceResult
    goal_scores: Tuple[GoalScore, ...]
    stats: BandStats

    @property
    def progress_percentage(self) -> float:
        return self.result.progress_percentage


@dataclass(frozen=True)
class PlanScore:
    plan_id: str
    result: PerformanceResult
    objective_scores: Tuple[ObjectiveScore, ...]
    stats: BandStats

    @property
    def progress_percentage(self) -> float:
        return self.result.progress_percentage


@dataclass(frozen=True)
class YearComparison:
    indicator_id: str
    current_year: int
    previous_year: int
    current: IndicatorScore
    previous: IndicatorScore

    @property
    def delta(self) -> float:
        """Percentage-point change from the previous year."""
        return self.current.progress_percentage - self.previous.progress_percentage


# =====================================================================
# INDICATOR SCORING
# =====================================================================

def resolve_target(
    indicator: Indicator,
    override: Optional[TargetOverride] = None,
) -> Tuple[Optional[float], float]:
    """
    Effective (target, baseline) for an indicator.

    The year-specific override wins field by field; None falls back to the
    indicator's static value.
    """
    target = indicator.target_value
    baseline = indicator.baseline_value
    if override is not None:
        if override.target_value is not None:
            target = override.target_value
        if override.baseline_value is not None:
            baseline = override.baseline_value
    if baseline is None or (isinstance(baseline, float) and math.isnan(baseline)):
        baseline = 0.0
    return target, float(baseline)


def eligible_measurements(
    measurements: Iterable[Measurement],
    indicator_id: str,
    year: Optional[int] = None,
) -> List[Measurement]:
    """Approved measurements of one indicator (and year), ordered by period."""
    selected = [
        m for m in measurements
        if m.indicator_id == indicator_id
        and m.is_approved
        and (year is None or m.period_year == year)
    ]
    selected.sort(key=lambda m: (m.period_year, m.period_index))

    seen = set()
    for m in selected:
        key = (m.period_year, m.period_index)
        if key in seen:
            logger.warning(
                f"Indicator {indicator_id}: more than one approved entry "
                f"for period {m.period_year}/{m.period_index}"
            )
        seen.add(key)
    return selected


def score_indicator(
    indicator: Indicator,
    measurements: Iterable[Measurement],
    year: Optional[int] = None,
    override: Optional[TargetOverride] = None,
) -> IndicatorScore:
    """
    Score one indicator from its approved measurements.

    Non-approved measurements and other indicators' measurements are
    ignored, so the caller may pass an unfiltered list.
    """
    target, baseline = resolve_target(indicator, override)
    method = resolve_method(indicator.calculation_method)
    values = [m.value for m in eligible_measurements(measurements, indicator.id, year)]

    progress = calculate_progress_percentage(
        method, baseline, target, values, current_value=indicator.current_value
    )
    achieved = calculate_achieved_value(
        method, baseline, values, current_value=indicator.current_value
    )

    has_target = has_usable_target(target)
    return IndicatorScore(
        indicator_id=indicator.id,
        goal_id=indicator.goal_id,
        result=to_result(progress, has_target=has_target),
        achieved_value=achieved,
        target_value=target,
        baseline_value=baseline,
        has_target=has_target,
        impact_weight=indicator.impact_weight,
        period_count=aggregate_periods(values).count,
    )


# =====================================================================
# ROLLUPS
# =====================================================================

def _weight_or_none(weight) -> Optional[float]:
    if weight is None:
        return None
    try:
        value = float(weight)
    except (TypeError, ValueError):
        return None
    if math.isnan(value):
        return None
    return max(0.0, value)


def _mean(values: Sequence[float]) -> float:
    if not values:
        return 0.0
    return sum(values) / len(values)


def calculate_goal_progress(items: Iterable) -> Tuple[float, str]:
    """
    Weighted goal progress and the weighting that was applied.

    Items need progress_percentage, impact_weight and has_target attributes
    (IndicatorScore or WeightedProgress).

    1. Items without a usable target are left out.
    2. No weights (or all zero) -> equal-weight mean.
    3. Otherwise weights are normalized to 100 over the remaining items;
       items without a weight then contribute nothing.
    4. Each contribution is capped at ROLLUP_PROGRESS_CAP.
    5. Nothing left -> 0.
    """
    eligible = [item for item in items if item.has_target]
    if not eligible:
        return 0.0, 'empty'

    capped = [min(float(item.progress_percentage), ROLLUP_PROGRESS_CAP) for item in eligible]
    weights = [_weight_or_none(item.impact_weight) for item in eligible]
    weight_total = sum(w for w in weights if w is not None)

    if weight_total <= 0:
        return _mean(capped), 'equal'

    if weight_total > FULL_WEIGHT:
        logger.warning(f"Impact weights sum to {weight_total:g} (> {FULL_WEIGHT:g}), normalizing")

    progress = 0.0
    for pct, weight in zip(capped, weights):
        if weight is None:
            continue
        normalized = weight / weight_total * FULL_WEIGHT
        progress += pct * normalized / FULL_WEIGHT
    return progress, 'weighted'


def rollup_goal(items: Iterable) -> PerformanceResult:
    progress, _ = calculate_goal_progress(items)
    return to_result(progress)


def rollup_objective(goal_progress: Iterable[float]) -> PerformanceResult:
    """Unweighted mean of goal scores; no goals -> 0."""
    return to_result(_mean([float(p) for p in goal_progress]))


def rollup_plan(objective_progress: Iterable[float]) -> PerformanceResult:
    """Unweighted mean of objective scores; no objectives -> 0."""
    return to_result(_mean([float(p) for p in objective_progress]))


# =====================================================================
# HIERARCHY CALCULATOR
# =====================================================================

class PerformanceMetrics:
    """
    Score a strategic plan hierarchy for one fiscal year.

    Usage:
        metrics = PerformanceMetrics(
            indicators, measurements,
            goals=goals, objectives=objectives, plans=plans,
            target_overrides=overrides, year=2025,
        )
        plan_score = metrics.score_plan('plan-1')
        dept_stats = metrics.stats_by_department()

    Children are found through the parent's id list (goal.indicator_ids,
    objective.goal_ids, plan.objective_ids) when it is filled, otherwise
    through the child's parent id.
    """

    def __init__(
        self,
        indicators: Iterable[Indicator],
        measurements: Iterable[Measurement],
        goals: Iterable[Goal] = None,
        objectives: Iterable[Objective] = None,
        plans: Iterable[Plan] = None,
        target_overrides: Iterable[TargetOverride] = None,
        year: Optional[int] = None,
    ):
        self.year = year
        self.indicators: Dict[str, Indicator] = {i.id: i for i in indicators}
        self.goals: Dict[str, Goal] = {g.id: g for g in (goals or [])}
        self.objectives: Dict[str, Objective] = {o.id: o for o in (objectives or [])}
        self.plans: Dict[str, Plan] = {p.id: p for p in (plans or [])}

        # Group approved entries per indicator once
        self._measurements: Dict[str, List[Measurement]] = defaultdict(list)
        for m in measurements:
            if m.is_approved:
                self._measurements[m.indicator_id].append(m)

        self._overrides: Dict[Tuple[str, int], TargetOverride] = {}
        for override in (target_overrides or []):
            self._overrides[(override.indicator_id, override.year)] = override

        logger.debug(
            f"[PerformanceMetrics] {len(self.indicators)} indicators, "
            f"{len(self.goals)} goals, {len(self.objectives)} objectives, "
            f"{len(self.plans)} plans, year={year}"
        )

    # ---------------------------------------------------------------------
    # Lookups
    # ---------------------------------------------------------------------

    def get_override(self, indicator_id: str, year: Optional[int] = None) -> Optional[TargetOverride]:
        year = self.year if year is None else year
        if year is None:
            return None
        return self._overrides.get((indicator_id, year))

    def goal_indicators(self, goal_id: str) -> List[Indicator]:
        goal = self.goals.get(goal_id)
        if goal is not None and goal.indicator_ids:
            return [self.indicators[i] for i in goal.indicator_ids if i in self.indicators]
        return [i for i in self.indicators.values() if i.goal_id == goal_id]

    def objective_goals(self, objective_id: str) -> List[Goal]:
        objective = self.objectives.get(objective_id)
        if objective is not None and objective.goal_ids:
            return [self.goals[g] for g in objective.goal_ids if g in self.goals]
        return [g for g in self.goals.values() if g.objective_id == objective_id]

    def plan_objectives(self, plan_id: str) -> List[Objective]:
        plan = self.plans.get(plan_id)
        if plan is not None and plan.objective_ids:
            return [self.objectives[o] for o in plan.objective_ids if o in self.objectives]
        return [o for o in self.objectives.values() if o.plan_id == plan_id]

    # ---------------------------------------------------------------------
    # Scoring
    # ---------------------------------------------------------------------

    def score_indicator(self, indicator_id: str, year: Optional[int] = None) -> IndicatorScore:
        year = self.year if year is None else year
        indicator = self.indicators[indicator_id]
        return score_indicator(
            indicator,
            self._measurements.get(indicator_id, []),
            year=year,
            override=self.get_override(indicator_id, year),
        )

    def score_indicators(self, indicator_ids: Iterable[str] = None) -> Dict[str, IndicatorScore]:
        ids = list(indicator_ids) if indicator_ids is not None else list(self.indicators)
        return {i: self.score_indicator(i) for i in ids if i in self.indicators}

    def score_goal(self, goal_id: str) -> GoalScore:
        indicator_scores = tuple(
            self.score_indicator(indicator.id) for indicator in self.goal_indicators(goal_id)
        )
        progress, weighting = calculate_goal_progress(indicator_scores)
        goal = self.goals.get(goal_id)

        return GoalScore(
            goal_id=goal_id,
            result=to_result(progress),
            indicator_scores=indicator_scores,
            stats=accumulate_stats(s.result for s in indicator_scores),
            weighting=weighting,
            department_id=goal.department_id if goal is not None else None,
        )

    def score_objective(self, objective_id: str) -> ObjectiveScore:
        goal_scores = tuple(self.score_goal(goal.id) for goal in self.objective_goals(objective_id))
        return ObjectiveScore(
            objective_id=objective_id,
            result=rollup_objective(g.progress_percentage for g in goal_scores),
            goal_scores=goal_scores,
            stats=sum((g.stats for g in goal_scores), BandStats()),
        )

    def score_plan(self, plan_id: str) -> PlanScore:
        plan = self.plans.get(plan_id)
        if plan is not None and self.year is not None and not plan.covers_year(self.year):
            logger.warning(f"Plan {plan_id} does not cover fiscal year {self.year}")

        objective_scores = tuple(
            self.score_objective(objective.id) for objective in self.plan_objectives(plan_id)
        )
        return PlanScore(
            plan_id=plan_id,
            result=rollup_plan(o.progress_percentage for o in objective_scores),
            objective_scores=objective_scores,
            stats=sum((o.stats for o in objective_scores), BandStats()),
        )

    # ---------------------------------------------------------------------
    # Band stats
    # ---------------------------------------------------------------------

    def stats_for_indicators(self, indicator_ids: Iterable[str] = None) -> BandStats:
        return accumulate_stats(s.result for s in self.score_indicators(indicator_ids).values())

    def stats_by_department(self) -> Dict[Optional[str], BandStats]:
        """
        BandStats per goal department.

        Indicators whose goal is unknown are grouped under None. The values
        sum to stats_for_indicators() over all indicators.
        """
        department_of = {g.id: g.department_id for g in self.goals.values()}
        grouped: Dict[Optional[str], List[str]] = defaultdict(list)
        for indicator in self.indicators.values():
            grouped[department_of.get(indicator.goal_id)].append(indicator.id)

        return {
            department: self.stats_for_indicators(ids)
            for department, ids in grouped.items()
        }

    # ---------------------------------------------------------------------
    # Comparisons
    # ---------------------------------------------------------------------

    def compare_years(self, indicator_id: str, current_year: int, previous_year: int) -> YearComparison:
        return YearComparison(
            indicator_id=indicator_id,
            current_year=current_year,
            previous_year=previous_year,
            current=self.score_indicator(indicator_id, year=current_year),
            previous=self.score_indicator(indicator_id, year=previous_year),
        )

    def completion_rate(self, indicator_id: str, year: Optional[int] = None) -> float:
        """Approved periods entered / periods expected for the frequency, in %."""
        year = self.year if year is None else year
        indicator = self.indicators[indicator_id]
        entries = eligible_measurements(self._measurements.get(indicator_id, []), indicator_id, year)
        entered = len({(m.period_year, m.period_index) for m in entries})
        expected = periods_per_year(indicator.measurement_frequency)
        return min(entered, expected) / expected * 100


def compare_years(
    indicator: Indicator,
    measurements: Iterable[Measurement],
    current_year: int,
    previous_year: int,
    target_overrides: Iterable[TargetOverride] = None,
) -> YearComparison:
    """Score one indicator for two fiscal years side by side."""
    metrics = PerformanceMetrics([indicator], measurements, target_overrides=target_overrides)
    return metrics.compare_years(indicator.id, current_year, previous_year)

