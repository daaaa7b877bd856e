# strategic_performance/__init__.py
"""
Strategic Plan Performance Scoring Engine

One canonical module for indicator scoring and hierarchical rollup
(plan → objective → goal → indicator). Every report, data-entry screen and
export routine calls into this package instead of re-deriving formulas.

VERSION: 1.2.0

Components:
- calculation_methods: Calculation Method Resolver, Period Aggregator, Progress Scorer
- status: Status Classifier, Stats Accumulator
- metrics: Indicator scoring, Goal / Objective / Plan rollup
- quarter_targets: Quarter Target Allocator, quarterly breakdown
- validators: Impact-weight checks for data entry
- data_processor: pandas front-end over the engine

Usage:
    from strategic_performance import (
        Indicator, Measurement, PerformanceMetrics,
        score_indicator, classify, accumulate_stats,
    )

    score = score_indicator(indicator, measurements, year=2025)
    score.progress_percentage, score.band
"""

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

from .calculation_methods import (
    CalculationMethod,
    PeriodAggregate,
    aggregate_periods,
    calculate_achieved_value,
    calculate_progress_percentage,
    has_usable_target,
    resolve_method,
)

from .status import (
    BAND_CONFIGS,
    BandConfig,
    accumulate_stats,
    classify,
    combine_stats,
    get_band_config,
    get_band_config_by_percentage,
    get_band_label,
    to_result,
)

from .metrics import (
    GoalScore,
    IndicatorScore,
    ObjectiveScore,
    PerformanceMetrics,
    PlanScore,
    WeightedProgress,
    YearComparison,
    calculate_goal_progress,
    compare_years,
    eligible_measurements,
    resolve_target,
    rollup_goal,
    rollup_objective,
    rollup_plan,
    score_indicator,
)

from .quarter_targets import (
    QuarterBreakdown,
    QuarterRow,
    allocate_quarter_targets,
    build_quarter_breakdown,
    periods_per_year,
    quarter_achievement,
    score_selected_quarters,
)

from .validators import WeightValidation, validate_goal_impact_weights

from .data_processor import DataProcessor

__all__ = [
    # Models
    'BandStats',
    'Goal',
    'Indicator',
    'Measurement',
    'Objective',
    'PerformanceBand',
    'PerformanceResult',
    'Plan',
    'TargetOverride',

    # Calculation methods
    'CalculationMethod',
    'PeriodAggregate',
    'aggregate_periods',
    'calculate_achieved_value',
    'calculate_progress_percentage',
    'has_usable_target',
    'resolve_method',

    # Status
    'BAND_CONFIGS',
    'BandConfig',
    'accumulate_stats',
    'classify',
    'combine_stats',
    'get_band_config',
    'get_band_config_by_percentage',
    'get_band_label',
    'to_result',

    # Metrics
    'GoalScore',
    'IndicatorScore',
    'ObjectiveScore',
    'PerformanceMetrics',
    'PlanScore',
    'WeightedProgress',
    'YearComparison',
    'calculate_goal_progress',
    'compare_years',
    'eligible_measurements',
    'resolve_target',
    'rollup_goal',
    'rollup_objective',
    'rollup_plan',
    'score_indicator',

    # Quarter targets
    'QuarterBreakdown',
    'QuarterRow',
    'allocate_quarter_targets',
    'build_quarter_breakdown',
    'periods_per_year',
    'quarter_achievement',
    'score_selected_quarters',

    # Validators
    'WeightValidation',
    'validate_goal_impact_weights',

    # Processing
    'DataProcessor',
]

__version__ = '1.2.0'
