# strategic_performance/data_processor.py
"""
Data Processor for Strategic Plan Performance

VERSION: 1.1.0
CHANGELOG:
- v1.1.0: Added department filter and quarterly breakdown frame
- v1.0.0: DataFrame front-end over PerformanceMetrics

Takes the raw frames loaded by the data-access layer, filters them with
pandas, and hands typed records to the scoring engine. Output frames are
rounded for display; the underlying scores are not.
"""

import logging
import time
from typing import Dict, List, Optional

import numpy as np
import pandas as pd

from .config import config
from .constants import APPROVED_STATUS
from .metrics import PerformanceMetrics
from .models import BandStats, Goal, Indicator, Measurement, Objective, Plan, TargetOverride
from .quarter_targets import build_quarter_breakdown
from .status import combine_stats, get_band_label

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = {
    'indicators': ['id', 'goal_id', 'calculation_method', 'baseline_value', 'target_value'],
    'measurements': ['indicator_id', 'period_year', 'period_index', 'value', 'approval_status'],
    'targets': ['indicator_id', 'year', 'target_value'],
    'goals': ['id', 'objective_id'],
    'objectives': ['id', 'plan_id'],
    'plans': ['id'],
}


def _check_columns(df: pd.DataFrame, kind: str):
    missing = [c for c in REQUIRED_COLUMNS[kind] if c not in df.columns]
    if missing:
        raise ValueError(f"{kind} frame is missing required columns: {missing}")


def _clean(value):
    """NaN/NaT -> None, numpy scalars -> Python scalars."""
    if value is None:
        return None
    if np.ndim(value) == 0 and pd.isna(value):
        return None
    if isinstance(value, np.generic):
        return value.item()
    return value


def _text(value, default: str = '') -> str:
    value = _clean(value)
    if value is None:
        return default
    # Integer ids read back as floats when the column has gaps
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _float(value) -> Optional[float]:
    value = _clean(value)
    return None if value is None else float(value)


class DataProcessor:
    """
    Score indicator hierarchies held in pandas DataFrames.

    Usage:
        processor = DataProcessor(
            indicators_df, measurements_df,
            goals_df=goals_df, objectives_df=objectives_df,
            plans_df=plans_df, targets_df=targets_df,
        )
        result = processor.process({'year': 2025, 'department_ids': ['D1']})
        result['indicator_scores_df']
        result['stats_df']
    """

    def __init__(
        self,
        indicators_df: pd.DataFrame,
        measurements_df: pd.DataFrame,
        goals_df: pd.DataFrame = None,
        objectives_df: pd.DataFrame = None,
        plans_df: pd.DataFrame = None,
        targets_df: pd.DataFrame = None,
    ):
        self.indicators_df = indicators_df
        self.measurements_df = measurements_df
        self.goals_df = goals_df if goals_df is not None else pd.DataFrame(columns=REQUIRED_COLUMNS['goals'])
        self.objectives_df = objectives_df if objectives_df is not None else pd.DataFrame(columns=REQUIRED_COLUMNS['objectives'])
        self.plans_df = plans_df if plans_df is not None else pd.DataFrame(columns=REQUIRED_COLUMNS['plans'])
        self.targets_df = targets_df if targets_df is not None else pd.DataFrame(columns=REQUIRED_COLUMNS['targets'])

        _check_columns(self.indicators_df, 'indicators')
        _check_columns(self.measurements_df, 'measurements')
        _check_columns(self.goals_df, 'goals')
        _check_columns(self.objectives_df, 'objectives')
        _check_columns(self.plans_df, 'plans')
        _check_columns(self.targets_df, 'targets')

        self.decimals = config.get_app_setting("DISPLAY_DECIMALS", 2)
        self.default_frequency = config.get_app_setting("DEFAULT_MEASUREMENT_FREQUENCY", "quarterly")

    # =========================================================================
    # FRAME -> RECORD CONVERSION
    # =========================================================================

    def _to_indicators(self, df: pd.DataFrame) -> List[Indicator]:
        indicators = []
        for row in df.to_dict('records'):
            q_targets = [row.get(f'q{q}_target') for q in (1, 2, 3, 4)]
            q_targets = [_float(v) for v in q_targets]
            indicators.append(Indicator(
                id=_text(row['id']),
                goal_id=_text(row['goal_id']) or None,
                code=_text(row.get('code')),
                name=_text(row.get('name')),
                unit=_text(row.get('unit')),
                calculation_method=_clean(row.get('calculation_method')),
                baseline_value=_float(row.get('baseline_value')) or 0.0,
                target_value=_float(row.get('target_value')),
                impact_weight=_float(row.get('impact_weight')),
                measurement_frequency=_text(row.get('measurement_frequency'), self.default_frequency),
                current_value=_float(row.get('current_value')),
                quarter_targets=tuple(v or 0.0 for v in q_targets) if any(q_targets) else None,
            ))
        return indicators

    @staticmethod
    def _to_measurements(df: pd.DataFrame) -> List[Measurement]:
        return [
            Measurement(
                indicator_id=_text(row['indicator_id']),
                period_year=int(row['period_year']),
                period_index=int(row['period_index']),
                value=float(row['value']),
                approval_status=_text(row['approval_status']),
            )
            for row in df.to_dict('records')
        ]

    @staticmethod
    def _to_overrides(df: pd.DataFrame) -> List[TargetOverride]:
        return [
            TargetOverride(
                indicator_id=_text(row['indicator_id']),
                year=int(row['year']),
                target_value=_float(row.get('target_value')),
                baseline_value=_float(row.get('baseline_value')),
            )
            for row in df.to_dict('records')
        ]

    @staticmethod
    def _to_goals(df: pd.DataFrame) -> List[Goal]:
        return [
            Goal(
                id=_text(row['id']),
                objective_id=_text(row['objective_id']) or None,
                code=_text(row.get('code')),
                title=_text(row.get('title')),
                department_id=_text(row.get('department_id')) or None,
            )
            for row in df.to_dict('records')
        ]

    @staticmethod
    def _to_objectives(df: pd.DataFrame) -> List[Objective]:
        return [
            Objective(
                id=_text(row['id']),
                plan_id=_text(row['plan_id']) or None,
                code=_text(row.get('code')),
                title=_text(row.get('title')),
            )
            for row in df.to_dict('records')
        ]

    @staticmethod
    def _to_plans(df: pd.DataFrame) -> List[Plan]:
        plans = []
        for row in df.to_dict('records'):
            start_year = _clean(row.get('start_year'))
            end_year = _clean(row.get('end_year'))
            plans.append(Plan(
                id=_text(row['id']),
                name=_text(row.get('name')),
                start_year=int(start_year) if start_year is not None else None,
                end_year=int(end_year) if end_year is not None else None,
            ))
        return plans

    # =========================================================================
    # FILTERING
    # =========================================================================

    def _filter_frames(self, year: int, department_ids: Optional[List], plan_id: Optional[str]) -> Dict:
        goals = self.goals_df
        objectives = self.objectives_df
        plans = self.plans_df

        if plan_id is not None:
            plans = plans[plans['id'].map(_text) == _text(plan_id)]
            objectives = objectives[objectives['plan_id'].map(_text) == _text(plan_id)]
            goals = goals[goals['objective_id'].map(_text).isin(objectives['id'].map(_text))]

        if department_ids:
            if 'department_id' not in goals.columns:
                raise ValueError("goals frame is missing required columns: ['department_id']")
            goals = goals[goals['department_id'].map(_text).isin([_text(d) for d in department_ids])]

        indicators = self.indicators_df
        if plan_id is not None or department_ids:
            indicators = indicators[indicators['goal_id'].map(_text).isin(goals['id'].map(_text))]

        measurements = self.measurements_df
        measurements = measurements[
            (measurements['approval_status'].map(_text).str.lower() == APPROVED_STATUS) &
            (measurements['value'].notna())
        ]
        measurements = measurements[
            measurements['indicator_id'].map(_text).isin(indicators['id'].map(_text))
        ]

        targets = self.targets_df
        targets = targets[targets['year'] == year] if not targets.empty else targets

        return {
            'indicators': indicators,
            'measurements': measurements,
            'targets': targets,
            'goals': goals,
            'objectives': objectives,
            'plans': plans,
        }

    # =========================================================================
    # MAIN ENTRY POINT
    # =========================================================================

    def process(self, filter_values: Dict) -> Dict:
        """
        Score everything in the filter scope.

        Args:
            filter_values: Dict containing:
                - year: Fiscal year (required)
                - department_ids: Restrict goals to these departments
                  (the goals frame must have department_id)
                - plan_id: Restrict to one plan

        Returns:
            Dict containing:
            - indicator_scores_df, goal_scores_df, objective_scores_df,
              plan_scores_df: one row per node
            - stats_df: BandStats per department plus a TOTAL row
            - quarter_breakdown_df: quarterly rows for quarterly indicators
            - stats: organization BandStats for the scope
        """
        start_time = time.perf_counter()

        year = filter_values['year']
        department_ids = filter_values.get('department_ids')
        plan_id = filter_values.get('plan_id')

        frames = self._filter_frames(year, department_ids, plan_id)

        indicators = self._to_indicators(frames['indicators'])
        measurements = self._to_measurements(frames['measurements'])
        goals = self._to_goals(frames['goals'])
        objectives = self._to_objectives(frames['objectives'])
        plans = self._to_plans(frames['plans'])

        metrics = PerformanceMetrics(
            indicators,
            measurements,
            goals=goals,
            objectives=objectives,
            plans=plans,
            target_overrides=self._to_overrides(frames['targets']),
            year=year,
        )

        indicator_scores = metrics.score_indicators()
        goal_scores = {g.id: metrics.score_goal(g.id) for g in goals}
        objective_scores = {o.id: metrics.score_objective(o.id) for o in objectives}
        plan_scores = {p.id: metrics.score_plan(p.id) for p in plans}
        dept_stats = metrics.stats_by_department()
        org_stats = combine_stats(dept_stats.values())

        result = {
            'indicator_scores_df': self._indicator_frame(indicators, indicator_scores, metrics),
            'goal_scores_df': self._node_frame(goal_scores, 'goal_id', extra=lambda s: {
                'department_id': s.department_id,
                'weighting': s.weighting,
                'indicator_count': len(s.indicator_scores),
            }),
            'objective_scores_df': self._node_frame(objective_scores, 'objective_id', extra=lambda s: {
                'goal_count': len(s.goal_scores),
            }),
            'plan_scores_df': self._node_frame(plan_scores, 'plan_id', extra=lambda s: {
                'objective_count': len(s.objective_scores),
            }),
            'stats_df': self._stats_frame(dept_stats, org_stats),
            'quarter_breakdown_df': self._quarter_frame(indicators, measurements, metrics, year),
            'stats': org_stats,
        }

        elapsed = time.perf_counter() - start_time
        if config.is_feature_enabled("DEBUG_TIMING"):
            logger.info(f"[DataProcessor] process() completed in {elapsed:.3f}s")

        logger.info(
            f"Scored {len(indicator_scores)} indicators, {len(goal_scores)} goals, "
            f"{len(objective_scores)} objectives for {year}"
        )
        return result

    # =========================================================================
    # OUTPUT FRAMES
    # =========================================================================

    def _indicator_frame(self, indicators, scores, metrics) -> pd.DataFrame:
        rows = []
        for indicator in indicators:
            score = scores[indicator.id]
            rows.append({
                'indicator_id': indicator.id,
                'code': indicator.code,
                'name': indicator.name,
                'goal_id': indicator.goal_id,
                'calculation_method': indicator.calculation_method,
                'baseline_value': score.baseline_value,
                'target_value': score.target_value,
                'achieved_value': score.achieved_value,
                'progress_percentage': score.progress_percentage,
                'band': score.band.value,
                'band_label': get_band_label(score.band),
                'has_target': score.has_target,
                'period_count': score.period_count,
                'completion_rate': metrics.completion_rate(indicator.id),
            })
        df = pd.DataFrame(rows, columns=[
            'indicator_id', 'code', 'name', 'goal_id', 'calculation_method',
            'baseline_value', 'target_value', 'achieved_value',
            'progress_percentage', 'band', 'band_label', 'has_target',
            'period_count', 'completion_rate',
        ])
        return self._round(df, ['achieved_value', 'progress_percentage', 'completion_rate'])

    def _node_frame(self, scores: Dict, id_column: str, extra=None) -> pd.DataFrame:
        rows = []
        for node_id, score in scores.items():
            row = {
                id_column: node_id,
                'progress_percentage': score.progress_percentage,
                'band': score.result.band.value,
                'band_label': get_band_label(score.result.band),
            }
            if extra is not None:
                row.update(extra(score))
            row.update(score.stats.to_dict())
            rows.append(row)
        df = pd.DataFrame(rows)
        if df.empty:
            df = pd.DataFrame(columns=[id_column, 'progress_percentage', 'band', 'band_label'])
        return self._round(df, ['progress_percentage'])

    @staticmethod
    def _stats_frame(dept_stats: Dict, org_stats: BandStats) -> pd.DataFrame:
        rows = [
            {'department_id': dept, **stats.to_dict()}
            for dept, stats in sorted(dept_stats.items(), key=lambda kv: str(kv[0]))
        ]
        rows.append({'department_id': 'TOTAL', **org_stats.to_dict()})
        return pd.DataFrame(rows)

    def _quarter_frame(self, indicators, measurements, metrics, year) -> pd.DataFrame:
        columns = ['indicator_id', 'quarter', 'value', 'actual', 'target', 'achievement']
        records = []
        for indicator in indicators:
            if (indicator.measurement_frequency or '').lower() != 'quarterly':
                continue
            quarter_values = {
                m.period_index: m.value
                for m in measurements
                if m.indicator_id == indicator.id and m.period_year == year
            }
            override = metrics.get_override(indicator.id, year)
            yearly_target = override.target_value if override is not None else None
            breakdown = build_quarter_breakdown(indicator, quarter_values, yearly_target)
            records.extend(breakdown.to_records())

        df = pd.DataFrame(records, columns=columns)
        return self._round(df, ['actual', 'target', 'achievement'])

    def _round(self, df: pd.DataFrame, columns: List[str]) -> pd.DataFrame:
        if df.empty:
            return df
        for col in columns:
            if col in df.columns:
                df[col] = pd.to_numeric(df[col], errors='coerce').round(self.decimals)
        return df
