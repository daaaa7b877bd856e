# strategic_performance/status.py
"""
Status Classifier & Stats Accumulator

VERSION: 1.1.0
CHANGELOG:
- v1.1.0: accumulate_stats() accepts bands or raw percentages
- v1.0.0: Single classifier shared by every report and data-entry screen
"""

import math
from dataclasses import dataclass
from typing import Iterable, List, Union

from .constants import BAND_COLORS, BAND_LABELS, BAND_THRESHOLDS
from .models import BandStats, PerformanceBand, PerformanceResult


@dataclass(frozen=True)
class BandConfig:
    """Presentation metadata for one band."""
    band: PerformanceBand
    label: str
    min_percentage: float
    max_percentage: float
    color: str


def _build_band_configs() -> List[BandConfig]:
    configs = []
    upper = math.inf
    for name, lower in BAND_THRESHOLDS:
        configs.append(BandConfig(
            band=PerformanceBand(name),
            label=BAND_LABELS[name],
            min_percentage=lower,
            max_percentage=upper,
            color=BAND_COLORS[name],
        ))
        upper = lower
    return configs


BAND_CONFIGS = _build_band_configs()


# =====================================================================
# CLASSIFIER
# =====================================================================

def classify(progress_percentage: float) -> PerformanceBand:
    """
    Map a progress percentage to its performance band.

    Lower bounds are inclusive (85.0 is excellent, 84.999 is good). Total over
    all inputs: negative, NaN or None progress is very_weak.
    """
    if progress_percentage is None:
        return PerformanceBand.VERY_WEAK
    value = float(progress_percentage)
    if math.isnan(value):
        return PerformanceBand.VERY_WEAK

    for name, lower in BAND_THRESHOLDS:
        if value >= lower:
            return PerformanceBand(name)
    return PerformanceBand.VERY_WEAK


def to_result(progress_percentage: float, has_target: bool = True) -> PerformanceResult:
    """
    Wrap a progress percentage with its band.

    Without a defined target the band is very_weak whatever the progress.
    """
    band = classify(progress_percentage) if has_target else PerformanceBand.VERY_WEAK
    return PerformanceResult(progress_percentage=progress_percentage, band=band)


def get_band_config(band: Union[PerformanceBand, str]) -> BandConfig:
    band = PerformanceBand(band)
    for config in BAND_CONFIGS:
        if config.band == band:
            return config
    return BAND_CONFIGS[-1]


def get_band_config_by_percentage(progress_percentage: float) -> BandConfig:
    return get_band_config(classify(progress_percentage))


def get_band_label(band: Union[PerformanceBand, str]) -> str:
    return get_band_config(band).label


# =====================================================================
# STATS ACCUMULATOR
# =====================================================================

def accumulate_stats(
    items: Iterable[Union[float, PerformanceBand, PerformanceResult]],
    initial: BandStats = None,
) -> BandStats:
    """
    Count items per performance band.

    Items may be raw progress percentages, bands, or PerformanceResults.
    Pure reducer: accumulate_stats(a) + accumulate_stats(b) equals
    accumulate_stats(a + b) for any split of the input.
    """
    stats = initial if initial is not None else BandStats()
    for item in items:
        if isinstance(item, PerformanceResult):
            band = item.band
        elif isinstance(item, str):
            band = PerformanceBand(item)
        else:
            band = classify(item)
        stats = stats.increment(band)
    return stats


def combine_stats(stats_list: Iterable[BandStats]) -> BandStats:
    """Element-wise sum of several BandStats (e.g. departments → organization)."""
    return sum(stats_list, BandStats())
