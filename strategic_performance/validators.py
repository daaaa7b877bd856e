# strategic_performance/validators.py
"""
Validation helpers for indicator data entry.

The scoring engine normalizes whatever weights it is given; these checks are
for forms that want to warn (or block) before a bad weight is saved.
"""

import logging
from dataclasses import dataclass
from typing import Iterable, Optional

from .constants import FULL_WEIGHT
from .models import Indicator

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class WeightValidation:
    is_valid: bool        # total == 100
    current_total: float
    remaining: float
    should_block: bool    # total > 100
    message: str


def validate_goal_impact_weights(
    indicators: Iterable[Indicator],
    goal_id: str,
    current_indicator_id: Optional[str] = None,
    new_weight: Optional[float] = None,
) -> WeightValidation:
    """
    Check the impact weights of a goal's indicators.

    Args:
        indicators: Indicators (of any goal; filtered by goal_id)
        goal_id: Goal being edited
        current_indicator_id: Indicator being edited, excluded from the
                              stored total so its new weight replaces it
        new_weight: Weight about to be saved for that indicator
    """
    others = [
        ind for ind in indicators
        if ind.goal_id == goal_id and ind.id != current_indicator_id
    ]
    weighted_others = [ind for ind in others if ind.impact_weight and ind.impact_weight > 0]

    total = sum(ind.impact_weight or 0 for ind in others)
    if new_weight is not None and new_weight > 0:
        total += new_weight

    has_several = bool(weighted_others) or (
        new_weight is not None and new_weight > 0 and bool(others)
    )

    is_valid = total == FULL_WEIGHT
    should_block = total > FULL_WEIGHT

    if not has_several:
        message = "First indicator of the goal"
    elif is_valid:
        message = f"Impact weights total {FULL_WEIGHT:g}%"
    elif should_block:
        message = f"Impact weights total {total:g}% - cannot exceed {FULL_WEIGHT:g}%"
        logger.debug(f"Goal {goal_id}: impact weights total {total:g}")
    else:
        message = f"Impact weights total {total:g}% (remaining: {FULL_WEIGHT - total:g}%)"

    return WeightValidation(
        is_valid=is_valid,
        current_total=total,
        remaining=max(0.0, FULL_WEIGHT - total),
        should_block=should_block,
        message=message,
    )
