"""
Wear classifier

Maps a tool's accumulated production and useful life onto its condition.
Integer arithmetic keeps the 70% and 80% boundaries exact.
"""

from typing import Tuple

from toolwear.config.constants import REPLACE_PERCENT, WARN_PERCENT
from toolwear.models.tool import ToolCondition


def classify(accumulated_production: int, useful_life: int) -> ToolCondition:
    """
    Classify tool wear.

    Args:
        accumulated_production: pieces produced since the last swap (>= 0)
        useful_life: tool capacity in pieces (> 0)

    Returns:
        ToolCondition: REPLACE at 80% or more, WARN from 70% up to 80%, OK below
    """
    consumed = accumulated_production * 100
    if consumed >= useful_life * REPLACE_PERCENT:
        return ToolCondition.REPLACE
    if consumed >= useful_life * WARN_PERCENT:
        return ToolCondition.WARN
    return ToolCondition.OK


def classify_with_warning(accumulated_production: int, useful_life: int) -> Tuple[ToolCondition, bool]:
    """Condition plus the warning flag that mirrors it (set whenever condition is not OK)."""
    condition = classify(accumulated_production, useful_life)
    return condition, condition is not ToolCondition.OK
