"""Outcome-measure library, progress and re-evaluation rules."""

from physioflow.outcomes.library import MEASURE_LIBRARY, get_measure_definition
from physioflow.outcomes.progress import (
    calculate_progress,
    calculate_target,
    calculate_trending,
)
from physioflow.outcomes.reevaluation import (
    calculate_change,
    determine_interpretation,
    evaluate_item,
)

__all__ = [
    "MEASURE_LIBRARY",
    "calculate_change",
    "calculate_progress",
    "calculate_target",
    "calculate_trending",
    "determine_interpretation",
    "evaluate_item",
    "get_measure_definition",
]
