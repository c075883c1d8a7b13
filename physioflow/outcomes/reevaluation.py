"""Baseline vs. re-evaluation comparison rules."""

from typing import Optional

from pydantic import BaseModel

from physioflow.models.assessment import InterpretationResult, ReevaluationItem

_EPSILON = 0.0001


class Interpretation(BaseModel):
    interpretation: InterpretationResult
    mcid_achieved: bool
    change: Optional[float] = None
    change_percentage: Optional[float] = None


def calculate_change(baseline: float, current: float) -> tuple[float, Optional[float]]:
    """Return (change, change percentage). Percentage is None for a zero baseline."""
    change = current - baseline
    percentage = change / abs(baseline) * 100 if abs(baseline) > _EPSILON else None
    return change, percentage


def determine_interpretation(
    change: float,
    mcid_threshold: Optional[float],
    higher_is_better: bool,
) -> Interpretation:
    """Classify a change as improved, declined or stable.

    With an MCID, changes smaller than it are stable. Without one, only a zero
    change is stable.
    """
    threshold = mcid_threshold if mcid_threshold and mcid_threshold > 0 else 0
    magnitude = abs(change)

    if threshold > 0 and magnitude < threshold:
        return Interpretation(interpretation="stable", mcid_achieved=False)
    if threshold == 0 and magnitude < _EPSILON:
        return Interpretation(interpretation="stable", mcid_achieved=False)

    achieved = threshold > 0 and magnitude >= threshold
    improved = change > 0 if higher_is_better else change < 0
    return Interpretation(
        interpretation="improved" if improved else "declined",
        mcid_achieved=achieved,
    )


def evaluate_item(item: ReevaluationItem) -> Interpretation:
    """Preview how the server will classify one re-evaluation measure."""
    change, percentage = calculate_change(item.baseline_value, item.current_value)
    result = determine_interpretation(change, item.mcid_threshold, item.higher_is_better)
    return result.model_copy(update={"change": change, "change_percentage": percentage})
