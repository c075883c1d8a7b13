"""Outcome-measure progress and trend calculation.

Progress is judged against the baseline score. The target is one MCID
(minimal clinically important difference) better than baseline, clamped to the
measure's score range.
"""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Iterable, Optional

from physioflow.models.outcome import (
    MeasureDefinition,
    OutcomeMeasurement,
    ProgressDataPoint,
    ProgressSummary,
    TrendingRow,
)
from physioflow.outcomes.library import get_measure_definition


def parse_date(value: str) -> datetime:
    """Parse an ISO date or datetime; naive values are taken as UTC."""
    parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def sort_by_date(measurements: Iterable[OutcomeMeasurement]) -> list[OutcomeMeasurement]:
    """Oldest first. The sort is stable for equal dates."""
    return sorted(measurements, key=lambda m: parse_date(m.date))


def baseline_score(measurements: list[OutcomeMeasurement]) -> Optional[float]:
    """Score of the first baseline-phase measurement in date order."""
    for m in measurements:
        if m.phase == "baseline":
            return m.score
    return None


def calculate_target(baseline: float, definition: MeasureDefinition) -> float:
    target = (
        baseline + definition.mcid
        if definition.higher_is_better
        else baseline - definition.mcid
    )
    return max(definition.min_score, min(definition.max_score, target))


def mcid_achieved(change: Optional[float], definition: Optional[MeasureDefinition]) -> bool:
    if change is None or definition is None:
        return False
    if definition.higher_is_better:
        return change >= definition.mcid
    return change <= -definition.mcid


def calculate_progress(
    measure_type: str,
    measurements: Iterable[OutcomeMeasurement],
) -> ProgressSummary:
    """Summarize one measure's history for a patient.

    ``measurements`` should already be filtered to ``measure_type``.
    """
    ordered = sort_by_date(measurements)
    definition = get_measure_definition(measure_type)

    baseline = baseline_score(ordered)
    current = ordered[-1].score if ordered else None

    target = None
    if baseline is not None and definition is not None:
        target = calculate_target(baseline, definition)

    change = current - baseline if baseline is not None and current is not None else None

    return ProgressSummary(
        measure_type=measure_type,
        baseline=baseline,
        current=current,
        target=target,
        change_from_baseline=change,
        mcid_achieved=mcid_achieved(change, definition),
        data_points=[
            ProgressDataPoint(date=m.date, score=m.score, phase=m.phase) for m in ordered
        ],
    )


def calculate_trending(measurements: Iterable[OutcomeMeasurement]) -> list[TrendingRow]:
    """One row per measurement with its change from baseline."""
    ordered = sort_by_date(measurements)
    baseline = baseline_score(ordered)
    return [
        TrendingRow(
            id=m.id,
            date=m.date,
            score=m.score,
            phase=m.phase,
            change_from_baseline=m.score - baseline if baseline is not None else None,
        )
        for m in ordered
    ]
