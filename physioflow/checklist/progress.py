"""Visit checklist completion progress."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field

from physioflow.models.base import ViewModel
from physioflow.models.checklist import VisitChecklist


class SectionProgress(ViewModel):
    completed: int = 0
    total: int = 0
    percentage: float = 0


class ChecklistProgress(ViewModel):
    total_progress: float = 0
    section_progress: dict[str, SectionProgress] = Field(default_factory=dict)
    completed_items: int = 0
    total_items: int = 0
    required_completed: int = 0
    required_total: int = 0
    can_complete: bool = False


def _percentage(completed: int, total: int) -> float:
    return completed / total * 100 if total > 0 else 0


def calculate_progress(checklist: Optional[VisitChecklist]) -> ChecklistProgress:
    """Count answered items per section and overall.

    An item counts as answered when its response value is not None; False, 0
    and empty strings are answers. The checklist can be completed once every
    required item is answered. No checklist yields zero progress and
    ``can_complete=False``.
    """
    if checklist is None:
        return ChecklistProgress()

    completed_items = total_items = 0
    required_completed = required_total = 0
    section_progress: dict[str, SectionProgress] = {}

    for section in checklist.template.sections:
        section_completed = 0
        for item in section.items:
            total_items += 1
            if item.required:
                required_total += 1

            response = checklist.responses.get(item.id)
            if response is not None and response.value is not None:
                completed_items += 1
                section_completed += 1
                if item.required:
                    required_completed += 1

        section_total = len(section.items)
        section_progress[section.id] = SectionProgress(
            completed=section_completed,
            total=section_total,
            percentage=_percentage(section_completed, section_total),
        )

    return ChecklistProgress(
        total_progress=_percentage(completed_items, total_items),
        section_progress=section_progress,
        completed_items=completed_items,
        total_items=total_items,
        required_completed=required_completed,
        required_total=required_total,
        can_complete=required_completed >= required_total,
    )
