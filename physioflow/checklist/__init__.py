"""Visit checklist progress, session timer and auto-save."""

from physioflow.checklist.autosave import ChecklistAutoSaver
from physioflow.checklist.progress import ChecklistProgress, SectionProgress, calculate_progress
from physioflow.checklist.timer import SessionTimer, format_duration, format_duration_verbose

__all__ = [
    "ChecklistAutoSaver",
    "ChecklistProgress",
    "SectionProgress",
    "SessionTimer",
    "calculate_progress",
    "format_duration",
    "format_duration_verbose",
]
