"""Clinical protocol view models and transformers."""

from typing import Any, Optional

from pydantic import Field

from physioflow.models.base import ViewModel


class ProtocolGoal(ViewModel):
    type: str = ""
    description: str = ""
    description_vi: Optional[str] = None
    measurable_criteria: Optional[str] = None
    target_timeframe_weeks: Optional[int] = None


class ProtocolExercise(ViewModel):
    name: str
    name_vi: Optional[str] = None
    description: Optional[str] = None
    description_vi: Optional[str] = None
    sets: Optional[int] = None
    reps: Optional[int] = None
    duration_seconds: Optional[int] = None
    frequency_per_day: Optional[int] = None
    phase: Optional[str] = None
    precautions: list[str] = Field(default_factory=list)


class PhaseTransition(ViewModel):
    from_phase: str
    to_phase: str
    criteria: str = ""
    criteria_vi: Optional[str] = None
    typical_week: Optional[int] = None


class ProgressionCriteria(ViewModel):
    phase_transitions: list[PhaseTransition] = Field(default_factory=list)
    discharge_criteria: str = ""
    discharge_criteria_vi: str = ""


class ClinicalProtocol(ViewModel):
    id: str
    clinic_id: Optional[str] = None
    protocol_name: str
    protocol_name_vi: str = ""
    description: Optional[str] = None
    description_vi: Optional[str] = None
    goals: list[ProtocolGoal] = Field(default_factory=list)
    exercises: list[ProtocolExercise] = Field(default_factory=list)
    frequency_per_week: Optional[int] = None
    duration_weeks: Optional[int] = None
    session_duration_minutes: Optional[int] = None
    progression_criteria: ProgressionCriteria = Field(default_factory=ProgressionCriteria)
    category: str = ""
    applicable_diagnoses: list[str] = Field(default_factory=list)
    body_regions: list[str] = Field(default_factory=list)
    is_active: bool = True
    version: Optional[int] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


class ProtocolProgressNote(ViewModel):
    date: str
    note: str = ""
    note_vi: Optional[str] = None
    phase: Optional[str] = None
    therapist_id: Optional[str] = None


class PatientProtocol(ViewModel):
    id: str
    patient_id: str
    protocol_id: str
    therapist_id: Optional[str] = None
    clinic_id: Optional[str] = None
    treatment_plan_id: Optional[str] = None
    assigned_date: Optional[str] = None
    start_date: Optional[str] = None
    target_end_date: Optional[str] = None
    actual_end_date: Optional[str] = None
    progress_status: str = "not_started"
    current_phase: str = "initial"
    sessions_completed: int = 0
    custom_goals: Optional[list[ProtocolGoal]] = None
    custom_exercises: Optional[list[ProtocolExercise]] = None
    custom_frequency_per_week: Optional[int] = None
    custom_duration_weeks: Optional[int] = None
    progress_notes: list[ProtocolProgressNote] = Field(default_factory=list)
    version: Optional[int] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None
    protocol: Optional[ClinicalProtocol] = None


def _drop_none(data: dict[str, Any], *keys: str) -> dict[str, Any]:
    return {k: v for k, v in data.items() if not (k in keys and v is None)}


def transform_protocol(data: dict[str, Any]) -> ClinicalProtocol:
    """Vietnamese name and description fall back to the English text."""
    data = _drop_none(
        data,
        "goals",
        "exercises",
        "progression_criteria",
        "category",
        "applicable_diagnoses",
        "body_regions",
    )
    return ClinicalProtocol.model_validate(
        {
            **data,
            "protocol_name_vi": data.get("protocol_name_vi") or data.get("protocol_name"),
            "description_vi": data.get("description_vi") or data.get("description"),
        }
    )


def transform_patient_protocol(data: dict[str, Any]) -> PatientProtocol:
    protocol = data.get("protocol")
    data = _drop_none(data, "current_phase", "progress_notes")
    return PatientProtocol.model_validate(
        {
            **data,
            "protocol": transform_protocol(protocol) if protocol else None,
        }
    )


class AssignProtocolRequest(ViewModel):
    protocol_id: str
    start_date: Optional[str] = None
    custom_frequency_per_week: Optional[int] = None
    custom_duration_weeks: Optional[int] = None
    notes: Optional[str] = None


class UpdateProgressRequest(ViewModel):
    progress_status: Optional[str] = None
    current_phase: Optional[str] = None
    sessions_completed: Optional[int] = None
    note: Optional[str] = None
    note_vi: Optional[str] = None
