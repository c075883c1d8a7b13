"""Exercise library and home-exercise prescription view models."""

from typing import Literal, Optional

from pydantic import Field

from physioflow.models.base import ViewModel

ExerciseCategory = Literal[
    "stretching", "strengthening", "balance", "cardiovascular", "mobility", "postural"
]
ExerciseDifficulty = Literal["beginner", "intermediate", "advanced"]
PrescriptionStatus = Literal["active", "completed", "paused", "cancelled"]


class Exercise(ViewModel):
    id: str
    clinic_id: Optional[str] = None
    name: str
    name_vi: str = ""
    description: str = ""
    description_vi: str = ""
    instructions: str = ""
    instructions_vi: str = ""
    category: ExerciseCategory
    difficulty: ExerciseDifficulty = "beginner"
    equipment: list[str] = Field(default_factory=list)
    muscle_groups: list[str] = Field(default_factory=list)
    image_url: Optional[str] = None
    video_url: Optional[str] = None
    thumbnail_url: Optional[str] = None
    default_sets: int = 0
    default_reps: int = 0
    default_hold_secs: int = 0
    precautions: Optional[str] = None
    precautions_vi: Optional[str] = None
    is_global: bool = False
    is_active: bool = True
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


class ExercisePrescription(ViewModel):
    id: str
    patient_id: str
    exercise_id: str
    program_id: Optional[str] = None
    sets: int = 0
    reps: int = 0
    hold_seconds: int = 0
    frequency: str = ""
    duration_weeks: int = 0
    custom_instructions: Optional[str] = None
    notes: Optional[str] = None
    status: PrescriptionStatus = "active"
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    exercise: Optional[Exercise] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


class ExerciseComplianceLog(ViewModel):
    id: str
    prescription_id: str
    completed_at: str
    sets_completed: int = 0
    reps_completed: int = 0
    pain_level: Optional[int] = None
    difficulty: Optional[Literal["easy", "moderate", "hard"]] = None
    notes: Optional[str] = None


class PatientComplianceSummary(ViewModel):
    total_prescriptions: int = 0
    active_prescriptions: int = 0
    completed_prescriptions: int = 0
    total_compliance_logs: int = 0
    compliance_rate: float = 0
    last_activity_date: Optional[str] = None
