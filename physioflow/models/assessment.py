"""ROM, MMT and re-evaluation assessment view models."""

from typing import Literal, Optional

from pydantic import Field, field_validator

from physioflow.models.base import ViewModel, as_list

ROMJoint = Literal[
    "shoulder",
    "elbow",
    "wrist",
    "hip",
    "knee",
    "ankle",
    "cervical_spine",
    "thoracic_spine",
    "lumbar_spine",
]
Side = Literal["left", "right", "bilateral"]
ROMMovementType = Literal["active", "passive"]
ReevaluationMeasureType = Literal["rom", "mmt", "outcome_measure"]
InterpretationResult = Literal["improved", "declined", "stable"]


# ── Range of motion ───────────────────────────────────────────────────────────


class ROMAssessment(ViewModel):
    id: str
    patient_id: str
    visit_id: Optional[str] = None
    clinic_id: Optional[str] = None
    therapist_id: Optional[str] = None
    joint: ROMJoint
    side: Side
    movement_type: ROMMovementType
    degree: float
    notes: Optional[str] = None
    assessed_at: str
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


class ROMDataPoint(ViewModel):
    degree: float
    assessed_at: str
    notes: Optional[str] = None


class ROMTrending(ViewModel):
    patient_id: str
    joint: ROMJoint
    side: Side
    movement_type: ROMMovementType
    data_points: list[ROMDataPoint] = Field(default_factory=list)
    baseline: Optional[float] = None
    current: Optional[float] = None
    change: Optional[float] = None
    trend: str = ""

    @field_validator("data_points", mode="before")
    @classmethod
    def _none_as_empty(cls, value):
        return as_list(value)


# ── Manual muscle testing ─────────────────────────────────────────────────────


class MMTAssessment(ViewModel):
    id: str
    patient_id: str
    visit_id: Optional[str] = None
    clinic_id: Optional[str] = None
    therapist_id: Optional[str] = None
    muscle_group: str
    side: Side
    grade: float
    notes: Optional[str] = None
    assessed_at: str
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


class MMTDataPoint(ViewModel):
    grade: float
    assessed_at: str
    notes: Optional[str] = None


class MMTTrending(ViewModel):
    patient_id: str
    muscle_group: str
    side: Side
    data_points: list[MMTDataPoint] = Field(default_factory=list)
    baseline: Optional[float] = None
    current: Optional[float] = None
    change: Optional[float] = None
    trend: str = ""

    @field_validator("data_points", mode="before")
    @classmethod
    def _none_as_empty(cls, value):
        return as_list(value)


# ── Re-evaluation ─────────────────────────────────────────────────────────────


class ReevaluationAssessment(ViewModel):
    id: str
    patient_id: str
    visit_id: Optional[str] = None
    clinic_id: Optional[str] = None
    baseline_assessment_id: Optional[str] = None
    assessment_type: ReevaluationMeasureType
    measure_label: str
    current_value: float
    baseline_value: float
    change: float = 0
    change_percentage: Optional[float] = None
    higher_is_better: bool = False
    mcid_threshold: Optional[float] = None
    mcid_achieved: bool = False
    interpretation: InterpretationResult = "stable"
    therapist_id: Optional[str] = None
    notes: Optional[str] = None
    assessed_at: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


class ReevaluationSummary(ViewModel):
    patient_id: str
    visit_id: Optional[str] = None
    therapist_id: Optional[str] = None
    assessed_at: Optional[str] = None
    comparisons: list[ReevaluationAssessment] = Field(default_factory=list)
    total_items: int = 0
    improved: int = 0
    declined: int = 0
    stable: int = 0
    mcid_achieved: int = 0

    @field_validator("comparisons", mode="before")
    @classmethod
    def _none_as_empty(cls, value):
        return as_list(value)


class ReevaluationItem(ViewModel):
    """One measure in a re-evaluation request."""

    assessment_type: ReevaluationMeasureType
    measure_label: str = Field(min_length=1, max_length=120)
    current_value: float
    baseline_value: float
    higher_is_better: bool
    mcid_threshold: Optional[float] = Field(default=None, gt=0)


class CreateROMRequest(ViewModel):
    patient_id: str
    visit_id: Optional[str] = None
    joint: ROMJoint
    side: Side
    movement_type: ROMMovementType
    degree: float
    notes: Optional[str] = None
    assessed_at: Optional[str] = None


class CreateMMTRequest(ViewModel):
    patient_id: str
    visit_id: Optional[str] = None
    muscle_group: str
    side: Side
    grade: float = Field(ge=0, le=5)
    notes: Optional[str] = None
    assessed_at: Optional[str] = None


class CreateReevaluationRequest(ViewModel):
    patient_id: str
    visit_id: Optional[str] = None
    baseline_assessment_id: Optional[str] = None
    assessments: list[ReevaluationItem] = Field(min_length=1)
    notes: Optional[str] = None
    assessed_at: Optional[str] = None
