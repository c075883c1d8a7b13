"""Outcome-measure view models."""

from typing import Literal, Optional

from pydantic import Field

from physioflow.models.base import ViewModel

MeasureType = Literal["VAS", "NDI", "ODI", "LEFS", "DASH", "QuickDASH", "PSFS", "FIM"]
MeasurePhase = Literal["baseline", "interim", "discharge"]


class MeasureDefinition(ViewModel):
    type: MeasureType
    name: str
    description: str
    min_score: float
    max_score: float
    mcid: float
    higher_is_better: bool
    unit: str


class OutcomeMeasurement(ViewModel):
    id: str
    patient_id: str
    measure_type: MeasureType
    score: float
    date: str
    phase: MeasurePhase
    notes: Optional[str] = None
    recorded_by: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


class ProgressDataPoint(ViewModel):
    date: str
    score: float
    phase: MeasurePhase


class ProgressSummary(ViewModel):
    measure_type: MeasureType
    baseline: Optional[float] = None
    current: Optional[float] = None
    target: Optional[float] = None
    change_from_baseline: Optional[float] = None
    mcid_achieved: bool = False
    data_points: list[ProgressDataPoint] = Field(default_factory=list)


class TrendingRow(ViewModel):
    id: str
    date: str
    score: float
    phase: MeasurePhase
    change_from_baseline: Optional[float] = None


class RecordMeasureRequest(ViewModel):
    patient_id: str
    measure_type: MeasureType
    score: float
    date: str
    phase: MeasurePhase
    notes: Optional[str] = None


class UpdateMeasureRequest(ViewModel):
    score: Optional[float] = None
    date: Optional[str] = None
    phase: Optional[MeasurePhase] = None
    notes: Optional[str] = None
