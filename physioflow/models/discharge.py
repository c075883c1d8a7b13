"""Discharge plan and summary view models."""

from typing import Literal, Optional

from pydantic import Field, field_validator

from physioflow.models.base import ViewModel, as_list

DischargePlanStatus = Literal["draft", "pending", "completed", "cancelled"]


class OutcomeComparison(ViewModel):
    measure: str
    measure_vi: str = ""
    baseline: float
    discharge: float
    change: float = 0
    percent_improvement: float = 0
    mcid_threshold: float = 0
    met_mcid: bool = Field(default=False, alias="metMCID")
    higher_is_better: bool = False


class HEPExercise(ViewModel):
    id: str
    exercise_id: str
    name_en: str = ""
    name_vi: str = ""
    sets: int = 0
    reps: int = 0
    duration: Optional[str] = None
    frequency: str = ""
    instructions: Optional[str] = None
    instructions_vi: Optional[str] = None


class FollowUpRecommendation(ViewModel):
    id: Optional[str] = None
    type: Literal["appointment", "referral", "test", "other"] = "other"
    description: str = ""
    description_vi: str = ""
    timeframe: Optional[str] = None


class _DischargeContent(ViewModel):
    patient_id: str
    therapist_name: str = ""
    diagnosis: str = ""
    diagnosis_vi: str = ""
    treatment_summary: str = ""
    treatment_summary_vi: str = ""
    total_sessions: int = 0
    outcome_comparisons: list[OutcomeComparison] = Field(default_factory=list)
    functional_status: str = ""
    functional_status_vi: str = ""
    hep_exercises: list[HEPExercise] = Field(default_factory=list)
    recommendations: str = ""
    recommendations_vi: str = ""
    follow_up_plan: list[FollowUpRecommendation] = Field(default_factory=list)
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    @field_validator("outcome_comparisons", "hep_exercises", "follow_up_plan", mode="before")
    @classmethod
    def _none_as_empty(cls, value):
        return as_list(value)


class DischargePlan(_DischargeContent):
    id: str
    therapist_id: Optional[str] = None
    status: DischargePlanStatus = "draft"
    planned_date: Optional[str] = None
    actual_date: Optional[str] = None


class DischargeSummary(_DischargeContent):
    id: str
    discharge_plan_id: str
    patient_name: str = ""
    patient_name_vi: str = ""
    patient_dob: Optional[str] = None
    patient_mrn: str = ""
    date_range: str = ""
    generated_at: Optional[str] = None


class CreateDischargePlanRequest(ViewModel):
    patient_id: str
    planned_date: Optional[str] = None
    diagnosis: Optional[str] = None
    diagnosis_vi: Optional[str] = None
    treatment_summary: Optional[str] = None
    treatment_summary_vi: Optional[str] = None
    recommendations: Optional[str] = None
    recommendations_vi: Optional[str] = None
    functional_status: Optional[str] = None
    functional_status_vi: Optional[str] = None
    follow_up_plan: Optional[list[FollowUpRecommendation]] = None
