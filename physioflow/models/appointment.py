"""Appointment and therapist scheduling view models."""

from typing import Literal, Optional

from pydantic import Field

from physioflow.models.base import ViewModel

AppointmentStatus = Literal[
    "scheduled", "confirmed", "in_progress", "completed", "cancelled", "no_show"
]
AppointmentType = Literal["assessment", "treatment", "followup", "consultation", "other"]
RecurrencePattern = Literal["none", "daily", "weekly", "biweekly", "monthly"]


class Appointment(ViewModel):
    id: str
    clinic_id: Optional[str] = None
    patient_id: str
    therapist_id: str
    start_time: str
    end_time: Optional[str] = None
    duration: int = 30
    type: AppointmentType = "treatment"
    status: AppointmentStatus = "scheduled"
    room: Optional[str] = None
    notes: Optional[str] = None
    cancellation_reason: Optional[str] = None
    recurrence_id: Optional[str] = None
    patient_name: Optional[str] = None
    patient_mrn: Optional[str] = None
    patient_phone: Optional[str] = None
    therapist_name: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


class Therapist(ViewModel):
    id: str
    first_name: str = ""
    last_name: str = ""
    full_name: str = ""
    email: Optional[str] = None
    specialty: Optional[str] = None
    avatar_url: Optional[str] = None
    is_active: bool = True


class AvailabilitySlot(ViewModel):
    start_time: str
    end_time: str
    therapist_id: str
    therapist_name: Optional[str] = None
    duration: int = 30


class DaySchedule(ViewModel):
    date: str
    appointments: list[Appointment] = Field(default_factory=list)
    total_count: int = 0


class CreateAppointmentRequest(ViewModel):
    patient_id: str
    therapist_id: str
    start_time: str
    duration: int
    type: AppointmentType
    room: Optional[str] = None
    notes: Optional[str] = None
    recurrence_pattern: Optional[RecurrencePattern] = None
    recurrence_end_date: Optional[str] = None
    recurrence_count: Optional[int] = None


class UpdateAppointmentRequest(ViewModel):
    start_time: Optional[str] = None
    duration: Optional[int] = None
    type: Optional[AppointmentType] = None
    status: Optional[AppointmentStatus] = None
    room: Optional[str] = None
    notes: Optional[str] = None
    therapist_id: Optional[str] = None


class CancelAppointmentRequest(ViewModel):
    reason: Optional[str] = None
    cancel_series: Optional[bool] = None
