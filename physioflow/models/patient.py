"""Patient view models and transformers."""

from typing import Any, Literal, Optional

from physioflow.models.base import ViewModel

PatientStatus = Literal["active", "inactive", "discharged"]

# View sort fields mapped to API column names.
SORT_BY_MAP = {
    "created_at": "created_at",
    "updated_at": "updated_at",
    "name_vi": "first_name",
    "mrn": "mrn",
    "last_visit_date": "updated_at",
}


class Patient(ViewModel):
    id: str
    mrn: str = ""
    name_vi: str = ""
    name_en: str = ""
    date_of_birth: Optional[str] = None
    gender: Optional[str] = None
    phone: str = ""
    email: Optional[str] = None
    address: Optional[str] = None
    status: PatientStatus = "active"
    emergency_contact_name: Optional[str] = None
    emergency_contact_phone: Optional[str] = None
    notes: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


class PatientInsuranceInfo(ViewModel):
    id: str
    patient_id: str
    provider: str = ""
    provider_type: str = "bhyt"
    policy_number: str = ""
    group_number: Optional[str] = None
    coverage_percentage: float = 0
    copay_amount: Optional[float] = None
    valid_from: Optional[str] = None
    valid_to: Optional[str] = None
    is_primary: bool = False
    is_active: bool = True
    verification_status: str = "pending"


class PatientDashboard(ViewModel):
    patient: Patient
    total_appointments: int = 0
    upcoming_appointments: int = 0
    completed_sessions: int = 0
    active_treatment_plans: int = 0
    last_visit: Optional[str] = None
    next_appointment: Optional[str] = None
    insurance_info: Optional[list[PatientInsuranceInfo]] = None


def patient_name_vi(data: dict[str, Any]) -> str:
    """Vietnamese display name: full_name_vi, then "last first" in Vietnamese,
    then the English full name."""
    if data.get("full_name_vi"):
        return data["full_name_vi"]
    last, first = data.get("last_name_vi"), data.get("first_name_vi")
    if last and first:
        return f"{last} {first}"
    return data.get("full_name") or ""


def transform_patient(data: dict[str, Any]) -> Patient:
    contact = data.get("emergency_contact") or {}
    return Patient(
        id=data["id"],
        mrn=data.get("mrn") or "",
        name_vi=patient_name_vi(data),
        name_en=data.get("full_name") or "",
        date_of_birth=data.get("date_of_birth"),
        gender=data.get("gender"),
        phone=data.get("phone") or "",
        email=data.get("email"),
        address=data.get("address"),
        status="active" if data.get("is_active") else "inactive",
        emergency_contact_name=contact.get("name"),
        emergency_contact_phone=contact.get("phone"),
        notes=data.get("notes"),
        created_at=data.get("created_at"),
        updated_at=data.get("updated_at"),
    )


def transform_patient_dashboard(data: dict[str, Any]) -> PatientDashboard:
    insurance = data.get("insurance_info")
    return PatientDashboard(
        patient=transform_patient(data["patient"]),
        total_appointments=data.get("total_appointments") or 0,
        upcoming_appointments=data.get("upcoming_appointments") or 0,
        completed_sessions=data.get("completed_sessions") or 0,
        active_treatment_plans=data.get("active_treatment_plans") or 0,
        last_visit=data.get("last_visit"),
        next_appointment=data.get("next_appointment"),
        insurance_info=(
            [PatientInsuranceInfo.model_validate(i) for i in insurance]
            if insurance is not None
            else None
        ),
    )


def status_to_is_active(status: Optional[str]) -> Optional[bool]:
    """Map a view status filter to the API's ``is_active`` flag."""
    if status == "active":
        return True
    if status == "inactive":
        return False
    return None
