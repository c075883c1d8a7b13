"""BHYT insurance card view models."""

from typing import Literal, Optional

from physioflow.models.base import ViewModel

VerificationStatus = Literal["pending", "verified", "expired", "invalid", "failed"]
ValidationErrorCode = Literal["invalid_format", "invalid_prefix", "expired", "api_error"]
ResultSource = Literal["local", "remote"]


class Insurance(ViewModel):
    id: str
    patient_id: str
    card_number: str
    prefix_code: str = ""
    beneficiary_type: Optional[int] = None
    province_code: str = ""
    holder_name: str = ""
    holder_name_vi: str = ""
    registered_facility_code: str = ""
    registered_facility_name: Optional[str] = None
    hospital_registration_code: Optional[str] = None
    expiration_date: Optional[str] = None
    coverage_percent: float = 0
    valid_from: Optional[str] = None
    valid_to: Optional[str] = None
    copay_rate: float = 0
    five_year_continuous: bool = False
    verification: VerificationStatus = "pending"
    is_active: bool = True
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


class InsuranceForm(ViewModel):
    """Create/update request body. Dumped in snake_case."""

    card_number: str
    prefix_code: str
    holder_name: str
    holder_name_vi: str
    date_of_birth: str
    registered_facility_code: str
    registered_facility_name: Optional[str] = None
    hospital_registration_code: Optional[str] = None
    expiration_date: Optional[str] = None
    valid_from: str
    valid_to: Optional[str] = None
    coverage_percent: float
    copay_rate: float
    five_year_continuous: Optional[bool] = None


class InsuranceValidationResult(ViewModel):
    valid: bool
    card_number: str
    prefix_code: str = ""
    prefix_label: str = ""
    default_coverage: int = 0
    expired: bool = False
    error_code: Optional[ValidationErrorCode] = None
    message: Optional[str] = None
    source: ResultSource = "local"


class CoverageResult(ViewModel):
    total_amount: float
    coverage_percent: float
    copay_rate: float
    insurance_pays: float
    patient_pays: float
    source: ResultSource = "local"
