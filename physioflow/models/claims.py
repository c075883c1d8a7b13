"""BHYT claim file view models."""

from typing import Literal, Optional

from pydantic import Field

from physioflow.models.base import ViewModel

BHYTClaimStatus = Literal["draft", "generated", "submitted", "approved", "rejected"]


class BHYTClaimLineItem(ViewModel):
    id: str
    claim_id: str
    invoice_id: Optional[str] = None
    patient_id: str
    patient_name: str = ""
    bhyt_card_number: str = ""
    service_code: str = ""
    service_name_vi: str = ""
    quantity: int = 1
    unit_price: float = 0
    total_price: float = 0
    insurance_paid: float = 0
    patient_paid: float = 0
    service_date: Optional[str] = None


class BHYTClaim(ViewModel):
    id: str
    clinic_id: Optional[str] = None
    facility_code: str
    month: int
    year: int
    file_path: Optional[str] = None
    file_name: Optional[str] = None
    status: BHYTClaimStatus = "draft"
    total_amount: float = 0
    total_insurance_amount: float = 0
    total_patient_amount: float = 0
    line_item_count: int = 0
    rejection_reason: Optional[str] = None
    notes: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None
    submitted_at: Optional[str] = None
    approved_at: Optional[str] = None
    rejected_at: Optional[str] = None
    line_items: Optional[list[BHYTClaimLineItem]] = None


class GenerateClaimRequest(ViewModel):
    facility_code: str
    month: int = Field(ge=1, le=12)
    year: int
