"""Billing view models: service codes, invoices, payments and previews."""

from typing import Any, Optional

from pydantic import Field

from physioflow.models.base import ViewModel


class ServiceCode(ViewModel):
    id: str
    code: str
    service_name: str
    service_name_vi: str = ""
    description: Optional[str] = None
    description_vi: Optional[str] = None
    unit_price: float = 0
    currency: str = "VND"
    duration_minutes: Optional[int] = None
    category: Optional[str] = None
    is_bhyt_covered: bool = False
    bhyt_reimbursement_rate: Optional[float] = None
    is_active: bool = True


class InvoiceLineItem(ViewModel):
    id: str
    service_code_id: Optional[str] = None
    description: str = ""
    description_vi: Optional[str] = None
    quantity: int = 1
    unit_price: float = 0
    total_price: float = 0
    is_bhyt_covered: bool = False
    insurance_covered_amount: float = 0
    sort_order: int = 0


class Invoice(ViewModel):
    id: str
    clinic_id: Optional[str] = None
    patient_id: str
    patient_name: Optional[str] = None
    patient_mrn: Optional[str] = None
    treatment_session_id: Optional[str] = None
    invoice_number: str = ""
    invoice_date: Optional[str] = None
    subtotal_amount: float = 0
    discount_amount: float = 0
    tax_amount: float = 0
    total_amount: float = 0
    insurance_amount: float = 0
    copay_amount: float = 0
    balance_due: float = 0
    currency: str = "VND"
    status: str = "draft"
    bhyt_claim_number: Optional[str] = None
    bhyt_claim_status: Optional[str] = None
    notes: Optional[str] = None
    line_items: Optional[list[InvoiceLineItem]] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


class Payment(ViewModel):
    id: str
    invoice_id: str
    clinic_id: Optional[str] = None
    amount: float = 0
    currency: str = "VND"
    payment_method: str = "cash"
    payment_date: Optional[str] = None
    transaction_reference: Optional[str] = None
    receipt_number: Optional[str] = None
    status: str = "completed"
    refund_amount: Optional[float] = None
    refunded_at: Optional[str] = None
    notes: Optional[str] = None
    invoice_number: Optional[str] = None
    patient_name: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


class BillingPreviewLineItem(ViewModel):
    service_code_id: str
    code: str = ""
    service_name: str = ""
    service_name_vi: Optional[str] = None
    unit_price: float = 0
    quantity: int = 1
    total_price: float = 0
    is_bhyt_covered: bool = False
    insurance_covered_amount: float = 0


class BillingPreview(ViewModel):
    subtotal: float = 0
    insurance_amount: float = 0
    copay: float = 0
    total: float = 0
    line_items: list[BillingPreviewLineItem] = Field(default_factory=list)


def transform_service_code(data: dict[str, Any]) -> ServiceCode:
    """Vietnamese service name falls back to the English name."""
    return ServiceCode.model_validate(
        {**data, "service_name_vi": data.get("service_name_vi") or data.get("service_name")}
    )


class CreateInvoiceLineItem(ViewModel):
    service_code_id: str
    description: str
    description_vi: Optional[str] = None
    quantity: int = 1
    unit_price: float


class CreateInvoiceRequest(ViewModel):
    patient_id: str
    treatment_session_id: Optional[str] = None
    invoice_date: Optional[str] = None
    notes: Optional[str] = None
    line_items: list[CreateInvoiceLineItem] = Field(default_factory=list)


class RecordPaymentRequest(ViewModel):
    invoice_id: str
    amount: float
    payment_method: str
    payment_date: Optional[str] = None
    transaction_reference: Optional[str] = None
    notes: Optional[str] = None
