"""Financial report view models."""

from typing import Literal

from pydantic import Field, field_validator

from physioflow.models.base import ViewModel, as_list

ReportPeriod = Literal["daily", "weekly", "monthly", "yearly"]
AgingBucket = Literal["0-30", "31-60", "61-90", "90+"]
FinancialReportType = Literal["revenue", "outstanding", "services", "productivity"]


class _ReportModel(ViewModel):
    @field_validator("data", "summary", mode="before", check_fields=False)
    @classmethod
    def _none_as_empty(cls, value):
        return as_list(value)


class RevenueByPeriod(ViewModel):
    date: str
    period_type: ReportPeriod = "monthly"
    total_revenue: float = 0
    insurance_revenue: float = 0
    cash_revenue: float = 0
    invoice_count: int = 0


class RevenueReport(_ReportModel):
    data: list[RevenueByPeriod] = Field(default_factory=list)
    total_revenue: float = 0
    total_invoices: int = 0
    start_date: str = ""
    end_date: str = ""
    period_type: ReportPeriod = "monthly"


class OutstandingPayment(ViewModel):
    invoice_id: str
    patient_id: str
    patient_name: str = ""
    amount_due: float = 0
    days_outstanding: int = 0
    aging_bucket: AgingBucket = "0-30"
    invoice_number: str = ""
    invoice_date: str = ""
    total_amount: float = 0
    status: str = ""


class AgingBucketSummary(ViewModel):
    bucket: AgingBucket
    count: int = 0
    total_amount: float = 0


class AgingReport(_ReportModel):
    data: list[OutstandingPayment] = Field(default_factory=list)
    summary: list[AgingBucketSummary] = Field(default_factory=list)
    total_outstanding: float = 0
    total_count: int = 0


class ServiceRevenue(ViewModel):
    service_code: str
    service_name: str = ""
    service_name_vi: str = ""
    quantity_sold: int = 0
    total_revenue: float = 0
    rank: int = 0


class ServiceReport(_ReportModel):
    data: list[ServiceRevenue] = Field(default_factory=list)
    total_revenue: float = 0
    total_services: int = 0


class TherapistProductivity(ViewModel):
    therapist_id: str
    therapist_name: str = ""
    session_count: int = 0
    total_revenue: float = 0
    avg_revenue_per_session: float = 0
    period: str = ""


class ProductivityReport(_ReportModel):
    data: list[TherapistProductivity] = Field(default_factory=list)
    total_sessions: int = 0
    total_revenue: float = 0
    avg_revenue_per_session: float = 0
