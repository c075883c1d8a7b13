"""View models for PhysioFlow API resources."""

from physioflow.models.appointment import (
    Appointment,
    AvailabilitySlot,
    DaySchedule,
    Therapist,
)
from physioflow.models.assessment import (
    MMTAssessment,
    MMTTrending,
    ReevaluationAssessment,
    ReevaluationItem,
    ReevaluationSummary,
    ROMAssessment,
    ROMTrending,
)
from physioflow.models.base import Page, PageMeta, ViewModel
from physioflow.models.billing import BillingPreview, Invoice, Payment, ServiceCode
from physioflow.models.checklist import (
    ChecklistTemplate,
    GeneratedNote,
    VisitChecklist,
)
from physioflow.models.claims import BHYTClaim, BHYTClaimLineItem
from physioflow.models.discharge import DischargePlan, DischargeSummary, OutcomeComparison
from physioflow.models.exercise import (
    Exercise,
    ExerciseComplianceLog,
    ExercisePrescription,
    PatientComplianceSummary,
)
from physioflow.models.insurance import (
    CoverageResult,
    Insurance,
    InsuranceForm,
    InsuranceValidationResult,
)
from physioflow.models.outcome import (
    MeasureDefinition,
    OutcomeMeasurement,
    ProgressSummary,
    TrendingRow,
)
from physioflow.models.patient import Patient, PatientDashboard
from physioflow.models.protocol import ClinicalProtocol, PatientProtocol
from physioflow.models.reports import (
    AgingReport,
    ProductivityReport,
    RevenueReport,
    ServiceReport,
)

__all__ = [
    "AgingReport",
    "Appointment",
    "AvailabilitySlot",
    "BHYTClaim",
    "BHYTClaimLineItem",
    "BillingPreview",
    "ChecklistTemplate",
    "ClinicalProtocol",
    "CoverageResult",
    "DaySchedule",
    "DischargePlan",
    "DischargeSummary",
    "Exercise",
    "ExerciseComplianceLog",
    "ExercisePrescription",
    "GeneratedNote",
    "Insurance",
    "InsuranceForm",
    "InsuranceValidationResult",
    "Invoice",
    "MeasureDefinition",
    "MMTAssessment",
    "MMTTrending",
    "OutcomeComparison",
    "OutcomeMeasurement",
    "Page",
    "PageMeta",
    "Patient",
    "PatientComplianceSummary",
    "PatientDashboard",
    "PatientProtocol",
    "Payment",
    "ProductivityReport",
    "ProgressSummary",
    "ReevaluationAssessment",
    "ReevaluationItem",
    "ReevaluationSummary",
    "RevenueReport",
    "ROMAssessment",
    "ROMTrending",
    "ServiceCode",
    "ServiceReport",
    "Therapist",
    "TrendingRow",
    "ViewModel",
    "VisitChecklist",
]
