"""Resource clients, one per PhysioFlow API area."""

from physioflow.resources.appointments import AppointmentsResource, TherapistsResource
from physioflow.resources.assessments import MMTResource, ReevaluationResource, ROMResource
from physioflow.resources.base import Resource, params_key
from physioflow.resources.billing import BillingResource
from physioflow.resources.checklists import ChecklistsResource
from physioflow.resources.claims import ClaimsResource
from physioflow.resources.client import PhysioFlowClient
from physioflow.resources.discharge import DischargeResource
from physioflow.resources.exercises import ExercisesResource
from physioflow.resources.insurance import InsuranceResource
from physioflow.resources.outcomes import OutcomeMeasuresResource
from physioflow.resources.patients import PatientsResource
from physioflow.resources.protocols import ProtocolsResource
from physioflow.resources.reports import ReportsResource

__all__ = [
    "AppointmentsResource",
    "BillingResource",
    "ChecklistsResource",
    "ClaimsResource",
    "DischargeResource",
    "ExercisesResource",
    "InsuranceResource",
    "MMTResource",
    "OutcomeMeasuresResource",
    "PatientsResource",
    "PhysioFlowClient",
    "ProtocolsResource",
    "ROMResource",
    "ReevaluationResource",
    "ReportsResource",
    "Resource",
    "TherapistsResource",
    "params_key",
]
