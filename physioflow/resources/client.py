"""Single entry point bundling every resource over one HTTP client and cache."""

import logging
from typing import Optional

import httpx

from physioflow.client.cache import QueryCache
from physioflow.client.http import ApiClient
from physioflow.observability import ObservabilityLogger
from physioflow.resources.appointments import AppointmentsResource, TherapistsResource
from physioflow.resources.assessments import MMTResource, ReevaluationResource, ROMResource
from physioflow.resources.billing import BillingResource
from physioflow.resources.checklists import ChecklistsResource
from physioflow.resources.claims import ClaimsResource
from physioflow.resources.discharge import DischargeResource
from physioflow.resources.exercises import ExercisesResource
from physioflow.resources.insurance import InsuranceResource
from physioflow.resources.outcomes import OutcomeMeasuresResource
from physioflow.resources.patients import PatientsResource
from physioflow.resources.protocols import ProtocolsResource
from physioflow.resources.reports import ReportsResource

logger = logging.getLogger(__name__)


class PhysioFlowClient:
    """PhysioFlow API client.

    Usage:
        async with PhysioFlowClient() as client:
            patients = await client.patients.list(search="Nguyen")
            result = await client.insurance.validate("DN4-0101-12345-67890")
    """

    def __init__(
        self,
        api: Optional[ApiClient] = None,
        cache: Optional[QueryCache] = None,
        *,
        base_url: Optional[str] = None,
        token: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        observability: Optional[ObservabilityLogger] = None,
    ):
        self.api = api or ApiClient(
            base_url=base_url,
            token=token,
            transport=transport,
            observability=observability,
        )
        self.cache = cache or QueryCache()

        self.patients = PatientsResource(self.api, self.cache)
        self.appointments = AppointmentsResource(self.api, self.cache)
        self.therapists = TherapistsResource(self.api, self.cache)
        self.exercises = ExercisesResource(self.api, self.cache)
        self.billing = BillingResource(self.api, self.cache)
        self.insurance = InsuranceResource(self.api, self.cache)
        self.claims = ClaimsResource(self.api, self.cache)
        self.protocols = ProtocolsResource(self.api, self.cache)
        self.discharge = DischargeResource(self.api, self.cache)
        self.outcomes = OutcomeMeasuresResource(self.api, self.cache)
        self.rom = ROMResource(self.api, self.cache)
        self.mmt = MMTResource(self.api, self.cache)
        self.reevaluations = ReevaluationResource(self.api, self.cache)
        self.checklists = ChecklistsResource(self.api, self.cache)
        self.reports = ReportsResource(self.api, self.cache)

        logger.debug("PhysioFlow client ready for %s", self.api.base_url)

    async def __aenter__(self) -> "PhysioFlowClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self.api.aclose()

    def clear_cache(self) -> None:
        """Drop every cached query, e.g. after switching user."""
        self.cache.clear()
