"""Insurance coverage and copay calculation.

The insurer share is rounded half-up to whole currency units (VND has no minor
unit); the patient pays the remainder, so both shares always sum to the total.
"""
from __future__ import annotations

import logging
from decimal import ROUND_HALF_UP, Decimal
from typing import TYPE_CHECKING, Optional, Union

from physioflow.client.debounce import Debouncer
from physioflow.client.errors import ApiError
from physioflow.config import get_settings
from physioflow.insurance.bhyt import prefix_coverage
from physioflow.models.insurance import CoverageResult, Insurance
from physioflow.observability import ObservabilityLogger, get_observability_logger

if TYPE_CHECKING:
    from physioflow.client.http import ApiClient

logger = logging.getLogger(__name__)

Number = Union[int, float, Decimal]


def round_half_up(value: Number) -> int:
    return int(Decimal(str(value)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def no_coverage(amount: Number) -> CoverageResult:
    return CoverageResult(
        total_amount=amount,
        coverage_percent=0,
        copay_rate=100,
        insurance_pays=0,
        patient_pays=amount,
    )


def calculate_coverage_local(
    amount: Number,
    insurance: Optional[Insurance],
) -> CoverageResult:
    """Split ``amount`` between insurer and patient using the card prefix.

    No card, an inactive card or a non-positive amount means the patient pays
    everything. A prefix missing from the BHYT table is covered at 80%.
    """
    if insurance is None or not insurance.is_active or amount <= 0:
        return no_coverage(amount)

    coverage_percent = prefix_coverage(insurance.prefix_code)
    insurance_pays = round_half_up(Decimal(str(amount)) * coverage_percent / 100)

    return CoverageResult(
        total_amount=amount,
        coverage_percent=coverage_percent,
        copay_rate=100 - coverage_percent,
        insurance_pays=insurance_pays,
        patient_pays=amount - insurance_pays,
    )


class CoverageCalculator:
    """Live coverage preview for one patient.

    ``set_amount`` updates the local estimate immediately and schedules a
    remote lookup after the debounce delay. ``result`` returns the remote
    answer when it matches the current amount, otherwise the local estimate.
    """

    def __init__(
        self,
        api: "ApiClient",
        patient_id: str,
        insurance: Optional[Insurance] = None,
        debounce_ms: Optional[int] = None,
        observability: Optional[ObservabilityLogger] = None,
    ):
        if debounce_ms is None:
            debounce_ms = get_settings().coverage_debounce_ms
        self.api = api
        self.patient_id = patient_id
        self.insurance = insurance
        self.amount: Number = 0
        self.obs = observability or get_observability_logger()
        self._debouncer = Debouncer(debounce_ms / 1000)
        self._remote: dict[Number, CoverageResult] = {}

    @property
    def local_result(self) -> CoverageResult:
        return calculate_coverage_local(self.amount, self.insurance)

    @property
    def result(self) -> CoverageResult:
        return self._remote.get(self.amount) or self.local_result

    def set_amount(self, amount: Number) -> CoverageResult:
        self.amount = amount
        if self.patient_id and amount > 0 and amount not in self._remote:
            self._debouncer.trigger(self.fetch_remote, amount)
        else:
            self._debouncer.cancel()
        return self.result

    async def wait(self) -> CoverageResult:
        """Wait for the pending remote lookup, then return ``result``."""
        await self._debouncer.wait()
        return self.result

    async def fetch_remote(self, amount: Number) -> CoverageResult:
        """Query the coverage endpoint, falling back to the local formula."""
        try:
            response = await self.api.get(
                f"/v1/patients/{self.patient_id}/insurance/coverage",
                params={"amount": amount},
            )
        except ApiError as e:
            logger.warning(
                "Coverage API unavailable for patient %s, using local calculation: %s",
                self.patient_id,
                e.message,
            )
            self.obs.log_fallback(
                "insurance.coverage",
                e.message,
                status_code=e.status,
                metadata={"patient_id": self.patient_id, "amount": float(amount)},
            )
            return calculate_coverage_local(amount, self.insurance)

        data = response.data or {}
        result = CoverageResult(
            total_amount=data.get("total_amount", amount),
            coverage_percent=data.get("coverage_percent", 0),
            copay_rate=data.get("copay_rate", 100),
            insurance_pays=data.get("insurance_pays", 0),
            patient_pays=data.get("patient_pays", amount),
            source="remote",
        )
        self._remote[amount] = result
        return result
