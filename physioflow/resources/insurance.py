"""BHYT insurance cards, validation and coverage."""

from __future__ import annotations

from typing import Optional

from physioflow.insurance.bhyt import validate_card
from physioflow.insurance.coverage import CoverageCalculator, Number, calculate_coverage_local
from physioflow.models.insurance import (
    CoverageResult,
    Insurance,
    InsuranceForm,
    InsuranceValidationResult,
)
from physioflow.resources.base import Resource


class InsuranceResource(Resource):
    root = "insurance"

    def patient_key(self, patient_id: str):
        return self.key("patient", patient_id)

    async def get(self, patient_id: str) -> Insurance:
        async def fetch() -> Insurance:
            response = await self.api.get(f"/v1/patients/{patient_id}/insurance")
            return Insurance.model_validate(response.data)

        return await self.cache.fetch(self.patient_key(patient_id), fetch)

    async def create(self, patient_id: str, form: InsuranceForm) -> Insurance:
        response = await self.api.post(
            f"/v1/patients/{patient_id}/insurance", form.model_dump(exclude_none=True)
        )
        self.cache.invalidate(self.patient_key(patient_id))
        return Insurance.model_validate(response.data)

    async def update(self, patient_id: str, form: InsuranceForm) -> Insurance:
        response = await self.api.put(
            f"/v1/patients/{patient_id}/insurance", form.model_dump(exclude_none=True)
        )
        insurance = Insurance.model_validate(response.data)
        self.cache.set_data(self.patient_key(patient_id), insurance)
        return insurance

    async def validate(self, card_number: str) -> InsuranceValidationResult:
        """Local format/prefix check, supplemented by the API when reachable."""
        return await validate_card(card_number, self.api, observability=self.api.obs)

    def coverage_calculator(
        self,
        patient_id: str,
        insurance: Optional[Insurance] = None,
        debounce_ms: Optional[int] = None,
    ) -> CoverageCalculator:
        """Debounced live calculator for a checkout form."""
        return CoverageCalculator(
            self.api,
            patient_id,
            insurance=insurance,
            debounce_ms=debounce_ms,
            observability=self.api.obs,
        )

    async def coverage(
        self,
        patient_id: str,
        amount: Number,
        insurance: Optional[Insurance] = None,
    ) -> CoverageResult:
        """One-shot coverage lookup for ``amount``; no debounce."""
        if not patient_id or amount <= 0:
            return calculate_coverage_local(amount, insurance)

        calculator = self.coverage_calculator(patient_id, insurance)
        return await self.cache.fetch(
            self.key("coverage", patient_id, amount),
            lambda: calculator.fetch_remote(amount),
        )
