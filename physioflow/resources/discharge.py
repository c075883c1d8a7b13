"""Discharge planning and discharge summaries."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from physioflow.models.discharge import (
    CreateDischargePlanRequest,
    DischargePlan,
    DischargeSummary,
)
from physioflow.resources.base import Resource


class DischargeResource(Resource):
    root = "discharge"

    def plan_key(self, patient_id: str):
        return self.key("plan", patient_id)

    def summary_key(self, summary_id: str):
        return self.key("summary", summary_id)

    def patient_summary_key(self, patient_id: str):
        return self.key("patientSummary", patient_id)

    async def plan(self, patient_id: str) -> DischargePlan:
        async def fetch() -> DischargePlan:
            response = await self.api.get(f"/v1/patients/{patient_id}/discharge-plan")
            return DischargePlan.model_validate(response.data)

        return await self.cache.fetch(self.plan_key(patient_id), fetch)

    async def create_plan(self, request: CreateDischargePlanRequest) -> DischargePlan:
        response = await self.api.post(
            f"/v1/patients/{request.patient_id}/discharge-plan",
            request.model_dump(exclude={"patient_id"}, exclude_none=True),
        )
        plan = DischargePlan.model_validate(response.data)
        self.cache.invalidate(self.key("plan"))
        self.cache.set_data(self.plan_key(plan.patient_id), plan)
        return plan

    async def complete(self, patient_id: str) -> DischargePlan:
        """Finalize discharge; the patient's status changes, so patient queries go stale."""
        response = await self.api.post(f"/v1/patients/{patient_id}/discharge-plan/complete")
        plan = DischargePlan.model_validate(response.data)
        self.cache.set_data(self.plan_key(plan.patient_id), plan)
        self.cache.invalidate(("patients",))
        return plan

    async def generate_summary(self, patient_id: str) -> DischargeSummary:
        response = await self.api.post(f"/v1/patients/{patient_id}/discharge-summary")
        summary = DischargeSummary.model_validate(response.data)
        self.cache.set_data(self.patient_summary_key(summary.patient_id), summary)
        self.cache.set_data(self.summary_key(summary.id), summary)
        return summary

    async def summary(self, summary_id: str) -> DischargeSummary:
        async def fetch() -> DischargeSummary:
            response = await self.api.get(f"/v1/discharge-summaries/{summary_id}")
            return DischargeSummary.model_validate(response.data)

        return await self.cache.fetch(self.summary_key(summary_id), fetch)

    async def patient_summary(self, patient_id: str) -> DischargeSummary:
        async def fetch() -> DischargeSummary:
            response = await self.api.get(f"/v1/patients/{patient_id}/discharge-summary")
            return DischargeSummary.model_validate(response.data)

        return await self.cache.fetch(self.patient_summary_key(patient_id), fetch)

    async def download_summary_pdf(self, summary_id: str, dest_dir: Optional[Path] = None) -> Path:
        return await self.api.download(
            f"/v1/reports/discharge/{summary_id}/pdf",
            dest_dir,
            filename=f"discharge_summary_{summary_id}.pdf",
            accept="application/pdf",
            error_message="Failed to download discharge summary",
        )
