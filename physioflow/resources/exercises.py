"""Exercise library, home-exercise prescriptions and compliance."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Literal, Optional

from physioflow.models.base import Page, unwrap_page
from physioflow.models.exercise import (
    Exercise,
    ExerciseComplianceLog,
    ExercisePrescription,
    PatientComplianceSummary,
)
from physioflow.resources.base import Resource, params_key

DEFAULT_PAGE_SIZE = 20
SEARCH_STALE_SECONDS = 60.0


class ExercisesResource(Resource):
    root = "exercises"

    def list_key(self, params: dict[str, Any]):
        return self.key("list", params_key(params))

    def detail_key(self, exercise_id: str):
        return self.key("detail", exercise_id)

    def prescriptions_key(self, patient_id: str):
        return self.key("patient", patient_id, "prescriptions")

    def compliance_key(self, patient_id: str):
        return self.key("patient", patient_id, "compliance")

    def logs_key(self, prescription_id: str):
        return self.key("prescription", prescription_id, "logs")

    # ── Library ───────────────────────────────────────────────────────────

    async def list(
        self,
        page: Optional[int] = None,
        per_page: Optional[int] = None,
        search: Optional[str] = None,
        category: Optional[str] = None,
        difficulty: Optional[str] = None,
        muscle_groups: Optional[list[str]] = None,
        sort_by: Optional[str] = None,
        sort_order: Optional[str] = None,
    ) -> Page[Exercise]:
        params = {
            "page": page,
            "per_page": per_page,
            "search": search,
            "category": category,
            "difficulty": difficulty,
            "muscle_groups": ",".join(muscle_groups) if muscle_groups else None,
            "sort_by": sort_by,
            "sort_order": sort_order,
        }

        async def fetch() -> Page[Exercise]:
            response = await self.api.get("/v1/exercises", params=params)
            items, meta = unwrap_page(response.data, page, per_page, DEFAULT_PAGE_SIZE)
            return Page[Exercise](
                data=[Exercise.model_validate(e) for e in items],
                meta=response.meta or meta,
            )

        return await self.cache.fetch(self.list_key(params), fetch)

    async def get(self, exercise_id: str) -> Exercise:
        async def fetch() -> Exercise:
            response = await self.api.get(f"/v1/exercises/{exercise_id}")
            return Exercise.model_validate(response.data)

        return await self.cache.fetch(self.detail_key(exercise_id), fetch)

    async def search(self, query: str, limit: int = 10) -> list[Exercise]:
        if len(query) < 2:
            return []

        async def fetch() -> list[Exercise]:
            response = await self.api.get("/v1/exercises/search", params={"q": query, "limit": limit})
            return [Exercise.model_validate(e) for e in response.data or []]

        return await self.cache.fetch(self.key("search", query), fetch, stale_time=SEARCH_STALE_SECONDS)

    async def create(self, data: dict[str, Any]) -> Exercise:
        response = await self.api.post("/v1/exercises", data)
        self.cache.invalidate(self.key("list"))
        return Exercise.model_validate(response.data)

    async def update(self, exercise_id: str, data: dict[str, Any]) -> Exercise:
        response = await self.api.put(f"/v1/exercises/{exercise_id}", data)
        exercise = Exercise.model_validate(response.data)
        self.cache.set_data(self.detail_key(exercise_id), exercise)
        self.cache.invalidate(self.key("list"))
        return exercise

    async def delete(self, exercise_id: str) -> None:
        await self.api.delete(f"/v1/exercises/{exercise_id}")
        self.cache.remove(self.detail_key(exercise_id))
        self.cache.invalidate(self.key("list"))

    # ── Prescriptions ─────────────────────────────────────────────────────

    async def prescriptions(self, patient_id: str, active_only: bool = False) -> list[ExercisePrescription]:
        async def fetch() -> list[ExercisePrescription]:
            response = await self.api.get(
                f"/v1/patients/{patient_id}/exercises",
                params={"active_only": active_only},
            )
            return [ExercisePrescription.model_validate(p) for p in response.data or []]

        return await self.cache.fetch(self.prescriptions_key(patient_id), fetch)

    async def prescribe(self, patient_id: str, data: dict[str, Any]) -> ExercisePrescription:
        response = await self.api.post(f"/v1/patients/{patient_id}/exercises", data)
        self.cache.invalidate(self.prescriptions_key(patient_id))
        return ExercisePrescription.model_validate(response.data)

    async def update_prescription(
        self,
        patient_id: str,
        prescription_id: str,
        data: dict[str, Any],
    ) -> ExercisePrescription:
        response = await self.api.put(f"/v1/patients/{patient_id}/exercises/{prescription_id}", data)
        self.cache.invalidate(self.prescriptions_key(patient_id))
        return ExercisePrescription.model_validate(response.data)

    async def delete_prescription(self, patient_id: str, prescription_id: str) -> None:
        await self.api.delete(f"/v1/patients/{patient_id}/exercises/{prescription_id}")
        self.cache.invalidate(self.prescriptions_key(patient_id))

    # ── Compliance ────────────────────────────────────────────────────────

    async def compliance(self, patient_id: str) -> PatientComplianceSummary:
        async def fetch() -> PatientComplianceSummary:
            response = await self.api.get(f"/v1/patients/{patient_id}/exercises/compliance")
            return PatientComplianceSummary.model_validate(response.data or {})

        return await self.cache.fetch(self.compliance_key(patient_id), fetch)

    async def log_compliance(
        self,
        patient_id: str,
        prescription_id: str,
        data: dict[str, Any],
    ) -> ExerciseComplianceLog:
        response = await self.api.post(
            f"/v1/patients/{patient_id}/exercises/{prescription_id}/log", data
        )
        self.cache.invalidate(self.compliance_key(patient_id))
        self.cache.invalidate(self.logs_key(prescription_id))
        return ExerciseComplianceLog.model_validate(response.data)

    async def logs(self, prescription_id: str, limit: int = 30) -> list[ExerciseComplianceLog]:
        async def fetch() -> list[ExerciseComplianceLog]:
            response = await self.api.get(
                f"/v1/prescriptions/{prescription_id}/logs", params={"limit": limit}
            )
            return [ExerciseComplianceLog.model_validate(log) for log in response.data or []]

        return await self.cache.fetch(self.logs_key(prescription_id), fetch)

    async def download_handout(
        self,
        patient_id: str,
        language: Literal["en", "vi"] = "vi",
        dest_dir: Optional[Path] = None,
    ) -> Path:
        """Printable home-exercise handout in the requested language."""
        return await self.api.download(
            f"/v1/patients/{patient_id}/exercises/handout",
            dest_dir,
            filename=f"exercise_handout_{patient_id}_{language}.txt",
            params={"lang": language},
            accept="text/plain",
            error_message="Failed to generate handout",
        )
