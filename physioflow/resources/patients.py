"""Patient records."""

from __future__ import annotations

from typing import Any, Literal, Optional

from physioflow.models.base import Page, unwrap_page
from physioflow.models.patient import (
    SORT_BY_MAP,
    Patient,
    PatientDashboard,
    status_to_is_active,
    transform_patient,
    transform_patient_dashboard,
)
from physioflow.resources.base import Resource, params_key

SEARCH_MIN_LENGTH = 2
SEARCH_STALE_SECONDS = 60.0


class PatientsResource(Resource):
    root = "patients"

    # Keys

    def list_key(self, params: dict[str, Any]):
        return self.key("list", params_key(params))

    def detail_key(self, patient_id: str, *sub):
        return self.key("detail", patient_id, *sub)

    def search_key(self, query: str):
        return self.key("search", query)

    # Queries

    async def list(
        self,
        page: Optional[int] = None,
        page_size: Optional[int] = None,
        search: Optional[str] = None,
        status: Optional[Literal["active", "inactive", "discharged"]] = None,
        sort_by: Optional[str] = None,
        sort_order: Optional[Literal["asc", "desc"]] = None,
    ) -> Page[Patient]:
        params = {
            "page": page,
            "per_page": page_size,
            "search": search,
            "is_active": status_to_is_active(status),
            "sort_by": SORT_BY_MAP.get(sort_by, sort_by) if sort_by else None,
            "sort_order": sort_order,
        }

        async def fetch() -> Page[Patient]:
            response = await self.api.get("/v1/patients", params=params)
            items, meta = unwrap_page(response.data, page, page_size)
            if response.meta is not None and isinstance(response.data, list):
                meta = response.meta
            return Page[Patient](data=[transform_patient(p) for p in items], meta=meta)

        return await self.cache.fetch(self.list_key(params), fetch)

    async def get(self, patient_id: str) -> Patient:
        async def fetch() -> Patient:
            response = await self.api.get(f"/v1/patients/{patient_id}")
            return transform_patient(response.data)

        return await self.cache.fetch(self.detail_key(patient_id), fetch)

    async def dashboard(self, patient_id: str) -> PatientDashboard:
        async def fetch() -> PatientDashboard:
            response = await self.api.get(f"/v1/patients/{patient_id}/dashboard")
            return transform_patient_dashboard(response.data)

        return await self.cache.fetch(self.detail_key(patient_id, "dashboard"), fetch)

    async def stats(self, patient_id: str) -> dict[str, Any]:
        async def fetch():
            response = await self.api.get(f"/v1/patients/{patient_id}/stats")
            return response.data

        return await self.cache.fetch(self.detail_key(patient_id, "stats"), fetch)

    async def sessions(
        self,
        patient_id: str,
        page: Optional[int] = None,
        page_size: Optional[int] = None,
    ) -> Page[dict]:
        # This endpoint takes page_size rather than per_page.
        params = {"page": page, "page_size": page_size}

        async def fetch() -> Page[dict]:
            response = await self.api.get(f"/v1/patients/{patient_id}/sessions", params=params)
            items, meta = unwrap_page(response.data, page, page_size)
            return Page[dict](data=items, meta=response.meta or meta)

        return await self.cache.fetch(self.detail_key(patient_id, "sessions", params_key(params)), fetch)

    async def timeline(self, patient_id: str) -> list[dict[str, Any]]:
        async def fetch():
            response = await self.api.get(f"/v1/patients/{patient_id}/timeline")
            return response.data or []

        return await self.cache.fetch(self.detail_key(patient_id, "timeline"), fetch)

    async def search(self, query: str, limit: int = 10) -> list[Patient]:
        """Autocomplete search. Queries shorter than two characters return nothing."""
        if len(query) < SEARCH_MIN_LENGTH:
            return []

        async def fetch() -> list[Patient]:
            response = await self.api.get("/v1/patients/search", params={"q": query, "limit": limit})
            return [transform_patient(p) for p in response.data or []]

        return await self.cache.fetch(self.search_key(query), fetch, stale_time=SEARCH_STALE_SECONDS)

    # Mutations

    async def create(self, data: dict[str, Any]) -> Patient:
        response = await self.api.post("/v1/patients", data)
        self.cache.invalidate(self.key("list"))
        return transform_patient(response.data)

    async def update(self, patient_id: str, data: dict[str, Any]) -> Patient:
        response = await self.api.patch(f"/v1/patients/{patient_id}", data)
        patient = transform_patient(response.data)
        self.cache.set_data(self.detail_key(patient_id), patient)
        self.cache.invalidate(self.key("list"))
        return patient

    async def delete(self, patient_id: str) -> None:
        await self.api.delete(f"/v1/patients/{patient_id}")
        self.cache.remove(self.detail_key(patient_id))
        self.cache.invalidate(self.key("list"))
