"""Clinical protocol library and patient protocol assignments."""

from __future__ import annotations

from typing import Optional

from physioflow.models.base import Page, as_list, unwrap_page
from physioflow.models.protocol import (
    AssignProtocolRequest,
    ClinicalProtocol,
    PatientProtocol,
    UpdateProgressRequest,
    transform_patient_protocol,
    transform_protocol,
)
from physioflow.resources.base import Resource, params_key

DEFAULT_PAGE_SIZE = 20


class ProtocolsResource(Resource):
    root = "protocols"

    def patient_key(self, patient_id: str):
        return self.key("patient", patient_id)

    async def list(
        self,
        page: Optional[int] = None,
        per_page: Optional[int] = None,
        search: Optional[str] = None,
        category: Optional[str] = None,
        body_region: Optional[str] = None,
        is_active: Optional[bool] = None,
    ) -> Page[ClinicalProtocol]:
        params = {
            "page": page,
            "per_page": per_page,
            "search": search,
            "category": category,
            "body_region": body_region,
            "is_active": is_active,
        }

        async def fetch() -> Page[ClinicalProtocol]:
            response = await self.api.get("/v1/protocols", params=params)
            items, meta = unwrap_page(response.data, page, per_page, DEFAULT_PAGE_SIZE)
            return Page[ClinicalProtocol](data=[transform_protocol(p) for p in items], meta=meta)

        return await self.cache.fetch(self.key("list", params_key(params)), fetch)

    async def get(self, protocol_id: str) -> ClinicalProtocol:
        async def fetch() -> ClinicalProtocol:
            response = await self.api.get(f"/v1/protocols/{protocol_id}")
            return transform_protocol(response.data)

        return await self.cache.fetch(self.key("detail", protocol_id), fetch)

    async def patient_protocols(self, patient_id: str) -> list[PatientProtocol]:
        async def fetch() -> list[PatientProtocol]:
            response = await self.api.get(f"/v1/patients/{patient_id}/protocols")
            return [transform_patient_protocol(p) for p in as_list(response.data)]

        return await self.cache.fetch(self.patient_key(patient_id), fetch)

    async def assign(self, patient_id: str, request: AssignProtocolRequest) -> PatientProtocol:
        response = await self.api.post(
            f"/v1/patients/{patient_id}/protocols", request.model_dump(exclude_none=True)
        )
        self.cache.invalidate(self.patient_key(patient_id))
        return transform_patient_protocol(response.data)

    async def update_progress(
        self,
        patient_id: str,
        patient_protocol_id: str,
        request: UpdateProgressRequest,
    ) -> PatientProtocol:
        response = await self.api.patch(
            f"/v1/patients/{patient_id}/protocols/{patient_protocol_id}",
            request.model_dump(exclude_none=True),
        )
        self.cache.invalidate(self.patient_key(patient_id))
        return transform_patient_protocol(response.data)
