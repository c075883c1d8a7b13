"""Monthly BHYT claim files."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from physioflow.models.base import Page, unwrap_page
from physioflow.models.claims import BHYTClaim, GenerateClaimRequest
from physioflow.resources.base import Resource, params_key

DEFAULT_PAGE_SIZE = 20


class ClaimsResource(Resource):
    root = "bhyt-claims"

    async def list(
        self,
        facility_code: Optional[str] = None,
        status: Optional[str] = None,
        year: Optional[int] = None,
        month: Optional[int] = None,
        page: Optional[int] = None,
        page_size: Optional[int] = None,
        sort_by: Optional[str] = None,
        sort_order: Optional[str] = None,
    ) -> Page[BHYTClaim]:
        params = {
            "facility_code": facility_code,
            "status": status,
            "year": year,
            "month": month,
            "page": page,
            "per_page": page_size,
            "sort_by": sort_by,
            "sort_order": sort_order,
        }

        async def fetch() -> Page[BHYTClaim]:
            response = await self.api.get("/v1/billing/claims", params=params)
            items, meta = unwrap_page(response.data, page, page_size, DEFAULT_PAGE_SIZE)
            return Page[BHYTClaim](data=[BHYTClaim.model_validate(c) for c in items], meta=meta)

        return await self.cache.fetch(self.key("list", params_key(params)), fetch)

    async def get(self, claim_id: str) -> BHYTClaim:
        async def fetch() -> BHYTClaim:
            response = await self.api.get(f"/v1/billing/claims/{claim_id}")
            return BHYTClaim.model_validate(response.data)

        return await self.cache.fetch(self.key("detail", claim_id), fetch)

    async def generate(self, request: GenerateClaimRequest) -> BHYTClaim:
        """Build the claim file for one facility and month."""
        response = await self.api.post("/v1/billing/claims/generate", request.model_dump())
        self.cache.invalidate(self.key("list"))
        return BHYTClaim.model_validate(response.data)

    async def download(self, claim_id: str, dest_dir: Optional[Path] = None) -> Path:
        """Save the claim XML; the server's filename wins over ``claim_<id>.xml``."""
        return await self.api.download(
            f"/v1/billing/claims/{claim_id}/download",
            dest_dir,
            filename=f"claim_{claim_id}.xml",
            accept="application/xml",
            error_message="Failed to download claim",
        )
