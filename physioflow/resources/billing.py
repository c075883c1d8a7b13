"""Service codes, invoices, billing previews and payments."""

from __future__ import annotations

from typing import Any, Optional

from physioflow.models.base import Page, as_list, unwrap_page
from physioflow.models.billing import (
    BillingPreview,
    CreateInvoiceRequest,
    Invoice,
    Payment,
    RecordPaymentRequest,
    ServiceCode,
    transform_service_code,
)
from physioflow.resources.base import Resource, params_key

SERVICE_CODES_STALE_SECONDS = 600.0
PREVIEW_STALE_SECONDS = 30.0


class BillingResource(Resource):
    root = "billing"

    def invoices_key(self, *parts):
        return self.key("invoices", *parts)

    def payments_key(self, *parts):
        return self.key("payments", *parts)

    # ── Service codes ─────────────────────────────────────────────────────

    async def service_codes(self) -> list[ServiceCode]:
        async def fetch() -> list[ServiceCode]:
            response = await self.api.get("/v1/billing/service-codes")
            return [transform_service_code(c) for c in as_list(response.data)]

        return await self.cache.fetch(
            self.key("service-codes"), fetch, stale_time=SERVICE_CODES_STALE_SECONDS
        )

    # ── Invoices ──────────────────────────────────────────────────────────

    async def invoices(
        self,
        page: Optional[int] = None,
        page_size: Optional[int] = None,
        patient_id: Optional[str] = None,
        status: Optional[str] = None,
        start_date: Optional[str] = None,
        end_date: Optional[str] = None,
        search: Optional[str] = None,
        sort_by: Optional[str] = None,
        sort_order: Optional[str] = None,
    ) -> Page[Invoice]:
        params = {
            "page": page,
            "per_page": page_size,
            "patient_id": patient_id,
            "status": status,
            "start_date": start_date,
            "end_date": end_date,
            "search": search,
            "sort_by": sort_by,
            "sort_order": sort_order,
        }

        async def fetch() -> Page[Invoice]:
            response = await self.api.get("/v1/billing/invoices", params=params)
            items, meta = unwrap_page(response.data, page, page_size)
            return Page[Invoice](data=[Invoice.model_validate(i) for i in items], meta=meta)

        return await self.cache.fetch(self.invoices_key("list", params_key(params)), fetch)

    async def patient_invoices(self, patient_id: str) -> list[Invoice]:
        async def fetch() -> list[Invoice]:
            response = await self.api.get(f"/v1/patients/{patient_id}/invoices")
            return [Invoice.model_validate(i) for i in as_list(response.data)]

        return await self.cache.fetch(self.invoices_key("patient", patient_id), fetch)

    async def invoice(self, invoice_id: str) -> Invoice:
        async def fetch() -> Invoice:
            response = await self.api.get(f"/v1/billing/invoices/{invoice_id}")
            return Invoice.model_validate(response.data)

        return await self.cache.fetch(self.invoices_key("detail", invoice_id), fetch)

    async def create_invoice(self, request: CreateInvoiceRequest) -> Invoice:
        response = await self.api.post("/v1/billing/invoices", request.model_dump())
        invoice = Invoice.model_validate(response.data)
        self.cache.invalidate(self.invoices_key())
        return invoice

    async def preview(self, patient_id: str, service_code_ids: list[str]) -> Optional[BillingPreview]:
        """Totals, insurer share and copay for a prospective set of services.

        Returns None without calling the API when nothing is selected.
        """
        if not patient_id or not service_code_ids:
            return None

        async def fetch() -> BillingPreview:
            response = await self.api.post(
                "/v1/billing/preview",
                {"patient_id": patient_id, "service_code_ids": service_code_ids},
            )
            return BillingPreview.model_validate(response.data or {})

        return await self.cache.fetch(
            self.key("preview", patient_id, tuple(service_code_ids)),
            fetch,
            stale_time=PREVIEW_STALE_SECONDS,
        )

    # ── Payments ──────────────────────────────────────────────────────────

    async def payment_history(
        self,
        patient_id: str,
        page: Optional[int] = None,
        page_size: Optional[int] = None,
        start_date: Optional[str] = None,
        end_date: Optional[str] = None,
    ) -> list[Payment]:
        async def fetch() -> list[Payment]:
            response = await self.api.get(
                f"/v1/patients/{patient_id}/payments",
                params={
                    "page": page,
                    "per_page": page_size,
                    "start_date": start_date,
                    "end_date": end_date,
                },
            )
            return [Payment.model_validate(p) for p in as_list(response.data)]

        return await self.cache.fetch(self.payments_key("patient", patient_id), fetch)

    async def record_payment(self, request: RecordPaymentRequest) -> Payment:
        body: dict[str, Any] = request.model_dump(exclude={"invoice_id"})
        response = await self.api.post(f"/v1/billing/invoices/{request.invoice_id}/payments", body)
        self.cache.invalidate(self.invoices_key())
        self.cache.invalidate(self.payments_key())
        return Payment.model_validate(response.data)
