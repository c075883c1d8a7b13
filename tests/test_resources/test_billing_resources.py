"""Tests for billing, BHYT claims and financial report resources."""

import pytest

from physioflow.client.errors import ApiError
from physioflow.models.billing import CreateInvoiceLineItem, CreateInvoiceRequest, RecordPaymentRequest
from physioflow.models.claims import GenerateClaimRequest


def invoice_payload(**overrides):
    data = {
        "id": "inv-1",
        "patient_id": "p-1",
        "invoice_number": "HD-2024-0001",
        "total_amount": 500_000,
        "insurance_amount": 400_000,
        "copay_amount": 100_000,
        "balance_due": 100_000,
        "status": "pending",
    }
    data.update(overrides)
    return data


def claim_payload(**overrides):
    data = {
        "id": "c-1",
        "facility_code": "79001",
        "month": 5,
        "year": 2024,
        "status": "generated",
        "total_amount": 12_000_000,
        "line_item_count": 30,
    }
    data.update(overrides)
    return data


class TestBilling:
    @pytest.mark.asyncio
    async def test_service_codes_vietnamese_fallback(self, client, stub_api):
        stub_api.on(
            "GET",
            "/v1/billing/service-codes",
            json={
                "data": [
                    {"id": "s-1", "code": "PT01", "service_name": "Manual therapy", "service_name_vi": "Tri lieu bang tay"},
                    {"id": "s-2", "code": "PT02", "service_name": "Ultrasound"},
                ]
            },
        )

        codes = await client.billing.service_codes()

        assert codes[0].service_name_vi == "Tri lieu bang tay"
        assert codes[1].service_name_vi == "Ultrasound"

    @pytest.mark.asyncio
    async def test_invoices_page(self, client, stub_api):
        stub_api.on(
            "GET",
            "/v1/billing/invoices",
            json={"data": {"data": [invoice_payload()], "total": 1, "page": 1, "per_page": 10, "total_pages": 1}},
        )

        page = await client.billing.invoices(status="pending")

        assert page.data[0].invoice_number == "HD-2024-0001"
        assert page.data[0].to_view()["balanceDue"] == 100_000

    @pytest.mark.asyncio
    async def test_create_invoice(self, client, stub_api):
        stub_api.on("POST", "/v1/billing/invoices", json={"data": invoice_payload()}, status=201)

        await client.billing.create_invoice(
            CreateInvoiceRequest(
                patient_id="p-1",
                line_items=[
                    CreateInvoiceLineItem(service_code_id="s-1", description="Manual therapy", unit_price=250_000, quantity=2)
                ],
            )
        )

        body = stub_api.last.body
        assert body["patient_id"] == "p-1"
        assert body["line_items"][0]["service_code_id"] == "s-1"
        assert body["line_items"][0]["quantity"] == 2

    @pytest.mark.asyncio
    async def test_preview_empty_selection(self, client, stub_api):
        assert await client.billing.preview("p-1", []) is None
        assert stub_api.requests == []

    @pytest.mark.asyncio
    async def test_preview(self, client, stub_api):
        stub_api.on(
            "POST",
            "/v1/billing/preview",
            json={"data": {"subtotal": 500_000, "insurance_amount": 400_000, "copay": 100_000, "total": 100_000}},
        )

        preview = await client.billing.preview("p-1", ["s-1", "s-2"])

        assert preview.copay == 100_000
        assert stub_api.last.body == {"patient_id": "p-1", "service_code_ids": ["s-1", "s-2"]}

    @pytest.mark.asyncio
    async def test_record_payment(self, client, stub_api):
        client.cache.stale_time = 60
        stub_api.on("GET", "/v1/patients/p-1/invoices", json={"data": [invoice_payload()]})
        stub_api.on(
            "POST",
            "/v1/billing/invoices/inv-1/payments",
            json={"data": {"id": "pay-1", "invoice_id": "inv-1", "amount": 100_000, "payment_method": "momo"}},
            status=201,
        )

        await client.billing.patient_invoices("p-1")
        payment = await client.billing.record_payment(
            RecordPaymentRequest(invoice_id="inv-1", amount=100_000, payment_method="momo")
        )

        assert payment.payment_method == "momo"
        assert "invoice_id" not in stub_api.last.body
        assert stub_api.last.body["amount"] == 100_000
        assert client.cache.is_stale(("billing", "invoices", "patient", "p-1"))


class TestClaims:
    @pytest.mark.asyncio
    async def test_list_and_get(self, client, stub_api):
        stub_api.on("GET", "/v1/billing/claims", json={"data": [claim_payload()]})
        stub_api.on("GET", "/v1/billing/claims/c-1", json={"data": claim_payload(line_items=[])})

        page = await client.claims.list(year=2024, month=5)
        claim = await client.claims.get("c-1")

        assert page.data[0].facility_code == "79001"
        assert page.meta.page_size == 20
        assert claim.line_items == []

    @pytest.mark.asyncio
    async def test_generate(self, client, stub_api):
        stub_api.on("POST", "/v1/billing/claims/generate", json={"data": claim_payload()}, status=201)

        claim = await client.claims.generate(GenerateClaimRequest(facility_code="79001", month=5, year=2024))

        assert claim.status == "generated"
        assert stub_api.last.body == {"facility_code": "79001", "month": 5, "year": 2024}

    def test_generate_rejects_bad_month(self):
        with pytest.raises(ValueError):
            GenerateClaimRequest(facility_code="79001", month=13, year=2024)

    @pytest.mark.asyncio
    async def test_download_default_name(self, client, stub_api, tmp_path):
        stub_api.on("GET", "/v1/billing/claims/c-1/download", content=b"<?xml version='1.0'?><claim/>")

        path = await client.claims.download("c-1", tmp_path)

        assert path.name == "claim_c-1.xml"
        assert stub_api.last.headers["accept"] == "application/xml"

    @pytest.mark.asyncio
    async def test_download_failure(self, client, stub_api, tmp_path):
        stub_api.on("GET", "/v1/billing/claims/c-1/download", content=b"", status=500)

        with pytest.raises(ApiError) as exc_info:
            await client.claims.download("c-1", tmp_path)

        assert exc_info.value.message == "Failed to download claim"


class TestReports:
    @pytest.mark.asyncio
    async def test_revenue_camel_case_params(self, client, stub_api):
        stub_api.on(
            "GET",
            "/v1/reports/revenue",
            json={
                "data": {
                    "data": [{"date": "2024-05-01", "period_type": "monthly", "total_revenue": 9_000_000}],
                    "total_revenue": 9_000_000,
                    "total_invoices": 40,
                    "period_type": "monthly",
                }
            },
        )

        report = await client.reports.revenue(start_date="2024-05-01", end_date="2024-05-31", period="monthly")

        assert report.total_invoices == 40
        assert report.data[0].total_revenue == 9_000_000
        assert stub_api.last.params == {"startDate": "2024-05-01", "endDate": "2024-05-31", "period": "monthly"}

    @pytest.mark.asyncio
    async def test_outstanding_null_lists(self, client, stub_api):
        stub_api.on(
            "GET",
            "/v1/reports/outstanding",
            json={"data": {"data": None, "summary": None, "total_outstanding": 0, "total_count": 0}},
        )

        report = await client.reports.outstanding(aging_bucket="90+")

        assert report.data == []
        assert report.summary == []
        assert stub_api.last.params == {"agingBucket": "90+"}

    @pytest.mark.asyncio
    async def test_services_and_productivity(self, client, stub_api):
        stub_api.on(
            "GET",
            "/v1/reports/services/top",
            json={"data": {"data": [{"service_code": "PT01", "rank": 1, "quantity_sold": 12}], "total_services": 1}},
        )
        stub_api.on(
            "GET",
            "/v1/reports/productivity",
            json={"data": {"data": [{"therapist_id": "t-1", "session_count": 20}], "total_sessions": 20}},
        )

        services = await client.reports.services(limit=5)
        assert stub_api.last.params == {"limit": "5"}
        productivity = await client.reports.productivity(therapist_id="t-1")
        assert stub_api.last.params == {"therapistId": "t-1"}

        assert services.data[0].rank == 1
        assert productivity.data[0].session_count == 20

    @pytest.mark.asyncio
    async def test_export_csv(self, client, stub_api, tmp_path):
        stub_api.on("GET", "/v1/reports/revenue/export", content=b"date,total\n2024-05,9000000\n")

        path = await client.reports.export("revenue", start_date="2024-05-01", dest_dir=tmp_path)

        assert path == tmp_path / "revenue_report.csv"
        assert stub_api.last.params == {"startDate": "2024-05-01", "format": "csv"}
        assert stub_api.last.headers["accept"] == "text/csv"

    @pytest.mark.asyncio
    async def test_refresh_invalidates_reports(self, client, stub_api):
        client.cache.stale_time = 600
        stub_api.on("GET", "/v1/reports/outstanding", json={"data": {}})
        stub_api.on("POST", "/v1/reports/refresh", json={"data": None})

        await client.reports.outstanding()
        await client.reports.refresh()
        await client.reports.outstanding()

        assert len(stub_api.calls("GET", "/v1/reports/outstanding")) == 2
