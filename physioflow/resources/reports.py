"""Financial reports: revenue, outstanding payments, top services, productivity."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from physioflow.models.reports import (
    AgingBucket,
    AgingReport,
    FinancialReportType,
    ProductivityReport,
    ReportPeriod,
    RevenueReport,
    ServiceReport,
)
from physioflow.resources.base import Resource, params_key

REPORT_STALE_SECONDS = 300.0


class ReportsResource(Resource):
    """Report endpoints take camelCase query parameters."""

    root = "reports"

    async def revenue(
        self,
        start_date: Optional[str] = None,
        end_date: Optional[str] = None,
        period: Optional[ReportPeriod] = None,
    ) -> RevenueReport:
        params = {"startDate": start_date, "endDate": end_date, "period": period}

        async def fetch() -> RevenueReport:
            response = await self.api.get("/v1/reports/revenue", params=params)
            return RevenueReport.model_validate(response.data or {})

        return await self.cache.fetch(
            self.key("revenue", params_key(params)), fetch, stale_time=REPORT_STALE_SECONDS
        )

    async def outstanding(self, aging_bucket: Optional[AgingBucket] = None) -> AgingReport:
        params = {"agingBucket": aging_bucket}

        async def fetch() -> AgingReport:
            response = await self.api.get("/v1/reports/outstanding", params=params)
            return AgingReport.model_validate(response.data or {})

        return await self.cache.fetch(
            self.key("outstanding", params_key(params)), fetch, stale_time=REPORT_STALE_SECONDS
        )

    async def services(
        self,
        limit: Optional[int] = None,
        start_date: Optional[str] = None,
        end_date: Optional[str] = None,
    ) -> ServiceReport:
        params = {"limit": limit, "startDate": start_date, "endDate": end_date}

        async def fetch() -> ServiceReport:
            response = await self.api.get("/v1/reports/services/top", params=params)
            return ServiceReport.model_validate(response.data or {})

        return await self.cache.fetch(
            self.key("services", params_key(params)), fetch, stale_time=REPORT_STALE_SECONDS
        )

    async def productivity(
        self,
        therapist_id: Optional[str] = None,
        start_date: Optional[str] = None,
        end_date: Optional[str] = None,
    ) -> ProductivityReport:
        params = {"therapistId": therapist_id, "startDate": start_date, "endDate": end_date}

        async def fetch() -> ProductivityReport:
            response = await self.api.get("/v1/reports/productivity", params=params)
            return ProductivityReport.model_validate(response.data or {})

        return await self.cache.fetch(
            self.key("productivity", params_key(params)), fetch, stale_time=REPORT_STALE_SECONDS
        )

    async def export(
        self,
        report_type: FinancialReportType,
        start_date: Optional[str] = None,
        end_date: Optional[str] = None,
        period: Optional[ReportPeriod] = None,
        limit: Optional[int] = None,
        therapist_id: Optional[str] = None,
        dest_dir: Optional[Path] = None,
    ) -> Path:
        """Save the report as CSV and return the written path."""
        return await self.api.download(
            f"/v1/reports/{report_type}/export",
            dest_dir,
            filename=f"{report_type}_report.csv",
            params={
                "startDate": start_date,
                "endDate": end_date,
                "period": period,
                "limit": limit,
                "therapistId": therapist_id,
                "format": "csv",
            },
            accept="text/csv",
            error_message="Failed to export report",
        )

    async def refresh(self) -> None:
        """Ask the server to rebuild its report views, then drop every cached report."""
        await self.api.post("/v1/reports/refresh")
        self.invalidate_all()
