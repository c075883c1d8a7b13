"""Tests for CLI commands."""

import asyncio
import json
from unittest.mock import patch

import httpx
import pytest
from typer.testing import CliRunner

from physioflow.cli.commands import app
from physioflow.offline import OfflineQueue, create_engine, create_session_factory, init_db
from physioflow.resources import PhysioFlowClient


runner = CliRunner()


@pytest.fixture
def stub_client_factory(stub_api):
    """Build a fresh client per CLI invocation, served by the stub API."""

    def factory():
        return PhysioFlowClient(
            base_url="http://testserver/api",
            token="cli-token",
            transport=httpx.ASGITransport(app=stub_api.app),
        )

    return factory


def enqueue(url, *items):
    async def run():
        engine = create_engine(url)
        try:
            await init_db(engine)
            queue = OfflineQueue(create_session_factory(engine))
            for entity_type, entity_id, action, payload in items:
                await queue.enqueue(entity_type, entity_id, action, payload)
        finally:
            await engine.dispose()

    asyncio.run(run())


class TestVersionCommand:
    def test_version(self):
        result = runner.invoke(app, ["version"])

        assert result.exit_code == 0
        assert "PhysioFlow v0.1.0" in result.stdout


class TestValidateCardCommand:
    def test_valid_card_offline(self):
        result = runner.invoke(app, ["validate-card", "dn4-0101-12345-67890", "--offline"])

        assert result.exit_code == 0
        assert "DN4-0101-12345-67890" in result.stdout
        assert "Doanh nghiep" in result.stdout
        assert "80%" in result.stdout
        assert "Source: local" in result.stdout

    def test_invalid_card_exits_nonzero(self):
        result = runner.invoke(app, ["validate-card", "12345", "--offline"])

        assert result.exit_code == 1
        assert "False" in result.stdout

    def test_json_output(self):
        result = runner.invoke(app, ["validate-card", "DN4-0101-12345-67890", "--offline", "--json"])

        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["valid"] is True
        assert data["prefixCode"] == "DN"

    def test_remote_validation(self, stub_api, stub_client_factory):
        stub_api.on(
            "POST",
            "/v1/insurance/validate",
            json={"data": {"valid": True, "card_number": "DN4-0101-12345-67890", "expired": False}},
        )

        with patch("physioflow.cli.commands.get_client", stub_client_factory):
            result = runner.invoke(app, ["validate-card", "DN4-0101-12345-67890"])

        assert result.exit_code == 0
        assert "Source: remote" in result.stdout
        assert stub_api.last.headers["authorization"] == "Bearer cli-token"


class TestCoverageCommand:
    def test_local_with_prefix(self):
        result = runner.invoke(app, ["coverage", "1000000", "--prefix", "dn"])

        assert result.exit_code == 0
        assert "800,000 VND" in result.stdout
        assert "200,000 VND" in result.stdout
        assert "Source: local" in result.stdout

    def test_no_prefix_patient_pays_all(self):
        result = runner.invoke(app, ["coverage", "250000"])

        assert result.exit_code == 0
        assert "0%" in result.stdout
        assert result.stdout.count("250,000 VND") == 2

    def test_remote(self, stub_api, stub_client_factory):
        stub_api.on(
            "GET",
            "/v1/patients/p-1/insurance/coverage",
            json={
                "data": {
                    "total_amount": 500_000,
                    "coverage_percent": 95,
                    "copay_rate": 5,
                    "insurance_pays": 475_000,
                    "patient_pays": 25_000,
                }
            },
        )

        with patch("physioflow.cli.commands.get_client", stub_client_factory):
            result = runner.invoke(app, ["coverage", "500000", "--patient", "p-1"])

        assert result.exit_code == 0
        assert "475,000 VND" in result.stdout
        assert "Source: remote" in result.stdout

    def test_remote_failure_falls_back(self, stub_api, stub_client_factory):
        stub_api.on("GET", "/v1/patients/p-1/insurance/coverage", json={"message": "Boom"}, status=500)

        with patch("physioflow.cli.commands.get_client", stub_client_factory):
            result = runner.invoke(app, ["coverage", "500000", "--patient", "p-1"])

        assert result.exit_code == 0
        assert "Source: local" in result.stdout


class TestMeasureCommands:
    def test_measures_table(self):
        result = runner.invoke(app, ["measures"])

        assert result.exit_code == 0
        for measure_type in ("VAS", "NDI", "LEFS", "FIM"):
            assert measure_type in result.stdout

    def test_measure_target(self):
        result = runner.invoke(app, ["measure-target", "VAS", "7"])

        assert result.exit_code == 0
        assert "VAS baseline 7 -> target 5 (MCID 2, lower is better)" in result.stdout

    def test_unknown_measure(self):
        result = runner.invoke(app, ["measure-target", "XYZ", "10"])

        assert result.exit_code == 1
        assert "Unknown measure type: XYZ" in result.stdout


class TestChecklistProgressCommand:
    def test_progress_from_file(self, tmp_path, make_checklist):
        path = tmp_path / "checklist.json"
        path.write_text(json.dumps(make_checklist(responses={"pain": {"item_id": "pain", "value": 4}})))

        result = runner.invoke(app, ["checklist-progress", str(path)])

        assert result.exit_code == 0
        assert "Lumbar follow-up" in result.stdout
        assert "Overall: 1/3 (33%), required 1/2" in result.stdout
        assert "Required items missing" in result.stdout

    def test_ready_to_complete(self, tmp_path, make_checklist):
        path = tmp_path / "checklist.json"
        responses = {
            "pain": {"item_id": "pain", "value": 3},
            "rom": {"item_id": "rom", "value": 0},
        }
        path.write_text(json.dumps(make_checklist(responses=responses)))

        result = runner.invoke(app, ["checklist-progress", str(path)])

        assert "required 2/2" in result.stdout
        assert "Ready to complete" in result.stdout

    def test_missing_file(self, tmp_path):
        result = runner.invoke(app, ["checklist-progress", str(tmp_path / "nope.json")])

        assert result.exit_code == 1
        assert "Checklist file not found" in result.stdout

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{not json")

        result = runner.invoke(app, ["checklist-progress", str(path)])

        assert result.exit_code == 1
        assert "Invalid checklist file" in result.stdout


class TestSyncCommand:
    def test_sync_success(self, tmp_path, stub_api, stub_client_factory):
        url = f"sqlite+aiosqlite:///{tmp_path}/queue.db"
        enqueue(url, ("patient", "p-1", "create", {"first_name": "An"}))
        stub_api.on("POST", "/patients", json={"data": {"id": "p-1"}}, status=201)

        with patch("physioflow.cli.commands.get_client", stub_client_factory):
            result = runner.invoke(app, ["sync", "--database", url])

        assert result.exit_code == 0
        assert "Synced 1, failed 0" in result.stdout
        assert stub_api.calls("POST", "/patients")[0].body == {"first_name": "An"}

    def test_sync_failure_lists_errors(self, tmp_path, stub_api, stub_client_factory):
        url = f"sqlite+aiosqlite:///{tmp_path}/queue.db"
        enqueue(url, ("invoice", "inv-1", "update", {"total": 1}))
        stub_api.on("PUT", "/invoices/inv-1", json={"message": "Invoice locked"}, status=409)

        with patch("physioflow.cli.commands.get_client", stub_client_factory):
            result = runner.invoke(app, ["sync", "--database", url])

        assert result.exit_code == 1
        assert "Synced 0, failed 1" in result.stdout
        assert "invoice/inv-1: Invoice locked" in result.stdout


class TestDownloadClaimCommand:
    def test_download(self, tmp_path, stub_api, stub_client_factory):
        stub_api.on(
            "GET",
            "/v1/billing/claims/c-1/download",
            content=b"<claim/>",
            headers={"content-disposition": 'attachment; filename="BHYT_79001_2024_05.xml"'},
        )

        with patch("physioflow.cli.commands.get_client", stub_client_factory):
            result = runner.invoke(app, ["download-claim", "c-1", "--output", str(tmp_path)])

        assert result.exit_code == 0
        assert "Saved" in result.stdout
        assert (tmp_path / "BHYT_79001_2024_05.xml").read_bytes() == b"<claim/>"

    def test_download_failure(self, tmp_path, stub_api, stub_client_factory):
        stub_api.on("GET", "/v1/billing/claims/c-1/download", content=b"", status=404)

        with patch("physioflow.cli.commands.get_client", stub_client_factory):
            result = runner.invoke(app, ["download-claim", "c-1", "-o", str(tmp_path)])

        assert result.exit_code == 1
        assert "Download failed: Failed to download claim" in result.stdout
