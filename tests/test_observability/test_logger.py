"""Tests for observability logger."""

import json

import pytest

from physioflow.client.errors import ApiError
from physioflow.observability import (
    ApiCallEvent,
    EventType,
    ObservabilityLogger,
    get_observability_logger,
)


@pytest.fixture
def temp_log_dir(tmp_path):
    """Create temporary log directory."""
    log_dir = tmp_path / "logs"
    log_dir.mkdir()
    return log_dir


@pytest.fixture
def obs_logger(temp_log_dir):
    return ObservabilityLogger(log_dir=temp_log_dir, enabled=True)


class TestObservabilityLogger:
    def test_init_creates_log_directory(self, tmp_path):
        log_dir = tmp_path / "new_logs"
        ObservabilityLogger(log_dir=log_dir)

        assert log_dir.exists()

    def test_disabled_logger_writes_nothing(self, temp_log_dir):
        logger = ObservabilityLogger(log_dir=temp_log_dir, enabled=False)

        with logger.api_call("GET", "/v1/patients") as event:
            event.status_code = 200
        logger.log_fallback("insurance.validate", "down")

        assert list(temp_log_dir.iterdir()) == []

    def test_api_call_success(self, obs_logger, temp_log_dir):
        with obs_logger.api_call("GET", "/v1/patients/p-1") as event:
            event.status_code = 200

        lines = (temp_log_dir / "api_calls.jsonl").read_text().strip().split("\n")
        assert len(lines) == 1
        data = json.loads(lines[0])
        assert data["event_type"] == "api_call_success"
        assert data["method"] == "GET"
        assert data["path"] == "/v1/patients/p-1"
        assert data["status_code"] == 200
        assert data["duration_ms"] >= 0

    def test_api_call_error(self, obs_logger):
        with pytest.raises(ApiError):
            with obs_logger.api_call("PUT", "/v1/appointments/a-1"):
                raise ApiError("Slot taken", 409, "conflict")

        event = obs_logger.get_recent_events("api")[-1]
        assert event["event_type"] == "api_call_error"
        assert event["error_type"] == "ApiError"
        assert event["error_code"] == "conflict"
        assert event["status_code"] == 409

    def test_error_message_truncated(self, temp_log_dir):
        logger = ObservabilityLogger(log_dir=temp_log_dir, max_message_length=10)

        with pytest.raises(ValueError):
            with logger.api_call("GET", "/v1/reports/revenue"):
                raise ValueError("x" * 50)

        event = logger.get_recent_events("api")[-1]
        assert event["error_message"] == "x" * 10 + "..."

    def test_log_fallback(self, obs_logger):
        obs_logger.log_fallback(
            "insurance.coverage",
            "Network error",
            status_code=0,
            metadata={"patient_id": "p-1"},
        )

        event = obs_logger.get_recent_events("fallback")[-1]
        assert event["event_type"] == "local_fallback"
        assert event["operation"] == "insurance.coverage"
        assert event["metadata"] == {"patient_id": "p-1"}

    def test_log_sync(self, obs_logger):
        obs_logger.log_sync(2, 1, ["invoice/inv-1: Invoice locked"], duration_ms=12.5)

        event = obs_logger.get_recent_events("sync")[-1]
        assert (event["synced"], event["failed"]) == (2, 1)
        assert event["errors"] == ["invoice/inv-1: Invoice locked"]

    def test_session_id_attached(self, obs_logger):
        obs_logger.set_session_id("clinic-shift-1")

        obs_logger.log_sync(0, 0, [])

        assert obs_logger.get_recent_events("sync")[-1]["session_id"] == "clinic-shift-1"

    def test_callback_receives_event(self, obs_logger):
        seen = []
        obs_logger.add_callback(seen.append)

        with obs_logger.api_call("GET", "/v1/therapists") as event:
            event.status_code = 200

        assert isinstance(seen[0], ApiCallEvent)
        assert seen[0].event_type == EventType.API_CALL_SUCCESS

    def test_failing_callback_does_not_break_logging(self, obs_logger):
        def broken(event):
            raise RuntimeError("boom")

        obs_logger.add_callback(broken)
        obs_logger.log_sync(1, 0, [])

        assert len(obs_logger.get_recent_events("sync")) == 1

    def test_get_stats(self, obs_logger):
        with obs_logger.api_call("GET", "/v1/patients"):
            pass
        with pytest.raises(ApiError):
            with obs_logger.api_call("GET", "/v1/patients/x"):
                raise ApiError("Not found", 404)

        stats = obs_logger.get_stats("api")

        assert stats["total"] == 2
        assert stats["errors"] == 1
        assert stats["error_rate"] == 0.5

    def test_stats_empty(self, obs_logger):
        assert obs_logger.get_stats("fallback") == {"total": 0}

    def test_recent_events_skips_corrupt_lines(self, obs_logger, temp_log_dir):
        obs_logger.log_sync(1, 0, [])
        with open(temp_log_dir / "offline_sync.jsonl", "a") as f:
            f.write("{broken\n")

        assert len(obs_logger.get_recent_events("sync")) == 1


class TestGlobalLogger:
    def test_singleton(self):
        assert get_observability_logger() is get_observability_logger()
