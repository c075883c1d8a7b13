"""Observability logger for structured telemetry."""

import json
import logging
import time
import uuid
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Callable, Optional

from physioflow.observability.events import (
    ApiCallEvent,
    EventType,
    FallbackEvent,
    ObservabilityEvent,
    SyncEvent,
)

logger = logging.getLogger(__name__)


class ObservabilityLogger:
    """Central logger for API call, fallback and sync events.

    Writes structured events to JSON Lines files for later analysis.
    Supports real-time callbacks.
    """

    _instance: Optional["ObservabilityLogger"] = None

    def __init__(
        self,
        log_dir: Optional[Path] = None,
        enabled: bool = True,
        max_message_length: int = 200,
    ):
        """Initialize observability logger.

        Args:
            log_dir: Directory for log files (default: data/logs)
            enabled: Whether logging is enabled
            max_message_length: Max length for error messages
        """
        self.enabled = enabled
        self.max_message_length = max_message_length

        if log_dir is None:
            log_dir = Path("data/logs")
        self.log_dir = log_dir
        if self.enabled:
            self.log_dir.mkdir(parents=True, exist_ok=True)

        self._log_files: dict[str, Path] = {
            "api": self.log_dir / "api_calls.jsonl",
            "fallback": self.log_dir / "fallbacks.jsonl",
            "sync": self.log_dir / "offline_sync.jsonl",
        }

        self._callbacks: list[Callable[[ObservabilityEvent], None]] = []
        self._current_session_id: Optional[str] = None

    @classmethod
    def get_instance(cls) -> "ObservabilityLogger":
        """Get or create singleton instance configured from settings."""
        if cls._instance is None:
            from physioflow.config import get_settings

            settings = get_settings()
            cls._instance = cls(
                log_dir=settings.observability_log_dir,
                enabled=settings.observability_enabled,
            )
        return cls._instance

    def set_session_id(self, session_id: str) -> None:
        """Set current session ID for event correlation."""
        self._current_session_id = session_id

    def generate_request_id(self) -> str:
        """Generate a unique request ID."""
        return str(uuid.uuid4())[:8]

    def add_callback(self, callback: Callable[[ObservabilityEvent], None]) -> None:
        """Add callback for real-time event monitoring."""
        self._callbacks.append(callback)

    def _write_event(self, event: ObservabilityEvent, log_type: str) -> None:
        """Write event to the log file for its type and notify callbacks."""
        if not self.enabled:
            return

        if self._current_session_id and not event.session_id:
            event.session_id = self._current_session_id

        try:
            log_file = self._log_files.get(log_type)
            if log_file:
                with open(log_file, "a") as f:
                    f.write(event.model_dump_json() + "\n")

            for callback in self._callbacks:
                try:
                    callback(event)
                except Exception as e:
                    logger.warning(f"Observability callback failed: {e}")

        except OSError as e:
            logger.warning(f"Failed to write observability event: {e}")

    def _truncate(self, content: str) -> str:
        if len(content) <= self.max_message_length:
            return content
        return content[: self.max_message_length] + "..."

    # API Call Logging

    @contextmanager
    def api_call(
        self,
        method: str,
        path: str,
        request_id: Optional[str] = None,
    ):
        """Context manager for logging a REST call.

        Usage:
            with obs.api_call("GET", "/v1/patients") as event:
                response = await http.request(...)
                event.status_code = response.status_code
        """
        start_time = time.time()
        request_id = request_id or self.generate_request_id()

        event = ApiCallEvent(
            event_type=EventType.API_CALL_START,
            method=method,
            path=path,
            request_id=request_id,
        )

        try:
            yield event
            event.event_type = EventType.API_CALL_SUCCESS

        except Exception as e:
            event.event_type = EventType.API_CALL_ERROR
            event.error_type = type(e).__name__
            event.error_code = getattr(e, "code", None)
            event.error_message = self._truncate(str(e))
            status = getattr(e, "status", None)
            if event.status_code is None and status:
                event.status_code = status
            raise

        finally:
            event.duration_ms = (time.time() - start_time) * 1000
            self._write_event(event, "api")

    def log_fallback(
        self,
        operation: str,
        reason: str,
        status_code: Optional[int] = None,
        metadata: Optional[dict[str, Any]] = None,
    ) -> None:
        """Log a remote failure that was replaced by a local result."""
        event = FallbackEvent(
            event_type=EventType.LOCAL_FALLBACK,
            operation=operation,
            reason=self._truncate(reason),
            status_code=status_code,
            metadata=metadata or {},
        )
        self._write_event(event, "fallback")

    def log_sync(
        self,
        synced: int,
        failed: int,
        errors: list[str],
        duration_ms: Optional[float] = None,
    ) -> None:
        """Log one offline queue replay."""
        event = SyncEvent(
            event_type=EventType.SYNC_RUN,
            synced=synced,
            failed=failed,
            errors=[self._truncate(e) for e in errors],
            duration_ms=duration_ms,
        )
        self._write_event(event, "sync")

    # Utility methods

    def get_recent_events(
        self,
        log_type: str,
        limit: int = 100,
    ) -> list[dict[str, Any]]:
        """Read recent events from a log file."""
        log_file = self._log_files.get(log_type)
        if not log_file or not log_file.exists():
            return []

        events = []
        with open(log_file) as f:
            for line in f:
                try:
                    events.append(json.loads(line))
                except json.JSONDecodeError:
                    continue

        return events[-limit:]

    def get_stats(self, log_type: str) -> dict[str, Any]:
        """Get basic statistics for a log type."""
        events = self.get_recent_events(log_type, limit=1000)
        if not events:
            return {"total": 0}

        total = len(events)
        errors = sum(1 for e in events if "error" in e.get("event_type", ""))
        avg_duration = sum(e.get("duration_ms") or 0 for e in events) / total

        return {
            "total": total,
            "errors": errors,
            "error_rate": errors / total if total > 0 else 0,
            "avg_duration_ms": avg_duration,
        }


def get_observability_logger() -> ObservabilityLogger:
    """Get the global observability logger instance."""
    return ObservabilityLogger.get_instance()
