"""Structured observability events for API and sync telemetry."""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, Field


class EventType(str, Enum):
    """Types of observability events."""

    API_CALL_START = "api_call_start"
    API_CALL_SUCCESS = "api_call_success"
    API_CALL_ERROR = "api_call_error"
    LOCAL_FALLBACK = "local_fallback"
    SYNC_RUN = "sync_run"


class ObservabilityEvent(BaseModel):
    """Base class for all observability events."""

    event_type: EventType
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    session_id: Optional[str] = None
    request_id: Optional[str] = None
    duration_ms: Optional[float] = None
    metadata: dict[str, Any] = Field(default_factory=dict)


class ApiCallEvent(ObservabilityEvent):
    """Event for a single REST call."""

    method: str
    path: str
    status_code: Optional[int] = None

    # Error fields (populated on error)
    error_type: Optional[str] = None
    error_code: Optional[str] = None
    error_message: Optional[str] = None


class FallbackEvent(ObservabilityEvent):
    """A remote call failed and a locally computed result was used instead."""

    operation: str
    reason: str
    status_code: Optional[int] = None


class SyncEvent(ObservabilityEvent):
    """Event for one offline-queue replay."""

    synced: int = 0
    failed: int = 0
    errors: list[str] = Field(default_factory=list)
