"""Observability module for API and sync telemetry."""

from physioflow.observability.events import (
    ApiCallEvent,
    EventType,
    FallbackEvent,
    ObservabilityEvent,
    SyncEvent,
)
from physioflow.observability.logger import ObservabilityLogger, get_observability_logger

__all__ = [
    "ApiCallEvent",
    "EventType",
    "FallbackEvent",
    "ObservabilityEvent",
    "ObservabilityLogger",
    "SyncEvent",
    "get_observability_logger",
]
