"""Local queue for mutations made while offline."""

from physioflow.offline.database import create_engine, create_session_factory, init_db
from physioflow.offline.models import SyncAction, SyncQueueItem
from physioflow.offline.queue import ENTITY_ENDPOINTS, OfflineQueue, SyncResult, endpoint_for_entity

__all__ = [
    "ENTITY_ENDPOINTS",
    "OfflineQueue",
    "SyncAction",
    "SyncQueueItem",
    "SyncResult",
    "create_engine",
    "create_session_factory",
    "endpoint_for_entity",
    "init_db",
]
