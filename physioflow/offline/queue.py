"""Offline mutation queue and replay against the API."""

from __future__ import annotations

import logging
import time
from datetime import datetime, timezone
from typing import Any, Optional, Sequence

from pydantic import BaseModel, Field
from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from physioflow.client.errors import ApiError
from physioflow.client.http import ApiClient
from physioflow.config import get_settings
from physioflow.observability import ObservabilityLogger, get_observability_logger
from physioflow.offline.models import SyncAction, SyncQueueItem

logger = logging.getLogger(__name__)

ENTITY_ENDPOINTS: dict[str, str] = {
    "patient": "/patients",
    "session": "/sessions",
    "checklist_item": "/checklist-items",
    "insurance_card": "/insurance-cards",
    "outcome_measure": "/outcome-measures",
    "invoice": "/invoices",
    "payment": "/payments",
    "discharge_plan": "/discharge-plans",
    "discharge_summary": "/discharge-summaries",
}


def endpoint_for_entity(entity_type: str) -> str:
    try:
        return ENTITY_ENDPOINTS[entity_type]
    except KeyError:
        raise ValueError(f"Unknown entity type: {entity_type}") from None


class SyncResult(BaseModel):
    success: bool = True
    synced: int = 0
    failed: int = 0
    errors: list[str] = Field(default_factory=list)


class OfflineQueue:
    """Records mutations made while offline and replays them later.

    Items that fail stay queued with their attempt count incremented; once an
    item reaches ``max_attempts`` it is no longer replayed or counted as
    pending, but it is kept for inspection.
    """

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        max_attempts: Optional[int] = None,
        batch_size: Optional[int] = None,
        observability: Optional[ObservabilityLogger] = None,
    ):
        settings = get_settings()
        self.session_factory = session_factory
        self.max_attempts = max_attempts or settings.offline_max_attempts
        self.batch_size = batch_size or settings.offline_batch_size
        self.obs = observability or get_observability_logger()

    async def enqueue(
        self,
        entity_type: str,
        entity_id: str,
        action: str | SyncAction,
        payload: Any = None,
    ) -> SyncQueueItem:
        """Queue a create/update/delete for later replay."""
        endpoint_for_entity(entity_type)
        action = SyncAction(action)

        item = SyncQueueItem(
            entity_type=entity_type,
            entity_id=entity_id,
            action=action.value,
            payload=payload,
            attempts=0,
        )
        async with self.session_factory() as session:
            session.add(item)
            await session.commit()
        logger.debug("Queued %s %s/%s", action.value, entity_type, entity_id)
        return item

    async def pending(self, limit: Optional[int] = None) -> Sequence[SyncQueueItem]:
        """Items still eligible for replay, oldest first."""
        stmt = (
            select(SyncQueueItem)
            .where(SyncQueueItem.attempts < self.max_attempts)
            .order_by(SyncQueueItem.created_at)
        )
        if limit:
            stmt = stmt.limit(limit)
        async with self.session_factory() as session:
            result = await session.execute(stmt)
            return result.scalars().all()

    async def pending_count(self) -> int:
        stmt = select(func.count()).select_from(SyncQueueItem).where(
            SyncQueueItem.attempts < self.max_attempts
        )
        async with self.session_factory() as session:
            return (await session.execute(stmt)).scalar_one()

    async def failed_items(self) -> Sequence[SyncQueueItem]:
        """Items that exhausted their attempts."""
        stmt = select(SyncQueueItem).where(SyncQueueItem.attempts >= self.max_attempts)
        async with self.session_factory() as session:
            result = await session.execute(stmt)
            return result.scalars().all()

    async def clear(self) -> int:
        async with self.session_factory() as session:
            result = await session.execute(delete(SyncQueueItem))
            await session.commit()
            return result.rowcount or 0

    async def _replay(self, api: ApiClient, item: SyncQueueItem) -> None:
        endpoint = endpoint_for_entity(item.entity_type)
        if item.action == SyncAction.create.value:
            await api.post(endpoint, item.payload)
        elif item.action == SyncAction.update.value:
            await api.put(f"{endpoint}/{item.entity_id}", item.payload)
        elif item.action == SyncAction.delete.value:
            await api.delete(f"{endpoint}/{item.entity_id}")
        else:
            raise ValueError(f"Unknown sync action: {item.action}")

    async def sync_pending(self, api: ApiClient) -> SyncResult:
        """Replay one batch of pending items.

        Successful items are deleted. Failed items get ``attempts`` incremented
        and ``last_error`` set. ``success`` is true when nothing failed.
        """
        start = time.time()
        result = SyncResult()

        async with self.session_factory() as session:
            stmt = (
                select(SyncQueueItem)
                .where(SyncQueueItem.attempts < self.max_attempts)
                .order_by(SyncQueueItem.created_at)
                .limit(self.batch_size)
            )
            items = (await session.execute(stmt)).scalars().all()

            for item in items:
                try:
                    await self._replay(api, item)
                except (ApiError, ValueError) as e:
                    item.attempts += 1
                    item.last_error = str(e) or type(e).__name__
                    item.last_attempt_at = datetime.now(timezone.utc)
                    result.failed += 1
                    result.errors.append(f"{item.entity_type}/{item.entity_id}: {item.last_error}")
                    logger.warning(
                        "Sync failed for %s %s/%s (attempt %d): %s",
                        item.action,
                        item.entity_type,
                        item.entity_id,
                        item.attempts,
                        item.last_error,
                    )
                else:
                    await session.delete(item)
                    result.synced += 1

            await session.commit()

        result.success = result.failed == 0
        self.obs.log_sync(
            synced=result.synced,
            failed=result.failed,
            errors=result.errors,
            duration_ms=(time.time() - start) * 1000,
        )
        logger.info("Offline sync: %d synced, %d failed", result.synced, result.failed)
        return result
