"""SQLAlchemy 2.0 model for the local offline sync queue."""

from __future__ import annotations

import enum
import uuid
from datetime import datetime, timezone
from typing import Any

from sqlalchemy import DateTime, Index, Integer, String, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from sqlalchemy.types import JSON


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _new_id() -> str:
    return str(uuid.uuid4())


class SyncAction(str, enum.Enum):
    create = "create"
    update = "update"
    delete = "delete"


class Base(DeclarativeBase):
    pass


class SyncQueueItem(Base):
    """A mutation recorded while offline, waiting to be replayed."""

    __tablename__ = "sync_queue"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)
    entity_type: Mapped[str] = mapped_column(String(40), nullable=False)
    entity_id: Mapped[str] = mapped_column(String(64), nullable=False)
    action: Mapped[str] = mapped_column(String(10), nullable=False)
    payload: Mapped[Any] = mapped_column(JSON, nullable=True)
    attempts: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    last_error: Mapped[str | None] = mapped_column(Text)
    last_attempt_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow)

    __table_args__ = (
        Index("ix_sync_queue_attempts", "attempts"),
        Index("ix_sync_queue_created", "created_at"),
    )

    def __repr__(self) -> str:
        return (
            f"<SyncQueueItem {self.action} {self.entity_type}/{self.entity_id} "
            f"attempts={self.attempts}>"
        )
