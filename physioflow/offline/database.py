"""Engine and async session factory for the offline queue database."""

from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path
from typing import Optional

from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from physioflow.config import get_settings
from physioflow.offline.models import Base

logger = logging.getLogger(__name__)


def get_database_url() -> str:
    return get_settings().offline_database_url


def create_engine(url: Optional[str] = None) -> AsyncEngine:
    """Create an async engine, making sure a file-backed SQLite directory exists."""
    url = url or get_database_url()
    parsed = make_url(url)
    if parsed.get_backend_name() == "sqlite" and parsed.database and parsed.database != ":memory:":
        Path(parsed.database).parent.mkdir(parents=True, exist_ok=True)
    return create_async_engine(url, echo=False)


@lru_cache
def _get_engine() -> AsyncEngine:
    return create_engine()


def create_session_factory(engine: Optional[AsyncEngine] = None) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine or _get_engine(), class_=AsyncSession, expire_on_commit=False)


async def init_db(engine: Optional[AsyncEngine] = None) -> None:
    """Create the queue table if it does not exist."""
    engine = engine or _get_engine()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.debug("Offline queue schema ready at %s", engine.url)
