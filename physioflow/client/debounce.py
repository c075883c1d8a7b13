"""Fixed-delay debounce helpers for asyncio."""

import asyncio
import logging
from typing import Any, Awaitable, Callable, Hashable, Optional

logger = logging.getLogger(__name__)


class Debouncer:
    """Run a coroutine after ``delay`` seconds of quiet.

    Each ``trigger`` cancels a call that is still waiting out its delay and
    schedules a new one, so only the last trigger in a burst runs. A call whose
    delay has elapsed is never cancelled. Calls run one at a time in trigger
    order.
    """

    def __init__(self, delay: float):
        self.delay = delay
        self._task: Optional[asyncio.Task] = None
        self._delayed: set[asyncio.Task] = set()
        self._tasks: set[asyncio.Task] = set()
        self._running: Optional[asyncio.Task] = None

    @property
    def pending(self) -> bool:
        return any(not task.done() for task in self._tasks)

    def trigger(self, func: Callable[..., Awaitable[Any]], *args, **kwargs) -> asyncio.Task:
        self.cancel()
        task = asyncio.create_task(self._run(func, *args, **kwargs))
        self._task = task
        self._delayed.add(task)
        self._tasks.add(task)
        task.add_done_callback(self._forget)
        return task

    def _forget(self, task: asyncio.Task) -> None:
        self._delayed.discard(task)
        self._tasks.discard(task)

    async def _run(self, func, *args, **kwargs) -> Any:
        current = asyncio.current_task()
        try:
            await asyncio.sleep(self.delay)
        finally:
            self._delayed.discard(current)

        previous, self._running = self._running, current
        try:
            if previous is not None and not previous.done():
                await asyncio.wait([previous])
            return await func(*args, **kwargs)
        finally:
            if self._running is current:
                self._running = None

    def cancel(self) -> None:
        """Drop the call that is still waiting out its delay, if any."""
        task, self._task = self._task, None
        if task in self._delayed:
            task.cancel()
            self._forget(task)

    async def wait(self) -> Any:
        """Wait for every started call, then return the last call's result."""
        task = self._task
        for other in list(self._tasks):
            if other is not task:
                await other
        if task is None:
            return None
        return await task


class AutoSaver:
    """Collect keyed updates and save them after a pause.

    Updates to the same key collapse to the last value. ``save`` is called once
    per key; a failing key is logged and kept in ``errors`` without stopping
    the rest of the batch.
    """

    def __init__(self, save: Callable[[Hashable, Any], Awaitable[Any]], delay: float = 0.5):
        self._save = save
        self._pending: dict[Hashable, Any] = {}
        self._debouncer = Debouncer(delay)
        self.errors: list[Exception] = []

    @property
    def pending(self) -> dict[Hashable, Any]:
        return dict(self._pending)

    @property
    def is_saving(self) -> bool:
        return self._debouncer.pending

    def update(self, key: Hashable, value: Any) -> None:
        self._pending[key] = value
        self._debouncer.trigger(self._save_pending)

    async def _save_pending(self) -> int:
        batch, self._pending = self._pending, {}
        saved = 0
        for key, value in batch.items():
            try:
                await self._save(key, value)
                saved += 1
            except Exception as e:
                logger.warning("Auto-save failed for %s: %s", key, e)
                self.errors.append(e)
        return saved

    async def flush(self) -> int:
        """Save pending updates now, after any save already in flight."""
        self._debouncer.cancel()
        await self._debouncer.wait()
        return await self._save_pending()

    async def wait(self) -> Any:
        return await self._debouncer.wait()
