"""Optimistic cache updates with rollback.

A mutation moves through explicit states::

    IDLE -> OPTIMISTIC -> COMMITTED
                       -> ROLLED_BACK

The cached value is snapshotted, replaced with the predicted value and the
request is sent. A failed request restores the snapshot and re-raises. In both
outcomes the key is invalidated so the next read refetches server state.
"""

import logging
from enum import Enum
from typing import Any, Awaitable, Callable, Generic, Optional, TypeVar

from physioflow.client.cache import QueryCache, QueryKey

logger = logging.getLogger(__name__)

V = TypeVar("V")
R = TypeVar("R")


class MutationState(str, Enum):
    IDLE = "idle"
    OPTIMISTIC = "optimistic"
    COMMITTED = "committed"
    ROLLED_BACK = "rolled_back"


class OptimisticMutation(Generic[V, R]):
    """Apply a predicted cache value, then confirm or roll back."""

    def __init__(
        self,
        cache: QueryCache,
        key: QueryKey,
        apply: Callable[[Any, V], Any],
        request: Callable[[V], Awaitable[R]],
        invalidate: Optional[list[QueryKey]] = None,
    ):
        """Create a mutation.

        Args:
            cache: Query cache holding the value
            key: Cache key updated optimistically
            apply: Returns the predicted value from (current value, variables).
                Not called when nothing is cached under ``key``.
            request: Sends the mutation to the server
            invalidate: Extra keys invalidated when the mutation settles
        """
        self.cache = cache
        self.key = tuple(key)
        self._apply = apply
        self._request = request
        self._invalidate = [tuple(k) for k in (invalidate or [])]
        self.state = MutationState.IDLE
        self.snapshot: Any = None
        self.error: Optional[BaseException] = None

    async def execute(self, variables: V) -> R:
        self.error = None
        self.snapshot = self.cache.get_data(self.key)

        if self.snapshot is not None:
            self.cache.set_data(self.key, self._apply(self.snapshot, variables))
        self.state = MutationState.OPTIMISTIC

        try:
            result = await self._request(variables)
        except BaseException as e:
            # Cancellation rolls back too.
            self.error = e
            if self.snapshot is not None:
                self.cache.set_data(self.key, self.snapshot)
            self.state = MutationState.ROLLED_BACK
            logger.warning("Rolled back optimistic update for %s: %s", self.key, e)
            raise
        else:
            self.state = MutationState.COMMITTED
            return result
        finally:
            self.cache.invalidate(self.key)
            for key in self._invalidate:
                self.cache.invalidate(key)
