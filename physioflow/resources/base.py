"""Shared plumbing for resource clients."""

from typing import Any, Hashable, Mapping, Optional

from physioflow.client.cache import QueryCache, QueryKey
from physioflow.client.http import ApiClient


def params_key(params: Optional[Mapping[str, Any]]) -> tuple[tuple[str, Hashable], ...]:
    """Hashable, order-independent form of a query-parameter mapping.

    None values are dropped, matching what goes over the wire. List values
    become tuples.
    """
    if not params:
        return ()
    items = []
    for name, value in params.items():
        if value is None:
            continue
        if isinstance(value, list):
            value = tuple(value)
        items.append((name, value))
    return tuple(sorted(items))


class Resource:
    """Base for one API area: holds the HTTP client and the shared query cache."""

    #: First element of every cache key this resource owns.
    root: str = ""

    def __init__(self, api: ApiClient, cache: QueryCache):
        self.api = api
        self.cache = cache

    def key(self, *parts: Hashable) -> QueryKey:
        return (self.root, *parts)

    def invalidate_all(self) -> int:
        return self.cache.invalidate((self.root,))
