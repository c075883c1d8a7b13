"""Base classes for PhysioFlow view models.

API payloads arrive in snake_case. View models keep Python attribute names and
serialize to camelCase through ``to_view()``. Validation accepts the snake_case
field names, so ``Model.model_validate(api_payload)`` is the transformer for
resources whose mapping is 1:1.
"""

from __future__ import annotations

from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

T = TypeVar("T")


class ViewModel(BaseModel):
    """camelCase view of a snake_case API payload."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    def to_view(self) -> dict[str, Any]:
        """Serialize to the camelCase view shape."""
        return self.model_dump(by_alias=True, mode="json")


class PageMeta(ViewModel):
    page: int = 1
    page_size: int = 10
    total: int = 0
    total_pages: int = 0


class Page(ViewModel, Generic[T]):
    """A page of view models plus pagination metadata."""

    data: list[T] = Field(default_factory=list)
    meta: PageMeta = Field(default_factory=PageMeta)


def as_list(value: Any) -> list:
    """Return ``value`` if it is a list, otherwise an empty list."""
    return value if isinstance(value, list) else []


def unwrap_page(
    payload: Any,
    page: int | None = None,
    page_size: int | None = None,
    default_page_size: int = 10,
) -> tuple[list, PageMeta]:
    """Split a list response into items and pagination metadata.

    The API answers list endpoints either with a bare array or with a
    ``{data, total, page, per_page, total_pages}`` object.
    """
    if isinstance(payload, list):
        return payload, PageMeta(
            page=page or 1,
            page_size=page_size or default_page_size,
            total=len(payload),
            total_pages=1,
        )

    payload = payload or {}
    return as_list(payload.get("data")), PageMeta(
        page=payload.get("page") or page or 1,
        page_size=payload.get("per_page") or page_size or default_page_size,
        total=payload.get("total") or 0,
        total_pages=payload.get("total_pages") or 0,
    )
