"""Shared schema bases — camelCase JSON, snake_case attributes."""

from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

T = TypeVar("T")


class CamelModel(BaseModel):
    """Request/response base: accepts and emits camelCase, accepts snake_case too."""
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, from_attributes=True,
    )


class ViewModel(CamelModel):
    """Immutable response view — safe to share between requests via the cache."""
    model_config = ConfigDict(frozen=True)


class PagedResult(ViewModel, Generic[T]):
    items: list[T]
    page: int
    page_size: int
    total: int
