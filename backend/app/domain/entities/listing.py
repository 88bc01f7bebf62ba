"""Paging and filtering value objects shared by the store, the service and the list engine."""

import math
from dataclasses import dataclass, field
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class ListQuery:
    """A 1-based page request with an optional single-column filter."""

    page: int = 1
    page_size: int = 20
    filter_column: str | None = None
    filter_text: str | None = None

    @property
    def has_filter(self) -> bool:
        """A filter only counts when both the column and non-empty text are set."""
        return bool(self.filter_column) and bool(self.filter_text)

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.page_size


@dataclass
class PageResult(Generic[T]):
    """One page of items plus the total size of the unpaged, filtered set."""

    items: list[T] = field(default_factory=list)
    total: int = 0
    page: int = 1
    page_size: int = 20

    @property
    def page_count(self) -> int:
        return max(1, math.ceil(self.total / self.page_size)) if self.page_size else 1
