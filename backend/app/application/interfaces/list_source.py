"""Abstract page source (port) consumed by the list engine."""

from abc import ABC, abstractmethod
from typing import Any

from app.domain.entities import ListQuery, PageResult


class ListSource(ABC):
    """Port for fetching one page of an entity listing — usually over HTTP."""

    @abstractmethod
    async def fetch_page(self, query: ListQuery) -> PageResult[Any]:
        """Return the requested page. Any exception marks the load as failed."""
        ...
