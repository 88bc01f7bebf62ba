"""Abstract repository interface (port) for Client persistence."""

from abc import ABC, abstractmethod

from app.domain.entities import Client, ListQuery, PageResult


class ClientRepository(ABC):
    """Port for client persistence — implemented in the infrastructure layer.

    Every read takes ``include_deleted`` as a required keyword so the
    soft-delete exclusion is always an explicit argument at the call site.
    Implementations raise ``StoreError`` for storage failures.
    """

    @abstractmethod
    async def get_by_id(self, client_id: int, *, include_deleted: bool) -> Client | None:
        """Point lookup. Soft-deleted rows are invisible unless include_deleted."""
        ...

    @abstractmethod
    async def query(
        self, list_query: ListQuery, *, include_deleted: bool
    ) -> PageResult[Client]:
        """Filtered, sorted, paged scan plus the unpaged match count."""
        ...

    @abstractmethod
    async def create(self, client: Client) -> Client:
        """Insert a new row and return it with the store-assigned id."""
        ...

    @abstractmethod
    async def update(self, client: Client) -> Client:
        """Write every column of an existing row, audit fields included."""
        ...
