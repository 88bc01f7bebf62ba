"""Administrative bypass for soft-deleted clients.

Reads here ignore the deletion filter, and ``restore`` is the only way a
record goes from deleted back to live. Nothing in the HTTP API routes to
this service; it is driven by the admin command-line tool.
"""

from app.application.interfaces import ClientRepository
from app.application.services.client_service import Clock, build_list_query
from app.domain.entities import Client, PageResult, utc_now
from app.domain.exceptions import EntityNotFoundError
from app.infrastructure.logging.lifecycle_logger import LifecycleLogger, LifecycleStage

_log = LifecycleLogger("ClientLifecycle")


class ClientAdminService:
    """Out-of-band recovery and audit operations on clients."""

    def __init__(self, repository: ClientRepository, *, clock: Clock = utc_now):
        self._repository = repository
        self._clock = clock

    async def get_client(self, client_id: int) -> Client:
        client = await self._repository.get_by_id(client_id, include_deleted=True)
        if client is None:
            raise EntityNotFoundError("Client", client_id)
        return client

    async def list_clients(
        self,
        *,
        page: int = 1,
        page_size: int = 20,
        filter_column: str | None = None,
        filter_text: str | None = None,
    ) -> PageResult[Client]:
        list_query = build_list_query(page, page_size, filter_column, filter_text)
        return await self._repository.query(list_query, include_deleted=True)

    async def restore_client(self, client_id: int) -> Client:
        """Bring a soft-deleted client back. Restoring a live client changes nothing."""
        client = await self.get_client(client_id)
        now = self._clock()
        if not client.restore(now):
            _log.skipped(LifecycleStage.RESTORE, f"Client {client_id} is not deleted")
            return client

        restored = await self._repository.update(client)
        _log.event(LifecycleStage.RESTORE, f"Client {client_id} restored", at=now.isoformat())
        return restored
