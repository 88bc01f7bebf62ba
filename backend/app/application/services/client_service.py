"""Application service (use case) owning the Client lifecycle.

This is the only place where audit timestamps and the soft-delete flag
change. Callers hand in business fields; the service validates them, stamps
``created_at`` / ``last_modified_at`` from its clock and keeps deleted rows
out of every default read path.
"""

from collections.abc import Callable
from datetime import datetime

from app.application.interfaces import ClientRepository
from app.application.schemas.client import ClientCreate, ClientUpdate
from app.domain.entities import Client, ListQuery, PageResult, utc_now
from app.domain.exceptions import EntityNotFoundError, ValidationError
from app.domain.validation import CLIENT_FIELD_RULES, filterable_columns, validate_fields
from app.infrastructure.logging.lifecycle_logger import LifecycleLogger, LifecycleStage

_log = LifecycleLogger("ClientLifecycle")

Clock = Callable[[], datetime]

FILTERABLE_COLUMNS = filterable_columns(CLIENT_FIELD_RULES)


class ClientService:
    """Orchestrates client CRUD with audit and soft-delete rules. Depends on the repository port (DI)."""

    def __init__(
        self,
        repository: ClientRepository,
        *,
        clock: Clock = utc_now,
        default_page_size: int = 20,
        max_page_size: int = 100,
    ):
        self._repository = repository
        self._clock = clock
        self._default_page_size = default_page_size
        self._max_page_size = max_page_size

    async def get_client(self, client_id: int, *, include_deleted: bool = False) -> Client:
        client = await self._repository.get_by_id(client_id, include_deleted=include_deleted)
        if client is None:
            raise EntityNotFoundError("Client", client_id)
        return client

    async def list_clients(
        self,
        *,
        page: int = 1,
        page_size: int | None = None,
        filter_column: str | None = None,
        filter_text: str | None = None,
    ) -> PageResult[Client]:
        """Return one page of live clients, optionally narrowed by a substring filter."""
        if page_size is None:
            page_size = self._default_page_size
        list_query = build_list_query(
            page, page_size, filter_column, filter_text, max_page_size=self._max_page_size
        )
        return await self._repository.query(list_query, include_deleted=False)

    async def create_client(self, data: ClientCreate) -> Client:
        try:
            fields = validate_fields(data.model_dump(), CLIENT_FIELD_RULES)
        except ValidationError as exc:
            _log.rejected(LifecycleStage.CREATE, "Client not created", error=exc)
            raise

        now = self._clock()
        client = Client(
            **fields,
            created_at=now,
            last_modified_at=now,
            deleted=False,
        )
        created = await self._repository.create(client)
        _log.event(LifecycleStage.CREATE, f"Client {created.id} created", at=now.isoformat())
        return created

    async def update_client(self, client_id: int, data: ClientUpdate) -> Client:
        client = await self.get_client(client_id)
        try:
            fields = validate_fields(data.model_dump(), CLIENT_FIELD_RULES)
        except ValidationError as exc:
            _log.rejected(LifecycleStage.UPDATE, f"Client {client_id} not updated", error=exc)
            raise

        now = self._clock()
        client.apply_changes(**fields, now=now)
        updated = await self._repository.update(client)
        _log.event(LifecycleStage.UPDATE, f"Client {client_id} updated", at=now.isoformat())
        return updated

    async def delete_client(self, client_id: int) -> Client:
        """Soft-delete a client.

        Deleting an already-deleted client succeeds and only refreshes
        ``last_modified_at``.
        """
        client = await self.get_client(client_id, include_deleted=True)

        now = self._clock()
        first_delete = client.mark_deleted(now)
        deleted = await self._repository.update(client)
        if not first_delete:
            _log.skipped(LifecycleStage.SOFT_DELETE, f"Client {client_id} was already deleted; timestamp refreshed")
            return deleted
        _log.event(LifecycleStage.SOFT_DELETE, f"Client {client_id} deleted", at=now.isoformat())
        return deleted


def build_list_query(
    page: int,
    page_size: int,
    filter_column: str | None,
    filter_text: str | None,
    *,
    max_page_size: int = 100,
) -> ListQuery:
    """Validate paging and filter arguments and turn them into a ListQuery."""
    if page < 1:
        raise ValidationError.single("page", "page must be 1 or greater")
    if not 1 <= page_size <= max_page_size:
        raise ValidationError.single(
            "page_size", f"page_size must be between 1 and {max_page_size}"
        )
    if filter_column and filter_column not in FILTERABLE_COLUMNS:
        raise ValidationError.single(
            "column",
            f"column must be one of: {', '.join(sorted(FILTERABLE_COLUMNS))}",
        )
    return ListQuery(
        page=page,
        page_size=page_size,
        filter_column=filter_column or None,
        filter_text=filter_text or None,
    )
