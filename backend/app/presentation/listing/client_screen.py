"""Client list screen — wires the generic ListEngine to the clients API.

The handlers here only move data between the API client and the view;
every rule about clients lives server-side in the lifecycle service.
"""

import logging
from typing import Any, Protocol

import httpx

from app.application.schemas.client import ClientDetail
from app.config import Settings, get_settings
from app.domain.exceptions import ClientsApiError
from app.infrastructure.http.clients_api_client import ClientsApiClient
from app.presentation.listing.debounce import TimerFactory
from app.presentation.listing.engine import ListActions, ListEngine, Row, RowMapper

logger = logging.getLogger(__name__)

CLIENT_FILTER_COLUMNS = ("name", "address", "phone")


class ClientView(Protocol):
    """Presentation surface the client screen drives (forms, modals, toasts)."""

    async def show_detail(self, client: ClientDetail) -> None: ...

    async def prompt_edit(self, client: ClientDetail) -> dict[str, Any] | None: ...

    async def prompt_new(self) -> dict[str, Any] | None: ...

    async def confirm_delete(self, client_id: int) -> bool: ...

    async def show_error(self, message: str) -> None: ...


class ClientRowMapper(RowMapper):
    """Listing rows show name and phone, as in the list projection."""

    def map_row(self, record: dict[str, Any]) -> Row:
        return Row(id=record["id"], cells=[record.get("name"), record.get("phone")])


def build_client_actions(api: ClientsApiClient, view: ClientView) -> ListActions:
    async def on_view(client_id: int) -> None:
        try:
            client = await api.get_client(client_id)
        except ClientsApiError as exc:
            await view.show_error(exc.message)
            return
        await view.show_detail(client)

    async def on_edit(client_id: int) -> bool:
        try:
            current = await api.get_client(client_id)
        except ClientsApiError as exc:
            await view.show_error(exc.message)
            return False
        changes = await view.prompt_edit(current)
        if changes is None:
            return False
        try:
            await api.update_client(client_id, changes)
        except ClientsApiError as exc:
            await view.show_error(exc.message)
            return False
        return True

    async def on_new() -> bool:
        fields = await view.prompt_new()
        if fields is None:
            return False
        try:
            created, location = await api.create_client(fields)
        except ClientsApiError as exc:
            await view.show_error(exc.message)
            return False
        logger.info("Created client %d at %s", created.id, location)
        return True

    async def on_delete(client_id: int) -> bool:
        if not await view.confirm_delete(client_id):
            return False
        try:
            await api.delete_client(client_id)
        except ClientsApiError as exc:
            await view.show_error(exc.message)
            return False
        return True

    return ListActions(on_view=on_view, on_edit=on_edit, on_new=on_new, on_delete=on_delete)


def build_client_list_engine(
    api: ClientsApiClient,
    view: ClientView,
    *,
    page_size: int = 20,
    debounce_seconds: float = 0.25,
    timer: TimerFactory | None = None,
    on_change=None,
) -> ListEngine:
    """A ListEngine for clients, filtering on name by default."""
    return ListEngine(
        source=api,
        mapper=ClientRowMapper(),
        actions=build_client_actions(api, view),
        page_size=page_size,
        default_column="name",
        debounce_seconds=debounce_seconds,
        timer=timer,
        on_change=on_change,
    )


def client_list_engine_from_settings(
    view: ClientView,
    *,
    settings: Settings | None = None,
    http_client: httpx.AsyncClient | None = None,
    on_change=None,
) -> ListEngine:
    """Client screen pointed at ``api_base_url`` with the configured page size and debounce."""
    settings = settings or get_settings()
    api = ClientsApiClient(settings.api_base_url, http_client=http_client)
    return build_client_list_engine(
        api,
        view,
        page_size=settings.default_page_size,
        debounce_seconds=settings.list_filter_debounce_ms / 1000,
        on_change=on_change,
    )
