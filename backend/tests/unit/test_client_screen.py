"""Unit tests for the client list screen wiring."""

import json

import httpx
import pytest

from app.application.schemas.client import ClientDetail
from app.infrastructure.http.clients_api_client import ClientsApiClient
from app.presentation.listing.client_screen import (
    ClientRowMapper,
    build_client_list_engine,
    client_list_engine_from_settings,
)
from app.config import Settings


class FakeClientsServer:
    """Tiny stand-in for the HTTP API, enough to drive the screen."""

    def __init__(self):
        self.clients = {
            1: {"id": 1, "name": "Alice", "address": None, "age": 30, "phone": "555"},
            2: {"id": 2, "name": "Bob", "address": None, "age": None, "phone": None},
        }
        self.requests: list[tuple[str, str]] = []
        self.store_down_on_delete = False

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append((request.method, request.url.path))
        parts = request.url.path.rstrip("/").split("/")
        if request.method == "GET" and parts[-1] == "clients":
            items = [
                {"id": c["id"], "name": c["name"], "phone": c["phone"]}
                for c in sorted(self.clients.values(), key=lambda c: c["name"])
            ]
            return httpx.Response(200, json={"items": items, "total": len(items), "page": 1, "page_size": 20})
        if request.method == "GET":
            client = self.clients.get(int(parts[-1]))
            if client is None:
                return httpx.Response(404, json={"detail": "not found"})
            return httpx.Response(
                200,
                json={**client, "created_at": "2024-01-01T00:00:00Z", "last_modified_at": "2024-01-01T00:00:00Z"},
            )
        if request.method == "PUT":
            payload = json.loads(request.content)
            if not payload.get("name"):
                return httpx.Response(400, json={"error": {"message": "name: name is required"}})
            self.clients[int(parts[-1])].update(payload)
            return httpx.Response(204)
        if request.method == "POST":
            new_id = max(self.clients) + 1
            payload = json.loads(request.content)
            self.clients[new_id] = {"id": new_id, "address": None, "age": None, "phone": None, **payload}
            return httpx.Response(
                201,
                json={"id": new_id, "name": payload["name"], "phone": None},
                headers={"Location": f"/api/v1/clients/{new_id}"},
            )
        if request.method == "DELETE":
            if self.store_down_on_delete:
                return httpx.Response(
                    503, json={"error": {"code": "STORE_ERROR", "message": "The record store is unavailable"}}
                )
            self.clients.pop(int(parts[-1]))
            return httpx.Response(204)
        return httpx.Response(405)


class FakeView:
    def __init__(self, edit=None, new=None, confirm=True):
        self.shown: list[ClientDetail] = []
        self.errors: list[str] = []
        self._edit = edit
        self._new = new
        self._confirm = confirm

    async def show_detail(self, client: ClientDetail) -> None:
        self.shown.append(client)

    async def prompt_edit(self, client: ClientDetail):
        return self._edit

    async def prompt_new(self):
        return self._new

    async def confirm_delete(self, client_id: int) -> bool:
        return self._confirm

    async def show_error(self, message: str) -> None:
        self.errors.append(message)


def _screen(server: FakeClientsServer, view: FakeView):
    api = ClientsApiClient(
        base_url="http://test",
        http_client=httpx.AsyncClient(transport=httpx.MockTransport(server)),
    )
    return build_client_list_engine(api, view)


def test_row_mapper_shows_name_and_phone():
    row = ClientRowMapper().map_row({"id": 4, "name": "Dora", "phone": None})
    assert row.id == 4
    assert row.cells == ["Dora", None]


@pytest.mark.asyncio
async def test_view_opens_detail():
    server = FakeClientsServer()
    view = FakeView()
    engine = _screen(server, view)
    await engine.load_page()

    await engine.open_row(1)

    assert view.shown[0].name == "Alice"


@pytest.mark.asyncio
async def test_edit_updates_and_reloads():
    server = FakeClientsServer()
    engine = _screen(server, FakeView(edit={"name": "Alicia", "phone": "555"}))
    await engine.load_page()
    engine.select(1)

    assert await engine.edit_selected() is True

    assert engine.state.rows[0].cells == ["Alicia", "555"]


@pytest.mark.asyncio
async def test_rejected_edit_shows_error_and_keeps_page():
    server = FakeClientsServer()
    view = FakeView(edit={"name": ""})
    engine = _screen(server, view)
    await engine.load_page()
    engine.select(1)

    assert await engine.edit_selected() is False

    assert view.errors == ["name: name is required"]
    assert [m for m, _ in server.requests].count("GET") == 2


@pytest.mark.asyncio
async def test_new_and_delete_resync_the_list():
    server = FakeClientsServer()
    engine = _screen(server, FakeView(new={"name": "Carol"}))
    await engine.load_page()

    await engine.new()
    assert [r.cells[0] for r in engine.state.rows] == ["Alice", "Bob", "Carol"]

    engine.select(2)
    await engine.delete_selected()
    assert [r.cells[0] for r in engine.state.rows] == ["Alice", "Carol"]
    assert engine.state.total == 2


@pytest.mark.asyncio
async def test_declined_delete_sends_nothing():
    server = FakeClientsServer()
    engine = _screen(server, FakeView(confirm=False))
    await engine.load_page()
    engine.select(2)

    assert await engine.delete_selected() is False
    assert ("DELETE", "/api/v1/clients/2") not in server.requests


@pytest.mark.asyncio
async def test_viewing_a_client_removed_elsewhere_shows_error():
    server = FakeClientsServer()
    view = FakeView()
    engine = _screen(server, view)
    await engine.load_page()
    del server.clients[2]

    await engine.open_row(2)

    assert view.shown == []
    assert view.errors == ["not found"]


@pytest.mark.asyncio
async def test_editing_a_client_removed_elsewhere_shows_error_without_prompt():
    server = FakeClientsServer()
    view = FakeView(edit={"name": "Robert"})
    engine = _screen(server, view)
    await engine.load_page()
    engine.select(2)
    del server.clients[2]

    assert await engine.edit_selected() is False

    assert view.errors == ["not found"]
    assert not any(method == "PUT" for method, _ in server.requests)


@pytest.mark.asyncio
async def test_failed_delete_shows_error_and_skips_reload():
    server = FakeClientsServer()
    server.store_down_on_delete = True
    view = FakeView()
    engine = _screen(server, view)
    await engine.load_page()
    engine.select(2)

    assert await engine.delete_selected() is False

    assert view.errors == ["The record store is unavailable"]
    assert [m for m, _ in server.requests] == ["GET", "DELETE"]
    assert [r.cells[0] for r in engine.state.rows] == ["Alice", "Bob"]


@pytest.mark.asyncio
async def test_engine_from_settings_uses_configured_listing_defaults():
    server = FakeClientsServer()
    settings = Settings(
        _env_file=None,
        api_base_url="http://registry.test",
        default_page_size=5,
        list_filter_debounce_ms=100,
    )
    http_client = httpx.AsyncClient(transport=httpx.MockTransport(server))

    engine = client_list_engine_from_settings(FakeView(), settings=settings, http_client=http_client)
    await engine.load_page()

    assert engine.query.page_size == 5
    assert engine.debouncer.delay == pytest.approx(0.1)
    assert [row.id for row in engine.state.rows] == [1, 2]
    assert server.requests == [("GET", "/api/v1/clients")]
    await http_client.aclose()
