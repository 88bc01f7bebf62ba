"""In-memory fakes shared by the unit tests."""

from dataclasses import replace
from datetime import datetime, timedelta, timezone

from app.application.interfaces import ClientRepository
from app.domain.entities import Client, ListQuery, PageResult


class FakeClientRepository(ClientRepository):
    """In-memory fake repository. Stores copies so callers cannot mutate rows in place."""

    def __init__(self):
        self._rows: dict[int, Client] = {}
        self._next_id = 1
        self.update_calls = 0

    async def get_by_id(self, client_id: int, *, include_deleted: bool) -> Client | None:
        row = self._rows.get(client_id)
        if row is None or (row.deleted and not include_deleted):
            return None
        return replace(row)

    async def query(self, list_query: ListQuery, *, include_deleted: bool) -> PageResult[Client]:
        rows = [r for r in self._rows.values() if include_deleted or not r.deleted]
        if list_query.has_filter:
            needle = list_query.filter_text.lower()
            rows = [
                r for r in rows
                if needle in (getattr(r, list_query.filter_column) or "").lower()
            ]
        rows.sort(key=lambda r: (r.name, r.id))
        start = list_query.offset
        return PageResult(
            items=[replace(r) for r in rows[start : start + list_query.page_size]],
            total=len(rows),
            page=list_query.page,
            page_size=list_query.page_size,
        )

    async def create(self, client: Client) -> Client:
        stored = replace(client, id=self._next_id)
        self._next_id += 1
        self._rows[stored.id] = stored
        return replace(stored)

    async def update(self, client: Client) -> Client:
        if client.id not in self._rows:
            raise ValueError(f"Client {client.id} not found")
        self.update_calls += 1
        self._rows[client.id] = replace(client)
        return replace(client)


class TickingClock:
    """Deterministic clock: every call returns a time one second after the previous one."""

    def __init__(self, start: datetime | None = None):
        self._now = start or datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)
        self.calls: list[datetime] = []

    def __call__(self) -> datetime:
        current = self._now
        self._now += timedelta(seconds=1)
        self.calls.append(current)
        return current

    @property
    def last(self) -> datetime:
        return self.calls[-1]
