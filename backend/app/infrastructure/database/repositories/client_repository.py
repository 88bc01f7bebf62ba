"""Concrete repository implementation for Client backed by SQLAlchemy."""

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import datetime, timezone

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.interfaces import ClientRepository
from app.domain.entities import Client, ListQuery, PageResult
from app.domain.exceptions import StoreError
from app.infrastructure.database.models import ClientModel

logger = logging.getLogger(__name__)

_FILTER_COLUMNS = {
    "name": ClientModel.name,
    "address": ClientModel.address,
    "phone": ClientModel.phone,
}


def _as_utc(value: datetime) -> datetime:
    """SQLite hands back naive datetimes; treat them as the UTC they were written as."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


@contextmanager
def _store_errors(operation: str) -> Iterator[None]:
    """Translate SQLAlchemy failures into the domain StoreError."""
    try:
        yield
    except SQLAlchemyError as exc:
        logger.error("Client store failure during %s: %s", operation, exc)
        raise StoreError(operation, str(exc)) from exc


class SQLAlchemyClientRepository(ClientRepository):
    """Implements the ClientRepository port using SQLAlchemy async sessions."""

    def __init__(self, session: AsyncSession):
        self._session = session

    def _to_entity(self, model: ClientModel) -> Client:
        """Map ORM model → domain entity."""
        return Client(
            id=model.id,
            name=model.name,
            address=model.address,
            age=model.age,
            phone=model.phone,
            created_at=_as_utc(model.created_at),
            last_modified_at=_as_utc(model.last_modified_at),
            deleted=model.deleted,
        )

    def _to_model(self, entity: Client) -> ClientModel:
        """Map domain entity → ORM model (for creation)."""
        return ClientModel(
            name=entity.name,
            address=entity.address,
            age=entity.age,
            phone=entity.phone,
            created_at=entity.created_at,
            last_modified_at=entity.last_modified_at,
            deleted=entity.deleted,
        )

    async def _load(self, client_id: int, *, include_deleted: bool) -> ClientModel | None:
        stmt = select(ClientModel).where(ClientModel.id == client_id)
        if not include_deleted:
            stmt = stmt.where(ClientModel.deleted.is_(False))
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_id(self, client_id: int, *, include_deleted: bool) -> Client | None:
        with _store_errors("get"):
            model = await self._load(client_id, include_deleted=include_deleted)
        return self._to_entity(model) if model else None

    async def query(
        self, list_query: ListQuery, *, include_deleted: bool
    ) -> PageResult[Client]:
        stmt = select(ClientModel)

        if not include_deleted:
            stmt = stmt.where(ClientModel.deleted.is_(False))
        if list_query.has_filter:
            column = _FILTER_COLUMNS.get(list_query.filter_column)
            if column is None:
                raise ValueError(f"Column '{list_query.filter_column}' is not filterable")
            stmt = stmt.where(column.icontains(list_query.filter_text, autoescape=True))

        count_stmt = select(func.count()).select_from(stmt.subquery())
        page_stmt = (
            stmt.order_by(ClientModel.name, ClientModel.id)
            .offset(list_query.offset)
            .limit(list_query.page_size)
        )

        with _store_errors("query"):
            total = (await self._session.execute(count_stmt)).scalar_one()
            result = await self._session.execute(page_stmt)
            rows = result.scalars().all()

        return PageResult(
            items=[self._to_entity(row) for row in rows],
            total=total,
            page=list_query.page,
            page_size=list_query.page_size,
        )

    async def create(self, client: Client) -> Client:
        model = self._to_model(client)
        with _store_errors("create"):
            self._session.add(model)
            await self._session.flush()
        return self._to_entity(model)

    async def update(self, client: Client) -> Client:
        with _store_errors("update"):
            model = await self._load(client.id, include_deleted=True)
            if model is None:
                raise StoreError("update", f"Client {client.id} not found in database")
            model.name = client.name
            model.address = client.address
            model.age = client.age
            model.phone = client.phone
            model.last_modified_at = client.last_modified_at
            model.deleted = client.deleted
            await self._session.flush()
        return self._to_entity(model)
