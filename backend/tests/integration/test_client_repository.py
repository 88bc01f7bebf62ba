"""Integration tests for SQLAlchemyClientRepository against in-memory SQLite."""

from datetime import datetime, timedelta, timezone

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from app.domain.entities import Client, ListQuery
from app.domain.exceptions import StoreError
from app.infrastructure.database.repositories import SQLAlchemyClientRepository

T0 = datetime(2024, 3, 1, 9, 30, tzinfo=timezone.utc)


def _client(name: str, **fields) -> Client:
    return Client(name=name, created_at=T0, last_modified_at=T0, **fields)


@pytest_asyncio.fixture
async def session(session_factory):
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def repository(session):
    return SQLAlchemyClientRepository(session)


@pytest.mark.asyncio
async def test_create_assigns_id_and_persists_audit_fields(repository):
    created = await repository.create(_client("Ana", phone="555-0101", age=30))

    assert created.id is not None
    loaded = await repository.get_by_id(created.id, include_deleted=False)
    assert loaded.name == "Ana"
    assert loaded.phone == "555-0101"
    assert loaded.age == 30
    assert loaded.created_at == T0
    assert loaded.last_modified_at == T0
    assert loaded.deleted is False


@pytest.mark.asyncio
async def test_get_by_id_unknown_returns_none(repository):
    assert await repository.get_by_id(404, include_deleted=True) is None


@pytest.mark.asyncio
async def test_deleted_row_only_visible_with_include_deleted(repository):
    created = await repository.create(_client("Bruno"))
    created.deleted = True
    created.last_modified_at = T0 + timedelta(minutes=5)
    await repository.update(created)

    assert await repository.get_by_id(created.id, include_deleted=False) is None
    hidden = await repository.get_by_id(created.id, include_deleted=True)
    assert hidden.deleted is True
    assert hidden.last_modified_at == T0 + timedelta(minutes=5)


@pytest.mark.asyncio
async def test_update_never_rewrites_created_at(repository):
    created = await repository.create(_client("Carla"))
    created.name = "Carla Souza"
    created.created_at = T0 + timedelta(days=1)
    created.last_modified_at = T0 + timedelta(hours=1)

    updated = await repository.update(created)

    assert updated.name == "Carla Souza"
    assert updated.created_at == T0
    assert updated.last_modified_at == T0 + timedelta(hours=1)


@pytest.mark.asyncio
async def test_update_of_missing_row_raises_store_error(repository):
    ghost = _client("Ghost", id=999)

    with pytest.raises(StoreError):
        await repository.update(ghost)


@pytest.mark.asyncio
async def test_query_orders_by_name_and_counts_all_matches(repository):
    for name in ("Davi", "Ana", "Caio", "Bia", "Eva"):
        await repository.create(_client(name))

    first = await repository.query(ListQuery(page=1, page_size=2), include_deleted=False)
    third = await repository.query(ListQuery(page=3, page_size=2), include_deleted=False)

    assert first.total == 5
    assert [c.name for c in first.items] == ["Ana", "Bia"]
    assert [c.name for c in third.items] == ["Eva"]
    assert third.page_count == 3


@pytest.mark.asyncio
async def test_query_filter_is_case_insensitive_substring(repository):
    await repository.create(_client("Maria Santos", address="Rua Augusta"))
    await repository.create(_client("Mário Lima", address="Av. Paulista"))
    await repository.create(_client("João Silva", address="rua das flores"))

    result = await repository.query(
        ListQuery(filter_column="address", filter_text="RUA"), include_deleted=False
    )

    assert result.total == 2
    assert sorted(c.name for c in result.items) == ["João Silva", "Maria Santos"]


@pytest.mark.asyncio
async def test_query_filter_treats_wildcards_literally(repository):
    await repository.create(_client("100% Real"))
    await repository.create(_client("1000 Reais"))

    result = await repository.query(
        ListQuery(filter_column="name", filter_text="0%"), include_deleted=False
    )

    assert [c.name for c in result.items] == ["100% Real"]


@pytest.mark.asyncio
async def test_query_excludes_deleted_unless_requested(repository):
    await repository.create(_client("Ana"))
    gone = await repository.create(_client("Beto"))
    gone.deleted = True
    await repository.update(gone)

    live = await repository.query(ListQuery(), include_deleted=False)
    everything = await repository.query(ListQuery(), include_deleted=True)

    assert [c.name for c in live.items] == ["Ana"]
    assert live.total == 1
    assert everything.total == 2


@pytest.mark.asyncio
async def test_missing_table_surfaces_as_store_error():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    try:
        async with factory() as session:
            repository = SQLAlchemyClientRepository(session)
            with pytest.raises(StoreError) as exc_info:
                await repository.query(ListQuery(), include_deleted=False)
        assert exc_info.value.operation == "query"
    finally:
        await engine.dispose()
