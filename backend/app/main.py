"""FastAPI application factory."""

import logging
from contextlib import asynccontextmanager
from collections.abc import AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy import func, select

from app.config import get_settings
from app.domain.entities import utc_now
from app.infrastructure.database import Base, ClientModel, engine
from app.infrastructure.database.session import async_session_factory
from app.infrastructure.logging.log_config import setup_logging
from app.presentation.api.error_handlers import register_error_handlers
from app.presentation.api.router import router as api_router

logger = logging.getLogger(__name__)

SAMPLE_CLIENTS = (
    {"name": "João Silva", "address": "Rua das Flores, 123", "age": 35, "phone": "(11) 98765-4321"},
    {"name": "Maria Santos", "address": "Av. Paulista, 1000", "age": 28, "phone": "(11) 91234-5678"},
    {"name": "Pedro Oliveira", "address": "Rua Augusta, 500", "age": 42, "phone": "(11) 99876-5432"},
)


async def _ensure_database_exists() -> None:
    """Create the PostgreSQL database if it does not yet exist.

    Connects to the default ``postgres`` maintenance database, checks for the
    target database name, and issues ``CREATE DATABASE`` when missing.
    """
    from urllib.parse import urlparse

    import asyncpg

    settings = get_settings()
    if not settings.database_url.startswith("postgresql"):
        return
    parsed = urlparse(settings.database_url)
    db_name = parsed.path.lstrip("/")
    if not db_name:
        return

    maintenance_url = settings.database_url.rsplit("/", 1)[0] + "/postgres"

    try:
        conn = await asyncpg.connect(maintenance_url)
        try:
            exists = await conn.fetchval(
                "SELECT 1 FROM pg_database WHERE datname = $1", db_name
            )
            if not exists:
                # CREATE DATABASE cannot run inside a transaction block
                await conn.execute(f'CREATE DATABASE "{db_name}"')
                logger.info("Created database '%s'", db_name)
            else:
                logger.debug("Database '%s' already exists", db_name)
        finally:
            await conn.close()
    except Exception as exc:
        logger.warning("Could not auto-create database '%s': %s", db_name, exc)


async def _seed_sample_clients() -> None:
    """Insert the sample clients when the table is empty.

    Idempotent — safe to call on every startup.
    """
    try:
        async with async_session_factory() as session:
            count = (
                await session.execute(select(func.count()).select_from(ClientModel))
            ).scalar_one()
            if count:
                logger.debug("Clients table already has %d rows; skipping seed", count)
                return
            now = utc_now()
            session.add_all(
                ClientModel(**sample, created_at=now, last_modified_at=now, deleted=False)
                for sample in SAMPLE_CLIENTS
            )
            await session.commit()
            logger.info("Seeded %d sample clients", len(SAMPLE_CLIENTS))
    except Exception as exc:
        logger.warning("Could not seed sample clients: %s", exc)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan — create the database and tables, optionally seed."""
    settings = get_settings()
    setup_logging()

    await _ensure_database_exists()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    if settings.seed_sample_data:
        await _seed_sample_clients()

    yield

    await engine.dispose()


def create_app() -> FastAPI:
    """Factory function that builds and configures the FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title=settings.app_title,
        version=settings.app_version,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["Location"],
    )

    register_error_handlers(app)
    app.include_router(api_router)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "app.main:app",
        host="0.0.0.0",
        port=8020,
        reload=True,
    )
