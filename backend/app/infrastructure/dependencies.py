"""FastAPI dependency injection — wires infrastructure to application layer."""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import get_settings
from app.application.services import ClientService
from app.infrastructure.database.session import get_db_session
from app.infrastructure.database.repositories import SQLAlchemyClientRepository


async def get_client_service(
    # function scope: the unit of work commits before the response goes out
    session: AsyncSession = Depends(get_db_session, scope="function"),
) -> ClientService:
    """Provides a ClientService instance with its repository wired up."""
    settings = get_settings()
    repository = SQLAlchemyClientRepository(session)
    return ClientService(
        repository,
        default_page_size=settings.default_page_size,
        max_page_size=settings.max_page_size,
    )
