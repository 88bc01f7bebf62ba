"""Client CRUD endpoints — list, get, create, update and soft delete."""

from fastapi import APIRouter, Depends, HTTPException, Query, Request, Response, status

from app.application.schemas.client import (
    ClientCreate,
    ClientDetail,
    ClientListItem,
    ClientPage,
    ClientUpdate,
)
from app.application.services import ClientService
from app.domain.exceptions import EntityNotFoundError
from app.infrastructure.dependencies import get_client_service

router = APIRouter(prefix="/clients", tags=["Clients"])


@router.get("", response_model=ClientPage)
async def list_clients(
    page: int = Query(1, ge=1),
    page_size: int | None = Query(None, ge=1),
    column: str | None = Query(None, description="Column to filter on (name, address, phone)"),
    search: str | None = Query(None, description="Case-insensitive substring to match"),
    service: ClientService = Depends(get_client_service),
) -> ClientPage:
    """Retrieve one page of live clients ordered by name."""
    result = await service.list_clients(
        page=page,
        page_size=page_size,
        filter_column=column,
        filter_text=search,
    )
    return ClientPage(
        items=[ClientListItem.model_validate(c, from_attributes=True) for c in result.items],
        total=result.total,
        page=result.page,
        page_size=result.page_size,
    )


@router.get("/{client_id}", response_model=ClientDetail)
async def get_client(
    client_id: int,
    service: ClientService = Depends(get_client_service),
) -> ClientDetail:
    """Retrieve a single client with its audit timestamps."""
    try:
        client = await service.get_client(client_id)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return ClientDetail.model_validate(client, from_attributes=True)


@router.post("", response_model=ClientListItem, status_code=status.HTTP_201_CREATED)
async def create_client(
    data: ClientCreate,
    request: Request,
    response: Response,
    service: ClientService = Depends(get_client_service),
) -> ClientListItem:
    """Create a new client and point to it with a Location header."""
    client = await service.create_client(data)
    response.headers["Location"] = request.url_for("get_client", client_id=client.id).path
    return ClientListItem.model_validate(client, from_attributes=True)


@router.put("/{client_id}", status_code=status.HTTP_204_NO_CONTENT)
async def update_client(
    client_id: int,
    data: ClientUpdate,
    service: ClientService = Depends(get_client_service),
) -> None:
    """Replace the business fields of an existing client."""
    try:
        await service.update_client(client_id, data)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.delete("/{client_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_client(
    client_id: int,
    service: ClientService = Depends(get_client_service),
) -> None:
    """Soft-delete a client. The row is kept and hidden from every read."""
    try:
        await service.delete_client(client_id)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
