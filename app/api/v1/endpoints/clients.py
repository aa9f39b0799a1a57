"""
Client management endpoints.
CRUD operations for clients.
"""

from fastapi import APIRouter, Query, status

from app.api.deps import DbSession
from app.schemas.client import (
    ClientCreate,
    ClientUpdate,
    ClientResponse,
    ClientListResponse,
)
from app.services.client import ClientService


router = APIRouter()


@router.post(
    "",
    response_model=ClientResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a client",
)
async def create_client(
    data: ClientCreate,
    db: DbSession,
) -> ClientResponse:
    """Create a new client."""
    service = ClientService(db)
    client = await service.create(data)
    return ClientResponse.model_validate(client)


@router.get(
    "",
    response_model=ClientListResponse,
    summary="List clients",
    description="Paginated client list, optionally filtered by name or email",
)
async def list_clients(
    db: DbSession,
    page: int = Query(1, ge=1, description="Page number"),
    per_page: int = Query(20, ge=1, le=100, description="Items per page"),
    search: str | None = Query(None, description="Search by name or email"),
) -> ClientListResponse:
    """List all clients with pagination."""
    service = ClientService(db)
    skip = (page - 1) * per_page

    clients, total = await service.list(skip=skip, limit=per_page, search=search)

    return ClientListResponse(
        items=[ClientResponse.model_validate(c) for c in clients],
        total=total,
        page=page,
        per_page=per_page,
        pages=ClientListResponse.page_count(total, per_page),
    )


@router.get(
    "/{client_id}",
    response_model=ClientResponse,
    summary="Get a client",
)
async def get_client(
    client_id: int,
    db: DbSession,
) -> ClientResponse:
    service = ClientService(db)
    client = await service.get_or_404(client_id)
    return ClientResponse.model_validate(client)


@router.patch(
    "/{client_id}",
    response_model=ClientResponse,
    summary="Update a client",
)
async def update_client(
    client_id: int,
    data: ClientUpdate,
    db: DbSession,
) -> ClientResponse:
    service = ClientService(db)
    client = await service.get_or_404(client_id)
    client = await service.update(client, data)
    return ClientResponse.model_validate(client)
