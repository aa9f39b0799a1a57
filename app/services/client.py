"""
Client service.
Handles client CRUD operations.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func
from fastapi import HTTPException, status

from app.models.client import Client
from app.schemas.client import ClientCreate, ClientUpdate


class ClientService:
    """Service for client operations."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create(self, data: ClientCreate) -> Client:
        """
        Create a new client.

        Args:
            data: Client data

        Returns:
            Created client
        """
        client = Client(**data.model_dump())

        self.db.add(client)
        await self.db.flush()
        await self.db.refresh(client)

        return client

    async def get_by_id(self, client_id: int) -> Client | None:
        result = await self.db.execute(
            select(Client).where(Client.id == client_id)
        )
        return result.scalar_one_or_none()

    async def get_or_404(self, client_id: int) -> Client:
        """
        Get client by ID or raise 404.

        Raises:
            HTTPException: If client not found
        """
        client = await self.get_by_id(client_id)
        if not client:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Client not found",
            )
        return client

    async def update(self, client: Client, data: ClientUpdate) -> Client:
        update_data = data.model_dump(exclude_unset=True)

        for field, value in update_data.items():
            setattr(client, field, value)

        await self.db.flush()
        await self.db.refresh(client)

        return client

    async def list(
        self,
        skip: int = 0,
        limit: int = 20,
        search: str | None = None,
    ) -> tuple[list[Client], int]:
        """
        List clients with pagination and search.

        Args:
            skip: Number of records to skip
            limit: Maximum records to return
            search: Search term for name/email

        Returns:
            Tuple of (clients list, total count)
        """
        query = select(Client)
        count_query = select(func.count(Client.id))

        if search:
            search_filter = f"%{search}%"
            condition = (
                Client.first_name.ilike(search_filter)
                | Client.last_name.ilike(search_filter)
                | Client.email.ilike(search_filter)
            )
            query = query.where(condition)
            count_query = count_query.where(condition)

        total_result = await self.db.execute(count_query)
        total = total_result.scalar() or 0

        query = query.order_by(Client.last_name, Client.first_name).offset(skip).limit(limit)
        result = await self.db.execute(query)
        clients = list(result.scalars().all())

        return clients, total
