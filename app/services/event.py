"""
Event service.
Handles events and the venues and planners they reference.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func
from fastapi import HTTPException, status

from app.models.client import Client
from app.models.event import Event, Venue, Planner
from app.schemas.event import EventCreate, VenueCreate, PlannerCreate


class EventService:
    """Service for event, venue and planner operations."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def _exists(self, model, record_id: int) -> bool:
        result = await self.db.execute(select(model.id).where(model.id == record_id))
        return result.scalar_one_or_none() is not None

    async def _get_or_404(self, model, record_id: int, label: str):
        result = await self.db.execute(select(model).where(model.id == record_id))
        record = result.scalar_one_or_none()
        if not record:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=f"{label} not found",
            )
        return record

    async def create_event(self, data: EventCreate) -> Event:
        """
        Create a new event.

        Raises:
            HTTPException: If the client, venue or planner does not exist
        """
        references = [(Client, data.client_id, "Client")]
        if data.venue_id is not None:
            references.append((Venue, data.venue_id, "Venue"))
        if data.planner_id is not None:
            references.append((Planner, data.planner_id, "Planner"))

        for model, record_id, label in references:
            if not await self._exists(model, record_id):
                raise HTTPException(
                    status_code=status.HTTP_404_NOT_FOUND,
                    detail=f"{label} not found",
                )

        event = Event(**data.model_dump())
        self.db.add(event)
        await self.db.flush()
        await self.db.refresh(event)

        return event

    async def get_event_or_404(self, event_id: int) -> Event:
        return await self._get_or_404(Event, event_id, "Event")

    async def list_events(
        self,
        skip: int = 0,
        limit: int = 20,
        client_id: int | None = None,
    ) -> tuple[list[Event], int]:
        """
        List events by date.

        Returns:
            Tuple of (events list, total count)
        """
        query = select(Event)
        count_query = select(func.count(Event.id))

        if client_id:
            query = query.where(Event.client_id == client_id)
            count_query = count_query.where(Event.client_id == client_id)

        total_result = await self.db.execute(count_query)
        total = total_result.scalar() or 0

        result = await self.db.execute(query.order_by(Event.date).offset(skip).limit(limit))
        return list(result.scalars().all()), total

    async def create_venue(self, data: VenueCreate) -> Venue:
        venue = Venue(**data.model_dump())
        self.db.add(venue)
        await self.db.flush()
        await self.db.refresh(venue)
        return venue

    async def get_venue_or_404(self, venue_id: int) -> Venue:
        return await self._get_or_404(Venue, venue_id, "Venue")

    async def list_venues(self) -> list[Venue]:
        result = await self.db.execute(select(Venue).order_by(Venue.name))
        return list(result.scalars().all())

    async def create_planner(self, data: PlannerCreate) -> Planner:
        planner = Planner(**data.model_dump())
        self.db.add(planner)
        await self.db.flush()
        await self.db.refresh(planner)
        return planner

    async def get_planner_or_404(self, planner_id: int) -> Planner:
        return await self._get_or_404(Planner, planner_id, "Planner")

    async def list_planners(self) -> list[Planner]:
        result = await self.db.execute(
            select(Planner).order_by(Planner.company, Planner.last_name)
        )
        return list(result.scalars().all())
