"""
Venue endpoints.
"""

from fastapi import APIRouter, status

from app.api.deps import DbSession
from app.schemas.event import VenueCreate, VenueResponse
from app.services.event import EventService


router = APIRouter()


@router.post(
    "",
    response_model=VenueResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a venue",
)
async def create_venue(
    data: VenueCreate,
    db: DbSession,
) -> VenueResponse:
    venue = await EventService(db).create_venue(data)
    return VenueResponse.model_validate(venue)


@router.get(
    "",
    response_model=list[VenueResponse],
    summary="List venues",
)
async def list_venues(db: DbSession) -> list[VenueResponse]:
    venues = await EventService(db).list_venues()
    return [VenueResponse.model_validate(v) for v in venues]


@router.get(
    "/{venue_id}",
    response_model=VenueResponse,
    summary="Get a venue",
)
async def get_venue(
    venue_id: int,
    db: DbSession,
) -> VenueResponse:
    venue = await EventService(db).get_venue_or_404(venue_id)
    return VenueResponse.model_validate(venue)
