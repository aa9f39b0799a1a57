"""
Event endpoints.
"""

from fastapi import APIRouter, Query, status

from app.api.deps import DbSession
from app.schemas.event import EventCreate, EventResponse, EventListResponse
from app.services.event import EventService


router = APIRouter()


@router.post(
    "",
    response_model=EventResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create an event",
)
async def create_event(
    data: EventCreate,
    db: DbSession,
) -> EventResponse:
    service = EventService(db)
    event = await service.create_event(data)
    return EventResponse.model_validate(event)


@router.get(
    "",
    response_model=EventListResponse,
    summary="List events",
    description="Paginated event list ordered by event date",
)
async def list_events(
    db: DbSession,
    page: int = Query(1, ge=1, description="Page number"),
    per_page: int = Query(20, ge=1, le=100, description="Items per page"),
    client_id: int | None = Query(None, description="Filter by client"),
) -> EventListResponse:
    service = EventService(db)
    events, total = await service.list_events(
        skip=(page - 1) * per_page,
        limit=per_page,
        client_id=client_id,
    )
    return EventListResponse(
        items=[EventResponse.model_validate(e) for e in events],
        total=total,
        page=page,
        per_page=per_page,
        pages=EventListResponse.page_count(total, per_page),
    )


@router.get(
    "/{event_id}",
    response_model=EventResponse,
    summary="Get an event",
)
async def get_event(
    event_id: int,
    db: DbSession,
) -> EventResponse:
    service = EventService(db)
    event = await service.get_event_or_404(event_id)
    return EventResponse.model_validate(event)
