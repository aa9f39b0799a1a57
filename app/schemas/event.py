"""
Event, venue and planner schemas.
"""

import datetime
from pydantic import Field

from app.schemas.base import BaseSchema, RecordSchema, ListResponse


class VenueBase(BaseSchema):
    name: str = Field(..., min_length=1, max_length=255)
    address: str | None = None
    city: str | None = None
    state: str | None = None
    zip_code: str | None = None
    website: str | None = None


class VenueCreate(VenueBase):
    pass


class VenueResponse(VenueBase, RecordSchema):
    pass


class PlannerBase(BaseSchema):
    company: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    email: str | None = None
    phone: str | None = None
    instagram: str | None = None


class PlannerCreate(PlannerBase):
    pass


class PlannerResponse(PlannerBase, RecordSchema):
    pass


class EventBase(BaseSchema):
    """Base event schema."""

    client_id: int
    name: str = Field(..., min_length=1, max_length=255)
    type: str | None = None
    date: datetime.date
    guest_count: int | None = Field(None, ge=0)
    start_time: str | None = Field(None, max_length=8)
    end_time: str | None = Field(None, max_length=8)
    setup_time: str | None = Field(None, max_length=8)
    arrive_venue_time: str | None = Field(None, max_length=8)
    venue_id: int | None = None
    planner_id: int | None = None
    venue_name: str | None = None
    venue_address: str | None = None
    venue_sub_location: str | None = None
    notes: str | None = None


class EventCreate(EventBase):
    pass


class EventResponse(EventBase, RecordSchema):
    pass


class EventListResponse(ListResponse):
    """Paginated event list response."""

    items: list[EventResponse]
