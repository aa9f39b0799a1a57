"""
Event, Venue and Planner models.
An event is what a quote prices; venue and planner are optional collaborators.
"""

from typing import Optional, TYPE_CHECKING
import datetime
from sqlalchemy import String, Text, ForeignKey, Integer, Date
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base import BaseModel

if TYPE_CHECKING:
    from app.models.client import Client


class Venue(BaseModel):
    """Venue where events take place."""

    __tablename__ = "venues"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    address: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    city: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    state: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    zip_code: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)
    website: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)

    def __repr__(self) -> str:
        return f"<Venue(id={self.id}, name='{self.name}')>"


class Planner(BaseModel):
    """Wedding/event planner who referred or coordinates an event."""

    __tablename__ = "planners"

    company: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    first_name: Mapped[Optional[str]] = mapped_column(String(120), nullable=True)
    last_name: Mapped[Optional[str]] = mapped_column(String(120), nullable=True)
    email: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    phone: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    instagram: Mapped[Optional[str]] = mapped_column(String(120), nullable=True)

    @property
    def full_name(self) -> str:
        return f"{self.first_name or ''} {self.last_name or ''}".strip()

    def __repr__(self) -> str:
        return f"<Planner(id={self.id}, company='{self.company}')>"


class Event(BaseModel):
    """
    Event model.

    Attributes:
        client_id: Foreign key to the client
        name: Event name (e.g. Smith Wedding)
        type: Wedding, Corporate, ...
        date: Date of the main event
        start_time, end_time, setup_time, arrive_venue_time: "HH:MM" strings
        venue_id: Optional linked venue
        planner_id: Optional linked planner
        venue_name, venue_address, venue_sub_location: Free-text venue details,
            preferred over the linked venue when present
    """

    __tablename__ = "events"

    client_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("clients.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    venue_id: Mapped[Optional[int]] = mapped_column(
        Integer,
        ForeignKey("venues.id", ondelete="SET NULL"),
        nullable=True,
    )
    planner_id: Mapped[Optional[int]] = mapped_column(
        Integer,
        ForeignKey("planners.id", ondelete="SET NULL"),
        nullable=True,
    )

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    type: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    date: Mapped[datetime.date] = mapped_column(Date, nullable=False)
    guest_count: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)

    # Timeline
    start_time: Mapped[Optional[str]] = mapped_column(String(8), nullable=True)
    end_time: Mapped[Optional[str]] = mapped_column(String(8), nullable=True)
    setup_time: Mapped[Optional[str]] = mapped_column(String(8), nullable=True)
    arrive_venue_time: Mapped[Optional[str]] = mapped_column(String(8), nullable=True)

    # Venue overrides
    venue_name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    venue_address: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    venue_sub_location: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)

    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    # Relationships
    client: Mapped["Client"] = relationship(
        "Client",
        back_populates="events",
    )

    def __repr__(self) -> str:
        return f"<Event(id={self.id}, name='{self.name}', date={self.date})>"
