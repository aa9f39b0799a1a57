"""
Client model for the people booking events.
"""

from typing import Optional, List, TYPE_CHECKING
from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base import BaseModel

if TYPE_CHECKING:
    from app.models.event import Event


class Client(BaseModel):
    """
    Client model representing a customer.

    Attributes:
        first_name: Primary contact first name
        last_name: Primary contact last name
        email: Client's email address
        phone: Client's mobile number
        address: Billing street address
        city, state, zip_code: Structured location
        notes: Additional notes about the client
    """

    __tablename__ = "clients"

    first_name: Mapped[str] = mapped_column(
        String(120),
        nullable=False,
    )
    last_name: Mapped[str] = mapped_column(
        String(120),
        default="",
        nullable=False,
    )
    email: Mapped[Optional[str]] = mapped_column(
        String(255),
        nullable=True,
    )
    phone: Mapped[Optional[str]] = mapped_column(
        String(50),
        nullable=True,
    )
    address: Mapped[Optional[str]] = mapped_column(
        Text,
        nullable=True,
    )
    city: Mapped[Optional[str]] = mapped_column(
        String(100),
        nullable=True,
    )
    state: Mapped[Optional[str]] = mapped_column(
        String(100),
        nullable=True,
    )
    zip_code: Mapped[Optional[str]] = mapped_column(
        String(20),
        nullable=True,
    )
    notes: Mapped[Optional[str]] = mapped_column(
        Text,
        nullable=True,
    )

    # Relationships
    events: Mapped[List["Event"]] = relationship(
        "Event",
        back_populates="client",
    )

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    def __repr__(self) -> str:
        return f"<Client(id={self.id}, name='{self.full_name}')>"
