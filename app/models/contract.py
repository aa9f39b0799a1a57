"""
Contract model: hydrated contract generated from a quote.
"""

from typing import Optional
from datetime import datetime
from enum import Enum
from sqlalchemy import String, Text, ForeignKey, Integer, DateTime, Enum as SQLEnum
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base import BaseModel


class ContractStatus(str, Enum):
    """Contract status enumeration."""
    DRAFT = "draft"
    SENT = "sent"
    SIGNED = "signed"


class Contract(BaseModel):
    """
    Contract model.

    Attributes:
        quote_id: Quote the contract was generated from
        client_id: Foreign key to the client
        event_id: Foreign key to the event
        template_id: Template the content was hydrated from
        content: Hydrated HTML
        status: draft -> sent -> signed
        document_version: Incremented on forced regeneration
    """

    __tablename__ = "contracts"

    quote_id: Mapped[Optional[int]] = mapped_column(
        Integer,
        ForeignKey("quotes.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    client_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("clients.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    event_id: Mapped[Optional[int]] = mapped_column(
        Integer,
        ForeignKey("events.id", ondelete="SET NULL"),
        nullable=True,
    )
    template_id: Mapped[Optional[int]] = mapped_column(
        Integer,
        ForeignKey("templates.id", ondelete="SET NULL"),
        nullable=True,
    )

    content: Mapped[str] = mapped_column(
        Text,
        default="",
        nullable=False,
    )
    status: Mapped[ContractStatus] = mapped_column(
        SQLEnum(ContractStatus),
        default=ContractStatus.DRAFT,
        nullable=False,
    )
    document_version: Mapped[int] = mapped_column(
        Integer,
        default=1,
        nullable=False,
    )

    # Signature
    signed_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )
    signed_by: Mapped[Optional[str]] = mapped_column(
        String(255),
        nullable=True,
    )

    def __repr__(self) -> str:
        return f"<Contract(id={self.id}, quote_id={self.quote_id}, version={self.document_version})>"
