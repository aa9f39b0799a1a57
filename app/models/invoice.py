"""
Invoice and InvoiceItem models.
Invoices are generated from a quote's payment plan, one per milestone.
"""

from typing import Optional, List
from decimal import Decimal
from datetime import date, datetime
from enum import Enum
from sqlalchemy import String, Text, ForeignKey, Integer, Date, DateTime, Enum as SQLEnum
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base import BaseModel, Money


class InvoiceStatus(str, Enum):
    """Invoice status enumeration."""
    DRAFT = "draft"
    SENT = "sent"
    PAID = "paid"
    OVERDUE = "overdue"
    CANCELLED = "cancelled"


class InvoiceType(str, Enum):
    STANDARD = "standard"


class Invoice(BaseModel):
    """
    Invoice model.

    Attributes:
        quote_id: Quote the invoice was generated from (lookup only, no cascade)
        client_id: Foreign key to the client
        event_id: Foreign key to the event
        invoice_number: Document number
        status: Current invoice status
        due_date: Payment due date
        total_amount: Amount due, in MXN
        paid_at: When the invoice was paid
    """

    __tablename__ = "invoices"

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

    invoice_number: Mapped[str] = mapped_column(
        String(50),
        index=True,
        nullable=False,
    )
    status: Mapped[InvoiceStatus] = mapped_column(
        SQLEnum(InvoiceStatus),
        default=InvoiceStatus.DRAFT,
        nullable=False,
    )
    type: Mapped[InvoiceType] = mapped_column(
        SQLEnum(InvoiceType),
        default=InvoiceType.STANDARD,
        nullable=False,
    )
    due_date: Mapped[Optional[date]] = mapped_column(
        Date,
        nullable=True,
    )
    total_amount: Mapped[Decimal] = mapped_column(
        Money(),
        default=Decimal("0"),
        nullable=False,
    )
    notes: Mapped[Optional[str]] = mapped_column(
        Text,
        nullable=True,
    )
    paid_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )

    items: Mapped[List["InvoiceItem"]] = relationship(
        "InvoiceItem",
        back_populates="invoice",
        cascade="all, delete-orphan",
        lazy="selectin",
    )

    @property
    def is_paid(self) -> bool:
        return self.status == InvoiceStatus.PAID

    @property
    def label(self) -> str:
        """First item description, falling back to the invoice number."""
        if self.items:
            return self.items[0].description
        return self.invoice_number

    def __repr__(self) -> str:
        return f"<Invoice(id={self.id}, number='{self.invoice_number}', total={self.total_amount})>"


class InvoiceItem(BaseModel):
    """Invoice line: a description and an amount."""

    __tablename__ = "invoice_items"

    invoice_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("invoices.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    description: Mapped[str] = mapped_column(
        Text,
        nullable=False,
    )
    amount: Mapped[Decimal] = mapped_column(
        Money(),
        nullable=False,
    )

    invoice: Mapped["Invoice"] = relationship(
        "Invoice",
        back_populates="items",
    )

    def __repr__(self) -> str:
        return f"<InvoiceItem(id={self.id}, description='{self.description[:30]}...', amount={self.amount})>"
