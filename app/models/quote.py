"""
Quote model: a priced proposal for an event.
Owns its line items and the tax snapshot taken at save time.
"""

from typing import Optional, List
from decimal import Decimal
from datetime import date
from enum import Enum
from sqlalchemy import String, Text, ForeignKey, Integer, Boolean, Date, Enum as SQLEnum
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base import BaseModel, Money, Rate


class QuoteStatus(str, Enum):
    """Quote status enumeration."""
    DRAFT = "draft"
    SENT = "sent"
    ACCEPTED = "accepted"
    REJECTED = "rejected"


class CurrencyCode(str, Enum):
    """Currencies a quote can be displayed in. MXN is the base currency."""
    MXN = "MXN"
    USD = "USD"
    GBP = "GBP"
    EUR = "EUR"
    CAD = "CAD"


class DiscountType(str, Enum):
    """Global discount kind."""
    PERCENT = "percent"
    AMOUNT = "amount"


class Quote(BaseModel):
    """
    Quote model.

    Attributes:
        quote_number: Unique quote number (auto-generated)
        client_id: Foreign key to the client
        event_id: Foreign key to the event being priced
        status: draft -> sent -> accepted/rejected
        currency: Display currency
        exchange_rate: MXN per one unit of the display currency
        discount_type, discount_value: Global discount; the discount line is
            derived from these and never stored as an item
        subtotal, discount_amount: Snapshot from the financial summary
        total_amount: Grand total in MXN (base currency)
        total_foreign: Grand total in the display currency
        questionnaire_template_id, contract_template_id,
        payment_plan_template_id: Templates that drive document generation
    """

    __tablename__ = "quotes"

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
        index=True,
    )

    quote_number: Mapped[str] = mapped_column(
        String(50),
        unique=True,
        index=True,
        nullable=False,
    )
    status: Mapped[QuoteStatus] = mapped_column(
        SQLEnum(QuoteStatus),
        default=QuoteStatus.DRAFT,
        nullable=False,
    )
    valid_until: Mapped[Optional[date]] = mapped_column(
        Date,
        nullable=True,
    )
    notes: Mapped[Optional[str]] = mapped_column(
        Text,
        nullable=True,
    )

    # Currency
    currency: Mapped[CurrencyCode] = mapped_column(
        SQLEnum(CurrencyCode),
        default=CurrencyCode.MXN,
        nullable=False,
    )
    exchange_rate: Mapped[Decimal] = mapped_column(
        Rate(),
        default=Decimal("1"),
        nullable=False,
    )

    # Discount
    discount_type: Mapped[DiscountType] = mapped_column(
        SQLEnum(DiscountType),
        default=DiscountType.PERCENT,
        nullable=False,
    )
    discount_value: Mapped[Decimal] = mapped_column(
        Money(),
        default=Decimal("0"),
        nullable=False,
    )

    # Totals snapshot
    subtotal: Mapped[Decimal] = mapped_column(
        Money(),
        default=Decimal("0"),
        nullable=False,
    )
    discount_amount: Mapped[Decimal] = mapped_column(
        Money(),
        default=Decimal("0"),
        nullable=False,
    )
    total_amount: Mapped[Decimal] = mapped_column(
        Money(),
        default=Decimal("0"),
        nullable=False,
    )
    total_foreign: Mapped[Decimal] = mapped_column(
        Money(),
        default=Decimal("0"),
        nullable=False,
    )

    # Templates
    questionnaire_template_id: Mapped[Optional[str]] = mapped_column(
        String(64),
        nullable=True,
    )
    contract_template_id: Mapped[Optional[int]] = mapped_column(
        Integer,
        ForeignKey("templates.id", ondelete="SET NULL"),
        nullable=True,
    )
    payment_plan_template_id: Mapped[Optional[int]] = mapped_column(
        Integer,
        ForeignKey("payment_schedules.id", ondelete="SET NULL"),
        nullable=True,
    )

    # Relationships
    items: Mapped[List["QuoteItem"]] = relationship(
        "QuoteItem",
        back_populates="quote",
        cascade="all, delete-orphan",
        lazy="selectin",
        order_by="QuoteItem.position",
    )
    taxes: Mapped[List["QuoteTax"]] = relationship(
        "QuoteTax",
        back_populates="quote",
        cascade="all, delete-orphan",
        lazy="selectin",
    )

    @property
    def is_base_currency(self) -> bool:
        return self.currency == CurrencyCode.MXN

    @property
    def has_templates(self) -> bool:
        """Check if the quote references any document template."""
        return bool(
            self.questionnaire_template_id
            or self.contract_template_id
            or self.payment_plan_template_id
        )

    def __repr__(self) -> str:
        return f"<Quote(id={self.id}, number='{self.quote_number}', total={self.total_amount})>"


class QuoteItem(BaseModel):
    """
    Quote line item.

    Attributes:
        quote_id: Foreign key to the quote
        position: Display order
        description: Item description
        quantity: Number of units
        unit_price: Price per unit (MXN)
        cost: Cost of goods (MXN), informational only
        total: quantity * unit_price
        is_taxable: Whether the line contributes to the taxable base
    """

    __tablename__ = "quote_items"

    quote_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("quotes.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    position: Mapped[int] = mapped_column(
        Integer,
        default=0,
        nullable=False,
    )
    description: Mapped[str] = mapped_column(
        Text,
        nullable=False,
    )
    quantity: Mapped[Decimal] = mapped_column(
        Money(),
        default=Decimal("1"),
        nullable=False,
    )
    unit_price: Mapped[Decimal] = mapped_column(
        Money(),
        nullable=False,
    )
    cost: Mapped[Decimal] = mapped_column(
        Money(),
        default=Decimal("0"),
        nullable=False,
    )
    total: Mapped[Decimal] = mapped_column(
        Money(),
        nullable=False,
    )
    is_taxable: Mapped[bool] = mapped_column(
        Boolean,
        default=True,
        nullable=False,
    )

    quote: Mapped["Quote"] = relationship(
        "Quote",
        back_populates="items",
    )

    def __repr__(self) -> str:
        return f"<QuoteItem(id={self.id}, description='{self.description[:30]}...', total={self.total})>"


class QuoteTax(BaseModel):
    """
    Tax snapshot line, frozen when the quote is saved.
    Retention taxes are withheld (subtracted from the total).
    """

    __tablename__ = "quote_taxes"

    quote_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("quotes.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    name: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
    )
    rate: Mapped[Decimal] = mapped_column(
        Rate(),
        nullable=False,
    )
    amount: Mapped[Decimal] = mapped_column(
        Money(),
        nullable=False,
    )
    is_retention: Mapped[bool] = mapped_column(
        Boolean,
        default=False,
        nullable=False,
    )

    quote: Mapped["Quote"] = relationship(
        "Quote",
        back_populates="taxes",
    )

    def __repr__(self) -> str:
        return f"<QuoteTax(name='{self.name}', rate={self.rate}, amount={self.amount})>"
