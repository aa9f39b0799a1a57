"""
Quote schemas for request/response validation.
"""

from datetime import date, datetime
from decimal import Decimal
from pydantic import Field

from app.schemas.base import BaseSchema, ListResponse
from app.schemas.booking import BookingResult
from app.schemas.financial import LineItem, DiscountSpec, TaxSelection, FinancialSummary
from app.models.quote import QuoteStatus, CurrencyCode, DiscountType


class QuoteItemResponse(BaseSchema):
    """Quote item response schema."""

    id: int
    position: int
    description: str
    quantity: Decimal
    unit_price: Decimal
    cost: Decimal
    total: Decimal
    is_taxable: bool


class QuoteTaxResponse(BaseSchema):
    name: str
    rate: Decimal
    amount: Decimal
    is_retention: bool


class QuoteTemplates(BaseSchema):
    """Templates that drive booking document generation."""

    questionnaire_template_id: str | None = None
    contract_template_id: int | None = None
    payment_plan_template_id: int | None = None


class QuoteCreate(QuoteTemplates):
    """Schema for saving a new quote."""

    client_id: int
    event_id: int | None = None
    valid_until: date | None = None
    notes: str | None = None
    currency: CurrencyCode = CurrencyCode.MXN
    exchange_rate: Decimal | None = Field(None, gt=0)
    items: list[LineItem] = Field(default_factory=list)
    discount: DiscountSpec = Field(default_factory=DiscountSpec)
    taxes: list[TaxSelection] = Field(default_factory=list)
    status: QuoteStatus = QuoteStatus.DRAFT


class QuoteUpdate(BaseSchema):
    """
    Schema for updating a quote.
    Financial fields are recomputed together; any of them triggers a new summary.
    """

    event_id: int | None = None
    valid_until: date | None = None
    notes: str | None = None
    currency: CurrencyCode | None = None
    exchange_rate: Decimal | None = Field(None, gt=0)
    items: list[LineItem] | None = None
    discount: DiscountSpec | None = None
    taxes: list[TaxSelection] | None = None
    questionnaire_template_id: str | None = None
    contract_template_id: int | None = None
    payment_plan_template_id: int | None = None


class QuoteStatusUpdate(BaseSchema):
    status: QuoteStatus


class QuoteResponse(QuoteTemplates):
    """Quote response schema."""

    id: int
    quote_number: str
    client_id: int
    event_id: int | None
    status: QuoteStatus
    valid_until: date | None
    notes: str | None
    currency: CurrencyCode
    exchange_rate: Decimal
    discount_type: DiscountType
    discount_value: Decimal
    subtotal: Decimal
    discount_amount: Decimal
    total_amount: Decimal
    total_foreign: Decimal
    items: list[QuoteItemResponse]
    taxes: list[QuoteTaxResponse]
    created_at: datetime
    updated_at: datetime


class QuoteSaveResponse(BaseSchema):
    """Saved quote plus the outcome of booking document generation."""

    quote: QuoteResponse
    summary: FinancialSummary
    booking: BookingResult | None = None


class QuoteListResponse(ListResponse):
    """Paginated quote list response."""

    items: list[QuoteResponse]
