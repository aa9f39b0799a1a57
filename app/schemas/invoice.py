"""
Invoice schemas for request/response validation.
"""

from datetime import date, datetime
from decimal import Decimal

from app.schemas.base import BaseSchema, RecordSchema
from app.models.invoice import InvoiceStatus, InvoiceType


class InvoiceItemResponse(BaseSchema):
    """Invoice item response schema."""

    id: int
    description: str
    amount: Decimal


class InvoiceResponse(RecordSchema):
    """Invoice response schema."""

    quote_id: int | None
    client_id: int
    event_id: int | None
    invoice_number: str
    status: InvoiceStatus
    type: InvoiceType
    due_date: date | None
    total_amount: Decimal
    notes: str | None
    paid_at: datetime | None
    items: list[InvoiceItemResponse]


class InvoiceScheduleItem(BaseSchema):
    """Row of a payment schedule table, as shown in contracts."""

    label: str
    due_date: date | None = None
    due_date_label: str
    amount: Decimal
    status: str
