"""
Invoice endpoints.
Invoices are created by booking document generation, never directly.
"""

from fastapi import APIRouter, Query

from app.api.deps import DbSession
from app.schemas.invoice import InvoiceResponse, InvoiceScheduleItem
from app.services.event import EventService
from app.services.invoice import InvoiceService
from app.services.payment_schedule import build_invoice_schedule
from app.services.quote import QuoteService


router = APIRouter()


@router.get(
    "",
    response_model=list[InvoiceResponse],
    summary="List invoices of a quote",
)
async def list_invoices(
    db: DbSession,
    quote_id: int = Query(..., description="Quote the invoices were generated from"),
) -> list[InvoiceResponse]:
    invoices = await InvoiceService(db).list_by_quote(quote_id)
    return [InvoiceResponse.model_validate(i) for i in invoices]


@router.get(
    "/schedule",
    response_model=list[InvoiceScheduleItem],
    summary="Payment schedule of a quote",
    description="Invoices sorted by due date, or the default retainer/balance split when none exist",
)
async def get_invoice_schedule(
    db: DbSession,
    quote_id: int = Query(..., description="Quote to build the schedule for"),
) -> list[InvoiceScheduleItem]:
    quote = await QuoteService(db).get_or_404(quote_id)
    event = await EventService(db).get_event_or_404(quote.event_id) if quote.event_id else None
    invoices = await InvoiceService(db).list_by_quote(quote_id)
    return build_invoice_schedule(invoices, quote, event)


@router.get(
    "/{invoice_id}",
    response_model=InvoiceResponse,
    summary="Get an invoice",
)
async def get_invoice(
    invoice_id: int,
    db: DbSession,
) -> InvoiceResponse:
    invoice = await InvoiceService(db).get_or_404(invoice_id)
    return InvoiceResponse.model_validate(invoice)
