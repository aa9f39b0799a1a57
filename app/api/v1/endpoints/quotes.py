"""
Quote management endpoints.
Saving a quote computes its financial snapshot and generates its booking documents.
"""

import logging
from fastapi import APIRouter, HTTPException, Query, status
from sqlalchemy.exc import SQLAlchemyError

from app.api.deps import DbSession
from app.models.quote import QuoteStatus
from app.schemas.booking import BookingResult
from app.schemas.financial import FinancialSummary, SummaryRequest
from app.schemas.quote import (
    QuoteCreate,
    QuoteUpdate,
    QuoteStatusUpdate,
    QuoteResponse,
    QuoteSaveResponse,
    QuoteListResponse,
)
from app.services.booking import BookingService
from app.services.quote import QuoteService


logger = logging.getLogger(__name__)

router = APIRouter()


def _save_failed() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail="Failed to save quote",
    )


@router.post(
    "",
    response_model=QuoteSaveResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Save a quote",
    description="Save a new quote and generate the booking documents its templates ask for",
)
async def create_quote(
    data: QuoteCreate,
    db: DbSession,
) -> QuoteSaveResponse:
    """Save a new quote."""
    service = QuoteService(db)
    try:
        quote, summary = await service.create(data)
        await db.commit()
        booking = await BookingService(db).generate_booking_documents(quote)
    except SQLAlchemyError as e:
        logger.error(f"Failed to save quote: {e}", exc_info=True)
        await db.rollback()
        raise _save_failed()

    return QuoteSaveResponse(
        quote=QuoteResponse.model_validate(quote),
        summary=summary,
        booking=booking,
    )


@router.get(
    "",
    response_model=QuoteListResponse,
    summary="List quotes",
    description="Paginated quote list",
)
async def list_quotes(
    db: DbSession,
    page: int = Query(1, ge=1, description="Page number"),
    per_page: int = Query(20, ge=1, le=100, description="Items per page"),
    status: QuoteStatus | None = Query(None, description="Filter by status"),
    client_id: int | None = Query(None, description="Filter by client"),
) -> QuoteListResponse:
    """List all quotes with pagination."""
    service = QuoteService(db)
    skip = (page - 1) * per_page

    quotes, total = await service.list(
        skip=skip,
        limit=per_page,
        status_filter=status,
        client_id=client_id,
    )

    return QuoteListResponse(
        items=[QuoteResponse.model_validate(q) for q in quotes],
        total=total,
        page=page,
        per_page=per_page,
        pages=QuoteListResponse.page_count(total, per_page),
    )


@router.post(
    "/summary",
    response_model=FinancialSummary,
    summary="Preview a financial summary",
    description="Compute totals, taxes and currency conversion without saving anything",
)
async def preview_summary(data: SummaryRequest) -> FinancialSummary:
    return QuoteService.preview_summary(data)


@router.get(
    "/{quote_id}",
    response_model=QuoteResponse,
    summary="Get a quote",
)
async def get_quote(
    quote_id: int,
    db: DbSession,
) -> QuoteResponse:
    service = QuoteService(db)
    quote = await service.get_or_404(quote_id)
    return QuoteResponse.model_validate(quote)


@router.get(
    "/{quote_id}/summary",
    response_model=FinancialSummary,
    summary="Financial summary of a saved quote",
)
async def get_quote_summary(
    quote_id: int,
    db: DbSession,
) -> FinancialSummary:
    service = QuoteService(db)
    quote = await service.get_or_404(quote_id)
    return service.summary_for(quote)


@router.patch(
    "/{quote_id}",
    response_model=QuoteSaveResponse,
    summary="Update a quote",
    description="Update a quote. Financial and template fields are frozen once documents exist.",
)
async def update_quote(
    quote_id: int,
    data: QuoteUpdate,
    db: DbSession,
) -> QuoteSaveResponse:
    service = QuoteService(db)
    quote = await service.get_or_404(quote_id)
    try:
        quote, summary = await service.update(quote, data)
        await db.commit()
        booking = await BookingService(db).generate_booking_documents(quote)
    except SQLAlchemyError as e:
        logger.error(f"Failed to save quote {quote_id}: {e}", exc_info=True)
        await db.rollback()
        raise _save_failed()

    return QuoteSaveResponse(
        quote=QuoteResponse.model_validate(quote),
        summary=summary,
        booking=booking,
    )


@router.post(
    "/{quote_id}/status",
    response_model=QuoteResponse,
    summary="Change quote status",
    description="draft -> sent -> accepted or rejected",
)
async def change_quote_status(
    quote_id: int,
    data: QuoteStatusUpdate,
    db: DbSession,
) -> QuoteResponse:
    service = QuoteService(db)
    quote = await service.get_or_404(quote_id)
    quote = await service.change_status(quote, data.status)
    return QuoteResponse.model_validate(quote)


@router.post(
    "/{quote_id}/booking-documents",
    response_model=BookingResult,
    summary="Generate booking documents",
    description=(
        "Generate invoices, contract and questionnaire for a quote. "
        "Existing documents are kept unless force_regenerate is set; "
        "invoices are never regenerated."
    ),
)
async def generate_booking_documents(
    quote_id: int,
    db: DbSession,
    force_regenerate: bool = Query(False, description="Overwrite the contract and questionnaire"),
) -> BookingResult:
    quote = await QuoteService(db).get_or_404(quote_id)
    return await BookingService(db).generate_booking_documents(quote, force_regenerate)
