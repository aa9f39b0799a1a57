"""
Quote service.
Handles quote saving, financial snapshots and status transitions.
"""

import logging
from datetime import date
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func
from fastapi import HTTPException, status

from app.models.client import Client
from app.models.contract import Contract
from app.models.event import Event
from app.models.invoice import Invoice
from app.models.questionnaire import Questionnaire
from app.models.quote import Quote, QuoteItem, QuoteTax, QuoteStatus
from app.schemas.financial import (
    LineItem,
    DiscountSpec,
    TaxSelection,
    FinancialSummary,
    SummaryRequest,
)
from app.schemas.quote import QuoteCreate, QuoteUpdate
from app.services.financial import compute_summary, regular_items


logger = logging.getLogger(__name__)

# Allowed status transitions
STATUS_TRANSITIONS = {
    QuoteStatus.DRAFT: {QuoteStatus.SENT},
    QuoteStatus.SENT: {QuoteStatus.ACCEPTED, QuoteStatus.REJECTED},
    QuoteStatus.ACCEPTED: set(),
    QuoteStatus.REJECTED: set(),
}

# Fields that change the financial snapshot
FINANCIAL_FIELDS = {"currency", "exchange_rate", "items", "discount", "taxes"}

# Fields frozen once booking documents exist
LOCKED_FIELDS = {
    "event_id",
    "currency",
    "exchange_rate",
    "items",
    "discount",
    "taxes",
    "questionnaire_template_id",
    "contract_template_id",
    "payment_plan_template_id",
}


class QuoteService:
    """Service for quote operations."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def _generate_quote_number(self) -> str:
        """
        Generate unique quote number.
        Format: QT-{year}-{sequence}
        """
        current_year = date.today().year
        prefix = f"QT-{current_year}-"

        result = await self.db.execute(
            select(func.count(Quote.id)).where(
                Quote.quote_number.like(f"{prefix}%"),
            )
        )
        count = result.scalar() or 0

        return f"{prefix}{str(count + 1).zfill(5)}"

    async def _check_references(self, client_id: int, event_id: int | None) -> None:
        client_result = await self.db.execute(
            select(Client.id).where(Client.id == client_id)
        )
        if client_result.scalar_one_or_none() is None:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Client not found",
            )

        if event_id is None:
            return

        event_result = await self.db.execute(
            select(Event.client_id).where(Event.id == event_id)
        )
        event_client_id = event_result.scalar_one_or_none()
        if event_client_id is None:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Event not found",
            )
        if event_client_id != client_id:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Event belongs to another client",
            )

    def _apply_summary(
        self,
        quote: Quote,
        items: list[LineItem],
        discount: DiscountSpec,
        summary: FinancialSummary,
    ) -> None:
        """Snapshot a computed summary onto the quote. The discount line is not stored."""
        quote.currency = summary.currency
        quote.exchange_rate = summary.exchange_rate
        quote.discount_type = discount.type
        quote.discount_value = discount.value
        quote.subtotal = summary.subtotal
        quote.discount_amount = summary.discount_amount
        quote.total_amount = summary.total_mxn
        quote.total_foreign = summary.total_foreign

        quote.items = [
            QuoteItem(
                position=position,
                description=item.description,
                quantity=item.quantity,
                unit_price=item.unit_price,
                cost=item.cost,
                total=item.total,
                is_taxable=item.is_taxable is not False,
            )
            for position, item in enumerate(regular_items(items))
        ]
        quote.taxes = [
            QuoteTax(
                name=tax.name,
                rate=tax.rate,
                amount=tax.amount,
                is_retention=tax.is_retention,
            )
            for tax in summary.tax_amounts
        ]

    async def create(self, data: QuoteCreate) -> tuple[Quote, FinancialSummary]:
        """
        Save a new quote.

        Computes the financial summary and snapshots totals, items and
        taxes onto the quote.

        Returns:
            Tuple of (created quote, summary)
        """
        await self._check_references(data.client_id, data.event_id)

        summary = compute_summary(
            data.items,
            data.discount,
            data.taxes,
            data.currency,
            data.exchange_rate,
        )

        quote = Quote(
            client_id=data.client_id,
            event_id=data.event_id,
            quote_number=await self._generate_quote_number(),
            status=data.status,
            valid_until=data.valid_until,
            notes=data.notes,
            questionnaire_template_id=data.questionnaire_template_id,
            contract_template_id=data.contract_template_id,
            payment_plan_template_id=data.payment_plan_template_id,
        )
        self._apply_summary(quote, data.items, data.discount, summary)

        self.db.add(quote)
        await self.db.flush()
        await self.db.refresh(quote)

        logger.info(f"Quote saved: {quote.quote_number} total={quote.total_amount} MXN")
        return quote, summary

    async def get_by_id(self, quote_id: int) -> Quote | None:
        result = await self.db.execute(
            select(Quote).where(Quote.id == quote_id)
        )
        return result.scalar_one_or_none()

    async def get_or_404(self, quote_id: int) -> Quote:
        """
        Get quote by ID or raise 404.

        Raises:
            HTTPException: If quote not found
        """
        quote = await self.get_by_id(quote_id)
        if not quote:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Quote not found",
            )
        return quote

    async def has_artifacts(self, quote_id: int) -> bool:
        """Check if any booking document was generated from the quote."""
        for model in (Invoice, Contract, Questionnaire):
            result = await self.db.execute(
                select(func.count(model.id)).where(model.quote_id == quote_id)
            )
            if result.scalar():
                return True
        return False

    async def update(self, quote: Quote, data: QuoteUpdate) -> tuple[Quote, FinancialSummary]:
        """
        Update a quote.

        Financial and template fields are frozen once booking documents
        exist; only notes and validity can still change.
        """
        update_data = data.model_dump(exclude_unset=True)
        locked = LOCKED_FIELDS.intersection(update_data)
        if locked and await self.has_artifacts(quote.id):
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Quote has generated documents and can no longer be changed",
            )

        if "event_id" in update_data:
            await self._check_references(quote.client_id, data.event_id)
            quote.event_id = data.event_id
        for field in (
            "valid_until",
            "notes",
            "questionnaire_template_id",
            "contract_template_id",
            "payment_plan_template_id",
        ):
            if field in update_data:
                setattr(quote, field, update_data[field])

        if not FINANCIAL_FIELDS.intersection(update_data):
            await self.db.flush()
            await self.db.refresh(quote)
            return quote, self.summary_for(quote)

        items = data.items if data.items is not None else self.stored_items(quote)
        discount = data.discount or DiscountSpec(type=quote.discount_type, value=quote.discount_value)
        taxes = data.taxes if data.taxes is not None else self.stored_taxes(quote)
        currency = data.currency or quote.currency
        if data.exchange_rate is not None:
            exchange_rate = data.exchange_rate
        elif data.currency is not None and data.currency != quote.currency:
            exchange_rate = None
        else:
            exchange_rate = quote.exchange_rate

        summary = compute_summary(items, discount, taxes, currency, exchange_rate)
        self._apply_summary(quote, items, discount, summary)

        await self.db.flush()
        await self.db.refresh(quote)

        logger.info(f"Quote updated: {quote.quote_number} total={quote.total_amount} MXN")
        return quote, summary

    async def change_status(self, quote: Quote, new_status: QuoteStatus) -> Quote:
        """Move a quote along draft -> sent -> accepted/rejected."""
        if new_status not in STATUS_TRANSITIONS[quote.status]:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"Cannot change quote status from {quote.status.value} to {new_status.value}",
            )

        quote.status = new_status
        await self.db.flush()
        await self.db.refresh(quote)

        logger.info(f"Quote {quote.quote_number} is now {new_status.value}")
        return quote

    @staticmethod
    def stored_items(quote: Quote) -> list[LineItem]:
        return [
            LineItem(
                id=str(item.id),
                description=item.description,
                quantity=item.quantity,
                unit_price=item.unit_price,
                cost=item.cost,
                total=item.total,
                is_taxable=item.is_taxable,
            )
            for item in quote.items
        ]

    @staticmethod
    def stored_taxes(quote: Quote) -> list[TaxSelection]:
        return [
            TaxSelection(name=tax.name, rate=tax.rate, is_retention=tax.is_retention)
            for tax in quote.taxes
        ]

    def summary_for(self, quote: Quote) -> FinancialSummary:
        """Recompute the summary of a stored quote."""
        return compute_summary(
            self.stored_items(quote),
            DiscountSpec(type=quote.discount_type, value=quote.discount_value),
            self.stored_taxes(quote),
            quote.currency,
            quote.exchange_rate,
        )

    @staticmethod
    def preview_summary(data: SummaryRequest) -> FinancialSummary:
        """Compute a summary without persisting anything."""
        return compute_summary(
            data.items,
            data.discount,
            data.taxes,
            data.currency,
            data.exchange_rate,
        )

    async def list(
        self,
        skip: int = 0,
        limit: int = 20,
        status_filter: QuoteStatus | None = None,
        client_id: int | None = None,
    ) -> tuple[list[Quote], int]:
        """
        List quotes with pagination and filters.

        Returns:
            Tuple of (quotes list, total count)
        """
        query = select(Quote)
        count_query = select(func.count(Quote.id))

        if status_filter:
            query = query.where(Quote.status == status_filter)
            count_query = count_query.where(Quote.status == status_filter)

        if client_id:
            query = query.where(Quote.client_id == client_id)
            count_query = count_query.where(Quote.client_id == client_id)

        total_result = await self.db.execute(count_query)
        total = total_result.scalar() or 0

        query = query.order_by(Quote.created_at.desc(), Quote.id.desc()).offset(skip).limit(limit)
        result = await self.db.execute(query)
        quotes = list(result.scalars().all())

        return quotes, total
