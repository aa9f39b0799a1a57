"""
Payment schedule service.

Expands a payment plan's milestones against a quote total and event date into
dated installments, and builds the schedule table shown on contracts.
"""

import logging
from datetime import date, timedelta
from decimal import Decimal, InvalidOperation
from typing import Any, Iterable, Sequence
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from fastapi import HTTPException, status

from app.core.formatters import format_long_date, format_short_date
from app.models.invoice import Invoice
from app.models.event import Event
from app.models.quote import Quote
from app.models.template import PaymentSchedule
from app.schemas.invoice import InvoiceScheduleItem
from app.schemas.template import DueRule, PaymentScheduleCreate, ResolvedInstallment


logger = logging.getLogger(__name__)

HUNDRED = Decimal("100")
RETAINER_SHARE = Decimal("0.35")
BALANCE_DAYS_BEFORE_EVENT = 10


def _as_decimal(value: Any) -> Decimal:
    """Parse a stored milestone number; unparseable values become NaN."""
    if isinstance(value, bool):
        return Decimal("NaN")
    try:
        return Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        return Decimal("NaN")


def _as_days(value: Any) -> int:
    try:
        return int(value or 0)
    except (TypeError, ValueError):
        logger.warning(f"Invalid milestone day offset {value!r}, using 0")
        return 0


def milestone_amount(milestone: dict[str, Any], quote_total: Decimal) -> Decimal:
    """
    Amount for one milestone.

    A ``percentage`` wins; otherwise ``value`` is a percentage when
    ``type == "percentage"`` and a fixed amount when not. Missing or invalid
    numbers are coerced to 0 and logged.
    """
    percentage = milestone.get("percentage")
    value = milestone.get("value")

    if percentage is not None and percentage != "":
        amount = quote_total * _as_decimal(percentage) / HUNDRED
    elif milestone.get("type") == "percentage" and value:
        amount = quote_total * _as_decimal(value) / HUNDRED
    elif value:
        amount = _as_decimal(value)
    else:
        amount = None

    if amount is None or not amount.is_finite():
        logger.warning(
            f"Invalid amount for milestone {milestone.get('name')!r}: {milestone}, using 0"
        )
        return Decimal("0")
    return amount


def milestone_due_date(milestone: dict[str, Any], event_date: date, today: date) -> date:
    """Due date for a milestone. Custom and unknown rules fall due today."""
    due_type = milestone.get("due_type", milestone.get("dueType"))
    days = _as_days(milestone.get("days_offset", milestone.get("daysOffset")))

    if due_type == DueRule.BEFORE_EVENT.value:
        return event_date - timedelta(days=days)
    if due_type == DueRule.AFTER_EVENT.value:
        return event_date + timedelta(days=days)
    return today


def resolve_payment_schedule(
    milestones: Iterable[dict[str, Any]],
    quote_total: Decimal,
    event_date: date,
    today: date | None = None,
) -> list[ResolvedInstallment]:
    """
    Resolve milestones into installments, in template order.

    ``quote_total`` is in the base currency; no conversion happens here.
    Milestones are raw stored dicts, so both ``due_type``/``days_offset``
    and the older ``dueType``/``daysOffset`` keys are read.
    """
    today = today or date.today()
    return [
        ResolvedInstallment(
            sequence=index,
            name=milestone.get("name") or f"Payment {index}",
            amount=milestone_amount(milestone, quote_total),
            due_date=milestone_due_date(milestone, event_date, today),
        )
        for index, milestone in enumerate(milestones, start=1)
    ]


def build_invoice_schedule(
    invoices: Sequence[Invoice],
    quote: Quote | None = None,
    event: Event | None = None,
) -> list[InvoiceScheduleItem]:
    """
    Schedule rows for display, sorted by due date.

    Without invoices, a default retainer/balance split of the quote total is
    shown instead.
    """
    if invoices:
        ordered = sorted(invoices, key=lambda i: i.due_date or date.min)
        return [
            InvoiceScheduleItem(
                label=invoice.label,
                due_date=invoice.due_date,
                due_date_label=format_short_date(invoice.due_date) if invoice.due_date else "Due on issue",
                amount=invoice.total_amount,
                status=invoice.status.value,
            )
            for invoice in ordered
        ]

    if quote is None:
        return []

    retainer = quote.total_amount * RETAINER_SHARE
    balance = quote.total_amount - retainer

    balance_due = None
    balance_label = f"{BALANCE_DAYS_BEFORE_EVENT} days prior to event"
    if event is not None and event.date:
        balance_due = event.date - timedelta(days=BALANCE_DAYS_BEFORE_EVENT)
        balance_label = format_long_date(balance_due)

    return [
        InvoiceScheduleItem(
            label="Retainer (35%)",
            due_date_label="Upon Booking",
            amount=retainer,
            status="pending",
        ),
        InvoiceScheduleItem(
            label="Balance (65%)",
            due_date=balance_due,
            due_date_label=balance_label,
            amount=balance,
            status="pending",
        ),
    ]


class PaymentScheduleService:
    """Service for payment plan templates."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create(self, data: PaymentScheduleCreate) -> PaymentSchedule:
        """Create a payment plan. Milestones are stored as plain JSON dicts."""
        if data.is_default:
            await self._clear_default()

        schedule = PaymentSchedule(
            name=data.name,
            description=data.description,
            is_default=data.is_default,
            milestones=[
                m.model_dump(mode="json", exclude_none=True)
                for m in data.milestones
            ],
        )
        self.db.add(schedule)
        await self.db.flush()
        await self.db.refresh(schedule)

        logger.info(f"Payment schedule created: {schedule.name} ({len(schedule.milestones)} milestones)")
        return schedule

    async def _clear_default(self) -> None:
        result = await self.db.execute(
            select(PaymentSchedule).where(PaymentSchedule.is_default.is_(True))
        )
        for schedule in result.scalars().all():
            schedule.is_default = False

    async def get_by_id(self, schedule_id: int) -> PaymentSchedule | None:
        result = await self.db.execute(
            select(PaymentSchedule).where(PaymentSchedule.id == schedule_id)
        )
        return result.scalar_one_or_none()

    async def get_or_404(self, schedule_id: int) -> PaymentSchedule:
        schedule = await self.get_by_id(schedule_id)
        if not schedule:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Payment schedule not found",
            )
        return schedule

    async def preview(
        self,
        schedule_id: int,
        quote_total: Decimal,
        event_date: date,
    ) -> list[ResolvedInstallment]:
        """Resolve a stored plan against a hypothetical total and date."""
        schedule = await self.get_or_404(schedule_id)
        return resolve_payment_schedule(schedule.milestones, quote_total, event_date)

    async def list(self) -> list[PaymentSchedule]:
        result = await self.db.execute(
            select(PaymentSchedule).order_by(PaymentSchedule.name)
        )
        return list(result.scalars().all())
