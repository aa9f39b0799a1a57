"""
Booking document generation.

Derives invoices, a contract and a questionnaire from a saved quote. Each
artifact kind is generated at most once per quote; the existence check by
``quote_id`` immediately before the insert is the only guard, so two
concurrent runs for the same quote can still race.
"""

import logging
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func

from app.core.formatters import format_document_id
from app.models.contract import Contract, ContractStatus
from app.models.event import Event
from app.models.invoice import Invoice, InvoiceItem, InvoiceStatus, InvoiceType
from app.models.questionnaire import Questionnaire, QuestionnaireStatus
from app.models.quote import Quote
from app.models.template import (
    PaymentSchedule,
    Template,
    TemplateType,
    SYSTEM_QUESTIONNAIRE_TEMPLATE,
)
from app.schemas.booking import ArtifactKind, ArtifactOutcome, ArtifactStatus, BookingResult
from app.services.contract import ContractService, hydrate_contract_content
from app.services.payment_schedule import resolve_payment_schedule


logger = logging.getLogger(__name__)

SYSTEM_QUESTIONNAIRE_TITLE = "New Booking Questionnaire"


class BookingService:
    """
    Service for booking document generation.

    Artifacts are generated sequentially (invoices, contract, questionnaire)
    since the contract's payment schedule reads the invoices created first.
    Every artifact is committed on its own: a later failure never rolls back
    an earlier artifact. Database errors propagate to the caller.
    """

    def __init__(self, db: AsyncSession):
        self.db = db
        self.contracts = ContractService(db)

    async def generate_booking_documents(
        self,
        quote: Quote,
        force_regenerate: bool = False,
    ) -> BookingResult:
        """
        Generate every document the quote's templates ask for.

        Args:
            quote: Persisted quote
            force_regenerate: Overwrite an existing contract or questionnaire.
                Invoices are never regenerated.

        Returns:
            Per-artifact outcomes
        """
        logger.info(f"Generating booking documents for quote {quote.id}")

        result = BookingResult(quote_id=quote.id)
        result.outcomes.append(await self._generate_invoices(quote, force_regenerate))
        result.outcomes.append(await self._generate_contract(quote, force_regenerate))
        result.outcomes.append(await self._generate_questionnaire(quote, force_regenerate))
        return result

    async def _count_invoices(self, quote_id: int) -> int:
        result = await self.db.execute(
            select(func.count(Invoice.id)).where(Invoice.quote_id == quote_id)
        )
        return result.scalar() or 0

    async def _generate_invoices(self, quote: Quote, force_regenerate: bool) -> ArtifactOutcome:
        kind = ArtifactKind.INVOICES
        if not quote.payment_plan_template_id:
            return ArtifactOutcome(kind=kind, status=ArtifactStatus.SKIPPED_NOT_REQUESTED)

        existing = await self._count_invoices(quote.id)
        if existing:
            if force_regenerate:
                # Possibly paid; never overwritten
                logger.warning(f"Quote {quote.id}: refusing to regenerate {existing} existing invoices")
                reason = "Existing invoices are never regenerated"
            else:
                logger.info(f"Quote {quote.id}: invoices already exist, skipping")
                reason = "Invoices already exist"
            return ArtifactOutcome(kind=kind, status=ArtifactStatus.SKIPPED_EXISTS, reason=reason)

        result = await self.db.execute(
            select(PaymentSchedule).where(PaymentSchedule.id == quote.payment_plan_template_id)
        )
        schedule = result.scalar_one_or_none()
        if schedule is None:
            logger.warning(f"Quote {quote.id}: payment schedule {quote.payment_plan_template_id} not found")
            return ArtifactOutcome(
                kind=kind,
                status=ArtifactStatus.SKIPPED_MISSING_TEMPLATE,
                reason="Payment schedule not found",
            )

        event = None
        if quote.event_id is not None:
            result = await self.db.execute(select(Event).where(Event.id == quote.event_id))
            event = result.scalar_one_or_none()
        if event is None:
            logger.warning(f"Quote {quote.id}: no event, cannot date invoices")
            return ArtifactOutcome(
                kind=kind,
                status=ArtifactStatus.FAILED,
                reason="Quote has no event to schedule payments against",
            )

        # total_amount is already in the base currency
        installments = resolve_payment_schedule(schedule.milestones, quote.total_amount, event.date)

        invoices = [
            Invoice(
                quote_id=quote.id,
                client_id=quote.client_id,
                event_id=quote.event_id,
                invoice_number=format_document_id("INV", event.date, quote.id, installment.sequence),
                status=InvoiceStatus.DRAFT,
                type=InvoiceType.STANDARD,
                due_date=installment.due_date,
                total_amount=installment.amount,
                items=[InvoiceItem(description=installment.name, amount=installment.amount)],
            )
            for installment in installments
        ]
        self.db.add_all(invoices)
        await self.db.flush()
        await self.db.commit()

        logger.info(f"Quote {quote.id}: generated {len(invoices)} invoices")
        return ArtifactOutcome(
            kind=kind,
            status=ArtifactStatus.CREATED,
            record_ids=[invoice.id for invoice in invoices],
        )

    async def _generate_contract(self, quote: Quote, force_regenerate: bool) -> ArtifactOutcome:
        kind = ArtifactKind.CONTRACT
        if not quote.contract_template_id:
            return ArtifactOutcome(kind=kind, status=ArtifactStatus.SKIPPED_NOT_REQUESTED)

        existing = await self.contracts.get_by_quote(quote.id)
        if existing and not force_regenerate:
            logger.info(f"Quote {quote.id}: contract already exists, skipping")
            return ArtifactOutcome(
                kind=kind,
                status=ArtifactStatus.SKIPPED_EXISTS,
                reason="Contract already exists",
                record_ids=[existing.id],
            )

        result = await self.db.execute(
            select(Template).where(
                Template.id == quote.contract_template_id,
                Template.type == TemplateType.CONTRACT,
            )
        )
        template = result.scalar_one_or_none()
        if template is None:
            logger.warning(f"Quote {quote.id}: contract template {quote.contract_template_id} not found")
            return ArtifactOutcome(
                kind=kind,
                status=ArtifactStatus.SKIPPED_MISSING_TEMPLATE,
                reason="Contract template not found",
            )

        context = await self.contracts.load_context(quote.client_id, quote.event_id, quote.id)
        content = hydrate_contract_content(template.content, context)

        if existing:
            existing.template_id = template.id
            existing.content = content
            existing.status = ContractStatus.DRAFT
            existing.signed_at = None
            existing.signed_by = None
            existing.document_version += 1
            contract, outcome_status = existing, ArtifactStatus.REGENERATED
        else:
            contract = Contract(
                quote_id=quote.id,
                client_id=quote.client_id,
                event_id=quote.event_id,
                template_id=template.id,
                content=content,
                status=ContractStatus.DRAFT,
                document_version=1,
            )
            self.db.add(contract)
            outcome_status = ArtifactStatus.CREATED

        await self.db.flush()
        await self.db.commit()

        logger.info(f"Quote {quote.id}: contract {outcome_status.value} (version {contract.document_version})")
        return ArtifactOutcome(kind=kind, status=outcome_status, record_ids=[contract.id])

    async def _questionnaire_title(self, template_id: str) -> str | None:
        """Title for a questionnaire template id, or None when it does not exist."""
        if template_id == SYSTEM_QUESTIONNAIRE_TEMPLATE:
            return SYSTEM_QUESTIONNAIRE_TITLE
        try:
            record_id = int(template_id)
        except ValueError:
            return None

        result = await self.db.execute(
            select(Template).where(
                Template.id == record_id,
                Template.type == TemplateType.QUESTIONNAIRE,
            )
        )
        template = result.scalar_one_or_none()
        return template.name if template else None

    async def _generate_questionnaire(self, quote: Quote, force_regenerate: bool) -> ArtifactOutcome:
        kind = ArtifactKind.QUESTIONNAIRE
        if not quote.questionnaire_template_id:
            return ArtifactOutcome(kind=kind, status=ArtifactStatus.SKIPPED_NOT_REQUESTED)

        result = await self.db.execute(
            select(Questionnaire).where(Questionnaire.quote_id == quote.id).order_by(Questionnaire.id)
        )
        existing = result.scalars().first()
        if existing and not force_regenerate:
            logger.info(f"Quote {quote.id}: questionnaire already exists, skipping")
            return ArtifactOutcome(
                kind=kind,
                status=ArtifactStatus.SKIPPED_EXISTS,
                reason="Questionnaire already exists",
                record_ids=[existing.id],
            )

        title = await self._questionnaire_title(quote.questionnaire_template_id)
        if title is None:
            logger.warning(
                f"Quote {quote.id}: questionnaire template {quote.questionnaire_template_id} not found"
            )
            return ArtifactOutcome(
                kind=kind,
                status=ArtifactStatus.SKIPPED_MISSING_TEMPLATE,
                reason="Questionnaire template not found",
            )

        if existing:
            existing.template_id = quote.questionnaire_template_id
            existing.title = title
            existing.status = QuestionnaireStatus.PENDING
            existing.completed_at = None
            questionnaire, outcome_status = existing, ArtifactStatus.REGENERATED
        else:
            questionnaire = Questionnaire(
                quote_id=quote.id,
                client_id=quote.client_id,
                event_id=quote.event_id,
                template_id=quote.questionnaire_template_id,
                title=title,
                status=QuestionnaireStatus.PENDING,
            )
            self.db.add(questionnaire)
            outcome_status = ArtifactStatus.CREATED

        await self.db.flush()
        await self.db.commit()

        logger.info(f"Quote {quote.id}: questionnaire {outcome_status.value}")
        return ArtifactOutcome(kind=kind, status=outcome_status, record_ids=[questionnaire.id])
