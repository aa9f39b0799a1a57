"""
Booking document generation tests.
"""

from datetime import date
from decimal import Decimal

import pytest
from sqlalchemy import select, func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.contract import Contract, ContractStatus
from app.models.invoice import Invoice
from app.models.questionnaire import Questionnaire, QuestionnaireStatus
from app.models.quote import Quote, CurrencyCode, DiscountType
from app.models.template import SYSTEM_QUESTIONNAIRE_TEMPLATE
from app.schemas.booking import ArtifactKind, ArtifactStatus
from app.services.booking import BookingService


async def make_quote(db: AsyncSession, client_id: int, event_id: int | None, **templates) -> Quote:
    quote = Quote(
        client_id=client_id,
        event_id=event_id,
        quote_number=f"QT-TEST-{client_id}-{event_id}-{len(templates)}",
        currency=CurrencyCode.MXN,
        exchange_rate=Decimal("1"),
        discount_type=DiscountType.PERCENT,
        discount_value=Decimal("0"),
        subtotal=Decimal("10000"),
        discount_amount=Decimal("0"),
        total_amount=Decimal("10000"),
        total_foreign=Decimal("10000"),
        **templates,
    )
    db.add(quote)
    await db.commit()
    await db.refresh(quote)
    return quote


async def count(db: AsyncSession, model, quote_id: int) -> int:
    result = await db.execute(select(func.count(model.id)).where(model.quote_id == quote_id))
    return result.scalar()


@pytest.fixture
async def booked_quote(
    db_session,
    test_client,
    test_event,
    contract_template,
    questionnaire_template,
    payment_schedule,
) -> Quote:
    return await make_quote(
        db_session,
        test_client.id,
        test_event.id,
        payment_plan_template_id=payment_schedule.id,
        contract_template_id=contract_template.id,
        questionnaire_template_id=str(questionnaire_template.id),
    )


@pytest.mark.asyncio
async def test_generates_every_document(db_session, booked_quote):
    result = await BookingService(db_session).generate_booking_documents(booked_quote)

    assert [o.kind for o in result.outcomes] == [
        ArtifactKind.INVOICES,
        ArtifactKind.CONTRACT,
        ArtifactKind.QUESTIONNAIRE,
    ]
    assert all(o.status == ArtifactStatus.CREATED for o in result.outcomes)
    assert not result.has_failures

    invoices = (await db_session.execute(
        select(Invoice).where(Invoice.quote_id == booked_quote.id).order_by(Invoice.id)
    )).scalars().all()
    assert [i.total_amount for i in invoices] == [Decimal("3500"), Decimal("3500"), Decimal("3000")]
    assert [i.label for i in invoices] == ["Retainer", "Second Payment", "Final Balance"]
    assert invoices[1].due_date == date(2026, 5, 18)
    assert invoices[2].due_date == date(2026, 7, 7)
    assert invoices[0].invoice_number == f"INV-260717-{booked_quote.id:02}-01"

    questionnaire = (await db_session.execute(
        select(Questionnaire).where(Questionnaire.quote_id == booked_quote.id)
    )).scalar_one()
    assert questionnaire.title == "Wedding Questionnaire"
    assert questionnaire.status == QuestionnaireStatus.PENDING


@pytest.mark.asyncio
async def test_contract_reads_generated_invoices(db_session, booked_quote):
    await BookingService(db_session).generate_booking_documents(booked_quote)

    contract = (await db_session.execute(
        select(Contract).where(Contract.quote_id == booked_quote.id)
    )).scalar_one()

    assert contract.status == ContractStatus.DRAFT
    assert contract.document_version == 1
    assert "Second Payment" in contract.content
    assert "May 18, 2026" in contract.content
    assert "Dear Ana, thank you for booking Smith Wedding on July 17, 2026." in contract.content
    assert "{{" not in contract.content
    assert "This section is replaced" not in contract.content


@pytest.mark.asyncio
async def test_second_run_is_a_no_op(db_session, booked_quote):
    service = BookingService(db_session)
    await service.generate_booking_documents(booked_quote)
    result = await service.generate_booking_documents(booked_quote)

    assert all(o.status == ArtifactStatus.SKIPPED_EXISTS for o in result.outcomes)
    assert await count(db_session, Invoice, booked_quote.id) == 3
    assert await count(db_session, Contract, booked_quote.id) == 1
    assert await count(db_session, Questionnaire, booked_quote.id) == 1


@pytest.mark.asyncio
async def test_force_regenerates_contract_but_not_invoices(db_session, booked_quote):
    service = BookingService(db_session)
    await service.generate_booking_documents(booked_quote)

    contract = (await db_session.execute(
        select(Contract).where(Contract.quote_id == booked_quote.id)
    )).scalar_one()
    contract.status = ContractStatus.SIGNED
    contract.signed_by = "Ana Smith"
    await db_session.commit()

    result = await service.generate_booking_documents(booked_quote, force_regenerate=True)

    assert result.outcome(ArtifactKind.INVOICES).status == ArtifactStatus.SKIPPED_EXISTS
    assert result.outcome(ArtifactKind.CONTRACT).status == ArtifactStatus.REGENERATED
    assert result.outcome(ArtifactKind.QUESTIONNAIRE).status == ArtifactStatus.REGENERATED

    await db_session.refresh(contract)
    assert contract.document_version == 2
    assert contract.status == ContractStatus.DRAFT
    assert contract.signed_by is None
    assert await count(db_session, Invoice, booked_quote.id) == 3
    assert await count(db_session, Contract, booked_quote.id) == 1


@pytest.mark.asyncio
async def test_no_templates_means_nothing_requested(db_session, test_client, test_event):
    quote = await make_quote(db_session, test_client.id, test_event.id)
    result = await BookingService(db_session).generate_booking_documents(quote)

    assert all(o.status == ArtifactStatus.SKIPPED_NOT_REQUESTED for o in result.outcomes)


@pytest.mark.asyncio
async def test_missing_templates_are_skipped(db_session, test_client, test_event):
    quote = await make_quote(
        db_session,
        test_client.id,
        test_event.id,
        questionnaire_template_id="not-a-template",
    )
    # Dangling ids, as left behind by a deleted template
    quote.payment_plan_template_id = 9999
    quote.contract_template_id = 9999

    result = await BookingService(db_session).generate_booking_documents(quote)

    assert [o.status for o in result.outcomes] == [ArtifactStatus.SKIPPED_MISSING_TEMPLATE] * 3
    assert await count(db_session, Invoice, quote.id) == 0


@pytest.mark.asyncio
async def test_questionnaire_template_of_wrong_type_is_skipped(db_session, test_client, test_event, contract_template):
    quote = await make_quote(
        db_session,
        test_client.id,
        test_event.id,
        questionnaire_template_id=str(contract_template.id),
    )
    result = await BookingService(db_session).generate_booking_documents(quote)

    assert result.outcome(ArtifactKind.QUESTIONNAIRE).status == ArtifactStatus.SKIPPED_MISSING_TEMPLATE


@pytest.mark.asyncio
async def test_system_questionnaire(db_session, test_client, test_event):
    quote = await make_quote(
        db_session,
        test_client.id,
        test_event.id,
        questionnaire_template_id=SYSTEM_QUESTIONNAIRE_TEMPLATE,
    )
    result = await BookingService(db_session).generate_booking_documents(quote)

    outcome = result.outcome(ArtifactKind.QUESTIONNAIRE)
    assert outcome.status == ArtifactStatus.CREATED
    questionnaire = await db_session.get(Questionnaire, outcome.record_ids[0])
    assert questionnaire.title == "New Booking Questionnaire"


@pytest.mark.asyncio
async def test_invoices_fail_without_event(db_session, test_client, payment_schedule, contract_template):
    quote = await make_quote(
        db_session,
        test_client.id,
        None,
        payment_plan_template_id=payment_schedule.id,
        contract_template_id=contract_template.id,
    )
    result = await BookingService(db_session).generate_booking_documents(quote)

    assert result.has_failures
    assert result.outcome(ArtifactKind.INVOICES).status == ArtifactStatus.FAILED
    # A failed artifact does not block the others
    assert result.outcome(ArtifactKind.CONTRACT).status == ArtifactStatus.CREATED


@pytest.mark.asyncio
async def test_database_error_propagates_and_keeps_invoices(db_session, booked_quote, monkeypatch):
    async def failing_contract(self, quote, force_regenerate):
        raise SQLAlchemyError("contract insert failed")

    monkeypatch.setattr(BookingService, "_generate_contract", failing_contract)

    with pytest.raises(SQLAlchemyError):
        await BookingService(db_session).generate_booking_documents(booked_quote)
    await db_session.rollback()

    # Invoices were committed before the contract step ran
    assert await count(db_session, Invoice, booked_quote.id) == 3
    assert await count(db_session, Contract, booked_quote.id) == 0
    assert await count(db_session, Questionnaire, booked_quote.id) == 0
