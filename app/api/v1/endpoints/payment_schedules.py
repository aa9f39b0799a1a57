"""
Payment schedule (payment plan) endpoints.
"""

from fastapi import APIRouter, status

from app.api.deps import DbSession
from app.schemas.template import (
    PaymentScheduleCreate,
    PaymentScheduleResponse,
    ResolvedInstallment,
    SchedulePreviewRequest,
)
from app.services.payment_schedule import PaymentScheduleService


router = APIRouter()


@router.post(
    "",
    response_model=PaymentScheduleResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a payment plan",
)
async def create_payment_schedule(
    data: PaymentScheduleCreate,
    db: DbSession,
) -> PaymentScheduleResponse:
    schedule = await PaymentScheduleService(db).create(data)
    return PaymentScheduleResponse.model_validate(schedule)


@router.get(
    "",
    response_model=list[PaymentScheduleResponse],
    summary="List payment plans",
)
async def list_payment_schedules(db: DbSession) -> list[PaymentScheduleResponse]:
    schedules = await PaymentScheduleService(db).list()
    return [PaymentScheduleResponse.model_validate(s) for s in schedules]


@router.get(
    "/{schedule_id}",
    response_model=PaymentScheduleResponse,
    summary="Get a payment plan",
)
async def get_payment_schedule(
    schedule_id: int,
    db: DbSession,
) -> PaymentScheduleResponse:
    schedule = await PaymentScheduleService(db).get_or_404(schedule_id)
    return PaymentScheduleResponse.model_validate(schedule)


@router.post(
    "/{schedule_id}/preview",
    response_model=list[ResolvedInstallment],
    summary="Preview installments",
    description="Resolve the plan's milestones against a quote total (MXN) and an event date",
)
async def preview_payment_schedule(
    schedule_id: int,
    data: SchedulePreviewRequest,
    db: DbSession,
) -> list[ResolvedInstallment]:
    return await PaymentScheduleService(db).preview(schedule_id, data.quote_total, data.event_date)
