"""
Template and payment schedule schemas.
"""

from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Literal
from pydantic import Field, model_validator

from app.schemas.base import BaseSchema, RecordSchema
from app.models.template import TemplateType


class TemplateBase(BaseSchema):
    type: TemplateType
    name: str = Field(..., min_length=1, max_length=255)
    content: str = ""


class TemplateCreate(TemplateBase):
    pass


class TemplateResponse(TemplateBase, RecordSchema):
    pass


class DueRule(str, Enum):
    """When a milestone falls due."""
    ON_BOOKING = "on_booking"
    BEFORE_EVENT = "before_event"
    AFTER_EVENT = "after_event"
    CUSTOM = "custom"


class MilestoneSchema(BaseSchema):
    """
    Payment milestone.

    Either ``percentage`` of the quote total, or ``value`` interpreted as a
    percentage when ``type`` is ``"percentage"`` and as a fixed amount
    otherwise. Accepts ``dueType``/``daysOffset`` from older clients.
    """

    name: str = Field(..., min_length=1, max_length=255)
    percentage: Decimal | None = Field(None, ge=0, le=100)
    type: Literal["percentage", "fixed"] | None = None
    value: Decimal | None = Field(None, ge=0)
    due_type: DueRule = Field(default=DueRule.ON_BOOKING, alias="dueType")
    days_offset: int = Field(default=0, ge=0, alias="daysOffset")

    @model_validator(mode="after")
    def _require_amount(self) -> "MilestoneSchema":
        if self.percentage is None and self.value is None:
            raise ValueError("A milestone needs a percentage or a value")
        return self


class PaymentScheduleBase(BaseSchema):
    name: str = Field(..., min_length=1, max_length=255)
    description: str | None = None
    is_default: bool = False


class PaymentScheduleCreate(PaymentScheduleBase):
    milestones: list[MilestoneSchema] = Field(default_factory=list)


class PaymentScheduleResponse(PaymentScheduleBase, RecordSchema):
    # Raw stored dicts; legacy rows are returned as-is
    milestones: list[dict] = Field(default_factory=list)


class ResolvedInstallment(BaseSchema):
    """A milestone expanded against a quote total and event date."""

    sequence: int
    name: str
    amount: Decimal
    due_date: date


class SchedulePreviewRequest(BaseSchema):
    quote_total: Decimal
    event_date: date
