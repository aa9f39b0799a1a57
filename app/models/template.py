"""
Document templates and payment schedule templates.
"""

from typing import Optional, List, Any
from enum import Enum
from sqlalchemy import String, Text, Boolean, JSON, Enum as SQLEnum
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base import BaseModel


# Built-in questionnaire rendered by the client portal; has no template row.
SYSTEM_QUESTIONNAIRE_TEMPLATE = "system_booking_questionnaire"


class TemplateType(str, Enum):
    """Template type enumeration."""
    CONTRACT = "contract"
    QUESTIONNAIRE = "questionnaire"


class Template(BaseModel):
    """
    Document template.

    Attributes:
        type: contract or questionnaire
        name: Display name (used as questionnaire title)
        content: HTML with {{token}} placeholders
    """

    __tablename__ = "templates"

    type: Mapped[TemplateType] = mapped_column(
        SQLEnum(TemplateType),
        nullable=False,
        index=True,
    )
    name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )
    content: Mapped[str] = mapped_column(
        Text,
        default="",
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<Template(id={self.id}, type='{self.type}', name='{self.name}')>"


class PaymentSchedule(BaseModel):
    """
    Organization-level payment plan template.

    Milestones are stored as a JSON list of dicts:
    ``{name, percentage | type+value | value, due_type, days_offset}``.
    """

    __tablename__ = "payment_schedules"

    name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )
    description: Mapped[Optional[str]] = mapped_column(
        Text,
        nullable=True,
    )
    is_default: Mapped[bool] = mapped_column(
        Boolean,
        default=False,
        nullable=False,
    )
    milestones: Mapped[List[dict[str, Any]]] = mapped_column(
        JSON,
        default=list,
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<PaymentSchedule(id={self.id}, name='{self.name}', milestones={len(self.milestones or [])})>"
