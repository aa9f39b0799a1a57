"""
Questionnaire model: booking questionnaire generated from a quote.
"""

from typing import Optional, List, Any
from datetime import date, datetime
from enum import Enum
from sqlalchemy import String, ForeignKey, Integer, Date, DateTime, JSON, Enum as SQLEnum
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base import BaseModel


class QuestionnaireStatus(str, Enum):
    PENDING = "pending"
    COMPLETED = "completed"


class Questionnaire(BaseModel):
    """
    Questionnaire model.

    The client portal renders questions from ``template_id``; this row only
    tracks assignment, status and answers.
    """

    __tablename__ = "questionnaires"

    quote_id: Mapped[Optional[int]] = mapped_column(
        Integer,
        ForeignKey("quotes.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    client_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("clients.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    event_id: Mapped[Optional[int]] = mapped_column(
        Integer,
        ForeignKey("events.id", ondelete="SET NULL"),
        nullable=True,
    )
    template_id: Mapped[str] = mapped_column(
        String(64),
        nullable=False,
    )

    title: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )
    status: Mapped[QuestionnaireStatus] = mapped_column(
        SQLEnum(QuestionnaireStatus),
        default=QuestionnaireStatus.PENDING,
        nullable=False,
    )
    answers: Mapped[List[dict[str, Any]]] = mapped_column(
        JSON,
        default=list,
        nullable=False,
    )
    due_date: Mapped[Optional[date]] = mapped_column(
        Date,
        nullable=True,
    )
    completed_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )

    def __repr__(self) -> str:
        return f"<Questionnaire(id={self.id}, quote_id={self.quote_id}, title='{self.title}')>"
