"""
Questionnaire schemas.
"""

from datetime import date, datetime

from app.schemas.base import RecordSchema
from app.models.questionnaire import QuestionnaireStatus


class QuestionnaireResponse(RecordSchema):
    quote_id: int | None
    client_id: int
    event_id: int | None
    template_id: str
    title: str
    status: QuestionnaireStatus
    answers: list[dict]
    due_date: date | None
    completed_at: datetime | None
