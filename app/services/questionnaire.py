"""
Questionnaire service.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from fastapi import HTTPException, status

from app.models.questionnaire import Questionnaire


class QuestionnaireService:
    """Service for questionnaires generated from quotes."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_or_404(self, questionnaire_id: int) -> Questionnaire:
        result = await self.db.execute(
            select(Questionnaire).where(Questionnaire.id == questionnaire_id)
        )
        questionnaire = result.scalar_one_or_none()
        if not questionnaire:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Questionnaire not found",
            )
        return questionnaire

    async def list_by_quote(self, quote_id: int) -> list[Questionnaire]:
        result = await self.db.execute(
            select(Questionnaire)
            .where(Questionnaire.quote_id == quote_id)
            .order_by(Questionnaire.id)
        )
        return list(result.scalars().all())
