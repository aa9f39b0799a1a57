"""
Questionnaire endpoints.
"""

from fastapi import APIRouter, Query

from app.api.deps import DbSession
from app.schemas.questionnaire import QuestionnaireResponse
from app.services.questionnaire import QuestionnaireService


router = APIRouter()


@router.get(
    "",
    response_model=list[QuestionnaireResponse],
    summary="Questionnaires of a quote",
)
async def list_questionnaires(
    db: DbSession,
    quote_id: int = Query(..., description="Quote the questionnaire was generated from"),
) -> list[QuestionnaireResponse]:
    questionnaires = await QuestionnaireService(db).list_by_quote(quote_id)
    return [QuestionnaireResponse.model_validate(q) for q in questionnaires]


@router.get(
    "/{questionnaire_id}",
    response_model=QuestionnaireResponse,
    summary="Get a questionnaire",
)
async def get_questionnaire(
    questionnaire_id: int,
    db: DbSession,
) -> QuestionnaireResponse:
    questionnaire = await QuestionnaireService(db).get_or_404(questionnaire_id)
    return QuestionnaireResponse.model_validate(questionnaire)
