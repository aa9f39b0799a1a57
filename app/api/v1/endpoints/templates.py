"""
Document template endpoints.
"""

from fastapi import APIRouter, Query, status

from app.api.deps import DbSession
from app.models.template import TemplateType
from app.schemas.template import TemplateCreate, TemplateResponse
from app.services.template import TemplateService


router = APIRouter()


@router.post(
    "",
    response_model=TemplateResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a template",
    description="Create a contract or questionnaire template. Content may use {{token}} placeholders.",
)
async def create_template(
    data: TemplateCreate,
    db: DbSession,
) -> TemplateResponse:
    template = await TemplateService(db).create(data)
    return TemplateResponse.model_validate(template)


@router.get(
    "",
    response_model=list[TemplateResponse],
    summary="List templates",
)
async def list_templates(
    db: DbSession,
    type: TemplateType | None = Query(None, description="Filter by template type"),
) -> list[TemplateResponse]:
    templates = await TemplateService(db).list(type)
    return [TemplateResponse.model_validate(t) for t in templates]


@router.get(
    "/{template_id}",
    response_model=TemplateResponse,
    summary="Get a template",
)
async def get_template(
    template_id: int,
    db: DbSession,
) -> TemplateResponse:
    template = await TemplateService(db).get_or_404(template_id)
    return TemplateResponse.model_validate(template)
