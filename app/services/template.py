"""
Template service.
Stores contract and questionnaire templates.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from fastapi import HTTPException, status

from app.models.template import Template, TemplateType
from app.schemas.template import TemplateCreate


class TemplateService:
    """Service for document templates."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create(self, data: TemplateCreate) -> Template:
        template = Template(**data.model_dump())
        self.db.add(template)
        await self.db.flush()
        await self.db.refresh(template)
        return template

    async def get_by_id(self, template_id: int) -> Template | None:
        result = await self.db.execute(
            select(Template).where(Template.id == template_id)
        )
        return result.scalar_one_or_none()

    async def get_or_404(self, template_id: int) -> Template:
        template = await self.get_by_id(template_id)
        if not template:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Template not found",
            )
        return template

    async def list(self, template_type: TemplateType | None = None) -> list[Template]:
        query = select(Template)
        if template_type:
            query = query.where(Template.type == template_type)
        result = await self.db.execute(query.order_by(Template.name))
        return list(result.scalars().all())
