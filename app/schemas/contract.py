"""
Contract schemas, including the content block decomposition used by
non-HTML rendering surfaces.
"""

from datetime import datetime
from typing import Annotated, Literal, Union
from pydantic import Field

from app.schemas.base import BaseSchema, RecordSchema
from app.models.contract import ContractStatus


class TextSegment(BaseSchema):
    """Inline text run with emphasis flags."""

    text: str
    bold: bool = False
    italic: bool = False
    underline: bool = False

    @property
    def is_plain(self) -> bool:
        return not (self.bold or self.italic or self.underline)


class HeadingBlock(BaseSchema):
    type: Literal["heading"] = "heading"
    level: int = Field(default=3, ge=1, le=6)
    text: str


class ParagraphBlock(BaseSchema):
    type: Literal["paragraph"] = "paragraph"
    text: str


class RichTextBlock(BaseSchema):
    type: Literal["rich"] = "rich"
    segments: list[TextSegment]


class ListBlock(BaseSchema):
    type: Literal["list"] = "list"
    ordered: bool = False
    items: list[str]


ContentBlock = Annotated[
    Union[HeadingBlock, ParagraphBlock, RichTextBlock, ListBlock],
    Field(discriminator="type"),
]


class ContractResponse(RecordSchema):
    quote_id: int | None
    client_id: int
    event_id: int | None
    template_id: int | None
    content: str
    status: ContractStatus
    document_version: int
    signed_at: datetime | None
    signed_by: str | None


class ContractBlocksResponse(BaseSchema):
    contract_id: int
    blocks: list[ContentBlock]


class HydratedContractResponse(BaseSchema):
    contract_id: int
    content: str
