"""
Contract service.

Hydrates contract templates against a booking context and decomposes the
hydrated HTML into typed content blocks for non-HTML renderers.
"""

import logging
import re
from dataclasses import dataclass
from typing import Optional
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from fastapi import HTTPException, status
from bs4 import BeautifulSoup, Comment, NavigableString, Tag

from app.models.client import Client
from app.models.contract import Contract
from app.models.event import Event, Venue, Planner
from app.models.invoice import Invoice
from app.models.quote import Quote
from app.schemas.contract import (
    ContentBlock,
    HeadingBlock,
    ParagraphBlock,
    RichTextBlock,
    ListBlock,
    TextSegment,
)
from app.services.tokens import HydrationContext, TokenService, token_service as default_token_service


logger = logging.getLogger(__name__)


INVOICE_SCHEDULE_PLACEHOLDER = "Invoice schedule will be generated upon booking."

# Legacy flattened templates are re-laid out around this anchor. The opening
# heading tag and any inline tags wrapping the phrase are kept with the
# preserved terms.
TERMS_ANCHOR = re.compile(
    r"(?:<h[1-6][^>]*>\s*(?:<(?:strong|b|em|i|u|span)\b[^>]*>\s*)*)?Terms and Conditions",
    re.IGNORECASE,
)
TERMS_PHRASE = re.compile(r"terms\s*(?:and|&)?\s*conditions", re.IGNORECASE)

LOGO_BLOCK = re.compile(r'<div style="width: 120px; height: 120px;.*?</div>', re.DOTALL)
LOGO_PREFIX = re.compile(r"^LOGO\s*", re.IGNORECASE)
LOGO_PARAGRAPH = re.compile(r"<p>LOGO</p>", re.IGNORECASE)

STYLE_BLOCK = re.compile(r"<style[^>]*>.*?</style>", re.IGNORECASE | re.DOTALL)
WHITESPACE = re.compile(r"\s+")

SECTION_LABEL = (
    '<p style="font-size: 12px; letter-spacing: 0.1em; text-transform: uppercase; '
    'margin-bottom: 20px; border-bottom: 1px solid #e5e7eb; padding-bottom: 10px;">'
)

CONTRACT_HEADER_HTML = """
<div style="text-align: center; margin-bottom: 40px;">
  <div style="width: 120px; height: 120px; background: #f3f4f6; border-radius: 50%; margin: 0 auto 20px;">LOGO</div>
  <h1 style="font-family: serif; font-size: 24px; text-transform: uppercase;">Dessert Catering Service</h1>
  <p style="font-size: 12px; color: #6b7280; text-transform: uppercase;">Contract Agreement</p>
</div>
<div style="display: flex; justify-content: space-between; margin-bottom: 40px; font-size: 14px;">
  <div style="width: 40%;">
    <p style="font-size: 10px; font-weight: 700; text-transform: uppercase;">Contract Between:</p>
    <p style="font-weight: 700;">{{client_first_name}} {{client_last_name}}</p>
    <p>{{client_address}}</p>
    <p style="font-style: italic;">Hereby known as 'CLIENT'.</p>
  </div>
  <div style="width: 40%; text-align: right;">
    <p style="font-size: 10px; font-weight: 700; text-transform: uppercase;">Service Provider:</p>
    <p style="font-weight: 700;">{{company_name}}</p>
    <p style="font-style: italic;">Hereby known as 'PROVIDER'.</p>
  </div>
</div>
<div style="margin-bottom: 40px;">
  """ + SECTION_LABEL + """Event Information</p>
  <div style="background-color: #f9fafb; padding: 24px;">
    <p><strong>Venue:</strong> {{venue_name}} {{venue_sub_location}}</p>
    <p><strong>Address:</strong> {{venue_address}}</p>
    <p><strong>Date:</strong> {{event_date}}</p>
    <p><strong>Time:</strong> {{event_start_time}} - {{event_end_time}}</p>
  </div>
</div>
"""


def _repair_layout(content: str) -> str:
    """
    Rebuild the canonical header / services / payment schedule layout and
    splice the preserved terms back in. Content before the terms is dropped.
    """
    match = TERMS_ANCHOR.search(content)
    if match is None:
        return content

    terms = content[match.start():]
    return (
        CONTRACT_HEADER_HTML
        + '<div style="margin-bottom: 40px;">'
        + SECTION_LABEL + "Service Details</p>\n{{quote_line_items}}\n</div>\n"
        + '<div style="margin-bottom: 40px;">'
        + SECTION_LABEL + "Payment Schedule</p>\n{{invoice_schedule}}\n</div>\n"
        + '<div style="margin-bottom: 40px;">\n' + terms + "\n</div>\n"
    )


def hydrate_contract_content(
    content: str,
    context: HydrationContext,
    token_service: Optional[TokenService] = None,
) -> str:
    """
    Produce final contract HTML from template content.

    Steps, in order: the schedule placeholder sentence becomes
    ``{{invoice_schedule}}``; templates with a Terms and Conditions section
    get the canonical layout; tokens are substituted; the logo placeholder
    is stripped.
    """
    if not content:
        return ""

    content = content.replace(INVOICE_SCHEDULE_PLACEHOLDER, "{{invoice_schedule}}", 1)
    content = _repair_layout(content)
    content = (token_service or default_token_service).replace_tokens(content, context)

    content = LOGO_BLOCK.sub("", content, count=1)
    content = LOGO_PREFIX.sub("", content, count=1)
    content = LOGO_PARAGRAPH.sub("", content, count=1)
    return content


def _normalize(text: str) -> str:
    return WHITESPACE.sub(" ", text).strip()


@dataclass(frozen=True)
class _Emphasis:
    bold: bool = False
    italic: bool = False
    underline: bool = False


def _parse_style(value: str) -> dict[str, str]:
    declarations = {}
    for declaration in value.split(";"):
        name, sep, val = declaration.partition(":")
        if sep:
            declarations[name.strip().lower()] = val.strip().lower()
    return declarations


def _emphasis_for(el: Tag, inherited: _Emphasis) -> _Emphasis:
    """Emphasis of an element, composed with what it inherits."""
    tag = el.name.lower()
    style = _parse_style(el.get("style") or "")
    weight = style.get("font-weight", "")

    bold = inherited.bold or tag in ("strong", "b") or (weight.isdigit() and int(weight) >= 500)
    italic = inherited.italic or tag in ("em", "i") or style.get("font-style") == "italic"
    underline = (
        inherited.underline
        or tag == "u"
        or "underline" in style.get("text-decoration", "")
    )
    return _Emphasis(bold=bold, italic=italic, underline=underline)


def _collect_segments(el: Tag, inherited: _Emphasis = _Emphasis()) -> list[TextSegment]:
    segments = []
    for child in el.children:
        if isinstance(child, Comment):
            continue
        if isinstance(child, NavigableString):
            text = _normalize(str(child))
            if text:
                segments.append(TextSegment(
                    text=text,
                    bold=inherited.bold,
                    italic=inherited.italic,
                    underline=inherited.underline,
                ))
        elif isinstance(child, Tag):
            segments.extend(_collect_segments(child, _emphasis_for(child, inherited)))
    return segments


class _BlockCollector:
    """Walks a DOM and collects blocks, gated on the terms heading."""

    def __init__(self, capturing: bool):
        self.capturing = capturing
        self.blocks: list[ContentBlock] = []

    def push(self, block: ContentBlock) -> None:
        if not self.capturing:
            # The heading that opens the terms is itself not emitted
            if isinstance(block, HeadingBlock) and TERMS_PHRASE.search(block.text):
                self.capturing = True
            return
        self.blocks.append(block)

    def push_segments(self, el: Tag) -> None:
        segments = _collect_segments(el)
        if len(segments) == 1 and segments[0].is_plain:
            self.push(ParagraphBlock(text=segments[0].text))
        elif segments:
            self.push(RichTextBlock(segments=segments))

    def walk(self, node) -> None:
        if isinstance(node, Comment):
            return
        if isinstance(node, NavigableString):
            text = _normalize(str(node))
            if text:
                self.push(ParagraphBlock(text=text))
            return
        if not isinstance(node, Tag):
            return

        tag = node.name.lower()
        if tag in ("h1", "h2", "h3", "h4", "h5", "h6"):
            text = _normalize(node.get_text())
            if text:
                self.push(HeadingBlock(level=int(tag[1]), text=text))
        elif tag == "p":
            self.push_segments(node)
        elif tag == "div" and node.find(True, recursive=False) is None:
            self.push_segments(node)
        elif tag in ("ul", "ol"):
            items = [
                text
                for text in (_normalize(child.get_text()) for child in node.find_all(True, recursive=False))
                if text
            ]
            if items:
                self.push(ListBlock(ordered=tag == "ol", items=items))
        elif tag == "br":
            self.push(ParagraphBlock(text=""))
        else:
            for child in node.children:
                self.walk(child)


def _has_content(block: ContentBlock) -> bool:
    if isinstance(block, ListBlock):
        return bool(block.items)
    if isinstance(block, RichTextBlock):
        return bool(block.segments)
    return bool(block.text.strip())


def parse_content_blocks(html_content: str) -> list[ContentBlock]:
    """
    Decompose hydrated contract HTML into heading, paragraph, rich-text and
    list blocks.

    When the document mentions terms and conditions anywhere, blocks are
    only emitted after the heading that introduces them.
    """
    if not html_content:
        return []

    soup = BeautifulSoup(f"<div>{STYLE_BLOCK.sub('', html_content)}</div>", "html.parser")
    container = soup.div
    collector = _BlockCollector(capturing=not TERMS_PHRASE.search(container.get_text()))
    for node in list(container.children):
        collector.walk(node)

    return [block for block in collector.blocks if _has_content(block)]


class ContractService:
    """Service for contract lookups and hydration context loading."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_id(self, contract_id: int) -> Contract | None:
        result = await self.db.execute(
            select(Contract).where(Contract.id == contract_id)
        )
        return result.scalar_one_or_none()

    async def get_or_404(self, contract_id: int) -> Contract:
        contract = await self.get_by_id(contract_id)
        if not contract:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Contract not found",
            )
        return contract

    async def get_by_quote(self, quote_id: int) -> Contract | None:
        result = await self.db.execute(
            select(Contract).where(Contract.quote_id == quote_id).order_by(Contract.id)
        )
        return result.scalars().first()

    async def _get(self, model, record_id: int | None):
        if record_id is None:
            return None
        result = await self.db.execute(select(model).where(model.id == record_id))
        return result.scalar_one_or_none()

    async def load_context(
        self,
        client_id: int | None,
        event_id: int | None,
        quote_id: int | None = None,
    ) -> HydrationContext:
        """
        Gather the entities a contract can reference. Missing records are
        left out of the context rather than treated as errors.
        """
        client = await self._get(Client, client_id)
        event = await self._get(Event, event_id)
        venue = await self._get(Venue, event.venue_id) if event else None
        planner = await self._get(Planner, event.planner_id) if event else None
        quote = await self._get(Quote, quote_id)

        invoices = []
        if quote_id is not None:
            result = await self.db.execute(
                select(Invoice).where(Invoice.quote_id == quote_id).order_by(Invoice.id)
            )
            invoices = list(result.scalars().all())

        return HydrationContext(
            client=client,
            event=event,
            venue=venue,
            planner=planner,
            quote=quote,
            invoices=invoices,
        )

    async def hydrate(self, contract: Contract) -> str:
        """Re-hydrate a stored contract against current records."""
        context = await self.load_context(contract.client_id, contract.event_id, contract.quote_id)
        return hydrate_contract_content(contract.content, context)

    async def blocks(self, contract: Contract) -> list[ContentBlock]:
        return parse_content_blocks(contract.content)
