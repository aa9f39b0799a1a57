"""
PDF Generation Service.
Typesets contract content blocks using ReportLab.
"""

import html
from datetime import datetime
from pathlib import Path
from typing import Sequence

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import getSampleStyleSheet, ParagraphStyle
from reportlab.lib.units import mm
from reportlab.platypus import (
    SimpleDocTemplate,
    Paragraph,
    Spacer,
    ListFlowable,
    ListItem,
)

from app.core.config import settings
from app.core.formatters import format_long_date
from app.models.contract import Contract
from app.schemas.contract import (
    ContentBlock,
    HeadingBlock,
    ParagraphBlock,
    RichTextBlock,
    ListBlock,
    TextSegment,
)


def _segment_markup(segment: TextSegment) -> str:
    """ReportLab inline markup for one emphasized run."""
    text = html.escape(segment.text, quote=False)
    if segment.underline:
        text = f"<u>{text}</u>"
    if segment.italic:
        text = f"<i>{text}</i>"
    if segment.bold:
        text = f"<b>{text}</b>"
    return text


class ContractPDFService:
    """Service for generating contract PDFs."""

    def __init__(self, storage_path: str | None = None):
        self.storage_path = Path(storage_path or settings.PDF_STORAGE_PATH)
        self.storage_path.mkdir(parents=True, exist_ok=True)

        self.primary_color = colors.HexColor("#111827")
        self.gray_color = colors.HexColor("#6B7280")

    def _get_styles(self):
        """Get custom paragraph styles."""
        styles = getSampleStyleSheet()

        styles.add(ParagraphStyle(
            name='ContractTitle',
            parent=styles['Heading1'],
            fontSize=18,
            textColor=self.primary_color,
            spaceAfter=6*mm,
        ))

        for level in range(1, 7):
            styles.add(ParagraphStyle(
                name=f'ContractHeading{level}',
                parent=styles['Heading2'],
                fontSize=max(10, 16 - level),
                textColor=self.primary_color,
                spaceBefore=4*mm,
                spaceAfter=2*mm,
            ))

        styles.add(ParagraphStyle(
            name='ContractBody',
            parent=styles['Normal'],
            fontSize=10,
            leading=14,
            spaceAfter=2*mm,
        ))

        styles.add(ParagraphStyle(
            name='SmallText',
            parent=styles['Normal'],
            fontSize=8,
            textColor=self.gray_color,
        ))

        return styles

    def build_elements(self, blocks: Sequence[ContentBlock], styles) -> list:
        """Flowables for a block sequence, in order."""
        elements = []
        for block in blocks:
            if isinstance(block, HeadingBlock):
                elements.append(Paragraph(
                    html.escape(block.text, quote=False),
                    styles[f'ContractHeading{block.level}'],
                ))
            elif isinstance(block, ParagraphBlock):
                elements.append(Paragraph(html.escape(block.text, quote=False), styles['ContractBody']))
            elif isinstance(block, RichTextBlock):
                markup = " ".join(_segment_markup(segment) for segment in block.segments)
                elements.append(Paragraph(markup, styles['ContractBody']))
            elif isinstance(block, ListBlock):
                elements.append(ListFlowable(
                    [
                        ListItem(Paragraph(html.escape(item, quote=False), styles['ContractBody']))
                        for item in block.items
                    ],
                    bulletType='1' if block.ordered else 'bullet',
                    leftIndent=6*mm,
                ))
        return elements

    def render(self, contract: Contract, blocks: Sequence[ContentBlock], title: str | None = None) -> str:
        """
        Generate PDF for a contract.

        Args:
            contract: Contract being rendered
            blocks: Parsed content blocks of the contract
            title: Optional document title

        Returns:
            Path to generated PDF file
        """
        styles = self._get_styles()

        filename = f"contract_{contract.quote_id or 'none'}_{contract.id}_v{contract.document_version}.pdf"
        filepath = self.storage_path / filename

        doc = SimpleDocTemplate(
            str(filepath),
            pagesize=A4,
            rightMargin=20*mm,
            leftMargin=20*mm,
            topMargin=20*mm,
            bottomMargin=20*mm,
            title=title or f"Contract {contract.id}",
        )

        elements = [
            Paragraph(html.escape(title or "Contract Agreement", quote=False), styles['ContractTitle']),
        ]
        elements.extend(self.build_elements(blocks, styles))

        # ===== FOOTER =====
        elements.append(Spacer(1, 10*mm))
        elements.append(Paragraph(
            f"<i>Generated on {format_long_date(datetime.now().date())} by {html.escape(settings.COMPANY_NAME)}</i>",
            styles['SmallText'],
        ))

        doc.build(elements)

        return str(filepath)
