"""
Contract PDF rendering tests.
"""

from pathlib import Path

from app.models.contract import Contract
from app.schemas.contract import (
    HeadingBlock,
    ListBlock,
    ParagraphBlock,
    RichTextBlock,
    TextSegment,
)
from app.services.pdf import ContractPDFService


def test_render_contract_pdf(tmp_path):
    contract = Contract(id=7, quote_id=3, client_id=1, document_version=2, content="")
    blocks = [
        HeadingBlock(level=2, text="Payments"),
        ParagraphBlock(text="Deposits are non-refundable & due on booking."),
        RichTextBlock(segments=[
            TextSegment(text="Total:"),
            TextSegment(text="MX$2,610.00", bold=True),
        ]),
        ListBlock(ordered=True, items=["First", "Second"]),
    ]

    filepath = ContractPDFService(str(tmp_path)).render(contract, blocks, title="Smith Wedding")

    path = Path(filepath)
    assert path.name == "contract_3_7_v2.pdf"
    assert path.read_bytes().startswith(b"%PDF")


def test_build_elements_skips_nothing(tmp_path):
    service = ContractPDFService(str(tmp_path))
    blocks = [
        HeadingBlock(level=1, text="Agreement"),
        ListBlock(items=["Only"]),
    ]
    assert len(service.build_elements(blocks, service._get_styles())) == 2
