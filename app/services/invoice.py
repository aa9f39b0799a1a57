"""
Invoice service.
Read access to invoices generated from quotes.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from fastapi import HTTPException, status

from app.models.invoice import Invoice


class InvoiceService:
    """Service for invoice operations."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_id(self, invoice_id: int) -> Invoice | None:
        result = await self.db.execute(
            select(Invoice).where(Invoice.id == invoice_id)
        )
        return result.scalar_one_or_none()

    async def get_or_404(self, invoice_id: int) -> Invoice:
        """
        Get invoice by ID or raise 404.

        Raises:
            HTTPException: If invoice not found
        """
        invoice = await self.get_by_id(invoice_id)
        if not invoice:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Invoice not found",
            )
        return invoice

    async def list_by_quote(self, quote_id: int) -> list[Invoice]:
        """Invoices generated from a quote, by due date."""
        result = await self.db.execute(
            select(Invoice)
            .where(Invoice.quote_id == quote_id)
            .order_by(Invoice.due_date, Invoice.id)
        )
        return list(result.scalars().all())
