"""
API Dependencies.
Common dependencies for database sessions and external services.
"""

from typing import Annotated
from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_db
from app.services.currency import CurrencyService


async def get_currency_service() -> CurrencyService:
    """Currency service using its own short-lived HTTP client per call."""
    return CurrencyService()


# Type aliases for cleaner route signatures
DbSession = Annotated[AsyncSession, Depends(get_db)]
Currency = Annotated[CurrencyService, Depends(get_currency_service)]
