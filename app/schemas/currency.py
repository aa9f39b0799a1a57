"""
Exchange rate schemas.
"""

from datetime import datetime
from decimal import Decimal

from app.schemas.base import BaseSchema
from app.models.quote import CurrencyCode


class ExchangeRate(BaseSchema):
    """
    MXN per one unit of ``currency``.
    ``is_fallback`` is set when the live source could not be used.
    """

    currency: CurrencyCode
    rate: Decimal
    source: str
    is_fallback: bool = False
    fetched_at: datetime | None = None
