"""
Currency and tax endpoints.
"""

from fastapi import APIRouter

from app.api.deps import Currency
from app.models.quote import CurrencyCode
from app.schemas.currency import ExchangeRate
from app.schemas.financial import TaxSelection
from app.services.financial import default_tax_catalog


router = APIRouter()


@router.get(
    "/rates/{currency}",
    response_model=ExchangeRate,
    summary="Exchange rate",
    description="MXN per one unit of the currency. Falls back to a static rate when the live source fails.",
)
async def get_exchange_rate(
    currency: CurrencyCode,
    service: Currency,
) -> ExchangeRate:
    return await service.get_exchange_rate(currency)


@router.get(
    "/taxes",
    response_model=list[TaxSelection],
    summary="Tax catalog",
    description="Configured taxes with their default rates, unselected",
)
async def get_tax_catalog() -> list[TaxSelection]:
    return default_tax_catalog()
