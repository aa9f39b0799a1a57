"""
Currency conversion and exchange rates.

Rates are expressed as MXN per one unit of the foreign currency. Live rates
come from an HTTP endpoint; any failure degrades to the fallback table so a
quote save never fails on rate fetching.
"""

import logging
from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation

import httpx

from app.core.config import settings
from app.models.quote import CurrencyCode
from app.schemas.currency import ExchangeRate


logger = logging.getLogger(__name__)

BASE_CURRENCY = CurrencyCode(settings.BASE_CURRENCY)
ONE = Decimal("1")


def fallback_rate(currency: CurrencyCode | str) -> Decimal:
    """Static rate for a currency from the fallback table."""
    currency = CurrencyCode(currency)
    if currency == BASE_CURRENCY:
        return ONE
    return Decimal(str(settings.FALLBACK_EXCHANGE_RATES[currency.value]))


def resolve_rate(currency: CurrencyCode | str, rate: Decimal | None = None) -> Decimal:
    """
    Rate to use for a currency: 1 for the base currency, the given rate when
    positive, otherwise the fallback table rate.
    """
    currency = CurrencyCode(currency)
    if currency == BASE_CURRENCY:
        return ONE
    if rate is not None and rate > 0:
        return rate
    return fallback_rate(currency)


def convert_from_base(amount: Decimal, currency: CurrencyCode | str, rate: Decimal | None = None) -> Decimal:
    """Convert an MXN amount into ``currency``."""
    currency = CurrencyCode(currency)
    if currency == BASE_CURRENCY:
        return amount
    return amount / resolve_rate(currency, rate)


def convert_to_base(amount: Decimal, currency: CurrencyCode | str, rate: Decimal | None = None) -> Decimal:
    """Convert an amount in ``currency`` back into MXN."""
    currency = CurrencyCode(currency)
    if currency == BASE_CURRENCY:
        return amount
    return amount * resolve_rate(currency, rate)


class CurrencyService:
    """Service for live exchange rates with a static fallback."""

    def __init__(self, client: httpx.AsyncClient | None = None):
        self.client = client
        self.api_url = settings.EXCHANGE_RATE_API_URL
        self.timeout = settings.EXCHANGE_RATE_TIMEOUT
        self.retries = max(1, settings.EXCHANGE_RATE_RETRIES)

    def _fallback(self, currency: CurrencyCode) -> ExchangeRate:
        return ExchangeRate(
            currency=currency,
            rate=fallback_rate(currency),
            source="fallback",
            is_fallback=True,
        )

    async def _fetch(self, client: httpx.AsyncClient, currency: CurrencyCode) -> Decimal:
        """Fetch MXN per unit of currency from the live endpoint."""
        response = await client.get(
            self.api_url.format(currency=currency.value),
            timeout=self.timeout,
        )
        response.raise_for_status()
        payload = response.json()
        rate = Decimal(str(payload["rates"][BASE_CURRENCY.value]))
        if not rate.is_finite() or rate <= 0:
            raise ValueError(f"Invalid rate {rate} for {currency.value}")
        return rate

    async def get_exchange_rate(self, currency: CurrencyCode | str) -> ExchangeRate:
        """
        Get the current rate for a currency.

        Retries the live source, then falls back to the static table. Never
        raises for a supported currency.
        """
        currency = CurrencyCode(currency)
        if currency == BASE_CURRENCY:
            return ExchangeRate(currency=currency, rate=ONE, source="base")

        client = self.client or httpx.AsyncClient()
        try:
            for attempt in range(1, self.retries + 1):
                try:
                    rate = await self._fetch(client, currency)
                except (httpx.HTTPError, KeyError, TypeError, ValueError, InvalidOperation) as e:
                    logger.warning(
                        f"Live rate fetch for {currency.value} failed (attempt {attempt}/{self.retries}): {e}"
                    )
                    continue
                return ExchangeRate(
                    currency=currency,
                    rate=rate,
                    source="live",
                    fetched_at=datetime.now(timezone.utc),
                )
        finally:
            if self.client is None:
                await client.aclose()

        logger.warning(f"Using fallback rate for {currency.value}")
        return self._fallback(currency)
