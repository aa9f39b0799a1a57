"""
Currency conversion and exchange rate tests.
"""

from decimal import Decimal

import httpx
import pytest

from app.models.quote import CurrencyCode
from app.services.currency import (
    CurrencyService,
    convert_from_base,
    convert_to_base,
    fallback_rate,
    resolve_rate,
)


def rates_client(handler) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


def test_base_currency_is_never_converted():
    assert resolve_rate(CurrencyCode.MXN, Decimal("20")) == Decimal("1")
    assert convert_from_base(Decimal("1234.56"), "MXN", Decimal("20")) == Decimal("1234.56")


def test_invalid_rate_uses_fallback():
    assert resolve_rate("USD", Decimal("0")) == fallback_rate("USD")
    assert resolve_rate("USD", None) == Decimal("17.50")


@pytest.mark.parametrize("currency", ["USD", "GBP", "EUR", "CAD"])
def test_conversion_round_trip(currency):
    total = Decimal("123456.78")
    rate = Decimal("17.3291")
    foreign = convert_from_base(total, currency, rate)
    assert abs(convert_to_base(foreign, currency, rate) - total) < Decimal("0.000001")


@pytest.mark.asyncio
async def test_live_rate():
    requested = []

    def handler(request: httpx.Request) -> httpx.Response:
        requested.append(str(request.url))
        return httpx.Response(200, json={"result": "success", "rates": {"MXN": 18.25, "USD": 1}})

    async with rates_client(handler) as http:
        rate = await CurrencyService(http).get_exchange_rate("USD")

    assert rate.rate == Decimal("18.25")
    assert rate.source == "live"
    assert not rate.is_fallback
    assert requested[0].endswith("/USD")


@pytest.mark.asyncio
async def test_server_error_falls_back():
    calls = 0

    def handler(request: httpx.Request) -> httpx.Response:
        nonlocal calls
        calls += 1
        return httpx.Response(503)

    async with rates_client(handler) as http:
        rate = await CurrencyService(http).get_exchange_rate(CurrencyCode.GBP)

    assert rate.is_fallback
    assert rate.source == "fallback"
    assert rate.rate == Decimal("22.10")
    assert calls >= 1


@pytest.mark.asyncio
async def test_malformed_payload_falls_back():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"rates": {"EUR": 1}})

    async with rates_client(handler) as http:
        rate = await CurrencyService(http).get_exchange_rate("EUR")

    assert rate.is_fallback
    assert rate.rate == Decimal("18.90")


@pytest.mark.asyncio
async def test_network_error_falls_back():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("unreachable", request=request)

    async with rates_client(handler) as http:
        rate = await CurrencyService(http).get_exchange_rate("CAD")

    assert rate.is_fallback
    assert rate.rate == Decimal("12.80")


@pytest.mark.asyncio
async def test_base_currency_skips_fetch():
    def handler(request: httpx.Request) -> httpx.Response:
        raise AssertionError("no request expected")

    async with rates_client(handler) as http:
        rate = await CurrencyService(http).get_exchange_rate("MXN")

    assert rate.rate == Decimal("1")
    assert rate.source == "base"


@pytest.mark.asyncio
async def test_tax_catalog_endpoint(client):
    response = await client.get("/api/v1/currency/taxes")

    assert response.status_code == 200
    assert [t["name"] for t in response.json()] == ["IVA", "IVA Retenido", "ISR", "ISR Retenido"]
