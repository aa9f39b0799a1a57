"""
Quote endpoint tests.
"""

from decimal import Decimal

import pytest
from httpx import AsyncClient
from sqlalchemy import select, func
from sqlalchemy.exc import SQLAlchemyError

from app.models.client import Client
from app.models.invoice import Invoice
from app.services.booking import BookingService


def quote_payload(client_id: int, event_id: int | None = None, **extra) -> dict:
    payload = {
        "client_id": client_id,
        "event_id": event_id,
        "items": [
            {"description": "Flete", "quantity": "1", "unit_price": "2500", "is_taxable": True},
        ],
        "discount": {"type": "percent", "value": "10"},
        "taxes": [{"name": "IVA", "rate": "16"}],
    }
    payload.update(extra)
    return payload


@pytest.mark.asyncio
async def test_create_quote(client: AsyncClient, test_client, test_event):
    response = await client.post("/api/v1/quotes", json=quote_payload(test_client.id, test_event.id))

    assert response.status_code == 201
    data = response.json()
    quote = data["quote"]
    assert quote["quote_number"].startswith("QT-")
    assert quote["status"] == "draft"
    assert Decimal(quote["total_amount"]) == Decimal("2610")
    assert Decimal(quote["discount_amount"]) == Decimal("250")
    assert len(quote["items"]) == 1
    assert quote["taxes"][0]["name"] == "IVA"

    summary = data["summary"]
    assert summary["items"][-1]["id"] == "discount"
    assert Decimal(summary["taxable_base"]) == Decimal("2250")
    assert all(o["status"] == "skipped_not_requested" for o in data["booking"]["outcomes"])


@pytest.mark.asyncio
async def test_create_quote_generates_documents(
    client: AsyncClient,
    test_client,
    test_event,
    contract_template,
    payment_schedule,
):
    payload = quote_payload(
        test_client.id,
        test_event.id,
        contract_template_id=contract_template.id,
        payment_plan_template_id=payment_schedule.id,
        questionnaire_template_id="system_booking_questionnaire",
    )
    response = await client.post("/api/v1/quotes", json=payload)

    assert response.status_code == 201
    data = response.json()
    assert [o["status"] for o in data["booking"]["outcomes"]] == ["created", "created", "created"]

    quote_id = data["quote"]["id"]
    response = await client.get("/api/v1/invoices", params={"quote_id": quote_id})
    invoices = response.json()
    assert len(invoices) == 3
    assert sum(Decimal(i["total_amount"]) for i in invoices) == Decimal("2610")

    response = await client.get("/api/v1/contracts", params={"quote_id": quote_id})
    assert response.status_code == 200
    contract_id = response.json()["id"]

    response = await client.get(f"/api/v1/contracts/{contract_id}/blocks")
    assert response.status_code == 200
    blocks = response.json()["blocks"]
    assert blocks[0] == {
        "type": "paragraph",
        "text": "Dear Ana, thank you for booking Smith Wedding on July 17, 2026.",
    }
    assert blocks[-1]["type"] == "list"


@pytest.mark.asyncio
async def test_documents_lock_financial_fields(
    client: AsyncClient,
    test_client,
    test_event,
    contract_template,
):
    payload = quote_payload(test_client.id, test_event.id, contract_template_id=contract_template.id)
    quote_id = (await client.post("/api/v1/quotes", json=payload)).json()["quote"]["id"]

    response = await client.patch(
        f"/api/v1/quotes/{quote_id}",
        json={"discount": {"type": "amount", "value": "100"}},
    )
    assert response.status_code == 400

    response = await client.patch(f"/api/v1/quotes/{quote_id}", json={"notes": "Confirmed by phone"})
    assert response.status_code == 200
    assert response.json()["quote"]["notes"] == "Confirmed by phone"


async def failing_contract(self, quote, force_regenerate):
    raise SQLAlchemyError("contract insert failed")


@pytest.mark.asyncio
async def test_create_quote_database_error(
    client: AsyncClient,
    db_session,
    test_client,
    test_event,
    contract_template,
    payment_schedule,
    monkeypatch,
):
    monkeypatch.setattr(BookingService, "_generate_contract", failing_contract)
    payload = quote_payload(
        test_client.id,
        test_event.id,
        contract_template_id=contract_template.id,
        payment_plan_template_id=payment_schedule.id,
    )
    response = await client.post("/api/v1/quotes", json=payload)

    assert response.status_code == 500
    assert response.json()["detail"] == "Failed to save quote"
    # Invoices committed before the failure are kept
    result = await db_session.execute(select(func.count(Invoice.id)))
    assert result.scalar() == 3


@pytest.mark.asyncio
async def test_update_quote_database_error(client: AsyncClient, test_client, test_event, contract_template, monkeypatch):
    quote_id = (
        await client.post("/api/v1/quotes", json=quote_payload(test_client.id, test_event.id))
    ).json()["quote"]["id"]
    monkeypatch.setattr(BookingService, "_generate_contract", failing_contract)

    response = await client.patch(f"/api/v1/quotes/{quote_id}", json={"contract_template_id": contract_template.id})

    assert response.status_code == 500
    assert response.json()["detail"] == "Failed to save quote"


@pytest.mark.asyncio
async def test_update_recomputes_totals(client: AsyncClient, test_client, test_event):
    quote_id = (
        await client.post("/api/v1/quotes", json=quote_payload(test_client.id, test_event.id))
    ).json()["quote"]["id"]

    response = await client.patch(
        f"/api/v1/quotes/{quote_id}",
        json={"discount": {"type": "percent", "value": "0"}, "currency": "USD", "exchange_rate": "20"},
    )

    assert response.status_code == 200
    data = response.json()
    assert Decimal(data["quote"]["total_amount"]) == Decimal("2900")
    assert Decimal(data["quote"]["total_foreign"]) == Decimal("145")
    assert all(item["id"] != "discount" for item in data["summary"]["items"])


@pytest.mark.asyncio
async def test_event_of_another_client_is_rejected(client: AsyncClient, test_event, db_session):
    other = Client(first_name="Bob", last_name="Jones")
    db_session.add(other)
    await db_session.commit()

    response = await client.post("/api/v1/quotes", json=quote_payload(other.id, test_event.id))
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_unknown_client(client: AsyncClient):
    response = await client.post("/api/v1/quotes", json=quote_payload(9999))
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_preview_summary(client: AsyncClient):
    response = await client.post(
        "/api/v1/quotes/summary",
        json={
            "items": [{"description": "Cake", "unit_price": "1000"}],
            "taxes": [{"name": "ISR Retenido", "rate": "1.25", "is_retention": True}],
            "currency": "USD",
        },
    )

    assert response.status_code == 200
    summary = response.json()
    assert Decimal(summary["total_mxn"]) == Decimal("987.5")
    assert Decimal(summary["exchange_rate"]) == Decimal("17.50")


@pytest.mark.asyncio
async def test_status_transitions(client: AsyncClient, test_client):
    quote_id = (await client.post("/api/v1/quotes", json=quote_payload(test_client.id))).json()["quote"]["id"]

    response = await client.post(f"/api/v1/quotes/{quote_id}/status", json={"status": "accepted"})
    assert response.status_code == 400

    response = await client.post(f"/api/v1/quotes/{quote_id}/status", json={"status": "sent"})
    assert response.status_code == 200
    assert response.json()["status"] == "sent"


@pytest.mark.asyncio
async def test_list_quotes(client: AsyncClient, test_client):
    for _ in range(3):
        await client.post("/api/v1/quotes", json=quote_payload(test_client.id))

    response = await client.get("/api/v1/quotes", params={"per_page": 2})

    assert response.status_code == 200
    data = response.json()
    assert data["total"] == 3
    assert data["pages"] == 2
    assert len(data["items"]) == 2


@pytest.mark.asyncio
async def test_get_missing_quote(client: AsyncClient):
    response = await client.get("/api/v1/quotes/9999")
    assert response.status_code == 404
    assert response.json()["detail"] == "Quote not found"
