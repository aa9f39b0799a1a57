"""
Client, event, venue and planner endpoint tests.
"""

import pytest
from httpx import AsyncClient


@pytest.mark.asyncio
async def test_create_client(client: AsyncClient):
    response = await client.post(
        "/api/v1/clients",
        json={
            "first_name": "Maria",
            "last_name": "Lopez",
            "email": "maria@example.com",
            "city": "Oaxaca",
        },
    )

    assert response.status_code == 201
    data = response.json()
    assert data["full_name"] == "Maria Lopez"
    assert data["email"] == "maria@example.com"


@pytest.mark.asyncio
async def test_invalid_email_is_rejected(client: AsyncClient):
    response = await client.post(
        "/api/v1/clients",
        json={"first_name": "Maria", "email": "not-an-email"},
    )

    assert response.status_code == 422
    assert response.json()["detail"] == "Validation error"


@pytest.mark.asyncio
async def test_search_clients(client: AsyncClient, test_client):
    await client.post("/api/v1/clients", json={"first_name": "Bob", "last_name": "Jones"})

    response = await client.get("/api/v1/clients", params={"search": "smith"})

    assert response.status_code == 200
    data = response.json()
    assert data["total"] == 1
    assert data["items"][0]["id"] == test_client.id


@pytest.mark.asyncio
async def test_update_client(client: AsyncClient, test_client):
    response = await client.patch(f"/api/v1/clients/{test_client.id}", json={"phone": "555-0199"})

    assert response.status_code == 200
    assert response.json()["phone"] == "555-0199"
    assert response.json()["first_name"] == "Ana"


@pytest.mark.asyncio
async def test_create_event(client: AsyncClient, test_client, test_venue):
    response = await client.post(
        "/api/v1/events",
        json={
            "client_id": test_client.id,
            "venue_id": test_venue.id,
            "name": "Ana's Birthday",
            "date": "2026-09-12",
            "guest_count": 40,
        },
    )

    assert response.status_code == 201
    data = response.json()
    assert data["date"] == "2026-09-12"
    assert data["venue_id"] == test_venue.id


@pytest.mark.asyncio
async def test_event_needs_existing_client(client: AsyncClient):
    response = await client.post(
        "/api/v1/events",
        json={"client_id": 9999, "name": "Ghost party", "date": "2026-09-12"},
    )

    assert response.status_code == 404
    assert response.json()["detail"] == "Client not found"


@pytest.mark.asyncio
async def test_event_needs_existing_planner(client: AsyncClient, test_client):
    response = await client.post(
        "/api/v1/events",
        json={"client_id": test_client.id, "planner_id": 9999, "name": "Gala", "date": "2026-09-12"},
    )

    assert response.status_code == 404
    assert response.json()["detail"] == "Planner not found"


@pytest.mark.asyncio
async def test_list_events_by_client(client: AsyncClient, test_event):
    response = await client.get("/api/v1/events", params={"client_id": test_event.client_id})

    assert response.status_code == 200
    assert [e["name"] for e in response.json()["items"]] == ["Smith Wedding"]


@pytest.mark.asyncio
async def test_create_venue_and_planner(client: AsyncClient):
    venue = await client.post("/api/v1/venues", json={"name": "Jardin Botanico", "city": "Cuernavaca"})
    planner = await client.post("/api/v1/planners", json={"company": "Bliss Events", "first_name": "Lucia"})

    assert venue.status_code == 201
    assert planner.status_code == 201

    response = await client.get(f"/api/v1/venues/{venue.json()['id']}")
    assert response.json()["name"] == "Jardin Botanico"
