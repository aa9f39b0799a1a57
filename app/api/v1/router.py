"""
API v1 router - aggregates all endpoint routers.
"""

from fastapi import APIRouter

from app.api.v1.endpoints import (
    clients,
    events,
    venues,
    planners,
    templates,
    payment_schedules,
    quotes,
    invoices,
    contracts,
    questionnaires,
    currency,
)

api_router = APIRouter()

# Include all endpoint routers
api_router.include_router(
    clients.router,
    prefix="/clients",
    tags=["Clients"],
)

api_router.include_router(
    events.router,
    prefix="/events",
    tags=["Events"],
)

api_router.include_router(
    venues.router,
    prefix="/venues",
    tags=["Venues"],
)

api_router.include_router(
    planners.router,
    prefix="/planners",
    tags=["Planners"],
)

api_router.include_router(
    templates.router,
    prefix="/templates",
    tags=["Templates"],
)

api_router.include_router(
    payment_schedules.router,
    prefix="/payment-schedules",
    tags=["Payment Schedules"],
)

api_router.include_router(
    quotes.router,
    prefix="/quotes",
    tags=["Quotes"],
)

api_router.include_router(
    invoices.router,
    prefix="/invoices",
    tags=["Invoices"],
)

api_router.include_router(
    contracts.router,
    prefix="/contracts",
    tags=["Contracts"],
)

api_router.include_router(
    questionnaires.router,
    prefix="/questionnaires",
    tags=["Questionnaires"],
)

api_router.include_router(
    currency.router,
    prefix="/currency",
    tags=["Currency"],
)
