"""
Pytest configuration and fixtures.
"""

from datetime import date
from typing import AsyncGenerator
import pytest
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.pool import StaticPool

import app.models  # noqa: F401
from app.core.database import Base, get_db
from app.main import app
from app.models.client import Client
from app.models.event import Event, Venue, Planner
from app.models.template import PaymentSchedule, Template, TemplateType


# In-memory SQLite shared by every connection of one test
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

EVENT_DATE = date(2026, 7, 17)

CONTRACT_TEMPLATE = """
<h1>Booking Agreement</h1>
<p>This section is replaced by the standard header.</p>
<h2>Terms and Conditions</h2>
<p>Dear {{client_first_name}}, thank you for booking {{event_name}} on {{event_date}}.</p>
<p>The total of this agreement is <strong>{{invoice_total}}</strong>.</p>
<ul><li>Deposits are non-refundable.</li><li>Final guest count is due 14 days before the event.</li></ul>
"""


@pytest.fixture
async def test_engine():
    """Create test database engine."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
        echo=False,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest.fixture
async def db_session(test_engine) -> AsyncGenerator[AsyncSession, None]:
    """Create test database session."""
    async_session = async_sessionmaker(
        test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )

    async with async_session() as session:
        yield session
        await session.rollback()


@pytest.fixture
async def client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """Create test client with database session override."""

    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test"
    ) as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture
async def test_client(db_session: AsyncSession) -> Client:
    """Create a booking client."""
    record = Client(
        first_name="Ana",
        last_name="Smith",
        email="ana@example.com",
        phone="+52 55 1234 5678",
        address="Av. Reforma 100",
        city="Mexico City",
        state="CDMX",
        zip_code="06600",
    )
    db_session.add(record)
    await db_session.commit()
    await db_session.refresh(record)
    return record


@pytest.fixture
async def test_venue(db_session: AsyncSession) -> Venue:
    venue = Venue(
        name="Hacienda San Gabriel",
        address="Camino Real 12",
        city="Tepoztlan",
        state="Morelos",
        zip_code="62520",
        website="https://hacienda.example.com",
    )
    db_session.add(venue)
    await db_session.commit()
    await db_session.refresh(venue)
    return venue


@pytest.fixture
async def test_planner(db_session: AsyncSession) -> Planner:
    planner = Planner(
        company="Bliss Events",
        first_name="Lucia",
        last_name="Ortega",
        email="lucia@bliss.example.com",
        phone="+52 55 8765 4321",
        instagram="@blissevents",
    )
    db_session.add(planner)
    await db_session.commit()
    await db_session.refresh(planner)
    return planner


@pytest.fixture
async def test_event(
    db_session: AsyncSession,
    test_client: Client,
    test_venue: Venue,
    test_planner: Planner,
) -> Event:
    """Create an event for the booking client."""
    event = Event(
        client_id=test_client.id,
        venue_id=test_venue.id,
        planner_id=test_planner.id,
        name="Smith Wedding",
        type="Wedding",
        date=EVENT_DATE,
        guest_count=150,
        start_time="18:00:00",
        end_time="23:30:00",
        setup_time="15:00",
        arrive_venue_time="14:30",
    )
    db_session.add(event)
    await db_session.commit()
    await db_session.refresh(event)
    return event


@pytest.fixture
async def contract_template(db_session: AsyncSession) -> Template:
    template = Template(
        type=TemplateType.CONTRACT,
        name="Wedding Contract",
        content=CONTRACT_TEMPLATE,
    )
    db_session.add(template)
    await db_session.commit()
    await db_session.refresh(template)
    return template


@pytest.fixture
async def questionnaire_template(db_session: AsyncSession) -> Template:
    template = Template(
        type=TemplateType.QUESTIONNAIRE,
        name="Wedding Questionnaire",
        content="",
    )
    db_session.add(template)
    await db_session.commit()
    await db_session.refresh(template)
    return template


@pytest.fixture
async def payment_schedule(db_session: AsyncSession) -> PaymentSchedule:
    """Three-milestone plan: 35% on booking, 35% and 30% before the event."""
    schedule = PaymentSchedule(
        name="Standard 35/35/30",
        is_default=True,
        milestones=[
            {"name": "Retainer", "percentage": 35, "due_type": "on_booking", "days_offset": 0},
            {"name": "Second Payment", "percentage": 35, "due_type": "before_event", "days_offset": 60},
            {"name": "Final Balance", "percentage": 30, "due_type": "before_event", "days_offset": 10},
        ],
    )
    db_session.add(schedule)
    await db_session.commit()
    await db_session.refresh(schedule)
    return schedule
