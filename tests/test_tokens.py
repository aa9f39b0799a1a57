"""
Token substitution tests.
"""

from datetime import date
from decimal import Decimal

import pytest

from app.models.client import Client
from app.models.event import Event, Venue, Planner
from app.models.invoice import Invoice, InvoiceItem, InvoiceStatus
from app.models.quote import Quote, QuoteItem, QuoteTax, CurrencyCode, DiscountType
from app.services.tokens import HydrationContext, TokenService


@pytest.fixture
def service() -> TokenService:
    return TokenService()


@pytest.fixture
def context() -> HydrationContext:
    client = Client(
        first_name="Ana",
        last_name="Smith",
        email="ana@example.com",
        phone="555-0100",
        city="Tulum",
        state="Quintana Roo",
        zip_code="77780",
    )
    venue = Venue(
        name="Casa Malca",
        address="Carretera Tulum 5",
        city="Tulum",
        state="Quintana Roo",
        zip_code="77780",
        website="https://casamalca.example.com",
    )
    planner = Planner(company="Bliss Events", first_name="Lucia", last_name="Ortega", instagram="@bliss")
    event = Event(
        name="Smith & Jones Wedding",
        type="Wedding",
        date=date(2026, 7, 17),
        guest_count=120,
        start_time="18:00:00",
        end_time="23:30",
        setup_time="15:00",
        venue_sub_location="Beach Terrace",
    )
    quote = Quote(
        currency=CurrencyCode.USD,
        exchange_rate=Decimal("20"),
        discount_type=DiscountType.PERCENT,
        discount_value=Decimal("0"),
        total_amount=Decimal("11600"),
        total_foreign=Decimal("580"),
        items=[
            QuoteItem(
                position=0,
                description="Dessert table",
                quantity=Decimal("1"),
                unit_price=Decimal("10000"),
                cost=Decimal("0"),
                total=Decimal("10000"),
                is_taxable=True,
            )
        ],
        taxes=[QuoteTax(name="IVA", rate=Decimal("16"), amount=Decimal("1600"), is_retention=False)],
    )
    return HydrationContext(
        client=client,
        event=event,
        venue=venue,
        planner=planner,
        quote=quote,
        today=date(2026, 1, 5),
    )


def test_client_and_event_tokens(service, context):
    content = "<p>{{client_first_name}} {{client_last_name}}, {{event_name}} on {{event_date}} for {{guest_count}}</p>"
    result = service.replace_tokens(content, context)
    assert result == "<p>Ana Smith, Smith &amp; Jones Wedding on July 17, 2026 for 120</p>"


def test_address_falls_back_to_city(service, context):
    assert service.replace_tokens("{{client_address}}", context) == "Tulum, Quintana Roo 77780"


def test_bracket_labels_are_replaced(service, context):
    result = service.replace_tokens("Dear [Client 1 First Name], see you at [Venue Name]", context)
    assert result == "Dear Ana, see you at Casa Malca"


def test_times_are_truncated_to_minutes(service, context):
    result = service.replace_tokens("{{time_start}}-{{event_end_time}} setup {{time_setup}}", context)
    assert result == "18:00-23:30 setup 15:00"


def test_event_venue_override_wins(service, context):
    context.event.venue_name = "Private Villa"
    result = service.replace_tokens("{{venue_name}} / {{venue_sub_location}} / {{venue_location_full}}", context)
    assert result == "Private Villa / Beach Terrace / Tulum, Quintana Roo, 77780"


def test_missing_values_render_labels(service, context):
    context.event.arrive_venue_time = None
    context.planner = None
    result = service.replace_tokens("{{time_arrive}} {{planner_name}}", context)
    assert result == "[Arrive at Venue] [Lead Planner Name]"


def test_unknown_tokens_are_marked(service, context):
    assert service.replace_tokens("Color: {{cake_flavor}}", context) == "Color: [cake_flavor]"


def test_no_placeholders_left(service, context):
    content = " ".join(f"{{{{{token.key}}}}}" for token in service.tokens)
    result = service.replace_tokens(content, HydrationContext())
    assert "{{" not in result


def test_invoice_total_in_quote_currency(service, context):
    assert service.replace_tokens("{{invoice_total}}", context) == "$580.00"


def test_balance_due_without_invoices(service, context):
    assert service.replace_tokens("{{balance_due}}", context) == "MX$11,600.00"


def test_balance_due_ignores_paid_invoices(service, context):
    context.invoices = [
        Invoice(status=InvoiceStatus.PAID, total_amount=Decimal("4060"), items=[]),
        Invoice(status=InvoiceStatus.DRAFT, total_amount=Decimal("7540"), items=[]),
        Invoice(status=InvoiceStatus.CANCELLED, total_amount=Decimal("100"), items=[]),
    ]
    assert service.replace_tokens("{{balance_due}}", context) == "MX$7,540.00"


def test_line_items_table(service, context):
    result = service.replace_tokens("{{quote_line_items}}", context)
    assert "<table" in result
    assert "Dessert table" in result
    assert "IVA (16%)" in result
    assert "MX$11,600.00" in result


def test_invoice_schedule_table(service, context):
    context.invoices = [
        Invoice(
            invoice_number="INV-1",
            status=InvoiceStatus.DRAFT,
            due_date=date(2026, 1, 5),
            total_amount=Decimal("4060"),
            items=[InvoiceItem(description="Retainer", amount=Decimal("4060"))],
        )
    ]
    result = service.replace_tokens("{{invoice_schedule}}", context)
    assert "Retainer" in result
    assert "Jan 5, 2026" in result
    assert "MX$4,060.00" in result


def test_system_tokens(service, context):
    result = service.replace_tokens("{{company_name}} {{current_date}}", context)
    assert result == "Oh My Desserts MX January 5, 2026"


def test_empty_content(service, context):
    assert service.replace_tokens("", context) == ""
