"""
Token substitution service.

Replaces ``{{key}}`` placeholders (and their legacy ``[Label]`` spelling) in
template HTML with values taken from a hydration context. Substitution is
total: a token without a value renders as its bracketed label and unknown
``{{key}}`` placeholders render as ``[key]``.
"""

import html
import re
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Callable, Optional, Sequence

from app.core.config import settings
from app.core.formatters import (
    format_currency,
    format_long_date,
    format_number,
    format_quantity,
)
from app.models.client import Client
from app.models.event import Event, Venue, Planner
from app.models.invoice import Invoice, InvoiceStatus
from app.models.quote import Quote
from app.services.financial import line_items_from_quote
from app.services.payment_schedule import build_invoice_schedule


@dataclass(frozen=True)
class Token:
    key: str
    label: str
    category: str
    description: str = ""


@dataclass
class HydrationContext:
    """Entities available to a template. Any of them may be missing."""

    client: Optional[Client] = None
    event: Optional[Event] = None
    venue: Optional[Venue] = None
    planner: Optional[Planner] = None
    quote: Optional[Quote] = None
    invoices: Sequence[Invoice] = field(default_factory=list)
    today: Optional[date] = None


SYSTEM_TOKENS: list[Token] = [
    # Client
    Token("client_first_name", "Client 1 First Name", "Client", "Primary client's first name"),
    Token("client_last_name", "Client 1 Last Name", "Client", "Primary client's last name"),
    Token("client_phone", "Client 1 Mobile", "Client", "Primary mobile number"),
    Token("client_email", "Client 1 Email", "Client", "Primary email address"),
    Token("client_address", "Client 1 Address", "Client", "Billing address street"),
    Token("client_city_state_zip", "Client 1 City/State/Zip", "Client", "Full location string"),
    # Event
    Token("event_name", "Event Name", "Event", "e.g. Smith Wedding"),
    Token("event_type", "Event Type", "Event", "Wedding, Corporate, etc."),
    Token("event_date", "Event Date", "Event", "Date of the main event"),
    Token("guest_count", "Guest Count", "Event", "Total expected guests"),
    # Timeline
    Token("time_arrive", "Arrive at Venue", "Timeline", "Arrival at venue"),
    Token("time_setup", "Setup Time", "Timeline", "Setup start time"),
    Token("time_start", "Event Start Time", "Timeline", "Guest arrival / Start"),
    Token("event_start_time", "Event Start Time (Alias)", "Timeline", "Alias for time_start"),
    Token("time_end", "Event End Time", "Timeline", "Event conclusion"),
    Token("event_end_time", "Event End Time (Alias)", "Timeline", "Alias for time_end"),
    # Venue
    Token("venue_name", "Venue Name", "Venue", "Name of the venue"),
    Token("venue_sub_location", "Venue Sub-Location", "Venue", "Specific room or area"),
    Token("venue_address", "Venue Address", "Venue", "Street address"),
    Token("venue_location_full", "Venue City/State/Zip", "Venue", "Full location string"),
    Token("venue_website", "Venue Website", "Venue", "Website URL"),
    # Planner
    Token("planner_company", "Planner Company", "Planner", "Agency name"),
    Token("planner_name", "Lead Planner Name", "Planner", "Full name"),
    Token("planner_phone", "Planner Phone", "Planner", "Mobile number"),
    Token("planner_email", "Planner Email", "Planner", "Email address"),
    Token("planner_instagram", "Planner Instagram", "Planner", "Social handle"),
    # Financial
    Token("invoice_total", "Invoice Total", "Financial", "Total amount of invoice"),
    Token("balance_due", "Balance Due", "Financial", "Remaining balance"),
    Token("quote_line_items", "Quote Line Items", "Financial", "Table of items from the quote"),
    Token("invoice_schedule", "Invoice Schedule", "Financial", "List of invoices with due dates and amounts"),
    # System
    Token("company_name", "My Company Name", "System", "Your company name"),
    Token("current_date", "Current Date", "System", "Today's date"),
]

# Tokens whose values are markup and must not be escaped
HTML_TOKENS = {"quote_line_items", "invoice_schedule"}

UNKNOWN_TOKEN = re.compile(r"\{\{\s*([\w.]+)\s*\}\}")

CELL = 'style="padding: 8px; border-bottom: 1px solid #ddd;"'
CELL_RIGHT = 'style="padding: 8px; border-bottom: 1px solid #ddd; text-align: right;"'
HEAD = 'style="padding: 8px; text-align: left; border-bottom: 2px solid #ddd;"'
HEAD_RIGHT = 'style="padding: 8px; text-align: right; border-bottom: 2px solid #ddd;"'
TABLE = 'style="width: 100%; border-collapse: collapse; font-family: sans-serif; font-size: 14px;"'


def _join(*parts: Optional[str], sep: str = ", ") -> str:
    return sep.join(p for p in parts if p)


def _hhmm(value: Optional[str]) -> str:
    value = value or ""
    return value[:5] if len(value) > 5 else value


def render_line_items_table(quote: Quote) -> str:
    """Quote items with subtotal, tax snapshot and grand total, in MXN."""
    items = line_items_from_quote(quote)
    if not items:
        return ""

    rows = "".join(
        f"<tr><td {CELL}>{html.escape(item.description)}</td>"
        f"<td {CELL_RIGHT}>{format_quantity(item.quantity)}</td>"
        f"<td {CELL_RIGHT}>{format_number(item.unit_price)}</td>"
        f"<td {CELL_RIGHT}>{format_number(item.total)}</td></tr>"
        for item in items
    )

    subtotal = sum((item.total for item in items), Decimal("0"))
    net_taxes = sum(
        (-tax.amount if tax.is_retention else tax.amount for tax in quote.taxes),
        Decimal("0"),
    )
    tax_rows = "".join(
        f"<tr><td>{html.escape(tax.name)} ({tax.rate.normalize():f}%)</td>"
        f"<td style=\"text-align: right;\">"
        f"{format_currency(-tax.amount if tax.is_retention else tax.amount, 'MXN')}</td></tr>"
        for tax in quote.taxes
    )

    return (
        f"<table {TABLE}><thead><tr>"
        f"<th {HEAD}>Description</th><th {HEAD_RIGHT}>Qty</th>"
        f"<th {HEAD_RIGHT}>Price</th><th {HEAD_RIGHT}>Total</th>"
        f"</tr></thead><tbody>{rows}</tbody></table>"
        f"<table style=\"border-collapse: collapse; min-width: 260px; margin-left: auto;\"><tbody>"
        f"<tr><td>Subtotal</td><td style=\"text-align: right;\">{format_currency(subtotal, 'MXN')}</td></tr>"
        f"{tax_rows}"
        f"<tr><td><strong>Grand Total</strong></td>"
        f"<td style=\"text-align: right;\"><strong>{format_currency(subtotal + net_taxes, 'MXN')}</strong></td></tr>"
        f"</tbody></table>"
    )


def render_invoice_schedule_table(
    invoices: Sequence[Invoice],
    quote: Optional[Quote],
    event: Optional[Event],
) -> str:
    """Payment schedule table. Empty when there is nothing to schedule."""
    schedule = build_invoice_schedule(invoices, quote, event)
    if not schedule:
        return ""

    rows = "".join(
        f"<tr><td {CELL}>{html.escape(row.label)}</td>"
        f"<td {CELL}>{row.due_date_label}</td>"
        f"<td {CELL_RIGHT}>{format_currency(row.amount, 'MXN')}</td></tr>"
        for row in schedule
    )
    return (
        f"<table {TABLE}><thead><tr>"
        f"<th {HEAD}>Payment</th><th {HEAD}>Due Date</th><th {HEAD_RIGHT}>Amount</th>"
        f"</tr></thead><tbody>{rows}</tbody></table>"
    )


class TokenService:
    """Substitutes system tokens from a hydration context."""

    def __init__(self, tokens: Sequence[Token] = SYSTEM_TOKENS):
        self.tokens = list(tokens)
        self._resolvers: dict[str, Callable[[str, HydrationContext], str]] = {
            "Client": self._client_value,
            "Event": self._event_value,
            "Timeline": self._timeline_value,
            "Venue": self._venue_value,
            "Planner": self._planner_value,
            "Financial": self._financial_value,
            "System": self._system_value,
        }

    def replace_tokens(self, content: str, context: HydrationContext) -> str:
        """Replace every known token, then mark leftover placeholders."""
        if not content:
            return ""

        result = content
        for token in self.tokens:
            pattern = re.compile(
                r"\{\{\s*" + re.escape(token.key) + r"\s*\}\}|\[" + re.escape(token.label) + r"\]"
            )
            if not pattern.search(result):
                continue
            value = self.resolve(token, context) or f"[{token.label}]"
            result = pattern.sub(lambda _: value, result)

        return UNKNOWN_TOKEN.sub(lambda m: f"[{m.group(1)}]", result)

    def resolve(self, token: Token, context: HydrationContext) -> str:
        """Value for one token, or an empty string when the context lacks it."""
        resolver = self._resolvers.get(token.category)
        if resolver is None:
            return ""
        value = resolver(token.key, context) or ""
        if token.key in HTML_TOKENS:
            return value
        return html.escape(value, quote=False)

    def _client_value(self, key: str, context: HydrationContext) -> str:
        client = context.client
        if client is None:
            return ""
        if key == "client_first_name":
            return client.first_name
        if key == "client_last_name":
            return client.last_name
        if key == "client_email":
            return client.email or ""
        if key == "client_phone":
            return client.phone or ""
        if key == "client_address":
            if client.address:
                return client.address
            if client.city:
                return f"{client.city}, {client.state or ''} {client.zip_code or ''}".strip()
            return ""
        if key == "client_city_state_zip":
            return _join(client.city, client.state, client.zip_code)
        return ""

    def _event_value(self, key: str, context: HydrationContext) -> str:
        event = context.event
        if event is None:
            return ""
        if key == "event_name":
            return event.name
        if key == "event_type":
            return event.type or ""
        if key == "event_date":
            return format_long_date(event.date) if event.date else ""
        if key == "guest_count":
            return str(event.guest_count) if event.guest_count is not None else ""
        return ""

    def _timeline_value(self, key: str, context: HydrationContext) -> str:
        event = context.event
        if event is None:
            return ""
        if key in ("time_start", "event_start_time"):
            return _hhmm(event.start_time)
        if key in ("time_end", "event_end_time"):
            return _hhmm(event.end_time)
        if key == "time_setup":
            return event.setup_time or ""
        if key == "time_arrive":
            return event.arrive_venue_time or ""
        return ""

    def _venue_value(self, key: str, context: HydrationContext) -> str:
        # Free-text details on the event take precedence over the linked venue
        event, venue = context.event, context.venue
        if key == "venue_name":
            return (event and event.venue_name) or (venue and venue.name) or ""
        if key == "venue_sub_location":
            return (event and event.venue_sub_location) or ""
        if key == "venue_address":
            return (event and event.venue_address) or (venue and venue.address) or ""
        if venue is None:
            return ""
        if key == "venue_location_full":
            return _join(venue.city, venue.state, venue.zip_code)
        if key == "venue_website":
            return venue.website or ""
        return ""

    def _planner_value(self, key: str, context: HydrationContext) -> str:
        planner = context.planner
        if planner is None:
            return ""
        if key == "planner_company":
            return planner.company or ""
        if key == "planner_name":
            return planner.full_name
        if key == "planner_phone":
            return planner.phone or ""
        if key == "planner_email":
            return planner.email or ""
        if key == "planner_instagram":
            return planner.instagram or ""
        return ""

    def _financial_value(self, key: str, context: HydrationContext) -> str:
        quote = context.quote
        if quote is None:
            return ""
        if key == "quote_line_items":
            return render_line_items_table(quote)
        if key == "invoice_schedule":
            return render_invoice_schedule_table(context.invoices, quote, context.event)
        if key == "invoice_total":
            return format_currency(quote.total_foreign, quote.currency.value)
        if key == "balance_due":
            if not context.invoices:
                return format_currency(quote.total_amount, "MXN")
            outstanding = sum(
                (
                    invoice.total_amount
                    for invoice in context.invoices
                    if invoice.status not in (InvoiceStatus.PAID, InvoiceStatus.CANCELLED)
                ),
                Decimal("0"),
            )
            return format_currency(outstanding, "MXN")
        return ""

    def _system_value(self, key: str, context: HydrationContext) -> str:
        if key == "company_name":
            return settings.COMPANY_NAME
        if key == "current_date":
            return format_long_date(context.today or date.today())
        return ""


token_service = TokenService()
