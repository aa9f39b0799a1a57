"""
Database models module.
All SQLAlchemy models are exported from here for easy imports.
"""

from app.models.client import Client
from app.models.event import Event, Venue, Planner
from app.models.template import Template, PaymentSchedule
from app.models.quote import Quote, QuoteItem, QuoteTax
from app.models.invoice import Invoice, InvoiceItem
from app.models.contract import Contract
from app.models.questionnaire import Questionnaire


__all__ = [
    "Client",
    "Event",
    "Venue",
    "Planner",
    "Template",
    "PaymentSchedule",
    "Quote",
    "QuoteItem",
    "QuoteTax",
    "Invoice",
    "InvoiceItem",
    "Contract",
    "Questionnaire",
]
