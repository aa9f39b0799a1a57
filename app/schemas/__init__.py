"""
Pydantic schemas for request/response validation.
"""

from app.schemas.client import (
    ClientCreate,
    ClientUpdate,
    ClientResponse,
)
from app.schemas.event import (
    EventCreate,
    EventResponse,
    VenueCreate,
    VenueResponse,
    PlannerCreate,
    PlannerResponse,
)
from app.schemas.financial import (
    LineItem,
    DiscountSpec,
    TaxSelection,
    TaxAmount,
    FinancialSummary,
)
from app.schemas.template import (
    TemplateCreate,
    TemplateResponse,
    MilestoneSchema,
    PaymentScheduleCreate,
    PaymentScheduleResponse,
    ResolvedInstallment,
)
from app.schemas.quote import (
    QuoteCreate,
    QuoteUpdate,
    QuoteResponse,
)
from app.schemas.invoice import (
    InvoiceResponse,
    InvoiceScheduleItem,
)
from app.schemas.contract import (
    ContentBlock,
    ContractResponse,
)
from app.schemas.booking import (
    ArtifactKind,
    ArtifactStatus,
    ArtifactOutcome,
    BookingResult,
)

__all__ = [
    # Client
    "ClientCreate",
    "ClientUpdate",
    "ClientResponse",
    # Event
    "EventCreate",
    "EventResponse",
    "VenueCreate",
    "VenueResponse",
    "PlannerCreate",
    "PlannerResponse",
    # Financial
    "LineItem",
    "DiscountSpec",
    "TaxSelection",
    "TaxAmount",
    "FinancialSummary",
    # Templates
    "TemplateCreate",
    "TemplateResponse",
    "MilestoneSchema",
    "PaymentScheduleCreate",
    "PaymentScheduleResponse",
    "ResolvedInstallment",
    # Quote
    "QuoteCreate",
    "QuoteUpdate",
    "QuoteResponse",
    # Invoice
    "InvoiceResponse",
    "InvoiceScheduleItem",
    # Contract
    "ContentBlock",
    "ContractResponse",
    # Booking
    "ArtifactKind",
    "ArtifactStatus",
    "ArtifactOutcome",
    "BookingResult",
]
