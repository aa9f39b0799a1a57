"""
Booking document generation outcomes.
"""

from enum import Enum
from pydantic import Field

from app.schemas.base import BaseSchema


class ArtifactKind(str, Enum):
    INVOICES = "invoices"
    CONTRACT = "contract"
    QUESTIONNAIRE = "questionnaire"


class ArtifactStatus(str, Enum):
    """Outcome of one artifact generation attempt."""
    CREATED = "created"
    REGENERATED = "regenerated"
    SKIPPED_NOT_REQUESTED = "skipped_not_requested"
    SKIPPED_EXISTS = "skipped_exists"
    SKIPPED_MISSING_TEMPLATE = "skipped_missing_template"
    FAILED = "failed"


class ArtifactOutcome(BaseSchema):
    kind: ArtifactKind
    status: ArtifactStatus
    reason: str | None = None
    record_ids: list[int] = Field(default_factory=list)


class BookingResult(BaseSchema):
    """Per-artifact outcomes of one generation run, in generation order."""

    quote_id: int
    outcomes: list[ArtifactOutcome] = Field(default_factory=list)

    def outcome(self, kind: ArtifactKind) -> ArtifactOutcome | None:
        return next((o for o in self.outcomes if o.kind == kind), None)

    @property
    def has_failures(self) -> bool:
        return any(o.status == ArtifactStatus.FAILED for o in self.outcomes)
