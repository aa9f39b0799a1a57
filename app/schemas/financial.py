"""
Financial schemas: line items, discount, tax selection and the computed summary.
"""

from decimal import Decimal
from pydantic import Field, model_validator

from app.schemas.base import BaseSchema
from app.models.quote import CurrencyCode, DiscountType


class LineItem(BaseSchema):
    """
    A priced line.

    ``total`` is ``quantity * unit_price`` and is derived when omitted.
    ``cost`` is informational (profit tracking) and never affects totals.
    """

    id: str | None = None
    description: str = Field(..., min_length=1)
    quantity: Decimal = Field(default=Decimal("1"))
    unit_price: Decimal = Decimal("0")
    cost: Decimal = Decimal("0")
    total: Decimal | None = None
    is_taxable: bool | None = True

    @model_validator(mode="after")
    def _derive_total(self) -> "LineItem":
        if self.total is None:
            self.total = self.quantity * self.unit_price
        return self


class DiscountSpec(BaseSchema):
    """Global quote discount."""

    type: DiscountType = DiscountType.PERCENT
    value: Decimal = Field(default=Decimal("0"), ge=0)


class TaxSelection(BaseSchema):
    """One tax toggle. Retention taxes are withheld from the total."""

    name: str = Field(..., min_length=1, max_length=100)
    rate: Decimal = Field(..., ge=0)
    is_retention: bool = False
    selected: bool = True


class TaxAmount(BaseSchema):
    """Resolved amount for a selected tax."""

    name: str
    rate: Decimal
    amount: Decimal
    is_retention: bool = False

    @property
    def signed_amount(self) -> Decimal:
        return -self.amount if self.is_retention else self.amount


class FinancialSummary(BaseSchema):
    """
    Fully-resolved quote financials. Never persisted as such: the quote keeps
    a snapshot of the totals and tax amounts at save time.
    """

    subtotal: Decimal
    discount_amount: Decimal
    taxable_subtotal: Decimal
    taxable_base: Decimal
    tax_amounts: list[TaxAmount] = Field(default_factory=list)
    total_mxn: Decimal
    total_foreign: Decimal
    currency: CurrencyCode
    exchange_rate: Decimal
    items: list[LineItem] = Field(default_factory=list)


class SummaryRequest(BaseSchema):
    """Inputs for a summary preview."""

    items: list[LineItem] = Field(default_factory=list)
    discount: DiscountSpec = Field(default_factory=DiscountSpec)
    taxes: list[TaxSelection] = Field(default_factory=list)
    currency: CurrencyCode = CurrencyCode.MXN
    exchange_rate: Decimal | None = Field(None, gt=0)
