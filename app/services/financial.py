"""
Financial calculator.

Pure functions that turn line items, a global discount, selected taxes and a
display currency into a fully-resolved summary. No I/O, no rounding: amounts
keep full Decimal precision and are only rounded by the formatters.
"""

from decimal import Decimal
from typing import Iterable, Sequence

from app.core.config import settings
from app.models.quote import CurrencyCode, DiscountType
from app.schemas.financial import (
    LineItem,
    DiscountSpec,
    TaxSelection,
    TaxAmount,
    FinancialSummary,
)
from app.services.currency import convert_from_base, resolve_rate


DISCOUNT_ITEM_ID = "discount"

ZERO = Decimal("0")
HUNDRED = Decimal("100")


def default_tax_catalog() -> list[TaxSelection]:
    """Organization taxes, unselected, with rates from settings."""
    return [
        TaxSelection(name="IVA", rate=settings.TAX_IVA_RATE, selected=False),
        TaxSelection(name="IVA Retenido", rate=settings.TAX_IVA_RETENIDO_RATE, is_retention=True, selected=False),
        TaxSelection(name="ISR", rate=settings.TAX_ISR_RATE, selected=False),
        TaxSelection(name="ISR Retenido", rate=settings.TAX_ISR_RETENIDO_RATE, is_retention=True, selected=False),
    ]


def regular_items(items: Iterable[LineItem]) -> list[LineItem]:
    """Drop any stale synthetic discount line."""
    return [item for item in items if item.id != DISCOUNT_ITEM_ID]


def compute_subtotal(items: Iterable[LineItem]) -> Decimal:
    return sum((item.total for item in regular_items(items)), ZERO)


def compute_discount_amount(discount: DiscountSpec | None, subtotal: Decimal) -> Decimal:
    """Amount discounts apply as-is; percent discounts apply to the subtotal. No floor."""
    if discount is None or not discount.value:
        return ZERO
    if discount.type == DiscountType.AMOUNT:
        return discount.value
    return subtotal * discount.value / HUNDRED


def build_discount_item(discount: DiscountSpec | None, subtotal: Decimal) -> LineItem | None:
    """
    Synthetic discount line for a subtotal, or None when there is no discount.
    Always taxable, with a negative total equal to the discount amount.
    """
    if discount is None or discount.value <= 0:
        return None

    amount = compute_discount_amount(discount, subtotal)
    if discount.type == DiscountType.PERCENT:
        description = f"Discount ({discount.value.normalize():f}%)"
    else:
        description = "Discount"

    return LineItem(
        id=DISCOUNT_ITEM_ID,
        description=description,
        quantity=Decimal("1"),
        unit_price=-amount,
        cost=ZERO,
        total=-amount,
        is_taxable=True,
    )


def effective_items(items: Sequence[LineItem], discount: DiscountSpec | None) -> list[LineItem]:
    """Items as presented and printed: regular items, then the discount line last."""
    regular = regular_items(items)
    discount_item = build_discount_item(discount, compute_subtotal(regular))
    if discount_item is None:
        return regular
    return [*regular, discount_item]


def line_items_from_quote(quote) -> list[LineItem]:
    """Stored quote items as line items, followed by the derived discount line."""
    items = [
        LineItem(
            id=str(row.id),
            description=row.description,
            quantity=row.quantity,
            unit_price=row.unit_price,
            cost=row.cost,
            total=row.total,
            is_taxable=row.is_taxable,
        )
        for row in quote.items
    ]
    discount = DiscountSpec(type=quote.discount_type, value=quote.discount_value or ZERO)
    return effective_items(items, discount)


def compute_taxable_base(
    items: Iterable[LineItem],
    discount_amount: Decimal,
) -> tuple[Decimal, Decimal]:
    """
    Return ``(taxable_subtotal, taxable_base)``.

    The global discount is prorated onto the taxable share of the subtotal,
    so mixed taxable/non-taxable carts are taxed on what is actually taxable.
    """
    regular = regular_items(items)
    subtotal = sum((item.total for item in regular), ZERO)
    taxable_subtotal = sum(
        (item.total for item in regular if item.is_taxable is not False),
        ZERO,
    )
    taxable_ratio = taxable_subtotal / subtotal if subtotal else ZERO
    taxable_discount = discount_amount * taxable_ratio
    return taxable_subtotal, max(ZERO, taxable_subtotal - taxable_discount)


def compute_tax_amounts(taxes: Iterable[TaxSelection], taxable_base: Decimal) -> list[TaxAmount]:
    """Amounts for the selected taxes, in selection order."""
    return [
        TaxAmount(
            name=tax.name,
            rate=tax.rate,
            amount=taxable_base * tax.rate / HUNDRED,
            is_retention=tax.is_retention,
        )
        for tax in taxes
        if tax.selected
    ]


def compute_summary(
    items: Sequence[LineItem],
    discount: DiscountSpec | None = None,
    taxes: Iterable[TaxSelection] = (),
    currency: CurrencyCode | str = CurrencyCode.MXN,
    exchange_rate: Decimal | None = None,
) -> FinancialSummary:
    """
    Compute the quote's financial summary.

    ``exchange_rate`` is MXN per one unit of ``currency``; when omitted the
    fallback table rate is used. The base currency is never converted.
    Oversize discounts are not floored and can yield a negative total.
    """
    currency = CurrencyCode(currency)
    subtotal = compute_subtotal(items)
    discount_amount = compute_discount_amount(discount, subtotal)
    taxable_subtotal, taxable_base = compute_taxable_base(items, discount_amount)
    tax_amounts = compute_tax_amounts(taxes, taxable_base)

    added = sum((t.amount for t in tax_amounts if not t.is_retention), ZERO)
    withheld = sum((t.amount for t in tax_amounts if t.is_retention), ZERO)
    total_mxn = subtotal - discount_amount + added - withheld

    rate = resolve_rate(currency, exchange_rate)

    return FinancialSummary(
        subtotal=subtotal,
        discount_amount=discount_amount,
        taxable_subtotal=taxable_subtotal,
        taxable_base=taxable_base,
        tax_amounts=tax_amounts,
        total_mxn=total_mxn,
        total_foreign=convert_from_base(total_mxn, currency, rate),
        currency=currency,
        exchange_rate=rate,
        items=effective_items(items, discount),
    )
