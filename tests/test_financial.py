"""
Financial calculator tests.
"""

from decimal import Decimal

import pytest

from app.models.quote import CurrencyCode, DiscountType
from app.schemas.financial import DiscountSpec, LineItem, TaxSelection
from app.services.financial import (
    DISCOUNT_ITEM_ID,
    build_discount_item,
    compute_summary,
    compute_taxable_base,
    default_tax_catalog,
    effective_items,
)


def iva(selected: bool = True) -> TaxSelection:
    return TaxSelection(name="IVA", rate=Decimal("16"), selected=selected)


def iva_retenido(selected: bool = True) -> TaxSelection:
    return TaxSelection(name="IVA Retenido", rate=Decimal("10.6667"), is_retention=True, selected=selected)


def isr_retenido(selected: bool = True) -> TaxSelection:
    return TaxSelection(name="ISR Retenido", rate=Decimal("1.25"), is_retention=True, selected=selected)


@pytest.fixture
def mixed_items() -> list[LineItem]:
    return [
        LineItem(description="Dessert table", quantity=Decimal("1"), unit_price=Decimal("6000")),
        LineItem(description="Macarons", quantity=Decimal("200"), unit_price=Decimal("15")),
        LineItem(description="Delivery", quantity=Decimal("1"), unit_price=Decimal("1000"), is_taxable=False),
    ]


def test_flete_example():
    """One taxable item, 10% discount and IVA."""
    items = [
        LineItem(
            description="Flete",
            quantity=Decimal("1"),
            unit_price=Decimal("2500"),
            total=Decimal("2500"),
            is_taxable=True,
        )
    ]
    summary = compute_summary(
        items,
        DiscountSpec(type=DiscountType.PERCENT, value=Decimal("10")),
        [iva()],
    )

    assert summary.subtotal == Decimal("2500")
    assert summary.discount_amount == Decimal("250")
    assert summary.taxable_base == Decimal("2250")
    assert summary.tax_amounts[0].amount == Decimal("360")
    assert summary.total_mxn == Decimal("2610")
    assert summary.total_foreign == Decimal("2610")
    assert summary.exchange_rate == Decimal("1")


def test_line_total_derived_when_omitted():
    item = LineItem(description="Cupcakes", quantity=Decimal("24"), unit_price=Decimal("45.50"))
    assert item.total == Decimal("1092.00")


def test_taxable_base_prorates_discount(mixed_items):
    discount = DiscountSpec(type=DiscountType.AMOUNT, value=Decimal("1000"))
    summary = compute_summary(mixed_items, discount, [iva()])

    subtotal = Decimal("10000")
    taxable_subtotal = Decimal("9000")
    expected_base = taxable_subtotal - Decimal("1000") * taxable_subtotal / subtotal

    assert summary.subtotal == subtotal
    assert summary.taxable_subtotal == taxable_subtotal
    assert summary.taxable_base == expected_base
    assert summary.taxable_base <= summary.taxable_subtotal


def test_taxable_base_never_negative(mixed_items):
    taxable_subtotal, taxable_base = compute_taxable_base(mixed_items, Decimal("50000"))
    assert taxable_subtotal == Decimal("9000")
    assert taxable_base == Decimal("0")


def test_taxable_base_with_empty_cart():
    assert compute_taxable_base([], Decimal("100")) == (Decimal("0"), Decimal("0"))


def test_unset_taxable_flag_counts_as_taxable():
    items = [LineItem(description="Cake", unit_price=Decimal("500"), is_taxable=None)]
    taxable_subtotal, _ = compute_taxable_base(items, Decimal("0"))
    assert taxable_subtotal == Decimal("500")


@pytest.mark.parametrize(
    "taxes",
    [
        [],
        [iva()],
        [iva(), iva_retenido()],
        [iva(), iva_retenido(), isr_retenido()],
        [iva_retenido(), isr_retenido()],
    ],
)
def test_total_reconciles_with_taxes(mixed_items, taxes):
    discount = DiscountSpec(type=DiscountType.PERCENT, value=Decimal("5"))
    summary = compute_summary(mixed_items, discount, taxes)

    added = sum((t.amount for t in summary.tax_amounts if not t.is_retention), Decimal("0"))
    withheld = sum((t.amount for t in summary.tax_amounts if t.is_retention), Decimal("0"))

    assert summary.total_mxn == summary.subtotal - summary.discount_amount + added - withheld


def test_unselected_taxes_are_ignored(mixed_items):
    summary = compute_summary(mixed_items, None, [iva(selected=False), isr_retenido()])
    assert [t.name for t in summary.tax_amounts] == ["ISR Retenido"]
    assert summary.total_mxn < summary.subtotal


def test_discount_item_appended_last(mixed_items):
    discount = DiscountSpec(type=DiscountType.PERCENT, value=Decimal("10"))
    items = effective_items(mixed_items, discount)

    assert len(items) == len(mixed_items) + 1
    assert [i.id for i in items].count(DISCOUNT_ITEM_ID) == 1
    last = items[-1]
    assert last.id == DISCOUNT_ITEM_ID
    assert last.description == "Discount (10%)"
    assert last.total == Decimal("-1000")
    assert last.is_taxable is True


def test_zero_discount_removes_discount_item(mixed_items):
    discounted = effective_items(mixed_items, DiscountSpec(value=Decimal("10")))
    cleared = effective_items(discounted, DiscountSpec(value=Decimal("0")))

    assert all(item.id != DISCOUNT_ITEM_ID for item in cleared)
    assert len(cleared) == len(mixed_items)


def test_stale_discount_item_does_not_count_toward_subtotal(mixed_items):
    stale = LineItem(id=DISCOUNT_ITEM_ID, description="Discount", unit_price=Decimal("-300"))
    summary = compute_summary([*mixed_items, stale], DiscountSpec(type=DiscountType.AMOUNT, value=Decimal("500")))

    assert summary.subtotal == Decimal("10000")
    assert summary.items[-1].total == Decimal("-500")
    assert sum(1 for i in summary.items if i.id == DISCOUNT_ITEM_ID) == 1


def test_amount_discount_label():
    item = build_discount_item(DiscountSpec(type=DiscountType.AMOUNT, value=Decimal("750")), Decimal("5000"))
    assert item.description == "Discount"
    assert item.unit_price == Decimal("-750")


def test_oversize_discount_yields_negative_total():
    items = [LineItem(description="Tasting", unit_price=Decimal("500"))]
    summary = compute_summary(items, DiscountSpec(type=DiscountType.AMOUNT, value=Decimal("800")))

    assert summary.discount_amount == Decimal("800")
    assert summary.total_mxn == Decimal("-300")


def test_foreign_currency_uses_given_rate(mixed_items):
    summary = compute_summary(mixed_items, currency=CurrencyCode.USD, exchange_rate=Decimal("20"))

    assert summary.total_mxn == Decimal("10000")
    assert summary.total_foreign == Decimal("500")
    assert summary.exchange_rate == Decimal("20")


def test_foreign_currency_without_rate_uses_fallback(mixed_items):
    summary = compute_summary(mixed_items, currency="EUR")
    assert summary.exchange_rate == Decimal("18.90")
    assert summary.currency == CurrencyCode.EUR


def test_default_tax_catalog_is_unselected():
    catalog = default_tax_catalog()
    assert [t.name for t in catalog] == ["IVA", "IVA Retenido", "ISR", "ISR Retenido"]
    assert not any(t.selected for t in catalog)
    assert [t.is_retention for t in catalog] == [False, True, False, True]
