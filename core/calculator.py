"""
Invoice total calculator.

Turns line items, a catalog snapshot and invoice settings into a priced
invoice. Pure and deterministic: no I/O, no clock, no shared state. The
same inputs always produce equal outputs, so it is safe to call on every
form change.

Per line, in input order:
    unit_price     = retail or wholesale rate (by sale kind)
    item_subtotal  = unit_price * quantity
    discount       = item_subtotal * pct / 100   (PERCENTAGE)
                   = flat amount, not per unit   (AMOUNT)
    line_total     = item_subtotal - discount    (may go negative)
    cgst/sgst      = line_total * rate / 100     (GST bills only)
    total_price    = line_total + cgst + sgst

Invoice:
    grand_total = subtotal - additional_discount + total_tax
    optionally rounded to whole rupees, half-to-even.

All arithmetic is Decimal in a local context; nothing is rounded until
the optional round-off. Display rounding belongs to the caller.
"""

import logging
from decimal import Decimal, Context, ROUND_HALF_EVEN, localcontext
from typing import Iterable

from core.models.invoice import (
    BillKind,
    DiscountKind,
    InvoiceQuote,
    InvoiceSettings,
    InvoiceTotals,
    LineItem,
    PricedLineItem,
    SaleKind,
)
from core.models.product import ProductPricing

logger = logging.getLogger(__name__)

_ZERO = Decimal("0")
_HUNDRED = Decimal("100")
_WHOLE = Decimal("1")

_CONTEXT = Context(prec=28, rounding=ROUND_HALF_EVEN)


def _finite(value: Decimal, field: str) -> Decimal:
    if not value.is_finite():
        raise ValueError(f"{field} must be a finite number, got {value}")
    return value


def _discount(base: Decimal, value: Decimal, kind: DiscountKind) -> Decimal:
    if kind == DiscountKind.PERCENTAGE:
        return base * value / _HUNDRED
    return value


def price_line_item(
    item: LineItem,
    product: ProductPricing,
    settings: InvoiceSettings,
) -> PricedLineItem:
    """
    Price a single line item against its catalog entry.

    Raises:
        ValueError: If any input amount is NaN or infinite
    """
    with localcontext(_CONTEXT):
        if settings.sale_kind == SaleKind.RETAIL:
            unit_price = _finite(product.retail_rate, "retail_rate")
        else:
            unit_price = _finite(product.wholesale_rate, "wholesale_rate")

        discount_value = _finite(item.discount_value, "discount_value")

        item_subtotal = unit_price * item.quantity
        discount_amount = _discount(item_subtotal, discount_value, item.discount_kind)
        line_total = item_subtotal - discount_amount

        if settings.bill_kind == BillKind.GST:
            cgst_rate = _finite(product.cgst_percent, "cgst_percent")
            sgst_rate = _finite(product.sgst_percent, "sgst_percent")
        else:
            cgst_rate = _ZERO
            sgst_rate = _ZERO

        cgst_amount = line_total * cgst_rate / _HUNDRED
        sgst_amount = line_total * sgst_rate / _HUNDRED
        tax_amount = cgst_amount + sgst_amount

        return PricedLineItem(
            product_id=item.product_id,
            name=product.name,
            hsn=product.hsn,
            quantity=item.quantity,
            discount_value=discount_value,
            discount_kind=item.discount_kind,
            unit_price=unit_price,
            item_subtotal=item_subtotal,
            discount_amount=discount_amount,
            line_total=line_total,
            cgst_rate=cgst_rate,
            sgst_rate=sgst_rate,
            cgst_amount=cgst_amount,
            sgst_amount=sgst_amount,
            tax_amount=tax_amount,
            total_price=line_total + tax_amount,
        )


def calculate_invoice(
    items: Iterable[LineItem],
    catalog: Iterable[ProductPricing],
    settings: InvoiceSettings,
) -> InvoiceQuote:
    """
    Price an invoice.

    Items whose product_id is not in the catalog are left out of the
    priced items and totals, and reported in unresolved_product_ids.

    Args:
        items: Sanitized line items, in display order
        catalog: Catalog snapshot (later duplicates of a product_id win)
        settings: Sale kind, bill kind, additional discount, round-off

    Returns:
        InvoiceQuote with priced items and totals

    Raises:
        ValueError: If any input amount is NaN or infinite
    """
    by_id = {product.product_id: product for product in catalog}

    priced: list[PricedLineItem] = []
    unresolved: list[int] = []

    for item in items:
        product = by_id.get(item.product_id)
        if product is None:
            unresolved.append(item.product_id)
            continue
        priced.append(price_line_item(item, product, settings))

    if unresolved:
        logger.warning(
            f"Dropped {len(unresolved)} line item(s) with unknown products: {unresolved}"
        )

    with localcontext(_CONTEXT):
        items_before_discount = sum((p.item_subtotal for p in priced), _ZERO)
        item_discounts = sum((p.discount_amount for p in priced), _ZERO)
        subtotal = sum((p.line_total for p in priced), _ZERO)
        total_cgst = sum((p.cgst_amount for p in priced), _ZERO)
        total_sgst = sum((p.sgst_amount for p in priced), _ZERO)
        total_tax = sum((p.tax_amount for p in priced), _ZERO)

        extra_value = _finite(settings.additional_discount_value, "additional_discount_value")
        if extra_value > 0:
            additional_discount = _discount(
                subtotal, extra_value, settings.additional_discount_kind
            )
        else:
            additional_discount = _ZERO

        unrounded = subtotal - additional_discount + total_tax
        if settings.auto_round_off:
            grand_total = unrounded.quantize(_WHOLE, rounding=ROUND_HALF_EVEN)
        else:
            grand_total = unrounded

        totals = InvoiceTotals(
            items_before_discount=items_before_discount,
            item_discounts=item_discounts,
            subtotal=subtotal,
            total_cgst=total_cgst,
            total_sgst=total_sgst,
            total_tax=total_tax,
            additional_discount_amount=additional_discount,
            round_off_adjustment=grand_total - unrounded,
            grand_total=grand_total,
        )

    return InvoiceQuote(
        items=tuple(priced),
        totals=totals,
        unresolved_product_ids=tuple(unresolved),
    )
