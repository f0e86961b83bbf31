"""Invoice pricing models.

Amounts are Decimal rupees. Discount and tax rates are percentages
(10 = 10%). Every model here is immutable: a new quote is computed on
each input change instead of mutating the previous one.
"""

from decimal import Decimal
from enum import Enum

from pydantic import BaseModel, Field


class SaleKind(str, Enum):
    """Which catalog rate applies to the sale."""

    RETAIL = "RETAIL"
    WHOLESALE = "WHOLESALE"


class BillKind(str, Enum):
    """Whether GST is charged on the bill."""

    GST = "GST"
    NON_GST = "NON_GST"


class DiscountKind(str, Enum):
    """How a discount value is interpreted."""

    PERCENTAGE = "PERCENTAGE"  # Percent of the amount it applies to
    AMOUNT = "AMOUNT"          # Flat rupee deduction


class PaymentMode(str, Enum):
    CASH = "CASH"
    CARD = "CARD"
    UPI = "UPI"
    CHEQUE = "CHEQUE"
    BANK_TRANSFER = "BANK_TRANSFER"


class PaymentStatus(str, Enum):
    PAID = "PAID"
    PENDING = "PENDING"
    OVERDUE = "OVERDUE"


class LineItem(BaseModel):
    """One product entry on an invoice, already sanitized."""

    product_id: int
    quantity: int = Field(..., ge=1)
    discount_value: Decimal = Field(Decimal("0"), ge=0)
    discount_kind: DiscountKind = DiscountKind.PERCENTAGE

    model_config = {"frozen": True}


class InvoiceSettings(BaseModel):
    """Invoice-wide pricing settings."""

    sale_kind: SaleKind = SaleKind.RETAIL
    bill_kind: BillKind = BillKind.GST
    additional_discount_value: Decimal = Field(Decimal("0"), ge=0)
    additional_discount_kind: DiscountKind = DiscountKind.PERCENTAGE
    auto_round_off: bool = False

    model_config = {"frozen": True}


class PricedLineItem(BaseModel):
    """A line item with every derived amount filled in."""

    product_id: int
    name: str | None = None
    hsn: str | None = None
    quantity: int
    discount_value: Decimal
    discount_kind: DiscountKind
    unit_price: Decimal
    item_subtotal: Decimal
    discount_amount: Decimal
    line_total: Decimal  # After discount, before tax
    cgst_rate: Decimal
    sgst_rate: Decimal
    cgst_amount: Decimal
    sgst_amount: Decimal
    tax_amount: Decimal
    total_price: Decimal  # line_total + tax_amount

    model_config = {"frozen": True}


class InvoiceTotals(BaseModel):
    """Invoice-level aggregates."""

    items_before_discount: Decimal
    item_discounts: Decimal
    subtotal: Decimal
    total_cgst: Decimal
    total_sgst: Decimal
    total_tax: Decimal
    additional_discount_amount: Decimal
    round_off_adjustment: Decimal
    grand_total: Decimal

    model_config = {"frozen": True}

    @property
    def total_discount(self) -> Decimal:
        """Line discounts plus the additional discount."""
        return self.item_discounts + self.additional_discount_amount


class InvoiceQuote(BaseModel):
    """Result of pricing an invoice."""

    items: tuple[PricedLineItem, ...]
    totals: InvoiceTotals
    unresolved_product_ids: tuple[int, ...] = ()

    model_config = {"frozen": True}

    @property
    def is_empty(self) -> bool:
        """Whether no line item resolved to a catalog product."""
        return len(self.items) == 0
