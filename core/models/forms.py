"""Invoice and customer form models.

These are the validation schemas for what the console submits. Field
names are snake_case in Python and camelCase on the wire. Money fields
pass through the money boundary before validation, so raw strings like
"1,200" or "" are accepted and clamped rather than rejected.
"""

from datetime import date
from decimal import Decimal

from pydantic import BaseModel, Field, field_validator
from pydantic.alias_generators import to_camel

from core.money import to_money, to_quantity
from core.models.invoice import (
    BillKind,
    DiscountKind,
    InvoiceSettings,
    LineItem,
    PaymentMode,
    PaymentStatus,
    SaleKind,
)
from utils.timezone import epoch_millis, parse_date

_FORM_CONFIG = {
    "alias_generator": to_camel,
    "populate_by_name": True,
}


def _default_transaction_id() -> str:
    return f"TXN{epoch_millis()}"


class SaleItemForm(BaseModel):
    """One sale item row on the invoice form."""

    product_id: int = Field(..., ge=1)
    quantity: int = Field(1, ge=1)
    discount: Decimal = Field(Decimal("0"), ge=0)
    discount_type: DiscountKind = DiscountKind.PERCENTAGE

    model_config = _FORM_CONFIG

    @field_validator("discount", mode="before")
    @classmethod
    def parse_discount(cls, value):
        return to_money(value)

    @field_validator("quantity", mode="before")
    @classmethod
    def parse_quantity(cls, value):
        return to_quantity(value)

    def to_line_item(self) -> LineItem:
        return LineItem(
            product_id=self.product_id,
            quantity=self.quantity,
            discount_value=self.discount,
            discount_kind=self.discount_type,
        )


class InvoiceForm(BaseModel):
    """Invoice header plus sale items, as submitted for create or update."""

    customer_id: int = Field(..., ge=1)
    shop_id: int = Field(..., ge=1)
    discount: Decimal = Field(Decimal("0"), ge=0)
    discount_type: DiscountKind = DiscountKind.PERCENTAGE
    amount_paid: Decimal = Field(Decimal("0"), ge=0)
    payment_mode: PaymentMode = PaymentMode.CASH
    payment_status: PaymentStatus = PaymentStatus.PAID
    remark: str = Field("", max_length=1000)
    due_date: date | None = None
    bill_type: BillKind = BillKind.GST
    sale_type: SaleKind = SaleKind.RETAIL
    transaction_id: str = Field(default_factory=_default_transaction_id, min_length=1)
    signature: str | None = None
    auto_round_off: bool = False
    sale_items: list[SaleItemForm] = Field(default_factory=list)

    model_config = _FORM_CONFIG

    @field_validator("discount", "amount_paid", mode="before")
    @classmethod
    def parse_money_fields(cls, value):
        return to_money(value)

    @field_validator("due_date", mode="before")
    @classmethod
    def parse_due_date(cls, value):
        if value is None or value == "":
            return None
        return parse_date(value)

    @field_validator("transaction_id", mode="before")
    @classmethod
    def strip_transaction_id(cls, value):
        return value.strip() if isinstance(value, str) else value

    def to_settings(self) -> InvoiceSettings:
        """Pricing settings for the calculator."""
        return InvoiceSettings(
            sale_kind=self.sale_type,
            bill_kind=self.bill_type,
            additional_discount_value=self.discount,
            additional_discount_kind=self.discount_type,
            auto_round_off=self.auto_round_off,
        )

    def to_line_items(self) -> list[LineItem]:
        """Sale items as calculator line items, in form order."""
        return [item.to_line_item() for item in self.sale_items]


class CustomerForm(BaseModel):
    """New customer form."""

    name: str = Field(..., min_length=2, max_length=255)
    place: str = Field(..., min_length=2, max_length=255)
    phone: str = Field(..., min_length=10, max_length=15, pattern=r"^\d+$")
    shop_id: int = Field(..., ge=1)
    customer_type: str = Field("RETAIL", min_length=1)

    model_config = _FORM_CONFIG

    @field_validator("name", "place", "phone", mode="before")
    @classmethod
    def strip_text(cls, value):
        return value.strip() if isinstance(value, str) else value
