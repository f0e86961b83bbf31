"""Report query and result models."""

from datetime import date
from decimal import Decimal

from pydantic import BaseModel, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from utils.timezone import parse_date


class ReportPeriod(BaseModel):
    """Inclusive date range for a report query."""

    from_date: date
    to_date: date

    @field_validator("from_date", "to_date", mode="before")
    @classmethod
    def parse_dates(cls, value):
        return parse_date(value)

    @model_validator(mode="after")
    def check_order(self) -> "ReportPeriod":
        """From date cannot be later than to date."""
        if self.from_date > self.to_date:
            raise ValueError("From date cannot be later than to date")
        return self


class _ReportModel(BaseModel):
    model_config = {
        "alias_generator": to_camel,
        "populate_by_name": True,
        "extra": "ignore",
    }


class SaleRecord(_ReportModel):
    """One invoice row of a sales report."""

    invoice_no: str
    sale_date: str
    customer_name: str | None = None
    total_amount: Decimal = Decimal("0")
    tax: Decimal = Decimal("0")
    final_amount: Decimal = Decimal("0")
    payment_status: str | None = None


class SalesReport(_ReportModel):
    """Sales between two dates."""

    sales: list[SaleRecord] = Field(default_factory=list)
    invoice_count: int = 0
    total_final_amount: Decimal = Decimal("0")
    total_tax: Decimal = Decimal("0")

    def count_by_status(self) -> dict[str, int]:
        """Number of invoices per payment status (PAID, PENDING, OVERDUE)."""
        counts = {"PAID": 0, "PENDING": 0, "OVERDUE": 0}
        for sale in self.sales:
            if sale.payment_status in counts:
                counts[sale.payment_status] += 1
        return counts


class HsnReport(_ReportModel):
    """Sales totals for one HSN code."""

    hsn: str
    product_name: str | None = None
    total_quantity: Decimal = Decimal("0")
    total_amount: Decimal = Decimal("0")
    total_tax: Decimal = Decimal("0")
    final_amount: Decimal = Decimal("0")
