"""Product catalog models.

Catalog entries come from the backend's /products/all listing in camelCase.
Rates are in rupees, tax rates are percentages (9 = 9%).
"""

from decimal import Decimal

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel


class ProductPricing(BaseModel):
    """Pricing snapshot of a single product, keyed by product_id."""

    product_id: int
    retail_rate: Decimal = Field(Decimal("0"), ge=0)
    wholesale_rate: Decimal = Field(Decimal("0"), ge=0)
    cgst_percent: Decimal = Field(Decimal("0"), ge=0)
    sgst_percent: Decimal = Field(Decimal("0"), ge=0)
    name: str | None = None
    hsn: str | None = None

    model_config = {"frozen": True}


class Product(BaseModel):
    """Catalog product as returned by the backend."""

    product_id: int
    name: str = ""
    product_number: str | None = None
    hsn: str | None = None
    description: str | None = None
    quantity: Decimal | None = None  # Units in stock
    our_price: Decimal | None = Field(None, ge=0)
    wholesale_rate: Decimal = Field(Decimal("0"), ge=0)
    retail_rate: Decimal = Field(Decimal("0"), ge=0)
    tax_rate: Decimal | None = Field(None, ge=0)
    cgst: Decimal = Field(Decimal("0"), ge=0)
    sgst: Decimal = Field(Decimal("0"), ge=0)
    category: str | None = None

    model_config = {
        "alias_generator": to_camel,
        "populate_by_name": True,
        "extra": "ignore",
    }

    @property
    def pricing(self) -> ProductPricing:
        """Pricing snapshot used by the invoice calculator."""
        return ProductPricing(
            product_id=self.product_id,
            retail_rate=self.retail_rate,
            wholesale_rate=self.wholesale_rate,
            cgst_percent=self.cgst,
            sgst_percent=self.sgst,
            name=self.name or None,
            hsn=self.hsn,
        )
