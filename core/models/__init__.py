"""Core domain models."""

from core.models.product import Product, ProductPricing
from core.models.invoice import (
    SaleKind, BillKind, DiscountKind, PaymentMode, PaymentStatus,
    LineItem, InvoiceSettings, PricedLineItem, InvoiceTotals, InvoiceQuote,
)
from core.models.forms import SaleItemForm, InvoiceForm, CustomerForm
from core.models.report import ReportPeriod, SaleRecord, SalesReport, HsnReport

__all__ = [
    # Product
    "Product", "ProductPricing",
    # Invoice pricing
    "SaleKind", "BillKind", "DiscountKind", "PaymentMode", "PaymentStatus",
    "LineItem", "InvoiceSettings", "PricedLineItem", "InvoiceTotals", "InvoiceQuote",
    # Forms
    "SaleItemForm", "InvoiceForm", "CustomerForm",
    # Reports
    "ReportPeriod", "SaleRecord", "SalesReport", "HsnReport",
]
