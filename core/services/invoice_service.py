"""
Invoice service for pricing and submitting invoices.

Prices invoice forms against the backend's catalog and submits them. The
backend recomputes and stores the authoritative total; the quote computed
here is what the user saw when they saved.
"""

import logging
from decimal import Decimal
from typing import Any

from pydantic import ValidationError

from clients.billing_api_client import BillingAPIClient
from core.calculator import calculate_invoice
from core.models import InvoiceForm, InvoiceQuote, Product
from core.money import quantize_money

logger = logging.getLogger(__name__)


def _amount(value: Decimal) -> float:
    """Money value as the backend expects it: a 2-place JSON number."""
    return float(quantize_money(value))


class InvoiceService:
    """Service for invoice pricing and submission."""

    def __init__(self, client: BillingAPIClient):
        self.client = client

    def _client_for(self, token: str | None) -> BillingAPIClient:
        return self.client.with_token(token) if token else self.client

    def load_catalog(self, token: str | None = None) -> list[Product]:
        """
        Fetch the product catalog snapshot.

        Entries that fail validation are skipped with a warning so one bad
        product does not block invoicing.

        Args:
            token: Bearer token to forward to the backend

        Returns:
            Valid catalog products in backend order

        Raises:
            BillingAPIError: If the backend request fails
        """
        rows = self._client_for(token).list_products() or []

        products = []
        for row in rows:
            try:
                products.append(Product.model_validate(row))
            except ValidationError as e:
                product_id = row.get("productId") if isinstance(row, dict) else None
                logger.warning(
                    f"Skipping invalid catalog entry {product_id}: {e.error_count()} error(s)"
                )

        logger.debug(f"Loaded {len(products)} catalog products")
        return products

    def quote(
        self,
        form: InvoiceForm,
        catalog: list[Product] | None = None,
        token: str | None = None,
    ) -> InvoiceQuote:
        """
        Price an invoice form.

        Args:
            form: Validated invoice form
            catalog: Catalog snapshot; fetched from the backend when None
            token: Bearer token to forward when fetching the catalog

        Returns:
            Priced items and totals
        """
        if catalog is None:
            catalog = self.load_catalog(token)

        return calculate_invoice(
            form.to_line_items(),
            [product.pricing for product in catalog],
            form.to_settings(),
        )

    def build_payload(self, form: InvoiceForm, quote: InvoiceQuote) -> dict[str, Any]:
        """
        Build the create/update body for the backend.

        Only priced items are sent; unresolved products never reach the
        backend.
        """
        return {
            "customerId": form.customer_id,
            "shopId": form.shop_id,
            "discount": _amount(form.discount),
            "discountType": form.discount_type.value,
            "amountPaid": _amount(form.amount_paid),
            "paymentMode": form.payment_mode.value,
            "paymentStatus": form.payment_status.value,
            "remark": form.remark,
            "dueDate": form.due_date.isoformat() if form.due_date else None,
            "billType": form.bill_type.value,
            "saleType": form.sale_type.value,
            "transactionId": form.transaction_id,
            "signature": form.signature,
            "totalAmount": _amount(quote.totals.grand_total),
            "tax": _amount(quote.totals.total_tax),
            "saleItems": [
                {
                    "productId": item.product_id,
                    "quantity": item.quantity,
                    "discount": _amount(item.discount_value),
                    "discountType": item.discount_kind.value,
                    "rate": _amount(item.unit_price),
                    "amount": _amount(item.item_subtotal),
                }
                for item in quote.items
            ],
        }

    def list_all(self, token: str | None = None) -> list[dict]:
        """All invoices visible to the caller, as the backend returns them."""
        return self._client_for(token).list_invoices() or []

    def get(self, invoice_id: int, token: str | None = None) -> dict:
        """
        Fetch one stored invoice.

        Raises:
            ValueError: If the backend returns no invoice
            BillingAPIError: If the backend request fails
        """
        invoice = self._client_for(token).get_invoice(invoice_id)
        if not invoice:
            raise ValueError(f"Invoice {invoice_id} not found")
        return invoice

    def delete(self, invoice_id: int, token: str | None = None) -> Any:
        """
        Delete a stored invoice.

        Returns:
            Backend response (a confirmation message)

        Raises:
            BillingAPIError: If the backend refuses or the invoice does not exist
        """
        result = self._client_for(token).delete_invoice(invoice_id)

        logger.info(f"Invoice {invoice_id} deleted")
        return result

    def _prepare(self, form: InvoiceForm, token: str | None) -> tuple[InvoiceQuote, dict[str, Any]]:
        if not form.sale_items:
            raise ValueError("Invoice has no items. Add at least one item.")

        quote = self.quote(form, token=token)
        if quote.is_empty:
            raise ValueError(
                f"Products not found in catalog: "
                f"{', '.join(str(pid) for pid in quote.unresolved_product_ids)}"
            )

        return quote, self.build_payload(form, quote)

    def create(self, form: InvoiceForm, token: str | None = None) -> dict[str, Any]:
        """
        Price and submit a new invoice.

        Args:
            form: Validated invoice form
            token: Bearer token to forward to the backend

        Returns:
            {"invoice": backend response, "quote": InvoiceQuote}

        Raises:
            ValueError: If the form has no items or none resolve to products
            BillingAPIError: If the backend rejects the invoice
        """
        quote, payload = self._prepare(form, token)

        created = self._client_for(token).create_invoice(payload)

        logger.info(
            f"Invoice {form.transaction_id} submitted: "
            f"{len(quote.items)} item(s), total {payload['totalAmount']:.2f}"
        )
        return {"invoice": created, "quote": quote}

    def update(self, invoice_id: int, form: InvoiceForm, token: str | None = None) -> dict[str, Any]:
        """
        Price and resubmit an existing invoice.

        Args:
            invoice_id: Backend invoice ID
            form: Validated invoice form
            token: Bearer token to forward to the backend

        Returns:
            {"invoice": backend response, "quote": InvoiceQuote}

        Raises:
            ValueError: If the form has no items or none resolve to products
            BillingAPIError: If the backend rejects the update
        """
        quote, payload = self._prepare(form, token)

        updated = self._client_for(token).update_invoice(invoice_id, payload)

        logger.info(
            f"Invoice {invoice_id} updated: "
            f"{len(quote.items)} item(s), total {payload['totalAmount']:.2f}"
        )
        return {"invoice": updated, "quote": quote}
