"""Customer service for listing and adding shop customers."""

import logging
from typing import Any

from clients.billing_api_client import BillingAPIClient
from core.models import CustomerForm

logger = logging.getLogger(__name__)


class CustomerService:
    """Service for customer lookups and quick-add from the invoice screen."""

    def __init__(self, client: BillingAPIClient):
        self.client = client

    def _client_for(self, token: str | None) -> BillingAPIClient:
        return self.client.with_token(token) if token else self.client

    def list_all(self, token: str | None = None) -> list[dict]:
        """All customers visible to the caller, as the backend returns them."""
        return self._client_for(token).list_customers() or []

    def add(self, form: CustomerForm, token: str | None = None) -> Any:
        """
        Create a customer.

        Args:
            form: Validated customer form
            token: Bearer token to forward to the backend

        Returns:
            Backend response (the created customer, including customerId)

        Raises:
            BillingAPIError: If the backend rejects the customer
        """
        created = self._client_for(token).add_customer(form.model_dump(by_alias=True))

        logger.info(f"Customer added for shop {form.shop_id}")
        return created
