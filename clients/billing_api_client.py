"""
HTTP client for the billing backend REST API.

The backend owns persistence, authorization and the authoritative invoice
totals. This client only moves JSON back and forth. Failures of any kind
surface as BillingAPIError carrying the backend's problem details.
"""

import json
import logging
from typing import Any

import requests

logger = logging.getLogger(__name__)


class BillingAPIError(Exception):
    """Raised when a backend request fails or returns a non-2xx status."""

    def __init__(self, message: str, status_code: int | None = None, title: str | None = None):
        self.status_code = status_code
        self.title = title
        self.detail = message
        super().__init__(message)


class BillingAPIClient:
    """Calls the billing backend with optional bearer authentication."""

    def __init__(self, base_url: str, timeout_seconds: int = 10, token: str | None = None):
        """
        Initialize with backend location.

        Args:
            base_url: API root, e.g. https://billing-backend.example.com/api
            timeout_seconds: Per-request timeout
            token: Bearer token forwarded on every request, if any

        Raises:
            ValueError: If base_url is empty
        """
        if not base_url:
            raise ValueError("base_url is required")

        self.base_url = base_url.rstrip("/")
        self.timeout_seconds = timeout_seconds
        self.token = token

    def with_token(self, token: str | None) -> "BillingAPIClient":
        """Copy of this client that authenticates as `token`."""
        return BillingAPIClient(self.base_url, self.timeout_seconds, token)

    def _request(
        self,
        method: str,
        endpoint: str,
        payload: Any = None,
        params: dict | None = None,
        expect: type | None = None,
    ) -> Any:
        """
        Send a request and decode the response.

        Returns:
            Decoded JSON, or the response text for non-JSON bodies
            (the backend answers some deletes with plain text).

        Raises:
            BillingAPIError: On connection failure, non-2xx status, or a
                body that is not of the `expect` type when one is given
        """
        url = f"{self.base_url}{endpoint}"
        headers = {"Content-Type": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"

        try:
            response = requests.request(
                method,
                url,
                headers=headers,
                data=json.dumps(payload) if payload is not None else None,
                params=params,
                timeout=self.timeout_seconds,
            )
        except requests.exceptions.RequestException as e:
            logger.error(f"Billing API connection failed for {method} {endpoint}: {e}")
            raise BillingAPIError(f"Connection failed: {e}")

        if not response.ok:
            raise self._error_from(response, endpoint)

        content_type = response.headers.get("Content-Type", "")
        if "application/json" in content_type:
            try:
                data = response.json()
            except ValueError:
                logger.error(f"Billing API returned invalid JSON for {endpoint}: {response.text}")
                raise BillingAPIError("Invalid JSON from billing API", response.status_code)
        else:
            data = response.text

        # JSON null is allowed; callers treat it as empty
        if expect is not None and data is not None and not isinstance(data, expect):
            logger.error(
                f"Billing API returned {type(data).__name__} for {endpoint}, "
                f"expected {expect.__name__}"
            )
            raise BillingAPIError(
                f"Unexpected response from billing API for {endpoint}",
                response.status_code,
                "Unexpected response",
            )

        return data

    def _error_from(self, response: requests.Response, endpoint: str) -> BillingAPIError:
        """Build an error from a problem-details body, falling back to the status."""
        title = "Request failed"
        detail = f"HTTP {response.status_code}"

        try:
            body = response.json()
        except ValueError:
            body = None

        if isinstance(body, dict):
            title = body.get("title") or title
            detail = body.get("detail") or body.get("message") or detail

        logger.error(f"Billing API error for {endpoint}: {response.status_code} {detail}")
        return BillingAPIError(detail, response.status_code, title)

    # =========================================================================
    # Products
    # =========================================================================

    def list_products(self) -> list[dict]:
        return self._request("GET", "/products/all", expect=list)

    # =========================================================================
    # Customers
    # =========================================================================

    def list_customers(self) -> list[dict]:
        return self._request("GET", "/customers/all", expect=list)

    def add_customer(self, data: dict) -> Any:
        return self._request("POST", "/customers/add", payload=data)

    # =========================================================================
    # Invoices
    # =========================================================================

    def list_invoices(self) -> list[dict]:
        return self._request("GET", "/invoices/all", expect=list)

    def get_invoice(self, invoice_id: int) -> dict:
        return self._request("GET", f"/invoices/{invoice_id}", expect=dict)

    def create_invoice(self, payload: dict) -> Any:
        return self._request("POST", "/invoices/add", payload=payload)

    def update_invoice(self, invoice_id: int, payload: dict) -> Any:
        return self._request("POST", f"/invoices/update/{invoice_id}", payload=payload)

    def delete_invoice(self, invoice_id: int) -> Any:
        return self._request("DELETE", f"/invoices/delete/{invoice_id}")

    # =========================================================================
    # Reports
    # =========================================================================

    def get_sales_report(self, start_date: str, end_date: str) -> dict:
        return self._request(
            "GET", "/sales/report",
            params={"startDate": start_date, "endDate": end_date},
            expect=dict,
        )

    def get_hsn_report(self, hsn: str, from_date: str, to_date: str) -> dict:
        return self._request(
            "GET", "/reports/hsn",
            params={"hsn": hsn, "fromDate": from_date, "toDate": to_date},
            expect=dict,
        )
