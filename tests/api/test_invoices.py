"""Tests for invoice endpoints."""

from decimal import Decimal

from clients.billing_api_client import BillingAPIError


class TestQuoteEndpoint:
    """Tests for POST /api/invoices/quote."""

    def test_quote_with_backend_catalog(self, client, mock_client, invoice_body):
        response = client.post("/api/invoices/quote", json={"form": invoice_body})

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        totals = body["data"]["totals"]
        assert Decimal(totals["subtotal"]) == Decimal("225")
        assert Decimal(totals["total_tax"]) == Decimal("36.9")
        assert Decimal(totals["grand_total"]) == Decimal("261.9")
        mock_client.list_products.assert_called_once()

    def test_display_totals_formatted(self, client, invoice_body):
        response = client.post("/api/invoices/quote", json={"form": invoice_body})

        display = response.json()["data"]["display"]
        assert display["subtotal"] == "₹225.00"
        assert display["total_discount"] == "₹25.00"
        assert display["total_cgst"] == "₹18.45"
        assert display["total_sgst"] == "₹18.45"
        assert display["grand_total"] == "₹261.90"

    def test_quote_with_supplied_catalog(self, client, mock_client, invoice_body, catalog_rows):
        """A catalog in the body is used instead of fetching one."""
        response = client.post(
            "/api/invoices/quote",
            json={"form": invoice_body, "catalog": catalog_rows[:1]},
        )

        assert response.status_code == 200
        data = response.json()["data"]
        assert [item["product_id"] for item in data["items"]] == [1]
        assert data["unresolved_product_ids"] == [2]
        mock_client.list_products.assert_not_called()

    def test_empty_form_quotes_zero(self, client, invoice_body):
        invoice_body["saleItems"] = []

        response = client.post("/api/invoices/quote", json={"form": invoice_body})

        assert response.status_code == 200
        assert Decimal(response.json()["data"]["totals"]["grand_total"]) == 0

    def test_round_off(self, client, invoice_body):
        invoice_body["autoRoundOff"] = True

        response = client.post("/api/invoices/quote", json={"form": invoice_body})

        totals = response.json()["data"]["totals"]
        assert Decimal(totals["grand_total"]) == Decimal("262")
        assert Decimal(totals["round_off_adjustment"]) == Decimal("0.1")

    def test_bearer_token_forwarded(self, client, mock_client, invoice_body):
        client.post(
            "/api/invoices/quote",
            json={"form": invoice_body},
            headers={"Authorization": "Bearer user-token"},
        )

        mock_client.with_token.assert_called_once_with("user-token")

    def test_invalid_form_is_422(self, client, invoice_body):
        invoice_body["customerId"] = 0

        response = client.post("/api/invoices/quote", json={"form": invoice_body})

        assert response.status_code == 422
        assert response.json()["error"]["code"] == "VALIDATION_ERROR"

    def test_backend_down_is_503(self, client, mock_client, invoice_body):
        mock_client.list_products.side_effect = BillingAPIError("Connection failed: refused")

        response = client.post("/api/invoices/quote", json={"form": invoice_body})

        assert response.status_code == 503
        assert response.json()["error"]["code"] == "SERVICE_UNAVAILABLE"


class TestCreateEndpoint:
    """Tests for POST /api/invoices."""

    def test_creates_invoice(self, client, mock_client, invoice_body):
        mock_client.create_invoice.return_value = {"invoiceId": 55}

        response = client.post("/api/invoices", json=invoice_body)

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["invoice"] == {"invoiceId": 55}
        assert data["quote"]["display"]["grand_total"] == "₹261.90"

        payload = mock_client.create_invoice.call_args.args[0]
        assert payload["totalAmount"] == 261.9
        assert payload["tax"] == 36.9

    def test_no_items_is_400(self, client, mock_client, invoice_body):
        invoice_body["saleItems"] = []

        response = client.post("/api/invoices", json=invoice_body)

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "INVALID_REQUEST"
        mock_client.create_invoice.assert_not_called()

    def test_unknown_products_is_404(self, client, mock_client, invoice_body):
        mock_client.list_products.return_value = []

        response = client.post("/api/invoices", json=invoice_body)

        assert response.status_code == 404
        assert response.json()["error"]["code"] == "NOT_FOUND"

    def test_backend_rejection_is_502(self, client, mock_client, invoice_body):
        mock_client.create_invoice.side_effect = BillingAPIError(
            "Customer is inactive", 400, "Bad Request"
        )

        response = client.post("/api/invoices", json=invoice_body)

        assert response.status_code == 502
        error = response.json()["error"]
        assert error["code"] == "UPSTREAM_ERROR"
        assert error["message"] == "Customer is inactive"

    def test_backend_auth_failure_is_401(self, client, mock_client, invoice_body):
        mock_client.create_invoice.side_effect = BillingAPIError("Token expired", 401, "Unauthorized")

        response = client.post("/api/invoices", json=invoice_body)

        assert response.status_code == 401
        assert response.json()["error"]["code"] == "NOT_AUTHENTICATED"


class TestUpdateEndpoint:
    """Tests for PUT /api/invoices/{invoice_id}."""

    def test_updates_invoice(self, client, mock_client, invoice_body):
        mock_client.update_invoice.return_value = {"invoiceId": 42}

        response = client.put("/api/invoices/42", json=invoice_body)

        assert response.status_code == 200
        invoice_id, payload = mock_client.update_invoice.call_args.args
        assert invoice_id == 42
        assert len(payload["saleItems"]) == 2

    def test_missing_invoice_is_404(self, client, mock_client, invoice_body):
        mock_client.update_invoice.side_effect = BillingAPIError("Invoice not found", 404, "Not Found")

        response = client.put("/api/invoices/999", json=invoice_body)

        assert response.status_code == 404
        assert response.json()["error"]["message"] == "Invoice not found"

    def test_non_numeric_id_is_422(self, client, invoice_body):
        response = client.put("/api/invoices/abc", json=invoice_body)

        assert response.status_code == 422


class TestUnexpectedFailures:
    """Unhandled errors inside a route."""

    def test_500_has_request_id_header(self, client, mock_client):
        mock_client.list_products.side_effect = RuntimeError("boom")

        response = client.post(
            "/api/invoices/quote", json={"form": {"customerId": 1, "shopId": 1}}
        )

        assert response.status_code == 500
        assert response.json()["error"]["code"] == "INTERNAL_ERROR"
        assert response.headers.get("X-Request-ID") == response.json()["meta"]["request_id"]


class TestStoredInvoiceEndpoints:
    """Tests for GET /api/invoices, GET and DELETE /api/invoices/{invoice_id}."""

    def test_lists_invoices(self, client, mock_client):
        mock_client.list_invoices.return_value = [{"invoiceId": 1}]

        response = client.get("/api/invoices")

        assert response.status_code == 200
        assert response.json()["data"] == [{"invoiceId": 1}]

    def test_gets_invoice(self, client, mock_client):
        mock_client.get_invoice.return_value = {"invoiceId": 42, "invoiceNo": "INV42"}

        response = client.get("/api/invoices/42")

        assert response.status_code == 200
        assert response.json()["data"]["invoiceNo"] == "INV42"
        mock_client.get_invoice.assert_called_once_with(42)

    def test_get_missing_invoice_is_404(self, client, mock_client):
        mock_client.get_invoice.side_effect = BillingAPIError("Invoice not found", 404, "Not Found")

        response = client.get("/api/invoices/999")

        assert response.status_code == 404
        assert response.json()["error"]["code"] == "NOT_FOUND"

    def test_deletes_invoice(self, client, mock_client):
        mock_client.delete_invoice.return_value = "Invoice deleted"

        response = client.delete("/api/invoices/42")

        assert response.status_code == 200
        assert response.json()["data"] == {"invoice_id": 42, "result": "Invoice deleted"}
        mock_client.delete_invoice.assert_called_once_with(42)
