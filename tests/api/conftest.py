"""API test fixtures - app wired to a mocked billing backend."""

import pytest
from starlette.testclient import TestClient

from api.app import create_app
from core.config import BillingConfig


# =============================================================================
# APP & CLIENT FIXTURES
# =============================================================================


@pytest.fixture
def app(mock_client):
    """Full app with default config and the mock backend client."""
    return create_app(BillingConfig(), client=mock_client)


@pytest.fixture
def client(app):
    """Test client; server errors come back as 500 responses."""
    return TestClient(app, raise_server_exceptions=False)


# =============================================================================
# REQUEST BODIES
# =============================================================================


@pytest.fixture
def invoice_body() -> dict:
    """Two-item GST retail invoice as the console submits it."""
    return {
        "customerId": 7,
        "shopId": 1,
        "transactionId": "TXN1700000000000",
        "saleItems": [
            {"productId": 1, "quantity": 2, "discount": "10", "discountType": "PERCENTAGE"},
            {"productId": 2, "quantity": 1, "discount": "5", "discountType": "AMOUNT"},
        ],
    }
