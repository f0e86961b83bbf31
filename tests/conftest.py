"""Shared test fixtures for the billing console test suite."""

from pathlib import Path
from unittest.mock import Mock

import pytest
from dotenv import load_dotenv

# Load .env file BEFORE any other imports that might use env vars
load_dotenv(Path(__file__).parent.parent / ".env", override=True)

from clients.billing_api_client import BillingAPIClient
from core.models import Product, ProductPricing


# =============================================================================
# CATALOG CONSTANTS
# =============================================================================

# Matches the backend's /products/all shape
CATALOG_ROWS = [
    {
        "productId": 1,
        "name": "Basmati Rice 5kg",
        "productNumber": "RICE-5",
        "hsn": "1006",
        "quantity": 40,
        "ourPrice": 80,
        "wholesaleRate": 90,
        "retailRate": 100,
        "taxRate": 18,
        "cgst": 9,
        "sgst": 9,
        "category": "Grocery",
    },
    {
        "productId": 2,
        "name": "Sunflower Oil 1L",
        "productNumber": "OIL-1",
        "hsn": "1512",
        "quantity": 25,
        "ourPrice": 40,
        "wholesaleRate": 45,
        "retailRate": 50,
        "taxRate": 10,
        "cgst": 5,
        "sgst": 5,
        "category": "Grocery",
    },
]


# =============================================================================
# CATALOG FIXTURES
# =============================================================================


@pytest.fixture
def catalog_rows() -> list[dict]:
    """Raw catalog rows as the backend returns them."""
    return [dict(row) for row in CATALOG_ROWS]


@pytest.fixture
def catalog(catalog_rows) -> list[Product]:
    """Validated catalog products."""
    return [Product.model_validate(row) for row in catalog_rows]


@pytest.fixture
def pricing(catalog) -> list[ProductPricing]:
    """Calculator pricing snapshot of the catalog."""
    return [product.pricing for product in catalog]


# =============================================================================
# CLIENT FIXTURES
# =============================================================================


@pytest.fixture
def mock_client(catalog_rows):
    """Backend client double serving the test catalog."""
    client = Mock(spec=BillingAPIClient)
    client.with_token.return_value = client
    client.list_products.return_value = catalog_rows
    return client
