"""Billing console configuration."""

import os

from pydantic import BaseModel, Field, field_validator

DEFAULT_API_BASE_URL = "https://billing-backend.serins.in/api"


class BillingConfig(BaseModel):
    """
    Settings for talking to the billing backend and presenting amounts.

    Values come from environment variables via load_config(); every field
    has a working default so the service starts with an empty environment.
    """

    api_base_url: str = Field(
        default=DEFAULT_API_BASE_URL,
        description="Base URL of the billing backend REST API",
        min_length=1,
    )
    request_timeout_seconds: int = Field(
        default=10,
        description="Per-request timeout for backend calls",
        ge=1,
        le=120,
    )
    currency_symbol: str = Field(
        default="₹",
        description="Symbol used when formatting amounts for display",
    )
    app_name: str = Field(
        default="Billing Console",
        description="Application name shown in API docs",
    )

    @field_validator("api_base_url")
    @classmethod
    def strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")


def load_config() -> BillingConfig:
    """
    Build configuration from environment variables.

    BILLING_API_BASE_URL, BILLING_API_TIMEOUT_SECONDS, BILLING_CURRENCY_SYMBOL
    and BILLING_APP_NAME override the defaults when set and non-empty.

    Raises:
        pydantic.ValidationError: If a value is out of range
    """
    env_fields = {
        "api_base_url": "BILLING_API_BASE_URL",
        "request_timeout_seconds": "BILLING_API_TIMEOUT_SECONDS",
        "currency_symbol": "BILLING_CURRENCY_SYMBOL",
        "app_name": "BILLING_APP_NAME",
    }

    values = {}
    for field, env_var in env_fields.items():
        value = os.getenv(env_var)
        if value:
            values[field] = value

    return BillingConfig(**values)
