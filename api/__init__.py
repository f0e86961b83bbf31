"""HTTP interface for invoice pricing and reports."""

from api.app import create_app
from api.base import (
    APIResponse,
    success_response,
    error_response,
    ErrorCodes,
)
