"""Global exception handlers for FastAPI."""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError
from starlette.responses import JSONResponse

from api.base import error_response, request_id_of, ErrorCodes
from clients.billing_api_client import BillingAPIError

logger = logging.getLogger(__name__)


def _json_error(request: Request, status_code: int, code: str, message: str) -> JSONResponse:
    body = error_response(code, message, request_id_of(request))
    # The Exception handler runs outside RequestIDMiddleware, so set the header here too
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(mode="json"),
        headers={"X-Request-ID": body.meta.request_id},
    )


def register_error_handlers(app: FastAPI) -> None:
    """Register global exception handlers on the app."""

    @app.exception_handler(ValueError)
    async def value_error_handler(request: Request, exc: ValueError):
        message = str(exc)
        if "not found" in message.lower():
            return _json_error(request, 404, ErrorCodes.NOT_FOUND, message)
        return _json_error(request, 400, ErrorCodes.INVALID_REQUEST, message)

    @app.exception_handler(RequestValidationError)
    async def request_validation_error_handler(request: Request, exc: RequestValidationError):
        return _json_error(request, 422, ErrorCodes.VALIDATION_ERROR, str(exc.errors()))

    @app.exception_handler(ValidationError)
    async def model_validation_error_handler(request: Request, exc: ValidationError):
        return _json_error(
            request, 422, ErrorCodes.VALIDATION_ERROR,
            str(exc.errors(include_url=False)),
        )

    @app.exception_handler(BillingAPIError)
    async def billing_api_error_handler(request: Request, exc: BillingAPIError):
        if exc.status_code is None:
            return _json_error(
                request, 503, ErrorCodes.SERVICE_UNAVAILABLE,
                "Billing backend is unavailable",
            )
        if exc.status_code == 404:
            return _json_error(request, 404, ErrorCodes.NOT_FOUND, exc.detail)
        if exc.status_code in (401, 403):
            return _json_error(request, 401, ErrorCodes.NOT_AUTHENTICATED, exc.detail)
        return _json_error(request, 502, ErrorCodes.UPSTREAM_ERROR, exc.detail)

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.exception("Unhandled exception")
        return _json_error(
            request, 500, ErrorCodes.INTERNAL_ERROR, "An internal error occurred",
        )
