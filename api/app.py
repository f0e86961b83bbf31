"""FastAPI application factory."""

import logging

from fastapi import FastAPI, Request

from api.base import request_id_of, success_response
from api.customers import create_customers_router
from api.errors import register_error_handlers
from api.invoices import create_invoices_router
from api.middleware import RequestIDMiddleware
from api.reports import create_reports_router
from clients.billing_api_client import BillingAPIClient
from core.config import BillingConfig, load_config
from core.services.customer_service import CustomerService
from core.services.invoice_service import InvoiceService
from core.services.report_service import ReportService

logger = logging.getLogger(__name__)


def create_services(client: BillingAPIClient) -> dict:
    """Service instances keyed by domain, shared by the routers."""
    return {
        "customer": CustomerService(client),
        "invoice": InvoiceService(client),
        "report": ReportService(client),
    }


def create_app(
    config: BillingConfig | None = None,
    client: BillingAPIClient | None = None,
) -> FastAPI:
    """
    Build the API app.

    Args:
        config: Settings; read from the environment when None
        client: Backend client; built from config when None
    """
    config = config or load_config()
    client = client or BillingAPIClient(config.api_base_url, config.request_timeout_seconds)
    services = create_services(client)

    app = FastAPI(title=config.app_name)
    app.add_middleware(RequestIDMiddleware)
    register_error_handlers(app)

    app.include_router(create_invoices_router(services, config), prefix="/api")
    app.include_router(create_customers_router(services), prefix="/api")
    app.include_router(create_reports_router(services), prefix="/api")

    @app.get("/api/health")
    def health(request: Request):
        return success_response({"status": "ok"}, request_id_of(request)).model_dump(mode="json")

    logger.info(f"{config.app_name} API configured for backend {config.api_base_url}")
    return app
