"""Customer endpoints: list and quick-add."""

from fastapi import APIRouter, Request

from api.base import bearer_token, request_id_of, success_response
from core.models import CustomerForm


def create_customers_router(services: dict) -> APIRouter:
    router = APIRouter()

    customer_svc = services["customer"]

    @router.get("/customers")
    def list_customers(request: Request):
        customers = customer_svc.list_all(token=bearer_token(request))
        return success_response(customers, request_id_of(request)).model_dump(mode="json")

    @router.post("/customers")
    def add_customer(request: Request, form: CustomerForm):
        created = customer_svc.add(form, token=bearer_token(request))
        return success_response(created, request_id_of(request)).model_dump(mode="json")

    return router
