"""Invoice endpoints: quote, create, update."""

from fastapi import APIRouter, Request
from pydantic import BaseModel

from api.base import bearer_token, request_id_of, success_response
from core.config import BillingConfig
from core.models import InvoiceForm, InvoiceQuote, Product
from core.money import format_money


class QuoteRequest(BaseModel):
    form: InvoiceForm
    catalog: list[Product] | None = None


def quote_to_json(quote: InvoiceQuote, currency_symbol: str) -> dict:
    """Quote as JSON, with exact amounts plus formatted display totals."""
    data = quote.model_dump(mode="json")
    totals = quote.totals
    data["display"] = {
        "subtotal": format_money(totals.subtotal, currency_symbol),
        "total_discount": format_money(totals.total_discount, currency_symbol),
        "total_cgst": format_money(totals.total_cgst, currency_symbol),
        "total_sgst": format_money(totals.total_sgst, currency_symbol),
        "total_tax": format_money(totals.total_tax, currency_symbol),
        "grand_total": format_money(totals.grand_total, currency_symbol),
    }
    return data


def create_invoices_router(services: dict, config: BillingConfig) -> APIRouter:
    router = APIRouter()

    invoice_svc = services["invoice"]
    symbol = config.currency_symbol

    @router.get("/invoices")
    def list_invoices(request: Request):
        invoices = invoice_svc.list_all(token=bearer_token(request))
        return success_response(invoices, request_id_of(request)).model_dump(mode="json")

    @router.get("/invoices/{invoice_id}")
    def get_invoice(request: Request, invoice_id: int):
        invoice = invoice_svc.get(invoice_id, token=bearer_token(request))
        return success_response(invoice, request_id_of(request)).model_dump(mode="json")

    @router.delete("/invoices/{invoice_id}")
    def delete_invoice(request: Request, invoice_id: int):
        result = invoice_svc.delete(invoice_id, token=bearer_token(request))
        return success_response(
            {"invoice_id": invoice_id, "result": result}, request_id_of(request)
        ).model_dump(mode="json")

    @router.post("/invoices/quote")
    def quote_invoice(request: Request, body: QuoteRequest):
        quote = invoice_svc.quote(body.form, catalog=body.catalog, token=bearer_token(request))
        return success_response(
            quote_to_json(quote, symbol), request_id_of(request)
        ).model_dump(mode="json")

    @router.post("/invoices")
    def create_invoice(request: Request, form: InvoiceForm):
        result = invoice_svc.create(form, token=bearer_token(request))
        return success_response(
            {"invoice": result["invoice"], "quote": quote_to_json(result["quote"], symbol)},
            request_id_of(request),
        ).model_dump(mode="json")

    @router.put("/invoices/{invoice_id}")
    def update_invoice(request: Request, invoice_id: int, form: InvoiceForm):
        result = invoice_svc.update(invoice_id, form, token=bearer_token(request))
        return success_response(
            {"invoice": result["invoice"], "quote": quote_to_json(result["quote"], symbol)},
            request_id_of(request),
        ).model_dump(mode="json")

    return router
