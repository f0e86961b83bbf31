"""Report endpoints: sales and HSN."""

from fastapi import APIRouter, Query, Request

from api.base import bearer_token, request_id_of, success_response
from core.models import ReportPeriod


def create_reports_router(services: dict) -> APIRouter:
    router = APIRouter()

    report_svc = services["report"]

    @router.get("/reports/sales")
    def sales_report(
        request: Request,
        from_date: str = Query(...),
        to_date: str = Query(...),
    ):
        period = ReportPeriod(from_date=from_date, to_date=to_date)
        report = report_svc.sales_report(period, token=bearer_token(request))

        data = report.model_dump(mode="json")
        data["status_counts"] = report.count_by_status()
        return success_response(data, request_id_of(request)).model_dump(mode="json")

    @router.get("/reports/hsn")
    def hsn_report(
        request: Request,
        hsn: str = Query(...),
        from_date: str = Query(...),
        to_date: str = Query(...),
    ):
        period = ReportPeriod(from_date=from_date, to_date=to_date)
        report = report_svc.hsn_report(hsn, period, token=bearer_token(request))
        return success_response(
            report.model_dump(mode="json"), request_id_of(request)
        ).model_dump(mode="json")

    return router
