"""Report service for sales and HSN reports."""

import logging

from clients.billing_api_client import BillingAPIClient
from core.models import HsnReport, ReportPeriod, SalesReport

logger = logging.getLogger(__name__)


class ReportService:
    """Service for report queries against the billing backend."""

    def __init__(self, client: BillingAPIClient):
        self.client = client

    def _client_for(self, token: str | None) -> BillingAPIClient:
        return self.client.with_token(token) if token else self.client

    def sales_report(self, period: ReportPeriod, token: str | None = None) -> SalesReport:
        """
        Sales between two dates, inclusive.

        Raises:
            BillingAPIError: If the backend request fails
        """
        data = self._client_for(token).get_sales_report(
            period.from_date.isoformat(), period.to_date.isoformat()
        )
        report = SalesReport.model_validate(data or {})

        logger.info(
            f"Sales report {period.from_date} to {period.to_date}: "
            f"{len(report.sales)} invoice(s)"
        )
        return report

    def hsn_report(self, hsn: str, period: ReportPeriod, token: str | None = None) -> HsnReport:
        """
        Sales totals for one HSN code between two dates.

        Raises:
            ValueError: If hsn is empty
            BillingAPIError: If the backend request fails
        """
        hsn = (hsn or "").strip()
        if not hsn:
            raise ValueError("HSN code is required")

        data = self._client_for(token).get_hsn_report(
            hsn, period.from_date.isoformat(), period.to_date.isoformat()
        )
        report = HsnReport.model_validate({"hsn": hsn, **(data or {})})

        logger.info(f"HSN report {hsn} {period.from_date} to {period.to_date} fetched")
        return report
