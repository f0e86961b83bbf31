# Infrastructure clients
from clients.billing_api_client import BillingAPIClient, BillingAPIError
