"""
Billing backend adapter

REST client for the billing backend.
"""

from adapters.backend.client import BillingBackendClient, BillingBackendError

__all__ = [
    "BillingBackendClient",
    "BillingBackendError",
]
