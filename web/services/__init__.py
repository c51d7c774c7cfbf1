"""
Web services

Request handling on top of the billing core
"""

from web.services.billing_service import BillingService
from web.services.gst_service import GstService
from web.services.ledger_service import LedgerService

__all__ = [
    "BillingService",
    "GstService",
    "LedgerService",
]
