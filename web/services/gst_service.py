"""
GST service

GST tax-invoice previews and saving bills through the backend.
"""

import logging
from typing import Any

from adapters.interfaces import ISalesBackend
from core.billing import GstItem, build_gst_bill_payload, compute_gst_totals
from core.constants import Defaults

logger = logging.getLogger(__name__)


class GstService:
    """GST billing service

    Args:
        home_state: seller's state (intra-state when the customer matches)
        backend: billing backend, needed to save bills
    """

    def __init__(self, home_state: str = Defaults.GST_HOME_STATE, backend: ISalesBackend | None = None):
        self.home_state = home_state
        self.backend = backend

    def preview(
        self,
        items: list[GstItem],
        customer_state: str,
        home_state: str | None = None,
    ) -> dict[str, Any]:
        """GST totals without saving"""
        totals = compute_gst_totals(items, customer_state, home_state or self.home_state)
        return totals.display()

    async def create_bill(
        self,
        items: list[GstItem],
        customer_state: str,
        bill_details: dict[str, Any] | None = None,
        home_state: str | None = None,
    ) -> dict[str, Any]:
        """Compute and save a GST bill

        Raises:
            RuntimeError: no backend configured
            BillingBackendError: backend failure
        """
        if self.backend is None:
            raise RuntimeError("Billing backend is not configured")

        totals = compute_gst_totals(items, customer_state, home_state or self.home_state)
        details = dict(bill_details or {})
        details.setdefault("state", customer_state)
        payload = build_gst_bill_payload(items, totals, details)

        bill = await self.backend.create_gst_bill(payload)
        logger.info(f"GST bill saved: grand_total={totals.grand_total}")

        return {
            "bill": bill if isinstance(bill, dict) else {"result": bill},
            "totals": totals.display(),
        }
