"""
Adapter interfaces

Protocol-based so the web layer can be handed a real client or a mock.
Every implementation must satisfy these Protocols.
"""

from typing import Any, Protocol, runtime_checkable

from core.types import BillingType


@runtime_checkable
class ISalesBackend(Protocol):
    """Billing backend (sales, payments, ledgers)

    Payloads are the camelCase JSON bodies the backend expects; return
    values are the `data` member of its response envelope.
    """

    async def create_sale(self, billing_type: BillingType, payload: dict[str, Any]) -> dict[str, Any]:
        """Save a sale

        Args:
            billing_type: wholesale or regular (selects the endpoint)
            payload: core.billing.build_sale_payload() output

        Returns:
            Saved sale record
        """
        ...

    async def update_sale(
        self,
        billing_type: BillingType,
        sale_id: str,
        payload: dict[str, Any],
    ) -> dict[str, Any]:
        """Replace a saved sale with a recomputed payload"""
        ...

    async def record_silver_payment(
        self,
        billing_type: BillingType,
        sale_id: str,
        fine_weight: Any,
        notes: str = "",
        details: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Record silver received against a saved sale"""
        ...

    async def record_cash_for_silver(
        self,
        billing_type: BillingType,
        sale_id: str,
        silver_weight: Any,
        silver_rate: Any,
        notes: str = "",
    ) -> dict[str, Any]:
        """Record owed silver settled in cash"""
        ...

    async def record_cash_payment(
        self,
        billing_type: BillingType,
        sale_id: str,
        amount: Any,
        notes: str = "",
        method: str = "cash",
        reference_no: str = "",
    ) -> dict[str, Any]:
        """Record a cash / labor payment"""
        ...

    async def get_customer_ledger(self, billing_type: BillingType, customer_id: str) -> dict[str, Any]:
        """Customer record and ledger transactions

        Returns:
            {"customer": {...}, "transactions": [...]} oldest first
        """
        ...

    async def create_gst_bill(self, payload: dict[str, Any]) -> dict[str, Any]:
        """Save a GST tax invoice"""
        ...

    async def close(self) -> None:
        """Release connections"""
        ...
