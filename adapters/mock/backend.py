"""
Mock billing backend

In-memory ISalesBackend for tests and preview-only runs.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

from adapters.backend.client import BillingBackendError
from core.types import BillingType


@dataclass
class BackendCall:
    """One recorded call"""

    operation: str
    billing_type: BillingType | None
    payload: dict[str, Any]
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


class MockBillingBackend:
    """Mock billing backend

    ISalesBackend implementation. Every call is recorded so tests can
    assert on what would have been sent; ledgers can be seeded.

    Usage:
    ```python
    backend = MockBillingBackend()
    backend.seed_ledger(BillingType.REGULAR, "7", customer={"balanceSilver": 2}, transactions=[])

    sale = await backend.create_sale(BillingType.REGULAR, payload)
    assert backend.calls[0].operation == "create_sale"
    ```
    """

    def __init__(self, should_fail: bool = False):
        """
        Args:
            should_fail: every call raises BillingBackendError
        """
        self.should_fail = should_fail
        self.calls: list[BackendCall] = []
        self.sales: dict[str, dict[str, Any]] = {}
        self.gst_bills: list[dict[str, Any]] = []
        self._ledgers: dict[tuple[BillingType, str], dict[str, Any]] = {}
        self._next_id = 1
        self.closed = False

    def _record(self, operation: str, billing_type: BillingType | None, payload: dict[str, Any]) -> None:
        self.calls.append(BackendCall(operation=operation, billing_type=billing_type, payload=payload))
        if self.should_fail:
            raise BillingBackendError(f"Mock failure: {operation}", status_code=500)

    def _new_id(self) -> str:
        new_id = str(self._next_id)
        self._next_id += 1
        return new_id

    def seed_ledger(
        self,
        billing_type: BillingType,
        customer_id: str,
        customer: dict[str, Any] | None = None,
        transactions: list[dict[str, Any]] | None = None,
    ) -> None:
        """Set the ledger returned for a customer"""
        self._ledgers[(BillingType.parse(billing_type), str(customer_id))] = {
            "customer": customer or {},
            "transactions": list(transactions or []),
        }

    async def create_sale(self, billing_type: BillingType, payload: dict[str, Any]) -> dict[str, Any]:
        flow = BillingType.parse(billing_type)
        self._record("create_sale", flow, payload)
        sale = {"id": self._new_id(), "billingType": flow.value, **payload}
        self.sales[sale["id"]] = sale
        return sale

    async def update_sale(
        self,
        billing_type: BillingType,
        sale_id: str,
        payload: dict[str, Any],
    ) -> dict[str, Any]:
        flow = BillingType.parse(billing_type)
        self._record("update_sale", flow, {"saleId": sale_id, **payload})
        if str(sale_id) not in self.sales:
            raise BillingBackendError(f"Sale not found: {sale_id}", status_code=404)
        sale = {"id": str(sale_id), "billingType": flow.value, **payload}
        self.sales[sale["id"]] = sale
        return sale

    async def record_silver_payment(
        self,
        billing_type: BillingType,
        sale_id: str,
        fine_weight: Any,
        notes: str = "",
        details: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        payload = {"saleId": sale_id, "silverWeight": fine_weight, "notes": notes, **(details or {})}
        self._record("record_silver_payment", BillingType.parse(billing_type), payload)
        return payload

    async def record_cash_for_silver(
        self,
        billing_type: BillingType,
        sale_id: str,
        silver_weight: Any,
        silver_rate: Any,
        notes: str = "",
    ) -> dict[str, Any]:
        payload = {
            "saleId": sale_id,
            "silverWeight": silver_weight,
            "silverRate": silver_rate,
            "notes": notes,
        }
        self._record("record_cash_for_silver", BillingType.parse(billing_type), payload)
        return payload

    async def record_cash_payment(
        self,
        billing_type: BillingType,
        sale_id: str,
        amount: Any,
        notes: str = "",
        method: str = "cash",
        reference_no: str = "",
    ) -> dict[str, Any]:
        payload = {
            "saleId": sale_id,
            "amount": amount,
            "paymentMode": method,
            "referenceNumber": reference_no,
            "notes": notes,
        }
        self._record("record_cash_payment", BillingType.parse(billing_type), payload)
        return payload

    async def get_customer_ledger(self, billing_type: BillingType, customer_id: str) -> dict[str, Any]:
        flow = BillingType.parse(billing_type)
        self._record("get_customer_ledger", flow, {"customerId": customer_id})
        ledger = self._ledgers.get((flow, str(customer_id)))
        if ledger is None:
            raise BillingBackendError(f"Customer not found: {customer_id}", status_code=404)
        return {
            "customer": dict(ledger["customer"]),
            "transactions": list(ledger["transactions"]),
        }

    async def create_gst_bill(self, payload: dict[str, Any]) -> dict[str, Any]:
        self._record("create_gst_bill", None, payload)
        bill = {"id": self._new_id(), **payload}
        self.gst_bills.append(bill)
        return bill

    async def close(self) -> None:
        self.closed = True

    def get_calls(self, operation: str) -> list[BackendCall]:
        """Recorded calls of one operation"""
        return [call for call in self.calls if call.operation == operation]

    def clear(self) -> None:
        """Forget recorded calls"""
        self.calls.clear()
