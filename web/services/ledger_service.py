"""
Ledger service

Customer ledger views, bullion ledger previews and employee payroll.
"""

import logging
from typing import Any

from adapters.interfaces import ISalesBackend
from core.billing import PreviousDue, previous_due_from_ledger
from core.ledger import (
    BakiTransaction,
    BullionEntry,
    LedgerRow,
    LedgerTransaction,
    SalaryRecord,
    compute_bullion_entry,
    employee_baki,
    post_transactions,
    summarize_bullion,
    summarize_salaries,
)
from core.types import BillingType
from core.utils.numeric import ZERO, NumericInput, format_amount, format_weight

logger = logging.getLogger(__name__)


def _ledger_view(opening: PreviousDue, rows: list[LedgerRow]) -> dict[str, Any]:
    if rows:
        closing_silver = rows[-1].balance_silver
        closing_labor = rows[-1].balance_labor
    else:
        closing_silver = opening.silver_value
        closing_labor = opening.labor_value

    return {
        "rows": [row.display() for row in rows],
        "closing_silver": format_weight(closing_silver),
        "closing_labor": format_amount(closing_labor),
    }


class LedgerService:
    """Ledger service

    Args:
        backend: billing backend, needed to read stored customer ledgers
    """

    def __init__(self, backend: ISalesBackend | None = None):
        self.backend = backend

    # =========================================================================
    # Customer ledger
    # =========================================================================

    def customer_ledger(
        self,
        opening: PreviousDue,
        transactions: list[LedgerTransaction],
    ) -> dict[str, Any]:
        """Debit / credit rows with running balances"""
        rows = post_transactions(opening, transactions)
        return _ledger_view(opening, rows)

    async def fetch_customer_ledger(self, billing_type: BillingType, customer_id: str) -> dict[str, Any]:
        """Stored customer ledger with running balances and previous due

        The opening balance is the customer balance less every movement,
        so the last row lands on the stored balance.

        Raises:
            RuntimeError: no backend configured
            BillingBackendError: backend failure
        """
        if self.backend is None:
            raise RuntimeError("Billing backend is not configured")

        data = await self.backend.get_customer_ledger(billing_type, customer_id)
        raw_transactions = data.get("transactions") or []
        customer = data.get("customer") or {}

        transactions = [LedgerTransaction.from_api(txn) for txn in raw_transactions]
        previous_due = previous_due_from_ledger(raw_transactions, customer)

        movement_silver = sum((t.silver_weight for t in transactions), ZERO)
        movement_labor = sum((t.labor_amount for t in transactions), ZERO)
        opening = PreviousDue(
            silver=previous_due.silver_value - movement_silver,
            labor=previous_due.labor_value - movement_labor,
        )

        view = _ledger_view(opening, post_transactions(opening, transactions))
        view["previous_due"] = {
            "silver": format_weight(previous_due.silver_value),
            "labor": format_amount(previous_due.labor_value),
        }
        return view

    # =========================================================================
    # Bullion
    # =========================================================================

    def bullion_preview(self, entries: list[BullionEntry]) -> dict[str, Any]:
        """Derived values per entry plus column totals"""
        return {
            "entries": [compute_bullion_entry(entry).display() for entry in entries],
            "summary": summarize_bullion(entries).display(),
        }

    # =========================================================================
    # Payroll
    # =========================================================================

    def salary_preview(self, salary: SalaryRecord) -> dict[str, Any]:
        return salary.display()

    def employee_ledger(
        self,
        opening_baki: NumericInput,
        salaries: list[SalaryRecord],
        baki_transactions: list[BakiTransaction],
    ) -> dict[str, Any]:
        """Salary rows, column totals and the outstanding baki"""
        balance = employee_baki(opening_baki, baki_transactions, salaries)
        return {
            "salaries": [salary.display() for salary in salaries],
            "summary": summarize_salaries(salaries).display(),
            "baki_balance": format_amount(balance),
        }
