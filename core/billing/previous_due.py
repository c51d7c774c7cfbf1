"""
Previous-due resolution

Where a customer's carried balance comes from when a bill is opened.
"""

from collections.abc import Sequence
from typing import Any

from core.billing.models import PreviousDue
from core.utils.numeric import to_decimal


def previous_due_from_ledger(
    transactions: Sequence[dict[str, Any]],
    customer_balance: dict[str, Any] | None = None,
) -> PreviousDue:
    """Previous due for a new bill

    The last ledger transaction's balance-after values win; a customer
    without transactions falls back to its stored balance.

    Args:
        transactions: backend ledger transactions, oldest first
            (balanceSilverAfter / balanceLaborAfter)
        customer_balance: backend customer record (balanceSilver / balanceLabor)
    """
    if transactions:
        last = transactions[-1]
        return PreviousDue(
            silver=to_decimal(last.get("balanceSilverAfter")),
            labor=to_decimal(last.get("balanceLaborAfter")),
        )
    return PreviousDue.from_api(customer_balance)


def previous_due_for_edit(
    customer_balance: PreviousDue | None,
    sale_balance: PreviousDue,
    stored_previous: PreviousDue | None = None,
) -> PreviousDue:
    """Previous due when re-opening a saved sale

    The customer's balance already includes this sale's closing balance,
    so it is taken back out. Without a customer record the sale's stored
    previous balance is used.
    """
    if customer_balance is None:
        return stored_previous or PreviousDue.zero()
    return PreviousDue(
        silver=customer_balance.silver_value - sale_balance.silver_value,
        labor=customer_balance.labor_value - sale_balance.labor_value,
    )
