"""
Ledgers

Customer silver / labor ledger, bullion dealer ledger and employee payroll.

Usage:
```python
from core.ledger import post_transactions, sale_transaction, silver_payment_transaction

rows = post_transactions(
    PreviousDue(silver="2", labor="100"),
    [sale_transaction(totals), silver_payment_transaction(payment)],
)
rows[-1].balance_silver
```
"""

from core.ledger.bullion import (
    BullionEntry,
    BullionSummary,
    BullionValues,
    compute_bullion_entry,
    summarize_bullion,
)
from core.ledger.customer import (
    LedgerRow,
    LedgerTransaction,
    bill_transactions,
    cash_for_silver_transaction,
    cash_payment_transaction,
    post_transactions,
    sale_transaction,
    silver_payment_transaction,
)
from core.ledger.payroll import (
    BakiTransaction,
    SalaryRecord,
    SalarySummary,
    compute_salary,
    employee_baki,
    summarize_salaries,
)
from core.types import BakiKind, BullionForm, BullionTransactionType, LedgerEntryKind

__all__ = [
    # Customer ledger
    "LedgerTransaction",
    "LedgerRow",
    "sale_transaction",
    "silver_payment_transaction",
    "cash_for_silver_transaction",
    "cash_payment_transaction",
    "bill_transactions",
    "post_transactions",
    # Bullion
    "BullionEntry",
    "BullionValues",
    "BullionSummary",
    "compute_bullion_entry",
    "summarize_bullion",
    # Payroll
    "SalaryRecord",
    "SalarySummary",
    "BakiTransaction",
    "compute_salary",
    "summarize_salaries",
    "employee_baki",
    # Enum
    "LedgerEntryKind",
    "BullionTransactionType",
    "BullionForm",
    "BakiKind",
]
