"""
Customer ledger

Signed silver / labor movements per customer and the debit / credit view
with running balances. Positive amounts are owed by the customer
(debit), negative amounts are paid (credit).
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from decimal import Decimal
from typing import Any

from core.billing.models import (
    BillInput,
    CashForSilver,
    CashPayment,
    PreviousDue,
    SilverPayment,
    Totals,
)
from core.types import LedgerEntryKind
from core.utils.numeric import ZERO, format_amount, format_weight, to_decimal

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LedgerTransaction:
    """One customer ledger movement

    Attributes:
        kind: transaction kind
        silver_weight: signed fine silver (+ owed, - paid)
        labor_amount: signed labor / cash balance change (+ owed, - paid)
        cash_amount: cash handled (bookkeeping only, not a balance change)
        notes: free text
        transaction_date: ISO date string from the backend
        balance_silver_after: stored running balance, when known
        balance_labor_after: stored running balance, when known
    """

    kind: LedgerEntryKind
    silver_weight: Decimal = ZERO
    labor_amount: Decimal = ZERO
    cash_amount: Decimal = ZERO
    notes: str = ""
    transaction_date: str | None = None
    balance_silver_after: Decimal | None = None
    balance_labor_after: Decimal | None = None

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> LedgerTransaction:
        """Build from a backend ledger transaction (camelCase keys)

        Unknown kinds are kept as adjustments.
        """
        raw_kind = str(data.get("type") or "").strip().lower()
        try:
            kind = LedgerEntryKind(raw_kind)
        except ValueError:
            kind = LedgerEntryKind.ADJUSTMENT

        def _optional(key: str) -> Decimal | None:
            value = data.get(key)
            return None if value is None else to_decimal(value)

        return cls(
            kind=kind,
            silver_weight=to_decimal(data.get("silverWeight")),
            labor_amount=to_decimal(data.get("laborAmount")),
            cash_amount=to_decimal(data.get("cashAmount")),
            notes=data.get("notes") or "",
            transaction_date=data.get("transactionDate"),
            balance_silver_after=_optional("balanceSilverAfter"),
            balance_labor_after=_optional("balanceLaborAfter"),
        )


@dataclass(frozen=True)
class LedgerRow:
    """Debit / credit split of one transaction with the running balance"""

    transaction: LedgerTransaction
    silver_debit: Decimal
    silver_credit: Decimal
    amount_debit: Decimal
    amount_credit: Decimal
    balance_silver: Decimal
    balance_labor: Decimal

    def display(self) -> dict[str, Any]:
        return {
            "kind": self.transaction.kind.value,
            "notes": self.transaction.notes,
            "transaction_date": self.transaction.transaction_date,
            "silver_debit": format_weight(self.silver_debit),
            "silver_credit": format_weight(self.silver_credit),
            "balance_silver": format_weight(self.balance_silver),
            "amount_debit": format_amount(self.amount_debit),
            "amount_credit": format_amount(self.amount_credit),
            "balance_labor": format_amount(self.balance_labor),
        }


def sale_transaction(totals: Totals, notes: str = "") -> LedgerTransaction:
    """Sale: the bill's fine silver and labor become owed"""
    return LedgerTransaction(
        kind=LedgerEntryKind.SALE,
        silver_weight=totals.total_silver_weight,
        labor_amount=totals.total_labor,
        notes=notes,
    )


def silver_payment_transaction(payment: SilverPayment, notes: str = "") -> LedgerTransaction:
    """Silver received: fine silver credited"""
    return LedgerTransaction(
        kind=LedgerEntryKind.SILVER_PAYMENT,
        silver_weight=-payment.fine,
        notes=notes or payment.name,
    )


def cash_for_silver_transaction(cash_for_silver: CashForSilver, notes: str = "") -> LedgerTransaction:
    """Silver settled in cash

    Credits the silver weight. The cash value is recorded but the labor
    balance is untouched.
    """
    return LedgerTransaction(
        kind=LedgerEntryKind.CASH_FOR_SILVER,
        silver_weight=-cash_for_silver.silver_weight,
        labor_amount=ZERO,
        cash_amount=cash_for_silver.cash_value,
        notes=notes,
    )


def cash_payment_transaction(payment: CashPayment, notes: str = "") -> LedgerTransaction:
    """Cash / labor payment: labor balance credited"""
    return LedgerTransaction(
        kind=LedgerEntryKind.CASH_PAYMENT,
        labor_amount=-payment.value,
        cash_amount=payment.value,
        notes=notes or payment.reference_no,
    )


def bill_transactions(bill: BillInput, totals: Totals) -> list[LedgerTransaction]:
    """Ledger movements produced by saving a bill

    The sale itself followed by one transaction per payment whose
    channel the payment mode opens.
    """
    mode = totals.payment_mode
    transactions = [sale_transaction(totals, notes=bill.notes)]

    if mode.accepts_silver:
        transactions.extend(silver_payment_transaction(p) for p in bill.silver_payments)
    if mode.accepts_cash_for_silver and bill.cash_for_silver is not None:
        transactions.append(cash_for_silver_transaction(bill.cash_for_silver))
    if mode.accepts_cash and bill.cash_payment is not None:
        transactions.append(cash_payment_transaction(bill.cash_payment))

    return transactions


def post_transactions(
    opening: PreviousDue | None,
    transactions: Iterable[LedgerTransaction],
) -> list[LedgerRow]:
    """Apply transactions in order and split them into debit / credit

    Args:
        opening: balance before the first transaction
        transactions: oldest first

    Returns:
        One LedgerRow per transaction with the balance after it
    """
    opening = opening or PreviousDue.zero()
    balance_silver = opening.silver_value
    balance_labor = opening.labor_value

    rows: list[LedgerRow] = []
    for txn in transactions:
        balance_silver += txn.silver_weight
        balance_labor += txn.labor_amount

        rows.append(
            LedgerRow(
                transaction=txn,
                silver_debit=txn.silver_weight if txn.silver_weight > 0 else ZERO,
                silver_credit=-txn.silver_weight if txn.silver_weight < 0 else ZERO,
                amount_debit=txn.labor_amount if txn.labor_amount > 0 else ZERO,
                amount_credit=-txn.labor_amount if txn.labor_amount < 0 else ZERO,
                balance_silver=balance_silver,
                balance_labor=balance_labor,
            )
        )

        if txn.balance_silver_after is not None and txn.balance_silver_after != balance_silver:
            logger.warning(
                f"Ledger drift on {txn.kind.value} ({txn.transaction_date}): "
                f"stored silver {txn.balance_silver_after}, computed {balance_silver}"
            )
        if txn.balance_labor_after is not None and txn.balance_labor_after != balance_labor:
            logger.warning(
                f"Ledger drift on {txn.kind.value} ({txn.transaction_date}): "
                f"stored labor {txn.balance_labor_after}, computed {balance_labor}"
            )

    return rows
