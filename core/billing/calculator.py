"""
Ledger balance calculator

Pure, synchronous bill arithmetic shared by the wholesale and regular
flows: fine silver, labor, previous-due carry-forward, payment offsets
and closing balances. Used identically for the live preview and for the
payload sent to the billing backend.

Usage:
```python
from core.billing import LineItem, compute_totals

totals = compute_totals(
    [LineItem(gross_weight="20", stone_weight="2", touch="92.5", labor_rate_per_kg="1000")],
)
totals.display()["total_silver_weight"]  # "16.650"
```
"""

import logging
from collections.abc import Iterable

from core.billing.models import (
    BillInput,
    CashForSilver,
    CashPayment,
    LineItem,
    LineResult,
    PreviousDue,
    SilverPayment,
    Totals,
)
from core.types import BillingType, PaymentMode
from core.utils.numeric import THOUSAND, ZERO, percent_of, to_decimal, to_int

logger = logging.getLogger(__name__)


def compute_line_item(
    item: LineItem,
    billing_type: BillingType = BillingType.WHOLESALE,
) -> LineResult:
    """Fine silver and labor for one line

    fine silver = (touch + wastage) * net / 100

    Labor basis differs by flow and both are kept as billed historically:
    - wholesale: gross / 1000 * rate per kg
    - regular:   net * rate per kg / 1000

    Args:
        item: bill line (raw values, never rejected)
        billing_type: flow that decides the labor basis

    Returns:
        LineResult at full precision
    """
    net = item.net
    touch = to_decimal(item.touch)
    wastage = to_decimal(item.wastage)
    rate = to_decimal(item.labor_rate_per_kg)

    fine = percent_of(net, touch + wastage)

    if billing_type == BillingType.REGULAR:
        labor = net * rate / THOUSAND
    else:
        labor = item.gross / THOUSAND * rate

    return LineResult(net_weight=net, fine_silver_weight=fine, labor_amount=labor)


def compute_totals(
    items: Iterable[LineItem],
    previous_due: PreviousDue | None = None,
    include_previous_due: bool = False,
    payment_mode: PaymentMode | str = PaymentMode.NONE,
    silver_payments: Iterable[SilverPayment] = (),
    cash_for_silver: CashForSilver | None = None,
    cash_payment: CashPayment | None = None,
    billing_type: BillingType | str = BillingType.WHOLESALE,
) -> Totals:
    """Bill totals and closing balances

    balance silver = total silver + previous silver - paid silver - cash-for-silver weight
    balance labor  = total labor + previous labor - paid cash

    Payment sub-records only count when the payment mode opens their
    channel. Cash-for-silver value is recorded but never offsets labor.

    Args:
        items: bill lines
        previous_due: customer's carried balance
        include_previous_due: add previous_due to the bill totals
        payment_mode: which payment channels are active
        silver_payments: silver handed over (weight x touch)
        cash_for_silver: silver settled in cash
        cash_payment: flat cash / labor payment
        billing_type: wholesale or regular labor basis

    Returns:
        Totals at full precision
    """
    mode = PaymentMode.parse(payment_mode)
    flow = BillingType.parse(billing_type)

    lines: list[LineResult] = []
    total_pieces = 0
    total_gross = ZERO
    total_stone = ZERO
    total_net = ZERO
    total_wastage = ZERO
    total_silver = ZERO
    total_labor = ZERO

    for item in items:
        result = compute_line_item(item, flow)
        lines.append(result)

        total_pieces += to_int(item.pieces)
        total_gross += item.gross
        total_stone += item.stone
        total_net += result.net_weight
        total_wastage += to_decimal(item.wastage)
        total_silver += result.fine_silver_weight
        total_labor += result.labor_amount

    # Previous due is excluded entirely unless requested
    prev_silver = ZERO
    prev_labor = ZERO
    if include_previous_due and previous_due is not None:
        prev_silver = previous_due.silver_value
        prev_labor = previous_due.labor_value

    bill_total_silver = total_silver + prev_silver
    bill_total_labor = total_labor + prev_labor

    paid_silver = ZERO
    if mode.accepts_silver:
        for payment in silver_payments:
            paid_silver += payment.fine

    c4s_weight = ZERO
    c4s_value = ZERO
    if mode.accepts_cash_for_silver and cash_for_silver is not None:
        c4s_weight = cash_for_silver.silver_weight
        c4s_value = cash_for_silver.cash_value

    paid_cash = ZERO
    if mode.accepts_cash and cash_payment is not None:
        paid_cash = cash_payment.value

    balance_silver = bill_total_silver - paid_silver - c4s_weight
    balance_labor = bill_total_labor - paid_cash

    logger.debug(
        f"Bill computed: {flow.value} {len(lines)} lines, mode={mode.value}",
        extra={
            "balance_silver": str(balance_silver),
            "balance_labor": str(balance_labor),
        },
    )

    return Totals(
        billing_type=flow,
        payment_mode=mode,
        lines=tuple(lines),
        total_pieces=total_pieces,
        total_gross=total_gross,
        total_stone=total_stone,
        total_net_weight=total_net,
        total_wastage=total_wastage,
        total_silver_weight=total_silver,
        total_labor=total_labor,
        prev_silver=prev_silver,
        prev_labor=prev_labor,
        bill_total_silver=bill_total_silver,
        bill_total_labor=bill_total_labor,
        paid_silver=paid_silver,
        cash_for_silver_weight=c4s_weight,
        cash_for_silver_value=c4s_value,
        paid_cash=paid_cash,
        balance_silver=balance_silver,
        balance_labor=balance_labor,
    )


def compute_bill(bill: BillInput) -> Totals:
    """compute_totals() driven by a single BillInput"""
    return compute_totals(
        items=bill.items,
        previous_due=bill.previous_due,
        include_previous_due=bill.include_previous_due,
        payment_mode=bill.payment_mode,
        silver_payments=bill.silver_payments,
        cash_for_silver=bill.cash_for_silver,
        cash_payment=bill.cash_payment,
        billing_type=bill.billing_type,
    )
