"""
Sale payload builder

Turns a BillInput and its computed Totals into the camelCase request
body the billing backend expects. Wholesale and regular sales use
different envelopes. Payment sub-records whose channel is closed by the
payment mode are sent as zero.
"""

from typing import Any

from core.billing.models import BillInput, LineItem, SilverPayment, Totals
from core.constants import ItemDefaults
from core.types import BillingType
from core.utils.numeric import (
    ZERO,
    format_amount,
    format_weight,
    quantize_amount,
    quantize_weight,
    to_decimal,
    to_int,
)


def _item_payload(item: LineItem) -> dict[str, Any]:
    stamp = (item.stamp or "").strip() or ItemDefaults.STAMP
    payload = {
        "description": item.description,
        "stamp": stamp,
        "pieces": to_int(item.pieces),
        "grossWeight": float(quantize_weight(item.gross)),
        "stoneWeight": float(quantize_weight(item.stone)),
        "netWeight": float(quantize_weight(item.net)),
        "wastage": float(to_decimal(item.wastage)),
        "touch": float(to_decimal(item.touch)),
        "laborRatePerKg": float(to_decimal(item.labor_rate_per_kg)),
    }
    if item.product_id is not None:
        payload["productId"] = item.product_id
    return payload


def silver_payment_payload(payment: SilverPayment) -> dict[str, Any]:
    """Silver payment record as the backend stores it"""
    weight = float(to_decimal(payment.weight))
    touch = float(to_decimal(payment.touch))
    return {
        "name": payment.name,
        "fromNo": payment.reference_no,
        "weight": weight,
        "touch": touch,
        "point": touch,
        "fine": float(quantize_weight(payment.fine)),
    }


def silver_payment_note(payments: tuple[SilverPayment, ...]) -> str:
    """Human-readable block appended to the sale notes"""
    if not payments:
        return ""
    lines = ["", "[Silver Payments]:"]
    for payment in payments:
        lines.append(
            f"- {to_decimal(payment.weight)}g @ {to_decimal(payment.touch)}% = "
            f"{format_weight(payment.fine)}g (Ref: {payment.reference_no or '-'})"
        )
    return "\n".join(lines) + "\n"


def build_sale_payload(bill: BillInput, totals: Totals) -> dict[str, Any]:
    """Backend request body for a sale

    Args:
        bill: bill input as entered
        totals: compute_bill(bill)

    Returns:
        JSON-serializable dict
    """
    mode = totals.payment_mode
    silver_payments = bill.silver_payments if mode.accepts_silver else ()
    items = [_item_payload(item) for item in bill.items]

    c4s_rate = ZERO
    if mode.accepts_cash_for_silver and bill.cash_for_silver is not None:
        c4s_rate = to_decimal(bill.cash_for_silver.rate)
    cash_for_silver = {
        "rate": float(c4s_rate),
        "weight": float(totals.cash_for_silver_weight),
    }

    summary = {
        "totalSilverWeight": format_weight(totals.total_silver_weight),
        "subtotal": format_amount(totals.subtotal),
        "balanceSilver": format_weight(totals.balance_silver),
        "balanceLabor": format_amount(totals.balance_labor),
    }

    if totals.billing_type == BillingType.REGULAR:
        return {
            "regularCustomerId": bill.customer_id,
            "items": items,
            "includePreviousDue": bill.include_previous_due,
            "notes": bill.notes,
            "paymentMode": mode.value,
            "payments": {
                "silverPayments": [silver_payment_payload(p) for p in silver_payments],
                "cashForSilver": cash_for_silver,
                "labor": float(quantize_amount(totals.paid_cash)),
            },
            "summary": summary,
        }

    cash_payment = None
    if mode.accepts_cash and bill.cash_payment is not None:
        cash_payment = {
            "amount": float(quantize_amount(totals.paid_cash)),
            "paymentMode": bill.cash_payment.method,
            "referenceNumber": bill.cash_payment.reference_no,
        }

    return {
        "customerId": bill.customer_id,
        "billingType": totals.billing_type.value,
        "items": items,
        "silverRate": 0,
        "paidAmount": float(quantize_amount(totals.paid_cash)),
        "paidSilver": format_weight(totals.paid_silver),
        "gstApplicable": False,
        "includePreviousDue": bill.include_previous_due,
        "paymentMode": mode.value,
        "notes": bill.notes + silver_payment_note(silver_payments),
        "paymentDetails": {
            "silverPayments": [silver_payment_payload(p) for p in silver_payments],
            "cashPayment": cash_payment,
            "cashForSilver": cash_for_silver,
        },
        "summary": summary,
    }
