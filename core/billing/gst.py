"""
GST bill totals

Tax-invoice arithmetic for silver sold by weight at a rate per gram.
Intra-state bills (customer in the home state) split GST into CGST and
SGST; inter-state bills charge IGST. The grand total is rounded to a
whole rupee and the difference is shown as round-off.
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from decimal import Decimal
from typing import Any

from num2words import num2words

from core.constants import Defaults, GstRates
from core.utils.numeric import (
    ZERO,
    NumericInput,
    format_amount,
    format_weight,
    percent_of,
    quantize_rupee,
    to_decimal,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GstItem:
    """One tax-invoice line"""

    description: str = ""
    hsn: str = ""
    quantity: NumericInput = 0
    rate_per_gram: NumericInput = 0

    @property
    def amount(self) -> Decimal:
        """quantity (g) * rate per gram"""
        return to_decimal(self.quantity) * to_decimal(self.rate_per_gram)


@dataclass(frozen=True)
class GstTotals:
    total_quantity: Decimal
    total_amount: Decimal
    cgst: Decimal
    sgst: Decimal
    igst: Decimal
    total_with_tax: Decimal
    round_off: Decimal
    grand_total: Decimal
    amount_in_words: str
    intra_state: bool

    def display(self) -> dict[str, Any]:
        return {
            "total_quantity": format_weight(self.total_quantity),
            "total_amount": format_amount(self.total_amount),
            "cgst": format_amount(self.cgst),
            "sgst": format_amount(self.sgst),
            "igst": format_amount(self.igst),
            "total_with_tax": format_amount(self.total_with_tax),
            "round_off": format_amount(self.round_off),
            "grand_total": format_amount(self.grand_total),
            "amount_in_words": self.amount_in_words,
            "intra_state": self.intra_state,
        }


def is_intra_state(customer_state: str | None, home_state: str | None) -> bool:
    """Same state, compared case-insensitively after trimming"""
    customer = (customer_state or "").strip().lower()
    home = (home_state or "").strip().lower()
    return bool(customer) and customer == home


def amount_in_words(amount: NumericInput) -> str:
    """Whole-rupee amount in Indian numbering

    Example: 123456 -> "Rupees One Lakh Twenty Three Thousand Four Hundred And Fifty Six"

    Returns an empty string for zero.
    """
    rupees = int(quantize_rupee(amount))
    if rupees == 0:
        return ""

    words = num2words(abs(rupees), lang="en_IN")
    words = words.replace("-", " ").replace(",", "").title()
    if rupees < 0:
        words = f"Minus {words}"
    return f"Rupees {words}"


def compute_gst_totals(
    items: Iterable[GstItem],
    customer_state: str | None,
    home_state: str | None = Defaults.GST_HOME_STATE,
) -> GstTotals:
    """GST bill totals

    Args:
        items: invoice lines
        customer_state: billing state of the customer
        home_state: seller's state (intra-state when equal)

    Returns:
        GstTotals
    """
    total_quantity = ZERO
    total_amount = ZERO
    for item in items:
        total_quantity += to_decimal(item.quantity)
        total_amount += item.amount

    intra = is_intra_state(customer_state, home_state)
    cgst = sgst = igst = ZERO
    if intra:
        cgst = percent_of(total_amount, GstRates.CGST_PCT)
        sgst = percent_of(total_amount, GstRates.SGST_PCT)
    else:
        igst = percent_of(total_amount, GstRates.IGST_PCT)

    total_with_tax = total_amount + cgst + sgst + igst
    grand_total = quantize_rupee(total_with_tax)
    round_off = grand_total - total_with_tax

    logger.debug(f"GST totals: intra_state={intra}, grand_total={grand_total}")

    return GstTotals(
        total_quantity=total_quantity,
        total_amount=total_amount,
        cgst=cgst,
        sgst=sgst,
        igst=igst,
        total_with_tax=total_with_tax,
        round_off=round_off,
        grand_total=grand_total,
        amount_in_words=amount_in_words(grand_total),
        intra_state=intra,
    )


def build_gst_bill_payload(
    items: list[GstItem],
    totals: GstTotals,
    bill_details: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """Request body for the backend's GST bill endpoint (camelCase)"""
    payload: dict[str, Any] = dict(bill_details or {})
    payload.update(
        {
            "totalQuantity": float(totals.total_quantity),
            "totalAmount": float(totals.total_amount),
            "cgstAmount": float(format_amount(totals.cgst)),
            "sgstAmount": float(format_amount(totals.sgst)),
            "igstAmount": float(format_amount(totals.igst)),
            "roundOff": float(format_amount(totals.round_off)),
            "grandTotal": float(totals.grand_total),
            "amountInWords": totals.amount_in_words,
            "items": [
                {
                    "srNo": index,
                    "description": item.description,
                    "hsn": item.hsn,
                    "quantity": float(to_decimal(item.quantity)),
                    "ratePerGm": float(to_decimal(item.rate_per_gram)),
                    "amount": float(item.amount),
                }
                for index, item in enumerate(items, start=1)
            ],
        }
    )
    return payload
