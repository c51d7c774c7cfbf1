"""
Bullion ledger

Bullion bought, sold or exchanged (badal) with bullion dealers, as refined
bars (gut) or raw silver (kach). Derived values are only filled in once
the inputs they depend on are positive.
"""

from collections.abc import Iterable
from dataclasses import dataclass
from decimal import Decimal
from typing import Any

from core.types import BullionForm, BullionTransactionType
from core.utils.numeric import (
    ZERO,
    NumericInput,
    format_amount,
    format_weight,
    percent_of,
    to_decimal,
)


@dataclass(frozen=True)
class BullionEntry:
    """One bullion ledger entry as entered

    Attributes:
        transaction_type: sale, purchase or badal
        form: gut or kach
        bullion_name: dealer name
        weight: weight handed over (g)
        touch: purity percentage (kach, badal)
        bhav: rate per gram
        raw_silver: raw silver received in a gut badal (g)
        form_no: dealer's form number
        description: free text
    """

    transaction_type: BullionTransactionType = BullionTransactionType.SALE
    form: BullionForm = BullionForm.GUT
    bullion_name: str = ""
    weight: NumericInput = 0
    touch: NumericInput = 0
    bhav: NumericInput = 0
    raw_silver: NumericInput = 0
    form_no: str = ""
    description: str = ""


@dataclass(frozen=True)
class BullionValues:
    """Derived values of a bullion entry"""

    weight: Decimal
    fine: Decimal
    total_silver: Decimal
    total_amount: Decimal

    def display(self) -> dict[str, Any]:
        return {
            "weight": format_weight(self.weight),
            "fine": format_weight(self.fine),
            "total_silver": format_weight(self.total_silver),
            "total_amount": format_amount(self.total_amount),
        }


def compute_bullion_entry(entry: BullionEntry) -> BullionValues:
    """Fine weight, silver and amount for one entry

    sale / purchase, gut:  amount = weight * bhav
    sale / purchase, kach: fine = weight * touch / 100, amount = fine * bhav
    badal, gut:            total silver = raw silver * touch / 100
    badal, kach:           fine = weight * touch / 100
    """
    weight = to_decimal(entry.weight)
    touch = to_decimal(entry.touch)
    bhav = to_decimal(entry.bhav)

    fine = ZERO
    total_silver = ZERO
    total_amount = ZERO

    if entry.transaction_type == BullionTransactionType.BADAL:
        if entry.form == BullionForm.GUT:
            raw_silver = to_decimal(entry.raw_silver)
            if raw_silver > 0 and touch > 0:
                total_silver = percent_of(raw_silver, touch)
        elif weight > 0 and touch > 0:
            fine = percent_of(weight, touch)
    elif entry.form == BullionForm.GUT:
        if weight > 0 and bhav > 0:
            total_amount = weight * bhav
    elif weight > 0 and touch > 0:
        fine = percent_of(weight, touch)
        total_amount = fine * bhav

    return BullionValues(
        weight=weight,
        fine=fine,
        total_silver=total_silver,
        total_amount=total_amount,
    )


@dataclass(frozen=True)
class BullionSummary:
    entries: int
    total_weight: Decimal
    total_fine: Decimal
    total_silver: Decimal
    total_amount: Decimal

    def display(self) -> dict[str, Any]:
        return {
            "entries": self.entries,
            "total_weight": format_weight(self.total_weight),
            "total_fine": format_weight(self.total_fine),
            "total_silver": format_weight(self.total_silver),
            "total_amount": format_amount(self.total_amount),
        }


def summarize_bullion(entries: Iterable[BullionEntry]) -> BullionSummary:
    """Column totals of a bullion ledger"""
    count = 0
    weight = fine = silver = amount = ZERO
    for entry in entries:
        values = compute_bullion_entry(entry)
        count += 1
        weight += values.weight
        fine += values.fine
        silver += values.total_silver
        amount += values.total_amount
    return BullionSummary(
        entries=count,
        total_weight=weight,
        total_fine=fine,
        total_silver=silver,
        total_amount=amount,
    )
