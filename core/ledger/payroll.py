"""
Employee payroll

Daily-wage salary (pagar) records and the employee's outstanding advance
(baki). Baki given to the employee adds to what they owe; baki returned
and the baki deducted on a salary reduce it.
"""

from collections.abc import Iterable
from dataclasses import dataclass
from decimal import Decimal
from typing import Any

from core.types import BakiKind
from core.utils.numeric import ZERO, NumericInput, format_amount, to_decimal


@dataclass(frozen=True)
class SalaryRecord:
    """One salary payout

    Attributes:
        days_worked: days in the period
        daily_rate: pagar per day
        total_pagar: days * rate
        advance: advance already paid this period
        final_pagar: total - advance
        baki_return: part of the outstanding baki recovered from this salary
        given_pagar: amount actually handed over
    """

    days_worked: Decimal
    daily_rate: Decimal
    total_pagar: Decimal
    advance: Decimal
    final_pagar: Decimal
    baki_return: Decimal
    given_pagar: Decimal

    def display(self) -> dict[str, Any]:
        return {
            "days_worked": str(self.days_worked),
            "daily_rate": format_amount(self.daily_rate),
            "total_pagar": format_amount(self.total_pagar),
            "advance": format_amount(self.advance),
            "final_pagar": format_amount(self.final_pagar),
            "baki_return": format_amount(self.baki_return),
            "given_pagar": format_amount(self.given_pagar),
        }


def compute_salary(
    days_worked: NumericInput,
    daily_rate: NumericInput,
    advance: NumericInput = 0,
    baki_return: NumericInput = 0,
    given_pagar: NumericInput = 0,
) -> SalaryRecord:
    """Salary for a period: total = days * rate, final = total - advance"""
    days = to_decimal(days_worked)
    rate = to_decimal(daily_rate)
    advance_value = to_decimal(advance)
    total = days * rate

    return SalaryRecord(
        days_worked=days,
        daily_rate=rate,
        total_pagar=total,
        advance=advance_value,
        final_pagar=total - advance_value,
        baki_return=to_decimal(baki_return),
        given_pagar=to_decimal(given_pagar),
    )


@dataclass(frozen=True)
class SalarySummary:
    """Column totals of the employee ledger"""

    records: int
    total_pagar: Decimal
    advance: Decimal
    final_pagar: Decimal
    baki_return: Decimal
    given_pagar: Decimal

    def display(self) -> dict[str, Any]:
        return {
            "records": self.records,
            "total_pagar": format_amount(self.total_pagar),
            "advance": format_amount(self.advance),
            "final_pagar": format_amount(self.final_pagar),
            "baki_return": format_amount(self.baki_return),
            "given_pagar": format_amount(self.given_pagar),
        }


def summarize_salaries(records: Iterable[SalaryRecord]) -> SalarySummary:
    count = 0
    total = advance = final = baki = given = ZERO
    for record in records:
        count += 1
        total += record.total_pagar
        advance += record.advance
        final += record.final_pagar
        baki += record.baki_return
        given += record.given_pagar
    return SalarySummary(
        records=count,
        total_pagar=total,
        advance=advance,
        final_pagar=final,
        baki_return=baki,
        given_pagar=given,
    )


@dataclass(frozen=True)
class BakiTransaction:
    """Advance given to (uchal) or returned by (jama) an employee"""

    kind: BakiKind
    amount: NumericInput = 0
    notes: str = ""

    @property
    def signed_amount(self) -> Decimal:
        """+amount when given, -amount when returned"""
        value = to_decimal(self.amount)
        return value if self.kind == BakiKind.GIVEN else -value


def employee_baki(
    opening: NumericInput,
    transactions: Iterable[BakiTransaction] = (),
    salaries: Iterable[SalaryRecord] = (),
) -> Decimal:
    """Outstanding baki after the given movements

    Args:
        opening: baki before these movements
        transactions: baki given / returned
        salaries: salary payouts (their baki_return is recovered)
    """
    balance = to_decimal(opening)
    for txn in transactions:
        balance += txn.signed_amount
    for salary in salaries:
        balance -= salary.baki_return
    return balance
