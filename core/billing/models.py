"""
Billing value types

Immutable inputs and derived results of the ledger balance calculator.
Numeric fields hold raw form values (str / int / float / Decimal / None);
they are parsed lazily with "blank or invalid => 0" semantics, so building
a record never fails.
"""

from dataclasses import dataclass, field, replace
from decimal import Decimal
from typing import Any

from core.constants import ItemDefaults
from core.types import BillingType, PaymentMode
from core.utils.numeric import (
    ZERO,
    NumericInput,
    format_amount,
    format_weight,
    percent_of,
    to_decimal,
)


def _is_blank(value: NumericInput) -> bool:
    if value is None:
        return True
    return isinstance(value, str) and not value.strip()


@dataclass(frozen=True)
class LineItem:
    """One bill line

    Attributes:
        pieces: piece count
        gross_weight: gross weight (g)
        stone_weight: stone / attachment deduction (g)
        net_weight: net weight (g); blank means gross - stone
        touch: purity percentage (0-100, not enforced)
        wastage: additive percentage points billed on top of touch
        labor_rate_per_kg: labor charge per kilogram
        stamp: hallmark stamp text
        description: article description
        product_id: catalog product when the line is drawn from stock
    """

    pieces: NumericInput = 1
    gross_weight: NumericInput = None
    stone_weight: NumericInput = 0
    net_weight: NumericInput = None
    touch: NumericInput = None
    wastage: NumericInput = 0
    labor_rate_per_kg: NumericInput = None
    stamp: str = ItemDefaults.STAMP
    description: str = ""
    product_id: str | None = None

    @property
    def gross(self) -> Decimal:
        return to_decimal(self.gross_weight)

    @property
    def stone(self) -> Decimal:
        return to_decimal(self.stone_weight)

    @property
    def net(self) -> Decimal:
        """Net weight, derived from gross - stone when left blank"""
        if _is_blank(self.net_weight):
            return self.gross - self.stone
        return to_decimal(self.net_weight)

    def with_weights(self, gross_weight: NumericInput, stone_weight: NumericInput) -> "LineItem":
        """Copy with new gross/stone and net recomputed as gross - stone"""
        gross = to_decimal(gross_weight)
        stone = to_decimal(stone_weight)
        return replace(
            self,
            gross_weight=gross,
            stone_weight=stone,
            net_weight=gross - stone,
        )

    @classmethod
    def blank(cls, billing_type: BillingType = BillingType.WHOLESALE) -> "LineItem":
        """Fresh line with the per-flow default touch and labor rate"""
        if billing_type == BillingType.REGULAR:
            return cls(
                touch=ItemDefaults.REGULAR_TOUCH,
                labor_rate_per_kg=ItemDefaults.REGULAR_LABOR_RATE_PER_KG,
            )
        return cls(
            touch=ItemDefaults.WHOLESALE_TOUCH,
            labor_rate_per_kg=ItemDefaults.WHOLESALE_LABOR_RATE_PER_KG,
        )


@dataclass(frozen=True)
class SilverPayment:
    """Silver handed over by the customer (weight at a given touch)"""

    weight: NumericInput = None
    touch: NumericInput = None
    name: str = ""
    reference_no: str = ""

    @property
    def fine(self) -> Decimal:
        """Fine silver credited: weight * touch / 100"""
        return percent_of(to_decimal(self.weight), to_decimal(self.touch))


@dataclass(frozen=True)
class CashForSilver:
    """Owed silver settled in cash at a quoted rate per gram"""

    rate: NumericInput = None
    weight: NumericInput = None

    @property
    def silver_weight(self) -> Decimal:
        return to_decimal(self.weight)

    @property
    def cash_value(self) -> Decimal:
        """rate * weight (bookkeeping only, never offsets labor)"""
        return to_decimal(self.rate) * to_decimal(self.weight)


@dataclass(frozen=True)
class CashPayment:
    """Flat amount paid against the labor / cash balance"""

    amount: NumericInput = None
    method: str = "cash"
    reference_no: str = ""

    @property
    def value(self) -> Decimal:
        return to_decimal(self.amount)


@dataclass(frozen=True)
class PreviousDue:
    """Unpaid silver / labor balance carried from earlier transactions"""

    silver: NumericInput = 0
    labor: NumericInput = 0

    @property
    def silver_value(self) -> Decimal:
        return to_decimal(self.silver)

    @property
    def labor_value(self) -> Decimal:
        return to_decimal(self.labor)

    @classmethod
    def zero(cls) -> "PreviousDue":
        return cls(silver=ZERO, labor=ZERO)

    @classmethod
    def from_api(cls, data: dict[str, Any] | None) -> "PreviousDue":
        """Build from a backend customer/sale record (balanceSilver / balanceLabor)"""
        data = data or {}
        return cls(
            silver=to_decimal(data.get("balanceSilver")),
            labor=to_decimal(data.get("balanceLabor")),
        )


@dataclass(frozen=True)
class BillInput:
    """Everything the calculator needs for one bill

    Replaces the form state of the billing screens with a single
    immutable value.
    """

    billing_type: BillingType = BillingType.WHOLESALE
    items: tuple[LineItem, ...] = field(default_factory=tuple)
    payment_mode: PaymentMode = PaymentMode.NONE
    silver_payments: tuple[SilverPayment, ...] = field(default_factory=tuple)
    cash_for_silver: CashForSilver | None = None
    cash_payment: CashPayment | None = None
    previous_due: PreviousDue | None = None
    include_previous_due: bool = False

    # Carried through to the sale payload, not used in arithmetic
    customer_id: str | None = None
    notes: str = ""


@dataclass(frozen=True)
class LineResult:
    """Derived values for one line"""

    net_weight: Decimal
    fine_silver_weight: Decimal
    labor_amount: Decimal

    def display(self) -> dict[str, str]:
        return {
            "net_weight": format_weight(self.net_weight),
            "fine_silver_weight": format_weight(self.fine_silver_weight),
            "labor_amount": format_amount(self.labor_amount),
        }


@dataclass(frozen=True)
class Totals:
    """Bill totals and closing balances

    Values are kept at full precision; display() rounds weights to
    3 places and currency to 2 places.
    """

    billing_type: BillingType
    payment_mode: PaymentMode
    lines: tuple[LineResult, ...]

    total_pieces: int
    total_gross: Decimal
    total_stone: Decimal
    total_net_weight: Decimal
    total_wastage: Decimal
    total_silver_weight: Decimal
    total_labor: Decimal

    prev_silver: Decimal
    prev_labor: Decimal
    bill_total_silver: Decimal
    bill_total_labor: Decimal

    paid_silver: Decimal
    cash_for_silver_weight: Decimal
    cash_for_silver_value: Decimal
    paid_cash: Decimal

    balance_silver: Decimal
    balance_labor: Decimal

    @property
    def subtotal(self) -> Decimal:
        """Labor total (the bill amount before previous due)"""
        return self.total_labor

    def display(self) -> dict[str, Any]:
        """Rounded display strings for every figure"""
        return {
            "billing_type": self.billing_type.value,
            "payment_mode": self.payment_mode.value,
            "total_pieces": self.total_pieces,
            "total_gross": format_weight(self.total_gross),
            "total_stone": format_weight(self.total_stone),
            "total_net_weight": format_weight(self.total_net_weight),
            "total_wastage": format_weight(self.total_wastage),
            "total_silver_weight": format_weight(self.total_silver_weight),
            "total_labor": format_amount(self.total_labor),
            "subtotal": format_amount(self.subtotal),
            "prev_silver": format_weight(self.prev_silver),
            "prev_labor": format_amount(self.prev_labor),
            "bill_total_silver": format_weight(self.bill_total_silver),
            "bill_total_labor": format_amount(self.bill_total_labor),
            "paid_silver": format_weight(self.paid_silver),
            "cash_for_silver_weight": format_weight(self.cash_for_silver_weight),
            "cash_for_silver_value": format_amount(self.cash_for_silver_value),
            "paid_cash": format_amount(self.paid_cash),
            "balance_silver": format_weight(self.balance_silver),
            "balance_labor": format_amount(self.balance_labor),
        }
