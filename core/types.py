"""
Type definitions

Core Enum types shared by billing, ledgers and the web layer.
Every Enum inherits from str so it serializes as a plain string.
"""

from enum import Enum


class BillingType(str, Enum):
    """Billing flow

    The two flows charge labor on different weight bases:
    wholesale on gross weight, regular on net weight.
    """

    WHOLESALE = "wholesale"
    REGULAR = "regular"

    @classmethod
    def parse(cls, value: "str | BillingType | None") -> "BillingType":
        """Lenient parse; anything unrecognised is wholesale"""
        if isinstance(value, cls):
            return value
        normalized = str(value or "").strip().lower()
        for member in cls:
            if member.value == normalized:
                return member
        return cls.WHOLESALE


class PaymentMode(str, Enum):
    """Payment mode selected on a bill

    Each mode opens one payment channel, MULTIPLE opens all of them.
    CASH (wholesale screen) and LABOR (regular screen) are the same
    channel: a flat amount against the labor/cash balance.
    """

    NONE = "none"
    SILVER = "silver"
    CASH = "cash"
    CASH_SILVER = "cashsilver"
    LABOR = "labor"
    MULTIPLE = "multiple"

    @classmethod
    def parse(cls, value: "str | PaymentMode | None") -> "PaymentMode":
        """Lenient parse; unknown modes disable every channel"""
        if isinstance(value, cls):
            return value
        normalized = str(value or "").strip().lower()
        for member in cls:
            if member.value == normalized:
                return member
        return cls.NONE

    @property
    def accepts_silver(self) -> bool:
        """Silver payments (weight x touch) are counted"""
        return self in (PaymentMode.SILVER, PaymentMode.MULTIPLE)

    @property
    def accepts_cash_for_silver(self) -> bool:
        """Cash-for-silver conversion is counted"""
        return self in (PaymentMode.CASH_SILVER, PaymentMode.MULTIPLE)

    @property
    def accepts_cash(self) -> bool:
        """Flat cash / labor payment is counted"""
        return self in (PaymentMode.CASH, PaymentMode.LABOR, PaymentMode.MULTIPLE)


class LedgerEntryKind(str, Enum):
    """Customer ledger transaction kind"""

    SALE = "sale"
    SILVER_PAYMENT = "silver_payment"
    CASH_FOR_SILVER = "cash_for_silver"
    CASH_PAYMENT = "cash_payment"
    ADJUSTMENT = "adjustment"


class BullionTransactionType(str, Enum):
    """Bullion ledger section"""

    SALE = "sale"  # vikri
    PURCHASE = "purchase"  # kharedi
    BADAL = "badal"  # exchange


class BullionForm(str, Enum):
    """Physical form of bullion"""

    GUT = "gut"  # refined bar, priced by weight
    KACH = "kach"  # raw silver, priced by fine weight


class BakiKind(str, Enum):
    """Employee baki (outstanding advance) movement"""

    GIVEN = "given"
    RETURNED = "returned"
