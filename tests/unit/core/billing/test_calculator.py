"""
core/billing/calculator.py tests

Fine silver, labor on both bases, previous-due carry-forward, payment
offsets gated by payment mode and closing balances.
"""

from decimal import Decimal

import pytest

from core.billing import (
    BillInput,
    CashForSilver,
    CashPayment,
    LineItem,
    PreviousDue,
    SilverPayment,
    compute_bill,
    compute_line_item,
    compute_totals,
)
from core.types import BillingType, PaymentMode


class TestComputeLineItem:
    """compute_line_item tests"""

    def test_wholesale_line(self, wholesale_item: LineItem) -> None:
        """Labor on gross weight"""
        result = compute_line_item(wholesale_item, BillingType.WHOLESALE)

        assert result.net_weight == Decimal("18")
        assert result.fine_silver_weight == Decimal("16.65")
        assert result.labor_amount == Decimal("20")
        assert result.display() == {
            "net_weight": "18.000",
            "fine_silver_weight": "16.650",
            "labor_amount": "20.00",
        }

    def test_regular_line(self, wholesale_item: LineItem) -> None:
        """Labor on net weight"""
        result = compute_line_item(wholesale_item, BillingType.REGULAR)

        assert result.fine_silver_weight == Decimal("16.65")
        assert result.labor_amount == Decimal("18")

    def test_wastage_adds_to_touch(self) -> None:
        item = LineItem(gross_weight="10", touch="90", wastage="5")
        result = compute_line_item(item)
        assert result.fine_silver_weight == Decimal("9.5")

    def test_explicit_net_weight_wins(self) -> None:
        item = LineItem(gross_weight="10", stone_weight="1", net_weight="8", touch="100")
        result = compute_line_item(item)
        assert result.net_weight == Decimal("8")
        assert result.fine_silver_weight == Decimal("8")

    def test_blank_and_invalid_inputs(self) -> None:
        """Blank / non-numeric values count as 0"""
        item = LineItem(gross_weight="", stone_weight="abc", touch=None, labor_rate_per_kg="  ")
        result = compute_line_item(item)

        assert result.net_weight == 0
        assert result.fine_silver_weight == 0
        assert result.labor_amount == 0

    def test_stone_above_gross_goes_negative(self) -> None:
        """No clamping on manual lines"""
        item = LineItem(gross_weight="1", stone_weight="3", touch="100")
        result = compute_line_item(item)
        assert result.net_weight == Decimal("-2")


class TestComputeTotals:
    """compute_totals tests"""

    def test_no_payments(self, wholesale_item: LineItem) -> None:
        totals = compute_totals([wholesale_item])
        shown = totals.display()

        assert shown["total_pieces"] == 1
        assert shown["total_gross"] == "20.000"
        assert shown["total_net_weight"] == "18.000"
        assert shown["total_silver_weight"] == "16.650"
        assert shown["total_labor"] == "20.00"
        assert shown["subtotal"] == "20.00"
        assert shown["balance_silver"] == "16.650"
        assert shown["balance_labor"] == "20.00"

    def test_cash_for_silver(self, ten_gram_item: LineItem) -> None:
        """Cash-for-silver reduces silver only, its value is bookkeeping"""
        totals = compute_totals(
            [ten_gram_item],
            payment_mode=PaymentMode.CASH_SILVER,
            cash_for_silver=CashForSilver(rate=80, weight=4),
        )
        shown = totals.display()

        assert shown["total_silver_weight"] == "10.000"
        assert shown["total_labor"] == "500.00"
        assert shown["balance_silver"] == "6.000"
        assert shown["balance_labor"] == "500.00"
        assert shown["cash_for_silver_weight"] == "4.000"
        assert shown["cash_for_silver_value"] == "320.00"

    def test_silver_payment(self, ten_gram_item: LineItem) -> None:
        totals = compute_totals(
            [ten_gram_item],
            payment_mode="silver",
            silver_payments=[SilverPayment(weight="5", touch="80"), SilverPayment(weight="2", touch="50")],
        )

        assert totals.paid_silver == Decimal("5")
        assert totals.balance_silver == Decimal("5")
        assert totals.balance_labor == Decimal("500")

    def test_cash_payment(self, ten_gram_item: LineItem) -> None:
        totals = compute_totals(
            [ten_gram_item],
            payment_mode=PaymentMode.CASH,
            cash_payment=CashPayment(amount="120.50"),
        )

        assert totals.paid_cash == Decimal("120.50")
        assert totals.display()["balance_labor"] == "379.50"
        assert totals.balance_silver == Decimal("10")

    def test_mode_none_ignores_payments(self, ten_gram_item: LineItem) -> None:
        """Payments outside the selected mode are inert"""
        totals = compute_totals(
            [ten_gram_item],
            payment_mode=PaymentMode.NONE,
            silver_payments=[SilverPayment(weight="5", touch="100")],
            cash_for_silver=CashForSilver(rate=80, weight=4),
            cash_payment=CashPayment(amount=100),
        )

        assert totals.paid_silver == 0
        assert totals.cash_for_silver_weight == 0
        assert totals.cash_for_silver_value == 0
        assert totals.paid_cash == 0
        assert totals.balance_silver == Decimal("10")
        assert totals.balance_labor == Decimal("500")

    def test_single_mode_ignores_other_channels(self, ten_gram_item: LineItem) -> None:
        totals = compute_totals(
            [ten_gram_item],
            payment_mode=PaymentMode.SILVER,
            silver_payments=[SilverPayment(weight="1", touch="100")],
            cash_payment=CashPayment(amount=100),
        )

        assert totals.paid_silver == Decimal("1")
        assert totals.paid_cash == 0

    def test_multiple_mode(self, ten_gram_item: LineItem) -> None:
        totals = compute_totals(
            [ten_gram_item],
            payment_mode=PaymentMode.MULTIPLE,
            silver_payments=[SilverPayment(weight="2", touch="100")],
            cash_for_silver=CashForSilver(rate=80, weight=3),
            cash_payment=CashPayment(amount=200),
        )

        assert totals.balance_silver == Decimal("5")
        assert totals.balance_labor == Decimal("300")

    def test_unknown_mode_is_none(self, ten_gram_item: LineItem) -> None:
        totals = compute_totals(
            [ten_gram_item],
            payment_mode="barter",
            cash_payment=CashPayment(amount=100),
        )

        assert totals.payment_mode == PaymentMode.NONE
        assert totals.balance_labor == Decimal("500")

    def test_previous_due_included(self, ten_gram_item: LineItem) -> None:
        totals = compute_totals(
            [ten_gram_item],
            previous_due=PreviousDue(silver="2.5", labor="100"),
            include_previous_due=True,
        )

        assert totals.bill_total_silver == Decimal("12.5")
        assert totals.bill_total_labor == Decimal("600")
        assert totals.balance_silver == Decimal("12.5")
        assert totals.balance_labor == Decimal("600")
        # Line totals are unaffected
        assert totals.total_silver_weight == Decimal("10")

    def test_previous_due_excluded(self, ten_gram_item: LineItem) -> None:
        """Previous due has no effect unless requested"""
        totals = compute_totals(
            [ten_gram_item],
            previous_due=PreviousDue(silver="2.5", labor="100"),
            include_previous_due=False,
        )

        assert totals.prev_silver == 0
        assert totals.prev_labor == 0
        assert totals.balance_silver == Decimal("10")
        assert totals.balance_labor == Decimal("500")

    def test_overpayment_goes_negative(self, ten_gram_item: LineItem) -> None:
        """Balances may be negative (customer in credit)"""
        totals = compute_totals(
            [ten_gram_item],
            payment_mode=PaymentMode.MULTIPLE,
            silver_payments=[SilverPayment(weight="12", touch="100")],
            cash_payment=CashPayment(amount=600),
        )

        assert totals.balance_silver == Decimal("-2")
        assert totals.balance_labor == Decimal("-100")

    def test_empty_bill(self) -> None:
        totals = compute_totals([])
        assert totals.lines == ()
        assert totals.display()["balance_silver"] == "0.000"
        assert totals.display()["balance_labor"] == "0.00"

    def test_labor_basis_differs_by_flow(self, wholesale_item: LineItem) -> None:
        wholesale = compute_totals([wholesale_item], billing_type=BillingType.WHOLESALE)
        regular = compute_totals([wholesale_item], billing_type="regular")

        assert wholesale.total_labor == Decimal("20")
        assert regular.total_labor == Decimal("18")
        assert wholesale.total_silver_weight == regular.total_silver_weight

    def test_full_precision_until_display(self) -> None:
        """Lines are summed unrounded"""
        items = [LineItem(gross_weight="0.0004", touch="100") for _ in range(3)]
        totals = compute_totals(items)

        assert totals.total_silver_weight == Decimal("0.0012")
        assert totals.display()["total_silver_weight"] == "0.001"

    def test_pieces_summed(self, wholesale_item: LineItem, ten_gram_item: LineItem) -> None:
        totals = compute_totals([wholesale_item, ten_gram_item])
        assert totals.total_pieces == 3
        assert len(totals.lines) == 2


class TestComputeBill:
    """compute_bill tests"""

    def test_matches_compute_totals(self, ten_gram_item: LineItem) -> None:
        bill = BillInput(
            billing_type=BillingType.REGULAR,
            items=(ten_gram_item,),
            payment_mode=PaymentMode.LABOR,
            cash_payment=CashPayment(amount=50),
            previous_due=PreviousDue(silver=1, labor=10),
            include_previous_due=True,
        )

        from_bill = compute_bill(bill)
        direct = compute_totals(
            items=bill.items,
            previous_due=bill.previous_due,
            include_previous_due=True,
            payment_mode=PaymentMode.LABOR,
            cash_payment=bill.cash_payment,
            billing_type=BillingType.REGULAR,
        )

        assert from_bill == direct

    def test_idempotent(self, ten_gram_item: LineItem) -> None:
        """Same input, same result"""
        bill = BillInput(
            items=(ten_gram_item,),
            payment_mode=PaymentMode.CASH_SILVER,
            cash_for_silver=CashForSilver(rate=80, weight=4),
        )
        assert compute_bill(bill) == compute_bill(bill)

    @pytest.mark.parametrize("flow", [BillingType.WHOLESALE, BillingType.REGULAR])
    def test_blank_line_defaults(self, flow: BillingType) -> None:
        """A fresh line carries the flow's default touch and rate"""
        item = LineItem.blank(flow)
        totals = compute_bill(BillInput(billing_type=flow, items=(item,)))

        assert totals.total_silver_weight == 0
        assert totals.total_labor == 0
