"""
core/billing/previous_due.py tests
"""

from decimal import Decimal

from core.billing import PreviousDue, previous_due_for_edit, previous_due_from_ledger


class TestPreviousDueFromLedger:
    """previous_due_from_ledger tests"""

    def test_last_transaction_wins(self) -> None:
        transactions = [
            {"type": "sale", "balanceSilverAfter": "5.5", "balanceLaborAfter": "200"},
            {"type": "cash_payment", "balanceSilverAfter": "5.5", "balanceLaborAfter": "150"},
        ]
        due = previous_due_from_ledger(transactions, {"balanceSilver": 99, "balanceLabor": 99})

        assert due.silver_value == Decimal("5.5")
        assert due.labor_value == Decimal("150")

    def test_falls_back_to_customer_balance(self) -> None:
        due = previous_due_from_ledger([], {"balanceSilver": "3.25", "balanceLabor": 40})

        assert due.silver_value == Decimal("3.25")
        assert due.labor_value == Decimal("40")

    def test_nothing_known(self) -> None:
        due = previous_due_from_ledger([], None)
        assert due.silver_value == 0
        assert due.labor_value == 0

    def test_missing_balance_fields(self) -> None:
        """Blank values count as 0"""
        due = previous_due_from_ledger([{"type": "sale"}])
        assert due.silver_value == 0
        assert due.labor_value == 0


class TestPreviousDueForEdit:
    """previous_due_for_edit tests"""

    def test_sale_balance_taken_out(self) -> None:
        due = previous_due_for_edit(
            customer_balance=PreviousDue(silver="12", labor="700"),
            sale_balance=PreviousDue(silver="10", labor="500"),
        )

        assert due.silver_value == Decimal("2")
        assert due.labor_value == Decimal("200")

    def test_no_customer_uses_stored_previous(self) -> None:
        stored = PreviousDue(silver="1", labor="5")
        due = previous_due_for_edit(None, PreviousDue(silver="10", labor="500"), stored)
        assert due is stored

    def test_no_customer_no_stored(self) -> None:
        due = previous_due_for_edit(None, PreviousDue(silver="10", labor="500"))
        assert due == PreviousDue.zero()
