"""
BillingService tests
"""

from decimal import Decimal

import pytest
import pytest_asyncio

from adapters.backend.client import BillingBackendError
from adapters.mock.backend import MockBillingBackend
from core.billing import (
    BillInput,
    CashForSilver,
    CashPayment,
    LineItem,
    PreviousDue,
    SilverPayment,
    StockProduct,
)
from core.types import BillingType, PaymentMode
from web.services.billing_service import BillingService


class TestPreview:
    """preview / allocate_stock tests"""

    def test_preview(self, ten_gram_item: LineItem) -> None:
        service = BillingService()
        view = service.preview(
            BillInput(
                items=(ten_gram_item,),
                payment_mode=PaymentMode.CASH_SILVER,
                cash_for_silver=CashForSilver(rate=80, weight=4),
            )
        )

        assert view["totals"]["balance_silver"] == "6.000"
        assert view["totals"]["balance_labor"] == "500.00"
        assert view["lines"] == [
            {"net_weight": "100.000", "fine_silver_weight": "10.000", "labor_amount": "500.00"}
        ]

    def test_allocate_stock(self) -> None:
        service = BillingService()
        product = StockProduct(
            product_id="p-1",
            name="Anklet",
            pieces=6,
            gross_weight="60",
            per_piece_weight="1",
            touch="92.5",
        )

        view = service.allocate_stock(product, 10)

        assert view["allocated_pieces"] == 6
        assert view["clamped"] is True
        assert view["warning"] == "Stock only has 6 pieces"
        assert view["item"]["gross_weight"] == "60.000"
        assert view["item"]["net_weight"] == "54.000"
        assert view["item"]["touch"] == "92.50"
        assert view["item"]["labor_rate_per_kg"] == "1000.00"
        assert view["line"]["fine_silver_weight"] == "49.950"


class TestPreviousDue:
    """resolve_previous_due / fetch_previous_due tests"""

    @pytest.mark.asyncio
    async def test_fetch_from_last_transaction(self) -> None:
        backend = MockBillingBackend()
        backend.seed_ledger(
            BillingType.REGULAR,
            "7",
            customer={"balanceSilver": 99, "balanceLabor": 99},
            transactions=[{"type": "sale", "balanceSilverAfter": 3.5, "balanceLaborAfter": 40}],
        )
        service = BillingService(backend)

        due = await service.fetch_previous_due(BillingType.REGULAR, "7")

        assert due.silver_value == 3.5
        assert due.labor_value == 40

    @pytest.mark.asyncio
    async def test_resolve_fills_missing_due(self, ten_gram_item: LineItem) -> None:
        backend = MockBillingBackend()
        backend.seed_ledger(BillingType.WHOLESALE, "42", customer={"balanceSilver": 2, "balanceLabor": 100})
        service = BillingService(backend)

        bill = BillInput(items=(ten_gram_item,), customer_id="42", include_previous_due=True)
        resolved = await service.resolve_previous_due(bill)

        assert resolved.previous_due == PreviousDue(silver=2, labor=100)

    @pytest.mark.asyncio
    async def test_resolve_keeps_supplied_due(self) -> None:
        backend = MockBillingBackend()
        service = BillingService(backend)

        bill = BillInput(customer_id="42", include_previous_due=True, previous_due=PreviousDue(silver=1))
        resolved = await service.resolve_previous_due(bill)

        assert resolved is bill
        assert backend.calls == []

    @pytest.mark.asyncio
    async def test_resolve_not_requested(self) -> None:
        backend = MockBillingBackend()
        service = BillingService(backend)

        bill = BillInput(customer_id="42", include_previous_due=False)

        assert await service.resolve_previous_due(bill) is bill
        assert backend.calls == []

    @pytest.mark.asyncio
    async def test_fetch_without_backend(self) -> None:
        with pytest.raises(RuntimeError):
            await BillingService().fetch_previous_due(BillingType.REGULAR, "7")


class TestCreateSale:
    """create_sale tests"""

    @pytest.mark.asyncio
    async def test_saves_payload(self, ten_gram_item: LineItem) -> None:
        backend = MockBillingBackend()
        backend.seed_ledger(BillingType.WHOLESALE, "42", customer={"balanceSilver": 2, "balanceLabor": 100})
        service = BillingService(backend)

        result = await service.create_sale(
            BillInput(
                items=(ten_gram_item,),
                customer_id="42",
                include_previous_due=True,
                payment_mode=PaymentMode.CASH_SILVER,
                cash_for_silver=CashForSilver(rate=80, weight=4),
            )
        )

        assert result["sale"]["id"] == "1"
        assert result["totals"]["balance_silver"] == "8.000"
        assert result["totals"]["balance_labor"] == "600.00"

        call = backend.get_calls("create_sale")[0]
        assert call.billing_type == BillingType.WHOLESALE
        assert call.payload["customerId"] == "42"
        assert call.payload["summary"]["balanceSilver"] == "8.000"

    @pytest.mark.asyncio
    async def test_regular_sale(self, ten_gram_item: LineItem) -> None:
        backend = MockBillingBackend()
        service = BillingService(backend)

        result = await service.create_sale(
            BillInput(billing_type=BillingType.REGULAR, items=(ten_gram_item,), customer_id="7")
        )

        assert result["sale"]["billingType"] == "regular"
        assert backend.calls[0].payload["regularCustomerId"] == "7"

    @pytest.mark.asyncio
    async def test_backend_failure_propagates(self, ten_gram_item: LineItem) -> None:
        service = BillingService(MockBillingBackend(should_fail=True))

        with pytest.raises(BillingBackendError):
            await service.create_sale(BillInput(items=(ten_gram_item,)))

    @pytest.mark.asyncio
    async def test_without_backend(self) -> None:
        with pytest.raises(RuntimeError):
            await BillingService().create_sale(BillInput())

    @pytest.mark.asyncio
    async def test_ledger_rows_start_from_previous_due(self, ten_gram_item: LineItem) -> None:
        """Ledger rows end on the bill's closing balance"""
        service = BillingService(MockBillingBackend())

        result = await service.create_sale(
            BillInput(
                items=(ten_gram_item,),
                include_previous_due=True,
                previous_due=PreviousDue(silver=2, labor=100),
                payment_mode=PaymentMode.CASH_SILVER,
                cash_for_silver=CashForSilver(rate=80, weight=4),
            )
        )

        ledger = result["ledger"]
        assert [row["kind"] for row in ledger] == ["sale", "cash_for_silver"]
        assert ledger[0]["balance_silver"] == "12.000"
        assert ledger[-1]["balance_silver"] == result["totals"]["balance_silver"] == "8.000"
        assert ledger[-1]["balance_labor"] == result["totals"]["balance_labor"] == "600.00"


class TestStockViews:
    """product_weights / stock_summary tests"""

    def test_product_weights(self) -> None:
        view = BillingService().product_weights("50", "5", "2", "80")
        assert view == {"net_weight": "40.000", "pure_weight": "32.000"}

    def test_stock_summary(self) -> None:
        products = [
            StockProduct(name="Anklet", pieces=6, net_weight="54", touch="92.5"),
            StockProduct(name="Ring", pieces=2, net_weight="10", touch="50"),
        ]

        view = BillingService().stock_summary(products)

        assert view == {"products": 2, "pieces": 8, "net_weight": "64.000", "fine_weight": "54.950"}


class TestUpdateSale:
    """update_sale tests"""

    @pytest_asyncio.fixture
    async def backend(self) -> MockBillingBackend:
        backend = MockBillingBackend()
        await backend.create_sale(BillingType.REGULAR, {"notes": "original"})
        return backend

    @pytest.mark.asyncio
    async def test_previous_due_excludes_the_sale(self, backend: MockBillingBackend, ten_gram_item: LineItem) -> None:
        """Customer balance minus the sale's saved closing balance"""
        backend.seed_ledger(BillingType.REGULAR, "7", customer={"balanceSilver": 20, "balanceLabor": 700})
        service = BillingService(backend)

        result = await service.update_sale(
            "1",
            BillInput(
                billing_type=BillingType.REGULAR,
                items=(ten_gram_item,),
                customer_id="7",
                include_previous_due=True,
            ),
            saved_balance=PreviousDue(silver=10, labor=500),
        )

        assert result["totals"]["prev_silver"] == "10.000"
        assert result["totals"]["prev_labor"] == "200.00"
        # Re-saving an unchanged sale lands on the customer's balance again
        assert result["totals"]["balance_silver"] == "20.000"
        assert result["totals"]["balance_labor"] == "700.00"

        call = backend.get_calls("update_sale")[0]
        assert call.payload["saleId"] == "1"
        assert call.payload["regularCustomerId"] == "7"
        assert backend.sales["1"]["summary"]["balanceSilver"] == "20.000"

    @pytest.mark.asyncio
    async def test_unknown_customer_uses_saved_previous_due(
        self, backend: MockBillingBackend, ten_gram_item: LineItem
    ) -> None:
        service = BillingService(backend)

        result = await service.update_sale(
            "1",
            BillInput(
                billing_type=BillingType.REGULAR,
                items=(ten_gram_item,),
                customer_id="404",
                include_previous_due=True,
            ),
            saved_balance=PreviousDue(silver=10, labor=500),
            saved_previous_due=PreviousDue(silver=3, labor=50),
        )

        assert result["totals"]["balance_silver"] == "13.000"
        assert result["totals"]["balance_labor"] == "550.00"

    @pytest.mark.asyncio
    async def test_supplied_previous_due_is_kept(self, backend: MockBillingBackend, ten_gram_item: LineItem) -> None:
        service = BillingService(backend)

        result = await service.update_sale(
            "1",
            BillInput(
                billing_type=BillingType.REGULAR,
                items=(ten_gram_item,),
                customer_id="7",
                include_previous_due=True,
                previous_due=PreviousDue(silver=1, labor=1),
            ),
            saved_balance=PreviousDue(silver=10, labor=500),
        )

        assert result["totals"]["prev_silver"] == "1.000"
        assert backend.get_calls("get_customer_ledger") == []

    @pytest.mark.asyncio
    async def test_unknown_sale(self, backend: MockBillingBackend) -> None:
        service = BillingService(backend)

        with pytest.raises(BillingBackendError) as exc_info:
            await service.update_sale("9", BillInput(billing_type=BillingType.REGULAR), PreviousDue.zero())

        assert exc_info.value.status_code == 404


class TestRecordPayments:
    """Payments against a saved sale"""

    @pytest.mark.asyncio
    async def test_regular_silver_payment(self) -> None:
        backend = MockBillingBackend()
        service = BillingService(backend)

        result = await service.record_silver_payment(
            BillingType.REGULAR,
            "1",
            SilverPayment(weight="10", touch="90", name="Old anklet", reference_no="R1"),
            notes="counter",
        )

        call = backend.get_calls("record_silver_payment")[0]
        assert call.payload["silverWeight"] == Decimal("9.000")
        assert call.payload["fromNo"] == "R1"
        assert call.payload["notes"] == "counter"
        assert result["transaction"] == {
            "kind": "silver_payment",
            "silver_weight": "-9.000",
            "labor_amount": "0.00",
            "cash_amount": "0.00",
            "notes": "counter",
        }

    @pytest.mark.asyncio
    async def test_wholesale_silver_payment_has_no_details(self) -> None:
        backend = MockBillingBackend()
        service = BillingService(backend)

        await service.record_silver_payment(BillingType.WHOLESALE, "1", SilverPayment(weight="10", touch="90"))

        assert "fromNo" not in backend.calls[0].payload

    @pytest.mark.asyncio
    async def test_cash_for_silver_leaves_labor(self) -> None:
        backend = MockBillingBackend()
        service = BillingService(backend)

        result = await service.record_cash_for_silver(
            BillingType.WHOLESALE, "1", CashForSilver(rate=80, weight=4)
        )

        call = backend.get_calls("record_cash_for_silver")[0]
        assert call.payload["silverWeight"] == Decimal("4")
        assert call.payload["silverRate"] == Decimal("80")
        assert result["transaction"]["silver_weight"] == "-4.000"
        assert result["transaction"]["labor_amount"] == "0.00"
        assert result["transaction"]["cash_amount"] == "320.00"

    @pytest.mark.asyncio
    async def test_cash_payment(self) -> None:
        backend = MockBillingBackend()
        service = BillingService(backend)

        result = await service.record_cash_payment(
            BillingType.WHOLESALE, "1", CashPayment(amount="150", method="upi", reference_no="T-1")
        )

        call = backend.get_calls("record_cash_payment")[0]
        assert call.payload["paymentMode"] == "upi"
        assert call.payload["referenceNumber"] == "T-1"
        assert result["transaction"]["labor_amount"] == "-150.00"

    @pytest.mark.asyncio
    async def test_backend_failure_propagates(self) -> None:
        service = BillingService(MockBillingBackend(should_fail=True))

        with pytest.raises(BillingBackendError):
            await service.record_cash_payment(BillingType.REGULAR, "1", CashPayment(amount=1))

    @pytest.mark.asyncio
    async def test_without_backend(self) -> None:
        with pytest.raises(RuntimeError):
            await BillingService().record_silver_payment(BillingType.REGULAR, "1", SilverPayment())
