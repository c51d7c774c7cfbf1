"""
Billing service

Bill previews, stock-linked lines, saving and editing sales, and payments
recorded against a saved sale through the backend.
"""

import logging
from dataclasses import replace
from typing import Any

from adapters.backend.client import BillingBackendError
from adapters.interfaces import ISalesBackend
from core.billing import (
    BillInput,
    CashForSilver,
    CashPayment,
    PreviousDue,
    SilverPayment,
    StockProduct,
    Totals,
    allocate_stock_item,
    build_sale_payload,
    compute_bill,
    compute_line_item,
    compute_product_weights,
    previous_due_for_edit,
    previous_due_from_ledger,
    silver_payment_payload,
    summarize_stock,
)
from core.constants import ItemDefaults
from core.ledger import (
    LedgerTransaction,
    bill_transactions,
    cash_for_silver_transaction,
    cash_payment_transaction,
    post_transactions,
    silver_payment_transaction,
)
from core.types import BillingType
from core.utils.numeric import (
    NumericInput,
    format_amount,
    format_touch,
    format_weight,
    quantize_weight,
    to_decimal,
)

logger = logging.getLogger(__name__)


def totals_view(totals: Totals) -> dict[str, Any]:
    """Totals and per-line results as display strings"""
    return {
        "totals": totals.display(),
        "lines": [line.display() for line in totals.lines],
    }


def _sale_view(sale: Any, bill: BillInput, totals: Totals) -> dict[str, Any]:
    # Ledger rows start from the previous due the bill carried
    opening = PreviousDue(silver=totals.prev_silver, labor=totals.prev_labor)
    rows = post_transactions(opening, bill_transactions(bill, totals))
    return {
        "sale": sale if isinstance(sale, dict) else {"result": sale},
        "totals": totals.display(),
        "ledger": [row.display() for row in rows],
    }


def _payment_view(result: Any, txn: LedgerTransaction) -> dict[str, Any]:
    return {
        "payment": result if isinstance(result, dict) else {"result": result},
        "transaction": {
            "kind": txn.kind.value,
            "silver_weight": format_weight(txn.silver_weight),
            "labor_amount": format_amount(txn.labor_amount),
            "cash_amount": format_amount(txn.cash_amount),
            "notes": txn.notes,
        },
    }


class BillingService:
    """Billing service

    Args:
        backend: billing backend; only needed to save sales, record
            payments or look up a customer's previous due
    """

    def __init__(self, backend: ISalesBackend | None = None):
        self.backend = backend

    def _require_backend(self) -> ISalesBackend:
        if self.backend is None:
            raise RuntimeError("Billing backend is not configured")
        return self.backend

    # =========================================================================
    # Previews
    # =========================================================================

    def preview(self, bill: BillInput) -> dict[str, Any]:
        """Compute a bill without saving it"""
        return totals_view(compute_bill(bill))

    def allocate_stock(
        self,
        product: StockProduct,
        requested_pieces: NumericInput,
        labor_rate_per_kg: NumericInput = ItemDefaults.WHOLESALE_LABOR_RATE_PER_KG,
        stamp: str = ItemDefaults.STAMP,
    ) -> dict[str, Any]:
        """Stock-linked line with its derived fine silver and labor"""
        allocation = allocate_stock_item(
            product,
            requested_pieces,
            labor_rate_per_kg=labor_rate_per_kg,
            stamp=stamp,
        )
        item = allocation.item
        line = compute_line_item(item, BillingType.WHOLESALE)

        return {
            "requested_pieces": float(allocation.requested_pieces),
            "allocated_pieces": float(allocation.allocated_pieces),
            "clamped": allocation.clamped,
            "warning": allocation.warning,
            "item": {
                "product_id": item.product_id,
                "description": item.description,
                "pieces": float(allocation.allocated_pieces),
                "gross_weight": format_weight(item.gross),
                "stone_weight": format_weight(item.stone),
                "net_weight": format_weight(item.net),
                "touch": format_touch(item.touch),
                "wastage": format_touch(item.wastage),
                "labor_rate_per_kg": format_amount(item.labor_rate_per_kg),
                "stamp": item.stamp,
            },
            "line": line.display(),
        }

    def product_weights(
        self,
        gross_weight: NumericInput,
        pieces: NumericInput,
        per_piece_weight: NumericInput,
        touch: NumericInput,
    ) -> dict[str, str]:
        """Net and pure weight of a product being added to stock"""
        weights = compute_product_weights(gross_weight, pieces, per_piece_weight, touch)
        return {
            "net_weight": format_weight(weights.net_weight),
            "pure_weight": format_weight(weights.pure_weight),
        }

    def stock_summary(self, products: list[StockProduct]) -> dict[str, Any]:
        summary = summarize_stock(products)
        return {
            "products": summary.products,
            "pieces": summary.pieces,
            "net_weight": format_weight(summary.net_weight),
            "fine_weight": format_weight(summary.fine_weight),
        }

    # =========================================================================
    # Saving sales
    # =========================================================================

    async def resolve_previous_due(self, bill: BillInput) -> BillInput:
        """Fill in the previous due from the customer's ledger

        Only when it is requested, not already supplied and a customer
        and backend are available.
        """
        if not bill.include_previous_due or bill.previous_due is not None:
            return bill
        if not bill.customer_id or self.backend is None:
            return bill

        previous_due = await self.fetch_previous_due(bill.billing_type, bill.customer_id)
        return replace(bill, previous_due=previous_due)

    async def fetch_previous_due(self, billing_type: BillingType, customer_id: str) -> PreviousDue:
        """Customer's carried balance from the stored ledger

        Raises:
            RuntimeError: no backend configured
            BillingBackendError: backend failure
        """
        backend = self._require_backend()

        ledger = await backend.get_customer_ledger(billing_type, customer_id)
        previous_due = previous_due_from_ledger(
            ledger.get("transactions") or [],
            ledger.get("customer") or {},
        )
        logger.info(
            f"Previous due resolved for customer {customer_id}",
            extra={"silver": str(previous_due.silver), "labor": str(previous_due.labor)},
        )
        return previous_due

    async def create_sale(self, bill: BillInput) -> dict[str, Any]:
        """Compute a bill and save it through the backend

        Raises:
            RuntimeError: no backend configured
            BillingBackendError: backend failure
        """
        backend = self._require_backend()

        bill = await self.resolve_previous_due(bill)
        totals = compute_bill(bill)
        payload = build_sale_payload(bill, totals)

        sale = await backend.create_sale(totals.billing_type, payload)
        logger.info(
            f"Sale saved: {totals.billing_type.value}, customer={bill.customer_id}",
            extra={"balance_silver": str(totals.balance_silver), "balance_labor": str(totals.balance_labor)},
        )

        return _sale_view(sale, bill, totals)

    async def fetch_customer_balance(
        self,
        billing_type: BillingType,
        customer_id: str | None,
    ) -> PreviousDue | None:
        """Customer's stored balance, None without a customer record"""
        if not customer_id or self.backend is None:
            return None
        try:
            ledger = await self.backend.get_customer_ledger(billing_type, customer_id)
        except BillingBackendError as e:
            if e.status_code != 404:
                raise
            logger.warning(f"Customer {customer_id} not found, using the sale's stored previous balance")
            return None

        customer = ledger.get("customer") or {}
        if not customer:
            return None
        return PreviousDue.from_api(customer)

    async def update_sale(
        self,
        sale_id: str,
        bill: BillInput,
        saved_balance: PreviousDue,
        saved_previous_due: PreviousDue | None = None,
    ) -> dict[str, Any]:
        """Recompute an edited sale and replace it through the backend

        The customer's balance already contains this sale's saved closing
        balance, so unless the caller supplies one the previous due comes
        from previous_due_for_edit().

        Args:
            sale_id: saved sale id
            bill: edited bill
            saved_balance: the sale's saved closing balance
            saved_previous_due: the sale's saved previous balance

        Raises:
            RuntimeError: no backend configured
            BillingBackendError: backend failure
        """
        backend = self._require_backend()

        if bill.include_previous_due and bill.previous_due is None:
            customer_balance = await self.fetch_customer_balance(bill.billing_type, bill.customer_id)
            previous_due = previous_due_for_edit(customer_balance, saved_balance, saved_previous_due)
            bill = replace(bill, previous_due=previous_due)

        totals = compute_bill(bill)
        payload = build_sale_payload(bill, totals)

        sale = await backend.update_sale(totals.billing_type, sale_id, payload)
        logger.info(
            f"Sale updated: {totals.billing_type.value} #{sale_id}",
            extra={"balance_silver": str(totals.balance_silver), "balance_labor": str(totals.balance_labor)},
        )

        return _sale_view(sale, bill, totals)

    # =========================================================================
    # Payments against a saved sale
    # =========================================================================

    async def record_silver_payment(
        self,
        billing_type: BillingType,
        sale_id: str,
        payment: SilverPayment,
        notes: str = "",
    ) -> dict[str, Any]:
        """Record silver received; its fine weight is credited"""
        backend = self._require_backend()
        details = silver_payment_payload(payment) if billing_type == BillingType.REGULAR else None

        result = await backend.record_silver_payment(
            billing_type,
            sale_id,
            quantize_weight(payment.fine),
            notes=notes,
            details=details,
        )
        logger.info(f"Silver payment recorded on sale #{sale_id}: {format_weight(payment.fine)} g fine")
        return _payment_view(result, silver_payment_transaction(payment, notes=notes))

    async def record_cash_for_silver(
        self,
        billing_type: BillingType,
        sale_id: str,
        cash_for_silver: CashForSilver,
        notes: str = "",
    ) -> dict[str, Any]:
        """Record owed silver settled in cash; only the silver balance moves"""
        backend = self._require_backend()

        result = await backend.record_cash_for_silver(
            billing_type,
            sale_id,
            cash_for_silver.silver_weight,
            to_decimal(cash_for_silver.rate),
            notes=notes,
        )
        logger.info(
            f"Cash-for-silver recorded on sale #{sale_id}: "
            f"{format_weight(cash_for_silver.silver_weight)} g for {format_amount(cash_for_silver.cash_value)}"
        )
        return _payment_view(result, cash_for_silver_transaction(cash_for_silver, notes=notes))

    async def record_cash_payment(
        self,
        billing_type: BillingType,
        sale_id: str,
        payment: CashPayment,
        notes: str = "",
    ) -> dict[str, Any]:
        """Record a cash (wholesale) or labor (regular) payment"""
        backend = self._require_backend()

        result = await backend.record_cash_payment(
            billing_type,
            sale_id,
            payment.value,
            notes=notes,
            method=payment.method,
            reference_no=payment.reference_no,
        )
        logger.info(f"Cash payment recorded on sale #{sale_id}: {format_amount(payment.value)}")
        return _payment_view(result, cash_payment_transaction(payment, notes=notes))
