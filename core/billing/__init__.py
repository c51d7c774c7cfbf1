"""
Billing core

Silver / labor balance accounting for wholesale, regular and GST bills.

Usage:
```python
from core.billing import BillInput, LineItem, PaymentMode, compute_bill

bill = BillInput(
    items=(LineItem(gross_weight="20", stone_weight="2", touch="92.5", labor_rate_per_kg="1000"),),
    payment_mode=PaymentMode.NONE,
)
totals = compute_bill(bill)
totals.display()  # {"total_silver_weight": "16.650", "total_labor": "20.00", ...}
```
"""

from core.billing.calculator import compute_bill, compute_line_item, compute_totals
from core.billing.gst import (
    GstItem,
    GstTotals,
    amount_in_words,
    build_gst_bill_payload,
    compute_gst_totals,
    is_intra_state,
)
from core.billing.models import (
    BillInput,
    CashForSilver,
    CashPayment,
    LineItem,
    LineResult,
    PreviousDue,
    SilverPayment,
    Totals,
)
from core.billing.payload import build_sale_payload, silver_payment_payload
from core.billing.previous_due import previous_due_for_edit, previous_due_from_ledger
from core.billing.stock import (
    ProductWeights,
    StockAllocation,
    StockProduct,
    StockSummary,
    allocate_stock_item,
    compute_product_weights,
    summarize_stock,
)
from core.types import BillingType, PaymentMode

__all__ = [
    # Calculator
    "compute_line_item",
    "compute_totals",
    "compute_bill",
    # Records
    "BillInput",
    "LineItem",
    "SilverPayment",
    "CashForSilver",
    "CashPayment",
    "PreviousDue",
    "LineResult",
    "Totals",
    # Stock
    "StockProduct",
    "StockAllocation",
    "ProductWeights",
    "StockSummary",
    "allocate_stock_item",
    "compute_product_weights",
    "summarize_stock",
    # GST
    "GstItem",
    "GstTotals",
    "compute_gst_totals",
    "is_intra_state",
    "amount_in_words",
    "build_gst_bill_payload",
    # Previous due / payload
    "previous_due_from_ledger",
    "previous_due_for_edit",
    "build_sale_payload",
    "silver_payment_payload",
    # Enum
    "BillingType",
    "PaymentMode",
]
