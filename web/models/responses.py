"""
Response schemas (Pydantic)

Web API response serialization. Weights are strings with 3 decimals,
currency with 2.
"""

from typing import Any

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Health check"""

    status: str = Field(default="ok", description="Service status")
    version: str = Field(..., description="API version")
    backend_configured: bool = Field(..., description="A billing backend is available")


class LineResultResponse(BaseModel):
    """Derived values for one line"""

    net_weight: str = Field(..., description="Net weight (g)")
    fine_silver_weight: str = Field(..., description="Fine silver (g)")
    labor_amount: str = Field(..., description="Labor")


class TotalsResponse(BaseModel):
    """Bill totals and closing balances"""

    billing_type: str
    payment_mode: str
    total_pieces: int
    total_gross: str
    total_stone: str
    total_net_weight: str
    total_wastage: str
    total_silver_weight: str
    total_labor: str
    subtotal: str
    prev_silver: str
    prev_labor: str
    bill_total_silver: str
    bill_total_labor: str
    paid_silver: str
    cash_for_silver_weight: str
    cash_for_silver_value: str
    paid_cash: str
    balance_silver: str = Field(..., description="Closing silver balance (g)")
    balance_labor: str = Field(..., description="Closing labor / cash balance")


class BillPreviewResponse(BaseModel):
    """Computed bill"""

    totals: TotalsResponse
    lines: list[LineResultResponse]


class StockAllocationResponse(BaseModel):
    """Stock-linked line"""

    requested_pieces: float
    allocated_pieces: float
    clamped: bool
    warning: str | None = None
    item: dict[str, Any] = Field(..., description="Derived line (display strings)")
    line: LineResultResponse


class ProductWeightsResponse(BaseModel):
    net_weight: str
    pure_weight: str


class StockSummaryResponse(BaseModel):
    """Stock totals"""

    products: int
    pieces: int
    net_weight: str
    fine_weight: str


class LedgerRowResponse(BaseModel):
    """Customer ledger row"""

    kind: str
    notes: str
    transaction_date: str | None = None
    silver_debit: str
    silver_credit: str
    balance_silver: str
    amount_debit: str
    amount_credit: str
    balance_labor: str


class SaleCreateResponse(BaseModel):
    """Saved sale"""

    sale: dict[str, Any] = Field(..., description="Backend sale record")
    totals: TotalsResponse
    ledger: list[LedgerRowResponse] = Field(
        default_factory=list,
        description="Ledger rows the sale produces, starting from the previous due",
    )


class LedgerMovementResponse(BaseModel):
    """Signed ledger movement (+ owed, - paid)"""

    kind: str
    silver_weight: str
    labor_amount: str
    cash_amount: str
    notes: str


class PaymentRecordResponse(BaseModel):
    """Payment recorded against a saved sale"""

    payment: dict[str, Any] = Field(..., description="Backend payment record")
    transaction: LedgerMovementResponse


class GstPreviewResponse(BaseModel):
    """GST bill totals"""

    total_quantity: str
    total_amount: str
    cgst: str
    sgst: str
    igst: str
    total_with_tax: str
    round_off: str
    grand_total: str
    amount_in_words: str
    intra_state: bool


class GstBillCreateResponse(BaseModel):
    bill: dict[str, Any] = Field(..., description="Backend GST bill record")
    totals: GstPreviewResponse


class PreviousDueResponse(BaseModel):
    """Carried balance for a new bill"""

    silver: str
    labor: str


class CustomerLedgerResponse(BaseModel):
    """Customer ledger with running balances"""

    rows: list[LedgerRowResponse]
    closing_silver: str = Field(..., description="Silver balance after the last row (g)")
    closing_labor: str = Field(..., description="Labor balance after the last row")
    previous_due: PreviousDueResponse | None = Field(default=None, description="Previous due for a new bill")


class BullionValuesResponse(BaseModel):
    weight: str
    fine: str
    total_silver: str
    total_amount: str


class BullionSummaryResponse(BaseModel):
    entries: int
    total_weight: str
    total_fine: str
    total_silver: str
    total_amount: str


class BullionPreviewResponse(BaseModel):
    """Bullion entries with derived values"""

    entries: list[BullionValuesResponse]
    summary: BullionSummaryResponse


class SalaryResponse(BaseModel):
    """Salary payout"""

    days_worked: str
    daily_rate: str
    total_pagar: str
    advance: str
    final_pagar: str
    baki_return: str
    given_pagar: str


class SalarySummaryResponse(BaseModel):
    records: int
    total_pagar: str
    advance: str
    final_pagar: str
    baki_return: str
    given_pagar: str


class EmployeeLedgerResponse(BaseModel):
    """Employee salary ledger and outstanding baki"""

    salaries: list[SalaryResponse]
    summary: SalarySummaryResponse
    baki_balance: str = Field(..., description="Outstanding baki")
