"""
Request schemas (Pydantic)

Web API request validation. Numeric fields accept numbers or raw form
strings; blank or invalid values count as 0 in the calculator.
"""

from typing import Any

from pydantic import BaseModel, Field

from core.billing import (
    BillInput,
    CashForSilver,
    CashPayment,
    GstItem,
    LineItem,
    PreviousDue,
    SilverPayment,
    StockProduct,
)
from core.constants import ItemDefaults
from core.ledger import (
    BakiTransaction,
    BullionEntry,
    LedgerTransaction,
    SalaryRecord,
    compute_salary,
)
from core.types import (
    BakiKind,
    BillingType,
    BullionForm,
    BullionTransactionType,
    LedgerEntryKind,
    PaymentMode,
)
from core.utils.numeric import to_decimal

# Raw numeric form value
Numeric = float | int | str | None


class LineItemRequest(BaseModel):
    """Bill line"""

    pieces: Numeric = Field(default=1, description="Piece count")
    gross_weight: Numeric = Field(default=None, description="Gross weight (g)")
    stone_weight: Numeric = Field(default=0, description="Stone deduction (g)")
    net_weight: Numeric = Field(default=None, description="Net weight (g), blank = gross - stone")
    touch: Numeric = Field(default=None, description="Purity (%)")
    wastage: Numeric = Field(default=0, description="Wastage (percentage points)")
    labor_rate_per_kg: Numeric = Field(default=None, description="Labor rate per kg")
    stamp: str = Field(default=ItemDefaults.STAMP, description="Hallmark stamp")
    description: str = Field(default="", description="Article description")
    product_id: str | None = Field(default=None, description="Stock product id")

    def to_line_item(self) -> LineItem:
        return LineItem(
            pieces=self.pieces,
            gross_weight=self.gross_weight,
            stone_weight=self.stone_weight,
            net_weight=self.net_weight,
            touch=self.touch,
            wastage=self.wastage,
            labor_rate_per_kg=self.labor_rate_per_kg,
            stamp=self.stamp,
            description=self.description,
            product_id=self.product_id,
        )


class SilverPaymentRequest(BaseModel):
    """Silver handed over by the customer"""

    weight: Numeric = Field(default=None, description="Weight (g)")
    touch: Numeric = Field(default=None, description="Purity (%)")
    name: str = Field(default="", description="Source name")
    reference_no: str = Field(default="", description="Reference / from number")

    def to_payment(self) -> SilverPayment:
        return SilverPayment(
            weight=self.weight,
            touch=self.touch,
            name=self.name,
            reference_no=self.reference_no,
        )


class CashForSilverRequest(BaseModel):
    """Owed silver settled in cash"""

    rate: Numeric = Field(default=None, description="Cash rate per gram")
    weight: Numeric = Field(default=None, description="Silver weight settled (g)")

    def to_cash_for_silver(self) -> CashForSilver:
        return CashForSilver(rate=self.rate, weight=self.weight)


class CashPaymentRequest(BaseModel):
    """Flat cash / labor payment"""

    amount: Numeric = Field(default=None, description="Amount paid")
    method: str = Field(default="cash", description="Payment method")
    reference_no: str = Field(default="", description="Reference number")

    def to_cash_payment(self) -> CashPayment:
        return CashPayment(amount=self.amount, method=self.method, reference_no=self.reference_no)


class PreviousDueRequest(BaseModel):
    """Carried silver / labor balance"""

    silver: Numeric = Field(default=0, description="Silver balance (g)")
    labor: Numeric = Field(default=0, description="Labor balance")

    def to_previous_due(self) -> PreviousDue:
        return PreviousDue(silver=self.silver, labor=self.labor)


class BillRequest(BaseModel):
    """Wholesale / regular bill

    Used for previews and for saving a sale.
    """

    billing_type: str = Field(default=BillingType.WHOLESALE.value, description="wholesale | regular")
    items: list[LineItemRequest] = Field(default_factory=list, description="Bill lines")
    payment_mode: str = Field(
        default=PaymentMode.NONE.value,
        description="none | silver | cash | cashsilver | labor | multiple",
    )
    silver_payments: list[SilverPaymentRequest] = Field(default_factory=list, description="Silver payments")
    cash_for_silver: CashForSilverRequest | None = Field(default=None, description="Cash-for-silver")
    cash_payment: CashPaymentRequest | None = Field(default=None, description="Cash / labor payment")
    previous_due: PreviousDueRequest | None = Field(default=None, description="Previous balance")
    include_previous_due: bool = Field(default=False, description="Add the previous balance")
    customer_id: str | None = Field(default=None, description="Customer id")
    notes: str = Field(default="", description="Bill notes")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "billing_type": "wholesale",
                    "items": [
                        {
                            "pieces": 1,
                            "gross_weight": "20",
                            "stone_weight": "2",
                            "touch": "92.5",
                            "labor_rate_per_kg": "1000",
                        }
                    ],
                    "payment_mode": "cashsilver",
                    "cash_for_silver": {"rate": 80, "weight": 4},
                }
            ]
        }
    }

    def to_bill_input(self) -> BillInput:
        return BillInput(
            billing_type=BillingType.parse(self.billing_type),
            items=tuple(item.to_line_item() for item in self.items),
            payment_mode=PaymentMode.parse(self.payment_mode),
            silver_payments=tuple(p.to_payment() for p in self.silver_payments),
            cash_for_silver=self.cash_for_silver.to_cash_for_silver() if self.cash_for_silver else None,
            cash_payment=self.cash_payment.to_cash_payment() if self.cash_payment else None,
            previous_due=self.previous_due.to_previous_due() if self.previous_due else None,
            include_previous_due=self.include_previous_due,
            customer_id=self.customer_id,
            notes=self.notes,
        )


class SaleUpdateRequest(BillRequest):
    """Edited sale

    The saved balances let the previous due be recomputed without
    counting this sale twice.
    """

    saved_balance: PreviousDueRequest = Field(
        default_factory=PreviousDueRequest,
        description="The saved sale's closing balance (balanceSilver / balanceLabor)",
    )
    saved_previous_due: PreviousDueRequest | None = Field(
        default=None,
        description="The saved sale's previous balance, used without a customer record",
    )


class SilverPaymentRecordRequest(SilverPaymentRequest):
    """Silver received against a saved sale"""

    notes: str = Field(default="", description="Notes")


class CashForSilverRecordRequest(CashForSilverRequest):
    """Silver settled in cash against a saved sale"""

    notes: str = Field(default="", description="Notes")


class CashPaymentRecordRequest(CashPaymentRequest):
    """Cash / labor payment against a saved sale"""

    notes: str = Field(default="", description="Notes")


class StockProductRequest(BaseModel):
    """Stock product record"""

    product_id: str | None = Field(default=None, description="Catalog id")
    name: str = Field(default="", description="Product name")
    pieces: Numeric = Field(default=0, description="Pieces in stock")
    gross_weight: Numeric = Field(default=0, description="Gross weight of all pieces (g)")
    net_weight: Numeric = Field(default=0, description="Net weight of all pieces (g)")
    per_piece_weight: Numeric = Field(default=0, description="Deduction per piece (g)")
    touch: Numeric = Field(default=0, description="Purity (%)")

    def to_product(self) -> StockProduct:
        return StockProduct(
            product_id=self.product_id,
            name=self.name,
            pieces=self.pieces,
            gross_weight=self.gross_weight,
            net_weight=self.net_weight,
            per_piece_weight=self.per_piece_weight,
            touch=self.touch,
        )


class StockAllocationRequest(BaseModel):
    """Draw pieces from a stock product onto a bill line"""

    product: StockProductRequest = Field(..., description="Stock product")
    requested_pieces: Numeric = Field(default=1, description="Pieces entered on the line")
    labor_rate_per_kg: Numeric = Field(
        default=float(ItemDefaults.WHOLESALE_LABOR_RATE_PER_KG),
        description="Labor rate per kg",
    )
    stamp: str = Field(default=ItemDefaults.STAMP, description="Hallmark stamp")


class ProductWeightsRequest(BaseModel):
    """Product being added to stock"""

    gross_weight: Numeric = Field(default=0, description="Gross weight (g)")
    pieces: Numeric = Field(default=0, description="Pieces")
    per_piece_weight: Numeric = Field(default=0, description="Deduction per piece (g)")
    touch: Numeric = Field(default=0, description="Purity (%)")


class StockSummaryRequest(BaseModel):
    products: list[StockProductRequest] = Field(default_factory=list, description="Stock products")


class GstItemRequest(BaseModel):
    """Tax-invoice line"""

    description: str = Field(default="", description="Description")
    hsn: str = Field(default="", description="HSN code")
    quantity: Numeric = Field(default=0, description="Quantity (g)")
    rate_per_gram: Numeric = Field(default=0, description="Rate per gram")

    def to_gst_item(self) -> GstItem:
        return GstItem(
            description=self.description,
            hsn=self.hsn,
            quantity=self.quantity,
            rate_per_gram=self.rate_per_gram,
        )


class GstBillRequest(BaseModel):
    """GST tax invoice"""

    items: list[GstItemRequest] = Field(default_factory=list, description="Invoice lines")
    customer_state: str = Field(default="", description="Customer's state")
    home_state: str | None = Field(default=None, description="Seller's state (settings default)")
    bill_details: dict[str, Any] = Field(
        default_factory=dict,
        description="Customer / invoice fields passed through to the backend",
    )


class LedgerTransactionRequest(BaseModel):
    """Customer ledger movement"""

    kind: str = Field(default=LedgerEntryKind.ADJUSTMENT.value, description="Transaction kind")
    silver_weight: Numeric = Field(default=0, description="Signed fine silver (+ owed, - paid)")
    labor_amount: Numeric = Field(default=0, description="Signed labor amount (+ owed, - paid)")
    cash_amount: Numeric = Field(default=0, description="Cash handled")
    notes: str = Field(default="", description="Notes")
    transaction_date: str | None = Field(default=None, description="Transaction date")

    def to_transaction(self) -> LedgerTransaction:
        return LedgerTransaction.from_api(
            {
                "type": self.kind,
                "silverWeight": self.silver_weight,
                "laborAmount": self.labor_amount,
                "cashAmount": self.cash_amount,
                "notes": self.notes,
                "transactionDate": self.transaction_date,
            }
        )


class CustomerLedgerRequest(BaseModel):
    """Customer ledger with opening balance"""

    opening: PreviousDueRequest = Field(default_factory=PreviousDueRequest, description="Opening balance")
    transactions: list[LedgerTransactionRequest] = Field(
        default_factory=list,
        description="Transactions, oldest first",
    )


class BullionEntryRequest(BaseModel):
    """Bullion ledger entry"""

    transaction_type: BullionTransactionType = Field(
        default=BullionTransactionType.SALE,
        description="sale | purchase | badal",
    )
    form: BullionForm = Field(default=BullionForm.GUT, description="gut | kach")
    bullion_name: str = Field(default="", description="Dealer name")
    weight: Numeric = Field(default=0, description="Weight (g)")
    touch: Numeric = Field(default=0, description="Purity (%)")
    bhav: Numeric = Field(default=0, description="Rate per gram")
    raw_silver: Numeric = Field(default=0, description="Raw silver received in a gut badal (g)")
    form_no: str = Field(default="", description="Form number")
    description: str = Field(default="", description="Description")

    def to_entry(self) -> BullionEntry:
        return BullionEntry(
            transaction_type=self.transaction_type,
            form=self.form,
            bullion_name=self.bullion_name,
            weight=self.weight,
            touch=self.touch,
            bhav=self.bhav,
            raw_silver=self.raw_silver,
            form_no=self.form_no,
            description=self.description,
        )


class BullionPreviewRequest(BaseModel):
    entries: list[BullionEntryRequest] = Field(default_factory=list, description="Entries")


class SalaryRequest(BaseModel):
    """Salary payout"""

    days_worked: Numeric = Field(default=0, description="Days worked")
    daily_rate: Numeric = Field(default=0, description="Pagar per day")
    advance: Numeric = Field(default=0, description="Advance already paid")
    baki_return: Numeric = Field(default=0, description="Baki recovered from this salary")
    given_pagar: Numeric = Field(default=0, description="Amount handed over")

    def to_salary(self) -> SalaryRecord:
        return compute_salary(
            days_worked=self.days_worked,
            daily_rate=self.daily_rate,
            advance=self.advance,
            baki_return=self.baki_return,
            given_pagar=self.given_pagar,
        )


class BakiTransactionRequest(BaseModel):
    """Baki given to / returned by an employee"""

    kind: BakiKind = Field(..., description="given | returned")
    amount: Numeric = Field(default=0, description="Amount")
    notes: str = Field(default="", description="Notes")

    def to_transaction(self) -> BakiTransaction:
        return BakiTransaction(kind=self.kind, amount=to_decimal(self.amount), notes=self.notes)


class EmployeeLedgerRequest(BaseModel):
    """Employee salaries and baki movements"""

    opening_baki: Numeric = Field(default=0, description="Baki before these movements")
    salaries: list[SalaryRequest] = Field(default_factory=list, description="Salary payouts")
    baki_transactions: list[BakiTransactionRequest] = Field(
        default_factory=list,
        description="Baki given / returned",
    )
