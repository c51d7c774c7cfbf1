"""
Web models

Pydantic schemas
"""

from web.models.requests import (
    BakiTransactionRequest,
    BillRequest,
    BullionEntryRequest,
    BullionPreviewRequest,
    CashForSilverRecordRequest,
    CashForSilverRequest,
    CashPaymentRecordRequest,
    CashPaymentRequest,
    CustomerLedgerRequest,
    EmployeeLedgerRequest,
    GstBillRequest,
    GstItemRequest,
    LedgerTransactionRequest,
    LineItemRequest,
    PreviousDueRequest,
    ProductWeightsRequest,
    SalaryRequest,
    SaleUpdateRequest,
    SilverPaymentRecordRequest,
    SilverPaymentRequest,
    StockAllocationRequest,
    StockProductRequest,
    StockSummaryRequest,
)
from web.models.responses import (
    BillPreviewResponse,
    BullionPreviewResponse,
    CustomerLedgerResponse,
    EmployeeLedgerResponse,
    GstBillCreateResponse,
    GstPreviewResponse,
    HealthResponse,
    LedgerMovementResponse,
    LedgerRowResponse,
    LineResultResponse,
    PaymentRecordResponse,
    PreviousDueResponse,
    ProductWeightsResponse,
    SaleCreateResponse,
    SalaryResponse,
    StockAllocationResponse,
    StockSummaryResponse,
    TotalsResponse,
)

__all__ = [
    # Requests
    "BillRequest",
    "LineItemRequest",
    "SilverPaymentRequest",
    "CashForSilverRequest",
    "CashPaymentRequest",
    "PreviousDueRequest",
    "StockProductRequest",
    "StockAllocationRequest",
    "StockSummaryRequest",
    "ProductWeightsRequest",
    "SaleUpdateRequest",
    "SilverPaymentRecordRequest",
    "CashForSilverRecordRequest",
    "CashPaymentRecordRequest",
    "GstItemRequest",
    "GstBillRequest",
    "LedgerTransactionRequest",
    "CustomerLedgerRequest",
    "BullionEntryRequest",
    "BullionPreviewRequest",
    "SalaryRequest",
    "BakiTransactionRequest",
    "EmployeeLedgerRequest",
    # Responses
    "HealthResponse",
    "LineResultResponse",
    "TotalsResponse",
    "BillPreviewResponse",
    "StockAllocationResponse",
    "SaleCreateResponse",
    "StockSummaryResponse",
    "ProductWeightsResponse",
    "LedgerMovementResponse",
    "PaymentRecordResponse",
    "GstPreviewResponse",
    "GstBillCreateResponse",
    "LedgerRowResponse",
    "CustomerLedgerResponse",
    "PreviousDueResponse",
    "BullionPreviewResponse",
    "SalaryResponse",
    "EmployeeLedgerResponse",
]
