"""
Billing API routes

Wholesale / regular bill previews, stock-linked lines, saving and editing
sales and recording payments against a saved sale
"""

import logging
from dataclasses import replace

from fastapi import APIRouter, Depends, HTTPException

from adapters.backend.client import BillingBackendError
from adapters.interfaces import ISalesBackend
from core.types import BillingType
from core.utils.numeric import format_amount, format_weight
from web.dependencies import require_sales_backend
from web.models.requests import (
    BillRequest,
    CashForSilverRecordRequest,
    CashPaymentRecordRequest,
    ProductWeightsRequest,
    SaleUpdateRequest,
    SilverPaymentRecordRequest,
    StockAllocationRequest,
    StockSummaryRequest,
)
from web.models.responses import (
    BillPreviewResponse,
    PaymentRecordResponse,
    PreviousDueResponse,
    ProductWeightsResponse,
    SaleCreateResponse,
    StockAllocationResponse,
    StockSummaryResponse,
)
from web.services.billing_service import BillingService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/billing", tags=["Billing"])


def _backend_error(e: BillingBackendError) -> HTTPException:
    status = 404 if e.status_code == 404 else 502
    return HTTPException(status_code=status, detail=str(e))


@router.post("/preview", response_model=BillPreviewResponse)
async def preview_bill(request: BillRequest):
    """Bill totals and closing balances (nothing is saved)"""
    service = BillingService()
    return service.preview(request.to_bill_input())


@router.post("/stock-allocation", response_model=StockAllocationResponse)
async def allocate_stock(request: StockAllocationRequest):
    """Derive a line from stock, capping the pieces at what is in stock"""
    service = BillingService()
    return service.allocate_stock(
        request.product.to_product(),
        request.requested_pieces,
        labor_rate_per_kg=request.labor_rate_per_kg,
        stamp=request.stamp,
    )


@router.post("/product-weights", response_model=ProductWeightsResponse)
async def product_weights(request: ProductWeightsRequest):
    """Net and pure weight of a product being added to stock"""
    service = BillingService()
    return service.product_weights(
        request.gross_weight,
        request.pieces,
        request.per_piece_weight,
        request.touch,
    )


@router.post("/stock-summary", response_model=StockSummaryResponse)
async def stock_summary(request: StockSummaryRequest):
    """Pieces, net and fine totals of stock products"""
    service = BillingService()
    return service.stock_summary([product.to_product() for product in request.products])


@router.get("/previous-due/{billing_type}/{customer_id}", response_model=PreviousDueResponse)
async def get_previous_due(
    billing_type: BillingType,
    customer_id: str,
    backend: ISalesBackend = Depends(require_sales_backend),
):
    """Previous due a new bill for this customer would carry"""
    service = BillingService(backend)
    try:
        due = await service.fetch_previous_due(billing_type, customer_id)
    except BillingBackendError as e:
        raise HTTPException(status_code=502, detail=str(e))

    return PreviousDueResponse(
        silver=format_weight(due.silver_value),
        labor=format_amount(due.labor_value),
    )


@router.post("/sales", response_model=SaleCreateResponse, status_code=201)
async def create_sale(
    request: BillRequest,
    backend: ISalesBackend = Depends(require_sales_backend),
):
    """Compute a bill and save it as a sale"""
    service = BillingService(backend)
    try:
        return await service.create_sale(request.to_bill_input())
    except BillingBackendError as e:
        logger.error(f"Sale not saved: {e}")
        raise HTTPException(status_code=502, detail=str(e))


@router.put("/sales/{billing_type}/{sale_id}", response_model=SaleCreateResponse)
async def update_sale(
    billing_type: BillingType,
    sale_id: str,
    request: SaleUpdateRequest,
    backend: ISalesBackend = Depends(require_sales_backend),
):
    """Recompute an edited sale and replace the saved one

    The flow in the path wins over the body's billing_type.
    """
    bill = replace(request.to_bill_input(), billing_type=billing_type)

    service = BillingService(backend)
    try:
        return await service.update_sale(
            sale_id,
            bill,
            request.saved_balance.to_previous_due(),
            request.saved_previous_due.to_previous_due() if request.saved_previous_due else None,
        )
    except BillingBackendError as e:
        logger.error(f"Sale #{sale_id} not updated: {e}")
        raise _backend_error(e)


@router.post("/sales/{billing_type}/{sale_id}/payments/silver", response_model=PaymentRecordResponse)
async def record_silver_payment(
    billing_type: BillingType,
    sale_id: str,
    request: SilverPaymentRecordRequest,
    backend: ISalesBackend = Depends(require_sales_backend),
):
    """Record silver received against a saved sale"""
    service = BillingService(backend)
    try:
        return await service.record_silver_payment(
            billing_type, sale_id, request.to_payment(), notes=request.notes
        )
    except BillingBackendError as e:
        raise _backend_error(e)


@router.post("/sales/{billing_type}/{sale_id}/payments/cash-for-silver", response_model=PaymentRecordResponse)
async def record_cash_for_silver(
    billing_type: BillingType,
    sale_id: str,
    request: CashForSilverRecordRequest,
    backend: ISalesBackend = Depends(require_sales_backend),
):
    """Record owed silver settled in cash against a saved sale"""
    service = BillingService(backend)
    try:
        return await service.record_cash_for_silver(
            billing_type, sale_id, request.to_cash_for_silver(), notes=request.notes
        )
    except BillingBackendError as e:
        raise _backend_error(e)


@router.post("/sales/{billing_type}/{sale_id}/payments/cash", response_model=PaymentRecordResponse)
async def record_cash_payment(
    billing_type: BillingType,
    sale_id: str,
    request: CashPaymentRecordRequest,
    backend: ISalesBackend = Depends(require_sales_backend),
):
    """Record a cash (wholesale) or labor (regular) payment against a saved sale"""
    service = BillingService(backend)
    try:
        return await service.record_cash_payment(
            billing_type, sale_id, request.to_cash_payment(), notes=request.notes
        )
    except BillingBackendError as e:
        raise _backend_error(e)
