"""
GST billing API routes

Tax-invoice totals and saving GST bills
"""

import logging

from fastapi import APIRouter, Depends, HTTPException

from adapters.backend.client import BillingBackendError
from adapters.interfaces import ISalesBackend
from core.config.loader import Settings
from web.dependencies import get_app_settings, require_sales_backend
from web.models.requests import GstBillRequest
from web.models.responses import GstBillCreateResponse, GstPreviewResponse
from web.services.gst_service import GstService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/gst", tags=["GST"])


@router.post("/preview", response_model=GstPreviewResponse)
async def preview_gst_bill(
    request: GstBillRequest,
    settings: Settings = Depends(get_app_settings),
):
    """CGST + SGST within the home state, IGST otherwise"""
    service = GstService(home_state=settings.gst_home_state)
    items = [item.to_gst_item() for item in request.items]
    return service.preview(items, request.customer_state, request.home_state)


@router.post("/bills", response_model=GstBillCreateResponse, status_code=201)
async def create_gst_bill(
    request: GstBillRequest,
    settings: Settings = Depends(get_app_settings),
    backend: ISalesBackend = Depends(require_sales_backend),
):
    """Compute and save a GST bill"""
    service = GstService(home_state=settings.gst_home_state, backend=backend)
    items = [item.to_gst_item() for item in request.items]
    try:
        return await service.create_bill(
            items,
            request.customer_state,
            bill_details=request.bill_details,
            home_state=request.home_state,
        )
    except BillingBackendError as e:
        logger.error(f"GST bill not saved: {e}")
        raise HTTPException(status_code=502, detail=str(e))
