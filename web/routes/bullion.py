"""
Bullion ledger API routes

Derived fine weight, silver and amounts for bullion dealer entries
"""

from fastapi import APIRouter

from web.models.requests import BullionPreviewRequest
from web.models.responses import BullionPreviewResponse
from web.services.ledger_service import LedgerService

router = APIRouter(prefix="/api/bullion", tags=["Bullion"])


@router.post("/preview", response_model=BullionPreviewResponse)
async def preview_bullion(request: BullionPreviewRequest):
    """Entries with derived values and column totals"""
    service = LedgerService()
    return service.bullion_preview([entry.to_entry() for entry in request.entries])
