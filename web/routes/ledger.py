"""
Customer ledger API routes

Debit / credit ledger with running silver and labor balances
"""

from fastapi import APIRouter, Depends, HTTPException

from adapters.backend.client import BillingBackendError
from adapters.interfaces import ISalesBackend
from core.types import BillingType
from web.dependencies import require_sales_backend
from web.models.requests import CustomerLedgerRequest
from web.models.responses import CustomerLedgerResponse
from web.services.ledger_service import LedgerService

router = APIRouter(prefix="/api/ledger", tags=["Ledger"])


@router.post("/customer", response_model=CustomerLedgerResponse)
async def post_customer_ledger(request: CustomerLedgerRequest):
    """Apply transactions to an opening balance"""
    service = LedgerService()
    return service.customer_ledger(
        request.opening.to_previous_due(),
        [txn.to_transaction() for txn in request.transactions],
    )


@router.get("/customer/{billing_type}/{customer_id}", response_model=CustomerLedgerResponse)
async def get_customer_ledger(
    billing_type: BillingType,
    customer_id: str,
    backend: ISalesBackend = Depends(require_sales_backend),
):
    """Stored customer ledger from the billing backend"""
    service = LedgerService(backend)
    try:
        return await service.fetch_customer_ledger(billing_type, customer_id)
    except BillingBackendError as e:
        status = 404 if e.status_code == 404 else 502
        raise HTTPException(status_code=status, detail=str(e))
