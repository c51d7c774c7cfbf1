"""
Payroll API routes

Employee salary (pagar) and outstanding advance (baki)
"""

from fastapi import APIRouter

from web.models.requests import EmployeeLedgerRequest, SalaryRequest
from web.models.responses import EmployeeLedgerResponse, SalaryResponse
from web.services.ledger_service import LedgerService

router = APIRouter(prefix="/api/payroll", tags=["Payroll"])


@router.post("/salary-preview", response_model=SalaryResponse)
async def preview_salary(request: SalaryRequest):
    """total = days * pagar, final = total - advance"""
    service = LedgerService()
    return service.salary_preview(request.to_salary())


@router.post("/employee-ledger", response_model=EmployeeLedgerResponse)
async def employee_ledger(request: EmployeeLedgerRequest):
    """Salary rows, column totals and outstanding baki"""
    service = LedgerService()
    return service.employee_ledger(
        request.opening_baki,
        [salary.to_salary() for salary in request.salaries],
        [txn.to_transaction() for txn in request.baki_transactions],
    )
