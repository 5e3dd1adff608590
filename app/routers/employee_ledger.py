from fastapi import APIRouter, Depends, Query
from fastapi.responses import Response
from sqlalchemy.orm import Session
from typing import List, Literal, Optional, Union

from app.core.exceptions import ValidationError
from app.database import get_db
from app.schemas.ledger import EmployeeLedger, EmployeeLedgerSummary
from app.services.ledger_service import LedgerService, export_ledger_csv

router = APIRouter(
    prefix="/employee-ledger",
    tags=["employee-ledger"]
)


@router.get("", response_model=Union[EmployeeLedger, List[EmployeeLedgerSummary]])
def get_ledger(
    employee_id: Optional[int] = None,
    year: Optional[int] = None,
    month: Optional[int] = Query(default=None, ge=1, le=12),
    summary: Optional[Literal["all"]] = None,
    db: Session = Depends(get_db),
):
    """
    One employee's statement, or with ``summary=all`` the per-employee
    totals for every employee (optionally limited to ``year``).
    """
    service = LedgerService(db)
    if summary == "all":
        return service.get_all_employees_ledger_summary(year=year)
    if employee_id is None:
        raise ValidationError("employee_id is required")
    return service.get_employee_ledger(employee_id, year=year, month=month)


@router.get("/{employee_id}/csv")
def export_ledger(
    employee_id: int,
    year: Optional[int] = None,
    month: Optional[int] = Query(default=None, ge=1, le=12),
    db: Session = Depends(get_db),
):
    ledger = LedgerService(db).get_employee_ledger(employee_id, year=year, month=month)
    # BOM so spreadsheet tools pick up UTF-8 names
    content = "\ufeff" + export_ledger_csv(ledger)
    return Response(
        content=content,
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="employee-{employee_id}-ledger.csv"'},
    )
