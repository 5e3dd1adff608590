"""
Payroll Router

Handles HTTP endpoints for employee payroll rows.
All business logic is delegated to the payroll service layer.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List, Optional

from app.core.schemas import ActorContext, SuccessResponse
from app.database import get_db
from app.routers.deps import get_actor
from app.schemas.payroll import (
    EmployeePayrollCreate,
    EmployeePayrollResponse,
    EmployeePayrollUpdate,
    PayrollSummary,
)
from app.services import payroll_service


router = APIRouter(
    prefix="/payroll",
    tags=["payroll"]
)


@router.get("/summary", response_model=PayrollSummary)
def get_payroll_summary(
    year: Optional[int] = None,
    month: Optional[int] = None,
    db: Session = Depends(get_db),
):
    """
    Totals for a period across employees and contractors.
    Consumed by the PDF/Excel export renderers.
    """
    return payroll_service.get_payroll_summary(db, year=year, month=month)


@router.get("", response_model=List[EmployeePayrollResponse])
def list_payroll(
    year: Optional[int] = None,
    month: Optional[int] = None,
    employee_id: Optional[int] = None,
    db: Session = Depends(get_db),
):
    rows = payroll_service.list_employee_payrolls(db, year=year, month=month, employee_id=employee_id)
    return [payroll_service.employee_payroll_response(p) for p in rows]


@router.get("/{payroll_id}", response_model=EmployeePayrollResponse)
def get_payroll(payroll_id: int, db: Session = Depends(get_db)):
    return payroll_service.employee_payroll_response(payroll_service.get_employee_payroll(db, payroll_id))


@router.post("", response_model=EmployeePayrollResponse)
def create_payroll(
    data: EmployeePayrollCreate,
    db: Session = Depends(get_db),
    actor: ActorContext = Depends(get_actor),
):
    """Net salary is computed server side from the components."""
    payroll = payroll_service.create_employee_payroll(db, data, actor)
    return payroll_service.employee_payroll_response(payroll)


@router.put("/{payroll_id}", response_model=EmployeePayrollResponse)
def update_payroll(
    payroll_id: int,
    data: EmployeePayrollUpdate,
    db: Session = Depends(get_db),
    actor: ActorContext = Depends(get_actor),
):
    payroll = payroll_service.update_employee_payroll(db, payroll_id, data, actor)
    return payroll_service.employee_payroll_response(payroll)


@router.delete("/{payroll_id}", response_model=SuccessResponse)
def delete_payroll(
    payroll_id: int,
    db: Session = Depends(get_db),
    actor: ActorContext = Depends(get_actor),
):
    payroll_service.delete_employee_payroll(db, payroll_id, actor)
    return SuccessResponse()
