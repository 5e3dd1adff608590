from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List, Optional

from app.core.schemas import ActorContext, SuccessResponse
from app.database import get_db
from app.routers.deps import get_actor
from app.schemas.payroll import (
    ContractorPayrollCreate,
    ContractorPayrollResponse,
    ContractorPayrollUpdate,
)
from app.services import payroll_service


router = APIRouter(
    prefix="/contractor-payroll",
    tags=["contractor-payroll"]
)


@router.get("", response_model=List[ContractorPayrollResponse])
def list_contractor_payroll(
    year: Optional[int] = None,
    month: Optional[int] = None,
    contractor_id: Optional[int] = None,
    db: Session = Depends(get_db),
):
    rows = payroll_service.list_contractor_payrolls(db, year=year, month=month, contractor_id=contractor_id)
    return [payroll_service.contractor_payroll_response(p) for p in rows]


@router.get("/{payroll_id}", response_model=ContractorPayrollResponse)
def get_contractor_payroll(payroll_id: int, db: Session = Depends(get_db)):
    payroll = payroll_service.get_contractor_payroll(db, payroll_id)
    return payroll_service.contractor_payroll_response(payroll)


@router.post("", response_model=ContractorPayrollResponse)
def create_contractor_payroll(
    data: ContractorPayrollCreate,
    db: Session = Depends(get_db),
    actor: ActorContext = Depends(get_actor),
):
    payroll = payroll_service.create_contractor_payroll(db, data, actor)
    return payroll_service.contractor_payroll_response(payroll)


@router.put("/{payroll_id}", response_model=ContractorPayrollResponse)
def update_contractor_payroll(
    payroll_id: int,
    data: ContractorPayrollUpdate,
    db: Session = Depends(get_db),
    actor: ActorContext = Depends(get_actor),
):
    payroll = payroll_service.update_contractor_payroll(db, payroll_id, data, actor)
    return payroll_service.contractor_payroll_response(payroll)


@router.delete("/{payroll_id}", response_model=SuccessResponse)
def delete_contractor_payroll(
    payroll_id: int,
    db: Session = Depends(get_db),
    actor: ActorContext = Depends(get_actor),
):
    payroll_service.delete_contractor_payroll(db, payroll_id, actor)
    return SuccessResponse()
