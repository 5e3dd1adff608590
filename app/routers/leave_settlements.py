"""
Leave Settlements Router

``/calculate`` is a pure preview: nothing is stored. Create and update always
recompute and persist the calculated figures alongside the inputs.
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List, Optional

from app.core.schemas import ActorContext, SuccessResponse
from app.database import get_db
from app.routers.deps import get_actor
from app.schemas.leave import (
    LeaveCalculationInput,
    LeaveCalculationResult,
    LeaveSettlementCreate,
    LeaveSettlementResponse,
    LeaveSettlementUpdate,
    LeaveSettlementWithCalculation,
)
from app.services.leave_calculator import calculate_leave_settlement
from app.services.leave_settlement_service import LeaveSettlementService, to_response

router = APIRouter(
    prefix="/leave-settlements",
    tags=["leave-settlements"]
)


@router.post("/calculate", response_model=LeaveCalculationResult)
def preview_calculation(data: LeaveCalculationInput):
    return calculate_leave_settlement(data)


@router.get("", response_model=List[LeaveSettlementResponse])
def list_settlements(employee_id: Optional[int] = None, db: Session = Depends(get_db)):
    return [to_response(s) for s in LeaveSettlementService(db).list_settlements(employee_id)]


@router.get("/{settlement_id}", response_model=LeaveSettlementResponse)
def get_settlement(settlement_id: int, db: Session = Depends(get_db)):
    return to_response(LeaveSettlementService(db).get_settlement(settlement_id))


@router.post("", response_model=LeaveSettlementWithCalculation)
def create_settlement(
    data: LeaveSettlementCreate,
    db: Session = Depends(get_db),
    actor: ActorContext = Depends(get_actor),
):
    settlement, calculation = LeaveSettlementService(db, actor).create_settlement(data)
    return LeaveSettlementWithCalculation(settlement=to_response(settlement), calculation=calculation)


@router.put("/{settlement_id}", response_model=LeaveSettlementWithCalculation)
def update_settlement(
    settlement_id: int,
    data: LeaveSettlementUpdate,
    db: Session = Depends(get_db),
    actor: ActorContext = Depends(get_actor),
):
    settlement, calculation = LeaveSettlementService(db, actor).update_settlement(settlement_id, data)
    return LeaveSettlementWithCalculation(settlement=to_response(settlement), calculation=calculation)


@router.delete("/{settlement_id}", response_model=SuccessResponse)
def delete_settlement(
    settlement_id: int,
    db: Session = Depends(get_db),
    actor: ActorContext = Depends(get_actor),
):
    LeaveSettlementService(db, actor).delete_settlement(settlement_id)
    return SuccessResponse()
