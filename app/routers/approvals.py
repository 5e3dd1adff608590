"""
Maker-checker queue.

Approving only records the decision; applying the requested change is up
to the caller.
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List

from app.core.schemas import ActorContext
from app.database import get_db
from app.models.pending_approval import ApprovalStatus
from app.routers.deps import get_actor, with_user
from app.schemas.approval import (
    ApprovalDecision,
    ApprovalDecisionRequest,
    ApprovalRequestCreate,
    PendingApprovalResponse,
)
from app.services.maker_checker import ApprovalService

router = APIRouter(
    prefix="/approvals",
    tags=["approvals"]
)


@router.get("", response_model=List[PendingApprovalResponse])
def list_approvals(status: ApprovalStatus = ApprovalStatus.PENDING, db: Session = Depends(get_db)):
    return ApprovalService(db).get_approvals_by_status(status)


@router.get("/{approval_id}", response_model=PendingApprovalResponse)
def get_approval(approval_id: int, db: Session = Depends(get_db)):
    return ApprovalService(db).get_approval(approval_id)


@router.post("/requests", response_model=PendingApprovalResponse)
def create_approval_request(
    data: ApprovalRequestCreate,
    db: Session = Depends(get_db),
    actor: ActorContext = Depends(get_actor),
):
    maker = with_user(actor, data.maker_id, data.maker_name)
    return ApprovalService(db, maker).create_approval_request(
        entity_type=data.entity_type,
        operation=data.operation,
        request_data=data.request_data,
        entity_id=data.entity_id,
        current_data=data.current_data,
        maker_comment=data.maker_comment,
    )


@router.post("", response_model=PendingApprovalResponse)
def decide_approval(
    data: ApprovalDecisionRequest,
    db: Session = Depends(get_db),
    actor: ActorContext = Depends(get_actor),
):
    service = ApprovalService(db, with_user(actor, data.checker_id, data.checker_name))
    if data.action == ApprovalDecision.APPROVE:
        return service.approve_request(data.approval_id, data.checker_comment)
    return service.reject_request(data.approval_id, data.checker_comment)
