"""
Maker-Checker Service

A maker files a request describing a mutation (CREATE / UPDATE / DELETE) of
some entity; a checker later approves or rejects it. Decisions are terminal.

Approving a request only records the decision. Applying ``request_data`` to
the target table is left to the caller.
"""
import json
from datetime import datetime, timezone
from typing import Any, List, Optional

from app.core.exceptions import ApprovalAlreadyProcessedError, NotFoundError, ValidationError
from app.models.audit_log import AuditAction
from app.models.pending_approval import ApprovalOperation, ApprovalStatus, PendingApproval
from app.services.audit import json_default
from app.services.base import BaseService


def _dump(data: Any) -> Optional[str]:
    if data is None:
        return None
    return json.dumps(data, default=json_default, ensure_ascii=False)


class ApprovalService(BaseService):

    def create_approval_request(
        self,
        entity_type: str,
        operation: ApprovalOperation,
        request_data: Any,
        entity_id: Optional[int] = None,
        current_data: Any = None,
        maker_comment: Optional[str] = None,
    ) -> PendingApproval:
        operation = ApprovalOperation(operation)
        if operation in (ApprovalOperation.UPDATE, ApprovalOperation.DELETE) and entity_id is None:
            raise ValidationError(f"entity_id is required for {operation.value} requests")

        approval = PendingApproval(
            entity_type=entity_type,
            entity_id=entity_id,
            operation=operation.value,
            request_data=_dump(request_data),
            current_data=_dump(current_data),
            status=ApprovalStatus.PENDING.value,
            maker_id=self.actor.user_id,
            maker_name=self.actor.user_name,
            maker_comment=maker_comment,
        )
        self.db.add(approval)
        self.commit()
        self.db.refresh(approval)
        self.log_info(
            f"Approval request {approval.id} filed for {entity_type} ({operation.value})",
            approval_id=approval.id,
        )
        return approval

    def approve_request(self, approval_id: int, checker_comment: Optional[str] = None) -> PendingApproval:
        return self._decide(approval_id, ApprovalStatus.APPROVED, AuditAction.APPROVE, checker_comment)

    def reject_request(self, approval_id: int, checker_comment: Optional[str] = None) -> PendingApproval:
        return self._decide(approval_id, ApprovalStatus.REJECTED, AuditAction.REJECT, checker_comment)

    def _decide(
        self,
        approval_id: int,
        status: ApprovalStatus,
        action: AuditAction,
        checker_comment: Optional[str],
    ) -> PendingApproval:
        # Re-read under a row lock so two checkers cannot both decide
        approval = (
            self.db.query(PendingApproval)
            .filter(PendingApproval.id == approval_id)
            .with_for_update()
            .first()
        )
        if approval is None:
            raise NotFoundError("Approval request not found")
        if approval.status != ApprovalStatus.PENDING.value:
            raise ApprovalAlreadyProcessedError()

        approval.status = status.value
        approval.checker_id = self.actor.user_id
        approval.checker_name = self.actor.user_name
        approval.checker_comment = checker_comment
        approval.reviewed_at = datetime.now(timezone.utc)
        self.commit()
        self.db.refresh(approval)

        self.log_info(
            f"Approval request {approval_id} {status.value} by {self.actor.user_name}",
            approval_id=approval_id,
        )
        self.audit(
            approval.entity_type,
            approval.entity_id or 0,
            action,
            new_data={"approval_id": approval_id, "checker_comment": checker_comment},
        )
        return approval

    def get_approval(self, approval_id: int) -> PendingApproval:
        approval = self.db.get(PendingApproval, approval_id)
        if approval is None:
            raise NotFoundError("Approval request not found")
        return approval

    def get_pending_approvals(self) -> List[PendingApproval]:
        return self.get_approvals_by_status(ApprovalStatus.PENDING)

    def get_approvals_by_status(self, status: ApprovalStatus) -> List[PendingApproval]:
        return (
            self.db.query(PendingApproval)
            .filter(PendingApproval.status == ApprovalStatus(status).value)
            .order_by(PendingApproval.created_at, PendingApproval.id)
            .all()
        )

    def has_pending_approval(self, entity_type: str, entity_id: int) -> bool:
        return self.db.query(PendingApproval.id).filter(
            PendingApproval.entity_type == entity_type,
            PendingApproval.entity_id == entity_id,
            PendingApproval.status == ApprovalStatus.PENDING.value,
        ).first() is not None
