from pydantic import BaseModel, ConfigDict, Field, field_validator
from datetime import datetime
from typing import Any, Optional
import enum
import json

from app.models.pending_approval import ApprovalOperation, ApprovalStatus


def parse_json_field(value: Any) -> Any:
    if isinstance(value, str):
        try:
            return json.loads(value)
        except ValueError:
            return value
    return value


class ApprovalDecision(str, enum.Enum):
    APPROVE = "approve"
    REJECT = "reject"


class ApprovalRequestCreate(BaseModel):
    entity_type: str = Field(..., min_length=1, max_length=64)
    entity_id: Optional[int] = None
    operation: ApprovalOperation
    request_data: Any
    current_data: Any = None
    maker_id: Optional[str] = None
    maker_name: Optional[str] = None
    maker_comment: Optional[str] = None


class ApprovalDecisionRequest(BaseModel):
    approval_id: int
    action: ApprovalDecision
    checker_id: Optional[str] = None
    checker_name: Optional[str] = None
    checker_comment: Optional[str] = None


class PendingApprovalResponse(BaseModel):
    id: int
    entity_type: str
    entity_id: Optional[int] = None
    operation: ApprovalOperation
    request_data: Any = None
    current_data: Any = None
    status: ApprovalStatus
    maker_id: Optional[str] = None
    maker_name: Optional[str] = None
    maker_comment: Optional[str] = None
    checker_id: Optional[str] = None
    checker_name: Optional[str] = None
    checker_comment: Optional[str] = None
    created_at: Optional[datetime] = None
    reviewed_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)

    @field_validator("request_data", "current_data", mode="before")
    @classmethod
    def decode_snapshot(cls, value):
        return parse_json_field(value)
