from pydantic import BaseModel, ConfigDict, field_validator
from datetime import datetime
from typing import Any, Optional

from app.schemas.approval import parse_json_field


class AuditLogResponse(BaseModel):
    id: int
    entity_type: str
    entity_id: int
    action: str
    user_id: Optional[str] = None
    user_name: Optional[str] = None
    old_data: Any = None
    new_data: Any = None
    changes: Any = None
    ip_address: Optional[str] = None
    user_agent: Optional[str] = None
    timestamp: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)

    @field_validator("old_data", "new_data", "changes", mode="before")
    @classmethod
    def decode_json(cls, value):
        return parse_json_field(value)
