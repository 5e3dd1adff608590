from pydantic import BaseModel, ConfigDict, Field
from datetime import datetime
from typing import Optional
import enum


class PeriodLockAction(str, enum.Enum):
    LOCK = "lock"
    UNLOCK = "unlock"


class PeriodLockRequest(BaseModel):
    year: int = Field(..., ge=1900, le=9999)
    month: int = Field(..., ge=1, le=12)
    action: PeriodLockAction
    user_id: Optional[str] = None
    user_name: Optional[str] = None
    reason: Optional[str] = None


class PeriodLockStatus(BaseModel):
    year: int
    month: int
    is_locked: bool


class PeriodLockResponse(BaseModel):
    id: int
    year: int
    month: int
    is_locked: bool
    locked_by: Optional[str] = None
    locked_by_name: Optional[str] = None
    locked_at: Optional[datetime] = None
    lock_reason: Optional[str] = None
    unlocked_by: Optional[str] = None
    unlocked_by_name: Optional[str] = None
    unlocked_at: Optional[datetime] = None
    unlock_reason: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)
