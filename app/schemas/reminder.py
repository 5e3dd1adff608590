from pydantic import BaseModel, ConfigDict, Field
from datetime import datetime
from typing import Optional

from app.models.reminder import ReminderType, ReminderStatus


class ReminderCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    type: ReminderType = ReminderType.OTHER
    employee_id: Optional[int] = None
    start_date: Optional[datetime] = None
    due_date: datetime
    notes: Optional[str] = None


class ReminderUpdate(BaseModel):
    title: Optional[str] = Field(default=None, min_length=1, max_length=255)
    type: Optional[ReminderType] = None
    employee_id: Optional[int] = None
    start_date: Optional[datetime] = None
    due_date: Optional[datetime] = None
    notes: Optional[str] = None
    is_completed: Optional[bool] = None


class ReminderResponse(BaseModel):
    id: int
    title: str
    type: str
    employee_id: Optional[int] = None
    employee_name: Optional[str] = None
    start_date: Optional[datetime] = None
    due_date: datetime
    notes: Optional[str] = None
    is_completed: bool
    completed_at: Optional[datetime] = None
    status: ReminderStatus
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)
