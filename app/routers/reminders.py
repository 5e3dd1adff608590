from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List

from app.core.schemas import ActorContext, SuccessResponse
from app.database import get_db
from app.routers.deps import get_actor
from app.schemas.reminder import ReminderCreate, ReminderResponse, ReminderUpdate
from app.services.reminder_service import ReminderService

router = APIRouter(
    prefix="/reminders",
    tags=["reminders"]
)


@router.get("", response_model=List[ReminderResponse])
def list_reminders(active: bool = False, db: Session = Depends(get_db)):
    """Ordered by due date; status is derived at read time."""
    return ReminderService(db).list_reminders(active_only=active)


@router.get("/{reminder_id}", response_model=ReminderResponse)
def get_reminder(reminder_id: int, db: Session = Depends(get_db)):
    return ReminderService(db).get_reminder(reminder_id)


@router.post("", response_model=ReminderResponse)
def create_reminder(
    data: ReminderCreate,
    db: Session = Depends(get_db),
    actor: ActorContext = Depends(get_actor),
):
    return ReminderService(db, actor).create_reminder(data)


@router.put("/{reminder_id}", response_model=ReminderResponse)
def update_reminder(
    reminder_id: int,
    data: ReminderUpdate,
    db: Session = Depends(get_db),
    actor: ActorContext = Depends(get_actor),
):
    return ReminderService(db, actor).update_reminder(reminder_id, data)


@router.post("/{reminder_id}/complete", response_model=ReminderResponse)
def complete_reminder(
    reminder_id: int,
    db: Session = Depends(get_db),
    actor: ActorContext = Depends(get_actor),
):
    return ReminderService(db, actor).complete_reminder(reminder_id)


@router.delete("/{reminder_id}", response_model=SuccessResponse)
def delete_reminder(
    reminder_id: int,
    db: Session = Depends(get_db),
    actor: ActorContext = Depends(get_actor),
):
    ReminderService(db, actor).delete_reminder(reminder_id)
    return SuccessResponse()
