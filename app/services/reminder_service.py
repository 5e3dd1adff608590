from datetime import datetime, timedelta, timezone
from typing import List, Optional

from app.core.config import settings
from app.core.exceptions import NotFoundError, ValidationError
from app.models.audit_log import AuditAction, AuditEntity
from app.models.employee import Employee
from app.models.reminder import Reminder, ReminderStatus
from app.schemas.reminder import ReminderCreate, ReminderResponse, ReminderUpdate
from app.services.audit import snapshot
from app.services.base import BaseService

# Columns that cannot be cleared through an update
REQUIRED_FIELDS = ("title", "type", "due_date", "is_completed")


def _as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes; they are stored as UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def compute_reminder_status(
    due_date: datetime,
    is_completed: bool,
    now: Optional[datetime] = None,
    due_soon_days: int = 3,
) -> ReminderStatus:
    """Derived at read time; never stored."""
    if is_completed:
        return ReminderStatus.COMPLETED
    now = _as_utc(now or datetime.now(timezone.utc))
    due = _as_utc(due_date)
    if due < now:
        return ReminderStatus.OVERDUE
    if due <= now + timedelta(days=due_soon_days):
        return ReminderStatus.DUE_SOON
    return ReminderStatus.PENDING


def to_response(reminder: Reminder, now: Optional[datetime] = None) -> ReminderResponse:
    return ReminderResponse(
        id=reminder.id,
        title=reminder.title,
        type=reminder.type,
        employee_id=reminder.employee_id,
        employee_name=reminder.employee.name if reminder.employee else None,
        start_date=reminder.start_date,
        due_date=reminder.due_date,
        notes=reminder.notes,
        is_completed=reminder.is_completed,
        completed_at=reminder.completed_at,
        status=compute_reminder_status(
            reminder.due_date,
            reminder.is_completed,
            now=now,
            due_soon_days=settings.reminder_due_soon_days,
        ),
        created_at=reminder.created_at,
    )


class ReminderService(BaseService):

    def _get(self, reminder_id: int) -> Reminder:
        reminder = self.db.get(Reminder, reminder_id)
        if reminder is None:
            raise NotFoundError("Reminder not found")
        return reminder

    def _check_employee(self, employee_id: Optional[int]):
        if employee_id is not None and self.db.get(Employee, employee_id) is None:
            raise ValidationError(f"Employee {employee_id} does not exist")

    def list_reminders(self, active_only: bool = False) -> List[ReminderResponse]:
        query = self.db.query(Reminder)
        if active_only:
            query = query.filter(Reminder.is_completed.is_(False))
        now = datetime.now(timezone.utc)
        return [to_response(r, now) for r in query.order_by(Reminder.due_date).all()]

    def get_reminder(self, reminder_id: int) -> ReminderResponse:
        return to_response(self._get(reminder_id))

    def create_reminder(self, data: ReminderCreate) -> ReminderResponse:
        self._check_employee(data.employee_id)
        reminder = Reminder(
            title=data.title,
            type=data.type.value,
            employee_id=data.employee_id,
            start_date=_as_utc(data.start_date) if data.start_date else None,
            due_date=_as_utc(data.due_date),
            notes=data.notes,
        )
        self.db.add(reminder)
        self.commit()
        self.db.refresh(reminder)

        self.audit(AuditEntity.REMINDER, reminder.id, AuditAction.CREATE, new_data=reminder)
        return to_response(reminder)

    def update_reminder(self, reminder_id: int, data: ReminderUpdate) -> ReminderResponse:
        reminder = self._get(reminder_id)
        changes = data.model_dump(exclude_unset=True)
        if "employee_id" in changes:
            self._check_employee(changes["employee_id"])
        if "type" in changes and changes["type"] is not None:
            changes["type"] = changes["type"].value
        for field in REQUIRED_FIELDS:
            if field in changes and changes[field] is None:
                raise ValidationError(f"{field} cannot be empty")
        for field in ("start_date", "due_date"):
            if changes.get(field) is not None:
                changes[field] = _as_utc(changes[field])

        old_data = snapshot(reminder)
        for field, value in changes.items():
            setattr(reminder, field, value)
        if "is_completed" in changes:
            reminder.completed_at = datetime.now(timezone.utc) if reminder.is_completed else None
        self.commit()
        self.db.refresh(reminder)

        self.audit(AuditEntity.REMINDER, reminder.id, AuditAction.UPDATE, old_data=old_data, new_data=reminder)
        return to_response(reminder)

    def complete_reminder(self, reminder_id: int) -> ReminderResponse:
        reminder = self._get(reminder_id)
        old_data = snapshot(reminder)
        reminder.is_completed = True
        reminder.completed_at = datetime.now(timezone.utc)
        self.commit()
        self.db.refresh(reminder)

        self.audit(AuditEntity.REMINDER, reminder.id, AuditAction.UPDATE, old_data=old_data, new_data=reminder)
        return to_response(reminder)

    def delete_reminder(self, reminder_id: int) -> None:
        reminder = self._get(reminder_id)
        old_data = snapshot(reminder)
        self.db.delete(reminder)
        self.commit()

        self.audit(AuditEntity.REMINDER, reminder_id, AuditAction.DELETE, old_data=old_data)
