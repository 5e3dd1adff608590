import pytest
from datetime import datetime, timedelta, timezone

from app.models.reminder import ReminderStatus
from app.schemas.reminder import ReminderCreate, ReminderUpdate
from app.services.reminder_service import ReminderService, compute_reminder_status

NOW = datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)


@pytest.mark.parametrize("due, completed, expected", [
    (NOW + timedelta(days=2), False, ReminderStatus.DUE_SOON),
    (NOW - timedelta(days=1), False, ReminderStatus.OVERDUE),
    (NOW + timedelta(days=10), False, ReminderStatus.PENDING),
    (NOW + timedelta(days=3), False, ReminderStatus.DUE_SOON),
    (NOW - timedelta(days=1), True, ReminderStatus.COMPLETED),
])
def test_compute_status(due, completed, expected):
    assert compute_reminder_status(due, completed, now=NOW) == expected


def test_naive_due_date_is_treated_as_utc():
    naive = (NOW + timedelta(hours=1)).replace(tzinfo=None)
    assert compute_reminder_status(naive, False, now=NOW) == ReminderStatus.DUE_SOON


def test_create_and_list(db_session, actor, employee):
    service = ReminderService(db_session, actor)
    now = datetime.now(timezone.utc)
    service.create_reminder(ReminderCreate(
        title="Residency renewal", type="residence_expiry",
        employee_id=employee.id, due_date=now + timedelta(days=2),
    ))
    service.create_reminder(ReminderCreate(title="Late contract", due_date=now - timedelta(days=1)))

    reminders = service.list_reminders()
    assert [r.title for r in reminders] == ["Late contract", "Residency renewal"]
    assert [r.status for r in reminders] == [ReminderStatus.OVERDUE, ReminderStatus.DUE_SOON]
    assert reminders[1].employee_name == "Sara Ahmed"


def test_complete_hides_from_active(db_session, actor):
    service = ReminderService(db_session, actor)
    reminder = service.create_reminder(ReminderCreate(
        title="Visa", due_date=datetime.now(timezone.utc) + timedelta(days=30),
    ))
    completed = service.complete_reminder(reminder.id)

    assert completed.status == ReminderStatus.COMPLETED
    assert completed.completed_at is not None
    assert service.list_reminders(active_only=True) == []
    assert len(service.list_reminders()) == 1


def test_reopen_clears_completed_at(db_session, actor):
    service = ReminderService(db_session, actor)
    reminder = service.create_reminder(ReminderCreate(
        title="Insurance", due_date=datetime.now(timezone.utc) + timedelta(days=30),
    ))
    service.complete_reminder(reminder.id)
    reopened = service.update_reminder(reminder.id, ReminderUpdate(is_completed=False))
    assert reopened.completed_at is None
    assert reopened.status == ReminderStatus.PENDING


def test_unknown_employee_rejected(client):
    response = client.post("/api/reminders", json={
        "title": "Check", "due_date": "2030-01-01T00:00:00Z", "employee_id": 4242,
    })
    assert response.status_code == 400


def test_reminders_api(client):
    due = (datetime.now(timezone.utc) + timedelta(days=2)).isoformat()
    created = client.post("/api/reminders", json={"title": "Passport", "type": "document_expiry", "due_date": due})
    assert created.status_code == 200
    reminder = created.json()
    assert reminder["status"] == "due_soon"

    done = client.post(f"/api/reminders/{reminder['id']}/complete").json()
    assert done["is_completed"] is True
    assert client.get("/api/reminders?active=true").json() == []

    assert client.delete(f"/api/reminders/{reminder['id']}").json() == {"success": True}
    assert client.get(f"/api/reminders/{reminder['id']}").status_code == 404


@pytest.mark.parametrize("field", ["title", "type", "due_date", "is_completed"])
def test_required_fields_cannot_be_cleared(client, field):
    due = (datetime.now(timezone.utc) + timedelta(days=10)).isoformat()
    reminder = client.post("/api/reminders", json={"title": "Contract", "due_date": due}).json()

    response = client.put(f"/api/reminders/{reminder['id']}", json={field: None})
    assert response.status_code == 400
    assert response.json()["error"] == f"{field} cannot be empty"
    assert client.get(f"/api/reminders/{reminder['id']}").json()["title"] == "Contract"


def test_optional_fields_can_be_cleared(db_session, actor, employee):
    service = ReminderService(db_session, actor)
    reminder = service.create_reminder(ReminderCreate(
        title="Iqama", employee_id=employee.id, notes="bring passport",
        start_date=datetime.now(timezone.utc), due_date=datetime.now(timezone.utc) + timedelta(days=20),
    ))
    cleared = service.update_reminder(
        reminder.id, ReminderUpdate(notes=None, start_date=None, employee_id=None)
    )
    assert (cleared.notes, cleared.start_date, cleared.employee_id) == (None, None, None)
