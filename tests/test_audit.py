import json
from unittest.mock import MagicMock

from app.models.audit_log import AuditAction, AuditEntity
from app.services.audit import AuditService, compute_changes, snapshot


def test_compute_changes_reports_only_differences():
    assert compute_changes({"a": 1, "b": 2}, {"a": 1, "b": 3}) == {"b": {"old": 2, "new": 3}}


def test_compute_changes_new_keys():
    assert compute_changes({}, {"a": 1}) == {"a": {"old": None, "new": 1}}


def test_snapshot_of_orm_row(employee):
    data = snapshot(employee)
    assert data["name"] == "Sara Ahmed"
    assert data["base_salary"] == 10000
    assert isinstance(data["created_at"], str)


def test_log_action_stores_snapshots(db_session, actor):
    entry = AuditService(db_session).log_action(
        entity_type=AuditEntity.EXPENSE,
        entity_id=4,
        action=AuditAction.UPDATE,
        user_id=actor.user_id,
        user_name=actor.user_name,
        old_data={"amount": 10, "type": "office"},
        new_data={"amount": 12, "type": "office"},
        ip_address=actor.ip_address,
        user_agent=actor.user_agent,
    )
    assert entry.id is not None
    assert entry.entity_type == "expense"
    assert json.loads(entry.changes) == {"amount": {"old": 10, "new": 12}}
    assert entry.ip_address == "10.0.0.1"


def test_create_has_no_changes(db_session):
    entry = AuditService(db_session).log_action("reminder", 1, "CREATE", new_data={"title": "x"})
    assert entry.changes is None
    assert entry.old_data is None


def test_failure_is_swallowed():
    session = MagicMock()
    session.commit.side_effect = RuntimeError("database is gone")

    result = AuditService(session).log_action("employee", 1, "DELETE", old_data={"name": "x"})

    assert result is None
    session.rollback.assert_called_once()


def test_list_filters_and_order(db_session):
    service = AuditService(db_session)
    service.log_action("employee", 1, "CREATE", user_id="a")
    service.log_action("employee", 2, "UPDATE", user_id="b")
    service.log_action("expense", 1, "DELETE", user_id="a")

    newest_first = service.list_logs()
    assert [row.entity_type for row in newest_first][:1] == ["expense"]
    assert [row.entity_id for row in service.list_logs(entity_type="employee")] == [2, 1]
    assert len(service.list_logs(user_id="a")) == 2
    assert len(service.list_logs(limit=1)) == 1


def test_audit_logs_api_parses_json(client, employee):
    client.put(f"/api/employees/{employee.id}", json={"base_salary": 12000},
               headers={"X-User-Id": "hr-7", "X-User-Name": "HR"})

    logs = client.get(f"/api/audit-logs?entity_type=employee&entity_id={employee.id}").json()
    assert len(logs) == 1
    assert logs[0]["user_id"] == "hr-7"
    assert logs[0]["changes"]["base_salary"] == {"old": 10000.0, "new": 12000.0}
    assert logs[0]["new_data"]["name"] == "Sara Ahmed"
