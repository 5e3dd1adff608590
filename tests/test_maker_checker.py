import pytest

from app.core.exceptions import ApprovalAlreadyProcessedError, NotFoundError, ValidationError
from app.models.audit_log import AuditLog
from app.models.pending_approval import ApprovalOperation, ApprovalStatus
from app.services.maker_checker import ApprovalService


def _file(db_session, actor, **overrides):
    data = {
        "entity_type": "payroll",
        "operation": ApprovalOperation.UPDATE,
        "request_data": {"bonus": 500},
        "entity_id": 7,
        "current_data": {"bonus": 0},
        "maker_comment": "Quarterly bonus",
    }
    data.update(overrides)
    return ApprovalService(db_session, actor).create_approval_request(**data)


def test_request_starts_pending(db_session, actor):
    approval = _file(db_session, actor)
    assert approval.status == ApprovalStatus.PENDING.value
    assert approval.maker_id == "u-1"
    assert approval.checker_id is None
    assert ApprovalService(db_session).has_pending_approval("payroll", 7) is True


def test_update_requires_entity_id(db_session, actor):
    with pytest.raises(ValidationError):
        _file(db_session, actor, entity_id=None)
    approval = _file(db_session, actor, operation=ApprovalOperation.CREATE, entity_id=None)
    assert approval.entity_id is None


def test_approve_records_checker(db_session, actor):
    approval = _file(db_session, actor)
    checker = actor.model_copy(update={"user_id": "u-9", "user_name": "Checker"})
    decided = ApprovalService(db_session, checker).approve_request(approval.id, "ok")

    assert decided.status == "approved"
    assert decided.checker_id == "u-9"
    assert decided.checker_comment == "ok"
    assert decided.reviewed_at is not None

    entry = db_session.query(AuditLog).filter(AuditLog.action == "APPROVE").one()
    assert entry.entity_type == "payroll"
    assert entry.entity_id == 7
    assert entry.user_id == "u-9"


def test_decisions_are_terminal(db_session, actor):
    approval = _file(db_session, actor)
    service = ApprovalService(db_session, actor)
    service.reject_request(approval.id, "no")

    with pytest.raises(ApprovalAlreadyProcessedError) as exc:
        service.approve_request(approval.id)
    assert exc.value.message == "Request already processed"
    assert service.get_approval(approval.id).status == "rejected"


def test_unknown_approval(db_session, actor):
    with pytest.raises(NotFoundError):
        ApprovalService(db_session, actor).approve_request(12345)


def test_listing_by_status(db_session, actor):
    first = _file(db_session, actor)
    _file(db_session, actor, entity_id=8)
    service = ApprovalService(db_session, actor)
    service.approve_request(first.id)

    assert [a.entity_id for a in service.get_pending_approvals()] == [8]
    assert [a.id for a in service.get_approvals_by_status("approved")] == [first.id]


def test_approvals_api(client):
    filed = client.post("/api/approvals/requests", json={
        "entity_type": "expense",
        "entity_id": 3,
        "operation": "DELETE",
        "request_data": {"reason": "duplicate"},
        "maker_name": "Clerk",
    })
    assert filed.status_code == 200
    approval = filed.json()
    assert approval["request_data"] == {"reason": "duplicate"}
    assert approval["maker_name"] == "Clerk"

    pending = client.get("/api/approvals").json()
    assert [a["id"] for a in pending] == [approval["id"]]

    decided = client.post("/api/approvals", json={
        "approval_id": approval["id"],
        "action": "approve",
        "checker_id": "mgr-1",
        "checker_name": "Manager",
    })
    assert decided.status_code == 200
    assert decided.json()["status"] == "approved"
    assert decided.json()["checker_name"] == "Manager"

    replay = client.post("/api/approvals", json={"approval_id": approval["id"], "action": "reject"})
    assert replay.status_code == 400
    assert replay.json()["error"] == "Request already processed"
    assert client.get("/api/approvals?status=approved").json()[0]["status"] == "approved"
