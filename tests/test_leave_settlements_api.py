import json
import pytest

from app.models.audit_log import AuditLog


def _payload(employee_id, **overrides):
    data = {
        "employee_id": employee_id,
        "join_date": "2023-01-01",
        "leave_start_date": "2024-01-01",
        "leave_days": 21,
        "tickets_entitlement": "employee",
    }
    data.update(overrides)
    return data


def test_preview_does_not_persist(client, db_session):
    response = client.post("/api/leave-settlements/calculate", json={
        "join_date": "2023-01-01",
        "leave_start_date": "2024-01-01",
        "leave_days": 21,
    })
    assert response.status_code == 200
    data = response.json()
    assert data["accrued_days"] == 33.2
    assert data["balance_after_deduction"] == 12.2
    assert data["is_balance_sufficient"] is True
    assert client.get("/api/leave-settlements").json() == []


def test_create_persists_calculation(client, employee):
    response = client.post("/api/leave-settlements", json=_payload(employee.id))
    assert response.status_code == 200
    body = response.json()
    assert body["settlement"]["employee_name"] == "Sara Ahmed"
    assert body["settlement"]["service_days"] == 365
    assert body["settlement"]["balance_after_deduction"] == 12.2
    assert body["calculation"]["service_years"] == 1

    listed = client.get(f"/api/leave-settlements?employee_id={employee.id}").json()
    assert [s["id"] for s in listed] == [body["settlement"]["id"]]


def test_create_for_unknown_employee(client):
    response = client.post("/api/leave-settlements", json=_payload(9999))
    assert response.status_code == 400
    assert response.json()["code"] == "VALIDATION_ERROR"


def test_update_recomputes(client, employee, db_session):
    created = client.post("/api/leave-settlements", json=_payload(employee.id)).json()
    settlement_id = created["settlement"]["id"]

    response = client.put(
        f"/api/leave-settlements/{settlement_id}",
        json={"tickets_entitlement": "family4", "leave_days": 10},
    )
    assert response.status_code == 200
    settlement = response.json()["settlement"]
    assert settlement["tickets_count"] == 4
    assert settlement["current_leave_days"] == 10
    assert settlement["balance_after_deduction"] == 23.2

    entry = (
        db_session.query(AuditLog)
        .filter(AuditLog.entity_type == "leave_settlement", AuditLog.action == "UPDATE")
        .one()
    )
    changes = json.loads(entry.changes)
    assert changes["tickets_count"] == {"old": 1, "new": 4}


def test_empty_update_rejected(client, employee):
    created = client.post("/api/leave-settlements", json=_payload(employee.id)).json()
    response = client.put(f"/api/leave-settlements/{created['settlement']['id']}", json={})
    assert response.status_code == 400


def test_delete(client, employee):
    created = client.post("/api/leave-settlements", json=_payload(employee.id)).json()
    settlement_id = created["settlement"]["id"]
    assert client.delete(f"/api/leave-settlements/{settlement_id}").json() == {"success": True}
    assert client.get(f"/api/leave-settlements/{settlement_id}").status_code == 404


def test_malformed_dates_are_400(client):
    response = client.post("/api/leave-settlements/calculate", json={
        "join_date": "not-a-date",
        "leave_start_date": "2024-01-01",
    })
    assert response.status_code == 400
    body = response.json()
    assert body["success"] is False
    assert body["errors"][0]["field"] == "join_date"


def test_read_back_includes_service_breakdown_and_balance_check(client, employee):
    created = client.post(
        "/api/leave-settlements",
        json=_payload(employee.id, join_date="2021-10-20", leave_days=80),
    ).json()
    settlement_id = created["settlement"]["id"]
    calculation = created["calculation"]

    fetched = client.get(f"/api/leave-settlements/{settlement_id}").json()
    listed = client.get("/api/leave-settlements").json()[0]
    for body in (fetched, listed):
        assert body["service_days"] == 803
        assert (body["service_years"], body["service_months"], body["service_days_remainder"]) == (2, 2, 13)
        assert body["is_balance_sufficient"] is False
        for key in ("service_years", "service_months", "service_days_remainder", "is_balance_sufficient"):
            assert body[key] == calculation[key]
