from app.models.audit_log import AuditLog


def test_create_and_list(client):
    created = client.post("/api/employees", json={
        "name": "Huda Salem", "position": "Reporter", "base_salary": 9000, "social_insurance": 810,
    })
    assert created.status_code == 200
    assert created.json()["is_active"] is True

    names = [e["name"] for e in client.get("/api/employees").json()]
    assert "Huda Salem" in names


def test_name_is_required(client):
    response = client.post("/api/employees", json={"name": "", "base_salary": 1})
    assert response.status_code == 400
    assert response.json()["errors"][0]["field"] == "name"


def test_soft_delete(client, employee, db_session):
    response = client.delete(f"/api/employees/{employee.id}")
    assert response.status_code == 200
    assert response.json()["is_active"] is False

    assert employee.id not in [e["id"] for e in client.get("/api/employees").json()]
    assert employee.id in [e["id"] for e in client.get("/api/employees?active=false").json()]

    entry = db_session.query(AuditLog).filter(AuditLog.entity_type == "employee").one()
    assert entry.action == "DELETE"


def test_reorder(client, employee):
    other = client.post("/api/employees", json={"name": "Ali", "sort_order": 5}).json()
    response = client.post("/api/employees/reorder", json={"items": [
        {"id": other["id"], "sort_order": 0},
        {"id": employee.id, "sort_order": 1},
    ]})
    assert response.status_code == 200
    assert [e["id"] for e in client.get("/api/employees").json()] == [other["id"], employee.id]


def test_reorder_unknown_id(client):
    response = client.post("/api/employees/reorder", json={"items": [{"id": 424242, "sort_order": 0}]})
    assert response.status_code == 404


def test_update_unknown(client):
    assert client.put("/api/employees/999", json={"position": "x"}).status_code == 404


def test_contractors(client, contractor):
    updated = client.put(f"/api/contractors/{contractor.id}", json={"salary": 4500}).json()
    assert updated["salary"] == 4500
    client.delete(f"/api/contractors/{contractor.id}")
    assert client.get("/api/contractors").json() == []
