from app.core.config import settings


def test_login_success(client):
    response = client.post("/api/auth/login", json={
        "username": settings.admin_username,
        "password": settings.admin_password,
    })
    assert response.status_code == 200
    data = response.json()
    assert len(data["token"]) == 64
    assert data["user"]["username"] == settings.admin_username


def test_tokens_are_random(client):
    credentials = {"username": settings.admin_username, "password": settings.admin_password}
    first = client.post("/api/auth/login", json=credentials).json()["token"]
    second = client.post("/api/auth/login", json=credentials).json()["token"]
    assert first != second


def test_login_wrong_password(client):
    response = client.post("/api/auth/login", json={
        "username": settings.admin_username,
        "password": "wrong",
    })
    assert response.status_code == 401
    assert response.json() == {
        "success": False,
        "error": "Invalid username or password",
        "code": "AUTH_FAILED",
    }


def test_login_missing_fields(client):
    response = client.post("/api/auth/login", json={"username": "admin"})
    assert response.status_code == 400
