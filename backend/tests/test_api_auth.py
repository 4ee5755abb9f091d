import time

import pytest

from noteful import dependencies
from noteful.config import settings


def _register(client, username="jane-doe", password="correct-horse", **extra):
    return client.post("/api/users", json={"username": username, "password": password, **extra})


def test_register_returns_public_profile(client):
    response = _register(client, fullname="  Jane Doe ")

    assert response.status_code == 201
    body = response.json()
    assert response.headers["location"] == f"/api/users/{body['id']}"
    assert body["username"] == "jane-doe"
    assert body["fullname"] == "Jane Doe"
    assert "password" not in body
    assert "passwordHash" not in body
    assert "createdAt" in body


def test_register_duplicate_username(client):
    assert _register(client).status_code == 201
    response = _register(client, password="something-else")
    assert response.status_code == 400
    assert response.json()["message"] == "The username already exists"


@pytest.mark.parametrize(
    "payload",
    [
        {"password": "correct-horse"},
        {"username": "short", "password": "correct-horse"},
        {"username": " jane-doe", "password": "correct-horse"},
        {"username": "jane-doe", "password": "seven77"},
        {"username": "jane-doe", "password": "x" * 73},
        {"username": "jane-doe", "password": " padded-pass "},
    ],
)
def test_register_validation(client, payload):
    assert client.post("/api/users", json=payload).status_code == 422


def test_login_and_use_token(client):
    _register(client)
    response = client.post("/api/login", json={"username": "jane-doe", "password": "correct-horse"})

    assert response.status_code == 200
    token = response.json()["authToken"]
    notes = client.get("/api/notes", headers={"Authorization": f"Bearer {token}"})
    assert notes.status_code == 200
    assert notes.json() == []


def test_login_wrong_password(client):
    _register(client)
    response = client.post("/api/login", json={"username": "jane-doe", "password": "wrong-horse"})
    assert response.status_code == 401
    assert response.headers["www-authenticate"] == "Bearer"


def test_refresh(client, alice_headers):
    response = client.post("/api/refresh", headers=alice_headers)
    assert response.status_code == 200
    fresh = {"Authorization": f"Bearer {response.json()['authToken']}"}
    assert client.get("/api/folders", headers=fresh).status_code == 200


@pytest.mark.parametrize(
    "headers, detail",
    [
        ({}, "Authentication required"),
        ({"Authorization": "Bearer abc"}, "Invalid token format"),
        ({"Authorization": "Bearer a.b.c"}, "Token decode error"),
    ],
)
def test_protected_routes_need_a_valid_token(client, headers, detail):
    for path in ("/api/notes", "/api/folders", "/api/tags"):
        response = client.get(path, headers=headers)
        assert response.status_code == 401
        assert response.json()["detail"] == detail
    assert client.post("/api/refresh", headers=headers).status_code == 401


def test_login_rate_limit(client, monkeypatch):
    monkeypatch.setattr(settings, "enable_rate_limiting", True)
    monkeypatch.setattr(settings, "max_login_attempts", 2)
    monkeypatch.setattr(dependencies, "_login_attempts", {})

    body = {"username": "nobody-here", "password": "whatever-pass"}
    assert client.post("/api/login", json=body).status_code == 401
    assert client.post("/api/login", json=body).status_code == 401
    limited = client.post("/api/login", json=body)
    assert limited.status_code == 429
    assert "retry-after" in limited.headers


def test_health(client):
    assert client.get("/api/health").json()["status"] == "healthy"
    ready = client.get("/api/health/ready").json()
    assert ready["database"] == "connected"


def test_security_headers(client):
    response = client.get("/api/health")
    assert response.headers["x-content-type-options"] == "nosniff"
    assert response.headers["x-frame-options"] == "DENY"


def test_rate_limit_forgets_idle_clients(client, monkeypatch):
    monkeypatch.setattr(settings, "enable_rate_limiting", True)
    stale = time.time() - settings.login_attempt_window - 60
    attempts = {"login:10.0.0.1": [stale, stale + 1], "signup:10.0.0.2": [stale]}
    monkeypatch.setattr(dependencies, "_login_attempts", attempts)

    client.post("/api/login", json={"username": "nobody-here", "password": "whatever-pass"})

    assert set(dependencies._login_attempts) == {"login:testclient"}
