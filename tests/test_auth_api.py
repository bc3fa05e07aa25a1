"""Tests for registration, login and bearer-token checks."""

from fletoads.models import User


def _register(client, **overrides):
    payload = {"name": "Maria", "email": "maria@example.com", "password": "secret123"}
    payload.update(overrides)
    return client.post("/api/auth/register", json=payload)


def test_register_then_login(client):
    response = _register(client)
    assert response.status_code == 201
    body = response.get_json()
    assert body["success"] is True
    assert "password" not in body["data"]

    response = client.post("/api/auth/login", json={"email": "MARIA@example.com", "password": "secret123"})
    assert response.status_code == 200
    token = response.get_json()["data"]["access_token"]

    me = client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert me.status_code == 200
    assert me.get_json()["data"]["email"] == "maria@example.com"


def test_register_duplicate_email_conflicts(client):
    assert _register(client).status_code == 201
    assert _register(client).status_code == 409


def test_register_validation_failure_is_400(client):
    assert _register(client, email="not-an-email").status_code == 400
    assert _register(client, password="123").status_code == 400


def test_login_wrong_password_is_401(client):
    _register(client)
    response = client.post("/api/auth/login", json={"email": "maria@example.com", "password": "wrong-one"})
    assert response.status_code == 401


def test_login_inactive_account_is_403(client, make_user):
    make_user(email="off@example.com", active=False)
    response = client.post("/api/auth/login", json={"email": "off@example.com", "password": "secret123"})
    assert response.status_code == 403


def test_missing_or_bad_token_is_401(client):
    assert client.get("/api/auth/me").status_code == 401
    assert client.get("/api/auth/me", headers={"Authorization": "Bearer garbage"}).status_code == 401


def test_token_of_deactivated_user_is_rejected(app, client, user):
    user_id, headers = user
    with app.app_context():
        User.update(user_id, active=False)
    assert client.get("/api/auth/me", headers=headers).status_code == 401
