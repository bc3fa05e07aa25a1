"""Tests for the usage endpoints."""

from bson import ObjectId
from pymongo.errors import PyMongoError

from fletoads.utils.plan import ResourceLimitService


def test_own_resource_limits_requires_token(client):
    assert client.get("/api/usuario/resource-limits").status_code == 401


def test_own_resource_limits_reports_plan_and_usage(client, make_user):
    _, headers = make_user(plan_slug="basico")

    client.post("/api/produtos", json={"name": "Arroz 5kg", "price": 25.9}, headers=headers)
    response = client.get("/api/usuario/resource-limits", headers=headers)

    assert response.status_code == 200
    data = response.get_json()["data"]
    assert data["plan"]["slug"] == "basico"
    assert data["usage"]["products"] == {"used": 1, "max": 50, "percentage": 2.0, "hasReached": False}


def test_usage_of_another_user_is_forbidden(client, make_user):
    other_id, _ = make_user()
    _, headers = make_user()

    assert client.get(f"/api/usuarios/{other_id}/usage", headers=headers).status_code == 403


def test_user_can_read_own_usage(client, user):
    user_id, headers = user
    response = client.get(f"/api/usuarios/{user_id}/usage", headers=headers)
    assert response.status_code == 200
    assert response.get_json()["data"]["plan"]["slug"] == "gratis"


def test_admin_can_read_any_usage(client, admin, make_user):
    other_id, _ = make_user(plan_slug="premium")
    _, admin_headers = admin

    response = client.get(f"/api/usuarios/{other_id}/usage", headers=admin_headers)

    assert response.status_code == 200
    assert response.get_json()["data"]["usage"]["integrations"]["max"] == 2


def test_admin_gets_404_for_unknown_user_and_400_for_bad_id(client, admin):
    _, admin_headers = admin
    assert client.get(f"/api/usuarios/{ObjectId()}/usage", headers=admin_headers).status_code == 404
    assert client.get("/api/usuarios/not-an-id/usage", headers=admin_headers).status_code == 400


def test_failing_count_answers_500_without_data(client, user, monkeypatch):
    _, headers = user

    def broken_count(self, user_id, resource):
        raise PyMongoError("connection reset")

    monkeypatch.setattr(ResourceLimitService, "count_usage", broken_count)
    response = client.get("/api/usuario/resource-limits", headers=headers)

    assert response.status_code == 500
    body = response.get_json()
    assert body["success"] is False
    assert "data" not in body
