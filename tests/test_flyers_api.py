"""Tests for the flyer endpoints and plan-limit enforcement on create."""

import pytest
from bson import ObjectId


@pytest.fixture
def enforce(app):
    app.config["ENFORCE_PLAN_LIMITS"] = True
    return app


def _create(client, headers, **overrides):
    payload = {
        "title": "Ofertas da semana",
        "start_date": "2024-05-01T00:00:00",
        "end_date": "2024-05-07T23:59:59",
    }
    payload.update(overrides)
    return client.post("/api/panfletos", json=payload, headers=headers)


def test_create_list_get_update_delete(client, make_user):
    _, headers = make_user(plan_slug="start")

    created = _create(client, headers)
    assert created.status_code == 201
    flyer_id = created.get_json()["data"]["_id"]

    listing = client.get("/api/panfletos", headers=headers).get_json()["data"]
    assert listing["total_count"] == 1
    assert listing["items"][0]["title"] == "Ofertas da semana"

    response = client.put(f"/api/panfletos/{flyer_id}", json={"title": "Ofertas do mês"}, headers=headers)
    assert response.status_code == 200
    assert response.get_json()["data"]["title"] == "Ofertas do mês"

    assert client.delete(f"/api/panfletos/{flyer_id}", headers=headers).status_code == 200
    assert client.get(f"/api/panfletos/{flyer_id}", headers=headers).status_code == 404


def test_end_before_start_is_rejected(client, user):
    _, headers = user
    response = _create(client, headers, start_date="2024-05-07T00:00:00", end_date="2024-05-01T00:00:00")
    assert response.status_code == 400


def test_update_window_is_checked_against_stored_dates(client, make_user):
    _, headers = make_user(plan_slug="start")
    flyer_id = _create(client, headers).get_json()["data"]["_id"]

    response = client.put(f"/api/panfletos/{flyer_id}", json={"end_date": "2024-04-01T00:00:00"}, headers=headers)
    assert response.status_code == 400


def test_owners_cannot_see_each_others_flyers(client, make_user, admin):
    _, owner_headers = make_user(plan_slug="start")
    _, other_headers = make_user()
    _, admin_headers = admin
    flyer_id = _create(client, owner_headers).get_json()["data"]["_id"]

    assert client.get(f"/api/panfletos/{flyer_id}", headers=other_headers).status_code == 404
    assert client.delete(f"/api/panfletos/{flyer_id}", headers=other_headers).status_code == 404
    assert client.get("/api/panfletos", headers=other_headers).get_json()["data"]["total_count"] == 0
    assert client.get(f"/api/panfletos/{flyer_id}", headers=admin_headers).status_code == 200


def test_free_plan_create_is_advisory_by_default(client, user):
    _, headers = user
    assert _create(client, headers).status_code == 201

    usage = client.get("/api/usuario/resource-limits", headers=headers).get_json()["data"]["usage"]
    assert usage["flyers"]["hasReached"] is True


def test_enforced_limit_blocks_create(enforce, client, user):
    _, headers = user

    response = _create(client, headers)

    assert response.status_code == 403
    assert response.get_json()["errors"]["resource"] == "flyers"
    assert client.get("/api/panfletos", headers=headers).get_json()["data"]["total_count"] == 0


def test_delete_frees_a_slot_when_enforced(enforce, client, make_user, db):
    user_id, headers = make_user(plan_slug="start")
    with enforce.app_context():
        db.get_collection("resource_counters").insert_one(
            {"owner_id": ObjectId(user_id), "resource": "flyers", "count": 19}
        )

    flyer_id = _create(client, headers).get_json()["data"]["_id"]
    assert _create(client, headers).status_code == 403

    client.delete(f"/api/panfletos/{flyer_id}", headers=headers)
    assert _create(client, headers).status_code == 201


def test_invalid_create_does_not_consume_a_slot(enforce, client, make_user, db):
    _, headers = make_user(plan_slug="start")

    assert _create(client, headers, title="").status_code == 400
    assert _create(client, headers).status_code == 201

    with enforce.app_context():
        counter = db.get_collection("resource_counters").find_one({"resource": "flyers"})
    assert counter["count"] == 1


def test_window_accepts_mixed_timezone_notation(client, make_user):
    _, headers = make_user(plan_slug="start")

    response = _create(client, headers, start_date="2026-01-01T00:00:00Z", end_date="2026-01-10T00:00:00")
    assert response.status_code == 201

    response = _create(client, headers, start_date="2026-01-10T00:00:00", end_date="2026-01-01T00:00:00+00:00")
    assert response.status_code == 400
