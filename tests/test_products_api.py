"""Tests for products and integrations, whose ceilings count active records only."""

import pytest


@pytest.fixture
def enforce(app):
    app.config["ENFORCE_PLAN_LIMITS"] = True
    return app


def test_product_crud_and_filters(client, user):
    _, headers = user

    created = client.post("/api/produtos", json={"name": "Arroz 5kg", "price": 25.9, "category": "mercearia"}, headers=headers)
    assert created.status_code == 201
    product_id = created.get_json()["data"]["_id"]
    client.post("/api/produtos", json={"name": "Café", "price": 12.0, "active": False}, headers=headers)

    active = client.get("/api/produtos?status=ativo", headers=headers).get_json()["data"]
    assert [p["name"] for p in active["items"]] == ["Arroz 5kg"]
    found = client.get("/api/produtos?search=caf", headers=headers).get_json()["data"]
    assert found["total_count"] == 1

    response = client.put(f"/api/produtos/{product_id}", json={"promotional_price": 19.9}, headers=headers)
    assert response.status_code == 200
    response = client.put(f"/api/produtos/{product_id}", json={"promotional_price": 30}, headers=headers)
    assert response.status_code == 400


def test_inactive_product_does_not_use_a_slot(enforce, client, make_user):
    _, headers = make_user(plan_slug="start")

    # start plan: 30 products
    ids = []
    for i in range(30):
        response = client.post("/api/produtos", json={"name": f"Produto {i}", "price": 1}, headers=headers)
        assert response.status_code == 201
        ids.append(response.get_json()["data"]["_id"])

    assert client.post("/api/produtos", json={"name": "Extra", "price": 1}, headers=headers).status_code == 403
    draft = client.post("/api/produtos", json={"name": "Rascunho", "price": 1, "active": False}, headers=headers)
    assert draft.status_code == 201
    draft_id = draft.get_json()["data"]["_id"]

    # re-activating needs a free slot
    assert client.put(f"/api/produtos/{draft_id}", json={"active": True}, headers=headers).status_code == 403
    assert client.put(f"/api/produtos/{ids[0]}", json={"active": False}, headers=headers).status_code == 200
    assert client.put(f"/api/produtos/{draft_id}", json={"active": True}, headers=headers).status_code == 200


def test_integration_toggle_and_delete(enforce, client, make_user):
    _, headers = make_user(plan_slug="start")

    first = client.post("/api/integracoes", json={"type": "whatsapp", "name": "Atendimento"}, headers=headers)
    assert first.status_code == 201
    integration_id = first.get_json()["data"]["_id"]

    assert client.post("/api/integracoes", json={"type": "instagram"}, headers=headers).status_code == 403
    assert client.post("/api/integracoes", json={"type": "fax"}, headers=headers).status_code == 400

    response = client.put(f"/api/integracoes/{integration_id}", json={"active": False}, headers=headers)
    assert response.status_code == 200
    assert response.get_json()["data"]["active"] is False
    assert client.post("/api/integracoes", json={"type": "instagram"}, headers=headers).status_code == 201

    assert client.delete(f"/api/integracoes/{integration_id}", headers=headers).status_code == 200
    listing = client.get("/api/integracoes", headers=headers).get_json()["data"]
    assert [i["type"] for i in listing["items"]] == ["instagram"]
