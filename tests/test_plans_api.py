"""Tests for the plan endpoints."""


def test_list_plans_is_public_and_sorted(client):
    response = client.get("/api/planos")
    assert response.status_code == 200
    prices = [p["price"] for p in response.get_json()["data"]]
    assert prices[:-1] == sorted(prices[:-1])
    assert prices[-1] is None


def test_get_plan_by_slug(client):
    assert client.get("/api/planos/premium").get_json()["data"]["name"] == "Premium"
    assert client.get("/api/planos/inexistente").status_code == 404


def test_seed_requires_admin(client, user, admin):
    _, headers = user
    _, admin_headers = admin

    assert client.post("/api/planos/seed").status_code == 401
    assert client.post("/api/planos/seed", headers=headers).status_code == 403

    response = client.post("/api/planos/seed", headers=admin_headers)
    assert response.status_code == 200
    assert response.get_json()["data"]["created"] == 6


def test_subscribe_sets_plan_and_notifies(client, user):
    _, headers = user

    response = client.post("/api/planos/assinar", json={"plan_slug": "completo"}, headers=headers)
    assert response.status_code == 200
    plan_ref = response.get_json()["data"]
    assert plan_ref["slug"] == "completo"
    assert plan_ref["active"] is True

    limits = client.get("/api/usuario/resource-limits", headers=headers).get_json()["data"]
    assert limits["plan"]["slug"] == "completo"

    notifications = client.get("/api/notificacoes", headers=headers).get_json()["data"]
    assert len(notifications) == 1


def test_subscribe_unknown_plan_is_404(client, user):
    _, headers = user
    response = client.post("/api/planos/assinar", json={"plan_slug": "ouro"}, headers=headers)
    assert response.status_code == 404


def test_admin_assigns_plan_and_reads_stats(client, admin, make_user):
    target_id, target_headers = make_user()
    make_user(plan_slug="premium")
    _, admin_headers = admin

    response = client.post(
        "/api/admin/usuarios/atribuir-plano",
        json={"user_id": target_id, "plan_slug": "premium"},
        headers=admin_headers,
    )
    assert response.status_code == 200

    forbidden = client.post(
        "/api/admin/usuarios/atribuir-plano",
        json={"user_id": target_id, "plan_slug": "premium"},
        headers=target_headers,
    )
    assert forbidden.status_code == 403

    stats = client.get("/api/admin/planos/stats", headers=admin_headers).get_json()["data"]
    by_slug = {row["slug"]: row["subscribers"] for row in stats["plans"]}
    assert by_slug["premium"] == 2
    assert by_slug["gratis"] == 0
    assert stats["total_users"] == 3
    assert stats["without_plan"] == 1


def test_assign_plan_validates_payload(client, admin):
    _, admin_headers = admin
    response = client.post("/api/admin/usuarios/atribuir-plano", json={"plan_slug": "start"}, headers=admin_headers)
    assert response.status_code == 400
