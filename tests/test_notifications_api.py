"""Tests for in-app notifications."""

from bson import ObjectId

from fletoads.models import Notification


def test_list_and_mark_read(app, client, user, make_user):
    user_id, headers = user
    other_id, _ = make_user()
    with app.app_context():
        Notification.notify(user_id, "Bem-vindo", "Sua conta foi criada.")
        Notification.notify(other_id, "Outro", "Não é seu.")

    items = client.get("/api/notificacoes", headers=headers).get_json()["data"]
    assert [n["title"] for n in items] == ["Bem-vindo"]
    assert items[0]["read"] is False

    response = client.put(f"/api/notificacoes/{items[0]['_id']}/lida", headers=headers)
    assert response.status_code == 200

    unread = client.get("/api/notificacoes?unread=true", headers=headers).get_json()["data"]
    assert unread == []


def test_cannot_mark_someone_elses_notification(app, client, user, make_user):
    _, headers = user
    other_id, _ = make_user()
    with app.app_context():
        notification_id = Notification.notify(other_id, "Outro", "Não é seu.")

    assert client.put(f"/api/notificacoes/{notification_id}/lida", headers=headers).status_code == 404
    assert client.put(f"/api/notificacoes/{ObjectId()}/lida", headers=headers).status_code == 404
