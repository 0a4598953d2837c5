"""Tests for the Preferences API."""


def test_show_creates_default_preference(client, user):
    resp = client.get(f"/api/v1/users/{user.id}/preference")
    assert resp.status_code == 200
    data = resp.json()
    assert data["user_id"] == user.id
    assert data["notification_delivery_hour"] == 10
    assert data["receive_email"] is True


def test_show_is_stable(client, user):
    first = client.get(f"/api/v1/users/{user.id}/preference").json()
    second = client.get(f"/api/v1/users/{user.id}/preference").json()
    assert first == second


def test_update_preference(client, user):
    resp = client.put(f"/api/v1/users/{user.id}/preference", json={
        "notification_delivery_hour": 18,
        "receive_email": False,
    })
    assert resp.status_code == 200
    assert resp.json()["notification_delivery_hour"] == 18
    assert resp.json()["receive_email"] is False


def test_update_preference_hour_out_of_range(client, user):
    resp = client.put(f"/api/v1/users/{user.id}/preference", json={"notification_delivery_hour": 24})
    assert resp.status_code == 422


def test_update_mail(client, user):
    client.put(f"/api/v1/users/{user.id}/preference", json={"notification_delivery_hour": 7})
    resp = client.patch(f"/api/v1/users/{user.id}/preference/mail", json={"receive_email": False})
    assert resp.status_code == 200
    data = resp.json()
    assert data["receive_email"] is False
    assert data["notification_delivery_hour"] == 7


def test_preference_unknown_user(client):
    resp = client.get("/api/v1/users/missing/preference")
    assert resp.status_code == 404
