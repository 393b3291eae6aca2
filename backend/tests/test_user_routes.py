from __future__ import annotations

import pytest


def test_create_user_returns_summary(client):
    response = client.post("/api/users", json={"name": "Ava", "email": "ava@example.com"})

    assert response.status_code == 201
    payload = response.json()
    assert set(payload) == {"userId", "name", "email"}
    assert payload["name"] == "Ava"
    assert payload["email"] == "ava@example.com"
    assert payload["userId"]


def test_create_user_is_deduplicated_by_email(client, backend_module):
    first = client.post("/api/users", json={"name": "A", "email": "a@x.com"})
    second = client.post("/api/users", json={"name": "A", "email": "a@x.com"})

    assert first.status_code == 201
    assert second.status_code == 200
    assert second.json()["id"] == first.json()["userId"]
    assert second.json()["emergencyContacts"] == []

    with backend_module.container.db.transaction() as conn:
        count = conn.execute("SELECT COUNT(*) AS count FROM users WHERE email = ?", ("a@x.com",)).fetchone()
    assert count["count"] == 1


@pytest.mark.parametrize(
    "body",
    [
        {"name": "A"},
        {"email": "a@x.com"},
        {"name": "", "email": "a@x.com"},
        {"name": 0, "email": "a@x.com"},
        {"name": "A", "email": False},
        {"name": [], "email": "a@x.com"},
        {},
    ],
)
def test_create_user_requires_name_and_email(client, body):
    response = client.post("/api/users", json=body)

    assert response.status_code == 400
    assert response.json() == {"error": "Name and email are required"}


def test_create_user_accepts_trailing_slash(client):
    first = client.post("/api/users/", json={"name": "A", "email": "a@x.com"}, follow_redirects=False)
    second = client.post("/api/users", json={"name": "A", "email": "a@x.com"})

    assert first.status_code == 201
    assert second.status_code == 200
    assert second.json()["id"] == first.json()["userId"]


def test_get_user_by_id_and_email(client, create_user):
    created = create_user(name="Ava", email="ava@example.com")

    by_id = client.get(f"/api/users/{created['userId']}")
    by_email = client.get("/api/users/email/ava@example.com")

    assert by_id.status_code == 200
    assert by_email.status_code == 200
    assert by_id.json() == by_email.json()
    assert by_id.json()["name"] == "Ava"
    assert by_id.json()["createdAt"]


def test_get_unknown_user_returns_404(client):
    assert client.get("/api/users/does-not-exist").status_code == 404
    response = client.get("/api/users/email/nobody@example.com")
    assert response.status_code == 404
    assert response.json() == {"error": "User not found"}


def test_update_user_merges_fields_and_keeps_id(client, create_user):
    created = create_user()

    response = client.put(
        f"/api/users/{created['userId']}",
        json={"id": "forged", "name": "Ava Stone", "homeCity": "Pittsburgh"},
    )

    assert response.status_code == 200
    payload = response.json()
    assert payload["id"] == created["userId"]
    assert payload["name"] == "Ava Stone"
    assert payload["email"] == "ava@example.com"
    assert payload["homeCity"] == "Pittsburgh"

    fetched = client.get(f"/api/users/{created['userId']}").json()
    assert fetched["homeCity"] == "Pittsburgh"


def test_update_user_never_stores_null_contacts(client, create_user):
    created = create_user()
    response = client.put(f"/api/users/{created['userId']}", json={"emergencyContacts": None})
    assert response.status_code == 200
    assert response.json()["emergencyContacts"] == []


def test_update_unknown_user_returns_404(client):
    response = client.put("/api/users/missing", json={"name": "Ghost"})
    assert response.status_code == 404


def test_store_failure_is_reported_as_500(client, backend_module, monkeypatch):
    def broken_get_by_id(user_id):
        raise RuntimeError("database is locked")

    monkeypatch.setattr(backend_module.container.users, "get_by_id", broken_get_by_id)

    response = client.get("/api/users/some-id")

    assert response.status_code == 500
    assert response.json() == {"error": "Failed to fetch user", "message": "database is locked"}


def test_profile_aggregates_user_context(client, create_user):
    created = create_user()
    client.post(f"/api/users/{created['userId']}/contacts", json={"name": "Mom", "phone": "555-0100"})
    client.put(f"/api/users/{created['userId']}", json={"homeCity": "Pittsburgh"})

    response = client.get(f"/api/users/{created['userId']}/profile")

    assert response.status_code == 200
    profile = response.json()
    assert profile["userId"] == created["userId"]
    assert profile["contactCount"] == 1
    assert profile["hasEmergencyContacts"] is True
    assert profile["profile"] == {"homeCity": "Pittsburgh"}
    assert profile["generatedAt"]


def test_profile_for_unknown_user_is_a_server_error(client):
    response = client.get("/api/users/missing/profile")

    assert response.status_code == 500
    assert response.json()["error"] == "Failed to fetch profile"
    assert "missing" in response.json()["message"]


def test_health(client):
    assert client.get("/health").json() == {"ok": True}
