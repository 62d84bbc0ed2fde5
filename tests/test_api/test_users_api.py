"""
Tests for User and Category API endpoints
"""


def test_register_login_and_use_token(client):
    response = client.post(
        "/api/v1/users",
        json={
            "username": "alice",
            "email": "alice@example.com",
            "password": "secret123",
            "currency": "USD",
        },
    )
    assert response.status_code == 200
    assert "hashed_password" not in response.json()

    response = client.post("/api/v1/users/login", json={"username": "alice", "password": "secret123"})
    assert response.status_code == 200
    token = response.json()["access_token"]

    response = client.get("/api/v1/users/me", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 200
    assert response.json()["email"] == "alice@example.com"


def test_register_validation(client):
    response = client.post(
        "/api/v1/users",
        json={"username": "alice", "email": "not-an-email", "password": "secret123", "currency": "USD"},
    )

    assert response.status_code == 400


def test_login_wrong_password(client, make_user):
    make_user("alice", password="secret123")

    response = client.post("/api/v1/users/login", json={"username": "alice", "password": "nope-nope"})

    assert response.status_code == 401


def test_update_and_delete_me(client, alice, auth_headers):
    response = client.patch("/api/v1/users/me", json={"full_name": "Alice A."}, headers=auth_headers("alice"))
    assert response.json()["full_name"] == "Alice A."

    assert client.delete("/api/v1/users/me", headers=auth_headers("alice")).status_code == 200
    assert client.get("/api/v1/users/me", headers=auth_headers("alice")).status_code == 401


def test_categories_api(client, alice, bob, make_category, auth_headers):
    make_category(None, name="Food")

    response = client.post("/api/v1/categories", json={"name": "Hobby"}, headers=auth_headers("alice"))
    assert response.status_code == 200
    hobby = response.json()
    assert hobby["owner"] == "alice"

    response = client.get("/api/v1/categories?page_id=1&page_size=5", headers=auth_headers("alice"))
    assert [c["name"] for c in response.json()] == ["Food", "Hobby"]

    response = client.get("/api/v1/categories?page_id=1&page_size=5", headers=auth_headers("bob"))
    assert [c["name"] for c in response.json()] == ["Food"]

    assert client.get(f"/api/v1/categories/{hobby['id']}", headers=auth_headers("bob")).status_code == 401
    assert client.delete(f"/api/v1/categories/{hobby['id']}", headers=auth_headers("alice")).status_code == 200


def test_health(client):
    assert client.get("/health").text == "ok"
