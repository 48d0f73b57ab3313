"""
Tests for GET /users.
"""
from portal.auth.models import UserRole


def test_users_sorted_by_role_then_name(client, make_user, auth_headers):
    make_user(email="p2@x.com", first_name="Zed", last_name="A")
    make_user(email="p1@x.com", first_name="Amy", last_name="B")
    make_user(email="doc@x.com", role=UserRole.PROVIDER, first_name="Bob", last_name="C")
    make_user(email="admin@x.com", role=UserRole.ADMIN, first_name="Yan", last_name="D")

    response = client.get("/users", headers=auth_headers("p1@x.com"))

    assert response.status_code == 200
    emails = [user["email"] for user in response.json()["data"]]
    assert emails == ["admin@x.com", "p1@x.com", "p2@x.com", "doc@x.com"]


def test_same_first_name_sorted_by_last_name(client, make_user, auth_headers):
    make_user(email="b@x.com", first_name="Sam", last_name="Young")
    make_user(email="a@x.com", first_name="Sam", last_name="Abbot")

    data = client.get("/users", headers=auth_headers("a@x.com")).json()["data"]

    assert [user["lastName"] for user in data] == ["Abbot", "Young"]


def test_role_filter(client, make_user, auth_headers):
    make_user(email="a@x.com")
    make_user(email="doc@x.com", role=UserRole.PROVIDER, specialty="Oncology")

    data = client.get("/users", params={"role": "PROVIDER"}, headers=auth_headers("a@x.com")).json()["data"]

    assert [user["email"] for user in data] == ["doc@x.com"]
    assert data[0]["provider"]["specialty"] == "Oncology"


def test_inactive_users_are_excluded(client, make_user, auth_headers):
    make_user(email="a@x.com")
    make_user(email="gone@x.com", is_active=False)

    data = client.get("/users", headers=auth_headers("a@x.com")).json()["data"]

    assert [user["email"] for user in data] == ["a@x.com"]


def test_listing_never_exposes_password_hash(client, make_user, auth_headers):
    make_user(email="a@x.com")

    data = client.get("/users", headers=auth_headers("a@x.com")).json()["data"]

    assert "passwordHash" not in data[0]
    assert "password_hash" not in data[0]


def test_unknown_role_is_rejected(client, make_user, auth_headers):
    make_user(email="a@x.com")

    response = client.get("/users", params={"role": "NURSE"}, headers=auth_headers("a@x.com"))

    assert response.status_code == 400
    assert response.json() == {"success": False, "error": "Invalid role: NURSE"}


def test_listing_requires_token(client):
    response = client.get("/users")
    assert response.status_code == 401
    assert response.json()["error"] == "No token provided"


def test_empty_role_means_no_filter(client, make_user, auth_headers):
    make_user(email="a@x.com")
    make_user(email="doc@x.com", role=UserRole.PROVIDER)

    response = client.get("/users?role=", headers=auth_headers("a@x.com"))

    assert response.status_code == 200
    assert sorted(user["email"] for user in response.json()["data"]) == ["a@x.com", "doc@x.com"]


def test_unknown_role_without_token_is_unauthorized(client):
    response = client.get("/users", params={"role": "NURSE"})
    assert response.status_code == 401
