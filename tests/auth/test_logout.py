"""
Tests for POST /auth/logout.
"""
from portal.auth.models import UserSession


def test_logout_revokes_token_even_though_signature_is_valid(client, codec, make_user, login):
    make_user(email="a@x.com")
    token = login("a@x.com")
    headers = {"Authorization": f"Bearer {token}"}

    response = client.post("/auth/logout", headers=headers)

    assert response.status_code == 200
    assert response.json() == {"success": True, "data": None, "message": "Logout successful"}
    assert codec.verify(token) is not None

    me = client.get("/auth/me", headers=headers)
    assert me.status_code == 401
    assert me.json()["error"] == "Session expired"


def test_logout_without_token(client):
    response = client.post("/auth/logout")
    assert response.status_code == 401
    assert response.json() == {"success": False, "error": "No token provided"}


def test_logout_is_idempotent(client, make_user, login):
    make_user(email="a@x.com")
    headers = {"Authorization": f"Bearer {login('a@x.com')}"}

    assert client.post("/auth/logout", headers=headers).status_code == 200
    assert client.post("/auth/logout", headers=headers).status_code == 200


def test_logout_with_unknown_token_succeeds(client):
    response = client.post("/auth/logout", headers={"Authorization": "Bearer not-a-session"})
    assert response.status_code == 200


def test_logout_only_removes_presented_session(client, db, make_user, login):
    make_user(email="a@x.com")
    first = login("a@x.com")
    second = login("a@x.com")

    client.post("/auth/logout", headers={"Authorization": f"Bearer {first}"})

    assert db.query(UserSession).count() == 1
    assert client.get("/auth/me", headers={"Authorization": f"Bearer {second}"}).status_code == 200
