"""
Tests for GET /auth/me and the auth gate behind every protected endpoint.
"""
from datetime import datetime, timedelta, timezone

import pytest

from portal.auth.dependencies import as_utc, extract_bearer_token, resolve_current_user
from portal.auth.models import UserRole, UserSession
from portal.core.security import TokenClaims, TokenCodec
from portal.exceptions import AuthenticationError, NotFoundError


def _claims_for(user):
    return TokenClaims(
        user_id=user.id, email=user.email, role=user.role.value,
        first_name=user.first_name, last_name=user.last_name,
    )


def test_me_returns_patient_bundle(client, make_user, auth_headers):
    make_user(email="a@x.com", role=UserRole.PATIENT)

    response = client.get("/auth/me", headers=auth_headers("a@x.com"))

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["data"]["email"] == "a@x.com"
    assert body["data"]["patient"] is not None
    assert "message" not in body


def test_me_returns_provider_bundle(client, make_user, auth_headers):
    make_user(email="doc@x.com", role=UserRole.PROVIDER, specialty="Cardiology")

    data = client.get("/auth/me", headers=auth_headers("doc@x.com")).json()["data"]

    assert data["role"] == "PROVIDER"
    assert data["provider"]["specialty"] == "Cardiology"
    assert "patient" not in data


def test_me_admin_has_no_sub_profile(client, make_user, auth_headers):
    make_user(email="admin@x.com", role=UserRole.ADMIN)

    data = client.get("/auth/me", headers=auth_headers("admin@x.com")).json()["data"]

    assert data["role"] == "ADMIN"
    assert "patient" not in data and "provider" not in data


def test_me_without_header(client):
    response = client.get("/auth/me")
    assert response.status_code == 401
    assert response.json()["error"] == "No token provided"


def test_me_with_non_bearer_header(client):
    response = client.get("/auth/me", headers={"Authorization": "Token abc"})
    assert response.status_code == 401
    assert response.json()["error"] == "No token provided"


@pytest.mark.parametrize("token", ["garbage", "a.b.c"])
def test_me_with_invalid_token(client, token):
    response = client.get("/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 401
    assert response.json()["error"] == "Invalid token"


def test_me_with_expired_session(client, db, make_user, login):
    make_user(email="a@x.com")
    token = login("a@x.com")
    session = db.query(UserSession).filter(UserSession.token == token).one()
    session.expires_at = datetime.now(timezone.utc) - timedelta(minutes=1)
    db.commit()

    response = client.get("/auth/me", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 401
    assert "Session expired" in response.json()["error"]


def test_me_with_token_signed_by_another_key(client, db, make_user):
    user = make_user(email="a@x.com")
    forged = TokenCodec("another-secret").issue(_claims_for(user))
    db.add(UserSession(user_id=user.id, token=forged, expires_at=datetime.now(timezone.utc) + timedelta(days=1)))
    db.commit()

    response = client.get("/auth/me", headers={"Authorization": f"Bearer {forged}"})

    assert response.status_code == 401
    assert response.json()["error"] == "Invalid token"


def test_me_with_valid_token_but_no_session_row(client, codec, make_user):
    user = make_user(email="a@x.com")
    token = codec.issue(_claims_for(user))

    response = client.get("/auth/me", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 401
    assert response.json()["error"] == "Session expired"


def test_me_after_user_deactivated(client, db, make_user, login):
    user = make_user(email="a@x.com")
    token = login("a@x.com")
    user.is_active = False
    db.commit()

    response = client.get("/auth/me", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 404
    assert response.json()["error"] == "User not found or inactive"


def test_extract_bearer_token():
    assert extract_bearer_token("Bearer abc") == "abc"
    assert extract_bearer_token("Bearer ") is None
    assert extract_bearer_token("Basic abc") is None
    assert extract_bearer_token(None) is None


def test_gate_session_expiry_boundary(db, codec, make_user):
    user = make_user(email="a@x.com")
    token = codec.issue(_claims_for(user))
    expires_at = datetime.now(timezone.utc) + timedelta(hours=1)
    db.add(UserSession(user_id=user.id, token=token, expires_at=expires_at))
    db.commit()
    header = f"Bearer {token}"

    resolved = resolve_current_user(db, codec, header, now=expires_at - timedelta(seconds=1))
    assert resolved.id == user.id

    with pytest.raises(AuthenticationError) as exc_info:
        resolve_current_user(db, codec, header, now=expires_at)
    assert exc_info.value.detail == "Session expired"


def test_gate_rejects_token_past_its_embedded_expiry(db, make_user):
    user = make_user(email="a@x.com")
    stale_codec = TokenCodec("test-secret-key", expires_delta=timedelta(seconds=-10))
    token = stale_codec.issue(_claims_for(user))
    db.add(UserSession(user_id=user.id, token=token, expires_at=datetime.now(timezone.utc) + timedelta(days=1)))
    db.commit()

    with pytest.raises(AuthenticationError) as exc_info:
        resolve_current_user(db, stale_codec, f"Bearer {token}")
    assert exc_info.value.detail == "Invalid token"


def test_gate_rejects_deleted_user(db, codec, make_user):
    user = make_user(email="a@x.com")
    ghost = TokenClaims(user_id=user.id + 100, email="ghost@x.com", role="PATIENT", first_name="G", last_name="H")
    ghost_token = codec.issue(ghost)
    db.add(UserSession(user_id=user.id, token=ghost_token, expires_at=datetime.now(timezone.utc) + timedelta(days=1)))
    db.commit()

    with pytest.raises(NotFoundError):
        resolve_current_user(db, codec, f"Bearer {ghost_token}")


def test_as_utc_treats_naive_values_as_utc():
    naive = datetime(2030, 1, 1, 12, 0)
    assert as_utc(naive) == datetime(2030, 1, 1, 12, 0, tzinfo=timezone.utc)
