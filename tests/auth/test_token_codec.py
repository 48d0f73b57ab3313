"""
Tests for the bearer token codec.
"""
from datetime import datetime, timedelta, timezone

import pytest
from jose import jwt

from portal.core.security import MalformedTokenError, TokenClaims, TokenCodec, hash_password, verify_password

CLAIMS = TokenClaims(user_id=7, email="a@x.com", role="PATIENT", first_name="Ada", last_name="Lovelace")


def test_issue_then_verify_returns_claims():
    codec = TokenCodec("secret")
    assert codec.verify(codec.issue(CLAIMS)) == CLAIMS


def test_token_embeds_seven_day_expiry_by_default():
    codec = TokenCodec("secret")
    issued_at = datetime(2030, 1, 1, tzinfo=timezone.utc)

    payload = jwt.get_unverified_claims(codec.issue(CLAIMS, now=issued_at))

    assert payload["exp"] - payload["iat"] == int(timedelta(days=7).total_seconds())
    assert payload["userId"] == 7
    assert payload["firstName"] == "Ada"


def test_tokens_issued_together_are_distinct():
    codec = TokenCodec("secret")
    now = datetime.now(timezone.utc)
    assert codec.issue(CLAIMS, now=now) != codec.issue(CLAIMS, now=now)


def test_verify_rejects_wrong_signature():
    token = TokenCodec("secret").issue(CLAIMS)
    assert TokenCodec("other").verify(token) is None


def test_verify_rejects_expired_token():
    codec = TokenCodec("secret", expires_delta=timedelta(seconds=-1))
    assert codec.verify(codec.issue(CLAIMS)) is None


def test_verify_rejects_token_without_required_claims():
    token = jwt.encode({"email": "a@x.com"}, "secret", algorithm="HS256")
    assert TokenCodec("secret").verify(token) is None


@pytest.mark.parametrize("value", ["", "not-a-token", "a..c", None])
def test_verify_raises_for_malformed_input(value):
    with pytest.raises(MalformedTokenError):
        TokenCodec("secret").verify(value)


def test_password_hash_round_trip():
    hashed = hash_password("secret")
    assert hashed != "secret"
    assert verify_password("secret", hashed)
    assert not verify_password("wrong", hashed)
