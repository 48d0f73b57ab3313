"""
Tests for expired session housekeeping.
"""
from datetime import datetime, timedelta, timezone

from portal.auth.models import UserSession
from portal.auth.service import purge_expired_sessions


def test_purge_removes_only_expired_sessions(db, make_user):
    user = make_user(email="a@x.com")
    now = datetime.now(timezone.utc)
    db.add_all([
        UserSession(user_id=user.id, token="expired-1", expires_at=now - timedelta(days=1)),
        UserSession(user_id=user.id, token="expired-2", expires_at=now - timedelta(seconds=1)),
        UserSession(user_id=user.id, token="live", expires_at=now + timedelta(days=1)),
    ])
    db.commit()

    deleted = purge_expired_sessions(db, now=now)

    assert deleted == 2
    assert [session.token for session in db.query(UserSession).all()] == ["live"]


def test_purge_with_nothing_expired(db, make_user):
    user = make_user(email="a@x.com")
    db.add(UserSession(user_id=user.id, token="live", expires_at=datetime.now(timezone.utc) + timedelta(days=1)))
    db.commit()

    assert purge_expired_sessions(db) == 0
    assert db.query(UserSession).count() == 1
