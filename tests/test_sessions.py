from datetime import datetime, timedelta, timezone

from crackit.models.db.user import Session
from crackit.services import auth_service, cleanup_service


def test_cleanup_removes_only_expired_sessions(db, monkeypatch) -> None:
    user = auth_service.create_user(db, "ana@example.com", "secret123", "Ana", "Lopez", "State")
    now = datetime.now(timezone.utc)
    auth_service.create_session(db, user.id, "expired", now - timedelta(minutes=5))
    auth_service.create_session(db, user.id, "active", now + timedelta(minutes=5))

    monkeypatch.setattr(cleanup_service, "SessionLocal", lambda: db)
    monkeypatch.setattr(db, "close", lambda: None)

    assert cleanup_service.cleanup_sessions() == 1
    assert [s.token_jti for s in db.query(Session).all()] == ["active"]


def test_active_session_lookup_and_extension(db) -> None:
    user = auth_service.create_user(db, "ana@example.com", "secret123", "Ana", "Lopez", "State")
    now = datetime.now(timezone.utc)
    auth_service.create_session(db, user.id, "jti-1", now + timedelta(seconds=30))

    session = auth_service.get_active_session(db, "jti-1")
    assert session is not None
    auth_service.extend_session(db, session)
    assert auth_service.get_active_session(db, "jti-1") is not None

    auth_service.invalidate_session(db, "jti-1")
    assert auth_service.get_active_session(db, "jti-1") is None


def test_token_round_trip() -> None:
    token, jti = auth_service.create_access_token(42)
    payload = auth_service.verify_token(token)
    assert payload["sub"] == "42"
    assert payload["jti"] == jti
    assert auth_service.verify_token(token + "x") is None


def test_password_hashing() -> None:
    hashed = auth_service.hash_password("secret123")
    assert auth_service.verify_password("secret123", hashed)
    assert not auth_service.verify_password("wrong", hashed)
