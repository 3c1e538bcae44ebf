"""Auth Token Entity — verifies validity window and revocation."""

from datetime import datetime, timedelta, timezone
from uuid import uuid4

from cleancrud.core.auth_tokens import AuthToken

NOW = datetime(2025, 6, 1, 12, 0, tzinfo=timezone.utc)


def _token(**overrides) -> AuthToken:
    fields = dict(user_id=uuid4(), token_hash="h" * 64, expires_at=NOW + timedelta(hours=1))
    fields.update(overrides)
    return AuthToken(**fields)


def test_valid_before_expiry():
    assert _token().is_valid(NOW)


def test_invalid_at_and_after_expiry():
    token = _token()
    assert not token.is_valid(NOW + timedelta(hours=1))
    assert not token.is_valid(NOW + timedelta(days=1))


def test_revoked_token_is_invalid():
    token = _token()
    token.revoke(NOW)
    assert token.revoked_at == NOW
    assert not token.is_valid(NOW)


def test_revoke_is_idempotent():
    token = _token()
    token.revoke(NOW)
    token.revoke(NOW + timedelta(minutes=5))
    assert token.revoked_at == NOW


def test_naive_datetimes_are_treated_as_utc():
    token = _token(expires_at=datetime(2025, 6, 1, 13, 0))
    assert token.expires_at.tzinfo is not None
    assert token.is_valid(datetime(2025, 6, 1, 12, 30))
