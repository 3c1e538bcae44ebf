"""Token Store — verifies sign-in state and expiry."""

from datetime import datetime, timedelta, timezone
from uuid import uuid4

from cleancrud.client.token_store import TokenStore
from cleancrud.schemas.auth import TokenResponse


def _token(expires_in: timedelta) -> TokenResponse:
    return TokenResponse(
        access_token="abc",
        expires_at=datetime.now(timezone.utc) + expires_in,
        user_id=uuid4(),
    )


def test_empty_store_is_signed_out():
    assert not TokenStore().is_signed_in


def test_saved_token_signs_in():
    store = TokenStore()
    store.save(_token(timedelta(hours=1)))
    assert store.is_signed_in
    assert store.token == "abc"


def test_expired_token_signs_out():
    store = TokenStore()
    store.save(_token(timedelta(seconds=-1)))
    assert not store.is_signed_in


def test_naive_expiry_is_utc():
    naive = datetime.now(timezone.utc).replace(tzinfo=None)
    store = TokenStore(token="abc", expires_at=naive + timedelta(hours=1))
    assert store.is_signed_in


def test_clear_forgets_everything():
    store = TokenStore()
    store.save(_token(timedelta(hours=1)))
    store.clear()
    assert store.token is None
    assert store.user is None
    assert not store.is_signed_in
