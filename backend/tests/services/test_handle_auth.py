"""Auth Handlers — verifies sign-in, sign-out and token authentication.

Tests:
    - Unknown e-mail, wrong password and inactive user fail identically
    - Only the token hash is stored
    - Revoked and expired tokens are rejected
"""

from datetime import timedelta

from cleancrud.core.domain_types import UserRole, UserStatus
from cleancrud.core.result import ErrorKind
from cleancrud.infrastructure.security import hash_token
from cleancrud.schemas.auth import AuthenticateRequest, SignInRequest, SignOutRequest
from cleancrud.services.handle_auth import AuthHandlers

PASSWORD = "secret123"


async def test_sign_in_issues_token(auth_handlers, seed_user, tokens):
    user = await seed_user()
    result = await auth_handlers.sign_in(
        SignInRequest(email="ADA@example.com", password=PASSWORD),
    )
    issued = result.value
    assert issued.user_id == user.id
    assert issued.token_type == "bearer"
    stored = await tokens.get_by_hash(hash_token(issued.access_token))
    assert stored is not None
    assert stored.token_hash != issued.access_token


async def test_sign_in_failures_look_the_same(auth_handlers, seed_user):
    await seed_user()
    await seed_user("gone@example.com", status=UserStatus.INACTIVE)
    attempts = [
        SignInRequest(email="nobody@example.com", password=PASSWORD),
        SignInRequest(email="ada@example.com", password="wrong-pass1"),
        SignInRequest(email="gone@example.com", password=PASSWORD),
        SignInRequest(email="not-an-email", password=PASSWORD),
    ]
    for attempt in attempts:
        result = await auth_handlers.sign_in(attempt)
        assert result.errors[0].code == "INVALID_CREDENTIALS"
        assert result.errors[0].kind == ErrorKind.UNAUTHORIZED


async def test_authenticate_returns_current_user(auth_handlers, seed_user):
    await seed_user(role=UserRole.ADMIN)
    token = (await auth_handlers.sign_in(
        SignInRequest(email="ada@example.com", password=PASSWORD),
    )).value.access_token
    current = (await auth_handlers.authenticate(AuthenticateRequest(token=token))).value
    assert current.email == "ada@example.com"
    assert current.is_admin


async def test_authenticate_unknown_token(auth_handlers):
    result = await auth_handlers.authenticate(AuthenticateRequest(token="made-up"))
    assert result.errors[0].code == "INVALID_TOKEN"


async def test_sign_out_revokes_token(auth_handlers, seed_user):
    await seed_user()
    token = (await auth_handlers.sign_in(
        SignInRequest(email="ada@example.com", password=PASSWORD),
    )).value.access_token
    assert (await auth_handlers.sign_out(SignOutRequest(token=token))).succeeded
    assert (await auth_handlers.authenticate(AuthenticateRequest(token=token))).failed


async def test_sign_out_unknown_token(auth_handlers):
    result = await auth_handlers.sign_out(SignOutRequest(token="made-up"))
    assert result.errors[0].code == "INVALID_TOKEN"


async def test_expired_token_rejected(users, tokens, seed_user):
    await seed_user()
    handlers = AuthHandlers(users, tokens, timedelta(seconds=-1))
    token = (await handlers.sign_in(
        SignInRequest(email="ada@example.com", password=PASSWORD),
    )).value.access_token
    result = await handlers.authenticate(AuthenticateRequest(token=token))
    assert result.errors[0].code == "INVALID_TOKEN"
