"""Auth Handlers — sign in, sign out and token authentication.

Invariants:
    - Unknown e-mail, inactive user and wrong password all yield the same
      INVALID_CREDENTIALS failure (no account enumeration)
    - The plain token is returned exactly once (sign-in response); only its hash is stored
    - Expired, revoked and unknown tokens all yield INVALID_TOKEN
    - A token of a since-inactivated or deleted user is invalid
"""

import logging
from datetime import timedelta

from cleancrud.core.auth_tokens import AuthToken
from cleancrud.core.entity import DomainRuleError, utcnow
from cleancrud.core.repository_protocols import TokenRepository, UserRepository
from cleancrud.core.result import Error, ErrorKind, Result
from cleancrud.core.value_objects import Email
from cleancrud.infrastructure.security import generate_token, hash_token, verify_password
from cleancrud.schemas.auth import (
    AuthenticateRequest, CurrentUser, SignInRequest, SignOutRequest, TokenResponse,
)
from cleancrud.services.factories import current_user

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = Error(
    "INVALID_CREDENTIALS", "E-mail or password is incorrect", ErrorKind.UNAUTHORIZED,
)
INVALID_TOKEN = Error(
    "INVALID_TOKEN", "Token is invalid or expired", ErrorKind.UNAUTHORIZED,
)


class AuthHandlers:
    """Auth feature: opaque bearer tokens backed by the token repository."""

    def __init__(
        self, users: UserRepository, tokens: TokenRepository, token_ttl: timedelta,
    ):
        self.users = users
        self.tokens = tokens
        self.token_ttl = token_ttl

    async def sign_in(self, request: SignInRequest) -> Result[TokenResponse]:
        try:
            email = Email(request.email)
        except DomainRuleError:
            return Result.failure(INVALID_CREDENTIALS)
        user = await self.users.get_by_email(email)
        if (
            user is None
            or not user.is_active
            or not verify_password(user.password_hash, request.password)
        ):
            logger.info("Sign-in refused", extra={"error_code": INVALID_CREDENTIALS.code})
            return Result.failure(INVALID_CREDENTIALS)

        token, token_hash = generate_token()
        issued = AuthToken(user.id, token_hash, utcnow() + self.token_ttl)
        await self.tokens.add(issued)
        logger.info("Signed in", extra={"user_id": str(user.id)})
        return Result.success(TokenResponse(
            access_token=token, expires_at=issued.expires_at, user_id=user.id,
        ))

    async def sign_out(self, request: SignOutRequest) -> Result[None]:
        token = await self.tokens.get_by_hash(hash_token(request.token))
        if token is None:
            return Result.failure(INVALID_TOKEN)
        token.revoke()
        await self.tokens.update(token)
        return Result.success()

    async def authenticate(self, request: AuthenticateRequest) -> Result[CurrentUser]:
        token = await self.tokens.get_by_hash(hash_token(request.token))
        if token is None or not token.is_valid():
            return Result.failure(INVALID_TOKEN)
        user = await self.users.get(token.user_id)
        if user is None or not user.is_active:
            return Result.failure(INVALID_TOKEN)
        return Result.success(current_user(user))
