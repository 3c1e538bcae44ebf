"""API Dependencies — mediator per request and the server-side guards.

Invariants:
    - One DB session and one mediator per request (FastAPI caches dependencies per request)
    - Missing or invalid bearer token → UnauthorizedError (401)
    - Authenticated but not permitted → ForbiddenError (403)
    - Token checks go through the mediator (AuthenticateRequest), never straight to the DB

Design Decisions:
    - HTTPBearer(auto_error=False): we raise our own error so the 401 uses the
      standard envelope instead of FastAPI's default detail body
"""

from uuid import UUID

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from cleancrud.config import get_settings
from cleancrud.core.errors import ForbiddenError, RequestFailedError, UnauthorizedError
from cleancrud.core.result import Result
from cleancrud.infrastructure.database import get_db
from cleancrud.schemas.auth import AuthenticateRequest, CurrentUser
from cleancrud.services.mediator import Mediator, build_mediator

_bearer = HTTPBearer(auto_error=False)


async def get_mediator(db: AsyncSession = Depends(get_db)) -> Mediator:
    return build_mediator(db, get_settings())


async def get_bearer_token(
    credentials: HTTPAuthorizationCredentials | None = Depends(_bearer),
) -> str:
    if credentials is None or not credentials.credentials:
        raise UnauthorizedError()
    return credentials.credentials


async def get_current_user(
    token: str = Depends(get_bearer_token),
    mediator: Mediator = Depends(get_mediator),
) -> CurrentUser:
    """Guard: any signed-in, active user."""
    result = await mediator.send(AuthenticateRequest(token=token))
    if result.failed:
        raise UnauthorizedError(result.errors[0].message)
    return result.value


async def require_admin(
    current: CurrentUser = Depends(get_current_user),
) -> CurrentUser:
    """Guard: administrators only."""
    if not current.is_admin:
        raise ForbiddenError("Administrator role required")
    return current


def ensure_self_or_admin(user_id: UUID, current: CurrentUser) -> None:
    """Guard: the account owner or an administrator."""
    if current.id != user_id and not current.is_admin:
        raise ForbiddenError("You can only access your own account")


def unwrap(result: Result):
    """Value of a successful Result; a failed one becomes the HTTP error envelope."""
    if result.failed:
        raise RequestFailedError(result.errors)
    return result.value
