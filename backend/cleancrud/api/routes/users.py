"""Users Controller — HTTP verbs mapped to user requests.

Invariants:
    - Registration (POST) is public; everything else needs a token
    - Listing, inactivating and deleting are admin-only
    - Reading and updating an account: the owner or an admin
    - Changing a password: the owner only (the current password is required)
"""

from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response, status

from cleancrud.api.dependencies import (
    ensure_self_or_admin, get_current_user, get_mediator, require_admin, unwrap,
)
from cleancrud.config import get_settings
from cleancrud.core.errors import ForbiddenError
from cleancrud.schemas.auth import CurrentUser
from cleancrud.schemas.common import MAX_PAGE, MAX_PAGE_SIZE, PagedResponse
from cleancrud.schemas.users import (
    AddUserRequest, ChangePasswordRequest, DeleteUserRequest, GetUserRequest,
    InactivateUserRequest, ListUsersRequest, PasswordChange, UpdateUserRequest,
    UserFields, UserResponse,
)
from cleancrud.services.mediator import Mediator

router = APIRouter(prefix="/api/v1/users", tags=["users"])
_settings = get_settings()


@router.post(
    "", response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
)
async def add_user(
    body: AddUserRequest, mediator: Mediator = Depends(get_mediator),
):
    """Register a new user account."""
    return unwrap(await mediator.send(body))


@router.get("", response_model=PagedResponse[UserResponse])
async def list_users(
    page: int = Query(1, ge=1, le=MAX_PAGE),
    page_size: int = Query(_settings.default_page_size, ge=1, le=MAX_PAGE_SIZE),
    admin: CurrentUser = Depends(require_admin),
    mediator: Mediator = Depends(get_mediator),
):
    """List users, newest first."""
    return unwrap(await mediator.send(
        ListUsersRequest(page=page, page_size=page_size),
    ))


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(
    user_id: UUID,
    current: CurrentUser = Depends(get_current_user),
    mediator: Mediator = Depends(get_mediator),
):
    ensure_self_or_admin(user_id, current)
    return unwrap(await mediator.send(GetUserRequest(id=user_id)))


@router.put("/{user_id}", response_model=UserResponse)
async def update_user(
    user_id: UUID,
    body: UserFields,
    current: CurrentUser = Depends(get_current_user),
    mediator: Mediator = Depends(get_mediator),
):
    ensure_self_or_admin(user_id, current)
    return unwrap(await mediator.send(
        UpdateUserRequest(id=user_id, **body.model_dump()),
    ))


@router.put("/{user_id}/password", status_code=status.HTTP_204_NO_CONTENT)
async def change_password(
    user_id: UUID,
    body: PasswordChange,
    current: CurrentUser = Depends(get_current_user),
    mediator: Mediator = Depends(get_mediator),
):
    """Change own password. Signs the user out everywhere."""
    if current.id != user_id:
        raise ForbiddenError("You can only change your own password")
    unwrap(await mediator.send(
        ChangePasswordRequest(id=user_id, **body.model_dump()),
    ))
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.patch("/{user_id}/inactivate", response_model=UserResponse)
async def inactivate_user(
    user_id: UUID,
    admin: CurrentUser = Depends(require_admin),
    mediator: Mediator = Depends(get_mediator),
):
    return unwrap(await mediator.send(
        InactivateUserRequest(id=user_id, requested_by=admin.id),
    ))


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_user(
    user_id: UUID,
    admin: CurrentUser = Depends(require_admin),
    mediator: Mediator = Depends(get_mediator),
):
    unwrap(await mediator.send(
        DeleteUserRequest(id=user_id, requested_by=admin.id),
    ))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
