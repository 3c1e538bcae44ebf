"""User Handlers — users feature (add, get, list, update, password, inactivate, delete).

Invariants:
    - Every method returns Result[UserResponse | PagedResponse | None]
    - Handlers do NOT commit: the mediator owns the transaction boundary
    - Changing a password or inactivating a user revokes all of their tokens
    - A user vanishing between validation and handling still yields USER_NOT_FOUND

Design Decisions:
    - Handler class with repositories injected: explicit dependencies, no globals
    - Password hashing here (shell), not in the aggregate (pure core)
"""

from uuid import UUID

from cleancrud.core.repository_protocols import TokenRepository, UserRepository
from cleancrud.core.result import Error, ErrorKind, Result
from cleancrud.core.value_objects import Email, Name
from cleancrud.infrastructure.security import hash_password
from cleancrud.schemas.common import PagedResponse
from cleancrud.schemas.users import (
    AddUserRequest, ChangePasswordRequest, DeleteUserRequest, GetUserRequest,
    InactivateUserRequest, ListUsersRequest, UpdateUserRequest, UserResponse,
)
from cleancrud.services.factories import build_user, user_response


def _not_found(user_id: UUID) -> Result:
    return Result.failure(Error(
        "USER_NOT_FOUND", f"User '{user_id}' not found", ErrorKind.NOT_FOUND, "id",
    ))


class UserHandlers:
    """Users feature: account CRUD and lifecycle."""

    def __init__(self, users: UserRepository, tokens: TokenRepository):
        self.users = users
        self.tokens = tokens

    async def add_user(self, request: AddUserRequest) -> Result[UserResponse]:
        user = build_user(request, hash_password(request.password))
        await self.users.add(user)
        return Result.success(user_response(user))

    async def get_user(self, request: GetUserRequest) -> Result[UserResponse]:
        user = await self.users.get(request.id)
        if user is None:
            return _not_found(request.id)
        return Result.success(user_response(user))

    async def list_users(
        self, request: ListUsersRequest,
    ) -> Result[PagedResponse[UserResponse]]:
        users = await self.users.list(request.offset, request.page_size)
        total = await self.users.count()
        return Result.success(PagedResponse[UserResponse](
            items=[user_response(u) for u in users],
            page=request.page,
            page_size=request.page_size,
            total=total,
        ))

    async def update_user(self, request: UpdateUserRequest) -> Result[UserResponse]:
        user = await self.users.get(request.id)
        if user is None:
            return _not_found(request.id)
        user.rename(Name(request.first_name, request.last_name))
        user.change_email(Email(request.email))
        await self.users.update(user)
        return Result.success(user_response(user))

    async def change_password(self, request: ChangePasswordRequest) -> Result[None]:
        user = await self.users.get(request.id)
        if user is None:
            return _not_found(request.id)
        user.change_password(hash_password(request.new_password))
        await self.users.update(user)
        await self.tokens.revoke_all_for_user(user.id)
        return Result.success()

    async def inactivate_user(
        self, request: InactivateUserRequest,
    ) -> Result[UserResponse]:
        user = await self.users.get(request.id)
        if user is None:
            return _not_found(request.id)
        user.inactivate()
        await self.users.update(user)
        await self.tokens.revoke_all_for_user(user.id)
        return Result.success(user_response(user))

    async def delete_user(self, request: DeleteUserRequest) -> Result[None]:
        if not await self.users.delete(request.id):
            return _not_found(request.id)
        return Result.success()
