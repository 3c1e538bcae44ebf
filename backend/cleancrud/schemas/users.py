"""User Schemas — requests and responses for the users feature.

Invariants:
    - Passwords appear only in requests, never in responses
    - first_name/last_name 1-100 chars, password 8-128 chars (shape only;
      strength rules live in services/validate_users.py)
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from cleancrud.core.domain_types import UserRole, UserStatus
from cleancrud.schemas.common import Command, PageQuery, Query


class UserFields(BaseModel):
    """Editable profile fields — also the PUT /users/{id} body."""
    first_name: str = Field(min_length=1, max_length=100)
    last_name: str = Field(min_length=1, max_length=100)
    email: str = Field(min_length=3, max_length=254)


class AddUserRequest(Command, UserFields):
    password: str = Field(min_length=8, max_length=128)


class UpdateUserRequest(Command, UserFields):
    id: UUID


class PasswordChange(BaseModel):
    """Body of PUT /users/{id}/password."""
    current_password: str = Field(min_length=1, max_length=128)
    new_password: str = Field(min_length=8, max_length=128)


class ChangePasswordRequest(Command, PasswordChange):
    id: UUID


class GetUserRequest(Query):
    id: UUID


class ListUsersRequest(PageQuery):
    pass


class InactivateUserRequest(Command):
    id: UUID
    requested_by: UUID


class DeleteUserRequest(Command):
    id: UUID
    requested_by: UUID


class UserResponse(BaseModel):
    id: UUID
    first_name: str
    last_name: str
    full_name: str
    email: str
    role: UserRole
    status: UserStatus
    created_at: datetime
    updated_at: datetime
