"""Auth Schemas — sign-in/out requests, token and current-user responses."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from cleancrud.core.domain_types import UserRole
from cleancrud.schemas.common import Command, Query


class SignInRequest(Command):
    email: str = Field(min_length=3, max_length=254)
    password: str = Field(min_length=1, max_length=128)


class SignOutRequest(Command):
    token: str = Field(min_length=1)


class AuthenticateRequest(Query):
    token: str = Field(min_length=1)


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    expires_at: datetime
    user_id: UUID


class CurrentUser(BaseModel):
    """The authenticated caller, as seen by guards."""
    id: UUID
    email: str
    full_name: str
    role: UserRole

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN
