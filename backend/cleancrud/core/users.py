"""User Aggregate — account identity, credentials and lifecycle.

Invariants:
    - name and email are value objects (always valid)
    - password is only ever held as a hash; hashing happens in infrastructure
    - Every mutation bumps updated_at
    - inactivate/activate are idempotent
"""

from datetime import datetime
from uuid import UUID

from cleancrud.core.domain_types import UserRole, UserStatus
from cleancrud.core.entity import AggregateRoot, DomainRuleError
from cleancrud.core.value_objects import Email, Name


class User(AggregateRoot):
    """User aggregate root."""

    def __init__(
        self,
        name: Name,
        email: Email,
        password_hash: str,
        role: UserRole = UserRole.USER,
        status: UserStatus = UserStatus.ACTIVE,
        id: UUID | None = None,
        created_at: datetime | None = None,
        updated_at: datetime | None = None,
    ):
        super().__init__(id, created_at, updated_at)
        if not password_hash:
            raise DomainRuleError.invalid(
                "INVALID_PASSWORD", "password hash cannot be empty", "password",
            )
        self._name = name
        self._email = email
        self._password_hash = password_hash
        self._role = UserRole(role)
        self._status = UserStatus(status)

    @property
    def name(self) -> Name:
        return self._name

    @property
    def email(self) -> Email:
        return self._email

    @property
    def password_hash(self) -> str:
        return self._password_hash

    @property
    def role(self) -> UserRole:
        return self._role

    @property
    def status(self) -> UserStatus:
        return self._status

    @property
    def is_active(self) -> bool:
        return self._status == UserStatus.ACTIVE

    @property
    def is_admin(self) -> bool:
        return self._role == UserRole.ADMIN

    def rename(self, name: Name) -> None:
        if name != self._name:
            self._name = name
            self._touch()

    def change_email(self, email: Email) -> None:
        if email != self._email:
            self._email = email
            self._touch()

    def change_password(self, password_hash: str) -> None:
        if not password_hash:
            raise DomainRuleError.invalid(
                "INVALID_PASSWORD", "password hash cannot be empty", "password",
            )
        self._password_hash = password_hash
        self._touch()

    def inactivate(self) -> None:
        if self._status != UserStatus.INACTIVE:
            self._status = UserStatus.INACTIVE
            self._touch()

    def activate(self) -> None:
        if self._status != UserStatus.ACTIVE:
            self._status = UserStatus.ACTIVE
            self._touch()
