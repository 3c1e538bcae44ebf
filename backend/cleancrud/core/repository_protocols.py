"""Boundary Protocols — repository contracts between core and shell.

Invariants:
    - Core NEVER imports from infrastructure — dependency arrows point inward only
    - Repositories speak domain objects, never ORM records
    - Repositories flush but never commit: the mediator owns the transaction

Design Decisions:
    - Protocol over ABC: structural subtyping, tests can pass plain fakes
    - Async in Protocol: implementations do IO; the pure core never awaits
    - One generic contract + narrow per-feature extensions, so each handler
      depends only on what it queries
"""

from datetime import datetime
from typing import Protocol, TypeVar
from uuid import UUID

from cleancrud.core.auth_tokens import AuthToken
from cleancrud.core.domain_types import UserId
from cleancrud.core.orders import Order
from cleancrud.core.users import User
from cleancrud.core.value_objects import Email

E = TypeVar("E")


class Repository(Protocol[E]):
    """Generic persistence contract for one aggregate kind."""
    async def add(self, entity: E) -> None: ...
    async def get(self, entity_id: UUID) -> E | None: ...
    async def list(self, offset: int = 0, limit: int = 20) -> list[E]: ...
    async def count(self) -> int: ...
    async def update(self, entity: E) -> None: ...
    async def delete(self, entity_id: UUID) -> bool: ...
    async def exists(self, entity_id: UUID) -> bool: ...


class UserRepository(Repository[User], Protocol):
    """User persistence — adds lookups by e-mail."""
    async def get_by_email(self, email: Email) -> User | None: ...
    async def email_taken(
        self, email: Email, exclude_id: UserId | None = None,
    ) -> bool: ...


class OrderRepository(Repository[Order], Protocol):
    """Order persistence — adds per-owner listing."""
    async def list_by_user(
        self, user_id: UserId, offset: int = 0, limit: int = 20,
    ) -> list[Order]: ...
    async def count_by_user(self, user_id: UserId) -> int: ...


class TokenRepository(Repository[AuthToken], Protocol):
    """Auth token persistence — lookups by hash and bulk revocation."""
    async def get_by_hash(self, token_hash: str) -> AuthToken | None: ...
    async def revoke_all_for_user(
        self, user_id: UserId, now: datetime | None = None,
    ) -> int: ...
