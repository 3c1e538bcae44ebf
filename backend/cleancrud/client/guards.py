"""Guards — client-side checks run before a call is sent.

Invariants:
    - A guard failure raises before any network traffic
    - RoleGuard implies AuthGuard
    - The server enforces the same rules; guards only fail fast
"""

import functools

from cleancrud.client.token_store import TokenStore
from cleancrud.core.domain_types import UserRole


class GuardError(Exception):
    """A client-side precondition for the call is not met."""


class NotSignedInError(GuardError):
    pass


class RoleRequiredError(GuardError):
    pass


class AuthGuard:
    def __init__(self, store: TokenStore):
        self.store = store

    def check(self) -> None:
        if not self.store.is_signed_in:
            raise NotSignedInError("sign in first")


class RoleGuard(AuthGuard):
    def __init__(self, store: TokenStore, role: UserRole):
        super().__init__(store)
        self.role = role

    def check(self) -> None:
        super().check()
        user = self.store.user
        if user is None or user.role != self.role:
            raise RoleRequiredError(f"{self.role.value} role required")


def requires_sign_in(method):
    """Service method decorator: AuthGuard on self.client.store."""

    @functools.wraps(method)
    async def wrapper(self, *args, **kwargs):
        AuthGuard(self.client.store).check()
        return await method(self, *args, **kwargs)

    return wrapper


def requires_role(role: UserRole):
    """Service method decorator: RoleGuard on self.client.store."""

    def decorate(method):
        @functools.wraps(method)
        async def wrapper(self, *args, **kwargs):
            RoleGuard(self.client.store, role).check()
            return await method(self, *args, **kwargs)

        return wrapper

    return decorate
