"""Auth Token Entity — an issued bearer credential, stored by hash only.

Invariants:
    - token_hash is the SHA-256 of the opaque token; the token itself is never kept
    - A token is valid while not revoked and now < expires_at
    - revoke() is idempotent (first revocation time wins)
"""

from datetime import datetime, timezone
from uuid import UUID

from cleancrud.core.domain_types import UserId
from cleancrud.core.entity import Entity, utcnow


def _as_aware(moment: datetime) -> datetime:
    # SQLite hands back naive datetimes; every stored moment is UTC
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment


class AuthToken(Entity):
    """Bearer token issued at sign-in."""

    def __init__(
        self,
        user_id: UserId,
        token_hash: str,
        expires_at: datetime,
        revoked_at: datetime | None = None,
        created_at: datetime | None = None,
        id: UUID | None = None,
    ):
        super().__init__(id)
        self._user_id = user_id
        self._token_hash = token_hash
        self._expires_at = _as_aware(expires_at)
        self._revoked_at = _as_aware(revoked_at) if revoked_at else None
        self._created_at = created_at or utcnow()

    @property
    def user_id(self) -> UserId:
        return self._user_id

    @property
    def token_hash(self) -> str:
        return self._token_hash

    @property
    def expires_at(self) -> datetime:
        return self._expires_at

    @property
    def revoked_at(self) -> datetime | None:
        return self._revoked_at

    @property
    def created_at(self) -> datetime:
        return self._created_at

    def is_valid(self, now: datetime | None = None) -> bool:
        now = _as_aware(now or utcnow())
        return self._revoked_at is None and now < self._expires_at

    def revoke(self, now: datetime | None = None) -> None:
        if self._revoked_at is None:
            self._revoked_at = _as_aware(now or utcnow())
