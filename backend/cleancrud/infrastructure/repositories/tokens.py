"""Token Repository — SqlRepository for AuthToken plus hash lookup and bulk revoke."""

from datetime import datetime

from sqlalchemy import update

from cleancrud.core.auth_tokens import AuthToken
from cleancrud.core.domain_types import UserId
from cleancrud.core.entity import utcnow
from cleancrud.infrastructure.repositories.base import SqlRepository
from cleancrud.models.auth_token import AuthTokenRecord


class SqlTokenRepository(SqlRepository[AuthToken, AuthTokenRecord]):
    record_type = AuthTokenRecord

    def _to_domain(self, record: AuthTokenRecord) -> AuthToken:
        return AuthToken(
            user_id=UserId(record.user_id),
            token_hash=record.token_hash,
            expires_at=record.expires_at,
            revoked_at=record.revoked_at,
            created_at=record.created_at,
            id=record.id,
        )

    def _to_record(self, token: AuthToken) -> AuthTokenRecord:
        return AuthTokenRecord(
            id=token.id,
            user_id=token.user_id,
            token_hash=token.token_hash,
            expires_at=token.expires_at,
            revoked_at=token.revoked_at,
            created_at=token.created_at,
        )

    async def get_by_hash(self, token_hash: str) -> AuthToken | None:
        return await self._first_where(AuthTokenRecord.token_hash == token_hash)

    async def revoke_all_for_user(
        self, user_id: UserId, now: datetime | None = None,
    ) -> int:
        """Revoke every still-active token of a user. Returns how many were revoked."""
        result = await self.db.execute(
            update(AuthTokenRecord)
            .where(
                AuthTokenRecord.user_id == user_id,
                AuthTokenRecord.revoked_at.is_(None),
            )
            .values(revoked_at=now or utcnow())
            .execution_options(synchronize_session="fetch"),
        )
        await self.db.flush()
        return result.rowcount
