"""User Repository — SqlRepository for the User aggregate plus e-mail lookups."""

from cleancrud.core.domain_types import UserId, UserRole, UserStatus
from cleancrud.core.users import User
from cleancrud.core.value_objects import Email, Name
from cleancrud.infrastructure.repositories.base import SqlRepository
from cleancrud.models.user import UserRecord


class SqlUserRepository(SqlRepository[User, UserRecord]):
    record_type = UserRecord

    def _to_domain(self, record: UserRecord) -> User:
        return User(
            name=Name(record.first_name, record.last_name),
            email=Email(record.email),
            password_hash=record.password_hash,
            role=UserRole(record.role),
            status=UserStatus(record.status),
            id=record.id,
            created_at=record.created_at,
            updated_at=record.updated_at,
        )

    def _to_record(self, user: User) -> UserRecord:
        return UserRecord(
            id=user.id,
            first_name=user.name.first,
            last_name=user.name.last,
            email=user.email.value,
            password_hash=user.password_hash,
            role=user.role.value,
            status=user.status.value,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )

    async def get_by_email(self, email: Email) -> User | None:
        return await self._first_where(UserRecord.email == email.value)

    async def email_taken(
        self, email: Email, exclude_id: UserId | None = None,
    ) -> bool:
        criteria = [UserRecord.email == email.value]
        if exclude_id is not None:
            criteria.append(UserRecord.id != exclude_id)
        return await self._count_where(*criteria) > 0
