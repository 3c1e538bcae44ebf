"""Bootstrap — seed the first administrator on startup.

Invariants:
    - Runs only when both BOOTSTRAP_ADMIN_EMAIL and BOOTSTRAP_ADMIN_PASSWORD are set
    - Idempotent: an existing account with that e-mail is left untouched
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from cleancrud.config import Settings
from cleancrud.core.domain_types import UserRole
from cleancrud.core.users import User
from cleancrud.core.value_objects import Email, Name
from cleancrud.infrastructure.repositories import SqlUserRepository
from cleancrud.infrastructure.security import hash_password

logger = logging.getLogger(__name__)


async def ensure_admin(db: AsyncSession, settings: Settings) -> User | None:
    """Create the bootstrap admin if configured and missing. Returns the created user."""
    if not settings.bootstrap_admin_email or not settings.bootstrap_admin_password:
        return None
    users = SqlUserRepository(db)
    email = Email(settings.bootstrap_admin_email)
    if await users.get_by_email(email):
        return None
    admin = User(
        name=Name(settings.bootstrap_admin_first_name, settings.bootstrap_admin_last_name),
        email=email,
        password_hash=hash_password(settings.bootstrap_admin_password),
        role=UserRole.ADMIN,
    )
    await users.add(admin)
    await db.commit()
    logger.info("Bootstrap admin created", extra={"user_id": str(admin.id)})
    return admin
