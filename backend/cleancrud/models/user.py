"""User ORM — persists the User aggregate root.

Invariants:
    - id is UUID primary key
    - email is unique and stored lower-cased (Email value object normalizes it)
    - role/status hold UserRole/UserStatus values

Design Decisions:
    - first_name/last_name as two columns: Name value object flattened
    - cascade delete for tokens and orders: user owns both
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, DateTime, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from cleancrud.db.base import Base


class UserRecord(Base):
    """Persistence shape of a User."""
    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid, primary_key=True, default=uuid.uuid4,
    )
    first_name: Mapped[str] = mapped_column(String(100), nullable=False)
    last_name: Mapped[str] = mapped_column(String(100), nullable=False)
    email: Mapped[str] = mapped_column(
        String(254), nullable=False, unique=True, index=True,
    )
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    role: Mapped[str] = mapped_column(
        String(20), nullable=False, default="user",
    )
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default="active",
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    # Relationships
    tokens: Mapped[list["AuthTokenRecord"]] = relationship(
        "AuthTokenRecord", back_populates="user",
        cascade="all, delete-orphan",
    )
    orders: Mapped[list["OrderRecord"]] = relationship(
        "OrderRecord", back_populates="user",
        cascade="all, delete-orphan",
    )
