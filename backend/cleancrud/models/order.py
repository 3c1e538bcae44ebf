"""Order ORM — persists the Order aggregate root and its items.

Invariants:
    - Orders belong to a User (user_id FK, ON DELETE CASCADE)
    - Items belong to an Order; delete-orphan keeps the table in sync with the aggregate
    - Money is stored as integer cents plus the order currency
    - unit_price_cents is 64-bit: the largest accepted price (12 digits) fits

Design Decisions:
    - Integer cents over Numeric: exact on every backend, no Decimal driver quirks
    - position column keeps item order stable across loads
    - items loaded with selectin: an Order is always read whole
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import BigInteger, String, Integer, DateTime, ForeignKey, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from cleancrud.db.base import Base


class OrderRecord(Base):
    """Persistence shape of an Order."""
    __tablename__ = "orders"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid, primary_key=True, default=uuid.uuid4,
    )
    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False, index=True,
    )
    currency: Mapped[str] = mapped_column(String(3), nullable=False)
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default="pending",
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

    user: Mapped["UserRecord"] = relationship(
        "UserRecord", back_populates="orders",
    )
    items: Mapped[list["OrderItemRecord"]] = relationship(
        "OrderItemRecord", back_populates="order",
        cascade="all, delete-orphan", lazy="selectin",
        order_by="OrderItemRecord.position",
    )


class OrderItemRecord(Base):
    """Persistence shape of an OrderItem."""
    __tablename__ = "order_items"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid, primary_key=True, default=uuid.uuid4,
    )
    order_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("orders.id", ondelete="CASCADE"),
        nullable=False, index=True,
    )
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    product: Mapped[str] = mapped_column(String(200), nullable=False)
    unit_price_cents: Mapped[int] = mapped_column(BigInteger, nullable=False)
    quantity: Mapped[int] = mapped_column(Integer, nullable=False)

    order: Mapped["OrderRecord"] = relationship(
        "OrderRecord", back_populates="items",
    )
