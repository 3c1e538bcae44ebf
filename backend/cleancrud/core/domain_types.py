"""Domain Types — identity types and enums shared across the layers.

Invariants:
    - UserId and OrderItemId wrap UUIDs where a bare UUID would be ambiguous
      (owner ids, item ids inside an order)
    - All valid states encoded as Enums — no raw string matching

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON and to DB string columns without custom encoders
"""

from enum import Enum
from typing import NewType
from uuid import UUID


# ─── Identity Types ──────────────────────────────────────────────

UserId = NewType("UserId", UUID)
OrderItemId = NewType("OrderItemId", UUID)


# ─── Enums ───────────────────────────────────────────────────────

class UserRole(str, Enum):
    """Authorization roles — admin unlocks user management."""
    USER = "user"
    ADMIN = "admin"


class UserStatus(str, Enum):
    """User lifecycle — inactive users cannot sign in or order."""
    ACTIVE = "active"
    INACTIVE = "inactive"


class OrderStatus(str, Enum):
    """Order lifecycle — items are editable only while pending."""
    PENDING = "pending"
    CANCELLED = "cancelled"
