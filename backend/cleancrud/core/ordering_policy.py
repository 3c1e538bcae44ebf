"""Ordering Policy — domain service spanning the User and Order aggregates.

Invariants:
    - Pure functions: return an Error or None, never raise, never do IO
    - Orders of other users look exactly like missing orders (no existence leak)
"""

from cleancrud.core.domain_types import UserId
from cleancrud.core.orders import Order
from cleancrud.core.result import Error, ErrorKind
from cleancrud.core.users import User


def check_can_place_order(user: User | None) -> Error | None:
    """Only existing, active users may place or change orders."""
    if user is None:
        return Error("USER_NOT_FOUND", "User not found", ErrorKind.NOT_FOUND, "user_id")
    if not user.is_active:
        return Error(
            "USER_INACTIVE",
            "Inactive users cannot place or change orders",
            ErrorKind.BUSINESS_RULE,
        )
    return None


def check_can_access_order(order: Order | None, user_id: UserId) -> Error | None:
    """Orders are visible only to their owner."""
    if order is None or order.user_id != user_id:
        return Error("ORDER_NOT_FOUND", "Order not found", ErrorKind.NOT_FOUND, "order_id")
    return None
