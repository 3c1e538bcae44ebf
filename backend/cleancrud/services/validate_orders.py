"""Order Validators — business validation for order commands.

Invariants:
    - The caller must exist and be active to place or change an order
    - Orders of other users are reported as not found
    - add_order reports every malformed line with an indexed field (items.N.product)
"""

from cleancrud.core.entity import DomainRuleError
from cleancrud.core.ordering_policy import check_can_access_order, check_can_place_order
from cleancrud.core.repository_protocols import OrderRepository, UserRepository
from cleancrud.core.result import Error
from cleancrud.core.value_objects import Money
from cleancrud.schemas.orders import AddOrderItemRequest, AddOrderRequest
from cleancrud.services.factories import order_line


def _with_field(error: Error, field: str) -> Error:
    return Error(error.code, error.message, error.kind, field)


class OrderValidators:
    """Validation for order commands."""

    def __init__(self, users: UserRepository, orders: OrderRepository):
        self.users = users
        self.orders = orders

    async def add_order(self, request: AddOrderRequest) -> list[Error]:
        refused = check_can_place_order(await self.users.get(request.user_id))
        if refused:
            return [refused]
        try:
            currency = Money.zero(request.currency).currency
        except DomainRuleError as exc:
            return [exc.error]
        errors = []
        for index, item in enumerate(request.items):
            try:
                order_line(item, currency)
            except DomainRuleError as exc:
                field = exc.error.field or "item"
                errors.append(_with_field(exc.error, f"items.{index}.{field}"))
        return errors

    async def add_order_item(self, request: AddOrderItemRequest) -> list[Error]:
        errors = await self.change_order(request)
        if errors:
            return errors
        order = await self.orders.get(request.order_id)
        try:
            order_line(request, order.currency)
        except DomainRuleError as exc:
            return [exc.error]
        return []

    async def change_order(self, request) -> list[Error]:
        """Shared by add item, remove item and cancel: caller may touch this order."""
        refused = check_can_place_order(await self.users.get(request.user_id))
        if refused:
            return [refused]
        order = await self.orders.get(request.order_id)
        denied = check_can_access_order(order, request.user_id)
        return [denied] if denied else []
