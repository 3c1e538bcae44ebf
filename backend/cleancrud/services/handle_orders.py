"""Order Handlers — orders feature (place, get, list, add/remove item, cancel).

Invariants:
    - Every read and write is scoped to the owner (request.user_id)
    - Mutations go through the Order aggregate, then the whole aggregate is saved
    - Handlers do NOT commit: the mediator owns the transaction boundary
"""

from cleancrud.core.domain_types import OrderItemId
from cleancrud.core.ordering_policy import check_can_access_order
from cleancrud.core.orders import Order
from cleancrud.core.repository_protocols import OrderRepository
from cleancrud.core.result import Result
from cleancrud.schemas.common import PagedResponse
from cleancrud.schemas.orders import (
    AddOrderItemRequest, AddOrderRequest, CancelOrderRequest, GetOrderRequest,
    ListOrdersRequest, OrderResponse, RemoveOrderItemRequest,
)
from cleancrud.services.factories import build_order, order_line, order_response


class OrderHandlers:
    """Orders feature."""

    def __init__(self, orders: OrderRepository):
        self.orders = orders

    async def add_order(self, request: AddOrderRequest) -> Result[OrderResponse]:
        order = build_order(request)
        await self.orders.add(order)
        return Result.success(order_response(order))

    async def get_order(self, request: GetOrderRequest) -> Result[OrderResponse]:
        order = await self.orders.get(request.id)
        denied = check_can_access_order(order, request.user_id)
        if denied:
            return Result.failure(denied)
        return Result.success(order_response(order))

    async def list_orders(
        self, request: ListOrdersRequest,
    ) -> Result[PagedResponse[OrderResponse]]:
        orders = await self.orders.list_by_user(
            request.user_id, request.offset, request.page_size,
        )
        total = await self.orders.count_by_user(request.user_id)
        return Result.success(PagedResponse[OrderResponse](
            items=[order_response(o) for o in orders],
            page=request.page,
            page_size=request.page_size,
            total=total,
        ))

    async def add_order_item(self, request: AddOrderItemRequest) -> Result[OrderResponse]:
        return await self._change(
            request.order_id, request.user_id,
            lambda order: order.add_item(*order_line(request, order.currency)),
        )

    async def remove_order_item(
        self, request: RemoveOrderItemRequest,
    ) -> Result[OrderResponse]:
        return await self._change(
            request.order_id, request.user_id,
            lambda order: order.remove_item(OrderItemId(request.item_id)),
        )

    async def cancel_order(self, request: CancelOrderRequest) -> Result[OrderResponse]:
        return await self._change(
            request.order_id, request.user_id, Order.cancel,
        )

    async def _change(self, order_id, user_id, mutate) -> Result[OrderResponse]:
        order = await self.orders.get(order_id)
        denied = check_can_access_order(order, user_id)
        if denied:
            return Result.failure(denied)
        mutate(order)
        await self.orders.update(order)
        return Result.success(order_response(order))
