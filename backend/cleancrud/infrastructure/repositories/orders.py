"""Order Repository — SqlRepository for the Order aggregate (root + items)."""

from cleancrud.core.domain_types import OrderStatus, UserId
from cleancrud.core.orders import Order, OrderItem
from cleancrud.core.value_objects import Money, Quantity
from cleancrud.infrastructure.repositories.base import SqlRepository
from cleancrud.models.order import OrderItemRecord, OrderRecord


class SqlOrderRepository(SqlRepository[Order, OrderRecord]):
    record_type = OrderRecord

    def _to_domain(self, record: OrderRecord) -> Order:
        items = [
            OrderItem(
                product=item.product,
                unit_price=Money.from_cents(item.unit_price_cents, record.currency),
                quantity=Quantity(item.quantity),
                id=item.id,
            )
            for item in record.items
        ]
        return Order(
            user_id=UserId(record.user_id),
            currency=record.currency,
            items=items,
            status=OrderStatus(record.status),
            id=record.id,
            created_at=record.created_at,
            updated_at=record.updated_at,
        )

    def _to_record(self, order: Order) -> OrderRecord:
        return OrderRecord(
            id=order.id,
            user_id=order.user_id,
            currency=order.currency,
            status=order.status.value,
            created_at=order.created_at,
            updated_at=order.updated_at,
            items=[
                OrderItemRecord(
                    id=item.id,
                    order_id=order.id,
                    position=position,
                    product=item.product,
                    unit_price_cents=item.unit_price.cents,
                    quantity=item.quantity.value,
                )
                for position, item in enumerate(order.items)
            ],
        )

    async def list_by_user(
        self, user_id: UserId, offset: int = 0, limit: int = 20,
    ) -> list[Order]:
        return await self._list_where(
            OrderRecord.user_id == user_id, offset=offset, limit=limit,
        )

    async def count_by_user(self, user_id: UserId) -> int:
        return await self._count_where(OrderRecord.user_id == user_id)
