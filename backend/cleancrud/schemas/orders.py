"""Order Schemas — requests and responses for the orders feature.

Invariants:
    - Every order request carries the owner (user_id) taken from the caller's token
    - unit_price is a non-negative Decimal with at most 2 decimal places
    - quantity 1-10000; 1-50 items per new order
"""

from datetime import datetime
from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel, Field

from cleancrud.core.domain_types import OrderStatus
from cleancrud.schemas.common import Command, PageQuery, Query


class OrderItemInput(BaseModel):
    """One requested order line — also the POST /orders/{id}/items body."""
    product: str = Field(min_length=1, max_length=200)
    unit_price: Decimal = Field(ge=0, max_digits=12, decimal_places=2)
    quantity: int = Field(ge=1, le=10_000)


class NewOrder(BaseModel):
    """Body of POST /orders."""
    currency: str = Field("USD", min_length=3, max_length=3)
    items: list[OrderItemInput] = Field(min_length=1, max_length=50)


class AddOrderRequest(Command, NewOrder):
    user_id: UUID


class GetOrderRequest(Query):
    id: UUID
    user_id: UUID


class ListOrdersRequest(PageQuery):
    user_id: UUID


class AddOrderItemRequest(Command, OrderItemInput):
    order_id: UUID
    user_id: UUID


class RemoveOrderItemRequest(Command):
    order_id: UUID
    item_id: UUID
    user_id: UUID


class CancelOrderRequest(Command):
    order_id: UUID
    user_id: UUID


class OrderItemResponse(BaseModel):
    id: UUID
    product: str
    unit_price: Decimal
    quantity: int
    subtotal: Decimal


class OrderResponse(BaseModel):
    id: UUID
    user_id: UUID
    currency: str
    status: OrderStatus
    items: list[OrderItemResponse]
    total: Decimal
    created_at: datetime
    updated_at: datetime
