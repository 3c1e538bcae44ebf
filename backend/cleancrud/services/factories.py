"""Factories — pure mapping between request/response DTOs and aggregates.

Invariants:
    - No IO, no hashing, no clock reads beyond what aggregates do themselves
    - Value objects are built here, so malformed input surfaces as DomainRuleError
"""

from cleancrud.core.domain_types import UserId
from cleancrud.core.orders import Order, OrderItem, clean_product
from cleancrud.core.users import User
from cleancrud.core.value_objects import Email, Money, Name, Quantity
from cleancrud.schemas.auth import CurrentUser
from cleancrud.schemas.orders import (
    AddOrderRequest, OrderItemInput, OrderItemResponse, OrderResponse,
)
from cleancrud.schemas.users import AddUserRequest, UserResponse


# ─── users ───────────────────────────────────────────────────────

def build_user(request: AddUserRequest, password_hash: str) -> User:
    return User(
        name=Name(request.first_name, request.last_name),
        email=Email(request.email),
        password_hash=password_hash,
    )


def user_response(user: User) -> UserResponse:
    return UserResponse(
        id=user.id,
        first_name=user.name.first,
        last_name=user.name.last,
        full_name=user.name.full,
        email=user.email.value,
        role=user.role,
        status=user.status,
        created_at=user.created_at,
        updated_at=user.updated_at,
    )


def current_user(user: User) -> CurrentUser:
    return CurrentUser(
        id=user.id, email=user.email.value,
        full_name=user.name.full, role=user.role,
    )


# ─── orders ──────────────────────────────────────────────────────

def order_line(item: OrderItemInput, currency: str) -> tuple[str, Money, Quantity]:
    return (
        clean_product(item.product),
        Money(item.unit_price, currency),
        Quantity(item.quantity),
    )


def build_order(request: AddOrderRequest) -> Order:
    return Order.place(
        user_id=UserId(request.user_id),
        currency=request.currency,
        lines=[order_line(item, request.currency) for item in request.items],
    )


def order_item_response(item: OrderItem) -> OrderItemResponse:
    return OrderItemResponse(
        id=item.id,
        product=item.product,
        unit_price=item.unit_price.amount,
        quantity=item.quantity.value,
        subtotal=item.subtotal.amount,
    )


def order_response(order: Order) -> OrderResponse:
    return OrderResponse(
        id=order.id,
        user_id=order.user_id,
        currency=order.currency,
        status=order.status,
        items=[order_item_response(item) for item in order.items],
        total=order.total.amount,
        created_at=order.created_at,
        updated_at=order.updated_at,
    )
