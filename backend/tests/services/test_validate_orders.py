"""Order Validators — verifies ordering policy and per-line validation."""

from decimal import Decimal
from uuid import uuid4

from cleancrud.core.domain_types import UserStatus
from cleancrud.core.orders import Order
from cleancrud.core.result import ErrorKind
from cleancrud.core.value_objects import Money, Quantity
from cleancrud.schemas.orders import (
    AddOrderItemRequest, AddOrderRequest, CancelOrderRequest,
)


def _codes(errors) -> list[str]:
    return [e.code for e in errors]


def _add_order(user_id, *items, currency="USD") -> AddOrderRequest:
    items = items or ({"product": "Pen", "unit_price": "1.00", "quantity": 1},)
    return AddOrderRequest(user_id=user_id, currency=currency, items=list(items))


async def _seed_order(orders, test_db, owner_id, currency="USD") -> Order:
    order = Order.place(
        owner_id, currency, [("Pen", Money(Decimal("1"), currency), Quantity(1))],
    )
    await orders.add(order)
    await test_db.commit()
    return order


async def test_add_order_valid(order_validators, seed_user):
    user = await seed_user()
    assert await order_validators.add_order(_add_order(user.id)) == []


async def test_add_order_unknown_user(order_validators):
    errors = await order_validators.add_order(_add_order(uuid4()))
    assert _codes(errors) == ["USER_NOT_FOUND"]


async def test_add_order_inactive_user(order_validators, seed_user):
    user = await seed_user(status=UserStatus.INACTIVE)
    errors = await order_validators.add_order(_add_order(user.id))
    assert _codes(errors) == ["USER_INACTIVE"]
    assert errors[0].kind == ErrorKind.BUSINESS_RULE


async def test_add_order_bad_currency(order_validators, seed_user):
    user = await seed_user()
    errors = await order_validators.add_order(_add_order(user.id, currency="1$A"))
    assert _codes(errors) == ["INVALID_CURRENCY"]


async def test_add_order_indexes_line_errors(order_validators, seed_user):
    user = await seed_user()
    errors = await order_validators.add_order(_add_order(
        user.id,
        {"product": "Pen", "unit_price": "1.00", "quantity": 1},
        {"product": "   ", "unit_price": "1.00", "quantity": 1},
    ))
    assert _codes(errors) == ["INVALID_PRODUCT"]
    assert errors[0].field == "items.1.product"


async def test_foreign_order_is_not_found(order_validators, orders, seed_user, test_db):
    owner = await seed_user()
    intruder = await seed_user("eve@example.com")
    order = await _seed_order(orders, test_db, owner.id)
    errors = await order_validators.change_order(
        CancelOrderRequest(order_id=order.id, user_id=intruder.id),
    )
    assert _codes(errors) == ["ORDER_NOT_FOUND"]


async def test_owner_may_change_order(order_validators, orders, seed_user, test_db):
    owner = await seed_user()
    order = await _seed_order(orders, test_db, owner.id)
    errors = await order_validators.change_order(
        CancelOrderRequest(order_id=order.id, user_id=owner.id),
    )
    assert errors == []


async def test_add_item_checks_line(order_validators, orders, seed_user, test_db):
    owner = await seed_user()
    order = await _seed_order(orders, test_db, owner.id)
    errors = await order_validators.add_order_item(AddOrderItemRequest(
        order_id=order.id, user_id=owner.id, product="  ", unit_price="1", quantity=1,
    ))
    assert _codes(errors) == ["INVALID_PRODUCT"]
