"""Factories — verifies DTO <-> aggregate mapping."""

from decimal import Decimal
from uuid import uuid4

import pytest

from cleancrud.core.domain_types import OrderStatus, UserRole
from cleancrud.core.entity import DomainRuleError
from cleancrud.schemas.orders import AddOrderRequest, OrderItemInput
from cleancrud.schemas.users import AddUserRequest
from cleancrud.services.factories import (
    build_order, build_user, current_user, order_line, order_response, user_response,
)


def _add_user(email="Ada@Example.com") -> AddUserRequest:
    return AddUserRequest(
        first_name=" Ada ", last_name="Lovelace", email=email, password="secret123",
    )


def test_build_user_normalizes_fields():
    user = build_user(_add_user(), "hash")
    assert user.name.first == "Ada"
    assert user.email.value == "ada@example.com"
    assert user.password_hash == "hash"
    assert user.role == UserRole.USER


def test_build_user_surfaces_domain_errors():
    with pytest.raises(DomainRuleError):
        build_user(_add_user(email="not-an-email"), "hash")


def test_user_response_never_carries_password():
    response = user_response(build_user(_add_user(), "hash"))
    assert response.full_name == "Ada Lovelace"
    assert "password" not in response.model_dump()
    assert "password_hash" not in response.model_dump()


def test_current_user():
    user = build_user(_add_user(), "hash")
    assert current_user(user).id == user.id
    assert not current_user(user).is_admin


def test_order_line():
    item = OrderItemInput(product="Pen", unit_price="1.5", quantity=2)
    product, price, quantity = order_line(item, "EUR")
    assert product == "Pen"
    assert price.amount == Decimal("1.50")
    assert price.currency == "EUR"
    assert quantity.value == 2


def test_order_line_strips_product():
    item = OrderItemInput(product="  Pen ", unit_price="1", quantity=1)
    assert order_line(item, "EUR")[0] == "Pen"


def test_order_line_rejects_blank_product():
    item = OrderItemInput(product="   ", unit_price="1", quantity=1)
    with pytest.raises(DomainRuleError) as exc:
        order_line(item, "EUR")
    assert exc.value.error.code == "INVALID_PRODUCT"
    assert exc.value.error.field == "product"


def test_build_order_and_response():
    request = AddOrderRequest(
        user_id=uuid4(),
        currency="usd",
        items=[
            {"product": "Pen", "unit_price": "1.50", "quantity": 2},
            {"product": "Pen", "unit_price": "1.50", "quantity": 1},
        ],
    )
    order = build_order(request)
    response = order_response(order)
    assert response.currency == "USD"
    assert response.status == OrderStatus.PENDING
    assert len(response.items) == 1
    assert response.items[0].quantity == 3
    assert response.items[0].subtotal == Decimal("4.50")
    assert response.total == Decimal("4.50")
