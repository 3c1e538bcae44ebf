"""Ordering Policy — verifies the cross-aggregate rules."""

from decimal import Decimal
from uuid import uuid4

from cleancrud.core.domain_types import UserStatus
from cleancrud.core.ordering_policy import check_can_access_order, check_can_place_order
from cleancrud.core.orders import Order
from cleancrud.core.result import ErrorKind
from cleancrud.core.users import User
from cleancrud.core.value_objects import Email, Money, Name, Quantity


def _user(status=UserStatus.ACTIVE) -> User:
    return User(Name("Ada", "Lovelace"), Email("ada@example.com"), "hash", status=status)


def _order(owner) -> Order:
    return Order.place(owner, "USD", [("Pen", Money(Decimal("1"), "USD"), Quantity(1))])


def test_active_user_may_order():
    assert check_can_place_order(_user()) is None


def test_missing_user_is_not_found():
    error = check_can_place_order(None)
    assert error.code == "USER_NOT_FOUND"
    assert error.kind == ErrorKind.NOT_FOUND


def test_inactive_user_may_not_order():
    error = check_can_place_order(_user(UserStatus.INACTIVE))
    assert error.code == "USER_INACTIVE"
    assert error.kind == ErrorKind.BUSINESS_RULE


def test_owner_may_access_order():
    owner = uuid4()
    assert check_can_access_order(_order(owner), owner) is None


def test_foreign_order_looks_missing():
    foreign = check_can_access_order(_order(uuid4()), uuid4())
    missing = check_can_access_order(None, uuid4())
    assert foreign == missing
    assert foreign.code == "ORDER_NOT_FOUND"
