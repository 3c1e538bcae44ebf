"""Value Objects — verifies construction rules, normalization and arithmetic.

Tests:
    - Name: trimmed, 1-100 chars per part, field names in errors
    - Email: lower-cased, format checked
    - Money: quantized, non-negative, currencies never mix
    - Quantity: integer 1-10000
"""

from decimal import Decimal

import pytest

from cleancrud.core.entity import DomainRuleError
from cleancrud.core.result import ErrorKind
from cleancrud.core.value_objects import Email, Money, Name, Quantity


# ─── Name ────────────────────────────────────────────────────────

def test_name_is_trimmed():
    name = Name("  Ada ", " Lovelace")
    assert name.first == "Ada"
    assert name.last == "Lovelace"
    assert name.full == "Ada Lovelace"


def test_name_equality_by_value():
    assert Name("Ada", "Lovelace") == Name("Ada ", "Lovelace")


@pytest.mark.parametrize("first,last,field", [
    ("", "Lovelace", "first_name"),
    ("Ada", "   ", "last_name"),
    ("x" * 101, "Lovelace", "first_name"),
])
def test_invalid_name_reports_field(first, last, field):
    with pytest.raises(DomainRuleError) as exc:
        Name(first, last)
    assert exc.value.error.code == "INVALID_NAME"
    assert exc.value.error.field == field
    assert exc.value.error.kind == ErrorKind.VALIDATION


# ─── Email ───────────────────────────────────────────────────────

def test_email_is_lower_cased():
    assert Email(" Ada@Example.COM ").value == "ada@example.com"
    assert str(Email("a@b.io")) == "a@b.io"


@pytest.mark.parametrize("value", ["", "ada", "ada@", "@example.com", "a b@c.io", "a@b"])
def test_invalid_email(value):
    with pytest.raises(DomainRuleError) as exc:
        Email(value)
    assert exc.value.error.code == "INVALID_EMAIL"
    assert exc.value.error.field == "email"


def test_email_length_limit():
    with pytest.raises(DomainRuleError):
        Email("a" * 250 + "@x.io")


# ─── Money ───────────────────────────────────────────────────────

def test_money_quantizes_to_cents():
    money = Money(Decimal("9.999"), "usd")
    assert money.amount == Decimal("10.00")
    assert money.currency == "USD"
    assert money.cents == 1000


def test_money_from_cents():
    assert Money.from_cents(1999, "EUR") == Money(Decimal("19.99"), "EUR")


def test_money_rejects_negative():
    with pytest.raises(DomainRuleError) as exc:
        Money(Decimal("-0.01"), "USD")
    assert exc.value.error.code == "INVALID_AMOUNT"


def test_money_rejects_garbage_amount():
    with pytest.raises(DomainRuleError) as exc:
        Money("abc", "USD")
    assert exc.value.error.code == "INVALID_AMOUNT"


@pytest.mark.parametrize("amount", ["NaN", "sNaN", "Infinity", "-Infinity"])
def test_money_rejects_non_finite_amount(amount):
    with pytest.raises(DomainRuleError) as exc:
        Money(Decimal(amount), "USD")
    assert exc.value.error.code == "INVALID_AMOUNT"
    assert exc.value.error.field == "unit_price"


@pytest.mark.parametrize("currency", ["", "US", "DOLLAR", "12$"])
def test_money_rejects_bad_currency(currency):
    with pytest.raises(DomainRuleError) as exc:
        Money(Decimal("1"), currency)
    assert exc.value.error.code == "INVALID_CURRENCY"


def test_money_adds_same_currency():
    total = Money(Decimal("1.10"), "USD") + Money(Decimal("2.25"), "USD")
    assert total == Money(Decimal("3.35"), "USD")


def test_money_refuses_to_mix_currencies():
    with pytest.raises(DomainRuleError) as exc:
        Money(Decimal("1"), "USD") + Money(Decimal("1"), "EUR")
    assert exc.value.error.code == "CURRENCY_MISMATCH"
    assert exc.value.error.kind == ErrorKind.BUSINESS_RULE


def test_money_multiplies_by_int():
    assert Money(Decimal("2.50"), "USD") * 3 == Money(Decimal("7.50"), "USD")


def test_money_zero():
    assert Money.zero("GBP").amount == Decimal("0.00")


# ─── Quantity ────────────────────────────────────────────────────

def test_quantity_bounds():
    assert Quantity(1).value == 1
    assert Quantity(10_000).value == 10_000


@pytest.mark.parametrize("value", [0, -1, 10_001, True, 1.5])
def test_invalid_quantity(value):
    with pytest.raises(DomainRuleError) as exc:
        Quantity(value)
    assert exc.value.error.code == "INVALID_QUANTITY"
    assert exc.value.error.field == "quantity"


def test_quantities_add_and_stay_bounded():
    assert Quantity(2) + Quantity(3) == Quantity(5)
    with pytest.raises(DomainRuleError):
        Quantity(9_999) + Quantity(2)
