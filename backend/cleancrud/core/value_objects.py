"""Value Objects — immutable, identity-free, compared by value.

Invariants:
    - Constructed valid or not at all (DomainRuleError from __post_init__)
    - Never mutated: operations return a new instance
    - Money is always quantized to 2 decimals; currencies never mix

Design Decisions:
    - frozen dataclasses: equality, hashing and immutability for free
    - Normalization (strip, lower-case, quantize) happens on construction
      via object.__setattr__, the documented escape hatch for frozen dataclasses
"""

import re
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP

from cleancrud.core.entity import DomainRuleError

NAME_MAX_LENGTH = 100
EMAIL_MAX_LENGTH = 254
MAX_QUANTITY = 10_000

_EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[A-Za-z]{2,}$")
_CURRENCY_PATTERN = re.compile(r"^[A-Z]{3}$")
_CENT = Decimal("0.01")


@dataclass(frozen=True)
class Name:
    """Person name — first and last part, each 1-100 chars."""
    first: str
    last: str

    def __post_init__(self):
        for part, value in (("first", self.first), ("last", self.last)):
            cleaned = (value or "").strip()
            if not cleaned:
                raise DomainRuleError.invalid(
                    "INVALID_NAME", f"{part} name cannot be empty", f"{part}_name",
                )
            if len(cleaned) > NAME_MAX_LENGTH:
                raise DomainRuleError.invalid(
                    "INVALID_NAME",
                    f"{part} name exceeds {NAME_MAX_LENGTH} characters",
                    f"{part}_name",
                )
            object.__setattr__(self, part, cleaned)

    @property
    def full(self) -> str:
        return f"{self.first} {self.last}"


@dataclass(frozen=True)
class Email:
    """E-mail address — stored lower-cased."""
    value: str

    def __post_init__(self):
        cleaned = (self.value or "").strip().lower()
        if len(cleaned) > EMAIL_MAX_LENGTH or not _EMAIL_PATTERN.match(cleaned):
            raise DomainRuleError.invalid(
                "INVALID_EMAIL", f"'{self.value}' is not a valid e-mail address", "email",
            )
        object.__setattr__(self, "value", cleaned)

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Money:
    """Non-negative amount in a single ISO-4217 currency."""
    amount: Decimal
    currency: str

    def __post_init__(self):
        try:
            amount = Decimal(str(self.amount)).quantize(_CENT, rounding=ROUND_HALF_UP)
        except (InvalidOperation, ValueError):
            amount = None
        # NaN survives quantize
        if amount is None or not amount.is_finite():
            raise DomainRuleError.invalid(
                "INVALID_AMOUNT", f"'{self.amount}' is not a valid amount", "unit_price",
            )
        if amount < 0:
            raise DomainRuleError.invalid(
                "INVALID_AMOUNT", "amount cannot be negative", "unit_price",
            )
        currency = (self.currency or "").strip().upper()
        if not _CURRENCY_PATTERN.match(currency):
            raise DomainRuleError.invalid(
                "INVALID_CURRENCY", f"'{self.currency}' is not a currency code", "currency",
            )
        object.__setattr__(self, "amount", amount)
        object.__setattr__(self, "currency", currency)

    @classmethod
    def zero(cls, currency: str) -> "Money":
        return cls(Decimal("0"), currency)

    @classmethod
    def from_cents(cls, cents: int, currency: str) -> "Money":
        return cls(Decimal(cents) / 100, currency)

    @property
    def cents(self) -> int:
        return int(self.amount * 100)

    def __add__(self, other: "Money") -> "Money":
        if not isinstance(other, Money):
            return NotImplemented
        if other.currency != self.currency:
            raise DomainRuleError.broken(
                "CURRENCY_MISMATCH",
                f"cannot add {other.currency} to {self.currency}",
            )
        return Money(self.amount + other.amount, self.currency)

    def __mul__(self, factor: int) -> "Money":
        if not isinstance(factor, int):
            return NotImplemented
        return Money(self.amount * factor, self.currency)

    def __str__(self) -> str:
        return f"{self.amount} {self.currency}"


@dataclass(frozen=True)
class Quantity:
    """Units of a product on one order line — 1 to 10 000."""
    value: int

    def __post_init__(self):
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise DomainRuleError.invalid(
                "INVALID_QUANTITY", "quantity must be an integer", "quantity",
            )
        if not 1 <= self.value <= MAX_QUANTITY:
            raise DomainRuleError.invalid(
                "INVALID_QUANTITY",
                f"quantity must be between 1 and {MAX_QUANTITY}",
                "quantity",
            )

    def __add__(self, other: "Quantity") -> "Quantity":
        if not isinstance(other, Quantity):
            return NotImplemented
        return Quantity(self.value + other.value)
