"""Order Aggregate — an order root owning its line items.

Invariants:
    - An order always has at least one item (creation and remove_item enforce it)
    - Items are added/removed only while the order is pending
    - Every item is priced in the order currency
    - Same product at the same unit price is one line (quantities merge)
    - At most MAX_ITEMS distinct lines per order
    - OrderItem is never handed out mutable: callers get a tuple view

Design Decisions:
    - OrderItem is an Entity (has an id, can be removed individually) but
      only Order may construct or change it
    - Business rule violations raise DomainRuleError; the mediator turns
      them into failed Results
"""

from datetime import datetime
from uuid import UUID

from cleancrud.core.domain_types import OrderItemId, OrderStatus, UserId
from cleancrud.core.entity import AggregateRoot, DomainRuleError, Entity
from cleancrud.core.value_objects import Money, Quantity

MAX_ITEMS = 50
PRODUCT_MAX_LENGTH = 200


def clean_product(product: str) -> str:
    cleaned = (product or "").strip()
    if not cleaned or len(cleaned) > PRODUCT_MAX_LENGTH:
        raise DomainRuleError.invalid(
            "INVALID_PRODUCT",
            f"product must be 1-{PRODUCT_MAX_LENGTH} characters",
            "product",
        )
    return cleaned


class OrderItem(Entity):
    """One order line — product, unit price and quantity."""

    def __init__(
        self,
        product: str,
        unit_price: Money,
        quantity: Quantity,
        id: UUID | None = None,
    ):
        super().__init__(id)
        self._product = clean_product(product)
        self._unit_price = unit_price
        self._quantity = quantity

    @property
    def product(self) -> str:
        return self._product

    @property
    def unit_price(self) -> Money:
        return self._unit_price

    @property
    def quantity(self) -> Quantity:
        return self._quantity

    @property
    def subtotal(self) -> Money:
        return self._unit_price * self._quantity.value

    def _absorb(self, quantity: Quantity) -> None:
        self._quantity = self._quantity + quantity


class Order(AggregateRoot):
    """Order aggregate root."""

    def __init__(
        self,
        user_id: UserId,
        currency: str,
        items: list[OrderItem],
        status: OrderStatus = OrderStatus.PENDING,
        id: UUID | None = None,
        created_at: datetime | None = None,
        updated_at: datetime | None = None,
    ):
        super().__init__(id, created_at, updated_at)
        if not items:
            raise DomainRuleError.broken(
                "ORDER_REQUIRES_ITEMS", "an order needs at least one item",
            )
        self._user_id = user_id
        self._currency = Money.zero(currency).currency
        self._status = OrderStatus(status)
        self._items: list[OrderItem] = []
        for item in items:
            self._check_currency(item.unit_price)
            self._items.append(item)
        if len(self._items) > MAX_ITEMS:
            raise DomainRuleError.broken(
                "TOO_MANY_ITEMS", f"an order holds at most {MAX_ITEMS} items",
            )

    @classmethod
    def place(
        cls, user_id: UserId, currency: str,
        lines: list[tuple[str, Money, Quantity]],
    ) -> "Order":
        """New pending order; repeated (product, price) lines merge into one item."""
        if not lines:
            raise DomainRuleError.broken(
                "ORDER_REQUIRES_ITEMS", "an order needs at least one item",
            )
        product, unit_price, quantity = lines[0]
        order = cls(user_id, currency, [OrderItem(product, unit_price, quantity)])
        for product, unit_price, quantity in lines[1:]:
            order._merge_line(product, unit_price, quantity)
        return order

    @property
    def user_id(self) -> UserId:
        return self._user_id

    @property
    def currency(self) -> str:
        return self._currency

    @property
    def status(self) -> OrderStatus:
        return self._status

    @property
    def items(self) -> tuple[OrderItem, ...]:
        return tuple(self._items)

    @property
    def is_pending(self) -> bool:
        return self._status == OrderStatus.PENDING

    @property
    def total(self) -> Money:
        total = Money.zero(self._currency)
        for item in self._items:
            total = total + item.subtotal
        return total

    def add_item(self, product: str, unit_price: Money, quantity: Quantity) -> OrderItem:
        """Add a line (or grow the matching one) and return the affected item."""
        self._require_pending()
        item = self._merge_line(product, unit_price, quantity)
        self._touch()
        return item

    def remove_item(self, item_id: OrderItemId) -> None:
        self._require_pending()
        item = self._find_item(item_id)
        if len(self._items) == 1:
            raise DomainRuleError.broken(
                "ORDER_REQUIRES_ITEMS",
                "cannot remove the last item; cancel the order instead",
            )
        self._items.remove(item)
        self._touch()

    def cancel(self) -> None:
        if self._status == OrderStatus.CANCELLED:
            raise DomainRuleError.broken(
                "ORDER_ALREADY_CANCELLED", "order is already cancelled",
            )
        self._status = OrderStatus.CANCELLED
        self._touch()

    # ─── internals ───────────────────────────────────────────────

    def _merge_line(self, product: str, unit_price: Money, quantity: Quantity) -> OrderItem:
        self._check_currency(unit_price)
        product = clean_product(product)
        for item in self._items:
            if item.product == product and item.unit_price == unit_price:
                item._absorb(quantity)
                return item
        if len(self._items) >= MAX_ITEMS:
            raise DomainRuleError.broken(
                "TOO_MANY_ITEMS", f"an order holds at most {MAX_ITEMS} items",
            )
        item = OrderItem(product, unit_price, quantity)
        self._items.append(item)
        return item

    def _find_item(self, item_id: OrderItemId) -> OrderItem:
        for item in self._items:
            if item.id == item_id:
                return item
        raise DomainRuleError.missing("ITEM_NOT_FOUND", f"Item '{item_id}' not found")

    def _check_currency(self, price: Money) -> None:
        if price.currency != self._currency:
            raise DomainRuleError.broken(
                "CURRENCY_MISMATCH",
                f"item priced in {price.currency}, order is in {self._currency}",
            )

    def _require_pending(self) -> None:
        if not self.is_pending:
            raise DomainRuleError.broken(
                "ORDER_NOT_PENDING", f"order is {self._status.value}; items are locked",
            )
