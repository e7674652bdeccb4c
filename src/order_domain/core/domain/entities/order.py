import logging
from datetime import datetime, timezone
from typing import Dict, Iterable, List, Sequence, Tuple, Union

from ...errors import InvalidStateError, ValidationError
from ..value_objects.currency import Currency
from ..value_objects.email import Email
from ..value_objects.order_id import OrderId
from ..value_objects.order_status import OrderStatus
from ..value_objects.price import Price
from .order_item import OrderItem

logger = logging.getLogger(__name__)

DEFAULT_CURRENCY = Currency.USD

# action -> (states the action is allowed from, resulting state)
TRANSITIONS: Dict[str, Tuple[Tuple[OrderStatus, ...], OrderStatus]] = {
    "confirm": ((OrderStatus.PENDING,), OrderStatus.CONFIRMED),
    "ship": ((OrderStatus.CONFIRMED,), OrderStatus.SHIPPED),
    "deliver": ((OrderStatus.SHIPPED,), OrderStatus.DELIVERED),
    "cancel": (
        (OrderStatus.PENDING, OrderStatus.CONFIRMED, OrderStatus.SHIPPED),
        OrderStatus.CANCELLED,
    ),
}


def _merge_item(items: List[OrderItem], item: OrderItem) -> None:
    """Append item, or add its quantity to the line with the same product_id."""
    if not isinstance(item, OrderItem):
        raise ValidationError.single("Order", "items", "Must be an OrderItem", item)

    for index, existing in enumerate(items):
        if existing.product_id == item.product_id:
            # The existing line keeps its unit price.
            items[index] = existing.with_additional_quantity(item.quantity)
            return
    items.append(item)


def _owned_items(items: Iterable[OrderItem]) -> List[OrderItem]:
    owned: List[OrderItem] = []
    for item in items:
        _merge_item(owned, item)
    return owned


class Order:
    """
    Order aggregate root.

    Invariants enforced by the aggregate:
    1. An order created through ``create`` has at least one item
    2. Each product_id appears at most once among the items
    3. Status only changes along the lifecycle
       PENDING -> CONFIRMED -> SHIPPED -> DELIVERED, with CANCELLED reachable
       from every non-terminal state
    4. Items can only be added while the order is PENDING

    The order references its customer through an Email only, never through a
    Customer object. Equality is by OrderId.

    Instances are not thread-safe. Hosts that share one order between
    concurrent requests must serialize access per OrderId themselves.
    """

    def __init__(
        self,
        id: OrderId,
        customer_email: Email,
        items: Sequence[OrderItem],
        status: Union[OrderStatus, str],
        created_at: datetime,
    ):
        self._id = id
        self._customer_email = customer_email
        self._items = _owned_items(items)
        self._status = OrderStatus.parse(status)
        self._created_at = created_at

    @classmethod
    def create(cls, customer_email: Email, items: Iterable[OrderItem]) -> "Order":
        """Create a new PENDING order with a generated identity."""
        owned = _owned_items(items)
        if not owned:
            raise ValidationError.single(
                "Order", "items", "Order must have at least one item"
            )

        order = cls(
            id=OrderId.generate(),
            customer_email=customer_email,
            items=owned,
            status=OrderStatus.PENDING,
            created_at=datetime.now(timezone.utc),
        )
        logger.debug(f"Created order {order.id} with {order.item_count} item(s)")
        return order

    @classmethod
    def reconstitute(
        cls,
        id: OrderId,
        customer_email: Email,
        items: Sequence[OrderItem],
        status: Union[OrderStatus, str],
        created_at: datetime,
    ) -> "Order":
        """Rebuild an existing order (e.g. loaded from a database) in any state."""
        return cls(
            id=id,
            customer_email=customer_email,
            items=items,
            status=status,
            created_at=created_at,
        )

    @property
    def id(self) -> OrderId:
        return self._id

    @property
    def customer_email(self) -> Email:
        return self._customer_email

    @property
    def items(self) -> List[OrderItem]:
        """Get a copy of the order lines; changing it does not affect the order."""
        return list(self._items)

    @property
    def item_count(self) -> int:
        return len(self._items)

    @property
    def status(self) -> OrderStatus:
        return self._status

    @property
    def created_at(self) -> datetime:
        return self._created_at

    def calculate_total(self, default_currency: Currency = DEFAULT_CURRENCY) -> Price:
        """
        Sum unit_price * quantity over all lines.

        All lines must share one currency; mixing currencies raises
        BusinessRuleViolationError from Price.add. An order without lines
        totals zero in ``default_currency``.
        """
        if not self._items:
            return Price.zero(default_currency)

        first, *rest = self._items
        total = first.subtotal()
        for item in rest:
            total = total.add(item.subtotal())
        return total

    def confirm(self) -> None:
        self._transition("confirm")

    def ship(self) -> None:
        self._transition("ship")

    def deliver(self) -> None:
        self._transition("deliver")

    def cancel(self) -> None:
        if self._status == OrderStatus.CANCELLED:
            # Already terminal: no allowed-states hint.
            raise InvalidStateError("Order", self._status.value, "cancel")
        self._transition("cancel")

    def add_item(self, item: OrderItem) -> None:
        """
        Add a line to a PENDING order.

        If the product is already in the order, its quantity is increased and
        the existing unit price is kept; otherwise the item is appended.
        """
        if self._status != OrderStatus.PENDING:
            raise InvalidStateError(
                "Order",
                self._status.value,
                "add items",
                [OrderStatus.PENDING.value],
            )
        _merge_item(self._items, item)
        logger.debug(f"Order {self._id}: added {item.quantity} x {item.product_id}")

    def _transition(self, action: str) -> None:
        allowed, target = TRANSITIONS[action]
        if self._status not in allowed:
            raise InvalidStateError(
                "Order",
                self._status.value,
                action,
                [state.value for state in allowed],
            )
        previous = self._status
        self._status = target
        logger.debug(f"Order {self._id}: {previous.value} -> {target.value}")

    def equals(self, other: "Order") -> bool:
        return self == other

    def __eq__(self, other) -> bool:
        """Equality based on entity identity (id)."""
        if not isinstance(other, Order):
            return False
        return self._id == other._id

    def __hash__(self) -> int:
        """Hash based on entity identity (id)."""
        return hash(self._id)

    def __str__(self) -> str:
        return (
            f"Order {self._id} - Status: {self._status.value} - "
            f"Total: {self.calculate_total()}"
        )

    def __repr__(self) -> str:
        return f"Order(id={self._id!r}, status={self._status.value}, items={self.item_count})"
