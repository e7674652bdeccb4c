from enum import Enum
from typing import Any

from ...errors import ValidationError


class OrderStatus(str, Enum):
    """Lifecycle states of an Order."""

    PENDING = "PENDING"
    CONFIRMED = "CONFIRMED"
    SHIPPED = "SHIPPED"
    DELIVERED = "DELIVERED"
    CANCELLED = "CANCELLED"

    @classmethod
    def parse(cls, value: Any) -> "OrderStatus":
        """Create an OrderStatus from a member or its string value."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            raise ValidationError.single(
                "Order", "status", "Unknown order status", value
            ) from None

    @property
    def is_terminal(self) -> bool:
        """Check whether no further transitions are possible from this state."""
        return self in (OrderStatus.DELIVERED, OrderStatus.CANCELLED)

    def __str__(self) -> str:
        return self.value
