from dataclasses import dataclass, replace
from numbers import Integral

from ...errors import ValidationError
from ..value_objects.price import Price


@dataclass(frozen=True)
class OrderItem:
    """
    A line of an Order: a product, how many of it, and its unit price.

    Items have no identity of their own; within an order they are unique by
    product_id. They are frozen so that an order can hand them out without
    exposing its internal state.
    """

    product_id: str
    product_name: str
    quantity: int
    unit_price: Price

    def __post_init__(self):
        if not isinstance(self.product_id, str) or not self.product_id.strip():
            raise ValidationError.single(
                "OrderItem", "product_id", "Product id cannot be empty"
            )
        if (
            isinstance(self.quantity, bool)
            or not isinstance(self.quantity, Integral)
            or self.quantity <= 0
        ):
            raise ValidationError.single(
                "OrderItem", "quantity", "Must be a positive integer", self.quantity
            )
        if not isinstance(self.unit_price, Price):
            raise ValidationError.single(
                "OrderItem", "unit_price", "Must be a Price", self.unit_price
            )

    def subtotal(self) -> Price:
        """Get unit_price * quantity."""
        return self.unit_price.multiply(self.quantity)

    def with_additional_quantity(self, quantity: int) -> "OrderItem":
        """Return a copy of this line with quantity increased, keeping its price."""
        return replace(self, quantity=self.quantity + quantity)
