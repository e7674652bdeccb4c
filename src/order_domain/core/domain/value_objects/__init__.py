"""
Value objects for the domain layer.

Value objects are immutable objects that are defined by their attributes
rather than their identity. They validate themselves on construction, so an
instance is always in a valid state.
"""

from .currency import Currency, is_currency
from .customer_id import CustomerId
from .email import Email
from .order_id import OrderId
from .order_status import OrderStatus
from .price import Price

__all__ = [
    "Currency",
    "CustomerId",
    "Email",
    "OrderId",
    "OrderStatus",
    "Price",
    "is_currency",
]
