"""
Domain entities.

Entities are objects that have an identity and lifecycle. Two entities with
identical attributes but different identities are different entities.
"""

from .customer import Customer
from .order import Order
from .order_item import OrderItem

__all__ = [
    "Customer",
    "Order",
    "OrderItem",
]
