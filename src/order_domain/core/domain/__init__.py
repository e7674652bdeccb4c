"""Domain layer following Domain-Driven Design principles.

This layer contains the core business logic and domain concepts:
- Entities: Customer and the Order aggregate root
- Value Objects: Email, Price, Currency, OrderId, CustomerId, OrderStatus
"""

from .entities import Customer, Order, OrderItem
from .value_objects import (
    Currency,
    CustomerId,
    Email,
    OrderId,
    OrderStatus,
    Price,
)

__all__ = [
    "Currency",
    "Customer",
    "CustomerId",
    "Email",
    "Order",
    "OrderId",
    "OrderItem",
    "OrderStatus",
    "Price",
]
