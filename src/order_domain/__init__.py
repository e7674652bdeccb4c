"""order-domain - Order and Customer domain model with a typed error taxonomy.

This package is a synchronous, in-memory domain core: self-validating value
objects (Email, Price, OrderId, CustomerId), the Customer entity, and the
Order aggregate root with its status lifecycle. Every rule violation is
raised as one of five DomainError kinds.

Example:
    >>> from order_domain import Email, Order, OrderItem, Price
    >>> order = Order.create(
    ...     Email.create("customer@example.com"),
    ...     [OrderItem("prod-1", "Product 1", 2, Price.create(10, "EUR"))],
    ... )
    >>> order.confirm()
    >>> str(order.calculate_total())
    '20.00 EUR'
"""

from .__version__ import __version__
from .core.domain import (
    Currency,
    Customer,
    CustomerId,
    Email,
    Order,
    OrderId,
    OrderItem,
    OrderStatus,
    Price,
)
from .core.errors import (
    BusinessRuleViolationError,
    ConflictError,
    DomainError,
    InvalidStateError,
    NotFoundError,
    ValidationError,
    ValidationFailure,
)
from .utils.settings import Settings, load_settings

__all__ = [
    "BusinessRuleViolationError",
    "ConflictError",
    "Currency",
    "Customer",
    "CustomerId",
    "DomainError",
    "Email",
    "InvalidStateError",
    "NotFoundError",
    "Order",
    "OrderId",
    "OrderItem",
    "OrderStatus",
    "Price",
    "Settings",
    "ValidationError",
    "ValidationFailure",
    "__version__",
    "load_settings",
]
