"""Pytest configuration for the order_domain tests."""

import logging
from datetime import datetime, timezone

import pytest

from order_domain.core.domain.entities.order_item import OrderItem
from order_domain.core.domain.value_objects.email import Email
from order_domain.core.domain.value_objects.price import Price


@pytest.fixture
def customer_email() -> Email:
    return Email.create("customer@example.com")


@pytest.fixture
def sample_items():
    """Two EUR lines: 2 x 10 EUR and 1 x 20 EUR."""
    return [
        OrderItem(
            product_id="prod-1",
            product_name="Product 1",
            quantity=2,
            unit_price=Price.create(10, "EUR"),
        ),
        OrderItem(
            product_id="prod-2",
            product_name="Product 2",
            quantity=1,
            unit_price=Price.create(20, "EUR"),
        ),
    ]


@pytest.fixture
def fixed_created_at() -> datetime:
    return datetime(2024, 1, 1, tzinfo=timezone.utc)


@pytest.fixture
def restore_root_logger():
    """Restore root logger handlers and level changed by configure_logging."""
    root_logger = logging.getLogger()
    original_handlers = root_logger.handlers[:]
    original_level = root_logger.level

    yield root_logger

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
        if handler not in original_handlers:
            handler.close()
    for handler in original_handlers:
        root_logger.addHandler(handler)
    root_logger.setLevel(original_level)
