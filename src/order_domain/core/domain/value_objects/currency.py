from enum import Enum
from typing import Any

from ...errors import ValidationError


class Currency(str, Enum):
    """Enumeration of the currencies a Price can be expressed in."""

    USD = "USD"
    EUR = "EUR"
    GBP = "GBP"
    JPY = "JPY"

    @classmethod
    def parse(cls, value: Any) -> "Currency":
        """Create a Currency from a member or its ISO code."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str) and is_currency(value):
            return cls(value)
        valid = ", ".join(c.value for c in cls)
        raise ValidationError.single(
            "Currency",
            "code",
            f"Invalid currency. Valid currencies are: {valid}",
            value,
        )

    def __str__(self) -> str:
        return self.value


def is_currency(value: str) -> bool:
    """Check whether a string is one of the supported currency codes."""
    return value in Currency._value2member_map_
