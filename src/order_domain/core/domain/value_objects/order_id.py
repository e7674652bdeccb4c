import re
import uuid
from dataclasses import dataclass

from ...errors import ValidationError

UUID_V4_PATTERN = re.compile(
    r"[0-9a-f]{8}-[0-9a-f]{4}-4[0-9a-f]{3}-[89ab][0-9a-f]{3}-[0-9a-f]{12}",
    re.IGNORECASE,
)


@dataclass(frozen=True)
class OrderId:
    """
    Value object identifying an Order.

    Although it is an identifier, OrderId is a value object: it is immutable
    and compared by value. The Order that carries it is the entity.

    Format: UUID v4, case-insensitive
    Example: 3f2b8c1e-9d4a-4e7b-8a1c-2f6d5e4b3a21
    """

    value: str

    def __post_init__(self):
        if not isinstance(self.value, str) or not self.value.strip():
            raise ValidationError.single(
                "OrderId", "value", "OrderId cannot be empty"
            )
        if not UUID_V4_PATTERN.fullmatch(self.value):
            raise ValidationError.single(
                "OrderId",
                "value",
                "Invalid OrderId format (must be UUID v4)",
                self.value,
            )

    @classmethod
    def create(cls, value: str) -> "OrderId":
        """Create an OrderId from an existing UUID v4 string."""
        return cls(value)

    @classmethod
    def generate(cls) -> "OrderId":
        """Generate a fresh random OrderId."""
        return cls.create(str(uuid.uuid4()))

    def equals(self, other: "OrderId") -> bool:
        return self == other

    def __str__(self) -> str:
        return self.value

    def __repr__(self) -> str:
        return f"OrderId('{self.value}')"
