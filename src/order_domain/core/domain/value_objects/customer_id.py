import uuid
from dataclasses import dataclass

from ...errors import ValidationError


@dataclass(frozen=True)
class CustomerId:
    """Value object identifying a Customer. Any non-empty string is accepted."""

    value: str

    def __post_init__(self):
        if not isinstance(self.value, str) or not self.value.strip():
            raise ValidationError.single(
                "CustomerId", "value", "CustomerId cannot be empty"
            )

    @classmethod
    def create(cls, value: str) -> "CustomerId":
        return cls(value)

    @classmethod
    def generate(cls) -> "CustomerId":
        return cls.create(str(uuid.uuid4()))

    def equals(self, other: "CustomerId") -> bool:
        return self == other

    def __str__(self) -> str:
        return self.value

    def __repr__(self) -> str:
        return f"CustomerId('{self.value}')"
