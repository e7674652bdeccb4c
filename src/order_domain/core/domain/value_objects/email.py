import re
from dataclasses import dataclass

from ...errors import ValidationError

EMAIL_PATTERN = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")


@dataclass(frozen=True)
class Email:
    """
    Value object representing a valid, normalized e-mail address.

    The address is trimmed and lower-cased on construction, so two Email
    instances built from "User@Example.com " and "user@example.com" are equal.
    """

    value: str

    def __post_init__(self):
        if not isinstance(self.value, str):
            raise ValidationError.single(
                "Email", "value", "Email must be a string", self.value
            )

        normalized = self.value.strip().lower()
        if not normalized:
            raise ValidationError.single("Email", "value", "Email cannot be empty")

        if not EMAIL_PATTERN.fullmatch(normalized):
            raise ValidationError.single(
                "Email", "value", "Invalid email format", self.value
            )

        object.__setattr__(self, "value", normalized)

    @classmethod
    def create(cls, value: str) -> "Email":
        """Create an Email, normalizing and validating the raw input."""
        return cls(value)

    @property
    def domain(self) -> str:
        """Get the part of the address after the '@'."""
        return self.get_domain()

    def get_domain(self) -> str:
        _, sep, domain = self.value.partition("@")
        return domain if sep else ""

    def equals(self, other: "Email") -> bool:
        return self == other

    def __str__(self) -> str:
        return self.value
