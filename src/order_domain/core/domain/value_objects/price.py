import math
from dataclasses import dataclass
from numbers import Real
from typing import Union

from ...errors import BusinessRuleViolationError, ValidationError
from .currency import Currency


def _round_to_cents(amount: float) -> float:
    """Round half up on the cent boundary."""
    return math.floor(amount * 100 + 0.5) / 100


def _as_finite_float(value, field: str, message: str) -> float:
    """Convert a real number to a float that survives scaling to cents."""
    if isinstance(value, bool) or not isinstance(value, Real):
        raise ValidationError.single("Price", field, message, value)
    try:
        converted = float(value)
    except OverflowError:
        raise ValidationError.single("Price", field, message, value) from None
    if not math.isfinite(converted * 100):
        raise ValidationError.single("Price", field, message, value)
    return converted


@dataclass(frozen=True)
class Price:
    """
    Value object representing a monetary amount in a given currency.

    Prices are immutable: arithmetic returns new instances. The amount is
    always finite, non-negative, and rounded to two decimal places.
    """

    amount: float
    currency: Currency

    def __post_init__(self):
        message = "Must be a non-negative finite number"
        amount = _as_finite_float(self.amount, "amount", message)
        if amount < 0:
            raise ValidationError.single("Price", "amount", message, self.amount)

        object.__setattr__(self, "amount", _round_to_cents(amount))
        object.__setattr__(self, "currency", Currency.parse(self.currency))

    @classmethod
    def create(cls, amount: float, currency: Union[Currency, str]) -> "Price":
        """Create a Price, validating the amount and rounding it to cents."""
        return cls(amount, currency)

    @classmethod
    def zero(cls, currency: Union[Currency, str] = Currency.USD) -> "Price":
        return cls.create(0, currency)

    def add(self, other: "Price") -> "Price":
        """Add two prices. Only prices in the same currency can be added."""
        if self.currency != other.currency:
            raise BusinessRuleViolationError(
                "CurrencyMatch",
                "Cannot add prices with different currencies",
                {
                    "currency1": self.currency.value,
                    "currency2": other.currency.value,
                },
            )
        return Price.create(self.amount + other.amount, self.currency)

    def multiply(self, quantity: int) -> "Price":
        """Multiply the price by a non-negative whole quantity."""
        message = "Must be a non-negative integer"
        factor = _as_finite_float(quantity, "quantity", message)
        if not factor.is_integer() or factor < 0:
            raise ValidationError.single("Price", "quantity", message, quantity)
        return Price.create(self.amount * factor, self.currency)

    def equals(self, other: "Price") -> bool:
        return self == other

    def __str__(self) -> str:
        return f"{self.amount:.2f} {self.currency.value}"
