import logging
from datetime import datetime, timezone

from ...errors import InvalidStateError, ValidationError
from ..value_objects.customer_id import CustomerId
from ..value_objects.email import Email

logger = logging.getLogger(__name__)


def _validated_name(name: str) -> str:
    if not isinstance(name, str) or not name.strip():
        raise ValidationError.single(
            "Customer", "name", "Customer name cannot be empty", name
        )
    return name.strip()


class Customer:
    """
    Domain entity representing a customer.

    A customer can change name, e-mail or activation state and is still the
    same customer, because identity is carried by its CustomerId. Use
    ``create`` for new customers and ``reconstitute`` to rebuild a stored one.
    """

    def __init__(
        self,
        id: CustomerId,
        name: str,
        email: Email,
        is_active: bool,
        created_at: datetime,
    ):
        self._id = id
        self._name = name
        self._email = email
        self._is_active = is_active
        self._created_at = created_at

    @classmethod
    def create(cls, name: str, email: Email) -> "Customer":
        """Create a new, active customer with a generated identity."""
        customer = cls(
            id=CustomerId.generate(),
            name=_validated_name(name),
            email=email,
            is_active=True,
            created_at=datetime.now(timezone.utc),
        )
        logger.debug(f"Created customer {customer.id}")
        return customer

    @classmethod
    def reconstitute(
        cls,
        id: CustomerId,
        name: str,
        email: Email,
        is_active: bool,
        created_at: datetime,
    ) -> "Customer":
        """Rebuild a customer from previously persisted state."""
        return cls(
            id=id,
            name=_validated_name(name),
            email=email,
            is_active=bool(is_active),
            created_at=created_at,
        )

    @property
    def id(self) -> CustomerId:
        return self._id

    @property
    def name(self) -> str:
        return self._name

    @property
    def email(self) -> Email:
        return self._email

    @property
    def is_active(self) -> bool:
        return self._is_active

    @property
    def created_at(self) -> datetime:
        return self._created_at

    def update_name(self, new_name: str) -> None:
        """Replace the customer's name with the trimmed new value."""
        self._name = _validated_name(new_name)

    def update_email(self, new_email: Email) -> None:
        self._email = new_email

    def deactivate(self) -> None:
        if not self._is_active:
            raise InvalidStateError("Customer", "inactive", "deactivate")
        self._is_active = False
        logger.debug(f"Customer {self._id} deactivated")

    def activate(self) -> None:
        if self._is_active:
            raise InvalidStateError("Customer", "active", "activate")
        self._is_active = True
        logger.debug(f"Customer {self._id} activated")

    def equals(self, other: "Customer") -> bool:
        return self == other

    def __eq__(self, other) -> bool:
        """Equality based on entity identity (id)."""
        if not isinstance(other, Customer):
            return False
        return self._id == other._id

    def __hash__(self) -> int:
        """Hash based on entity identity (id)."""
        return hash(self._id)

    def __str__(self) -> str:
        return f"Customer {self._id} - {self._name} ({self._email})"

    def __repr__(self) -> str:
        return (
            f"Customer(id={self._id!r}, name={self._name!r}, "
            f"active={self._is_active})"
        )
