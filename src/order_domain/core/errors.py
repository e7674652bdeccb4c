"""
Domain error taxonomy for order_domain.

Every business-rule or validation failure raised by the core is one of the
five concrete kinds defined here. All of them share the DomainError contract:
a human-readable message, the instant the error was created, an optional
context dictionary, and a JSON-serializable projection for logging.

Callers classify failures by type (or by the stable ``error_code`` tag),
never by parsing messages.
"""

import json
import traceback
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Sequence


class DomainError(Exception):
    """Abstract base class for all domain errors."""

    error_code: str = "DOMAIN_ERROR"

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        """
        Initialize the DomainError.

        Args:
            message: The primary error message.
            context: A dictionary of contextual information related to the error.
        """
        if type(self) is DomainError:
            raise TypeError(
                "DomainError is abstract; raise one of its concrete kinds instead"
            )
        super().__init__(message)
        self.message = message
        self.timestamp = datetime.now(timezone.utc)
        self.context = context

    @property
    def name(self) -> str:
        """Name of the concrete error kind."""
        return type(self).__name__

    @property
    def stack(self) -> str:
        """Best-effort traceback; empty until the error has been raised."""
        if self.__traceback__ is None:
            return ""
        return "".join(
            traceback.format_exception(type(self), self, self.__traceback__)
        )

    def to_dict(self) -> Dict[str, Any]:
        """Serialize the error for logging or debugging."""
        return {
            "name": self.name,
            "message": self.message,
            "timestamp": self.timestamp.isoformat(),
            "context": self.context,
            "stack": self.stack,
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), default=str)

    def __str__(self) -> str:
        return self.message


@dataclass(frozen=True)
class ValidationFailure:
    """A single failed validation: which field, why, and optionally the value."""

    field: str
    message: str
    value: Any = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"field": self.field, "message": self.message}
        if self.value is not None:
            data["value"] = self.value
        return data


class ValidationError(DomainError):
    """Raised when input data does not satisfy validation rules."""

    error_code = "VALIDATION_ERROR"

    def __init__(self, entity_name: str, failures: Sequence[ValidationFailure]):
        failure_messages = "; ".join(f"{f.field}: {f.message}" for f in failures)
        super().__init__(
            f"Validation failed for {entity_name}: {failure_messages}",
            {
                "entity_name": entity_name,
                "failures": [f.to_dict() for f in failures],
            },
        )
        self.entity_name = entity_name
        self.failures: List[ValidationFailure] = list(failures)

    @classmethod
    def single(
        cls, entity_name: str, field: str, message: str, value: Any = None
    ) -> "ValidationError":
        """Create a ValidationError for one failed field."""
        return cls(entity_name, [ValidationFailure(field, message, value)])


class InvalidStateError(DomainError):
    """
    Raised when an entity is asked to perform an action its current state
    forbids, e.g. shipping an order that was never confirmed.
    """

    error_code = "INVALID_STATE"

    def __init__(
        self,
        entity_name: str,
        current_state: str,
        attempted_action: str,
        allowed_states: Optional[Sequence[str]] = None,
    ):
        message = f"Cannot {attempted_action} {entity_name} in state '{current_state}'"
        if allowed_states is not None:
            message += f". Allowed states: {', '.join(allowed_states)}"

        super().__init__(
            message,
            {
                "entity_name": entity_name,
                "current_state": current_state,
                "attempted_action": attempted_action,
                "allowed_states": (
                    list(allowed_states) if allowed_states is not None else None
                ),
            },
        )
        self.entity_name = entity_name
        self.current_state = current_state
        self.attempted_action = attempted_action
        self.allowed_states = (
            list(allowed_states) if allowed_states is not None else None
        )


class BusinessRuleViolationError(DomainError):
    """Raised when a specific business rule is violated."""

    error_code = "BUSINESS_RULE_VIOLATION"

    def __init__(
        self,
        rule_name: str,
        message: str,
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(
            f"Business rule '{rule_name}' violated: {message}",
            {**(context or {}), "rule_name": rule_name},
        )
        self.rule_name = rule_name


class NotFoundError(DomainError):
    """Raised by repositories when a requested entity does not exist."""

    error_code = "NOT_FOUND"

    def __init__(self, entity_name: str, entity_id: str):
        super().__init__(
            f"{entity_name} with id '{entity_id}' not found",
            {"entity_name": entity_name, "entity_id": entity_id},
        )
        self.entity_name = entity_name
        self.entity_id = entity_id


class ConflictError(DomainError):
    """Raised when an operation conflicts with the current state of the system."""

    error_code = "CONFLICT"

    def __init__(
        self,
        entity_name: str,
        conflict_reason: str,
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(
            f"{entity_name} conflict: {conflict_reason}",
            {
                **(context or {}),
                "entity_name": entity_name,
                "conflict_reason": conflict_reason,
            },
        )
        self.entity_name = entity_name
        self.conflict_reason = conflict_reason
