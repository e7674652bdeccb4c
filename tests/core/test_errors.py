import json

import pytest

from order_domain.core.errors import (
    BusinessRuleViolationError,
    ConflictError,
    DomainError,
    InvalidStateError,
    NotFoundError,
    ValidationError,
    ValidationFailure,
)


class TestDomainError:
    """Test suite for the DomainError base contract."""

    def test_base_class_cannot_be_instantiated(self):
        """DomainError is abstract; only concrete kinds can be created."""
        with pytest.raises(TypeError):
            DomainError("boom")

    def test_all_kinds_are_domain_errors(self):
        errors = [
            ValidationError.single("Email", "value", "Invalid"),
            InvalidStateError("Order", "PENDING", "ship", ["CONFIRMED"]),
            BusinessRuleViolationError("CurrencyMatch", "Mismatch"),
            NotFoundError("Order", "abc"),
            ConflictError("Customer", "Email already exists"),
        ]

        for error in errors:
            assert isinstance(error, DomainError)
            assert isinstance(error, Exception)

    def test_error_codes_are_distinct(self):
        codes = {
            ValidationError.error_code,
            InvalidStateError.error_code,
            BusinessRuleViolationError.error_code,
            NotFoundError.error_code,
            ConflictError.error_code,
        }
        assert len(codes) == 5

    def test_name_is_concrete_class_name(self):
        assert NotFoundError("Order", "abc").name == "NotFoundError"

    def test_str_is_message(self):
        error = NotFoundError("Order", "abc-123")
        assert str(error) == error.message

    def test_timestamp_is_timezone_aware(self):
        error = NotFoundError("Order", "abc")
        assert error.timestamp.tzinfo is not None

    def test_to_dict_projection(self):
        error = ConflictError("Customer", "Email already exists")

        data = error.to_dict()

        assert set(data) == {"name", "message", "timestamp", "context", "stack"}
        assert data["name"] == "ConflictError"
        assert data["message"] == "Customer conflict: Email already exists"
        assert data["timestamp"] == error.timestamp.isoformat()
        assert data["context"]["entity_name"] == "Customer"

    def test_stack_empty_before_raise(self):
        assert NotFoundError("Order", "abc").stack == ""

    def test_stack_populated_after_raise(self):
        with pytest.raises(NotFoundError) as exc_info:
            raise NotFoundError("Order", "abc")

        assert "NotFoundError" in exc_info.value.stack
        assert exc_info.value.to_dict()["stack"]

    def test_to_json_is_valid_json(self):
        error = ValidationError.single("Price", "amount", "Negative", -1)

        data = json.loads(error.to_json())

        assert data["name"] == "ValidationError"
        assert data["context"]["failures"][0]["value"] == -1


class TestValidationError:
    """Test suite for ValidationError."""

    def test_single_failure(self):
        error = ValidationError.single(
            "Email", "value", "Invalid email format", "not-an-email"
        )

        assert error.message == (
            "Validation failed for Email: value: Invalid email format"
        )
        assert error.failures == [
            ValidationFailure("value", "Invalid email format", "not-an-email")
        ]
        assert error.entity_name == "Email"

    def test_multiple_failures_are_joined(self):
        error = ValidationError(
            "Customer",
            [
                ValidationFailure("name", "Cannot be empty"),
                ValidationFailure("email", "Invalid format", "bad-email"),
            ],
        )

        assert error.message == (
            "Validation failed for Customer: "
            "name: Cannot be empty; email: Invalid format"
        )
        assert len(error.failures) == 2

    def test_context_contains_entity_and_failures(self):
        error = ValidationError(
            "Customer",
            [
                ValidationFailure("name", "Cannot be empty"),
                ValidationFailure("email", "Invalid format", "bad-email"),
            ],
        )

        assert error.context == {
            "entity_name": "Customer",
            "failures": [
                {"field": "name", "message": "Cannot be empty"},
                {"field": "email", "message": "Invalid format", "value": "bad-email"},
            ],
        }

    def test_failure_to_dict_omits_missing_value(self):
        assert ValidationFailure("name", "Empty").to_dict() == {
            "field": "name",
            "message": "Empty",
        }


class TestInvalidStateError:
    """Test suite for InvalidStateError."""

    def test_message_with_allowed_states(self):
        error = InvalidStateError(
            "Order", "DELIVERED", "cancel", ["PENDING", "CONFIRMED"]
        )

        assert error.message == (
            "Cannot cancel Order in state 'DELIVERED'. "
            "Allowed states: PENDING, CONFIRMED"
        )

    def test_message_without_allowed_states(self):
        error = InvalidStateError("Order", "CANCELLED", "cancel")

        assert error.message == "Cannot cancel Order in state 'CANCELLED'"
        assert error.allowed_states is None

    def test_context_carries_all_fields(self):
        error = InvalidStateError("Order", "PENDING", "ship", ["CONFIRMED"])

        assert error.context == {
            "entity_name": "Order",
            "current_state": "PENDING",
            "attempted_action": "ship",
            "allowed_states": ["CONFIRMED"],
        }
        assert error.current_state == "PENDING"
        assert error.attempted_action == "ship"


class TestBusinessRuleViolationError:
    """Test suite for BusinessRuleViolationError."""

    def test_message_format(self):
        error = BusinessRuleViolationError(
            "MaxDiscountPercentage", "Discount cannot exceed 50%"
        )

        assert error.message == (
            "Business rule 'MaxDiscountPercentage' violated: "
            "Discount cannot exceed 50%"
        )
        assert error.rule_name == "MaxDiscountPercentage"

    def test_context_merges_rule_name(self):
        error = BusinessRuleViolationError(
            "MaxDiscountPercentage",
            "Discount cannot exceed 50%",
            {"attempted_discount": 75, "max_allowed": 50},
        )

        assert error.context == {
            "attempted_discount": 75,
            "max_allowed": 50,
            "rule_name": "MaxDiscountPercentage",
        }

    def test_context_without_caller_context(self):
        error = BusinessRuleViolationError("Rule", "Broken")
        assert error.context == {"rule_name": "Rule"}


class TestNotFoundError:
    """Test suite for NotFoundError."""

    def test_message_and_fields(self):
        error = NotFoundError("Order", "abc-123-def")

        assert error.message == "Order with id 'abc-123-def' not found"
        assert error.entity_name == "Order"
        assert error.entity_id == "abc-123-def"
        assert error.context == {"entity_name": "Order", "entity_id": "abc-123-def"}


class TestConflictError:
    """Test suite for ConflictError."""

    def test_message_and_context(self):
        error = ConflictError(
            "Customer", "Email already exists", {"email": "user@example.com"}
        )

        assert error.message == "Customer conflict: Email already exists"
        assert error.context == {
            "email": "user@example.com",
            "entity_name": "Customer",
            "conflict_reason": "Email already exists",
        }
        assert error.conflict_reason == "Email already exists"

    def test_caller_context_cannot_override_entity_name(self):
        error = ConflictError("Customer", "Duplicate", {"entity_name": "Other"})
        assert error.context["entity_name"] == "Customer"
