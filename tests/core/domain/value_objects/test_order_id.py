import re

import pytest

from order_domain.core.domain.value_objects.customer_id import CustomerId
from order_domain.core.domain.value_objects.order_id import OrderId
from order_domain.core.errors import ValidationError

UUID_V4 = re.compile(
    r"^[0-9a-f]{8}-[0-9a-f]{4}-4[0-9a-f]{3}-[89ab][0-9a-f]{3}-[0-9a-f]{12}$",
    re.IGNORECASE,
)


class TestOrderId:
    """Test suite for OrderId value object."""

    def test_create_valid(self):
        value = "3f2b8c1e-9d4a-4e7b-8a1c-2f6d5e4b3a21"
        assert OrderId.create(value).value == value

    def test_create_is_case_insensitive(self):
        value = "3F2B8C1E-9D4A-4E7B-8A1C-2F6D5E4B3A21"
        assert OrderId.create(value).value == value

    @pytest.mark.parametrize("value", ["", "   "])
    def test_create_rejects_empty(self, value):
        with pytest.raises(ValidationError) as exc_info:
            OrderId.create(value)

        assert "OrderId cannot be empty" in str(exc_info.value)

    @pytest.mark.parametrize(
        "value",
        [
            "not-a-uuid",
            "3f2b8c1e-9d4a-1e7b-8a1c-2f6d5e4b3a21",  # version 1
            "3f2b8c1e-9d4a-4e7b-ca1c-2f6d5e4b3a21",  # bad variant
            "3f2b8c1e9d4a4e7b8a1c2f6d5e4b3a21",
            "3f2b8c1e-9d4a-4e7b-8a1c-2f6d5e4b3a21\n",
        ],
    )
    def test_create_rejects_invalid_format(self, value):
        with pytest.raises(ValidationError) as exc_info:
            OrderId.create(value)

        assert exc_info.value.failures[0].value == value

    def test_generate_matches_uuid_v4(self):
        for _ in range(50):
            assert UUID_V4.match(OrderId.generate().value)

    def test_generate_is_unique(self):
        ids = {OrderId.generate() for _ in range(100)}
        assert len(ids) == 100

    def test_equality_is_structural(self):
        value = "3f2b8c1e-9d4a-4e7b-8a1c-2f6d5e4b3a21"
        assert OrderId.create(value) == OrderId.create(value)
        assert OrderId.create(value).equals(OrderId.create(value))
        assert OrderId.generate() != OrderId.generate()

    def test_str(self):
        value = "3f2b8c1e-9d4a-4e7b-8a1c-2f6d5e4b3a21"
        assert str(OrderId.create(value)) == value


class TestCustomerId:
    """Test suite for CustomerId value object."""

    def test_create_accepts_any_non_empty_string(self):
        assert CustomerId.create("cust-42").value == "cust-42"

    @pytest.mark.parametrize("value", ["", "  ", None])
    def test_create_rejects_empty(self, value):
        with pytest.raises(ValidationError):
            CustomerId.create(value)

    def test_generate_is_uuid_v4(self):
        assert UUID_V4.match(CustomerId.generate().value)

    def test_equality_is_structural(self):
        assert CustomerId.create("a") == CustomerId.create("a")
        assert CustomerId.create("a").equals(CustomerId.create("a"))
        assert CustomerId.create("a") != CustomerId.create("b")
