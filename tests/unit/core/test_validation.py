"""Tests for request field validation."""

from decimal import Decimal

import pytest

from src.bilemo.core.errors import EntityValidationError
from src.bilemo.core.validation import field_name, validate, validate_or_raise
from src.bilemo.entities.service.client_user import ClientUserWrite
from src.bilemo.entities.service.product import ProductPatch, ProductWrite


class TestProductValidation:
    def test_valid_product(self):
        assert validate(ProductWrite, {"name": "Widget", "price": "9.99"}) == []

    def test_all_errors_are_reported(self):
        """Every violated constraint is returned, not just the first one."""
        errors = validate(ProductWrite, {"name": "W", "price": "-1"})

        fields = {error.field for error in errors}
        assert fields == {"name", "price"}

    def test_blank_name_rejected(self):
        errors = validate(ProductWrite, {"name": "    ", "price": "1.00"})

        assert [e.field for e in errors] == ["name"]
        assert errors[0].message.endswith("This value should not be blank.")

    @pytest.mark.parametrize("price", ["0", "1.999", "12345678901"])
    def test_invalid_prices(self, price):
        assert [e.field for e in validate(ProductWrite, {"name": "Widget", "price": price})] == ["price"]

    def test_name_length_upper_bound(self):
        assert validate(ProductWrite, {"name": "x" * 255, "price": "1"}) == []
        assert [e.field for e in validate(ProductWrite, {"name": "x" * 256, "price": "1"})] == ["name"]

    def test_read_only_id_is_ignored(self):
        product = validate_or_raise(ProductWrite, {"id": 42, "name": "Widget", "price": "9.99"})

        assert product.price == Decimal("9.99")
        assert not hasattr(product, "id")

    def test_patch_accepts_partial_body(self):
        patch = validate_or_raise(ProductPatch, {"price": "5.50"})

        assert patch.model_dump(exclude_unset=True) == {"price": Decimal("5.50")}


class TestClientUserValidation:
    def test_missing_fields(self):
        errors = validate(ClientUserWrite, {})

        assert {e.field for e in errors} == {"first_name", "last_name", "email"}

    def test_invalid_email(self):
        errors = validate(
            ClientUserWrite,
            {"first_name": "Jane", "last_name": "Doe", "email": "not-an-email"},
        )

        assert [e.field for e in errors] == ["email"]

    def test_validate_or_raise_carries_errors(self):
        with pytest.raises(EntityValidationError) as exc_info:
            validate_or_raise(ClientUserWrite, {"first_name": "J", "last_name": "Doe"})

        assert {e.field for e in exc_info.value.errors} == {"first_name", "email"}
        assert exc_info.value.status_code == 400


class TestFieldName:
    def test_strips_request_location(self):
        assert field_name(("body", "price")) == "price"
        assert field_name(("query", "page")) == "page"

    def test_keeps_nested_path(self):
        assert field_name(("items", 0, "name")) == "items.0.name"

    def test_bare_location(self):
        assert field_name(("body",)) == "body"
        assert field_name(()) == "__root__"
