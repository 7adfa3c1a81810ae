"""Entity: Product."""

from decimal import Decimal
from typing import Any

from pydantic import Field

from src.bilemo.entities.core._base import Entity


class Product(Entity):
    """Product entity representing a phone of the catalogue.

    Products have no owner: every caller can read them, only admins can
    change them.
    """

    name: str = Field(description="Commercial name")
    description: str | None = Field(default=None, description="Free text description")
    price: Decimal = Field(description="Unit price with two decimal places")

    def __eq__(self, other: Any) -> bool:
        """Compare products by business attributes, ignoring timestamps."""
        if not isinstance(other, Product):
            return False

        return (
            self.id == other.id
            and self.name == other.name
            and self.description == other.description
            and self.price == other.price
        )

    def __hash__(self) -> int:
        """Hash based on business attributes, ignoring timestamps."""
        return hash((
            self.id,
            self.name,
            self.description,
            self.price,
        ))
