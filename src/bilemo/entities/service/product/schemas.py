"""Request and response models for products.

``ProductWrite`` is the write field group, ``ProductRead`` the read field
group. The id is read-only: it is ignored when sent in a request body.
"""

from decimal import Decimal
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field

from src.bilemo.core.validation import BoundedText

from .entity import Product

Price = Annotated[Decimal, Field(gt=0, max_digits=10, decimal_places=2)]


class Link(BaseModel):
    href: str


class ProductWrite(BaseModel):
    """Fields accepted when creating a product."""

    model_config = ConfigDict(extra="ignore")

    name: BoundedText
    description: str | None = None
    price: Price


class ProductPatch(BaseModel):
    """Fields accepted when updating a product; omitted fields keep their value."""

    model_config = ConfigDict(extra="ignore")

    name: BoundedText | None = None
    description: str | None = None
    price: Price | None = None


class ProductRead(BaseModel):
    """Fields exposed when reading a product."""

    model_config = ConfigDict(populate_by_name=True)

    id: int
    name: str
    description: str | None = None
    price: Decimal
    links: dict[str, Link] = Field(default_factory=dict, alias="_links")

    @classmethod
    def from_entity(cls, product: Product) -> "ProductRead":
        return cls(
            id=product.id,
            name=product.name,
            description=product.description,
            price=product.price,
        )
