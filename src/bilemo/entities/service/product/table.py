"""Product database table model."""

from decimal import Decimal

from sqlalchemy import Column, Numeric, Text
from sqlmodel import Field

from src.bilemo.entities.core._base import EntityTable


class ProductTable(EntityTable, table=True):
    """Database persistence model for products."""

    name: str = Field(max_length=255)
    description: str | None = Field(default=None, sa_column=Column(Text, nullable=True))
    price: Decimal = Field(
        sa_column=Column(Numeric(precision=10, scale=2, asdecimal=True), nullable=False)
    )
