"""Product repository."""

from datetime import UTC, datetime

from sqlmodel import Session, select

from src.bilemo.core.errors import EntityNotFoundError
from src.bilemo.core.pagination import page_offset

from .entity import Product
from .table import ProductTable


class ProductRepository:
    """Data-access layer for products."""

    def __init__(self, session: Session) -> None:
        self._session = session

    def get(self, product_id: int) -> Product | None:
        row = self._session.get(ProductTable, product_id)
        if row is None:
            return None
        return Product.model_validate(row, from_attributes=True)

    def find_paginated(self, page: int, limit: int) -> list[Product]:
        """Return one page of products in insertion order."""
        offset = page_offset(page, limit)
        if offset is None:
            return []
        statement = (
            select(ProductTable)
            .order_by(ProductTable.id)
            .offset(offset)
            .limit(limit)
        )
        rows = self._session.exec(statement).all()
        return [Product.model_validate(row, from_attributes=True) for row in rows]

    def create(self, product: Product) -> Product:
        row = ProductTable(
            name=product.name,
            description=product.description,
            price=product.price,
        )
        self._session.add(row)
        self._session.flush()
        self._session.refresh(row)
        return Product.model_validate(row, from_attributes=True)

    def update(self, product: Product) -> Product:
        row = self._session.get(ProductTable, product.id)
        if row is None:
            raise EntityNotFoundError("Product", product.id)

        row.name = product.name
        row.description = product.description
        row.price = product.price
        row.updated_at = datetime.now(UTC)

        self._session.add(row)
        self._session.flush()
        self._session.refresh(row)
        return Product.model_validate(row, from_attributes=True)

    def delete(self, product_id: int) -> bool:
        row = self._session.get(ProductTable, product_id)
        if row is None:
            return False
        self._session.delete(row)
        self._session.flush()
        return True
