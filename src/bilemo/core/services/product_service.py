"""Product use cases: cached listing and admin-only mutations."""

from collections.abc import Mapping
from typing import Any

from loguru import logger
from sqlmodel import Session

from src.bilemo.core.access import ensure_admin
from src.bilemo.core.errors import EntityNotFoundError
from src.bilemo.core.pagination import resolve_page
from src.bilemo.core.storage.cache_keys import PRODUCTS_TAG, product_list_key
from src.bilemo.core.storage.tag_cache import TagAwareCache
from src.bilemo.core.validation import validate_or_raise
from src.bilemo.entities.core.client import Client
from src.bilemo.entities.service.product import (
    Product,
    ProductPatch,
    ProductRead,
    ProductRepository,
    ProductWrite,
)

_WRITE_FIELDS = set(ProductWrite.model_fields)


class ProductService:
    """Orchestrates access check, validation, persistence and cache invalidation."""

    def __init__(self, session: Session, cache: TagAwareCache) -> None:
        self._session = session
        self._cache = cache
        self._repository = ProductRepository(session)

    async def list_products(self, page: int | None = None, limit: int | None = None) -> list[ProductRead]:
        page, limit = resolve_page(page, limit)

        async def produce() -> list[dict[str, Any]]:
            products = self._repository.find_paginated(page, limit)
            return [
                ProductRead.from_entity(p).model_dump(mode="json", exclude={"links"})
                for p in products
            ]

        items = await self._cache.get(product_list_key(page, limit), [PRODUCTS_TAG], produce)
        return [ProductRead.model_validate(item) for item in items]

    def get_product(self, product_id: int) -> Product:
        product = self._repository.get(product_id)
        if product is None:
            raise EntityNotFoundError("Product", product_id)
        return product

    async def create_product(self, caller: Client, data: Mapping[str, Any]) -> Product:
        ensure_admin(caller)
        payload = validate_or_raise(ProductWrite, data)

        product = self._repository.create(Product(**payload.model_dump()))
        self._session.commit()
        await self._cache.invalidate_tags([PRODUCTS_TAG])

        logger.info("Product {} created by client {}", product.id, caller.id)
        return product

    async def update_product(
        self, caller: Client, product_id: int, data: Mapping[str, Any]
    ) -> Product:
        """Overwrite the fields present in ``data``; the merged product is re-validated."""
        ensure_admin(caller)
        current = self.get_product(product_id)

        patch = validate_or_raise(ProductPatch, data)
        merged = current.model_dump(include=_WRITE_FIELDS) | patch.model_dump(exclude_unset=True)
        payload = validate_or_raise(ProductWrite, merged)

        product = self._repository.update(
            current.model_copy(update=payload.model_dump())
        )
        self._session.commit()
        await self._cache.invalidate_tags([PRODUCTS_TAG])

        logger.info("Product {} updated by client {}", product.id, caller.id)
        return product

    async def delete_product(self, caller: Client, product_id: int) -> None:
        ensure_admin(caller)
        if not self._repository.delete(product_id):
            raise EntityNotFoundError("Product", product_id)
        self._session.commit()
        await self._cache.invalidate_tags([PRODUCTS_TAG])

        logger.info("Product {} deleted by client {}", product_id, caller.id)
