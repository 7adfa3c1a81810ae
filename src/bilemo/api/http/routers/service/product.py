"""Product API router with CRUD operations.

Reads are public. Mutations require ``ROLE_ADMIN``; the service checks the
role again before touching the store.
"""

from typing import Any

from fastapi import APIRouter, Body, Depends, Query, Request, Response, status

from src.bilemo.api.http.deps import get_optional_client, get_product_service, require_role
from src.bilemo.api.http.hateoas import product_links
from src.bilemo.core.services import ProductService
from src.bilemo.entities.core.client import ROLE_ADMIN, Client
from src.bilemo.entities.service.product import ProductRead

router = APIRouter(prefix="/api/products", tags=["products"])


def _is_admin(client: Client | None) -> bool:
    return client is not None and client.is_admin


@router.get("", response_model=list[ProductRead])
async def list_products(
    request: Request,
    page: int | None = Query(default=None, ge=1),
    limit: int | None = Query(default=None, ge=1),
    client: Client | None = Depends(get_optional_client),
    service: ProductService = Depends(get_product_service),
) -> list[ProductRead]:
    """List products page by page, served from the collection cache."""
    products = await service.list_products(page, limit)
    is_admin = _is_admin(client)
    return [product_links(request, p, is_admin) for p in products]


@router.get("/{product_id}", response_model=ProductRead)
async def get_product(
    request: Request,
    product_id: int,
    client: Client | None = Depends(get_optional_client),
    service: ProductService = Depends(get_product_service),
) -> ProductRead:
    product = service.get_product(product_id)
    return product_links(request, ProductRead.from_entity(product), _is_admin(client))


@router.post("", response_model=ProductRead, status_code=status.HTTP_201_CREATED)
async def create_product(
    request: Request,
    payload: dict[str, Any] = Body(...),
    client: Client = Depends(require_role(ROLE_ADMIN)),
    service: ProductService = Depends(get_product_service),
) -> ProductRead:
    product = await service.create_product(client, payload)
    return product_links(request, ProductRead.from_entity(product), True)


@router.put("/{product_id}", response_model=ProductRead)
async def update_product(
    request: Request,
    product_id: int,
    payload: dict[str, Any] = Body(...),
    client: Client = Depends(require_role(ROLE_ADMIN)),
    service: ProductService = Depends(get_product_service),
) -> ProductRead:
    product = await service.update_product(client, product_id, payload)
    return product_links(request, ProductRead.from_entity(product), True)


@router.delete("/{product_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_product(
    product_id: int,
    client: Client = Depends(require_role(ROLE_ADMIN)),
    service: ProductService = Depends(get_product_service),
) -> Response:
    await service.delete_product(client, product_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
