"""Hypermedia links added to read models after the cache lookup."""

from fastapi import Request

from src.bilemo.entities.service.client_user import ClientUserRead
from src.bilemo.entities.service.product import ProductRead
from src.bilemo.entities.service.product.schemas import Link


def _link(request: Request, route: str, **params) -> Link:
    return Link(href=str(request.app.url_path_for(route, **params)))


def product_links(request: Request, product: ProductRead, is_admin: bool) -> ProductRead:
    links = {"self": _link(request, "get_product", product_id=product.id)}
    if is_admin:
        links["update"] = _link(request, "update_product", product_id=product.id)
        links["delete"] = _link(request, "delete_product", product_id=product.id)
    return product.model_copy(update={"links": links})


def client_user_links(
    request: Request, client_id: int, client_user: ClientUserRead
) -> ClientUserRead:
    params = {"client_id": client_id, "client_user_id": client_user.id}
    links = {
        "self": _link(request, "get_client_user", **params),
        "update": _link(request, "update_client_user", **params),
        "delete": _link(request, "delete_client_user", **params),
    }
    return client_user.model_copy(update={"links": links})
