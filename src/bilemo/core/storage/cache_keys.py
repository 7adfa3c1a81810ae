"""Cache keys and tags for the cached collections."""

PRODUCTS_TAG = "products"


def product_list_key(page: int, limit: int) -> str:
    return f"product_list_{page}_{limit}"


def client_tag(client_id: int) -> str:
    return f"client_{client_id}"


def client_users_key(client_id: int, page: int, limit: int) -> str:
    return f"client_{client_id}_users_{page}_{limit}"
