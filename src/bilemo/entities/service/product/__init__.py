"""Entity package: Product."""

from .entity import Product
from .repository import ProductRepository
from .schemas import ProductPatch, ProductRead, ProductWrite
from .table import ProductTable

__all__ = [
    "Product",
    "ProductRepository",
    "ProductTable",
    "ProductWrite",
    "ProductPatch",
    "ProductRead",
]
