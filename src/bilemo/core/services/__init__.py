"""Core services exports."""

from .client_service import ClientService
from .client_user_service import ClientUserService
from .database.db_session import DbSessionService
from .jwt.jwt_gen import JwtGeneratorService
from .jwt.jwt_verify import JwtVerificationService
from .product_service import ProductService
from .redis_service import RedisService

__all__ = [
    "ClientService",
    "ClientUserService",
    "DbSessionService",
    "JwtGeneratorService",
    "JwtVerificationService",
    "ProductService",
    "RedisService",
]
