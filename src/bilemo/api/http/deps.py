"""FastAPI dependency implementations."""

from __future__ import annotations

from collections.abc import Iterator

from fastapi import Depends, Request
from sqlmodel import Session

from src.bilemo.api.http.app_data import ApplicationDependencies
from src.bilemo.core.errors import AccessDeniedError, AuthenticationError
from src.bilemo.core.models import TokenClaims
from src.bilemo.core.services import (
    ClientService,
    ClientUserService,
    JwtGeneratorService,
    JwtVerificationService,
    ProductService,
)
from src.bilemo.core.storage import TagAwareCache
from src.bilemo.entities.core.client import Client, ClientRepository


def _app_deps(request: Request) -> ApplicationDependencies:
    return request.app.state.app_dependencies


def get_db_session(request: Request) -> Iterator[Session]:
    """Yield one database session per request."""
    session = _app_deps(request).database_service.get_session()
    try:
        yield session
    finally:
        session.close()


def get_tag_cache(request: Request) -> TagAwareCache:
    """Get the collection cache instance."""
    return _app_deps(request).tag_cache


def get_jwt_verify_service(request: Request) -> JwtVerificationService:
    """Get the JWT verification service instance."""
    return _app_deps(request).jwt_verify_service


def get_jwt_generation_service(request: Request) -> JwtGeneratorService:
    """Get the JWT generation service instance."""
    return _app_deps(request).jwt_generation_service


def get_product_service(
    db: Session = Depends(get_db_session),
    cache: TagAwareCache = Depends(get_tag_cache),
) -> ProductService:
    return ProductService(db, cache)


def get_client_user_service(
    db: Session = Depends(get_db_session),
    cache: TagAwareCache = Depends(get_tag_cache),
) -> ClientUserService:
    return ClientUserService(db, cache)


def get_client_service(
    db: Session = Depends(get_db_session),
    cache: TagAwareCache = Depends(get_tag_cache),
) -> ClientService:
    return ClientService(db, cache)


def _bearer_token(request: Request) -> str | None:
    auth_header = request.headers.get("Authorization")
    if not auth_header:
        return None
    if not auth_header.startswith("Bearer "):
        raise AuthenticationError("Missing Bearer token")
    return auth_header.split(" ", 1)[1].strip()


def _resolve_client(
    request: Request, token: str, db: Session, jwt_verify: JwtVerificationService
) -> Client:
    claims: TokenClaims = jwt_verify.verify_jwt(token)
    client = ClientRepository(db).get(claims.client_id)
    if client is None:
        raise AuthenticationError("Unknown client")

    request.state.claims = claims
    request.state.roles = client.all_roles
    return client


def get_current_client(
    request: Request,
    db: Session = Depends(get_db_session),
    jwt_verify: JwtVerificationService = Depends(get_jwt_verify_service),
) -> Client:
    """Authenticate the request using a Bearer token."""
    token = _bearer_token(request)
    if not token:
        raise AuthenticationError("JWT Token not found")
    return _resolve_client(request, token, db, jwt_verify)


def get_optional_client(
    request: Request,
    db: Session = Depends(get_db_session),
    jwt_verify: JwtVerificationService = Depends(get_jwt_verify_service),
) -> Client | None:
    """Authenticate when a token is sent; anonymous callers get None.

    A token that is sent but invalid is still rejected.
    """
    token = _bearer_token(request)
    if not token:
        return None
    return _resolve_client(request, token, db, jwt_verify)


def require_role(required_role: str):
    """Create a dependency that requires a specific role for the authenticated client."""

    async def dep(client: Client = Depends(get_current_client)) -> Client:
        if not client.has_role(required_role):
            raise AccessDeniedError(f"Missing required role: {required_role}")
        return client

    return dep
