"""Login endpoint issuing access tokens."""

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from src.bilemo.api.http.deps import get_client_service, get_jwt_generation_service
from src.bilemo.core.services import ClientService, JwtGeneratorService

router = APIRouter(prefix="/api", tags=["auth"])


class LoginRequest(BaseModel):
    username: str
    password: str


class TokenResponse(BaseModel):
    token: str


# Sync handler: password hashing stays off the event loop
@router.post("/login_check", response_model=TokenResponse)
def login_check(
    credentials: LoginRequest,
    clients: ClientService = Depends(get_client_service),
    jwt_gen: JwtGeneratorService = Depends(get_jwt_generation_service),
) -> TokenResponse:
    """Exchange client credentials for a bearer token."""
    client = clients.authenticate(credentials.username, credentials.password)
    return TokenResponse(token=jwt_gen.generate_access_token(client))
