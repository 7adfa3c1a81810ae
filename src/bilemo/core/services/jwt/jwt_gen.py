import time
from typing import Any

from authlib.common.security import generate_token
from authlib.jose import JoseError, jwt
from loguru import logger

from src.bilemo.runtime.config.config_data import ConfigData
from src.bilemo.runtime.context import get_config


class JwtGeneratorService:
    """Service for generating access tokens for authenticated clients."""

    def generate_jwt(
        self,
        subject: str,
        claims: dict[str, Any] | None = None,
        expires_in_seconds: int | None = None,
        algorithm: str | None = None,
        secret: str | None = None,
    ) -> str:
        """Generate a signed JWT using authlib.

        Args:
            subject: Subject (sub) claim, the client ID
            claims: Additional claims to include in the token
            expires_in_seconds: Token lifetime (defaults to config)
            algorithm: Signing algorithm (defaults to config)
            secret: Signing secret (defaults to config)

        Returns:
            Signed JWT token string

        Raises:
            RuntimeError: If the secret is missing or the algorithm is not allowed
        """
        config: ConfigData = get_config()

        secret = secret or config.app.jwt_secret
        if not secret:
            raise RuntimeError("JWT signing secret not configured")

        algorithm = algorithm or config.jwt.algorithm
        if algorithm not in config.jwt.allowed_algorithms:
            logger.debug(
                f"Attempted to use disallowed algorithm: {algorithm}, only {config.jwt.allowed_algorithms} are allowed"
            )
            raise RuntimeError(f"Algorithm {algorithm} not allowed")

        if expires_in_seconds is None:
            expires_in_seconds = config.jwt.token_ttl_seconds

        now = int(time.time())
        payload = {
            "iss": config.jwt.issuer,
            "sub": subject,
            "aud": config.jwt.audiences,
            "exp": now + expires_in_seconds,
            "iat": now,
            "nbf": now,
            "jti": generate_token(16),
        }

        # Standard claims cannot be overridden
        if claims:
            payload.update(
                {
                    k: v
                    for k, v in claims.items()
                    if k not in {"iss", "sub", "aud", "exp", "iat", "nbf", "jti"}
                }
            )

        try:
            token = jwt.encode({"alg": algorithm, "typ": "JWT"}, payload, secret)
        except JoseError as e:
            raise RuntimeError(f"JWT encoding failed: {e}") from e

        return token.decode() if isinstance(token, bytes) else token

    def generate_access_token(self, client, **kwargs) -> str:
        """Generate the access token returned by the login endpoint."""
        return self.generate_jwt(
            subject=str(client.id),
            claims={"email": client.email, "roles": sorted(client.all_roles)},
            **kwargs,
        )
