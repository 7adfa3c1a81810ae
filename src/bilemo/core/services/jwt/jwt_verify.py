"""JWT verification service."""

from authlib.jose import JoseError, jwt
from loguru import logger

from src.bilemo.core.errors import AuthenticationError
from src.bilemo.core.models.claims import TokenClaims
from src.bilemo.runtime.context import get_config


class JwtVerificationService:
    def verify_jwt(self, token: str, *, key: str | None = None) -> TokenClaims:
        """Verify signature and registered claims of an access token.

        Raises:
            AuthenticationError: If the token is malformed, forged or expired
        """
        cfg = get_config()
        verification_key = key or cfg.app.jwt_secret

        claims_options = {
            "iss": {"essential": True, "values": [cfg.jwt.issuer]},
            "aud": {"essential": True, "values": list(cfg.jwt.audiences)},
            "sub": {"essential": True},
            "exp": {"essential": True},
        }

        try:
            claims = jwt.decode(token, verification_key, claims_options=claims_options)
            claims.validate(leeway=cfg.jwt.clock_skew)
        except (JoseError, ValueError) as exc:
            logger.debug("Rejected access token: {}", exc)
            raise AuthenticationError("Invalid JWT Token") from exc

        alg = claims.header.get("alg")
        if alg not in cfg.jwt.allowed_algorithms:
            raise AuthenticationError("Disallowed JWT algorithm")

        try:
            return TokenClaims.from_jwt_payload(dict(claims), raw_token=token)
        except (KeyError, ValueError) as exc:
            raise AuthenticationError("Invalid JWT Token") from exc
