"""Access token claims."""

from typing import Any

from pydantic import BaseModel, Field


class TokenClaims(BaseModel):
    """Structured representation of the claims of a verified access token."""

    raw_token: str = Field(default="", description="Original JWT token")

    issuer: str = Field(description="Issuer")
    subject: str = Field(description="Subject (client ID)")
    audience: str | list[str] = Field(description="Audience")
    expires_at: int = Field(description="Expiration time")
    issued_at: int = Field(description="Issued at")
    not_before: int | None = Field(default=None, description="Not before")
    jti: str | None = Field(default=None, description="JWT ID (unique token identifier)")

    email: str | None = Field(default=None, description="Client email")
    roles: list[str] = Field(default_factory=list, description="Client roles")

    @classmethod
    def from_jwt_payload(cls, payload: dict[str, Any], raw_token: str = "") -> "TokenClaims":
        """Create TokenClaims from JWT payload dictionary."""
        return cls(
            raw_token=raw_token,
            issuer=payload["iss"],
            subject=str(payload["sub"]),
            audience=payload["aud"],
            expires_at=payload["exp"],
            issued_at=payload["iat"],
            not_before=payload.get("nbf"),
            jti=payload.get("jti"),
            email=payload.get("email"),
            roles=list(payload.get("roles") or []),
        )

    @property
    def client_id(self) -> int:
        return int(self.subject)
