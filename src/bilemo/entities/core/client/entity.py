"""Client domain entity."""

from typing import Any

from pydantic import Field

from src.bilemo.entities.core._base import Entity

ROLE_USER = "ROLE_USER"
ROLE_ADMIN = "ROLE_ADMIN"


class Client(Entity):
    """Tenant account that authenticates against the API.

    ``ROLE_USER`` is implied for every client; ``ROLE_ADMIN`` grants
    product mutations.
    """

    email: str = Field(description="Login identifier, unique across clients")
    roles: list[str] = Field(default_factory=list, description="Granted roles")
    password_hash: str = Field(repr=False, description="passlib hash of the password")

    @property
    def all_roles(self) -> set[str]:
        return {ROLE_USER, *self.roles}

    def has_role(self, role: str) -> bool:
        return role in self.all_roles

    @property
    def is_admin(self) -> bool:
        return self.has_role(ROLE_ADMIN)

    def __eq__(self, other: Any) -> bool:
        """Compare clients by identity and login, ignoring timestamps."""
        if not isinstance(other, Client):
            return False

        return (
            self.id == other.id
            and self.email == other.email
            and sorted(self.roles) == sorted(other.roles)
        )

    def __hash__(self) -> int:
        return hash((self.id, self.email))
