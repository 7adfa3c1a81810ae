"""Entity: ClientUser."""

from typing import Any

from pydantic import Field

from src.bilemo.entities.core._base import Entity


class ClientUser(Entity):
    """End user registered by a client."""

    first_name: str
    last_name: str
    email: str = Field(description="Unique per owning client")
    client_id: int = Field(description="Identifier of the owning client")

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, ClientUser):
            return False

        return (
            self.id == other.id
            and self.first_name == other.first_name
            and self.last_name == other.last_name
            and self.email == other.email
            and self.client_id == other.client_id
        )

    def __hash__(self) -> int:
        return hash((self.id, self.email, self.client_id))
