"""Request and response models for client users."""

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from src.bilemo.core.validation import BoundedText
from src.bilemo.entities.service.product.schemas import Link

from .entity import ClientUser


class ClientUserWrite(BaseModel):
    """Fields accepted when creating a client user.

    The owner comes from the path, never from the body.
    """

    model_config = ConfigDict(extra="ignore")

    first_name: BoundedText
    last_name: BoundedText
    # email-validator already bounds addresses to 254 characters
    email: EmailStr


class ClientUserPatch(BaseModel):
    model_config = ConfigDict(extra="ignore")

    first_name: BoundedText | None = None
    last_name: BoundedText | None = None
    email: EmailStr | None = None


class ClientUserRead(BaseModel):
    """Fields exposed when reading a client user."""

    model_config = ConfigDict(populate_by_name=True)

    id: int
    first_name: str
    last_name: str
    email: str
    links: dict[str, Link] = Field(default_factory=dict, alias="_links")

    @classmethod
    def from_entity(cls, client_user: ClientUser) -> "ClientUserRead":
        return cls(
            id=client_user.id,
            first_name=client_user.first_name,
            last_name=client_user.last_name,
            email=client_user.email,
        )
