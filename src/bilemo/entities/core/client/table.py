"""Client database table model."""

from sqlalchemy import JSON, Column, String
from sqlmodel import Field

from src.bilemo.entities.core._base import EntityTable


class ClientTable(EntityTable, table=True):
    """Database persistence model for clients.

    Client users reference this table with ``ON DELETE CASCADE``.
    """

    email: str = Field(
        sa_column=Column(String(180), nullable=False, unique=True, index=True)
    )
    roles: list[str] = Field(
        default_factory=list, sa_column=Column(JSON, nullable=False)
    )
    password_hash: str = Field(max_length=255)
