"""ClientUser database table model."""

from sqlalchemy import Column, ForeignKey, Integer, UniqueConstraint
from sqlmodel import Field

from src.bilemo.entities.core._base import EntityTable


class ClientUserTable(EntityTable, table=True):
    """Database persistence model for client users."""

    __table_args__ = (
        UniqueConstraint("client_id", "email", name="uq_client_user_client_email"),
    )

    first_name: str = Field(max_length=255)
    last_name: str = Field(max_length=255)
    email: str = Field(max_length=255)
    client_id: int = Field(
        sa_column=Column(
            Integer,
            ForeignKey("clienttable.id", ondelete="CASCADE"),
            nullable=False,
            index=True,
        )
    )
