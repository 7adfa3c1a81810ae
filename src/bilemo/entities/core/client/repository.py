"""Client repository."""

from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from src.bilemo.core.errors import DomainConflictError

from .entity import Client
from .table import ClientTable


class ClientRepository:
    """Data-access layer for clients."""

    def __init__(self, session: Session) -> None:
        self._session = session

    def get(self, client_id: int) -> Client | None:
        row = self._session.get(ClientTable, client_id)
        if row is None:
            return None
        return Client.model_validate(row, from_attributes=True)

    def get_by_email(self, email: str) -> Client | None:
        statement = select(ClientTable).where(ClientTable.email == email)
        row = self._session.exec(statement).first()
        if row is None:
            return None
        return Client.model_validate(row, from_attributes=True)

    def create(self, client: Client) -> Client:
        row = ClientTable(
            email=client.email,
            roles=list(client.roles),
            password_hash=client.password_hash,
        )
        self._session.add(row)
        try:
            self._session.flush()
        except IntegrityError as exc:
            self._session.rollback()
            raise DomainConflictError("Email already exists") from exc
        self._session.refresh(row)
        return Client.model_validate(row, from_attributes=True)

    def delete(self, client_id: int) -> bool:
        """Delete a client; the database cascades to its client users."""
        row = self._session.get(ClientTable, client_id)
        if row is None:
            return False
        self._session.delete(row)
        self._session.flush()
        return True
