"""ClientUser repository."""

from datetime import UTC, datetime

from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from src.bilemo.core.errors import DomainConflictError, EntityNotFoundError
from src.bilemo.core.pagination import page_offset

from .entity import ClientUser
from .table import ClientUserTable


class ClientUserRepository:
    """Data-access layer for client users, always scoped by owning client."""

    def __init__(self, session: Session) -> None:
        self._session = session

    def get(self, client_user_id: int) -> ClientUser | None:
        row = self._session.get(ClientUserTable, client_user_id)
        if row is None:
            return None
        return ClientUser.model_validate(row, from_attributes=True)

    def find_paginated(self, client_id: int, page: int, limit: int) -> list[ClientUser]:
        """Return one page of a client's users in insertion order."""
        offset = page_offset(page, limit)
        if offset is None:
            return []
        statement = (
            select(ClientUserTable)
            .where(ClientUserTable.client_id == client_id)
            .order_by(ClientUserTable.id)
            .offset(offset)
            .limit(limit)
        )
        rows = self._session.exec(statement).all()
        return [ClientUser.model_validate(row, from_attributes=True) for row in rows]

    def find_by_email(self, client_id: int, email: str) -> ClientUser | None:
        statement = select(ClientUserTable).where(
            ClientUserTable.client_id == client_id,
            ClientUserTable.email == email,
        )
        row = self._session.exec(statement).first()
        if row is None:
            return None
        return ClientUser.model_validate(row, from_attributes=True)

    def create(self, client_user: ClientUser) -> ClientUser:
        row = ClientUserTable(
            first_name=client_user.first_name,
            last_name=client_user.last_name,
            email=client_user.email,
            client_id=client_user.client_id,
        )
        self._session.add(row)
        self._flush()
        self._session.refresh(row)
        return ClientUser.model_validate(row, from_attributes=True)

    def update(self, client_user: ClientUser) -> ClientUser:
        row = self._session.get(ClientUserTable, client_user.id)
        if row is None:
            raise EntityNotFoundError("ClientUser", client_user.id)

        row.first_name = client_user.first_name
        row.last_name = client_user.last_name
        row.email = client_user.email
        row.updated_at = datetime.now(UTC)

        self._session.add(row)
        self._flush()
        self._session.refresh(row)
        return ClientUser.model_validate(row, from_attributes=True)

    def delete(self, client_user_id: int) -> bool:
        row = self._session.get(ClientUserTable, client_user_id)
        if row is None:
            return False
        self._session.delete(row)
        self._session.flush()
        return True

    def _flush(self) -> None:
        try:
            self._session.flush()
        except IntegrityError as exc:
            self._session.rollback()
            raise DomainConflictError("Email already exists") from exc
