"""Client accounts: authentication and management from the CLI."""

from loguru import logger
from sqlmodel import Session

from src.bilemo.core.errors import AuthenticationError, EntityNotFoundError
from src.bilemo.core.security import hash_password, verify_password
from src.bilemo.core.storage.cache_keys import client_tag
from src.bilemo.core.storage.tag_cache import TagAwareCache
from src.bilemo.entities.core.client import ROLE_ADMIN, Client, ClientRepository


class ClientService:
    def __init__(self, session: Session, cache: TagAwareCache | None = None) -> None:
        self._session = session
        self._cache = cache
        self._repository = ClientRepository(session)

    def authenticate(self, email: str, password: str) -> Client:
        """Return the client matching the credentials.

        Raises:
            AuthenticationError: Unknown email or wrong password
        """
        client = self._repository.get_by_email(email)
        if client is None or not verify_password(password, client.password_hash):
            logger.info("Failed login attempt for {}", email)
            raise AuthenticationError("Invalid credentials.")
        return client

    def get_client(self, client_id: int) -> Client:
        client = self._repository.get(client_id)
        if client is None:
            raise EntityNotFoundError("Client", client_id)
        return client

    def create_client(self, email: str, password: str, admin: bool = False) -> Client:
        client = self._repository.create(
            Client(
                email=email,
                roles=[ROLE_ADMIN] if admin else [],
                password_hash=hash_password(password),
            )
        )
        self._session.commit()
        logger.info("Client {} created ({})", client.id, email)
        return client

    async def delete_client(self, client_id: int) -> None:
        """Delete a client with its users and drop its cached pages."""
        if not self._repository.delete(client_id):
            raise EntityNotFoundError("Client", client_id)
        self._session.commit()
        if self._cache is not None:
            await self._cache.invalidate_tags([client_tag(client_id)])
        logger.info("Client {} deleted", client_id)
