"""Client user use cases, always scoped to the calling client."""

from collections.abc import Mapping
from typing import Any

from loguru import logger
from sqlmodel import Session

from src.bilemo.core.access import check_client_user_access, check_ownership
from src.bilemo.core.errors import DomainConflictError, EntityNotFoundError
from src.bilemo.core.pagination import resolve_page
from src.bilemo.core.storage.cache_keys import client_tag, client_users_key
from src.bilemo.core.storage.tag_cache import TagAwareCache
from src.bilemo.core.validation import validate_or_raise
from src.bilemo.entities.service.client_user import (
    ClientUser,
    ClientUserPatch,
    ClientUserRead,
    ClientUserRepository,
    ClientUserWrite,
)

_WRITE_FIELDS = set(ClientUserWrite.model_fields)


class ClientUserService:
    """Client user CRUD with ownership checks and per-client cache tags.

    Every operation checks ownership before touching the store. Mutations
    invalidate the owning client's tag once the transaction is committed.
    """

    def __init__(self, session: Session, cache: TagAwareCache) -> None:
        self._session = session
        self._cache = cache
        self._repository = ClientUserRepository(session)

    async def list_users(
        self,
        caller_id: int,
        client_id: int,
        page: int | None = None,
        limit: int | None = None,
    ) -> list[ClientUserRead]:
        check_ownership(caller_id, client_id)
        page, limit = resolve_page(page, limit)

        async def produce() -> list[dict[str, Any]]:
            users = self._repository.find_paginated(client_id, page, limit)
            return [
                ClientUserRead.from_entity(u).model_dump(mode="json", exclude={"links"})
                for u in users
            ]

        items = await self._cache.get(
            client_users_key(client_id, page, limit), [client_tag(client_id)], produce
        )
        return [ClientUserRead.model_validate(item) for item in items]

    def get_user(self, caller_id: int, client_id: int, client_user_id: int) -> ClientUser:
        check_ownership(caller_id, client_id)
        client_user = self._repository.get(client_user_id)
        if client_user is None:
            raise EntityNotFoundError("ClientUser", client_user_id)
        check_client_user_access(caller_id, client_id, client_user.client_id)
        return client_user

    async def create_user(
        self, caller_id: int, client_id: int, data: Mapping[str, Any]
    ) -> ClientUser:
        check_ownership(caller_id, client_id)
        payload = validate_or_raise(ClientUserWrite, data)

        if self._repository.find_by_email(client_id, payload.email) is not None:
            raise DomainConflictError("Email already exists")

        client_user = self._repository.create(
            ClientUser(**payload.model_dump(), client_id=client_id)
        )
        self._session.commit()
        await self._cache.invalidate_tags([client_tag(client_user.client_id)])

        logger.info("Client user {} created for client {}", client_user.id, client_id)
        return client_user

    async def update_user(
        self,
        caller_id: int,
        client_id: int,
        client_user_id: int,
        data: Mapping[str, Any],
    ) -> ClientUser:
        current = self.get_user(caller_id, client_id, client_user_id)

        patch = validate_or_raise(ClientUserPatch, data)
        merged = current.model_dump(include=_WRITE_FIELDS) | patch.model_dump(exclude_unset=True)
        payload = validate_or_raise(ClientUserWrite, merged)

        if payload.email != current.email:
            existing = self._repository.find_by_email(client_id, payload.email)
            if existing is not None and existing.id != current.id:
                raise DomainConflictError("Email already exists")

        client_user = self._repository.update(
            current.model_copy(update=payload.model_dump())
        )
        self._session.commit()
        await self._cache.invalidate_tags([client_tag(client_id)])

        logger.info("Client user {} updated for client {}", client_user.id, client_id)
        return client_user

    async def delete_user(self, caller_id: int, client_id: int, client_user_id: int) -> None:
        self.get_user(caller_id, client_id, client_user_id)

        self._repository.delete(client_user_id)
        self._session.commit()
        await self._cache.invalidate_tags([client_tag(client_id)])

        logger.info("Client user {} deleted for client {}", client_user_id, client_id)
