"""Client user API router.

Every route is scoped to ``/api/clients/{client_id}`` and only the client
itself may use it.
"""

from typing import Any

from fastapi import APIRouter, Body, Depends, Query, Request, Response, status

from src.bilemo.api.http.deps import get_client_user_service, get_current_client
from src.bilemo.api.http.hateoas import client_user_links
from src.bilemo.core.services import ClientUserService
from src.bilemo.entities.core.client import Client
from src.bilemo.entities.service.client_user import ClientUserRead

router = APIRouter(prefix="/api/clients/{client_id}/users", tags=["client users"])


@router.get("", response_model=list[ClientUserRead])
async def list_client_users(
    request: Request,
    client_id: int,
    page: int | None = Query(default=None, ge=1),
    limit: int | None = Query(default=None, ge=1),
    client: Client = Depends(get_current_client),
    service: ClientUserService = Depends(get_client_user_service),
) -> list[ClientUserRead]:
    users = await service.list_users(client.id, client_id, page, limit)
    return [client_user_links(request, client_id, u) for u in users]


@router.get("/{client_user_id}", response_model=ClientUserRead)
async def get_client_user(
    request: Request,
    client_id: int,
    client_user_id: int,
    client: Client = Depends(get_current_client),
    service: ClientUserService = Depends(get_client_user_service),
) -> ClientUserRead:
    client_user = service.get_user(client.id, client_id, client_user_id)
    return client_user_links(request, client_id, ClientUserRead.from_entity(client_user))


@router.post("", response_model=ClientUserRead, status_code=status.HTTP_201_CREATED)
async def create_client_user(
    request: Request,
    client_id: int,
    payload: dict[str, Any] = Body(...),
    client: Client = Depends(get_current_client),
    service: ClientUserService = Depends(get_client_user_service),
) -> ClientUserRead:
    client_user = await service.create_user(client.id, client_id, payload)
    return client_user_links(request, client_id, ClientUserRead.from_entity(client_user))


@router.put("/{client_user_id}", response_model=ClientUserRead)
async def update_client_user(
    request: Request,
    client_id: int,
    client_user_id: int,
    payload: dict[str, Any] = Body(...),
    client: Client = Depends(get_current_client),
    service: ClientUserService = Depends(get_client_user_service),
) -> ClientUserRead:
    client_user = await service.update_user(client.id, client_id, client_user_id, payload)
    return client_user_links(request, client_id, ClientUserRead.from_entity(client_user))


@router.delete("/{client_user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_client_user(
    client_id: int,
    client_user_id: int,
    client: Client = Depends(get_current_client),
    service: ClientUserService = Depends(get_client_user_service),
) -> Response:
    await service.delete_user(client.id, client_id, client_user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
