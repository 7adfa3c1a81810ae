"""Access predicates shared by the services.

Each check raises ``AccessDeniedError`` and must run before any store
mutation.
"""

from src.bilemo.core.errors import AccessDeniedError
from src.bilemo.entities.core.client import ROLE_ADMIN, Client


def check_ownership(current_client_id: int, target_client_id: int) -> bool:
    """Ensure the caller is the client addressed by the path."""
    if current_client_id != target_client_id:
        raise AccessDeniedError()
    return True


def check_client_user_access(
    current_client_id: int, path_client_id: int, owner_client_id: int
) -> bool:
    """Ensure the caller owns the path client and the path client owns the user."""
    check_ownership(current_client_id, path_client_id)
    if owner_client_id != path_client_id:
        raise AccessDeniedError()
    return True


def ensure_admin(client: Client) -> bool:
    if not client.has_role(ROLE_ADMIN):
        raise AccessDeniedError("Admin role required")
    return True
