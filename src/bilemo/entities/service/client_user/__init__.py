"""Entity package: ClientUser.

Client users are the end users a client registers; every client user
belongs to exactly one client.
"""

from .entity import ClientUser
from .repository import ClientUserRepository
from .schemas import ClientUserPatch, ClientUserRead, ClientUserWrite
from .table import ClientUserTable

__all__ = [
    "ClientUser",
    "ClientUserRepository",
    "ClientUserTable",
    "ClientUserWrite",
    "ClientUserPatch",
    "ClientUserRead",
]
