"""Client entity module.

A client is the authenticated tenant of the API; it owns its client users.

- Client: Domain entity with role helpers
- ClientTable: Database persistence model
- ClientRepository: Data access layer
"""

from .entity import ROLE_ADMIN, ROLE_USER, Client
from .repository import ClientRepository
from .table import ClientTable

__all__ = ["Client", "ClientTable", "ClientRepository", "ROLE_ADMIN", "ROLE_USER"]
