from .db_session import DbSessionService, enable_sqlite_foreign_keys

__all__ = ["DbSessionService", "enable_sqlite_foreign_keys"]
