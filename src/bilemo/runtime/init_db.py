"""Database initialization script."""

from loguru import logger

from src.bilemo.core.services.database.db_session import DbSessionService


def init_db() -> DbSessionService:
    """Create all database tables and return the service bound to them."""
    db = DbSessionService()
    db.create_all()
    logger.info("Database tables created")
    return db


if __name__ == "__main__":
    init_db()
