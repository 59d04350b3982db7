"""Database initialization script."""

from loguru import logger

from src.booktracker.core.services.database.db_session import DbSessionService
from src.booktracker.runtime.config.config_data import DatabaseConfig


def init_db(db_config: DatabaseConfig | None = None) -> str:
    """Create the ``books`` table if missing and return the database URL."""
    service = DbSessionService(db_config)
    try:
        service.create_all()
        url = service.config.url
    finally:
        service.dispose()
    logger.info("Database initialized at {}", url)
    return url


if __name__ == "__main__":
    init_db()
