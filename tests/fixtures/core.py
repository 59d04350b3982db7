"""Core fixtures: in-memory database, store and service."""

from __future__ import annotations

from collections.abc import Generator

import pytest
from sqlalchemy import StaticPool
from sqlmodel import Session, SQLModel, create_engine

from src.booktracker.core.services import BookService, DbSessionService
from src.booktracker.core.storage import BookStore
from src.booktracker.runtime.config.config_data import (
    ConfigData,
    DatabaseConfig,
    LoggingConfig,
    ViewModelConfig,
)


@pytest.fixture
def app_config() -> ConfigData:
    """Configuration pointing at a private in-memory database."""
    return ConfigData(
        database=DatabaseConfig(url="sqlite://"),
        logging=LoggingConfig(level="WARNING"),
        view_model=ViewModelConfig(stop_timeout_ms=50),
    )


@pytest.fixture
def session() -> Generator[Session]:
    """Create a fresh database session for repository tests."""
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    from src.booktracker.entities.book import BookTable  # noqa: F401

    SQLModel.metadata.create_all(engine)

    with Session(engine) as session:
        try:
            yield session
        finally:
            session.rollback()
    engine.dispose()


@pytest.fixture
def db_service(app_config: ConfigData) -> Generator[DbSessionService]:
    service = DbSessionService(app_config.database)
    service.create_all()
    yield service
    service.dispose()


@pytest.fixture
def store(db_service: DbSessionService) -> BookStore:
    return BookStore(db_service)


@pytest.fixture
def service(store: BookStore) -> BookService:
    return BookService(store)
