from dataclasses import dataclass

from src.booktracker.core.services import BookService, DbSessionService
from src.booktracker.core.storage import BookStore
from src.booktracker.runtime.config.config_data import ConfigData
from src.booktracker.runtime.context import get_config


@dataclass
class ApplicationDependencies:
    database_service: DbSessionService
    book_store: BookStore
    book_service: BookService

    @classmethod
    def build(cls, config: ConfigData | None = None) -> "ApplicationDependencies":
        """Wire database, store and service for ``config`` (active config by default)."""
        config = config or get_config()
        database_service = DbSessionService(config.database)
        database_service.create_all()
        book_store = BookStore(database_service)
        return cls(
            database_service=database_service,
            book_store=book_store,
            book_service=BookService(book_store),
        )

    def close(self) -> None:
        self.database_service.dispose()
