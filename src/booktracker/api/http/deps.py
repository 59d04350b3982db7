"""FastAPI dependency implementations."""

from fastapi import Request

from src.booktracker.core.services import BookService, DbSessionService
from src.booktracker.runtime.app_data import ApplicationDependencies


def get_app_dependencies(request: Request) -> ApplicationDependencies:
    return request.app.state.app_dependencies


def get_book_service(request: Request) -> BookService:
    """Get the book service instance."""
    return get_app_dependencies(request).book_service


def get_database_service(request: Request) -> DbSessionService:
    """Get the database service instance."""
    return get_app_dependencies(request).database_service
