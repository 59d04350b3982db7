"""Errors raised by the book service.

Storage failures (``sqlalchemy.exc.SQLAlchemyError`` and friends) are not
wrapped; they reach the caller unchanged.
"""


class BookTrackerError(Exception):
    """Base class for domain errors."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class InvalidArgumentError(BookTrackerError, ValueError):
    """An argument violates a domain rule, e.g. a rating outside 1-5."""


class NotFoundError(BookTrackerError, LookupError):
    """The targeted book does not exist."""

    def __init__(self, book_id: int) -> None:
        super().__init__(f"Book with id {book_id} not found")
        self.book_id = book_id
