"""Book database table model."""

from sqlmodel import Field

from src.booktracker.entities._base import EntityTable


class BookTable(EntityTable, table=True):
    """Database persistence model for books.

    Schema version 1: one row per book, filtered by ``is_read`` and
    ordered by ``created_at``.
    """

    __tablename__ = "books"

    title: str
    author: str | None = None
    rating: int | None = None
    is_read: bool = Field(default=False, index=True)
