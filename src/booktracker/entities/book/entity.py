"""Entity: Book."""

from typing import Any

from pydantic import Field

from src.booktracker.entities._base import Entity

MIN_RATING = 1
MAX_RATING = 5


class Book(Entity):
    """A book on either the reading list or the read list.

    ``rating`` is only ever set together with ``is_read`` by the service
    layer; the entity itself accepts any combination so rows written
    directly through the store round-trip unchanged.
    """

    title: str = Field(description="Title")
    author: str | None = Field(default=None, description="Author")
    rating: int | None = Field(default=None, description="Star rating, 1-5")
    is_read: bool = Field(default=False, description="True once the book is read")

    @property
    def stars(self) -> str:
        return "⭐" * (self.rating or 0)

    @property
    def status_label(self) -> str:
        """Short status shown next to the book in lists."""
        if not self.is_read:
            return "In reading list"
        if self.rating is None:
            return "Read (no rating)"
        return self.stars

    def __eq__(self, other: Any) -> bool:
        """Compare books by all stored attributes."""
        if not isinstance(other, Book):
            return False

        return (
            self.id == other.id
            and self.title == other.title
            and self.author == other.author
            and self.rating == other.rating
            and self.is_read == other.is_read
            and self.created_at == other.created_at
        )

    def __hash__(self) -> int:
        return hash((
            self.id,
            self.title,
            self.author,
            self.rating,
            self.is_read,
            self.created_at,
        ))
