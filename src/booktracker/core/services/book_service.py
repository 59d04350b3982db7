"""Book service: validation and partial updates on top of the book store."""

from loguru import logger

from src.booktracker.core.exceptions import InvalidArgumentError, NotFoundError
from src.booktracker.core.storage.book_store import BookStore
from src.booktracker.core.storage.live_query import LiveQuery
from src.booktracker.entities.book import Book
from src.booktracker.entities.book.entity import MAX_RATING, MIN_RATING


def _require_valid_rating(rating: int) -> None:
    if not MIN_RATING <= rating <= MAX_RATING:
        logger.warning("Rejected rating {}", rating)
        raise InvalidArgumentError(
            f"Rating must be between {MIN_RATING} and {MAX_RATING}"
        )


class BookService:
    """Entry points used by the presentation layer.

    Reads are live queries passed straight through from the store. Updates
    re-read the current row and write the merged row back in full; there is
    no locking, so concurrent updates to the same book are last-writer-wins.
    """

    def __init__(self, store: BookStore) -> None:
        self._store = store

    def list_all(self) -> LiveQuery[list[Book]]:
        return self._store.observe_all()

    def list_unread(self) -> LiveQuery[list[Book]]:
        return self._store.observe_unread()

    def list_read(self) -> LiveQuery[list[Book]]:
        return self._store.observe_read()

    def count_unread(self) -> LiveQuery[int]:
        return self._store.observe_unread_count()

    def count_read(self) -> LiveQuery[int]:
        return self._store.observe_read_count()

    def get(self, book_id: int) -> LiveQuery[Book | None]:
        return self._store.observe_by_id(book_id)

    async def add_unread(self, title: str, author: str | None = None) -> int:
        """Add a book to the reading list and return its id."""
        book = Book(title=title, author=author, is_read=False, rating=None)
        book_id = await self._store.insert(book)
        logger.info("Added book {} to reading list", book_id)
        return book_id

    async def add_read(self, title: str, author: str | None = None, *, rating: int) -> int:
        """Add an already-read book with its rating and return its id."""
        _require_valid_rating(rating)
        book = Book(title=title, author=author, is_read=True, rating=rating)
        book_id = await self._store.insert(book)
        logger.info("Added read book {} rated {}", book_id, rating)
        return book_id

    async def _fetch(self, book_id: int) -> Book:
        book = await self._store.find(book_id)
        if book is None:
            logger.warning("Book {} not found", book_id)
            raise NotFoundError(book_id)
        return book

    async def mark_read(self, book_id: int, rating: int) -> None:
        """Move a book to the read list with the given rating."""
        _require_valid_rating(rating)
        book = await self._fetch(book_id)
        await self._store.update(book.model_copy(update={"is_read": True, "rating": rating}))
        logger.info("Marked book {} as read", book_id)

    async def set_rating(self, book_id: int, rating: int) -> None:
        """Change the rating only; the read state is left as stored."""
        _require_valid_rating(rating)
        book = await self._fetch(book_id)
        await self._store.update(book.model_copy(update={"rating": rating}))

    async def edit_details(
        self,
        book_id: int,
        title: str | None = None,
        author: str | None = None,
    ) -> None:
        """Update title and/or author; ``None`` keeps the stored value."""
        book = await self._fetch(book_id)
        changes = {}
        if title is not None:
            changes["title"] = title
        if author is not None:
            changes["author"] = author
        await self._store.update(book.model_copy(update=changes))

    async def remove(self, book_id: int) -> None:
        """Delete a book; unknown ids are ignored."""
        if await self._store.delete_by_id(book_id):
            logger.info("Removed book {}", book_id)
