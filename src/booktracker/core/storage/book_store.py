"""Record store for books.

The store is the only owner of book rows. Every public operation is a
coroutine; blocking database work runs on a worker thread while an
``asyncio.Lock`` serializes access to the shared engine. After each write
that changed at least one row, all active live queries are notified.

Database work is shielded from cancellation: a caller that is cancelled
mid-write stops waiting, but the thread finishes, the lock is held until it
does, and a committed write still notifies.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable, Sequence
from typing import TYPE_CHECKING, Any, TypeVar

from loguru import logger

from src.booktracker.core.storage.live_query import ChangeNotifier, LiveQuery
from src.booktracker.entities.book import Book, BookRepository

if TYPE_CHECKING:
    from src.booktracker.core.services.database.db_session import DbSessionService

T = TypeVar("T")


class BookStore:
    """Durable single-table storage with change notification."""

    def __init__(self, db_service: DbSessionService) -> None:
        self._db = db_service
        self._lock = asyncio.Lock()
        self._notifier = ChangeNotifier()
        self._in_flight: set[asyncio.Task[Any]] = set()

    @property
    def notifier(self) -> ChangeNotifier:
        return self._notifier

    def _run(self, operation: Callable[[BookRepository], T]) -> T:
        with self._db.session_scope() as session:
            return operation(BookRepository(session))

    async def _locked(
        self,
        operation: Callable[[BookRepository], T],
        on_commit: Callable[[T], None] | None,
    ) -> T:
        async with self._lock:
            result = await asyncio.to_thread(self._run, operation)
        if on_commit is not None:
            on_commit(result)
        return result

    def _forget(self, task: asyncio.Task[Any]) -> None:
        self._in_flight.discard(task)
        if not task.cancelled():
            # Failures were logged by session_scope; an abandoned caller cannot see them
            task.exception()

    async def _execute(
        self,
        operation: Callable[[BookRepository], T],
        on_commit: Callable[[T], None] | None = None,
    ) -> T:
        task = asyncio.ensure_future(self._locked(operation, on_commit))
        self._in_flight.add(task)
        task.add_done_callback(self._forget)
        return await asyncio.shield(task)

    def _committed(self, action: str, **fields) -> None:
        logger.debug("Book store commit: {}", action, **fields)
        self._notifier.notify()

    def _notify_if_changed(self, action: str, **fields) -> Callable[[bool], None]:
        def _notify(changed: bool) -> None:
            if changed:
                self._committed(action, **fields)

        return _notify

    # Mutations

    async def insert(self, book: Book) -> int:
        """Insert one book and return the id assigned to it."""
        created = await self._execute(
            lambda repo: repo.create(book),
            lambda created: self._committed("insert", book_id=created.id),
        )
        if created.id is None:
            raise RuntimeError("Database did not assign an id to the inserted book")
        return created.id

    async def insert_many(self, books: Sequence[Book]) -> list[int]:
        """Insert all books in one transaction."""
        if not books:
            return []
        created = await self._execute(
            lambda repo: repo.create_many(books),
            lambda created: self._committed("insert_many", count=len(created)),
        )
        return [book.id for book in created if book.id is not None]

    async def update(self, book: Book) -> bool:
        """Replace the stored row with ``book.id``; False if it does not exist."""
        return await self._execute(
            lambda repo: repo.update(book),
            self._notify_if_changed("update", book_id=book.id),
        )

    async def delete(self, book: Book) -> bool:
        return await self._execute(
            lambda repo: repo.delete(book),
            self._notify_if_changed("delete", book_id=book.id),
        )

    async def delete_by_id(self, book_id: int) -> bool:
        return await self._execute(
            lambda repo: repo.delete_by_id(book_id),
            self._notify_if_changed("delete", book_id=book_id),
        )

    # Reads

    async def find(self, book_id: int) -> Book | None:
        """One-shot lookup of the current row."""
        return await self._execute(lambda repo: repo.get(book_id))

    def _live(self, name: str, operation: Callable[[BookRepository], T]) -> LiveQuery[T]:
        return LiveQuery(self._notifier, lambda: self._execute(operation), name=name)

    def observe_all(self) -> LiveQuery[list[Book]]:
        return self._live("all", lambda repo: repo.list_all())

    def observe_unread(self) -> LiveQuery[list[Book]]:
        return self._live("unread", lambda repo: repo.list_by_read_state(False))

    def observe_read(self) -> LiveQuery[list[Book]]:
        return self._live("read", lambda repo: repo.list_by_read_state(True))

    def observe_by_id(self, book_id: int) -> LiveQuery[Book | None]:
        return self._live(f"book:{book_id}", lambda repo: repo.get(book_id))

    def observe_unread_count(self) -> LiveQuery[int]:
        return self._live("unread_count", lambda repo: repo.count_by_read_state(False))

    def observe_read_count(self) -> LiveQuery[int]:
        return self._live("read_count", lambda repo: repo.count_by_read_state(True))
