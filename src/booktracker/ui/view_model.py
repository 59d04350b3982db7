"""Observable state for the book list screen.

``BookListViewModel`` keeps the latest result of ``BookService.list_all``
and shares one live query between all of its observers. When the last
observer detaches the live query is kept running for a grace period, so a
screen that is torn down and immediately recreated does not re-query from
scratch. Once the grace period expires the live query is closed; the next
observer starts a new one.
"""

from __future__ import annotations

import asyncio
import contextlib
from collections.abc import Callable

from loguru import logger

from src.booktracker.core.services.book_service import BookService
from src.booktracker.core.storage.live_query import LiveQuery
from src.booktracker.entities.book import Book
from src.booktracker.runtime.context import get_config

BooksCallback = Callable[[list[Book]], None]


class ViewModelSubscription:
    """Handle returned by ``BookListViewModel.subscribe``."""

    def __init__(self, owner: BookListViewModel, callback: BooksCallback) -> None:
        self._owner = owner
        self._callback = callback
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def deliver(self, books: list[Book]) -> None:
        if not self._closed:
            self._callback(books)

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self._owner._detach(self)


class BookListViewModel:
    """Latest list of all books, newest first.

    Must be used from inside a running event loop.
    """

    def __init__(self, service: BookService, stop_timeout_ms: int | None = None) -> None:
        if stop_timeout_ms is None:
            stop_timeout_ms = get_config().view_model.stop_timeout_ms
        self._service = service
        self._stop_timeout = stop_timeout_ms / 1000
        self._books: list[Book] = []
        self._observers: list[ViewModelSubscription] = []
        self._live: LiveQuery[list[Book]] | None = None
        self._collector: asyncio.Task[None] | None = None
        self._teardown: asyncio.TimerHandle | None = None
        self._error: Exception | None = None

    @property
    def books(self) -> list[Book]:
        return self._books

    @property
    def is_active(self) -> bool:
        """Whether the underlying live query is running."""
        return self._collector is not None and not self._collector.done()

    @property
    def error(self) -> Exception | None:
        """Failure of the last collection, cleared when a new one starts."""
        return self._error

    @property
    def observer_count(self) -> int:
        return len(self._observers)

    def subscribe(self, callback: BooksCallback) -> ViewModelSubscription:
        """Attach an observer; it receives the current value right away."""
        subscription = ViewModelSubscription(self, callback)
        self._observers.append(subscription)
        self._cancel_teardown()
        if not self.is_active:
            self._start()
        subscription.deliver(self._books)
        return subscription

    def _start(self) -> None:
        self._error = None
        live = self._service.list_all()
        self._live = live
        self._collector = asyncio.get_running_loop().create_task(self._collect(live))
        logger.debug("Book list collection started")

    async def _collect(self, live: LiveQuery[list[Book]]) -> None:
        try:
            async for books in live:
                self._books = books
                for subscription in list(self._observers):
                    subscription.deliver(books)
        except Exception as exc:
            # Observers keep the last value; the next subscribe restarts collection
            self._error = exc
            logger.exception("Book list collection failed")
        finally:
            await live.aclose()

    def _detach(self, subscription: ViewModelSubscription) -> None:
        if subscription not in self._observers:
            return
        self._observers.remove(subscription)
        if not self._observers and self.is_active:
            loop = asyncio.get_running_loop()
            self._teardown = loop.call_later(self._stop_timeout, self._stop)

    def _cancel_teardown(self) -> None:
        if self._teardown is not None:
            self._teardown.cancel()
            self._teardown = None

    def _stop(self) -> asyncio.Task[None] | None:
        self._teardown = None
        if self._observers:
            return None
        collector = self._collector
        self._collector = None
        self._live = None
        if collector is not None and not collector.done():
            collector.cancel()
            logger.debug("Book list collection stopped")
        return collector

    async def aclose(self) -> None:
        """Detach everyone and stop the live query immediately."""
        self._cancel_teardown()
        for subscription in list(self._observers):
            subscription._closed = True
        self._observers.clear()
        collector = self._stop()
        if collector is not None:
            with contextlib.suppress(asyncio.CancelledError):
                await collector
