"""Push-based live queries.

A live query yields an initial snapshot as soon as it is iterated and a
fresh snapshot after every change broadcast by its ``ChangeNotifier``.
Changes that arrive while the consumer is still handling the previous
snapshot are coalesced into a single re-emission.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from types import TracebackType
from typing import Generic, TypeVar

from loguru import logger

T = TypeVar("T")


class ChangeNotifier:
    """Fan-out of "something was committed" to every registered listener."""

    def __init__(self) -> None:
        self._listeners: set[asyncio.Event] = set()

    def register(self) -> asyncio.Event:
        event = asyncio.Event()
        self._listeners.add(event)
        return event

    def unregister(self, event: asyncio.Event) -> None:
        self._listeners.discard(event)

    def notify(self) -> None:
        for event in list(self._listeners):
            event.set()

    @property
    def listener_count(self) -> int:
        return len(self._listeners)


class LiveQuery(Generic[T]):
    """Async iterator over successive results of ``compute``.

    Registration with the notifier happens before the initial snapshot is
    computed, so a commit racing with the first read is never missed. A
    live query is single-use: once closed it stops iterating for good.

    Example:
        async with store.observe_all() as live:
            async for books in live:
                render(books)
    """

    def __init__(
        self,
        notifier: ChangeNotifier,
        compute: Callable[[], Awaitable[T]],
        name: str = "query",
    ) -> None:
        self._notifier = notifier
        self._compute = compute
        self._name = name
        self._changed: asyncio.Event | None = None
        self._closed = False

    @property
    def name(self) -> str:
        return self._name

    @property
    def closed(self) -> bool:
        return self._closed

    async def first(self) -> T:
        """Return the current result without subscribing."""
        return await self._compute()

    def __aiter__(self) -> LiveQuery[T]:
        return self

    async def __anext__(self) -> T:
        if self._closed:
            raise StopAsyncIteration

        if self._changed is None:
            self._changed = self._notifier.register()
            logger.debug("Live query {} subscribed", self._name)
            return await self._compute()

        await self._changed.wait()
        if self._closed:
            raise StopAsyncIteration
        self._changed.clear()
        return await self._compute()

    async def aclose(self) -> None:
        """Detach from the notifier; a pending ``__anext__`` ends iteration."""
        if self._closed:
            return
        self._closed = True
        if self._changed is not None:
            self._notifier.unregister(self._changed)
            self._changed.set()
            logger.debug("Live query {} detached", self._name)

    async def __aenter__(self) -> LiveQuery[T]:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()
