"""Unit tests for the book service."""

import asyncio

import pytest

from src.booktracker.core.exceptions import InvalidArgumentError, NotFoundError
from src.booktracker.core.services import BookService
from src.booktracker.core.storage import BookStore
from src.booktracker.entities.book import Book

INVALID_RATINGS = [0, 6, -1]


async def snapshot(service: BookService) -> tuple[int, int, int]:
    """(total, unread, read) counts."""
    return (
        len(await service.list_all().first()),
        await service.count_unread().first(),
        await service.count_read().first(),
    )


class TestAddBooks:
    """Test the two creation entry points."""

    @pytest.mark.asyncio
    async def test_add_unread(self, service: BookService):
        book_id = await service.add_unread("The Hobbit", "J.R.R. Tolkien")

        book = await service.get(book_id).first()
        assert book.title == "The Hobbit"
        assert book.author == "J.R.R. Tolkien"
        assert book.is_read is False
        assert book.rating is None

    @pytest.mark.asyncio
    async def test_add_unread_without_author(self, service: BookService):
        book_id = await service.add_unread("Anonymous")

        assert (await service.get(book_id).first()).author is None

    @pytest.mark.asyncio
    @pytest.mark.parametrize("rating", [1, 2, 3, 4, 5])
    async def test_add_read_with_valid_rating(self, service: BookService, rating: int):
        book_id = await service.add_read("Dune", "Frank Herbert", rating=rating)

        book = await service.get(book_id).first()
        assert book.is_read is True
        assert book.rating == rating

    @pytest.mark.asyncio
    @pytest.mark.parametrize("rating", INVALID_RATINGS)
    async def test_add_read_rejects_invalid_rating(self, service: BookService, rating: int):
        before = await snapshot(service)

        with pytest.raises(InvalidArgumentError, match="Rating must be between 1 and 5"):
            await service.add_read("Dune", rating=rating)

        assert await snapshot(service) == before

    @pytest.mark.asyncio
    async def test_ids_are_distinct(self, service: BookService):
        first = await service.add_unread("One")
        second = await service.add_unread("Two")

        assert first != second


class TestMarkRead:
    """Test moving books to the read list."""

    @pytest.mark.asyncio
    async def test_mark_read_moves_book_between_lists(self, service: BookService):
        book_id = await service.add_unread("X")
        unread_before = await service.count_unread().first()
        read_before = await service.count_read().first()

        await service.mark_read(book_id, 4)

        read_ids = [book.id for book in await service.list_read().first()]
        unread_ids = [book.id for book in await service.list_unread().first()]
        assert book_id in read_ids
        assert book_id not in unread_ids
        assert await service.count_unread().first() == unread_before - 1
        assert await service.count_read().first() == read_before + 1

    @pytest.mark.asyncio
    async def test_mark_read_preserves_other_fields(self, service: BookService, store: BookStore):
        book_id = await store.insert(Book(title="Kept", author="Author", created_at=1234))

        await service.mark_read(book_id, 5)

        book = await service.get(book_id).first()
        assert book == Book(
            id=book_id, title="Kept", author="Author", created_at=1234, is_read=True, rating=5
        )

    @pytest.mark.asyncio
    async def test_mark_read_missing_book(self, service: BookService):
        with pytest.raises(NotFoundError, match="Book with id 999 not found"):
            await service.mark_read(999, 3)

        assert await snapshot(service) == (0, 0, 0)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("rating", INVALID_RATINGS)
    async def test_mark_read_rejects_invalid_rating(self, service: BookService, rating: int):
        book_id = await service.add_unread("X")
        before = await snapshot(service)

        with pytest.raises(InvalidArgumentError):
            await service.mark_read(book_id, rating)

        assert await snapshot(service) == before
        assert (await service.get(book_id).first()).is_read is False

    @pytest.mark.asyncio
    async def test_rating_is_checked_before_lookup(self, service: BookService):
        with pytest.raises(InvalidArgumentError):
            await service.mark_read(999, 0)


class TestSetRating:
    """Test rating changes."""

    @pytest.mark.asyncio
    async def test_set_rating_keeps_read_state(self, service: BookService):
        book_id = await service.add_read("Read", rating=2)

        await service.set_rating(book_id, 5)

        book = await service.get(book_id).first()
        assert book.rating == 5
        assert book.is_read is True

    @pytest.mark.asyncio
    async def test_set_rating_on_unread_book_leaves_it_unread(self, service: BookService):
        book_id = await service.add_unread("Unread")

        await service.set_rating(book_id, 3)

        book = await service.get(book_id).first()
        assert book.rating == 3
        assert book.is_read is False

    @pytest.mark.asyncio
    @pytest.mark.parametrize("rating", INVALID_RATINGS)
    async def test_set_rating_rejects_invalid_rating(self, service: BookService, rating: int):
        book_id = await service.add_read("Read", rating=2)

        with pytest.raises(InvalidArgumentError):
            await service.set_rating(book_id, rating)

        assert (await service.get(book_id).first()).rating == 2

    @pytest.mark.asyncio
    async def test_set_rating_missing_book(self, service: BookService):
        with pytest.raises(NotFoundError):
            await service.set_rating(7, 3)


class TestEditDetails:
    """Test partial title/author updates."""

    @pytest.mark.asyncio
    async def test_edit_title_preserves_author(self, service: BookService):
        book_id = await service.add_unread("Old", "Original Author")

        await service.edit_details(book_id, title="New")

        book = await service.get(book_id).first()
        assert book.title == "New"
        assert book.author == "Original Author"

    @pytest.mark.asyncio
    async def test_edit_author_preserves_title(self, service: BookService):
        book_id = await service.add_unread("Original Title", "Old")

        await service.edit_details(book_id, author="New")

        book = await service.get(book_id).first()
        assert book.title == "Original Title"
        assert book.author == "New"

    @pytest.mark.asyncio
    async def test_edit_keeps_read_state_rating_and_timestamp(self, service: BookService):
        book_id = await service.add_read("Title", "Author", rating=4)
        before = await service.get(book_id).first()

        await service.edit_details(book_id, title="Renamed", author="Someone")

        after = await service.get(book_id).first()
        assert after == before.model_copy(update={"title": "Renamed", "author": "Someone"})

    @pytest.mark.asyncio
    async def test_edit_missing_book(self, service: BookService):
        with pytest.raises(NotFoundError):
            await service.edit_details(3, title="Nope")


class TestRemoveAndOrdering:
    """Test deletion and list ordering."""

    @pytest.mark.asyncio
    async def test_remove(self, service: BookService):
        book_id = await service.add_unread("Gone")

        await service.remove(book_id)

        assert await service.get(book_id).first() is None

    @pytest.mark.asyncio
    async def test_remove_missing_is_noop(self, service: BookService):
        await service.add_unread("Stays")

        await service.remove(999)

        assert len(await service.list_all().first()) == 1

    @pytest.mark.asyncio
    async def test_list_all_newest_first(self, service: BookService, store: BookStore):
        await store.insert(Book(title="1000", created_at=1000))
        await store.insert(Book(title="3000", created_at=3000))
        await store.insert(Book(title="2000", created_at=2000))

        titles = [book.title for book in await service.list_all().first()]
        assert titles == ["3000", "2000", "1000"]


class TestLiveResults:
    """Test that service reads are live."""

    @pytest.mark.asyncio
    async def test_list_all_emits_after_insert(self, service: BookService):
        async with service.list_all() as live:
            assert await anext(live) == []

            book_id = await service.add_unread("First")

            books = await asyncio.wait_for(anext(live), timeout=1)
            assert [book.id for book in books] == [book_id]

    @pytest.mark.asyncio
    async def test_get_emits_updates(self, service: BookService):
        book_id = await service.add_unread("Watched")

        async with service.get(book_id) as live:
            assert (await anext(live)).is_read is False

            await service.mark_read(book_id, 3)

            book = await asyncio.wait_for(anext(live), timeout=1)
            assert book.is_read is True
            assert book.rating == 3

    @pytest.mark.asyncio
    async def test_concurrent_updates_to_different_fields(self, service: BookService):
        book_id = await service.add_unread("Title", "Author")

        await asyncio.gather(
            service.mark_read(book_id, 4),
            service.edit_details(book_id, title="Renamed"),
        )

        book = await service.get(book_id).first()
        assert book.title in ("Title", "Renamed")
        assert book.author == "Author"
