"""Data-access layer for books."""

from collections.abc import Iterable

from sqlalchemy import func
from sqlmodel import Session, col, select

from src.booktracker.entities.book.entity import Book
from src.booktracker.entities.book.table import BookTable


class BookRepository:
    """Synchronous queries and single-row mutations on the ``books`` table.

    The repository never commits; the caller owns the transaction.
    """

    def __init__(self, session: Session) -> None:
        self._session = session

    def get(self, book_id: int) -> Book | None:
        row = self._session.get(BookTable, book_id)
        if row is None:
            return None
        return Book.model_validate(row, from_attributes=True)

    def create(self, book: Book) -> Book:
        """Insert a book and return it with its assigned id.

        A caller-supplied id that already exists raises ``IntegrityError``
        on flush rather than overwriting the stored row.
        """
        row = BookTable.model_validate(book.model_dump())
        self._session.add(row)
        self._session.flush()
        self._session.refresh(row)
        return Book.model_validate(row, from_attributes=True)

    def create_many(self, books: Iterable[Book]) -> list[Book]:
        rows = [BookTable.model_validate(book.model_dump()) for book in books]
        self._session.add_all(rows)
        self._session.flush()
        return [Book.model_validate(row, from_attributes=True) for row in rows]

    def update(self, book: Book) -> bool:
        """Replace every column of the row with ``book.id``.

        Returns False without writing anything when the row does not exist.
        """
        if book.id is None:
            return False
        row = self._session.get(BookTable, book.id)
        if row is None:
            return False

        row.title = book.title
        row.author = book.author
        row.rating = book.rating
        row.is_read = book.is_read
        row.created_at = book.created_at
        self._session.add(row)
        self._session.flush()
        return True

    def delete(self, book: Book) -> bool:
        if book.id is None:
            return False
        return self.delete_by_id(book.id)

    def delete_by_id(self, book_id: int) -> bool:
        row = self._session.get(BookTable, book_id)
        if row is None:
            return False
        self._session.delete(row)
        self._session.flush()
        return True

    def list_all(self) -> list[Book]:
        statement = select(BookTable).order_by(
            col(BookTable.created_at).desc(), col(BookTable.id).desc()
        )
        return [
            Book.model_validate(row, from_attributes=True)
            for row in self._session.exec(statement).all()
        ]

    def list_by_read_state(self, is_read: bool) -> list[Book]:
        statement = (
            select(BookTable)
            .where(BookTable.is_read == is_read)
            .order_by(col(BookTable.created_at).desc(), col(BookTable.id).desc())
        )
        return [
            Book.model_validate(row, from_attributes=True)
            for row in self._session.exec(statement).all()
        ]

    def count_by_read_state(self, is_read: bool) -> int:
        statement = (
            select(func.count())
            .select_from(BookTable)
            .where(BookTable.is_read == is_read)
        )
        return self._session.exec(statement).one()
