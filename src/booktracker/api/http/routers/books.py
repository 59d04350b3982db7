"""Book API router."""

from enum import Enum

from fastapi import APIRouter, Depends, HTTPException, Response
from pydantic import BaseModel, Field

from src.booktracker.api.http.deps import get_book_service
from src.booktracker.core.services import BookService
from src.booktracker.entities.book import Book

router = APIRouter(prefix="/books", tags=["books"])


class Shelf(str, Enum):
    all = "all"
    unread = "unread"
    read = "read"


class NewBook(BaseModel):
    title: str = Field(description="Title")
    author: str | None = Field(default=None, description="Author")


class NewReadBook(NewBook):
    rating: int = Field(description="Star rating, 1-5")


class RatingUpdate(BaseModel):
    rating: int = Field(description="Star rating, 1-5")


class DetailsUpdate(BaseModel):
    title: str | None = None
    author: str | None = None


class CreatedBook(BaseModel):
    id: int


class ShelfCounts(BaseModel):
    unread: int
    read: int


async def _current(service: BookService, book_id: int) -> Book:
    book = await service.get(book_id).first()
    if book is None:
        raise HTTPException(status_code=404, detail=f"Book with id {book_id} not found")
    return book


@router.get("", response_model=list[Book])
async def list_books(
    shelf: Shelf = Shelf.all,
    service: BookService = Depends(get_book_service),
) -> list[Book]:
    """List books on a shelf, newest first."""
    if shelf is Shelf.unread:
        live = service.list_unread()
    elif shelf is Shelf.read:
        live = service.list_read()
    else:
        live = service.list_all()
    return await live.first()


@router.get("/counts", response_model=ShelfCounts)
async def shelf_counts(service: BookService = Depends(get_book_service)) -> ShelfCounts:
    return ShelfCounts(
        unread=await service.count_unread().first(),
        read=await service.count_read().first(),
    )


@router.get("/{book_id}", response_model=Book)
async def get_book(book_id: int, service: BookService = Depends(get_book_service)) -> Book:
    """Get a book by ID."""
    return await _current(service, book_id)


@router.post("", response_model=CreatedBook, status_code=201)
async def add_to_reading_list(
    payload: NewBook, service: BookService = Depends(get_book_service)
) -> CreatedBook:
    book_id = await service.add_unread(payload.title, payload.author)
    return CreatedBook(id=book_id)


@router.post("/read", response_model=CreatedBook, status_code=201)
async def add_read_book(
    payload: NewReadBook, service: BookService = Depends(get_book_service)
) -> CreatedBook:
    book_id = await service.add_read(payload.title, payload.author, rating=payload.rating)
    return CreatedBook(id=book_id)


@router.post("/{book_id}/read", response_model=Book)
async def mark_read(
    book_id: int, payload: RatingUpdate, service: BookService = Depends(get_book_service)
) -> Book:
    await service.mark_read(book_id, payload.rating)
    return await _current(service, book_id)


@router.put("/{book_id}/rating", response_model=Book)
async def set_rating(
    book_id: int, payload: RatingUpdate, service: BookService = Depends(get_book_service)
) -> Book:
    await service.set_rating(book_id, payload.rating)
    return await _current(service, book_id)


@router.patch("/{book_id}", response_model=Book)
async def edit_details(
    book_id: int, payload: DetailsUpdate, service: BookService = Depends(get_book_service)
) -> Book:
    await service.edit_details(book_id, title=payload.title, author=payload.author)
    return await _current(service, book_id)


@router.delete("/{book_id}", status_code=204)
async def remove_book(book_id: int, service: BookService = Depends(get_book_service)) -> Response:
    """Delete a book. Unknown ids succeed as well."""
    await service.remove(book_id)
    return Response(status_code=204)
