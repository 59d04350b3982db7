"""Book management CLI commands."""

from enum import Enum

import typer

from src.booktracker.cli.utils import console, run_with_service
from src.booktracker.core.services import BookService
from src.booktracker.entities.book import Book
from src.booktracker.ui.book_list import render_book_list, render_counts

books_app = typer.Typer(help="📚 Manage your reading list and read books")


class Shelf(str, Enum):
    all = "all"
    unread = "unread"
    read = "read"


@books_app.command("list")
def list_books(
    shelf: Shelf = typer.Option(Shelf.all, "--shelf", "-s", help="Which shelf to show"),
) -> None:
    """List books, newest first."""

    async def _list(service: BookService) -> list[Book]:
        if shelf is Shelf.unread:
            return await service.list_unread().first()
        if shelf is Shelf.read:
            return await service.list_read().first()
        return await service.list_all().first()

    books = run_with_service(_list)
    console.print(render_book_list(books))


@books_app.command("counts")
def counts() -> None:
    """Show how many books are on each shelf."""

    async def _counts(service: BookService) -> tuple[int, int]:
        return await service.count_unread().first(), await service.count_read().first()

    unread, read = run_with_service(_counts)
    console.print(render_counts(unread, read))


@books_app.command("show")
def show(book_id: int = typer.Argument(..., help="Book ID")) -> None:
    """Show a single book."""

    async def _show(service: BookService) -> Book | None:
        return await service.get(book_id).first()

    book = run_with_service(_show)
    if book is None:
        console.print(f"[yellow]No book with id {book_id}[/yellow]")
        raise typer.Exit(code=1)
    console.print(render_book_list([book], title=book.title))


@books_app.command("add")
def add(
    title: str = typer.Argument(..., help="Book title"),
    author: str | None = typer.Option(None, "--author", "-a", help="Author"),
) -> None:
    """Add a book to the reading list."""
    book_id = run_with_service(lambda service: service.add_unread(title, author))
    console.print(f"[green]✅ Added '{title}' to your reading list (id {book_id})[/green]")


@books_app.command("add-read")
def add_read(
    title: str = typer.Argument(..., help="Book title"),
    rating: int = typer.Option(..., "--rating", "-r", help="Star rating, 1-5"),
    author: str | None = typer.Option(None, "--author", "-a", help="Author"),
) -> None:
    """Add a book you have already read."""
    book_id = run_with_service(
        lambda service: service.add_read(title, author, rating=rating)
    )
    console.print(f"[green]✅ Added '{title}' as read (id {book_id})[/green]")


@books_app.command("mark-read")
def mark_read(
    book_id: int = typer.Argument(..., help="Book ID"),
    rating: int = typer.Option(..., "--rating", "-r", help="Star rating, 1-5"),
) -> None:
    """Move a book from the reading list to the read list."""
    run_with_service(lambda service: service.mark_read(book_id, rating))
    console.print(f"[green]✅ Marked book {book_id} as read[/green]")


@books_app.command("rate")
def rate(
    book_id: int = typer.Argument(..., help="Book ID"),
    rating: int = typer.Argument(..., help="Star rating, 1-5"),
) -> None:
    """Change a book's rating."""
    run_with_service(lambda service: service.set_rating(book_id, rating))
    console.print(f"[green]✅ Rated book {book_id} {'⭐' * rating}[/green]")


@books_app.command("edit")
def edit(
    book_id: int = typer.Argument(..., help="Book ID"),
    title: str | None = typer.Option(None, "--title", "-t", help="New title"),
    author: str | None = typer.Option(None, "--author", "-a", help="New author"),
) -> None:
    """Edit a book's title and/or author."""
    if title is None and author is None:
        console.print("[yellow]Nothing to change; pass --title and/or --author[/yellow]")
        raise typer.Exit(code=1)
    run_with_service(lambda service: service.edit_details(book_id, title=title, author=author))
    console.print(f"[green]✅ Updated book {book_id}[/green]")


@books_app.command("remove")
def remove(book_id: int = typer.Argument(..., help="Book ID")) -> None:
    """Delete a book."""
    run_with_service(lambda service: service.remove(book_id))
    console.print(f"[green]✅ Removed book {book_id}[/green]")
