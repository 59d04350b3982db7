"""Rich renderables for book lists."""

from rich.console import Group, RenderableType
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from src.booktracker.entities.book import Book

EMPTY_TITLE = "No books yet"
EMPTY_HINT = "Start adding books to your reading list!"


def render_empty_state() -> RenderableType:
    return Panel(
        Group(
            Text("📚", justify="center"),
            Text(EMPTY_TITLE, style="bold", justify="center"),
            Text(EMPTY_HINT, style="dim", justify="center"),
        ),
        expand=False,
    )


def render_book_list(books: list[Book], title: str = "My Books") -> RenderableType:
    """Table of books, or the empty-state panel when there are none."""
    if not books:
        return render_empty_state()

    table = Table(title=title)
    table.add_column("ID", style="cyan", justify="right")
    table.add_column("Title", style="bold")
    table.add_column("Author", style="magenta")
    table.add_column("Status")

    for book in books:
        status_style = "green" if book.is_read else "yellow"
        table.add_row(
            str(book.id),
            book.title,
            book.author or "",
            Text(book.status_label, style=status_style),
        )

    return table


def render_counts(unread: int, read: int) -> RenderableType:
    table = Table(title="Shelves", show_header=False)
    table.add_column("Shelf", style="cyan")
    table.add_column("Books", justify="right")
    table.add_row("Reading list", str(unread))
    table.add_row("Read", str(read))
    return table
