"""Main CLI application module."""

import typer

from src.booktracker.runtime.logging_setup import configure_logging
from src.booktracker.cli.book_commands import books_app
from src.booktracker.cli.utils import console
from src.booktracker.runtime.context import get_config
from src.booktracker.runtime.init_db import init_db as create_tables

app = typer.Typer(
    help="📚 Book Tracker - reading list and read books",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

app.add_typer(books_app, name="books")


@app.callback()
def setup() -> None:
    configure_logging()


@app.command("init-db")
def init_db() -> None:
    """Create the database tables."""
    url = create_tables()
    console.print(f"[green]✅ Database ready at {url}[/green]")


@app.command("serve")
def serve(
    host: str | None = typer.Option(None, "--host", help="Bind address (defaults to config)"),
    port: int | None = typer.Option(None, "--port", "-p", help="Port (defaults to config)"),
) -> None:
    """Run the HTTP API."""
    import uvicorn

    config = get_config()
    uvicorn.run(
        "src.booktracker.api.http.app:create_app",
        factory=True,
        host=host or config.app.host,
        port=port or config.app.port,
    )


def main() -> None:
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
