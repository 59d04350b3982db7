"""Shared utilities for CLI commands."""

import asyncio
from collections.abc import Awaitable, Callable
from typing import TypeVar

import typer
from rich.console import Console

from src.booktracker.core.exceptions import BookTrackerError
from src.booktracker.core.services import BookService
from src.booktracker.runtime.app_data import ApplicationDependencies

T = TypeVar("T")

console = Console()


def run_with_service(operation: Callable[[BookService], Awaitable[T]]) -> T:
    """Run ``operation`` against a freshly wired service.

    Domain errors are printed and turned into exit code 1; anything else
    propagates.
    """
    dependencies = ApplicationDependencies.build()
    try:
        return asyncio.run(operation(dependencies.book_service))
    except BookTrackerError as e:
        console.print(f"[red]❌ {e.message}[/red]")
        raise typer.Exit(code=1) from e
    finally:
        dependencies.close()
