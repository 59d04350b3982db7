"""Presentation helpers: the book list view model and rich renderables."""

from .book_list import render_book_list, render_counts, render_empty_state
from .view_model import BookListViewModel, ViewModelSubscription

__all__ = [
    "BookListViewModel",
    "ViewModelSubscription",
    "render_book_list",
    "render_counts",
    "render_empty_state",
]
