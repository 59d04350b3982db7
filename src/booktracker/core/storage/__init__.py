"""Record store for books and its live-query machinery."""

from .book_store import BookStore
from .live_query import ChangeNotifier, LiveQuery

__all__ = ["BookStore", "ChangeNotifier", "LiveQuery"]
