"""Book records and their JSON storage."""

from .schemas import BookCreate, BookRecord, BookUpdate
from .store import BookNotFoundError, BookStore, LibraryError

__all__ = [
    "BookCreate",
    "BookRecord",
    "BookUpdate",
    "BookStore",
    "BookNotFoundError",
    "LibraryError",
]
