"""JSON-file storage for book records.

Books are kept as a flat, ordered list of records keyed by ``id``. The
store only loads and saves records; pacing numbers are never persisted
and are recomputed by callers from the current records.
"""

import json
import logging
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from ..pacing.dates import end_of_current_month
from .schemas import BookCreate, BookRecord, BookUpdate

log = logging.getLogger(__name__)


class LibraryError(Exception):
    """Raised when the book library cannot be read or changed."""

    pass


class BookNotFoundError(LibraryError):
    """Raised when no book matches the given id."""

    pass


def example_book() -> BookRecord:
    """The record a brand new library starts with."""
    return BookRecord(
        title="Example Book",
        total_pages=300,
        current_page=50,
        target_date=end_of_current_month(),
    )


class BookStore:
    """Loads and saves the book list."""

    def __init__(self, path: Path, seed_example: bool = True):
        """Initialize the store.

        Args:
            path: JSON file holding the book list
            seed_example: Start a missing library with an example book
        """
        self.path = Path(path)
        self.seed_example = seed_example
        self._books: list[BookRecord] = []
        self._load()

    def _load(self) -> None:
        """Load books from file."""
        if not self.path.exists():
            self._books = []
            if self.seed_example:
                self._books.append(example_book())
                self._save()
            return

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
            self._books = [BookRecord.model_validate(item) for item in data]
        except (OSError, UnicodeDecodeError, json.JSONDecodeError, TypeError,
                ValidationError) as e:
            log.error("Cannot read library %s: %s", self.path, e)
            raise LibraryError(f"Library file is corrupted: {self.path}") from e

        log.debug("Loaded %d books from %s", len(self._books), self.path)

    def _save(self) -> None:
        """Save books to file."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump([b.model_dump(mode="json") for b in self._books], f, indent=2)

    def _index_of(self, book_id: str) -> Optional[int]:
        for i, book in enumerate(self._books):
            if book.id == book_id:
                return i
        return None

    # ========================================================================
    # Queries
    # ========================================================================

    def list_books(self) -> list[BookRecord]:
        """Get all books in library order."""
        return list(self._books)

    def get_book(self, book_id: str) -> Optional[BookRecord]:
        """Get a book by id."""
        index = self._index_of(book_id)
        return self._books[index] if index is not None else None

    def find_books(self, query: str) -> list[BookRecord]:
        """Find books by exact id, id prefix, or title substring.

        Args:
            query: Id, id prefix, or case-insensitive part of the title

        Returns:
            Matching books in library order
        """
        exact = self.get_book(query)
        if exact:
            return [exact]

        needle = query.strip().lower()
        if not needle:
            return []
        return [
            b for b in self._books
            if b.id.startswith(needle) or needle in b.title.lower()
        ]

    # ========================================================================
    # Mutations
    # ========================================================================

    def add_book(self, book_data: BookCreate) -> BookRecord:
        """Add a book to the end of the library."""
        book = BookRecord(**book_data.model_dump())
        self._books.append(book)
        self._save()
        log.info("Added book %s (%s)", book.id, book.display_title)
        return book

    def update_book(self, book_id: str, book_data: BookUpdate) -> BookRecord:
        """Apply the set fields of an update to a book.

        Raises:
            BookNotFoundError: If the id is unknown
        """
        index = self._index_of(book_id)
        if index is None:
            raise BookNotFoundError(f"Book not found: {book_id}")

        changes = book_data.model_dump(exclude_unset=True, exclude_none=True)
        book = self._books[index].model_copy(update=changes)
        self._books[index] = book
        self._save()
        log.info("Updated book %s: %s", book_id, ", ".join(sorted(changes)) or "no changes")
        return book

    def delete_book(self, book_id: str) -> bool:
        """Delete a book.

        Returns:
            True if deleted, False if not found
        """
        initial_count = len(self._books)
        self._books = [b for b in self._books if b.id != book_id]

        if len(self._books) < initial_count:
            self._save()
            log.info("Deleted book %s", book_id)
            return True
        return False
