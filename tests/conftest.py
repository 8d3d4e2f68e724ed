"""Pytest configuration and shared fixtures.

Provides a fixed evaluation day, book factories, temporary stores and an
isolated environment for CLI tests.
"""

from datetime import date, datetime, timedelta, timezone
from pathlib import Path
from typing import Generator

import pytest

from bookpace.config import reset_config
from bookpace.library import BookCreate, BookRecord, BookStore
from bookpace.session import SettingsStore

TODAY = date(2024, 3, 15)


# ============================================================================
# Date Fixtures
# ============================================================================


@pytest.fixture
def today() -> date:
    """The fixed evaluation day used by pacing tests."""
    return TODAY


class FakeClock:
    """A controllable clock for session tests."""

    def __init__(self, start: datetime):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(datetime(2024, 3, 15, 20, 0, tzinfo=timezone.utc))


# ============================================================================
# Sample Data Fixtures
# ============================================================================


@pytest.fixture
def make_book():
    """Factory for book records."""

    def _make(
        total_pages: int = 300,
        current_page: int = 50,
        target_date: date = date(2024, 3, 31),
        title: str = "The Great Gatsby",
    ) -> BookRecord:
        return BookRecord(
            title=title,
            total_pages=total_pages,
            current_page=current_page,
            target_date=target_date,
        )

    return _make


# ============================================================================
# Storage Fixtures
# ============================================================================


@pytest.fixture
def books_path(tmp_path: Path) -> Path:
    return tmp_path / "books.json"


@pytest.fixture
def store(books_path: Path) -> BookStore:
    """An empty book store."""
    return BookStore(books_path, seed_example=False)


@pytest.fixture
def created_book(store: BookStore) -> BookRecord:
    """Create and return a book in the store."""
    return store.add_book(
        BookCreate(
            title="Project Hail Mary",
            total_pages=496,
            current_page=100,
            target_date=date(2024, 3, 31),
        )
    )


@pytest.fixture
def settings_store(tmp_path: Path) -> SettingsStore:
    return SettingsStore(tmp_path / "settings.json")


# ============================================================================
# CLI Testing Fixtures
# ============================================================================


@pytest.fixture
def cli_env(tmp_path: Path, monkeypatch) -> Generator[Path, None, None]:
    """Point the CLI at a temporary data directory."""
    data_dir = tmp_path / "data"
    monkeypatch.setenv("BOOKPACE_DATA_DIR", str(data_dir))
    monkeypatch.setenv("BOOKPACE_SEED_EXAMPLE", "false")
    for var in ("BOOKPACE_BOOKS_PATH", "BOOKPACE_SETTINGS_PATH",
                "BOOKPACE_SESSION_PATH", "BOOKPACE_LOG_PATH",
                "GEMINI_API_KEY", "API_KEY"):
        monkeypatch.delenv(var, raising=False)
    reset_config()
    yield data_dir
    reset_config()


@pytest.fixture
def cli_runner():
    """Create a Typer CLI test runner."""
    from typer.testing import CliRunner
    return CliRunner()
