"""Persisted reading-session preferences."""

import json
import logging
from pathlib import Path
from typing import Any, Optional, Sequence

from pydantic import BaseModel, Field, ValidationError

from ..library.schemas import BookRecord
from .music import PLAYLIST

log = logging.getLogger(__name__)


class SessionSettings(BaseModel):
    """Timer and music preferences for reading sessions."""

    countdown_mode: bool = False
    duration_minutes: int = Field(default=30, ge=1, le=24 * 60)
    music_enabled: bool = False
    track_index: int = Field(default=0, ge=0, lt=len(PLAYLIST))
    volume: float = Field(default=0.5, ge=0.0, le=1.0)
    session_book_id: Optional[str] = None


class SettingsStore:
    """Loads and saves session settings as JSON."""

    def __init__(self, path: Path):
        self.path = Path(path)

    def load(self) -> SessionSettings:
        """Load settings, falling back to defaults if missing or unreadable."""
        if not self.path.exists():
            return SessionSettings()
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                return SessionSettings.model_validate(json.load(f))
        except (OSError, UnicodeDecodeError, json.JSONDecodeError, ValidationError) as e:
            log.warning("Ignoring unreadable settings %s: %s", self.path, e)
            return SessionSettings()

    def save(self, settings: SessionSettings) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(settings.model_dump(mode="json"), f, indent=2)

    def update(self, **changes: Any) -> SessionSettings:
        """Validate and persist changes to the stored settings.

        Raises:
            ValidationError: If a value is out of range
        """
        current = self.load()
        settings = SessionSettings.model_validate({**current.model_dump(), **changes})
        self.save(settings)
        return settings


def resolve_session_book(
    books: Sequence[BookRecord], book_id: Optional[str]
) -> Optional[BookRecord]:
    """Pick the book a session should use.

    The selected book if it still exists, else the first book in the
    library, else None.
    """
    if book_id:
        for book in books:
            if book.id == book_id:
                return book
    return books[0] if books else None
