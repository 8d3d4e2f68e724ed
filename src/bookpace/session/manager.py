"""Reading session management.

Handles starting, pausing, stopping and tracking the active reading
session. The session survives between commands by being saved to a JSON
file; stopping it records the new page on the book and returns the
recomputed plan.
"""

import json
import logging
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Callable, Optional

from ..library.schemas import BookRecord, BookUpdate
from ..library.store import BookStore
from ..pacing.calculator import ReadingPlan, build_plan
from ..pacing.dates import DateLike
from .settings import SessionSettings
from .timer import ReadingTimer, SessionError, utcnow

log = logging.getLogger(__name__)


@dataclass
class ActiveSession:
    """An active reading session."""

    book_id: str
    book_title: str
    start_page: int
    timer: ReadingTimer = field(default_factory=ReadingTimer)

    def to_dict(self) -> dict:
        """Convert to dictionary for persistence."""
        return {
            "book_id": self.book_id,
            "book_title": self.book_title,
            "start_page": self.start_page,
            "timer": self.timer.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "ActiveSession":
        """Create from dictionary."""
        return cls(
            book_id=data["book_id"],
            book_title=data["book_title"],
            start_page=data["start_page"],
            timer=ReadingTimer.from_dict(data.get("timer", {})),
        )


@dataclass
class SessionSummary:
    """Result of a finished session."""

    book_title: str
    start_page: int
    end_page: int
    duration_seconds: int
    plan: ReadingPlan

    @property
    def pages_read(self) -> int:
        return max(0, self.end_page - self.start_page)


class SessionManager:
    """Manages the active reading session."""

    def __init__(
        self,
        store: BookStore,
        session_file: Path,
        clock: Callable[[], datetime] = utcnow,
    ):
        """Initialize session manager.

        Args:
            store: Book library
            session_file: Path to persist the active session
            clock: Source of the current instant (injectable for tests)
        """
        self.store = store
        self.session_file = Path(session_file)
        self.clock = clock
        self._active_session: Optional[ActiveSession] = None
        self._load_session()

    def _load_session(self) -> None:
        """Load active session from file if exists."""
        if self.session_file.exists():
            try:
                with open(self.session_file, "r", encoding="utf-8") as f:
                    self._active_session = ActiveSession.from_dict(json.load(f))
            except (OSError, AttributeError, KeyError, TypeError, ValueError) as e:
                log.warning("Discarding unreadable session file %s: %s", self.session_file, e)
                self._active_session = None

    def _save_session(self) -> None:
        """Save active session to file, or remove the file when idle."""
        if self._active_session:
            self.session_file.parent.mkdir(parents=True, exist_ok=True)
            with open(self.session_file, "w", encoding="utf-8") as f:
                json.dump(self._active_session.to_dict(), f)
        elif self.session_file.exists():
            self.session_file.unlink()

    def _require_session(self) -> ActiveSession:
        if not self._active_session:
            raise SessionError("No active reading session")
        return self._active_session

    @property
    def active_session(self) -> Optional[ActiveSession]:
        """Get active reading session."""
        return self._active_session

    def has_active_session(self) -> bool:
        return self._active_session is not None

    def start_session(
        self, book_id: str, settings: Optional[SessionSettings] = None
    ) -> ActiveSession:
        """Start a new reading session.

        Args:
            book_id: ID of the book being read
            settings: Timer preferences (default: stopwatch)

        Returns:
            New ActiveSession

        Raises:
            SessionError: If a session is already running or the book is unknown
        """
        if self._active_session:
            raise SessionError(
                f"Already reading '{self._active_session.book_title}'. "
                "Stop the current session first."
            )

        book = self.store.get_book(book_id)
        if not book:
            raise SessionError(f"Book not found: {book_id}")

        settings = settings or SessionSettings()
        timer = ReadingTimer(
            countdown=settings.countdown_mode,
            duration_minutes=settings.duration_minutes,
        )
        timer.start(self.clock())

        self._active_session = ActiveSession(
            book_id=book.id,
            book_title=book.display_title,
            start_page=book.current_page,
            timer=timer,
        )
        self._save_session()
        log.info("Started session for %s", book.id)
        return self._active_session

    def pause_session(self) -> ActiveSession:
        session = self._require_session()
        session.timer.pause(self.clock())
        self._save_session()
        return session

    def resume_session(self) -> ActiveSession:
        session = self._require_session()
        session.timer.resume(self.clock())
        self._save_session()
        return session

    def stop_session(
        self, end_page: Optional[int] = None, today: Optional[DateLike] = None
    ) -> SessionSummary:
        """Stop the active session and record progress.

        Args:
            end_page: Page reached; the book's page is left as-is when None
            today: Day to compute the new plan for (default: local date)

        Returns:
            SessionSummary with the plan recomputed from the updated book

        Raises:
            SessionError: If there is no active session or the book is gone
        """
        session = self._require_session()
        duration = session.timer.elapsed_seconds(self.clock())

        if end_page is not None and end_page < 0:
            raise SessionError("End page cannot be negative")

        book: Optional[BookRecord] = self.store.get_book(session.book_id)
        if not book:
            self._active_session = None
            self._save_session()
            raise SessionError(f"Book no longer exists: {session.book_title}")

        if end_page is not None:
            book = self.store.update_book(book.id, BookUpdate(current_page=end_page))

        self._active_session = None
        self._save_session()
        log.info("Stopped session for %s after %ds", book.id, duration)

        return SessionSummary(
            book_title=book.display_title,
            start_page=session.start_page,
            end_page=book.current_page,
            duration_seconds=duration,
            plan=build_plan(book, today),
        )

    def cancel_session(self) -> bool:
        """Cancel the active session without recording progress.

        Returns:
            True if session was cancelled, False if no active session
        """
        if not self._active_session:
            return False

        self._active_session = None
        self._save_session()
        return True
