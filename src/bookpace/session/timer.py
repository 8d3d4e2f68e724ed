"""Countdown and stopwatch timing for reading sessions.

The timer stores wall-clock instants rather than ticking, so it survives
between CLI invocations: elapsed time is always derived from ``started_at``
minus any time spent paused.
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

TIMER_PRESETS = (10, 15, 30, 45, 60)  # minutes


class SessionError(Exception):
    """Raised for invalid reading-session actions."""

    pass


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def format_duration(total_seconds: int) -> str:
    """Format seconds as MM:SS, or HH:MM:SS from one hour up."""
    total_seconds = max(0, int(total_seconds))
    hours, rest = divmod(total_seconds, 3600)
    minutes, secs = divmod(rest, 60)
    if hours > 0:
        return f"{hours:02d}:{minutes:02d}:{secs:02d}"
    return f"{minutes:02d}:{secs:02d}"


@dataclass
class ReadingTimer:
    """A pausable countdown or stopwatch."""

    countdown: bool = False
    duration_minutes: int = 30
    started_at: Optional[datetime] = None
    paused_at: Optional[datetime] = None
    paused_seconds: float = 0.0

    def __post_init__(self):
        if self.duration_minutes < 1:
            raise ValueError("Timer duration must be at least 1 minute")

    @property
    def is_running(self) -> bool:
        return self.started_at is not None

    @property
    def is_paused(self) -> bool:
        return self.paused_at is not None

    @property
    def duration_seconds(self) -> int:
        return self.duration_minutes * 60

    def start(self, now: Optional[datetime] = None) -> None:
        if self.is_running:
            raise SessionError("Timer already started")
        self.started_at = now or utcnow()
        self.paused_at = None
        self.paused_seconds = 0.0

    def pause(self, now: Optional[datetime] = None) -> None:
        if not self.is_running:
            raise SessionError("Timer not started")
        if self.is_paused:
            raise SessionError("Timer already paused")
        self.paused_at = now or utcnow()

    def resume(self, now: Optional[datetime] = None) -> None:
        if not self.is_paused:
            raise SessionError("Timer is not paused")
        now = now or utcnow()
        self.paused_seconds += (now - self.paused_at).total_seconds()
        self.paused_at = None

    def elapsed_seconds(self, now: Optional[datetime] = None) -> int:
        """Seconds of reading so far, excluding pauses.

        A countdown stops counting once its duration is used up.
        """
        if not self.is_running:
            return 0
        end = self.paused_at or now or utcnow()
        elapsed = (end - self.started_at).total_seconds() - self.paused_seconds
        elapsed = max(0, int(elapsed))
        if self.countdown:
            return min(elapsed, self.duration_seconds)
        return elapsed

    def remaining_seconds(self, now: Optional[datetime] = None) -> Optional[int]:
        """Seconds left on a countdown; None in stopwatch mode."""
        if not self.countdown:
            return None
        return self.duration_seconds - self.elapsed_seconds(now)

    def is_finished(self, now: Optional[datetime] = None) -> bool:
        """True once a running countdown reaches zero."""
        return self.countdown and self.is_running and self.remaining_seconds(now) == 0

    def progress_percent(self, now: Optional[datetime] = None) -> float:
        """Share of the countdown used, 100 for a stopwatch."""
        if not self.countdown:
            return 100.0
        return self.elapsed_seconds(now) / self.duration_seconds * 100

    def display(self, now: Optional[datetime] = None) -> str:
        """Time remaining for a countdown, time elapsed for a stopwatch."""
        if self.countdown:
            return format_duration(self.remaining_seconds(now))
        return format_duration(self.elapsed_seconds(now))

    def to_dict(self) -> dict:
        """Convert to dictionary for persistence."""
        return {
            "countdown": self.countdown,
            "duration_minutes": self.duration_minutes,
            "started_at": self.started_at.isoformat() if self.started_at else None,
            "paused_at": self.paused_at.isoformat() if self.paused_at else None,
            "paused_seconds": self.paused_seconds,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "ReadingTimer":
        """Create from dictionary."""
        started_at = data.get("started_at")
        paused_at = data.get("paused_at")
        return cls(
            countdown=data.get("countdown", False),
            duration_minutes=data.get("duration_minutes", 30),
            started_at=datetime.fromisoformat(started_at) if started_at else None,
            paused_at=datetime.fromisoformat(paused_at) if paused_at else None,
            paused_seconds=data.get("paused_seconds", 0.0),
        )
