"""Reading sessions: timer, music and persisted preferences."""

from .manager import ActiveSession, SessionManager, SessionSummary
from .music import PLAYLIST, Track, current_track, next_track_index, previous_track_index
from .settings import SessionSettings, SettingsStore, resolve_session_book
from .timer import TIMER_PRESETS, ReadingTimer, SessionError, format_duration

__all__ = [
    "ActiveSession",
    "SessionManager",
    "SessionSummary",
    "PLAYLIST",
    "Track",
    "current_track",
    "next_track_index",
    "previous_track_index",
    "SessionSettings",
    "SettingsStore",
    "resolve_session_book",
    "TIMER_PRESETS",
    "ReadingTimer",
    "SessionError",
    "format_duration",
]
