"""Tests for session settings and music selection."""

import pytest
from pydantic import ValidationError

from bookpace.library.schemas import BookCreate
from bookpace.session.music import (
    PLAYLIST,
    current_track,
    next_track_index,
    previous_track_index,
)
from bookpace.session.settings import SessionSettings, resolve_session_book


class TestSessionSettings:
    """Tests for SessionSettings defaults and validation."""

    def test_defaults(self):
        settings = SessionSettings()
        assert settings.countdown_mode is False
        assert settings.duration_minutes == 30
        assert settings.music_enabled is False
        assert settings.track_index == 0
        assert settings.volume == 0.5
        assert settings.session_book_id is None

    @pytest.mark.parametrize(
        "field,value",
        [("duration_minutes", 0), ("volume", 1.5), ("volume", -0.1), ("track_index", len(PLAYLIST))],
    )
    def test_out_of_range(self, field, value):
        with pytest.raises(ValidationError):
            SessionSettings(**{field: value})


class TestSettingsStore:
    """Tests for SettingsStore."""

    def test_missing_file_defaults(self, settings_store):
        assert settings_store.load() == SessionSettings()

    def test_update_persists(self, settings_store):
        settings_store.update(countdown_mode=True, duration_minutes=45)
        loaded = settings_store.load()
        assert loaded.countdown_mode is True
        assert loaded.duration_minutes == 45
        assert loaded.music_enabled is False

    def test_update_keeps_other_fields(self, settings_store):
        settings_store.update(music_enabled=True)
        settings_store.update(volume=0.2)
        loaded = settings_store.load()
        assert loaded.music_enabled is True
        assert loaded.volume == 0.2

    def test_update_rejects_invalid(self, settings_store):
        with pytest.raises(ValidationError):
            settings_store.update(duration_minutes=0)
        assert settings_store.load().duration_minutes == 30

    def test_unreadable_file_defaults(self, settings_store):
        settings_store.path.write_text("{broken")
        assert settings_store.load() == SessionSettings()

    def test_not_utf8_defaults(self, settings_store):
        settings_store.path.write_bytes(b"\xff\xfe[]")
        assert settings_store.load() == SessionSettings()


class TestResolveSessionBook:
    """Tests for resolve_session_book()."""

    def test_selected_book(self, store):
        a = store.add_book(BookCreate(title="A"))
        b = store.add_book(BookCreate(title="B"))
        assert resolve_session_book(store.list_books(), b.id) == b

    def test_falls_back_to_first(self, store):
        """Test a deleted selection falls back to the first book."""
        a = store.add_book(BookCreate(title="A"))
        store.add_book(BookCreate(title="B"))
        assert resolve_session_book(store.list_books(), "deleted-id") == a
        assert resolve_session_book(store.list_books(), None) == a

    def test_empty_library(self):
        assert resolve_session_book([], "anything") is None


class TestPlaylist:
    """Tests for music track selection."""

    def test_four_tracks(self):
        assert [t.title for t in PLAYLIST] == [
            "Lofi Study Beat",
            "Brown Noise",
            "Ambient Piano",
            "Light Rain",
        ]
        assert all(t.src.startswith("https://") for t in PLAYLIST)

    def test_wraps_forward(self):
        assert next_track_index(len(PLAYLIST) - 1) == 0

    def test_wraps_backward(self):
        assert previous_track_index(0) == len(PLAYLIST) - 1

    def test_current_track_wraps(self):
        assert current_track(len(PLAYLIST)) == PLAYLIST[0]
