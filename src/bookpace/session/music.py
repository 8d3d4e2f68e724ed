"""Background music playlist for reading sessions.

Only track selection lives here; playing the streams is left to whatever
audio player the user runs.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class Track:
    """A streamable background track."""

    title: str
    artist: str
    src: str


PLAYLIST: tuple[Track, ...] = (
    Track(
        title="Lofi Study Beat",
        artist="Reading Vibes",
        src="https://cdn.pixabay.com/download/audio/2022/05/27/audio_1808fbf07a.mp3?filename=lofi-study-112778.mp3",
    ),
    Track(
        title="Brown Noise",
        artist="Pure Focus",
        src="https://cdn.pixabay.com/download/audio/2022/11/04/audio_33a5796062.mp3?filename=brown-noise-125026.mp3",
    ),
    Track(
        title="Ambient Piano",
        artist="Focus Flow",
        src="https://cdn.pixabay.com/download/audio/2022/03/09/audio_c8c8a73467.mp3?filename=ambient-piano-10781.mp3",
    ),
    Track(
        title="Light Rain",
        artist="Nature Sounds",
        src="https://cdn.pixabay.com/download/audio/2021/08/09/audio_0dcdd21708.mp3?filename=light-rain-ambient-114354.mp3",
    ),
)


def current_track(index: int) -> Track:
    """Get the track at an index, wrapping around the playlist."""
    return PLAYLIST[index % len(PLAYLIST)]


def next_track_index(index: int) -> int:
    return (index + 1) % len(PLAYLIST)


def previous_track_index(index: int) -> int:
    return (index - 1) % len(PLAYLIST)
