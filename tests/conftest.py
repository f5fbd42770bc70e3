"""Shared fixtures for the Music Mate test suite."""

import pytest
from rich.console import Console

from music_mate.core.console import set_console
from music_mate.core.storage import MemoryStorage
from music_mate.domain.conversation import ConversationStore
from music_mate.domain.playlists import Playlist
from music_mate.domain.tracks import Track


@pytest.fixture
def track_a() -> Track:
    return Track(title="Celestial Drift", artist="Luna Wave", genre="Ambient")


@pytest.fixture
def track_b() -> Track:
    return Track(title="Neon Boulevard", artist="Retro Synth Collective", genre="Synthwave")


@pytest.fixture
def track_c() -> Track:
    return Track(title="Morning Bloom", artist="Acoustic Garden", genre="Folk")


@pytest.fixture
def three_tracks(track_a: Track, track_b: Track, track_c: Track) -> list[Track]:
    return [track_a, track_b, track_c]


@pytest.fixture
def study_playlist(three_tracks: list[Track]) -> Playlist:
    return Playlist(name="Study", tracks=tuple(three_tracks))


@pytest.fixture
def storage() -> MemoryStorage:
    return MemoryStorage()


@pytest.fixture
def store(storage: MemoryStorage) -> ConversationStore:
    return ConversationStore(storage)


@pytest.fixture
def console():
    """Recording console shared by log() and command handlers."""
    recording = Console(record=True, width=120, highlight=False)
    set_console(recording)
    yield recording
    set_console(None)
