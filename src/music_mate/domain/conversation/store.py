"""
Conversation and playlist store.

Owns the turn log, the playlist collection and the session token, and
threads the "last known tracks" reference into the reconciliation engine.
Every live mutation is written through to durable storage immediately.

Sample mode swaps in a scratch copy of the demonstration dataset. While it
is active all reads and writes go to that copy and nothing is persisted, so
the live collections are exactly as they were when sample mode is left.
"""

from typing import Any, Optional, Sequence

from loguru import logger

from music_mate.core.storage import (
    STORAGE_KEY_MESSAGES,
    STORAGE_KEY_PLAYLISTS,
    STORAGE_KEY_SESSION,
    Storage,
)
from music_mate.domain.agent.models import AgentReply
from music_mate.domain.playlists import (
    ChatTurn,
    Playlist,
    add_tracks,
    apply_action,
    create_playlist,
    delete_playlist,
    generate_id,
    get_playlist_by_id,
    replace_playlist,
)
from music_mate.domain.tracks import Track

from .sample_data import sample_playlists, sample_turns


def rebuild_last_known(turns: Sequence[ChatTurn]) -> tuple[Track, ...]:
    """Tracks of the most recent turn that carried any."""
    for turn in reversed(turns):
        if turn.tracks:
            return turn.tracks
    return ()


def _load_list(storage: Storage, key: str) -> list[Any]:
    data = storage.read(key)
    if data is None:
        return []
    if not isinstance(data, list):
        logger.warning(f"Ignoring stored '{key}': expected a list, got {type(data).__name__}")
        return []
    return data


def load_playlists(storage: Storage) -> tuple[Playlist, ...]:
    playlists = []
    for item in _load_list(storage, STORAGE_KEY_PLAYLISTS):
        playlist = Playlist.from_dict(item)
        if playlist is None:
            logger.warning(f"Skipping unreadable stored playlist: {item!r}")
            continue
        playlists.append(playlist)
    return tuple(playlists)


def load_turns(storage: Storage) -> tuple[ChatTurn, ...]:
    turns = []
    for item in _load_list(storage, STORAGE_KEY_MESSAGES):
        turn = ChatTurn.from_dict(item)
        if turn is None:
            logger.warning(f"Skipping unreadable stored turn: {item!r}")
            continue
        turns.append(turn)
    return tuple(turns)


class ConversationStore:
    """Turn log + playlist collection with write-through persistence."""

    def __init__(self, storage: Storage, sample_mode: bool = False):
        self.storage = storage

        self._live_playlists = load_playlists(storage)
        self._live_turns = load_turns(storage)
        self._live_last_known = rebuild_last_known(self._live_turns)
        self._session_id = self._load_session()
        self._session_saved = self._session_id is not None

        self._sample_mode = False
        self._sample_playlists: tuple[Playlist, ...] = ()
        self._sample_turns: tuple[ChatTurn, ...] = ()
        self._sample_last_known: tuple[Track, ...] = ()

        logger.debug(f"Loaded {len(self._live_playlists)} playlists and {len(self._live_turns)} turns")

        if sample_mode:
            self.set_sample_mode(True)
        else:
            self._ensure_session()

    def _load_session(self) -> Optional[str]:
        session_id = self.storage.read(STORAGE_KEY_SESSION)
        if isinstance(session_id, str) and session_id:
            return session_id
        return None

    def _ensure_session(self) -> str:
        # The token is generated on demand but only written once live
        if self._session_id is None:
            self._session_id = generate_id()
            logger.info(f"Started new session {self._session_id}")
        if not self._session_saved and not self._sample_mode:
            self.storage.write(STORAGE_KEY_SESSION, self._session_id)
            self._session_saved = True
        return self._session_id

    # Views

    @property
    def sample_mode(self) -> bool:
        return self._sample_mode

    @property
    def session_id(self) -> str:
        return self._ensure_session()

    @property
    def turns(self) -> tuple[ChatTurn, ...]:
        return self._sample_turns if self._sample_mode else self._live_turns

    @property
    def playlists(self) -> tuple[Playlist, ...]:
        return self._sample_playlists if self._sample_mode else self._live_playlists

    @property
    def last_known_tracks(self) -> tuple[Track, ...]:
        return self._sample_last_known if self._sample_mode else self._live_last_known

    def get_playlist(self, playlist_id: str) -> Optional[Playlist]:
        return get_playlist_by_id(self.playlists, playlist_id)

    # Write path

    def _set_playlists(self, playlists: Sequence[Playlist]) -> None:
        snapshot = tuple(playlists)
        if self._sample_mode:
            self._sample_playlists = snapshot
            return
        self._live_playlists = snapshot
        self.storage.write(STORAGE_KEY_PLAYLISTS, [playlist.to_dict() for playlist in snapshot])

    def _set_turns(self, turns: Sequence[ChatTurn]) -> None:
        snapshot = tuple(turns)
        if self._sample_mode:
            self._sample_turns = snapshot
            return
        self._live_turns = snapshot
        self.storage.write(STORAGE_KEY_MESSAGES, [turn.to_dict() for turn in snapshot])

    def _set_last_known(self, tracks: Sequence[Track]) -> None:
        if self._sample_mode:
            self._sample_last_known = tuple(tracks)
        else:
            self._live_last_known = tuple(tracks)

    # Operations

    def append_turn(self, turn: ChatTurn) -> ChatTurn:
        """Append a turn to the log; a turn with tracks becomes the index source."""
        self._set_turns(self.turns + (turn,))
        if turn.tracks:
            self._set_last_known(turn.tracks)
        return turn

    def apply_reply(self, reply: AgentReply) -> ChatTurn:
        """
        Apply an interpreted agent reply.

        The playlist command (if any) is reconciled first, then the assistant
        turn is appended, so the log never shows a reply whose playlist
        change has not happened yet.

        Returns:
            The appended assistant turn
        """
        updated = apply_action(reply.action, reply.tracks, self.last_known_tracks, self.playlists)
        if updated != self.playlists:
            self._set_playlists(updated)

        turn = ChatTurn.assistant(reply.message, tracks=reply.tracks, playlist_action=reply.action)
        return self.append_turn(turn)

    def create_playlist(self, name: str) -> Optional[Playlist]:
        """Create an empty playlist. Returns None for a blank name."""
        name = name.strip()
        if not name:
            return None
        snapshot, playlist = create_playlist(self.playlists, name)
        self._set_playlists(snapshot)
        logger.info(f"Created playlist '{name}' ({playlist.id})")
        return playlist

    def delete_playlist(self, playlist_id: str) -> bool:
        """Delete a playlist by id. Returns False if no such playlist."""
        if self.get_playlist(playlist_id) is None:
            return False
        self._set_playlists(delete_playlist(self.playlists, playlist_id))
        logger.info(f"Deleted playlist {playlist_id}")
        return True

    def add_track_manually(self, playlist_id: str, track: Track) -> bool:
        """
        Add one track to a playlist chosen by the user.

        Returns:
            True if the track was added; False if the playlist does not exist
            or already holds a track with the same (title, artist)
        """
        playlist = self.get_playlist(playlist_id)
        if playlist is None:
            return False
        updated, added = add_tracks(playlist, [track])
        if not added:
            return False
        self._set_playlists(replace_playlist(self.playlists, updated))
        return True

    def remove_track_manually(self, playlist_id: str, index: int) -> bool:
        """Remove the track at a 0-based index. Returns False when nothing was removed."""
        playlist = self.get_playlist(playlist_id)
        if playlist is None or not 0 <= index < playlist.track_count:
            return False
        tracks = playlist.tracks[:index] + playlist.tracks[index + 1:]
        self._set_playlists(replace_playlist(self.playlists, playlist.with_tracks(tracks)))
        return True

    def clear_conversation(self) -> bool:
        """Reset the live turn log. Has no effect in sample mode."""
        if self._sample_mode:
            return False
        self._set_turns(())
        self._set_last_known(())
        logger.info("Conversation cleared")
        return True

    def set_sample_mode(self, enabled: bool) -> None:
        """
        Enter or leave sample mode.

        Entering always starts from a fresh copy of the demonstration
        dataset; leaving discards it. The session token is first written
        when the store is live.
        """
        self._sample_mode = enabled
        if enabled:
            self._sample_playlists = sample_playlists()
            self._sample_turns = sample_turns()
            self._sample_last_known = rebuild_last_known(self._sample_turns)
        else:
            self._sample_playlists = ()
            self._sample_turns = ()
            self._sample_last_known = ()
            self._ensure_session()
        logger.debug(f"Sample mode {'on' if enabled else 'off'}")
