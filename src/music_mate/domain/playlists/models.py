"""
Playlist and conversation models.

Both are frozen dataclasses: the store replaces them wholesale instead of
mutating them, so a snapshot handed to the reconciliation engine can never
change underneath a later turn.
"""

import uuid
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from typing import Any, Literal, Optional

from music_mate.domain.agent.models import PlaylistAction
from music_mate.domain.tracks import Track, normalize_tracks, tracks_to_dicts

Role = Literal["user", "assistant"]


def generate_id() -> str:
    """Opaque unique identifier for playlists and turns."""
    return str(uuid.uuid4())


def now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


@dataclass(frozen=True)
class Playlist:
    """A named, ordered collection of tracks.

    Names are not unique; the reconciliation engine matches them
    case-insensitively and always acts on the first match.
    """

    name: str
    tracks: tuple[Track, ...] = ()
    id: str = field(default_factory=generate_id)
    created_at: str = field(default_factory=now_iso)

    @property
    def track_count(self) -> int:
        return len(self.tracks)

    def with_tracks(self, tracks: tuple[Track, ...]) -> "Playlist":
        return replace(self, tracks=tuple(tracks))

    def to_dict(self) -> dict[str, Any]:
        """Convert playlist to dictionary for serialization."""
        return {
            "id": self.id,
            "name": self.name,
            "tracks": tracks_to_dicts(self.tracks),
            "createdAt": self.created_at,
        }

    @classmethod
    def from_dict(cls, data: Any) -> Optional["Playlist"]:
        """Create playlist from a stored dictionary; None if unusable."""
        if not isinstance(data, dict):
            return None
        playlist_id = data.get("id")
        name = data.get("name")
        if not isinstance(playlist_id, str) or not playlist_id or not isinstance(name, str):
            return None
        created_at = data.get("createdAt")
        return cls(
            id=playlist_id,
            name=name,
            tracks=tuple(normalize_tracks(data.get("tracks"))),
            created_at=created_at if isinstance(created_at, str) else now_iso(),
        )


@dataclass(frozen=True)
class ChatTurn:
    """One message in the append-only conversation log.

    playlist_action is kept for traceability only; it is never re-applied.
    """

    role: Role
    content: str
    tracks: tuple[Track, ...] = ()
    playlist_action: Optional[PlaylistAction] = None
    id: str = field(default_factory=generate_id)
    timestamp: str = field(default_factory=now_iso)

    @classmethod
    def user(cls, content: str) -> "ChatTurn":
        return cls(role="user", content=content)

    @classmethod
    def assistant(
        cls,
        content: str,
        tracks: tuple[Track, ...] = (),
        playlist_action: Optional[PlaylistAction] = None,
    ) -> "ChatTurn":
        return cls(
            role="assistant",
            content=content,
            tracks=tuple(tracks),
            playlist_action=playlist_action,
        )

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "id": self.id,
            "role": self.role,
            "content": self.content,
            "timestamp": self.timestamp,
        }
        if self.tracks:
            data["tracks"] = tracks_to_dicts(self.tracks)
        if self.playlist_action is not None:
            data["playlistAction"] = self.playlist_action.to_dict()
        return data

    @classmethod
    def from_dict(cls, data: Any) -> Optional["ChatTurn"]:
        """Create a turn from a stored dictionary; None if unusable."""
        if not isinstance(data, dict):
            return None
        role = data.get("role")
        content = data.get("content")
        if role not in ("user", "assistant") or not isinstance(content, str):
            return None
        turn_id = data.get("id")
        timestamp = data.get("timestamp")
        return cls(
            role=role,
            content=content,
            tracks=tuple(normalize_tracks(data.get("tracks"))),
            playlist_action=PlaylistAction.from_payload(data.get("playlistAction")),
            id=turn_id if isinstance(turn_id, str) and turn_id else generate_id(),
            timestamp=timestamp if isinstance(timestamp, str) else now_iso(),
        )
