"""
Track domain models.

Contains the immutable value type for recommended tracks.
"""

from typing import Any, NamedTuple

UNKNOWN_TITLE = "Unknown Track"
UNKNOWN_ARTIST = "Unknown Artist"

TRACK_FIELDS = ("title", "artist", "genre", "source", "url", "description")


class Track(NamedTuple):
    """A recommended track as described by the discovery agent.

    Tracks have no identity of their own; (title, artist) is the natural key
    used to keep a playlist free of duplicates. The url is an optional
    external "listen" link and is never resolved.
    """
    title: str = UNKNOWN_TITLE
    artist: str = UNKNOWN_ARTIST
    genre: str = ""
    source: str = ""  # Where the track can be streamed (e.g. "Jamendo")
    url: str = ""
    description: str = ""

    @property
    def key(self) -> tuple[str, str]:
        """Natural key for de-duplication (case-sensitive)."""
        return (self.title, self.artist)

    def to_dict(self) -> dict[str, Any]:
        """Wire/storage representation."""
        return self._asdict()
