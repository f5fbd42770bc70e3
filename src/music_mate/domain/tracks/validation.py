"""
Track validation for untrusted agent output.

normalize_track() is total: whatever the model produced, a well-formed
Track comes out.
"""

from typing import Any, Iterable

from .models import UNKNOWN_ARTIST, UNKNOWN_TITLE, Track


def _text(value: Any) -> str:
    """Trimmed string for string input, empty string for anything else."""
    if isinstance(value, str):
        return value.strip()
    return ""


def normalize_track(raw: Any) -> Track:
    """
    Build a Track from a loosely-typed record.

    Missing, blank or non-string title/artist fall back to "Unknown Track" /
    "Unknown Artist"; every other field falls back to "". Non-mapping input
    yields a fully defaulted Track.

    Args:
        raw: Anything; normally a dict decoded from model JSON

    Returns:
        Track with all six fields of type str
    """
    if isinstance(raw, Track):
        return raw

    if not isinstance(raw, dict):
        return Track()

    return Track(
        title=_text(raw.get("title")) or UNKNOWN_TITLE,
        artist=_text(raw.get("artist")) or UNKNOWN_ARTIST,
        genre=_text(raw.get("genre")),
        source=_text(raw.get("source")),
        url=_text(raw.get("url")),
        description=_text(raw.get("description")),
    )


def normalize_tracks(raw: Any) -> list[Track]:
    """Normalize a sequence of records; a non-sequence yields []."""
    if not isinstance(raw, (list, tuple)):
        return []
    return [normalize_track(item) for item in raw]


def tracks_to_dicts(tracks: Iterable[Track]) -> list[dict]:
    """Serialize tracks for storage."""
    return [track.to_dict() for track in tracks]
