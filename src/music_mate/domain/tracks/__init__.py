"""Tracks domain - recommended track value type and validation."""

from .models import TRACK_FIELDS, UNKNOWN_ARTIST, UNKNOWN_TITLE, Track
from .validation import normalize_track, normalize_tracks, tracks_to_dicts

__all__ = [
    "TRACK_FIELDS",
    "UNKNOWN_ARTIST",
    "UNKNOWN_TITLE",
    "Track",
    "normalize_track",
    "normalize_tracks",
    "tracks_to_dicts",
]
