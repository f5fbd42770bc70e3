"""
Playlist collection operations.
Functional approach: every function takes a snapshot and returns a new one.
"""

from typing import Iterable, Optional, Sequence

from music_mate.domain.tracks import Track

from .models import Playlist

Playlists = tuple[Playlist, ...]


def find_playlist_index(playlists: Sequence[Playlist], name: str) -> Optional[int]:
    """
    Position of the first playlist whose name matches case-insensitively.

    Args:
        playlists: Current collection
        name: Name to match

    Returns:
        Index into playlists, or None if nothing matches
    """
    wanted = name.lower()
    for index, playlist in enumerate(playlists):
        if playlist.name.lower() == wanted:
            return index
    return None


def get_playlist_by_name(playlists: Sequence[Playlist], name: str) -> Optional[Playlist]:
    index = find_playlist_index(playlists, name)
    return playlists[index] if index is not None else None


def get_playlist_by_id(playlists: Sequence[Playlist], playlist_id: str) -> Optional[Playlist]:
    for playlist in playlists:
        if playlist.id == playlist_id:
            return playlist
    return None


def create_playlist(
    playlists: Sequence[Playlist], name: str, tracks: Iterable[Track] = ()
) -> tuple[Playlists, Playlist]:
    """
    Append a new playlist. Duplicate names are allowed.

    Tracks are de-duplicated by (title, artist) as they are added.

    Returns:
        (new collection, created playlist)
    """
    playlist, _ = add_tracks(Playlist(name=name), tracks)
    return tuple(playlists) + (playlist,), playlist


def delete_playlist(playlists: Sequence[Playlist], playlist_id: str) -> Playlists:
    """Drop the playlist with the given id (no-op if absent)."""
    return tuple(playlist for playlist in playlists if playlist.id != playlist_id)


def replace_playlist(playlists: Sequence[Playlist], updated: Playlist) -> Playlists:
    """Swap in an updated playlist for the first one with its id, keeping order."""
    result = list(playlists)
    for index, playlist in enumerate(result):
        if playlist.id == updated.id:
            result[index] = updated
            break
    return tuple(result)


def add_tracks(playlist: Playlist, tracks: Iterable[Track]) -> tuple[Playlist, int]:
    """
    Append tracks that are not already present.

    Args:
        playlist: Playlist to extend
        tracks: Candidate tracks, in order

    Returns:
        (updated playlist, number of tracks actually added)
    """
    current = list(playlist.tracks)
    seen = {track.key for track in current}
    added = 0
    for track in tracks:
        if track.key in seen:
            continue
        current.append(track)
        seen.add(track.key)
        added += 1
    if not added:
        return playlist, 0
    return playlist.with_tracks(tuple(current)), added


def remove_positions(playlist: Playlist, positions: Iterable[int]) -> tuple[Playlist, int]:
    """
    Remove tracks by 1-based position.

    Positions all refer to the ordering before any removal; out-of-range
    positions are ignored.

    Returns:
        (updated playlist, number of tracks removed)
    """
    doomed = set(positions)
    kept = tuple(
        track for position, track in enumerate(playlist.tracks, 1) if position not in doomed
    )
    removed = len(playlist.tracks) - len(kept)
    if not removed:
        return playlist, 0
    return playlist.with_tracks(kept), removed
