"""
Playlist reconciliation: apply one agent PlaylistAction to a playlist snapshot.

apply_action() is a pure function. It never mutates its inputs and never
raises; commands that cannot be carried out (unknown playlist, indices the
model invented) leave the collection unchanged.
"""

from typing import Optional, Sequence

from loguru import logger

from music_mate.domain.agent.models import PlaylistAction, indices_summary
from music_mate.domain.tracks import Track

from . import crud
from .models import Playlist


def select_source_list(
    turn_tracks: Sequence[Track], last_known_tracks: Sequence[Track]
) -> Sequence[Track]:
    """Tracks that 1-based action indices refer to.

    The current turn's tracks win; a turn without tracks refers back to the
    most recent turn that had some.
    """
    return turn_tracks if turn_tracks else last_known_tracks


def resolve_indices(indices: Sequence[int], source: Sequence[Track]) -> list[Track]:
    """Map 1-based indices onto source, silently skipping out-of-range ones."""
    return [source[index - 1] for index in indices if 1 <= index <= len(source)]


def apply_action(
    action: Optional[PlaylistAction],
    turn_tracks: Sequence[Track],
    last_known_tracks: Sequence[Track],
    playlists: Sequence[Playlist],
) -> tuple:
    """
    Compute the next playlist snapshot for a parsed agent command.

    Args:
        action: Parsed command, or None when the reply carried none
        turn_tracks: Tracks attached to the current reply
        last_known_tracks: Tracks from the most recent reply that had any
        playlists: Current collection (not modified)

    Returns:
        New tuple of playlists (equal to the input when nothing applies)
    """
    snapshot = tuple(playlists)
    if action is None or not action.playlist_name:
        return snapshot

    name = action.playlist_name
    source = select_source_list(turn_tracks, last_known_tracks)

    if action.kind == "create":
        resolved = resolve_indices(action.track_indices, source)
        snapshot, created = crud.create_playlist(snapshot, name, resolved)
        logger.info(
            f"Agent created playlist '{name}' with {created.track_count} tracks "
            f"(indices: {indices_summary(action.track_indices)})"
        )
        return snapshot

    index = crud.find_playlist_index(snapshot, name)
    if index is None:
        logger.debug(f"Agent {action.kind} for unknown playlist '{name}' ignored")
        return snapshot

    target = snapshot[index]

    if action.kind == "add":
        updated, added = crud.add_tracks(target, resolve_indices(action.track_indices, source))
        logger.info(f"Agent added {added} tracks to '{target.name}'")
        return snapshot[:index] + (updated,) + snapshot[index + 1:]

    if action.kind == "remove":
        updated, removed = crud.remove_positions(target, action.track_indices)
        logger.info(f"Agent removed {removed} tracks from '{target.name}'")
        return snapshot[:index] + (updated,) + snapshot[index + 1:]

    if action.kind == "rename":
        # The command carries no new name, so there is nothing to apply
        logger.debug(f"Agent rename of '{target.name}' has no new name; ignored")
        return snapshot

    # list is read-only
    return snapshot
