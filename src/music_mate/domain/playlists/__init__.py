"""Playlists domain - playlist/turn models, collection operations, reconciliation.

This domain handles:
- Playlist and ChatTurn models with storage serialization
- Snapshot-style CRUD (create, delete, add, remove by position)
- Applying agent playlist commands to a collection snapshot
"""

from .models import ChatTurn, Playlist, generate_id, now_iso

from .crud import (
    add_tracks,
    create_playlist,
    delete_playlist,
    find_playlist_index,
    get_playlist_by_id,
    get_playlist_by_name,
    remove_positions,
    replace_playlist,
)

from .reconcile import apply_action, resolve_indices, select_source_list

__all__ = [
    # Models
    "ChatTurn",
    "Playlist",
    "generate_id",
    "now_iso",
    # CRUD
    "add_tracks",
    "create_playlist",
    "delete_playlist",
    "find_playlist_index",
    "get_playlist_by_id",
    "get_playlist_by_name",
    "remove_positions",
    "replace_playlist",
    # Reconciliation
    "apply_action",
    "resolve_indices",
    "select_source_list",
]
