"""Conversation domain - turn log, playlist store, send cycle.

This domain handles:
- The write-through conversation/playlist store and sample mode
- The fixed demonstration dataset
- One user-to-agent send cycle with error mapping and notifications
"""

from .sample_data import SAMPLE_TRACKS, sample_playlists, sample_turns

from .store import ConversationStore, load_playlists, load_turns, rebuild_last_known

from .session import (
    NETWORK_ERROR_MESSAGE,
    PROCESSING_ERROR_MESSAGE,
    ChatSession,
    SendOutcome,
    notification_for_action,
)

__all__ = [
    # Sample data
    "SAMPLE_TRACKS",
    "sample_playlists",
    "sample_turns",
    # Store
    "ConversationStore",
    "load_playlists",
    "load_turns",
    "rebuild_last_known",
    # Session
    "NETWORK_ERROR_MESSAGE",
    "PROCESSING_ERROR_MESSAGE",
    "ChatSession",
    "SendOutcome",
    "notification_for_action",
]
