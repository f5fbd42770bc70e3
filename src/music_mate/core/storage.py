"""
Durable key/value storage for Music Mate client state.

Values are JSON documents stored under a small set of logical keys
(playlists, chat turns, session token). A stored value that cannot be
decoded is reported as absent, never raised.
"""

import json
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Iterator, Optional

from loguru import logger

STORAGE_KEY_PLAYLISTS = "musicmate_playlists"
STORAGE_KEY_MESSAGES = "musicmate_messages"
STORAGE_KEY_SESSION = "musicmate_session"


class Storage:
    """Read/write contract for JSON-serializable values keyed by string."""

    def read(self, key: str) -> Optional[Any]:
        raise NotImplementedError

    def write(self, key: str, value: Any) -> None:
        raise NotImplementedError


def _decode(key: str, raw: Optional[str]) -> Optional[Any]:
    """Decode a stored JSON document, discarding corrupt content."""
    if raw is None:
        return None
    try:
        return json.loads(raw)
    except (json.JSONDecodeError, TypeError) as e:
        logger.warning(f"Discarding unreadable stored value for '{key}': {e}")
        return None


class MemoryStorage(Storage):
    """In-process storage. Values are kept JSON-encoded like the SQLite backend."""

    def __init__(self, initial: Optional[dict[str, str]] = None):
        self._data: dict[str, str] = dict(initial or {})

    def read(self, key: str) -> Optional[Any]:
        return _decode(key, self._data.get(key))

    def write(self, key: str, value: Any) -> None:
        self._data[key] = json.dumps(value)

    def raw(self, key: str) -> Optional[str]:
        """Encoded document for a key (test/debug helper)."""
        return self._data.get(key)


class SqliteStorage(Storage):
    """SQLite-backed storage with one row per logical key."""

    def __init__(self, db_path: Path):
        self.db_path = Path(db_path)
        self.init_database()

    @contextmanager
    def get_db_connection(self) -> Iterator[sqlite3.Connection]:
        """Get a database connection with proper cleanup."""
        conn = sqlite3.connect(self.db_path, timeout=30.0)
        conn.row_factory = sqlite3.Row  # Enable dict-like access

        # WAL mode allows reads during writes
        conn.execute("PRAGMA journal_mode=WAL")

        try:
            yield conn
        finally:
            conn.close()

    def init_database(self) -> None:
        """Create the key/value table if it does not exist."""
        self.db_path.parent.mkdir(parents=True, exist_ok=True)

        with self.get_db_connection() as conn:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS kv_store (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL,
                    updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
                )
            """)
            conn.commit()

    def read(self, key: str) -> Optional[Any]:
        with self.get_db_connection() as conn:
            cursor = conn.execute("SELECT value FROM kv_store WHERE key = ?", (key,))
            row = cursor.fetchone()
        return _decode(key, row["value"] if row else None)

    def write(self, key: str, value: Any) -> None:
        encoded = json.dumps(value)
        with self.get_db_connection() as conn:
            conn.execute(
                """
                INSERT INTO kv_store (key, value, updated_at)
                VALUES (?, ?, CURRENT_TIMESTAMP)
                ON CONFLICT(key) DO UPDATE SET
                    value = excluded.value,
                    updated_at = CURRENT_TIMESTAMP
            """,
                (key, encoded),
            )
            conn.commit()
        logger.debug(f"Stored '{key}' ({len(encoded)} bytes)")
