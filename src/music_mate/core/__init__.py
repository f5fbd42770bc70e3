"""Core infrastructure layer - no business logic dependencies.

This module provides foundation-level services:
- Configuration management (TOML)
- Durable key/value storage (SQLite)
- Console and log output (Rich, Loguru)
"""

from .config import (
    Config,
    load_config,
    save_config,
    get_api_key,
    get_config_dir,
    get_config_path,
    get_data_dir,
    get_database_path,
    create_default_config,
    ensure_directories,
)

from .storage import (
    STORAGE_KEY_MESSAGES,
    STORAGE_KEY_PLAYLISTS,
    STORAGE_KEY_SESSION,
    MemoryStorage,
    SqliteStorage,
    Storage,
)

from .console import get_console, set_console

__all__ = [
    # Config
    "Config",
    "load_config",
    "save_config",
    "get_api_key",
    "get_config_dir",
    "get_config_path",
    "get_data_dir",
    "get_database_path",
    "create_default_config",
    "ensure_directories",
    # Storage
    "STORAGE_KEY_MESSAGES",
    "STORAGE_KEY_PLAYLISTS",
    "STORAGE_KEY_SESSION",
    "MemoryStorage",
    "SqliteStorage",
    "Storage",
    # Console
    "get_console",
    "set_console",
]
