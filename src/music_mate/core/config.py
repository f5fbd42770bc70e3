"""
Configuration management for Music Mate
"""

import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional


@dataclass
class AgentConfig:
    """Configuration for the remote music discovery agent."""

    agent_id: str = "music-discovery-agent"
    model: str = "gpt-4o-mini"
    base_url: Optional[str] = None  # OpenAI-compatible endpoint (None = api.openai.com)
    api_key: Optional[str] = None
    timeout_seconds: float = 60.0
    enabled: bool = True

    def validate(self) -> None:
        """Validate agent configuration values.

        Raises:
            ValueError: If configuration values are invalid
        """
        if self.timeout_seconds <= 0:
            raise ValueError(
                f"Invalid timeout_seconds: {self.timeout_seconds}. Must be positive"
            )
        if not self.model.strip():
            raise ValueError("Agent model name cannot be empty")


@dataclass
class StorageConfig:
    """Configuration for durable client-side state."""

    database_path: Optional[str] = None  # default: <data dir>/music_mate.db


@dataclass
class LoggingConfig:
    """Configuration for logging."""

    level: str = "INFO"  # DEBUG, INFO, WARNING, ERROR, CRITICAL
    log_file: Optional[str] = (
        None  # Custom log file path (default: ~/.local/share/music-mate/music-mate.log)
    )
    max_file_size_mb: int = 10  # Maximum log file size before rotation
    backup_count: int = 5  # Number of backup files to keep
    console_output: bool = False  # Also output to console (for debugging)


@dataclass
class UIConfig:
    """Configuration for the chat interface."""

    show_descriptions: bool = True
    use_emoji: bool = True
    start_in_sample_mode: bool = False


@dataclass
class Config:
    """Main configuration object."""

    agent: AgentConfig = field(default_factory=AgentConfig)
    storage: StorageConfig = field(default_factory=StorageConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    ui: UIConfig = field(default_factory=UIConfig)


def get_config_dir() -> Path:
    """Get the configuration directory path."""
    config_home = os.environ.get("XDG_CONFIG_HOME")
    if config_home:
        return Path(config_home) / "music-mate"
    return Path.home() / ".config" / "music-mate"


def _find_project_config() -> Optional[Path]:
    """Find config.toml in project root by looking for pyproject.toml.

    Returns:
        Path to config.toml in project root, or None if not found
    """
    current = Path(__file__).resolve().parent
    for parent in [current] + list(current.parents):
        if (parent / "pyproject.toml").exists():
            config_path = parent / "config.toml"
            if config_path.exists():
                return config_path
            # Found project root but no config.toml there
            return None
    return None


def get_config_path() -> Path:
    """Get the main configuration file path.

    Checks for config.toml in the following order:
    1. Project root (detected via pyproject.toml) - for development
    2. Current working directory
    3. XDG_CONFIG_HOME/music-mate (or ~/.config/music-mate)
    """
    project_config = _find_project_config()
    if project_config:
        return project_config

    local_config = Path.cwd() / "config.toml"
    if local_config.exists():
        return local_config

    return get_config_dir() / "config.toml"


def get_data_dir() -> Path:
    """Get the data directory path."""
    data_home = os.environ.get("XDG_DATA_HOME")
    if data_home:
        return Path(data_home) / "music-mate"
    return Path.home() / ".local" / "share" / "music-mate"


def get_database_path(config: Optional[Config] = None) -> Path:
    """Get the path of the SQLite file holding playlists, turns and session."""
    if config and config.storage.database_path:
        return Path(config.storage.database_path).expanduser()
    return get_data_dir() / "music_mate.db"


def get_api_key(config: Optional[Config] = None) -> Optional[str]:
    """Get the agent API key from config, environment variables or .env files."""
    if config and config.agent.api_key:
        return config.agent.api_key

    for env_name in ("MUSIC_MATE_API_KEY", "OPENAI_API_KEY"):
        api_key = os.getenv(env_name)
        if api_key:
            return api_key

    from dotenv import load_dotenv

    for env_file in (Path.cwd() / ".env", get_config_dir() / ".env"):
        if env_file.exists():
            load_dotenv(env_file)
            api_key = os.getenv("MUSIC_MATE_API_KEY") or os.getenv("OPENAI_API_KEY")
            if api_key:
                return api_key

    return None


def create_default_config() -> str:
    """Create a default configuration TOML content."""
    return """
# Music Mate Configuration

[agent]
# Identifier sent with every request so the remote side can route it
agent_id = "music-discovery-agent"

# Model used for recommendations
model = "gpt-4o-mini"

# OpenAI-compatible endpoint (leave unset for api.openai.com)
# base_url = "https://api.perplexity.ai"

# API key (prefer MUSIC_MATE_API_KEY or OPENAI_API_KEY in the environment)
# api_key = "your-api-key-here"

# Request timeout in seconds
timeout_seconds = 60.0

# Disable to run without network access (sample mode only)
enabled = true

[storage]
# Custom database path (default: ~/.local/share/music-mate/music_mate.db)
# database_path = "/path/to/music_mate.db"

[logging]
# Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
level = "INFO"

# Custom log file path (default: ~/.local/share/music-mate/music-mate.log)
# log_file = "/path/to/custom/music-mate.log"

# Maximum log file size in MB before rotation
max_file_size_mb = 10

# Number of backup log files to keep
backup_count = 5

# Also output logs to console (useful for debugging)
console_output = false

[ui]
# Show track descriptions under recommendations
show_descriptions = true

# Use emoji in chat output
use_emoji = true

# Start with the demonstration dataset instead of your own data
start_in_sample_mode = false
""".strip()


def load_config() -> Config:
    """Load configuration from file or create default.

    Environment variables override TOML values:
    - MUSIC_MATE_API_KEY
    - MUSIC_MATE_MODEL
    - MUSIC_MATE_BASE_URL
    - MUSIC_MATE_AGENT_ID
    """
    from dotenv import load_dotenv

    env_path = get_config_dir() / ".env"
    if env_path.exists():
        load_dotenv(env_path)

    config_path = get_config_path()

    if not config_path.exists():
        config_path.parent.mkdir(parents=True, exist_ok=True)
        with open(config_path, "w", encoding="utf-8") as f:
            f.write(create_default_config())
        print(f"Created default configuration at: {config_path}")
        config = Config()
        _apply_env_overrides(config)
        return config

    try:
        with open(config_path, "rb") as f:
            toml_data = tomllib.load(f)

        config = Config()

        if "agent" in toml_data:
            agent_data = toml_data["agent"]
            config.agent = AgentConfig(
                agent_id=agent_data.get("agent_id", config.agent.agent_id),
                model=agent_data.get("model", config.agent.model),
                base_url=agent_data.get("base_url"),
                api_key=agent_data.get("api_key"),
                timeout_seconds=float(
                    agent_data.get("timeout_seconds", config.agent.timeout_seconds)
                ),
                enabled=agent_data.get("enabled", config.agent.enabled),
            )
            try:
                config.agent.validate()
            except ValueError as e:
                print(f"Warning: Invalid agent configuration: {e}")
                print("Using default agent configuration.")
                config.agent = AgentConfig()

        if "storage" in toml_data:
            storage_data = toml_data["storage"]
            database_path = storage_data.get("database_path")
            if database_path:
                database_path = str(Path(database_path).expanduser())
            config.storage = StorageConfig(database_path=database_path)

        if "logging" in toml_data:
            logging_data = toml_data["logging"]
            log_file = logging_data.get("log_file")
            if log_file:
                log_file = str(Path(log_file).expanduser())
            config.logging = LoggingConfig(
                level=logging_data.get("level", config.logging.level).upper(),
                log_file=log_file,
                max_file_size_mb=logging_data.get(
                    "max_file_size_mb", config.logging.max_file_size_mb
                ),
                backup_count=logging_data.get(
                    "backup_count", config.logging.backup_count
                ),
                console_output=logging_data.get(
                    "console_output", config.logging.console_output
                ),
            )

        if "ui" in toml_data:
            ui_data = toml_data["ui"]
            config.ui = UIConfig(
                show_descriptions=ui_data.get(
                    "show_descriptions", config.ui.show_descriptions
                ),
                use_emoji=ui_data.get("use_emoji", config.ui.use_emoji),
                start_in_sample_mode=ui_data.get(
                    "start_in_sample_mode", config.ui.start_in_sample_mode
                ),
            )

        _apply_env_overrides(config)
        return config

    except Exception as e:
        print(f"Error loading configuration from {config_path}: {e}")
        print("Using default configuration.")
        return Config()


def _apply_env_overrides(config: Config) -> None:
    """Override agent settings with environment variables if present."""
    api_key = os.environ.get("MUSIC_MATE_API_KEY")
    model = os.environ.get("MUSIC_MATE_MODEL")
    base_url = os.environ.get("MUSIC_MATE_BASE_URL")
    agent_id = os.environ.get("MUSIC_MATE_AGENT_ID")

    if api_key:
        config.agent.api_key = api_key
    if model:
        config.agent.model = model
    if base_url:
        config.agent.base_url = base_url
    if agent_id:
        config.agent.agent_id = agent_id


def save_config(config: Config) -> bool:
    """Save configuration to file."""
    config_path = get_config_path()

    try:
        config_path.parent.mkdir(parents=True, exist_ok=True)

        toml_content = f"""# Music Mate Configuration

[agent]
agent_id = "{config.agent.agent_id}"
model = "{config.agent.model}"
timeout_seconds = {config.agent.timeout_seconds}
enabled = {str(config.agent.enabled).lower()}"""

        if config.agent.base_url:
            toml_content += f'\nbase_url = "{config.agent.base_url}"'
        if config.agent.api_key:
            toml_content += f'\napi_key = "{config.agent.api_key}"'

        toml_content += "\n\n[storage]"
        if config.storage.database_path:
            toml_content += f'\ndatabase_path = "{config.storage.database_path}"'

        toml_content += f"""

[logging]
level = "{config.logging.level}"
max_file_size_mb = {config.logging.max_file_size_mb}
backup_count = {config.logging.backup_count}
console_output = {str(config.logging.console_output).lower()}"""

        if config.logging.log_file:
            toml_content += f'\nlog_file = "{config.logging.log_file}"'

        toml_content += f"""

[ui]
show_descriptions = {str(config.ui.show_descriptions).lower()}
use_emoji = {str(config.ui.use_emoji).lower()}
start_in_sample_mode = {str(config.ui.start_in_sample_mode).lower()}
"""

        with open(config_path, "w", encoding="utf-8") as f:
            f.write(toml_content)

        return True

    except Exception as e:
        print(f"Error saving configuration to {config_path}: {e}")
        return False


def ensure_directories() -> None:
    """Ensure all necessary directories exist."""
    get_config_dir().mkdir(parents=True, exist_ok=True)
    get_data_dir().mkdir(parents=True, exist_ok=True)
