"""
Configuration management for Radio Player
"""

import os
import tempfile
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional


@dataclass
class PlayerConfig:
    """Configuration for the audio player."""

    volume: int = 70
    mpv_path: str = "mpv"
    socket_dir: str = field(default_factory=tempfile.gettempdir)
    poll_interval: float = 0.25  # Seconds between mpv property polls
    ready_timeout: float = 5.0  # Seconds to wait for the mpv IPC socket


@dataclass
class ServerConfig:
    """Configuration for the HTTP backend."""

    host: str = "127.0.0.1"
    port: int = 8642


@dataclass
class StorageConfig:
    """Configuration for station persistence."""

    backend: str = "memory"  # 'memory' or 'sqlite'
    database_path: Optional[str] = None  # Default: <data dir>/radio_player.db
    seed_defaults: bool = True

    def validate(self) -> None:
        """Validate storage configuration values.

        Raises:
            ValueError: If the backend is unknown
        """
        valid_backends = {"memory", "sqlite"}
        if self.backend not in valid_backends:
            raise ValueError(
                f"Invalid storage backend: {self.backend!r}. "
                f"Valid backends are: {valid_backends}"
            )


@dataclass
class ClientConfig:
    """Configuration for talking to a remote station backend."""

    api_url: Optional[str] = None  # When set, the player uses the HTTP backend
    timeout: float = 10.0


@dataclass
class LoggingConfig:
    """Configuration for logging."""

    level: str = "INFO"  # DEBUG, INFO, WARNING, ERROR, CRITICAL
    log_file: Optional[str] = (
        None  # Custom log file path (default: ~/.local/share/radio-player/radio-player.log)
    )
    console_output: bool = False  # Also output to stderr (for debugging)


@dataclass
class Config:
    """Main configuration object."""

    player: PlayerConfig = field(default_factory=PlayerConfig)
    server: ServerConfig = field(default_factory=ServerConfig)
    storage: StorageConfig = field(default_factory=StorageConfig)
    client: ClientConfig = field(default_factory=ClientConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def get_config_dir() -> Path:
    """Get the configuration directory path."""
    config_home = os.environ.get("XDG_CONFIG_HOME")
    if config_home:
        return Path(config_home) / "radio-player"
    return Path.home() / ".config" / "radio-player"


def _find_project_config() -> Optional[Path]:
    """Find config.toml in project root by looking for pyproject.toml.

    Returns:
        Path to config.toml in project root, or None if not found
    """
    current = Path(__file__).resolve().parent
    for parent in [current] + list(current.parents):
        if (parent / "pyproject.toml").exists():
            config_path = parent / "config.toml"
            return config_path if config_path.exists() else None
    return None


def get_config_path() -> Path:
    """Get the main configuration file path.

    Checks for config.toml in the following order:
    1. Project root (detected via pyproject.toml) - for development
    2. Current working directory
    3. XDG_CONFIG_HOME/radio-player (or ~/.config/radio-player)
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
        return Path(data_home) / "radio-player"
    return Path.home() / ".local" / "share" / "radio-player"


def get_database_path(config: Config) -> Path:
    """Resolve the SQLite database path for the configured storage."""
    if config.storage.database_path:
        return Path(config.storage.database_path).expanduser()
    return get_data_dir() / "radio_player.db"


def create_default_config() -> str:
    """Create a default configuration TOML content."""
    return """
# Radio Player Configuration

[player]
# Default volume (0-100)
volume = 70

# mpv executable used for stream playback
mpv_path = "mpv"

# Seconds between mpv status polls
poll_interval = 0.25

# Seconds to wait for mpv to come up before giving up
ready_timeout = 5.0

[server]
host = "127.0.0.1"
port = 8642

[storage]
# Station storage backend: "memory" (lost on restart) or "sqlite"
backend = "memory"

# database_path = "~/.local/share/radio-player/radio_player.db"

# Add the default stations when the store is empty
seed_defaults = true

[client]
# Point the player at a running backend instead of local storage
# api_url = "http://127.0.0.1:8642"
timeout = 10.0

[logging]
# Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
level = "INFO"

# Custom log file path (default: ~/.local/share/radio-player/radio-player.log)
# log_file = "/path/to/radio-player.log"

# Also output logs to stderr (useful for debugging)
console_output = false
""".strip()


def _parse_config(toml_data: dict) -> Config:
    """Build a Config from parsed TOML, falling back to defaults per key."""
    config = Config()

    if "player" in toml_data:
        player_data = toml_data["player"]
        config.player = PlayerConfig(
            volume=max(0, min(100, int(player_data.get("volume", config.player.volume)))),
            mpv_path=player_data.get("mpv_path", config.player.mpv_path),
            socket_dir=str(
                Path(player_data.get("socket_dir", config.player.socket_dir)).expanduser()
            ),
            poll_interval=player_data.get("poll_interval", config.player.poll_interval),
            ready_timeout=player_data.get("ready_timeout", config.player.ready_timeout),
        )

    if "server" in toml_data:
        server_data = toml_data["server"]
        config.server = ServerConfig(
            host=server_data.get("host", config.server.host),
            port=server_data.get("port", config.server.port),
        )

    if "storage" in toml_data:
        storage_data = toml_data["storage"]
        config.storage = StorageConfig(
            backend=storage_data.get("backend", config.storage.backend),
            database_path=storage_data.get("database_path"),
            seed_defaults=storage_data.get("seed_defaults", config.storage.seed_defaults),
        )

    if "client" in toml_data:
        client_data = toml_data["client"]
        config.client = ClientConfig(
            api_url=client_data.get("api_url"),
            timeout=client_data.get("timeout", config.client.timeout),
        )

    if "logging" in toml_data:
        logging_data = toml_data["logging"]
        log_file = logging_data.get("log_file")
        if log_file:
            log_file = str(Path(log_file).expanduser())
        config.logging = LoggingConfig(
            level=logging_data.get("level", config.logging.level).upper(),
            log_file=log_file,
            console_output=logging_data.get(
                "console_output", config.logging.console_output
            ),
        )

    return config


def _apply_env_overrides(config: Config) -> Config:
    """Environment variables win over TOML values."""
    api_url = os.environ.get("RADIO_PLAYER_API_URL")
    if api_url:
        config.client.api_url = api_url

    storage_backend = os.environ.get("RADIO_PLAYER_STORAGE")
    if storage_backend:
        config.storage.backend = storage_backend

    return config


def load_config(config_path: Optional[Path] = None) -> Config:
    """Load configuration from file or create default.

    Environment variables override TOML values:
    - RADIO_PLAYER_API_URL
    - RADIO_PLAYER_STORAGE
    """
    from dotenv import load_dotenv

    env_path = get_config_dir() / ".env"
    if env_path.exists():
        load_dotenv(env_path)

    if config_path is None:
        config_path = get_config_path()

    if not config_path.exists():
        config_path.parent.mkdir(parents=True, exist_ok=True)
        with open(config_path, "w", encoding="utf-8") as f:
            f.write(create_default_config())
        print(f"Created default configuration at: {config_path}")
        return _apply_env_overrides(Config())

    try:
        with open(config_path, "rb") as f:
            toml_data = tomllib.load(f)
        config = _parse_config(toml_data)
    except (OSError, tomllib.TOMLDecodeError, TypeError, ValueError) as e:
        print(f"Error loading configuration from {config_path}: {e}")
        print("Using default configuration.")
        config = Config()

    config = _apply_env_overrides(config)

    try:
        config.storage.validate()
    except ValueError as e:
        print(f"Warning: Invalid storage configuration: {e}")
        print("Using in-memory storage.")
        config.storage = StorageConfig()

    return config
