"""Core infrastructure layer - no business logic dependencies.

This module provides foundation-level services:
- Configuration management (TOML)
- Database connections (SQLite)
- Logging (Loguru)
"""

from .config import (
    Config,
    ClientConfig,
    LoggingConfig,
    PlayerConfig,
    ServerConfig,
    StorageConfig,
    create_default_config,
    get_config_dir,
    get_config_path,
    get_data_dir,
    get_database_path,
    load_config,
)
from .database import get_db_connection, init_database
from .output import log, setup_from_config, setup_loguru

__all__ = [
    # Configuration
    "Config",
    "ClientConfig",
    "LoggingConfig",
    "PlayerConfig",
    "ServerConfig",
    "StorageConfig",
    "create_default_config",
    "get_config_dir",
    "get_config_path",
    "get_data_dir",
    "get_database_path",
    "load_config",
    # Database
    "get_db_connection",
    "init_database",
    # Output
    "log",
    "setup_from_config",
    "setup_loguru",
]
