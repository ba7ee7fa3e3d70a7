"""Configuration package for the todo store."""

from todostore.config.app_config import (
    BUSY_TIMEOUT_MS,
    DEFAULT_DB_LOCATION,
    AppConfig,
    clear_config_cache,
    get_db_location,
    load_app_config,
)

__all__ = [
    "BUSY_TIMEOUT_MS",
    "DEFAULT_DB_LOCATION",
    "AppConfig",
    "clear_config_cache",
    "get_db_location",
    "load_app_config",
]
