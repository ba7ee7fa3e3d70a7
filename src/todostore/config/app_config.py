"""Application configuration loader.

Resolves where the todo database lives: the SQLITE_DB_LOCATION environment
variable if set, otherwise the built-in default.

Usage:
    from todostore.config.app_config import load_app_config

    config = load_app_config()
    config.db_location  # Path("/etc/todos/todo.db") unless overridden
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

import structlog

logger = structlog.get_logger(__name__)

DB_LOCATION_ENV = "SQLITE_DB_LOCATION"
DEFAULT_DB_LOCATION = Path("/etc/todos/todo.db")

# Writers wait this long on a locked database before failing
BUSY_TIMEOUT_MS = 5000


@dataclass
class AppConfig:
    """Application-wide configuration."""

    db_location: Path = DEFAULT_DB_LOCATION
    busy_timeout_ms: int = BUSY_TIMEOUT_MS


# Module-level cache
_cached_config: AppConfig | None = None


def _resolve_db_location() -> Path:
    env_value = os.environ.get(DB_LOCATION_ENV, "").strip()
    if env_value:
        return Path(env_value)
    return DEFAULT_DB_LOCATION


def load_app_config(force_reload: bool = False) -> AppConfig:
    """Load application config.

    Args:
        force_reload: If True, ignore cached config and resolve again.

    Returns:
        AppConfig with the resolved database location.
    """
    global _cached_config

    if _cached_config is not None and not force_reload:
        return _cached_config

    db_location = _resolve_db_location()
    logger.debug("app_config_resolved", db_location=str(db_location))

    _cached_config = AppConfig(db_location=db_location)
    return _cached_config


def get_db_location() -> Path:
    """Shortcut for the configured database file path."""
    return load_app_config().db_location


def clear_config_cache() -> None:
    """Clear the configuration cache.

    Useful for testing or when the environment changes at runtime.
    """
    global _cached_config
    _cached_config = None
