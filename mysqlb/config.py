"""Connection configuration using TypedDict."""

import logging
import os
from typing import Any, Final, TypedDict

from typing_extensions import NotRequired

from mysqlb.exceptions import ImproperConfigurationError

__all__ = (
    "REQUIRED_OPTIONS",
    "ConnectionConfig",
    "config_from_env",
    "validate_connection_config",
)

logger = logging.getLogger(__name__)

REQUIRED_OPTIONS: Final = ("host", "port", "user", "password", "database")


class ConnectionConfig(TypedDict, total=False):
    """Connection parameters for ``asyncmy.connect()``."""

    host: str
    """Host where the database server is located."""

    port: int
    """The TCP/IP port of the MySQL server."""

    user: str
    """The username used to authenticate with the database."""

    password: str
    """The password used to authenticate with the database."""

    database: str
    """The database name to use."""

    charset: NotRequired[str]
    """The character set to use for the connection."""

    connect_timeout: NotRequired[float]
    """Timeout before throwing an error when connecting."""

    autocommit: NotRequired[bool]
    """If True, autocommit mode will be enabled."""


def validate_connection_config(config: "ConnectionConfig") -> "dict[str, Any]":
    """Check that every required option is present.

    Args:
        config: Connection options.

    Raises:
        ImproperConfigurationError: Naming the first missing option.

    Returns:
        The options as a plain dict, with ``autocommit`` defaulting to True.
    """
    for option in REQUIRED_OPTIONS:
        if not config.get(option):
            msg = f"Option {option!r} is required"
            raise ImproperConfigurationError(msg)
    return {"autocommit": True, **config}


def config_from_env(prefix: str = "DB_") -> "ConnectionConfig":
    """Build a connection config from ``<prefix>HOST``, ``<prefix>PORT`` and friends.

    Args:
        prefix: Environment variable prefix.

    Returns:
        ConnectionConfig: Options with local development defaults for unset variables.
    """
    return ConnectionConfig(
        host=os.getenv(f"{prefix}HOST", "localhost"),
        port=_env_int(f"{prefix}PORT", 3306),
        user=os.getenv(f"{prefix}USER", "root"),
        password=os.getenv(f"{prefix}PASSWORD", "root"),
        database=os.getenv(f"{prefix}DATABASE", "mysqlb"),
    )


def _env_int(key: str, default: int) -> int:
    """Get integer value from environment variable."""
    value = os.getenv(key)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        logger.warning("Invalid integer value for %s: %s, using default %d", key, value, default)
        return default
