"""
Runtime Configuration

Reads the service configuration from environment variables once at import.

Variables:
- DOZEN_ORDERS_DB_PATH: SQLite database file
- DOZEN_ORDERS_LOG_DIR: directory for the rotating log file
- DOZEN_ORDERS_LOG_LEVEL: root log level name
- DOZEN_ORDERS_HOST / DOZEN_ORDERS_PORT: HTTP bind address
"""
import os
import logging
from pathlib import Path

from exceptions import ConfigurationError

logger = logging.getLogger(__name__)

DATA_DIR = Path.home() / ".dozen-orders"


def _env_path(name: str, default: Path) -> Path:
    value = os.environ.get(name, '').strip()
    return Path(value).expanduser() if value else default


def get_log_level() -> int:
    """
    Resolve the configured log level.

    Returns:
        logging level constant, INFO when unset

    Raises:
        ConfigurationError: If the variable names an unknown level
    """
    name = os.environ.get('DOZEN_ORDERS_LOG_LEVEL', 'INFO').strip().upper()
    level = logging.getLevelName(name)
    if not isinstance(level, int):
        raise ConfigurationError(
            f"Unknown log level: {name}",
            missing_keys=['DOZEN_ORDERS_LOG_LEVEL']
        )
    return level


def get_port() -> int:
    """
    Resolve the HTTP port.

    Raises:
        ConfigurationError: If the variable is not a valid port number
    """
    raw = os.environ.get('DOZEN_ORDERS_PORT', '8765').strip()
    try:
        port = int(raw)
    except ValueError:
        raise ConfigurationError(f"Port must be a number, got: {raw}")
    if not 0 < port < 65536:
        raise ConfigurationError(f"Port out of range: {port}")
    return port


DB_PATH = _env_path('DOZEN_ORDERS_DB_PATH', DATA_DIR / "orders.db")
LOG_DIR = _env_path('DOZEN_ORDERS_LOG_DIR', DATA_DIR / "logs")
HOST = os.environ.get('DOZEN_ORDERS_HOST', '127.0.0.1').strip() or '127.0.0.1'
