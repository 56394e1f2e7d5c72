"""
SOLARWATCH Logging Configuration

Provides centralized logging configuration for SOLARWATCH with support for:
- Console output on stdout
- Rotating file handlers with size limits
- Optional structured JSON lines
- Per-service log level configuration

Usage:
    from solarwatch.logging_config import setup_logging, get_logger

    # Initialize logging at application startup
    setup_logging(log_level="INFO", log_file="solarwatch.log")

    # Get a logger for your module
    logger = get_logger(__name__)
    logger.info("Sunrise computed", extra={"event": "rise"})
"""

import json
import logging
import sys
from pathlib import Path
from typing import Optional

# Module-level constants
DEFAULT_LOG_LEVEL = "INFO"
DEFAULT_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DEFAULT_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
DEFAULT_MAX_BYTES = 10 * 1024 * 1024  # 10MB
DEFAULT_BACKUP_COUNT = 5

# Service loggers use the "SOLARWATCH.<Service>" names; both trees are configured
ROOT_LOGGER_NAMES = ("solarwatch", "SOLARWATCH")

LOG_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


class JsonFormatter(logging.Formatter):
    """Format records as single-line JSON objects."""

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "timestamp": self.formatTime(record, DEFAULT_DATE_FORMAT),
            "logger": record.name,
            "level": record.levelname,
            "message": record.getMessage(),
        }
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload)


def _make_formatter(json_format: bool) -> logging.Formatter:
    if json_format:
        return JsonFormatter()
    return logging.Formatter(DEFAULT_LOG_FORMAT, DEFAULT_DATE_FORMAT)


def setup_logging(
    log_level: str = DEFAULT_LOG_LEVEL,
    log_file: Optional[str | Path] = None,
    json_format: bool = False,
) -> None:
    """Configure logging for the SOLARWATCH application.

    Sets up the solarwatch loggers with a console handler and an optional
    rotating file handler. Calling it again replaces the previous handlers.

    Args:
        log_level: Default logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional path to log file. If provided, enables file logging
                  with rotation.
        json_format: If True, use structured JSON format for logs.

    Example:
        setup_logging(log_level="DEBUG", log_file="/var/log/solarwatch.log")
    """
    level = LOG_LEVELS.get(log_level.upper(), logging.INFO)
    formatter = _make_formatter(json_format)

    handlers: list[logging.Handler] = []

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    handlers.append(console_handler)

    if log_file:
        from logging.handlers import RotatingFileHandler

        file_path = Path(log_file)
        file_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = RotatingFileHandler(
            file_path,
            maxBytes=DEFAULT_MAX_BYTES,
            backupCount=DEFAULT_BACKUP_COUNT,
        )
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        handlers.append(file_handler)

    for name in ROOT_LOGGER_NAMES:
        root_logger = logging.getLogger(name)
        root_logger.setLevel(level)
        for handler in list(root_logger.handlers):
            root_logger.removeHandler(handler)
            if name == ROOT_LOGGER_NAMES[0]:
                handler.close()
        for handler in handlers:
            root_logger.addHandler(handler)


def get_logger(name: str) -> logging.Logger:
    """Get a logger for a specific module or service.

    Returns a child logger under the solarwatch namespace for consistent
    configuration inheritance.

    Args:
        name: Logger name (typically __name__ of the calling module)

    Returns:
        Configured logger instance
    """
    if not name.startswith("solarwatch"):
        name = f"solarwatch.{name}"
    return logging.getLogger(name)


def set_service_level(service_name: str, level: str) -> None:
    """Set log level for a specific service.

    Args:
        service_name: Name of the service (e.g., "Solar", "Timezone")
        level: Log level string (DEBUG, INFO, WARNING, ERROR, CRITICAL)

    Example:
        set_service_level("Solar", "DEBUG")
    """
    logger = logging.getLogger(f"SOLARWATCH.{service_name}")
    logger.setLevel(LOG_LEVELS.get(level.upper(), logging.INFO))
