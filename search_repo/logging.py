"""Logging configuration for the search repository package and its CLI.

Library modules only create loggers with :func:`get_logger`; handlers are
installed by :func:`setup_logging`, which the CLI calls once at start-up.
"""

import logging
import sys
from collections.abc import Iterable
from enum import Enum

PACKAGE_LOGGER = "search-repo"

# Client libraries that log every HTTP request or credential lookup
NOISY_LOGGERS = ("opensearch", "urllib3", "botocore", "boto3")

DEFAULT_FORMAT = "%(name)s  %(levelname)s  %(message)s"


class LogLevel(Enum):
    """Logging level enumeration."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"

    @property
    def numeric(self) -> int:
        return logging.getLevelNamesMapping()[self.value]

    @classmethod
    def parse(cls, level: "str | LogLevel") -> "LogLevel":
        """Return the level named by ``level``, case-insensitively."""
        if isinstance(level, cls):
            return level
        try:
            return cls(level.upper())
        except ValueError as e:
            raise ValueError(
                f"Unknown log level '{level}', expected one of {[member.value for member in cls]}"
            ) from e


def setup_logging(
    level: str | LogLevel = LogLevel.INFO,
    format_string: str | None = None,
    include_timestamp: bool = True,
    quiet_loggers: Iterable[str] = NOISY_LOGGERS,
) -> logging.Logger:
    """Send log records to stdout at ``level``.

    Loggers named in ``quiet_loggers`` are kept at WARNING or above unless
    ``level`` is stricter.

    Returns:
        The package logger
    """
    numeric_level = LogLevel.parse(level).numeric

    if format_string is None:
        format_string = DEFAULT_FORMAT
        if include_timestamp:
            format_string = "%(asctime)s  " + format_string

    logging.basicConfig(
        level=numeric_level,
        format=format_string,
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stdout,
        force=True,
    )
    for name in quiet_loggers:
        logging.getLogger(name).setLevel(max(numeric_level, logging.WARNING))

    return logging.getLogger(PACKAGE_LOGGER)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
