"""
Process logging setup.

Installs the stream (and optional file) handler, tags every timestamp with the
running cursor2obs version, and keeps simpleobsws and websockets from flooding the
log with per-frame debug output unless debug logging was asked for.
"""

from __future__ import annotations

import logging

from cursor2obs import __version__
from cursor2obs.common.errors import ConfigError

__all__ = [
    "logging_setup",
    "logFormatWithVersion_get",
    "logLevel_resolve",
]

NOISY_LIBRARY_LOGGERS: tuple[str, ...] = ("simpleobsws", "websockets")


def logLevel_resolve(level: str) -> int:
    """
    Translate a level token into a logging level number.

    Args:
        level: Level name such as `INFO` or `debug`.

    Returns:
        Numeric logging level.

    Raises:
        ConfigError: If the name is not a standard logging level.
    """
    resolved = logging.getLevelName(level.upper())
    if not isinstance(resolved, int):
        raise ConfigError(f"Unknown log level '{level}'")
    return resolved


def logging_setup(level: str, log_format: str, log_file: str | None) -> None:
    """
    Configure root logging for the process.

    Args:
        level: Effective log level token.
        log_format: Base formatter string.
        log_file: Optional path of an additional log file.
    """
    numeric_level: int = logLevel_resolve(level)
    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=numeric_level,
        format=logFormatWithVersion_get(log_format),
        handlers=handlers,
        force=True,
    )

    # simpleobsws and websockets log every frame at DEBUG
    library_level = numeric_level if numeric_level <= logging.DEBUG else max(numeric_level, logging.WARNING)
    for name in NOISY_LIBRARY_LOGGERS:
        logging.getLogger(name).setLevel(library_level)


def logFormatWithVersion_get(log_format: str) -> str:
    """Tag the timestamp field of a format string with the package version"""
    return log_format.replace("%(asctime)s", f"%(asctime)s [cursor2obs {__version__}]")
