"""Logging setup for the installer scripts."""

from __future__ import annotations

import logging
import sys
from typing import TextIO

from opencoder_agents.config.logging_config import LoggingConfig

_PACKAGE_LOGGER = "opencoder_agents"


class InstallerFormatter(logging.Formatter):
    """Formatter for console output.

    Debug records get the verbose prefix, warnings and errors get their
    level name. Everything else is printed as-is.
    """

    def __init__(self, verbose_prefix: str = "[VERBOSE] ") -> None:
        super().__init__("%(message)s")
        self.verbose_prefix = verbose_prefix

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        if record.levelno <= logging.DEBUG:
            return f"{self.verbose_prefix}{message}"
        if record.levelno >= logging.WARNING:
            return f"{record.levelname}: {message}"
        return message


class _InstallerHandler(logging.StreamHandler):
    """Marker subclass so repeated setup replaces its own handler only."""


def setup_logging(
    config: LoggingConfig | None = None,
    *,
    stream: TextIO | None = None,
) -> logging.Logger:
    """Configure the package logger for console output.

    Any handler installed by a previous call is removed first, so calling
    this once per command invocation is safe.

    Args:
        config: Logging configuration. Defaults to ``LoggingConfig()``.
        stream: Output stream. Defaults to the current ``sys.stdout``.

    Returns:
        The configured package logger.
    """
    config = config or LoggingConfig()
    logger = logging.getLogger(_PACKAGE_LOGGER)

    for handler in list(logger.handlers):
        if isinstance(handler, _InstallerHandler):
            logger.removeHandler(handler)
            handler.close()

    handler = _InstallerHandler(stream if stream is not None else sys.stdout)
    handler.setFormatter(InstallerFormatter(config.verbose_prefix))
    logger.addHandler(handler)
    logger.setLevel(config.level)
    return logger
