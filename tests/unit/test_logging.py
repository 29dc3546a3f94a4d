"""Tests for installer logging setup."""

from __future__ import annotations

import io
import logging

from opencoder_agents.config import LoggingConfig
from opencoder_agents.observability import InstallerFormatter, setup_logging


def _record(level: int, message: str) -> logging.LogRecord:
    return logging.LogRecord("opencoder_agents.test", level, __file__, 1, message, None, None)


class TestInstallerFormatter:
    """Tests for InstallerFormatter."""

    def test_info_plain(self) -> None:
        """Info records are printed as-is."""
        assert InstallerFormatter().format(_record(logging.INFO, "hello")) == "hello"

    def test_debug_prefixed(self) -> None:
        """Debug records get the verbose prefix."""
        formatter = InstallerFormatter("[V] ")
        assert formatter.format(_record(logging.DEBUG, "detail")) == "[V] detail"

    def test_warning_and_error_labelled(self) -> None:
        """Warnings and errors carry their level name."""
        formatter = InstallerFormatter()
        assert formatter.format(_record(logging.WARNING, "careful")) == "WARNING: careful"
        assert formatter.format(_record(logging.ERROR, "broken")) == "ERROR: broken"


class TestSetupLogging:
    """Tests for setup_logging function."""

    def test_level_and_output(self) -> None:
        """Messages below the configured level are dropped."""
        stream = io.StringIO()
        logger = setup_logging(LoggingConfig(level="WARNING"), stream=stream)

        logging.getLogger("opencoder_agents.installer").info("hidden")
        logging.getLogger("opencoder_agents.installer").warning("shown")

        assert logger.name == "opencoder_agents"
        assert stream.getvalue() == "WARNING: shown\n"

    def test_repeated_setup_replaces_handler(self) -> None:
        """Calling setup twice does not duplicate output."""
        first = io.StringIO()
        second = io.StringIO()
        setup_logging(stream=first)
        logger = setup_logging(stream=second)

        logger.info("once")

        assert first.getvalue() == ""
        assert second.getvalue() == "once\n"

    def test_verbose(self) -> None:
        """DEBUG level prints prefixed diagnostics."""
        stream = io.StringIO()
        setup_logging(LoggingConfig(level="DEBUG"), stream=stream)

        logging.getLogger("opencoder_agents.cli").debug("Dry run: %s", True)

        assert stream.getvalue() == "[VERBOSE] Dry run: True\n"
