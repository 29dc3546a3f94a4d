"""Logging utilities."""

from opencoder_agents.observability.logging import InstallerFormatter, setup_logging

__all__ = [
    "InstallerFormatter",
    "setup_logging",
]
