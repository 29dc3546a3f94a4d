"""Logging configuration."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR"]


class LoggingConfig(BaseModel):
    """Logging configuration for the installer scripts.

    Attributes:
        level: Level applied to the ``opencoder_agents`` logger.
        verbose_prefix: Prefix written in front of debug records.
    """

    level: LogLevel = Field(
        default="INFO",
        description="Log level for installer output",
    )
    verbose_prefix: str = Field(
        default="[VERBOSE] ",
        description="Prefix for debug-level records",
    )

    def with_flags(self, *, verbose: bool, quiet: bool) -> LoggingConfig:
        """Return a copy with the level overridden by CLI flags.

        ``verbose`` wins over ``quiet`` when both are given.
        """
        if verbose:
            return self.model_copy(update={"level": "DEBUG"})
        if quiet:
            return self.model_copy(update={"level": "WARNING"})
        return self
