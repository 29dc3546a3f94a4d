"""Root settings for the installer.

Values are read, in order of precedence, from constructor arguments,
``OPENCODER_*`` environment variables and a ``.env`` file. Nested fields use
a double underscore, e.g. ``OPENCODER_RETRY__MAX_ATTEMPTS=2``.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from opencoder_agents.config.logging_config import LoggingConfig
from opencoder_agents.config.retry import ErrorRecoveryConfig


class InstallerSettings(BaseSettings):
    """Settings shared by the install and uninstall commands.

    Attributes:
        target_dir: Overrides the installation directory
            (default ``~/.config/opencode/agents``).
        opencode_version: Installed OpenCode version. When set, each agent's
            ``requires`` range is checked against it.
        retry: Retry behavior for copy and delete operations.
        logging: Logging configuration.
    """

    model_config = SettingsConfigDict(
        env_prefix="OPENCODER_",
        env_nested_delimiter="__",
        env_file=".env",
        extra="ignore",
    )

    target_dir: Path | None = Field(
        default=None,
        description="Installation directory override",
    )
    opencode_version: str | None = Field(
        default=None,
        description="OpenCode version used for 'requires' compatibility checks",
    )
    retry: ErrorRecoveryConfig = Field(default_factory=ErrorRecoveryConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @field_validator("target_dir")
    @classmethod
    def _expand_target_dir(cls, value: Path | None) -> Path | None:
        """Expand ``~`` in the target directory override."""
        return value.expanduser() if value is not None else None

    @field_validator("opencode_version")
    @classmethod
    def _blank_version_is_unset(cls, value: str | None) -> str | None:
        if value is not None and not value.strip():
            return None
        return value
