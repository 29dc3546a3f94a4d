"""Configuration system for opencoder-agents.

Main exports:
- InstallerSettings: Root configuration class
- LoggingConfig: Logging configuration
- ErrorRecoveryConfig: Retry settings for filesystem operations
"""

from opencoder_agents.config.logging_config import LoggingConfig
from opencoder_agents.config.retry import ErrorRecoveryConfig
from opencoder_agents.config.settings import InstallerSettings

__all__ = [
    "ErrorRecoveryConfig",
    "InstallerSettings",
    "LoggingConfig",
]
