"""
OpenCoder Agents - agent definitions for OpenCode and their installer.

The package ships three agent documents (``opencoder``, ``opencoder-planner``
and ``opencoder-builder``) and installs them into
``~/.config/opencode/agents/``, where OpenCode discovers them.

Quick Start:
    $ opencoder-agents install --dry-run
    $ opencoder-agents install
    $ opencoder-agents uninstall

From Python:
    >>> from opencoder_agents import CliFlags, InstallController, resolve_paths
    >>> result = InstallController(resolve_paths()).install(CliFlags(dry_run=True))
    >>> result.status
    <BatchStatus.SUCCESS: 'success'>
"""

from opencoder_agents.config import InstallerSettings
from opencoder_agents.installer import (
    AGENT_NAMES,
    BatchResult,
    BatchStatus,
    CliFlags,
    InstallController,
    InstallPaths,
    OutcomeStatus,
    UninstallController,
    resolve_paths,
)

__version__ = "0.1.0"

__all__ = [
    "AGENT_NAMES",
    "BatchResult",
    "BatchStatus",
    "CliFlags",
    "InstallController",
    "InstallPaths",
    "InstallerSettings",
    "OutcomeStatus",
    "UninstallController",
    "__version__",
    "resolve_paths",
]
