"""Agent installer subsystem.

Copies the packaged agent documents into OpenCode's configuration directory
and removes them again. Each document is validated, copied with bounded
retry on transient filesystem errors, and verified; failures are confined to
the file they occur in.

Quick Start:
    >>> from opencoder_agents.installer import InstallController, CliFlags, resolve_paths
    >>> result = InstallController(resolve_paths()).install(CliFlags(dry_run=True))
    >>> result.exit_code
    0

Classes:
    InstallController: Validates, copies and verifies agent documents.
    UninstallController: Removes installed agent documents.
    RetryExecutor: Runs a filesystem operation with bounded retry.
    InstallPaths: Package root, source and target directories.
    BatchResult: Aggregated per-file outcomes of one run.

Exceptions:
    InstallerError: Base exception for all installer errors.
    HomeDirectoryError: Home directory cannot be determined.
    MissingSourceDirectoryError: Package ``agents/`` directory is missing.
    NoCandidateFilesError: No agent documents to install.
    ValidationFailureError: A document failed content validation.
    SizeMismatchError: A copy does not match its source size.
    FileOperationError: A copy, delete or read failed.
"""

from __future__ import annotations

from opencoder_agents.installer.config import (
    AgentFile,
    BatchResult,
    BatchStatus,
    CliFlags,
    FailureReason,
    FrontmatterParseResult,
    OperationOutcome,
    OutcomeStatus,
    ValidationResult,
)
from opencoder_agents.installer.errors import (
    FileFailure,
    FileOperationError,
    HomeDirectoryError,
    InstallerError,
    IOErrorKind,
    MissingSourceDirectoryError,
    NoCandidateFilesError,
    SizeMismatchError,
    ValidationFailureError,
    classify_os_error,
    is_transient_error,
)
from opencoder_agents.installer.frontmatter import parse_frontmatter
from opencoder_agents.installer.install import InstallController
from opencoder_agents.installer.paths import AGENT_NAMES, InstallPaths, resolve_paths
from opencoder_agents.installer.retry import RetryExecutor
from opencoder_agents.installer.uninstall import UninstallController
from opencoder_agents.installer.validator import validate_content, validate_file

__all__ = [
    "AGENT_NAMES",
    "AgentFile",
    "BatchResult",
    "BatchStatus",
    "CliFlags",
    "FailureReason",
    "FileFailure",
    "FileOperationError",
    "FrontmatterParseResult",
    "HomeDirectoryError",
    "IOErrorKind",
    "InstallController",
    "InstallPaths",
    "InstallerError",
    "MissingSourceDirectoryError",
    "NoCandidateFilesError",
    "OperationOutcome",
    "OutcomeStatus",
    "RetryExecutor",
    "SizeMismatchError",
    "UninstallController",
    "ValidationFailureError",
    "ValidationResult",
    "classify_os_error",
    "is_transient_error",
    "parse_frontmatter",
    "resolve_paths",
    "validate_content",
    "validate_file",
]
