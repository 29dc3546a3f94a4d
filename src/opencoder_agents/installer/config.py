"""Installer data models and enums."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, Field


class FailureReason(str, Enum):
    """Why a single agent file was rejected.

    The first five members are produced by content validation and are
    checked in that order. The remaining members come from the version
    check and from the per-file copy or delete boundary.
    """

    TOO_SHORT = "TooShort"
    MISSING_FRONTMATTER = "MissingFrontmatter"
    MISSING_FIELDS = "MissingFields"
    MISSING_HEADER = "MissingHeader"
    MISSING_KEYWORD = "MissingKeyword"
    INCOMPATIBLE_VERSION = "IncompatibleVersion"
    SIZE_MISMATCH = "SizeMismatch"
    IO_ERROR = "IOError"


class OutcomeStatus(str, Enum):
    """Per-file result of one controller run."""

    INSTALLED = "Installed"
    REMOVED = "Removed"
    WOULD_INSTALL = "WouldInstall"
    WOULD_REMOVE = "WouldRemove"
    SKIPPED = "Skipped"
    FAILED = "Failed"


class BatchStatus(str, Enum):
    """Overall classification of a batch.

    Attributes:
        SUCCESS: Every file was installed or removed (or would be).
        PARTIAL: Some files succeeded and some failed.
        FAILURE: The run aborted or every file failed. Install only.
        NOTHING_TO_DO: No work was needed. Uninstall only.
        WARNINGS: Uninstall finished but some deletes failed.
    """

    SUCCESS = "success"
    PARTIAL = "partial"
    FAILURE = "failure"
    NOTHING_TO_DO = "nothing_to_do"
    WARNINGS = "warnings"


@dataclass
class FrontmatterParseResult:
    """Result of scanning a document for a leading frontmatter block.

    Attributes:
        found: Whether a well-formed opening/closing ``---`` pair exists.
        fields: ``key: value`` pairs in document order.
        body_offset: Index into the text just after the closing delimiter
            line. ``0`` when nothing was found.
        problem: ``"missing"`` or ``"unclosed"`` when ``found`` is false.
    """

    found: bool
    fields: dict[str, str] = field(default_factory=dict)
    body_offset: int = 0
    problem: str | None = None


@dataclass
class ValidationResult:
    """Result from validating an agent document.

    Attributes:
        valid: Whether the document passed every check.
        reason: First failing check, ``None`` when valid.
        missing_fields: Required frontmatter keys that were absent.
        detail: Human-readable description of the failure.
    """

    valid: bool
    reason: FailureReason | None = None
    missing_fields: list[str] = field(default_factory=list)
    detail: str | None = None


@dataclass
class AgentFile:
    """An agent document considered during one run.

    Attributes:
        name: Filename, unique within a run.
        source_path: Location in the package ``agents/`` directory.
        target_path: Location in the installation directory.
        content: Raw document text.
        frontmatter: Parsed frontmatter fields.
        body: Text following the frontmatter block.
    """

    name: str
    source_path: Path
    target_path: Path
    content: str = ""
    frontmatter: dict[str, str] = field(default_factory=dict)
    body: str = ""


@dataclass(frozen=True)
class OperationOutcome:
    """What happened to one file.

    Attributes:
        file: Filename the outcome refers to.
        status: Per-file status.
        reason: Failure reason when ``status`` is ``FAILED``.
        detail: Human-readable explanation.
    """

    file: str
    status: OutcomeStatus
    reason: FailureReason | None = None
    detail: str | None = None


@dataclass(frozen=True)
class BatchResult:
    """Aggregated outcomes of one install or uninstall run.

    Attributes:
        operation: ``"install"`` or ``"uninstall"``.
        status: Overall classification.
        outcomes: One outcome per processed file, in processing order.
        dry_run: Whether the run was a preview.
        message: Explanation for aborted or no-op runs.
    """

    operation: str
    status: BatchStatus
    outcomes: tuple[OperationOutcome, ...] = ()
    dry_run: bool = False
    message: str | None = None

    @property
    def exit_code(self) -> int:
        """Process exit code for this batch."""
        return 1 if self.status is BatchStatus.FAILURE else 0

    @property
    def succeeded(self) -> list[OperationOutcome]:
        """Outcomes that installed or removed a file (or would have)."""
        ok = {
            OutcomeStatus.INSTALLED,
            OutcomeStatus.REMOVED,
            OutcomeStatus.WOULD_INSTALL,
            OutcomeStatus.WOULD_REMOVE,
        }
        return [o for o in self.outcomes if o.status in ok]

    @property
    def failed(self) -> list[OperationOutcome]:
        """Outcomes with status ``FAILED``."""
        return [o for o in self.outcomes if o.status is OutcomeStatus.FAILED]


class CliFlags(BaseModel):
    """Flags accepted by the install and uninstall commands.

    Attributes:
        dry_run: Validate and report without touching the filesystem.
        verbose: Emit debug diagnostics.
        quiet: Only emit warnings, errors and the final summary.
        force: Accepted for compatibility; has no effect.
        help: Print usage and exit.
    """

    model_config = {"frozen": True}

    dry_run: bool = Field(default=False, description="Preview without mutation")
    verbose: bool = Field(default=False, description="Debug output")
    quiet: bool = Field(default=False, description="Suppress non-essential output")
    force: bool = Field(default=False, description="Accepted, currently a no-op")
    help: bool = Field(default=False, description="Show usage and exit")
