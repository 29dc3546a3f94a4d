"""Install controller.

Copies every agent document from the package ``agents/`` directory into the
installation directory. Each file is handled on its own: it is copied to a
staging file in the target directory, size-checked and re-validated there,
and only then moved over the target. Any failure is recorded without
stopping the remaining files.
"""

from __future__ import annotations

import logging
import os
import shutil
from pathlib import Path

from opencoder_agents.installer.config import (
    AgentFile,
    BatchResult,
    BatchStatus,
    CliFlags,
    OperationOutcome,
    OutcomeStatus,
)
from opencoder_agents.installer.errors import (
    FileFailure,
    FileOperationError,
    InstallerError,
    MissingSourceDirectoryError,
    NoCandidateFilesError,
    SizeMismatchError,
    ValidationFailureError,
    describe_os_error,
)
from opencoder_agents.installer.frontmatter import parse_frontmatter
from opencoder_agents.installer.paths import AGENT_EXTENSION, InstallPaths, list_agent_files
from opencoder_agents.installer.retry import RetryExecutor
from opencoder_agents.installer.validator import validate_content

logger = logging.getLogger(__name__)

OPERATION = "install"

# Copies are written to ".<name>.tmp" in the target directory before being
# moved over the target.
STAGING_PREFIX = "."
STAGING_SUFFIX = ".tmp"


def classify_install(outcomes: list[OperationOutcome]) -> BatchStatus:
    """Classify per-file install outcomes into a batch status."""
    failed = sum(1 for o in outcomes if o.status is OutcomeStatus.FAILED)
    if failed == 0:
        return BatchStatus.SUCCESS
    if failed == len(outcomes):
        return BatchStatus.FAILURE
    return BatchStatus.PARTIAL


class InstallController:
    """Installs the packaged agent documents.

    Args:
        paths: Source and target directories for the run.
        executor: Retry wrapper for copy operations.
        opencode_version: Installed OpenCode version; enables the
            ``requires`` compatibility check when given.
    """

    def __init__(
        self,
        paths: InstallPaths,
        *,
        executor: RetryExecutor | None = None,
        opencode_version: str | None = None,
    ) -> None:
        self.paths = paths
        self.executor = executor or RetryExecutor()
        self.opencode_version = opencode_version

    def install(self, flags: CliFlags | None = None) -> BatchResult:
        """Run the install pipeline.

        Missing source directories and empty source directories abort the
        run before anything is written. All other errors are confined to
        the file they occurred in.

        Args:
            flags: Command flags. Only ``dry_run`` changes behavior here.

        Returns:
            BatchResult classifying the run as success, partial or failure.
        """
        flags = flags or CliFlags()
        dry_run = flags.dry_run

        logger.debug("Package root: %s", self.paths.package_root)
        logger.debug("Source directory: %s", self.paths.source_dir)
        logger.debug("Target directory: %s", self.paths.target_dir)
        logger.debug("Dry run: %s", dry_run)
        if flags.force:
            logger.debug("--force has no effect on install")

        try:
            files = self._collect_candidates()
        except InstallerError as exc:
            logger.error("%s", exc.message)
            return BatchResult(
                operation=OPERATION,
                status=BatchStatus.FAILURE,
                dry_run=dry_run,
                message=exc.message,
            )

        try:
            self._ensure_target_dir(dry_run)
        except OSError as exc:
            message = (
                f"Cannot create {self.paths.target_dir}: "
                f"{describe_os_error(exc, self.paths.target_dir.name, self.paths.target_dir)}"
            )
            logger.error("%s", message)
            return BatchResult(
                operation=OPERATION,
                status=BatchStatus.FAILURE,
                dry_run=dry_run,
                message=message,
            )

        outcomes: list[OperationOutcome] = []
        for name in files:
            logger.debug("Processing: %s", name)
            agent = AgentFile(
                name=name,
                source_path=self.paths.source_dir / name,
                target_path=self.paths.target_dir / name,
            )
            try:
                if dry_run:
                    self._preview_file(agent)
                    outcome = OperationOutcome(file=name, status=OutcomeStatus.WOULD_INSTALL)
                    logger.info("Would install: %s", name)
                else:
                    self._install_file(agent)
                    outcome = OperationOutcome(file=name, status=OutcomeStatus.INSTALLED)
                    logger.info("  Installed: %s", name)
            except OSError as exc:
                failure = FileOperationError(name, agent.target_path, exc)
                outcome = OperationOutcome(
                    file=name,
                    status=OutcomeStatus.FAILED,
                    reason=failure.reason,
                    detail=failure.detail,
                )
                logger.error("  Failed: %s - %s", name, failure.detail)
            except FileFailure as exc:
                outcome = OperationOutcome(
                    file=name,
                    status=OutcomeStatus.FAILED,
                    reason=exc.reason,
                    detail=exc.detail,
                )
                logger.error("  Failed: %s - %s", name, exc.detail)
            outcomes.append(outcome)

        return BatchResult(
            operation=OPERATION,
            status=classify_install(outcomes),
            outcomes=tuple(outcomes),
            dry_run=dry_run,
        )

    def _collect_candidates(self) -> list[str]:
        source_dir = self.paths.source_dir
        if not source_dir.is_dir():
            raise MissingSourceDirectoryError(source_dir)

        files = list_agent_files(source_dir)
        logger.debug("Agent files found: %s", ", ".join(files) or "(none)")
        if not files:
            raise NoCandidateFilesError(source_dir, AGENT_EXTENSION)
        return files

    def _ensure_target_dir(self, dry_run: bool) -> None:
        target_dir = self.paths.target_dir
        if target_dir.is_dir():
            return
        if dry_run:
            logger.info("Would create %s", target_dir)
            return
        target_dir.mkdir(parents=True, exist_ok=True)
        logger.info("  Created %s", target_dir)

    def _validate(self, agent: AgentFile, path: Path) -> None:
        """Read ``path`` into ``agent`` and validate it."""
        try:
            text = path.read_text(encoding="utf-8")
        except OSError as exc:
            raise FileOperationError(agent.name, path, exc) from exc
        except UnicodeDecodeError as exc:
            raise FileFailure(agent.name, "File is not valid UTF-8 text") from exc

        frontmatter = parse_frontmatter(text)
        agent.content = text
        agent.frontmatter = frontmatter.fields
        agent.body = text[frontmatter.body_offset :] if frontmatter.found else text

        result = validate_content(
            text,
            opencode_version=self.opencode_version,
            frontmatter=frontmatter,
        )
        if not result.valid:
            raise ValidationFailureError(agent.name, result)
        logger.debug(
            "  Valid: version=%s requires=%s (%d characters)",
            agent.frontmatter.get("version"),
            agent.frontmatter.get("requires"),
            len(agent.content),
        )

    def _report_existing_target(self, agent: AgentFile) -> None:
        try:
            if not agent.target_path.is_file():
                return
            unchanged = agent.source_path.read_bytes() == agent.target_path.read_bytes()
        except OSError as exc:
            logger.debug("Could not inspect existing target %s: %s", agent.name, exc)
            return
        if unchanged:
            logger.debug("Target file unchanged: %s", agent.name)
        else:
            logger.debug("Overwriting existing file: %s (content differs)", agent.name)

    def _preview_file(self, agent: AgentFile) -> None:
        self._report_existing_target(agent)
        self._validate(agent, agent.source_path)

    def _install_file(self, agent: AgentFile) -> None:
        """Copy into a staging file next to the target, verify it, then swap it in.

        The target is only replaced by a copy that passed the size check and
        validation. A failed copy leaves any previously installed file as it was.
        """
        source = agent.source_path
        target = agent.target_path
        staging = target.with_name(f"{STAGING_PREFIX}{target.name}{STAGING_SUFFIX}")
        self._report_existing_target(agent)

        try:
            try:
                self.executor.run(lambda: shutil.copyfile(source, staging))
                source_size = source.stat().st_size
                staged_size = staging.stat().st_size
            except OSError as exc:
                raise FileOperationError(agent.name, target, exc) from exc

            if source_size != staged_size:
                raise SizeMismatchError(agent.name, source_size, staged_size)
            self._validate(agent, staging)

            try:
                self.executor.run(lambda: os.replace(staging, target))
            except OSError as exc:
                raise FileOperationError(agent.name, target, exc) from exc
        except FileFailure:
            self._discard_staging(agent, staging)
            raise

    def _discard_staging(self, agent: AgentFile, staging: Path) -> None:
        try:
            self.executor.run(lambda: staging.unlink(missing_ok=True))
        except OSError as exc:
            logger.warning("Could not remove partial copy of %s: %s", agent.name, exc)
        else:
            logger.debug("Removed partial copy: %s", staging)
