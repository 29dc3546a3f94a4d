"""Uninstall controller.

Removes the agent documents this package installed. Only names that exist
in the package ``agents/`` directory are touched; anything else the user
keeps in the installation directory survives. Uninstall never fails: delete
errors are reported as warnings so package removal always completes.
"""

from __future__ import annotations

import logging

from opencoder_agents.installer.config import (
    BatchResult,
    BatchStatus,
    CliFlags,
    OperationOutcome,
    OutcomeStatus,
)
from opencoder_agents.installer.errors import FileOperationError
from opencoder_agents.installer.paths import InstallPaths, list_agent_files
from opencoder_agents.installer.retry import RetryExecutor

logger = logging.getLogger(__name__)

OPERATION = "uninstall"


class UninstallController:
    """Removes installed agent documents.

    Args:
        paths: Source and target directories for the run.
        executor: Retry wrapper for delete operations.
    """

    def __init__(self, paths: InstallPaths, *, executor: RetryExecutor | None = None) -> None:
        self.paths = paths
        self.executor = executor or RetryExecutor()

    def _nothing_to_do(self, message: str, dry_run: bool) -> BatchResult:
        logger.info("  %s", message)
        return BatchResult(
            operation=OPERATION,
            status=BatchStatus.NOTHING_TO_DO,
            dry_run=dry_run,
            message=message,
        )

    def uninstall(self, flags: CliFlags | None = None) -> BatchResult:
        """Run the uninstall pipeline.

        Args:
            flags: Command flags. Only ``dry_run`` changes behavior here.

        Returns:
            BatchResult whose status is never ``FAILURE``.
        """
        flags = flags or CliFlags()
        dry_run = flags.dry_run
        source_dir = self.paths.source_dir
        target_dir = self.paths.target_dir

        logger.debug("Package root: %s", self.paths.package_root)
        logger.debug("Source directory: %s", source_dir)
        logger.debug("Target directory: %s", target_dir)
        logger.debug("Dry run: %s", dry_run)
        if flags.force:
            logger.debug("--force has no effect on uninstall")

        if not target_dir.is_dir():
            return self._nothing_to_do("No agents directory found, nothing to remove", dry_run)
        if not source_dir.is_dir():
            return self._nothing_to_do("Source agents directory not found, skipping cleanup", dry_run)

        try:
            names = list_agent_files(source_dir)
        except OSError as exc:
            logger.warning("Could not list %s: %s", source_dir, exc)
            return self._nothing_to_do("Source agents directory unreadable, skipping cleanup", dry_run)

        logger.debug("Agent files to remove: %d", len(names))

        outcomes: list[OperationOutcome] = []
        for name in names:
            target = target_dir / name
            logger.debug("Processing: %s", name)

            try:
                if not target.is_file():
                    logger.debug("  %s is not installed, skipping", name)
                    outcomes.append(OperationOutcome(file=name, status=OutcomeStatus.SKIPPED))
                    continue

                if dry_run:
                    logger.info("Would remove: %s", target)
                    outcomes.append(OperationOutcome(file=name, status=OutcomeStatus.WOULD_REMOVE))
                    continue

                self.executor.run(target.unlink)
            except OSError as exc:
                failure = FileOperationError(name, target, exc)
                logger.warning("Could not remove %s: %s", name, failure.detail)
                outcomes.append(
                    OperationOutcome(
                        file=name,
                        status=OutcomeStatus.FAILED,
                        reason=failure.reason,
                        detail=failure.detail,
                    )
                )
                continue

            logger.info("  Removed: %s", name)
            outcomes.append(OperationOutcome(file=name, status=OutcomeStatus.REMOVED))

        status = _classify_uninstall(outcomes)
        message = None
        if status is BatchStatus.NOTHING_TO_DO:
            message = "No agents were installed, nothing removed"

        return BatchResult(
            operation=OPERATION,
            status=status,
            outcomes=tuple(outcomes),
            dry_run=dry_run,
            message=message,
        )


def _classify_uninstall(outcomes: list[OperationOutcome]) -> BatchStatus:
    acted = [o for o in outcomes if o.status is not OutcomeStatus.SKIPPED]
    if not acted:
        return BatchStatus.NOTHING_TO_DO
    if any(o.status is OutcomeStatus.FAILED for o in acted):
        return BatchStatus.WARNINGS
    return BatchStatus.SUCCESS
