"""Final summary output for install and uninstall runs.

The summary is always printed, including in quiet mode, because it is the
only confirmation of what a package-manager hook did.
"""

from __future__ import annotations

from pathlib import Path

from rich.console import Console
from rich.text import Text

from opencoder_agents.installer.config import BatchResult, BatchStatus, OperationOutcome

PACKAGE_LABEL = "opencoder-agents"

DRY_RUN_PREFIX = "[DRY-RUN] "


def _ensure_console(console: Console | None) -> Console:
    if console is None:
        return Console(record=True, highlight=False)
    return console


def _print(console: Console, line: str, style: str | None = None) -> None:
    console.print(Text(line, style=style or ""), soft_wrap=True, highlight=False)


def _print_failures(console: Console, failures: list[OperationOutcome]) -> None:
    for outcome in failures:
        reason = f" [{outcome.reason.value}]" if outcome.reason else ""
        _print(console, f"    - {outcome.file}: {outcome.detail}{reason}", "red")


def _render_install(console: Console, result: BatchResult, target_dir: Path | None) -> None:
    prefix = DRY_RUN_PREFIX if result.dry_run else ""
    succeeded = len(result.succeeded)
    failures = result.failed
    total = len(result.outcomes)

    if result.status is BatchStatus.FAILURE and not result.outcomes:
        _print(console, f"{prefix}{PACKAGE_LABEL}: Installation aborted: {result.message}", "bold red")
        return

    if result.status is BatchStatus.SUCCESS:
        verb = "Would install" if result.dry_run else "Successfully installed"
        _print(console, f"{prefix}{PACKAGE_LABEL}: {verb} {succeeded} agent(s)", "bold green")
        if target_dir is not None:
            _print(console, f"  Location: {target_dir}")
        if not result.dry_run:
            _print(console, "")
            _print(console, "To use the autonomous development loop, run:")
            _print(console, "  opencode @opencoder")
        return

    if result.status is BatchStatus.PARTIAL:
        verb = "Would install" if result.dry_run else "Installed"
        _print(console, f"{prefix}{PACKAGE_LABEL}: {verb} {succeeded} of {total} agent(s)", "yellow")
        what = "would fail" if result.dry_run else "failed"
        _print(console, f"  {len(failures)} file(s) {what} to install:", "red")
        _print_failures(console, failures)
        return

    verb = "Would fail" if result.dry_run else "Failed"
    _print(console, f"{prefix}{PACKAGE_LABEL}: {verb} to install any agents", "bold red")
    _print_failures(console, failures)


def _render_uninstall(console: Console, result: BatchResult) -> None:
    prefix = DRY_RUN_PREFIX if result.dry_run else ""

    if result.status is BatchStatus.NOTHING_TO_DO:
        _print(console, f"{prefix}{PACKAGE_LABEL}: {result.message}")
        return

    removed = len(result.succeeded)
    verb = "Would remove" if result.dry_run else "Removed"
    _print(console, f"{prefix}{PACKAGE_LABEL}: {verb} {removed} agent(s)", "bold green")

    failures = result.failed
    if failures:
        _print(console, f"  Warning: {len(failures)} file(s) could not be removed:", "yellow")
        _print_failures(console, failures)


def render_summary(
    result: BatchResult,
    *,
    console: Console | None = None,
    target_dir: Path | None = None,
) -> str:
    """Print the final summary for ``result``.

    Args:
        result: Batch result of an install or uninstall run.
        console: Console to print to. When omitted, a new recording
            console is created.
        target_dir: Installation directory, shown after a successful install.

    Returns:
        The rendered text when the console records output, else ``""``.
    """
    console = _ensure_console(console)
    _print(console, "")

    if result.operation == "install":
        _render_install(console, result, target_dir)
    else:
        _render_uninstall(console, result)

    return console.export_text() if console.record else ""
