"""Command line entry points for installing and removing the agents.

Usage:
    opencoder-agents install [--dry-run] [--verbose] [--quiet] [--force]
    opencoder-agents uninstall [--dry-run] [--verbose] [--quiet] [--force]

The ``opencoder-install`` and ``opencoder-uninstall`` scripts run the same
commands directly, for use as package-manager hooks.

Exit Codes:
    install: 0 on full or partial success, 1 when nothing could be installed.
    uninstall: always 0.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Callable
from typing import Any

import click
from rich.console import Console

from opencoder_agents.config import InstallerSettings
from opencoder_agents.installer.config import CliFlags
from opencoder_agents.installer.errors import InstallerError
from opencoder_agents.installer.install import InstallController
from opencoder_agents.installer.paths import InstallPaths, resolve_paths
from opencoder_agents.installer.retry import RetryExecutor
from opencoder_agents.installer.summary import DRY_RUN_PREFIX, PACKAGE_LABEL, render_summary
from opencoder_agents.installer.uninstall import UninstallController
from opencoder_agents.observability import setup_logging

logger = logging.getLogger(__name__)

_CONTEXT_SETTINGS = {"help_option_names": ["--help", "-h"]}


def _flag_options(func: Callable[..., Any]) -> Callable[..., Any]:
    """Attach the flags shared by install and uninstall."""
    options = [
        click.option("--dry-run", is_flag=True, help="Preview the changes without touching files."),
        click.option("--verbose", is_flag=True, help="Enable verbose output for debugging."),
        click.option("--quiet", is_flag=True, help="Suppress non-error output (for CI)."),
        click.option("--force", is_flag=True, help="Accepted for compatibility; has no effect."),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def _prepare(flags: CliFlags, settings: InstallerSettings | None) -> InstallerSettings:
    settings = settings or InstallerSettings()
    setup_logging(settings.logging.with_flags(verbose=flags.verbose, quiet=flags.quiet))
    return settings


def run_install(
    flags: CliFlags,
    *,
    settings: InstallerSettings | None = None,
    paths: InstallPaths | None = None,
    console: Console | None = None,
) -> int:
    """Install the agents and print a summary.

    Args:
        flags: Parsed command flags.
        settings: Installer settings. Loaded from the environment if omitted.
        paths: Directories to use. Resolved from settings if omitted.
        console: Console for the final summary.

    Returns:
        Process exit code.
    """
    settings = _prepare(flags, settings)
    prefix = DRY_RUN_PREFIX if flags.dry_run else ""
    logger.info("%s%s: Installing agents...", prefix, PACKAGE_LABEL)

    try:
        paths = paths or resolve_paths(target_dir=settings.target_dir)
    except InstallerError as exc:
        logger.error("%s", exc.message)
        return 1

    controller = InstallController(
        paths,
        executor=RetryExecutor(settings.retry),
        opencode_version=settings.opencode_version,
    )
    result = controller.install(flags)
    render_summary(result, console=console or Console(highlight=False), target_dir=paths.target_dir)
    return result.exit_code


def run_uninstall(
    flags: CliFlags,
    *,
    settings: InstallerSettings | None = None,
    paths: InstallPaths | None = None,
    console: Console | None = None,
) -> int:
    """Remove the installed agents and print a summary.

    Never fails: any error is reported and the exit code stays 0 so the
    surrounding package removal completes.
    """
    settings = _prepare(flags, settings)
    prefix = DRY_RUN_PREFIX if flags.dry_run else ""
    logger.info("%s%s: Removing agents...", prefix, PACKAGE_LABEL)

    try:
        paths = paths or resolve_paths(target_dir=settings.target_dir)
        result = UninstallController(paths, executor=RetryExecutor(settings.retry)).uninstall(flags)
    except (InstallerError, OSError) as exc:
        logger.error("%s: Unexpected error: %s", PACKAGE_LABEL, exc)
        return 0

    render_summary(result, console=console or Console(highlight=False))
    return result.exit_code


@click.group(context_settings=_CONTEXT_SETTINGS)
@click.version_option(package_name="opencoder-agents")
def main() -> None:
    """Install or remove the OpenCoder agents in ~/.config/opencode/agents/."""


@main.command("install", context_settings=_CONTEXT_SETTINGS)
@_flag_options
def install_command(dry_run: bool, verbose: bool, quiet: bool, force: bool) -> None:
    """Copy the OpenCoder agents to ~/.config/opencode/agents/.

    \b
    Examples:
      opencoder-agents install              # Install agents
      opencoder-agents install --dry-run    # Preview what would be installed
      opencoder-agents install --verbose    # Install with detailed logging
    """
    flags = CliFlags(dry_run=dry_run, verbose=verbose, quiet=quiet, force=force)
    sys.exit(run_install(flags))


@main.command("uninstall", context_settings=_CONTEXT_SETTINGS)
@_flag_options
def uninstall_command(dry_run: bool, verbose: bool, quiet: bool, force: bool) -> None:
    """Remove the OpenCoder agents from ~/.config/opencode/agents/.

    Only files shipped with this package are removed.

    \b
    Examples:
      opencoder-agents uninstall            # Remove agents
      opencoder-agents uninstall --dry-run  # Preview what would be removed
      opencoder-agents uninstall --quiet    # Remove silently (errors only)
    """
    flags = CliFlags(dry_run=dry_run, verbose=verbose, quiet=quiet, force=force)
    sys.exit(run_uninstall(flags))
