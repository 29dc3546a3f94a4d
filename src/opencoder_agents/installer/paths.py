"""Directory resolution for agent installation.

The package ships its agent documents in ``<package_root>/agents``. They are
installed into OpenCode's user configuration directory,
``~/.config/opencode/agents``. Both locations are computed once per run and
passed explicitly to the controllers.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from opencoder_agents.installer.errors import HomeDirectoryError

AGENTS_DIR_NAME = "agents"

# Relative to the user's home directory.
TARGET_SUBPATH = Path(".config") / "opencode" / "agents"

# Agent documents shipped with this package (without the .md extension).
AGENT_NAMES: tuple[str, ...] = ("opencoder", "opencoder-planner", "opencoder-builder")

AGENT_EXTENSION = ".md"


@dataclass(frozen=True)
class InstallPaths:
    """Directories involved in one install or uninstall run.

    Attributes:
        package_root: Directory of the installed ``opencoder_agents`` package.
        source_dir: Directory holding the shipped agent documents.
        target_dir: Directory the documents are installed into.
    """

    package_root: Path
    source_dir: Path
    target_dir: Path


def get_package_root() -> Path:
    """Return the directory containing this package."""
    return Path(__file__).resolve().parent.parent


def get_home_dir() -> Path:
    """Return the user's home directory.

    Raises:
        HomeDirectoryError: If the home directory cannot be determined.
    """
    try:
        return Path.home()
    except (RuntimeError, KeyError, OSError) as exc:
        raise HomeDirectoryError(exc) from exc


def resolve_paths(
    package_root: str | Path | None = None,
    *,
    home: str | Path | None = None,
    target_dir: str | Path | None = None,
) -> InstallPaths:
    """Compute the package root, source directory and target directory.

    Args:
        package_root: Override for the package root (tests).
        home: Override for the home directory. Ignored when ``target_dir``
            is given.
        target_dir: Explicit installation directory.

    Returns:
        ``InstallPaths`` for the run.

    Raises:
        HomeDirectoryError: If no target or home override is given and the
            home directory cannot be determined.
    """
    root = Path(package_root) if package_root is not None else get_package_root()

    if target_dir is not None:
        target = Path(target_dir)
    else:
        home_dir = Path(home) if home is not None else get_home_dir()
        target = home_dir / TARGET_SUBPATH

    return InstallPaths(
        package_root=root,
        source_dir=root / AGENTS_DIR_NAME,
        target_dir=target,
    )


def list_agent_files(directory: Path) -> list[str]:
    """Return the names of agent documents directly inside ``directory``.

    Only regular files with the agent extension count. Names are sorted so
    runs are reproducible.
    """
    return sorted(
        entry.name
        for entry in directory.iterdir()
        if entry.name.endswith(AGENT_EXTENSION) and entry.is_file()
    )
