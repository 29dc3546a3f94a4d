"""Shared test fixtures and configuration for opencoder-agents tests."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from opencoder_agents.config import ErrorRecoveryConfig
from opencoder_agents.installer.paths import InstallPaths
from opencoder_agents.installer.retry import RetryExecutor


def _make_agent(title: str = "Test Agent", **fields: str) -> str:
    """Build a valid agent document, overriding frontmatter fields."""
    frontmatter = {"version": "0.1.0", "requires": '">=0.1.0"'}
    frontmatter.update(fields)
    lines = ["---", *(f"{key}: {value}" for key, value in frontmatter.items()), "---", ""]
    lines.append(f"# {title}")
    lines.append("")
    lines.append("This agent runs one task at a time and reports the result back to the caller.")
    return "\n".join(lines) + "\n"


@pytest.fixture(autouse=True)
def _isolate_environment(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Keep tests away from the real home directory and the user's .env."""
    for name in ("OPENCODER_TARGET_DIR", "OPENCODER_OPENCODE_VERSION"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    monkeypatch.chdir(tmp_path)


@pytest.fixture(autouse=True)
def _reset_package_logger():
    """Restore the package logger after tests that configure it."""
    logger = logging.getLogger("opencoder_agents")
    handlers = list(logger.handlers)
    level = logger.level
    yield
    for handler in list(logger.handlers):
        if handler not in handlers:
            logger.removeHandler(handler)
    logger.setLevel(level)


@pytest.fixture
def no_sleep_executor() -> RetryExecutor:
    """RetryExecutor that never actually waits between attempts."""
    return RetryExecutor(ErrorRecoveryConfig(max_attempts=3), sleep=lambda _seconds: None)


@pytest.fixture
def install_paths(tmp_path: Path) -> InstallPaths:
    """Create a package root with an empty agents/ directory.

    Layout:
    - pkg/agents/        (source)
    - home/.config/opencode/agents  (target, not created)
    """
    package_root = tmp_path / "pkg"
    source_dir = package_root / "agents"
    source_dir.mkdir(parents=True)
    return InstallPaths(
        package_root=package_root,
        source_dir=source_dir,
        target_dir=tmp_path / "home" / ".config" / "opencode" / "agents",
    )


@pytest.fixture
def populated_paths(install_paths: InstallPaths) -> InstallPaths:
    """install_paths with the three shipped agent names as valid documents."""
    for name in ("opencoder", "opencoder-planner", "opencoder-builder"):
        (install_paths.source_dir / f"{name}.md").write_text(_make_agent(title=name))
    return install_paths


@pytest.fixture
def make_agent():
    """Factory fixture for agent document text.

    Usage:
        def test_something(make_agent):
            text = make_agent(title="Planner", requires='"^1.0.0"')
    """
    return _make_agent
