"""Semantic version comparison for ``requires`` ranges.

Supports exact versions and the ``>=``, ``>``, ``<=``, ``<``, caret (``^``)
and tilde (``~``) range operators over plain ``MAJOR.MINOR.PATCH`` versions.
"""

from __future__ import annotations

import re
from typing import NamedTuple

_VERSION_PATTERN = re.compile(r"^(\d+)\.(\d+)\.(\d+)$")

# Longer operators first so ">=" is not read as ">".
_COMPARISON_OPERATORS = (">=", "<=", ">", "<")


class Version(NamedTuple):
    """A parsed ``MAJOR.MINOR.PATCH`` version."""

    major: int
    minor: int
    patch: int


def parse_version(version: str) -> Version | None:
    """Parse ``version`` into its numeric components.

    Returns None when the string is not a plain ``MAJOR.MINOR.PATCH``.
    """
    match = _VERSION_PATTERN.match(version.strip())
    if not match:
        return None
    return Version(*(int(part) for part in match.groups()))


def compare_versions(a: Version, b: Version) -> int:
    """Return -1, 0 or 1 as ``a`` is lower than, equal to or higher than ``b``."""
    if a == b:
        return 0
    return -1 if a < b else 1


def _satisfies_caret(current: Version, base: Version) -> bool:
    if compare_versions(current, base) < 0:
        return False
    # ^0.x.y only allows changes below the minor version.
    if base.major == 0:
        return current.major == 0 and current.minor == base.minor
    return current.major == base.major


def _satisfies_tilde(current: Version, base: Version) -> bool:
    if compare_versions(current, base) < 0:
        return False
    return current.major == base.major and current.minor == base.minor


def check_version_compatibility(required: str, current: str) -> bool:
    """Check whether ``current`` satisfies the ``required`` range.

    Args:
        required: Range such as ``">=0.1.0"``, ``"^1.0.0"`` or ``"0.1.0"``.
        current: Installed version, e.g. ``"0.2.0"``.

    Returns:
        True if compatible. Unparseable versions are never compatible.

    Raises:
        ValueError: If either argument is empty.

    Example:
        >>> check_version_compatibility("^1.0.0", "1.5.0")
        True
        >>> check_version_compatibility("~1.2.0", "1.3.0")
        False
    """
    if not required.strip():
        raise ValueError("required version range must not be empty")
    if not current.strip():
        raise ValueError("current version must not be empty")

    current_version = parse_version(current)
    if current_version is None:
        return False

    required = required.strip()

    if required.startswith("^") or required.startswith("~"):
        base = parse_version(required[1:])
        if base is None:
            return False
        if required[0] == "^":
            return _satisfies_caret(current_version, base)
        return _satisfies_tilde(current_version, base)

    for operator in _COMPARISON_OPERATORS:
        if required.startswith(operator):
            base = parse_version(required[len(operator) :])
            if base is None:
                return False
            result = compare_versions(current_version, base)
            return {
                ">=": result >= 0,
                "<=": result <= 0,
                ">": result > 0,
                "<": result < 0,
            }[operator]

    base = parse_version(required)
    if base is None:
        return False
    return compare_versions(current_version, base) == 0
