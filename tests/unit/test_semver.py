"""Tests for version range checks."""

from __future__ import annotations

import pytest

from opencoder_agents.installer.semver import (
    Version,
    check_version_compatibility,
    compare_versions,
    parse_version,
)


class TestParseVersion:
    """Tests for parse_version function."""

    def test_plain_version(self) -> None:
        """MAJOR.MINOR.PATCH is parsed into integers."""
        assert parse_version("1.20.3") == Version(1, 20, 3)

    @pytest.mark.parametrize("value", ["1.0", "v1.0.0", "1.0.0-beta", "", "a.b.c"])
    def test_invalid_versions(self, value: str) -> None:
        """Anything but three numeric parts is rejected."""
        assert parse_version(value) is None


class TestCompareVersions:
    """Tests for compare_versions function."""

    def test_ordering(self) -> None:
        """Versions compare numerically, not lexically."""
        assert compare_versions(Version(1, 10, 0), Version(1, 9, 0)) == 1
        assert compare_versions(Version(0, 1, 0), Version(0, 1, 1)) == -1
        assert compare_versions(Version(2, 0, 0), Version(2, 0, 0)) == 0


class TestCheckVersionCompatibility:
    """Tests for check_version_compatibility function."""

    @pytest.mark.parametrize(
        ("required", "current", "expected"),
        [
            (">=0.1.0", "0.1.0", True),
            (">=0.1.0", "1.2.3", True),
            (">=0.2.0", "0.1.9", False),
            (">0.1.0", "0.1.0", False),
            ("<=1.0.0", "1.0.0", True),
            ("<1.0.0", "1.0.0", False),
            ("^1.2.0", "1.9.9", True),
            ("^1.2.0", "2.0.0", False),
            ("^1.2.0", "1.1.0", False),
            ("^0.1.0", "0.1.0", True),
            ("^0.2.0", "0.2.5", True),
            ("^0.2.0", "0.3.0", False),
            ("~1.2.0", "1.2.9", True),
            ("~1.2.0", "1.3.0", False),
            ("1.0.0", "1.0.0", True),
            ("1.0.0", "1.0.1", False),
        ],
    )
    def test_ranges(self, required: str, current: str, expected: bool) -> None:
        """Each supported operator is evaluated correctly."""
        assert check_version_compatibility(required, current) is expected

    def test_unparseable_current_is_incompatible(self) -> None:
        """A malformed current version never satisfies a range."""
        assert check_version_compatibility(">=0.1.0", "latest") is False

    def test_unparseable_range_is_incompatible(self) -> None:
        """A malformed range never matches."""
        assert check_version_compatibility(">=one", "1.0.0") is False

    @pytest.mark.parametrize(("required", "current"), [("", "1.0.0"), (">=1.0.0", "  ")])
    def test_empty_arguments_raise(self, required: str, current: str) -> None:
        """Empty strings are rejected."""
        with pytest.raises(ValueError, match="must not be empty"):
            check_version_compatibility(required, current)
