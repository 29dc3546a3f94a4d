"""Frontmatter parsing for agent documents.

Agent documents start with a block of simple ``key: value`` pairs between
two standalone ``---`` lines::

    ---
    version: 0.1.0
    requires: ">=0.1.0"
    ---

    # OpenCoder Agent

Values are plain strings. This is deliberately not YAML: a value such as
``>=0.1.0`` must be read verbatim.
"""

from __future__ import annotations

from opencoder_agents.installer.config import FrontmatterParseResult

DELIMITER = "---"

_QUOTES = ('"', "'")


def _is_delimiter(line: str) -> bool:
    return line.rstrip("\r\n").rstrip() == DELIMITER


def _strip_quotes(value: str) -> str:
    """Remove one layer of matching surrounding quotes."""
    if len(value) >= 2 and value[0] in _QUOTES and value[-1] == value[0]:
        return value[1:-1]
    return value


def _parse_line(line: str) -> tuple[str, str] | None:
    """Parse a single ``key: value`` line.

    Returns None for blank lines, comments and lines without a colon.
    """
    stripped = line.strip()
    if not stripped or stripped.startswith("#"):
        return None

    key, sep, value = stripped.partition(":")
    if not sep:
        return None

    return key.strip(), _strip_quotes(value.strip())


def parse_frontmatter(text: str) -> FrontmatterParseResult:
    """Extract the leading frontmatter block from ``text``.

    Scans line by line. The first line must be exactly ``---``; the block
    ends at the next line consisting solely of ``---``. Malformed lines
    inside the block are skipped rather than reported.

    Args:
        text: Raw document text.

    Returns:
        ``FrontmatterParseResult`` with the parsed fields and the offset at
        which the body starts.

    Raises:
        TypeError: If ``text`` is not a string.
    """
    if not isinstance(text, str):
        raise TypeError(f"parse_frontmatter: text must be a string, got {type(text).__name__}")

    lines = text.splitlines(keepends=True)
    if not lines or not _is_delimiter(lines[0]):
        return FrontmatterParseResult(found=False, problem="missing")

    fields: dict[str, str] = {}
    offset = len(lines[0])
    inside = True

    for line in lines[1:]:
        offset += len(line)
        if _is_delimiter(line):
            inside = False
            break
        parsed = _parse_line(line)
        if parsed is not None:
            key, value = parsed
            fields[key] = value

    if inside:
        return FrontmatterParseResult(found=False, problem="unclosed")

    return FrontmatterParseResult(found=True, fields=fields, body_offset=offset)
