"""Structural validation of agent documents.

Checks run in a fixed order and stop at the first failure:

1. Minimum content length.
2. A frontmatter block is present.
3. The required frontmatter keys are present.
4. The body opens with a level-1 markdown heading.
5. At least one of the expected keywords appears (case-insensitive).
6. Optionally, the ``requires`` range accepts the installed OpenCode version.
"""

from __future__ import annotations

from pathlib import Path

from opencoder_agents.installer.config import (
    FailureReason,
    FrontmatterParseResult,
    ValidationResult,
)
from opencoder_agents.installer.frontmatter import parse_frontmatter
from opencoder_agents.installer.semver import check_version_compatibility

MIN_CONTENT_LENGTH = 100

# Any one of these is enough.
REQUIRED_KEYWORDS: tuple[str, ...] = ("agent", "task")

REQUIRED_FRONTMATTER_FIELDS: tuple[str, ...] = ("version", "requires")

_HEADER_MARKER = "# "


def _first_body_line(body: str) -> str:
    for line in body.splitlines():
        if line.strip():
            return line
    return ""


def _fail(reason: FailureReason, detail: str, **kwargs: list[str]) -> ValidationResult:
    return ValidationResult(valid=False, reason=reason, detail=detail, **kwargs)


def validate_content(
    text: str,
    *,
    opencode_version: str | None = None,
    frontmatter: FrontmatterParseResult | None = None,
) -> ValidationResult:
    """Validate the text of an agent document.

    Does not raise for invalid content; the first failing check is reported
    in the returned result.

    Args:
        text: Full document text.
        opencode_version: Installed OpenCode version. When given, the
            ``requires`` field must accept it.
        frontmatter: Result of ``parse_frontmatter(text)`` when the caller
            already has it.

    Returns:
        ValidationResult with the valid flag and, on failure, the reason.

    Raises:
        TypeError: If ``text`` is not a string.
    """
    if not isinstance(text, str):
        raise TypeError(f"validate_content: text must be a string, got {type(text).__name__}")

    if len(text) < MIN_CONTENT_LENGTH:
        return _fail(
            FailureReason.TOO_SHORT,
            f"File too short: {len(text)} characters (minimum {MIN_CONTENT_LENGTH})",
        )

    if frontmatter is None:
        frontmatter = parse_frontmatter(text)
    if not frontmatter.found:
        if frontmatter.problem == "unclosed":
            detail = "Unclosed YAML frontmatter (missing closing ---)"
        else:
            detail = "File missing YAML frontmatter (must start with ---)"
        return _fail(FailureReason.MISSING_FRONTMATTER, detail)

    missing = [f for f in REQUIRED_FRONTMATTER_FIELDS if not frontmatter.fields.get(f)]
    if missing:
        return _fail(
            FailureReason.MISSING_FIELDS,
            f"Frontmatter missing required fields: {', '.join(missing)}",
            missing_fields=missing,
        )

    body = text[frontmatter.body_offset :]
    if not _first_body_line(body).startswith(_HEADER_MARKER):
        return _fail(
            FailureReason.MISSING_HEADER,
            "File does not have a markdown header (# ) after frontmatter",
        )

    lowered = text.lower()
    if not any(keyword in lowered for keyword in REQUIRED_KEYWORDS):
        return _fail(
            FailureReason.MISSING_KEYWORD,
            f"File missing required keywords: {', '.join(REQUIRED_KEYWORDS)}",
        )

    if opencode_version is not None:
        required = frontmatter.fields["requires"]
        if not check_version_compatibility(required, opencode_version):
            return _fail(
                FailureReason.INCOMPATIBLE_VERSION,
                f"Incompatible OpenCode version: requires {required}, "
                f"but current version is {opencode_version}",
            )

    return ValidationResult(valid=True)


def validate_file(path: str | Path, *, opencode_version: str | None = None) -> ValidationResult:
    """Read ``path`` as UTF-8 and validate its content.

    Read errors are not caught; the caller decides how a file that cannot
    be read is reported.
    """
    text = Path(path).read_text(encoding="utf-8")
    return validate_content(text, opencode_version=opencode_version)
