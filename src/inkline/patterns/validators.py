"""Validation of embedded pattern values.

Produces diagnostics with a suggested fix so a host can underline suspicious
markers (``#hgih``, ``+1bad``) while the user types.
"""

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from inkline.domain.types import PatternType
from inkline.patterns.extractor import iter_pattern_matches

VALID_PRIORITIES: tuple[str, ...] = (
    "critical",
    "high",
    "medium",
    "low",
    "urgent",
    "asap",
    "blocked",
    "waiting",
    "review",
    "done",
    "todo",
    "next",
    "later",
)

_USERNAME = re.compile(r"^[a-zA-Z][a-zA-Z0-9._-]*$")
_TAG_UNSAFE_CHARS = re.compile(r"[<>'\"]")
_CHECKBOX = re.compile(r"^\s*[xX]?\s*$")

MAX_TAG_LENGTH = 50
MAX_ASSIGNEE_LENGTH = 30


class Severity(Enum):
    ERROR = "error"
    WARNING = "warning"


@dataclass(slots=True)
class ValidationIssue:
    """A problem found in one pattern value."""

    severity: Severity
    code: str
    message: str
    start: int
    end: int
    suggestion: Optional[str] = None
    quick_fixes: list[str] = field(default_factory=list)


def validate_priority(value: str, start: int = 0) -> Optional[ValidationIssue]:
    """
    Validate a priority value against the known priorities.

    Very short values that are a prefix of a known priority are treated as
    still being typed and pass.
    """
    lowered = value.lower()
    if len(value) <= 2 and any(p.startswith(lowered) for p in VALID_PRIORITIES):
        return None
    if lowered in VALID_PRIORITIES:
        return None

    closest = next((p for p in VALID_PRIORITIES if p.startswith(lowered[:1])), "medium")
    return ValidationIssue(
        severity=Severity.ERROR,
        code="PRIORITY_INVALID",
        message=f'Invalid priority "{value}". Use one of: {", ".join(VALID_PRIORITIES)}.',
        start=start,
        end=start + len(value),
        suggestion=closest,
        quick_fixes=[closest, "high", "medium", "urgent"],
    )


def validate_tag(value: str, start: int = 0) -> Optional[ValidationIssue]:
    """Validate tag content; checkbox markers are always fine."""
    if _CHECKBOX.match(value):
        return None

    if _TAG_UNSAFE_CHARS.search(value):
        cleaned = _TAG_UNSAFE_CHARS.sub("", value)
        return ValidationIssue(
            severity=Severity.WARNING,
            code="TAG_INVALID_CHARS",
            message="Tags contain special characters that may cause issues.",
            start=start,
            end=start + len(value),
            suggestion=cleaned,
            quick_fixes=[cleaned],
        )

    if len(value) > MAX_TAG_LENGTH:
        return ValidationIssue(
            severity=Severity.WARNING,
            code="TAG_TOO_LONG",
            message="Tag is very long. Consider shortening for better readability.",
            start=start,
            end=start + len(value),
            suggestion=value[: MAX_TAG_LENGTH - 3] + "...",
        )
    return None


def validate_assignee(value: str, start: int = 0) -> Optional[ValidationIssue]:
    """Validate an assignee username (letter first, then letters, digits, ``._-``)."""
    if len(value) <= 1 and value.isalpha():
        return None

    if not _USERNAME.match(value):
        cleaned = re.sub(r"[^a-zA-Z0-9._-]", "", value).lower() or "username"
        return ValidationIssue(
            severity=Severity.ERROR,
            code="ASSIGNEE_INVALID_FORMAT",
            message=(
                "Invalid assignee format. Must start with letter and contain only "
                "letters, numbers, dots, underscores, or hyphens."
            ),
            start=start,
            end=start + len(value),
            suggestion=cleaned,
            quick_fixes=[cleaned, "user"],
        )

    if len(value) > MAX_ASSIGNEE_LENGTH:
        return ValidationIssue(
            severity=Severity.WARNING,
            code="ASSIGNEE_TOO_LONG",
            message="Username is very long. Consider using a shorter alias.",
            start=start,
            end=start + len(value),
            suggestion=value[: MAX_ASSIGNEE_LENGTH - 3] + "...",
        )
    return None


def is_valid_priority(value: str) -> bool:
    return value.lower() in VALID_PRIORITIES


def is_valid_tag(value: str) -> bool:
    return bool(value.strip()) and not _TAG_UNSAFE_CHARS.search(value)


def is_valid_assignee(value: str) -> bool:
    return bool(_USERNAME.match(value)) and len(value) <= MAX_ASSIGNEE_LENGTH


_VALIDATORS = {
    PatternType.PRIORITY: validate_priority,
    PatternType.TAG: validate_tag,
    PatternType.ASSIGNEE: validate_assignee,
}


def validate_patterns(text: str) -> list[ValidationIssue]:
    """
    Validate every embedded pattern in ``text``.

    Offsets in the returned issues point at the value (not the prefix) in the
    original text.
    """
    issues: list[ValidationIssue] = []
    for match in iter_pattern_matches(text):
        validator = _VALIDATORS.get(match.type)
        if validator is None:
            continue
        value_start = match.start_offset + len(match.raw) - len(match.raw_value)
        if match.type is PatternType.TAG:
            value_start -= 1  # closing bracket
        issue = validator(match.raw_value, value_start)
        if issue is not None:
            issues.append(issue)
    return issues
