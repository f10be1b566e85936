"""Embedded pattern extraction.

Pulls ``@date``, ``#priority``, ``color:value``, ``[tag]`` and ``+assignee``
markers out of free text, returning the markers as structured matches and the
text with the markers removed.

Scanning is a single left-to-right pass: at every offset each pattern is tried
in registry order and the first accepted match wins, after which the scan
resumes at the end of that match. Accepted matches therefore never overlap.
"""

import re
from datetime import date
from typing import Any, Iterator, Optional

from inkline.domain.types import ExtractionResult, PatternMatch, PatternType, TaskItem
from inkline.logger import get_logger
from inkline.patterns.formatters import format_resolved_date, resolve_date
from inkline.patterns.registry import PATTERN_REGISTRY, PatternSpec

logger = get_logger("patterns.extractor")

# Cheap pre-filter: every pattern starts with one of these
_PATTERN_START = re.compile(r"[@#\[+]|color:", re.IGNORECASE)

_TASK_LINE = re.compile(r"^\s*(?:[-*]\s+)?\[([ xX]?)\]\s*(.*)$")


def _match_at(text: str, pos: int, spec: PatternSpec, today: Optional[date]) -> Optional[PatternMatch]:
    m = spec.scan_regex.match(text, pos)
    if m is None:
        return None
    raw_value = m.group(1)
    if spec.is_excluded(raw_value):
        return None

    resolved = None
    if spec.type is PatternType.DATE:
        resolved = resolve_date(raw_value, today)
        display = format_resolved_date(resolved, raw_value, today) if resolved else raw_value
    else:
        display = spec.formatter(raw_value)

    return PatternMatch(
        type=spec.type,
        raw_value=raw_value,
        display_value=display,
        start_offset=m.start(),
        end_offset=m.end(),
        raw=m.group(0),
        resolved_date=resolved,
    )


def iter_pattern_matches(text: str, today: Optional[date] = None) -> Iterator[PatternMatch]:
    """
    Yield non-overlapping pattern matches from left to right.

    Args:
        text: Text to scan
        today: Reference day for relative dates

    Yields:
        PatternMatch objects in ascending start offset
    """
    pos = 0
    length = len(text)
    specs = tuple(PATTERN_REGISTRY.values())
    while pos < length:
        start = _PATTERN_START.search(text, pos)
        if start is None:
            return
        pos = start.start()

        for spec in specs:
            match = _match_at(text, pos, spec, today)
            if match is not None:
                yield match
                pos = match.end_offset
                break
        else:
            pos += 1


def _normalize_line(line: str) -> str:
    indent = line[: len(line) - len(line.lstrip(" \t"))]
    body = re.sub(r"[ \t]+", " ", line[len(indent):])
    body = re.sub(r" +,", ",", body)
    body = re.sub(r",(?: ?,)+", ",", body)
    body = re.sub(r"^[ ,]+|[ ,]+$", "", body)
    return f"{indent}{body}" if body else ""


def _build_clean_text(text: str, patterns: list[PatternMatch]) -> str:
    cleaned = text
    # Descending offsets keep the earlier spans valid while editing
    for match in sorted(patterns, key=lambda p: p.start_offset, reverse=True):
        cleaned = f"{cleaned[:match.start_offset]} {cleaned[match.end_offset:]}"

    touched_lines = {text.count("\n", 0, p.start_offset) for p in patterns}
    lines = cleaned.split("\n")
    for index in touched_lines:
        lines[index] = _normalize_line(lines[index])
    return "\n".join(line.rstrip() for line in lines).strip()


def build_metadata(patterns: list[PatternMatch]) -> dict[str, Any]:
    """
    Collapse extracted patterns into a metadata dict.

    The first date, priority and color win; tags and assignees accumulate
    without duplicates. Comma separated tags are split.
    """
    metadata: dict[str, Any] = {}
    for match in patterns:
        if match.type is PatternType.DATE:
            if "due_date" not in metadata:
                metadata["due_date"] = (
                    match.resolved_date.isoformat() if match.resolved_date else match.raw_value
                )
        elif match.type is PatternType.PRIORITY:
            metadata.setdefault("priority", match.raw_value.lower())
        elif match.type is PatternType.COLOR:
            metadata.setdefault("color", match.display_value)
        elif match.type is PatternType.TAG:
            tags = metadata.setdefault("tags", [])
            for tag in (t.strip() for t in match.raw_value.split(",")):
                if tag and tag not in tags:
                    tags.append(tag)
        elif match.type is PatternType.ASSIGNEE:
            assignees = metadata.setdefault("assignees", [])
            if match.raw_value not in assignees:
                assignees.append(match.raw_value)
    return metadata


def extract_embedded_patterns(text: str, today: Optional[date] = None) -> ExtractionResult:
    """
    Extract embedded patterns and return the cleaned text.

    Removed spans are replaced by a space and the affected lines are then
    normalised: runs of spaces collapse, orphaned commas left by removal
    disappear, and surrounding whitespace is trimmed. Line breaks are kept.

    Args:
        text: Raw editor text
        today: Reference day for relative dates (defaults to today)

    Returns:
        ExtractionResult with clean text, patterns sorted by start offset and
        a metadata summary

    Example:
        >>> result = extract_embedded_patterns("Call Bob @today #high")
        >>> result.clean_text
        'Call Bob'
        >>> [p.type.value for p in result.patterns]
        ['date', 'priority']
    """
    if not text or not text.strip():
        return ExtractionResult(clean_text="", patterns=[])

    patterns = list(iter_pattern_matches(text, today))
    if not patterns:
        return ExtractionResult(clean_text=text.strip(), patterns=[])

    clean_text = _build_clean_text(text, patterns)
    logger.debug(f"Extracted {len(patterns)} pattern(s) from {len(text)} chars")
    return ExtractionResult(
        clean_text=clean_text,
        patterns=patterns,
        metadata=build_metadata(patterns),
    )


def has_embedded_patterns(text: str) -> bool:
    """Check whether ``text`` contains at least one embedded pattern."""
    if not text:
        return False
    return next(iter_pattern_matches(text), None) is not None


def parse_task_list(text: str) -> list[TaskItem]:
    """
    Parse checkbox lines into task items.

    Recognises ``[ ] item``, ``[x] item``, ``[] item`` and the list forms
    ``- [ ] item`` / ``* [x] item``. Lines without a checkbox are ignored.
    """
    tasks: list[TaskItem] = []
    for line in text.splitlines():
        m = _TASK_LINE.match(line)
        if m is None:
            continue
        body = m.group(2).strip()
        if not body:
            continue
        tasks.append(TaskItem(text=body, is_complete=m.group(1).lower() == "x"))
    return tasks
