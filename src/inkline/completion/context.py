"""Detects which pattern is being typed at the cursor."""

import re
from typing import Optional

from inkline.completion.data import days_in_month
from inkline.domain.types import PartialDate, PatternContext, PatternType
from inkline.patterns.registry import PATTERN_REGISTRY, TRIGGER_PREFIXES
from inkline.utils import clamp_cursor, line_bounds

# ``2025-10-`` or ``2025-10-2``; a two digit day is a complete date
_PARTIAL_DATE = re.compile(r"^(\d{4})-(\d{1,2})-(\d?)$")


def parse_partial_date(query: str) -> Optional[PartialDate]:
    """Parse ``YYYY-MM-`` / ``YYYY-MM-D`` into a PartialDate, else None."""
    m = _PARTIAL_DATE.match(query)
    if m is None:
        return None
    year, month = int(m.group(1)), int(m.group(2))
    total = days_in_month(year, month)
    return PartialDate(
        year=year,
        month=month,
        partial_day=m.group(3),
        is_valid=total is not None,
        days_in_month=total,
    )


def text_before_cursor(text: str, cursor_position: int) -> tuple[str, int]:
    """
    Current line from its start up to the cursor.

    Returns:
        ``(text_before, line_start)``
    """
    cursor = clamp_cursor(text, cursor_position)
    line_start, _ = line_bounds(text, cursor)
    return text[line_start:cursor], line_start


def detect_pattern_context(text_before: str, offset: int = 0) -> Optional[PatternContext]:
    """
    Find the pattern being typed at the end of ``text_before``.

    Every pattern's end-anchored context regex is tried. A candidate whose
    trigger is the first character of a color value is dropped (the ``#`` in
    ``color:#ff`` is part of the color), and the candidate that starts nearest
    the cursor wins, so ``#@`` and ``[@`` offer dates.

    Args:
        text_before: Line text up to the cursor
        offset: Absolute offset of ``text_before`` in the full buffer

    Returns:
        PatternContext with absolute offsets, or None
    """
    candidates: list[tuple[PatternType, re.Match]] = []
    for pattern_type, spec in PATTERN_REGISTRY.items():
        m = spec.context_regex.search(text_before)
        if m is not None:
            candidates.append((pattern_type, m))

    color_values = {m.start(1) for t, m in candidates if t is PatternType.COLOR}
    candidates = [(t, m) for t, m in candidates if m.start() not in color_values]

    if not candidates:
        return _bare_trigger_context(text_before, offset)

    pattern_type, m = max(candidates, key=lambda item: item[1].start())
    query = m.group(1)
    match_start = m.start()

    if pattern_type is PatternType.TAG and "," in query:
        current = query.rsplit(",", 1)[1]
        stripped = current.lstrip()
        match_start = m.end() - len(stripped)
        query = stripped.strip()

    partial = parse_partial_date(query) if pattern_type is PatternType.DATE else None

    return PatternContext(
        type=pattern_type,
        pattern=m.group(0),
        query=query,
        match_start=offset + match_start,
        match_end=offset + len(text_before),
        partial_date=partial,
    )


def _bare_trigger_context(text_before: str, offset: int) -> Optional[PatternContext]:
    lowered = text_before.lower()
    for prefix, pattern_type in TRIGGER_PREFIXES:
        if lowered.endswith(prefix.lower()):
            start = len(text_before) - len(prefix)
            return PatternContext(
                type=pattern_type,
                pattern=text_before[start:],
                query="",
                match_start=offset + start,
                match_end=offset + len(text_before),
            )
    return None


def detect_context_at(text: str, cursor_position: int) -> Optional[PatternContext]:
    """Pattern context for a cursor inside a full (multi-line) buffer."""
    text_before, line_start = text_before_cursor(text, cursor_position)
    if not text_before:
        return None
    return detect_pattern_context(text_before, line_start)
