"""Static table of the embedded metadata patterns.

Each entry describes how a pattern is scanned out of finished text, how it is
recognised while still being typed (for completion), and how its value is
displayed. The table is read-only and safe to share across threads.
"""

import re
from dataclasses import dataclass
from types import MappingProxyType
from typing import Callable, Mapping, Optional

from inkline.domain.types import PatternType
from inkline.patterns.formatters import (
    format_assignee,
    format_color,
    format_date,
    format_priority,
    format_tag,
)


@dataclass(frozen=True, slots=True)
class PatternSpec:
    """Recognition rules for one pattern type.

    Attributes:
        type: Pattern kind
        prefix: Literal text that opens the pattern (``@``, ``#``, ``[``...)
        suffix: Literal text that closes it (only ``]`` for tags)
        scan_regex: Matches a complete pattern; group 1 is the raw value
        context_regex: Matches a pattern being typed at the end of a string
        validation_regex: Whether a typed prefix is still a valid pattern start
        formatter: Raw value to display value
        exclusion_regex: Raw values matching this are not patterns at all
        description: Human readable summary
    """

    type: PatternType
    prefix: str
    suffix: str
    scan_regex: re.Pattern
    context_regex: re.Pattern
    validation_regex: re.Pattern
    formatter: Callable[[str], str]
    exclusion_regex: Optional[re.Pattern] = None
    description: str = ""

    def is_excluded(self, raw_value: str) -> bool:
        return self.exclusion_regex is not None and bool(self.exclusion_regex.match(raw_value))

    def wrap(self, raw_value: str) -> str:
        """Rebuild the pattern text for a raw value, e.g. ``tag`` -> ``[tag]``."""
        return f"{self.prefix}{raw_value}{self.suffix}"


# Registry order doubles as the tie-break when two patterns start at one offset
PATTERN_REGISTRY: Mapping[PatternType, PatternSpec] = MappingProxyType(
    {
        PatternType.DATE: PatternSpec(
            type=PatternType.DATE,
            prefix="@",
            suffix="",
            scan_regex=re.compile(r"@([^@\s#\[\]+,;]+)"),
            context_regex=re.compile(r"@([^@\s]*)$"),
            validation_regex=re.compile(r"^@[\w-]*$"),
            formatter=format_date,
            description="Due date: @today, @friday, @2024-12-25",
        ),
        PatternType.PRIORITY: PatternSpec(
            type=PatternType.PRIORITY,
            prefix="#",
            suffix="",
            scan_regex=re.compile(r"#([^#\s@\[\]+:,;]+)"),
            context_regex=re.compile(r"#([^#\s]*)$"),
            validation_regex=re.compile(r"^#[\w-]*$"),
            formatter=format_priority,
            description="Priority or status: #high, #blocked",
        ),
        PatternType.COLOR: PatternSpec(
            type=PatternType.COLOR,
            prefix="color:",
            suffix="",
            scan_regex=re.compile(r"color:([^\s@\[\],;]+)", re.IGNORECASE),
            context_regex=re.compile(r"color:([^:\s]*)$", re.IGNORECASE),
            validation_regex=re.compile(r"^color:[\w#-]*$", re.IGNORECASE),
            formatter=format_color,
            description="Text color: color:red, color:#3b82f6",
        ),
        PatternType.TAG: PatternSpec(
            type=PatternType.TAG,
            prefix="[",
            suffix="]",
            scan_regex=re.compile(r"\[([^\[\]\n]+)\]"),
            context_regex=re.compile(r"\[([^\[\]]*)$"),
            validation_regex=re.compile(r"^\[[\w\s,-]*$"),
            formatter=format_tag,
            # Checkbox markers such as [ ], [x], [X]
            exclusion_regex=re.compile(r"^[xX;,\s]*$"),
            description="Tags: [meeting], [bug, frontend]",
        ),
        PatternType.ASSIGNEE: PatternSpec(
            type=PatternType.ASSIGNEE,
            prefix="+",
            suffix="",
            scan_regex=re.compile(r"\+([^+\s@#\[\]:,;]+)"),
            context_regex=re.compile(r"\+([^+\s]*)$"),
            validation_regex=re.compile(r"^\+[\w.-]*$"),
            formatter=format_assignee,
            description="Assignee: +alice, +team",
        ),
    }
)

# Trigger text per type, longest first so ``color:`` is checked before single chars
TRIGGER_PREFIXES: tuple[tuple[str, PatternType], ...] = tuple(
    sorted(
        ((spec.prefix, spec.type) for spec in PATTERN_REGISTRY.values()),
        key=lambda item: len(item[0]),
        reverse=True,
    )
)


def get_pattern_spec(pattern_type: PatternType | str) -> PatternSpec:
    """
    Look up the recognition rules for a pattern type.

    Raises:
        ValueError: If the type is unknown
    """
    return PATTERN_REGISTRY[PatternType(pattern_type)]
