"""Type definitions shared across the recognition engine."""

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Any, Optional


class PatternType(str, Enum):
    """Embedded metadata pattern kinds."""

    DATE = "date"
    PRIORITY = "priority"
    COLOR = "color"
    TAG = "tag"
    ASSIGNEE = "assignee"


class TriggerType(str, Enum):
    """How a command is invoked."""

    NODE_TYPE = "node-type"  # $word
    SLASH = "slash"  # /word
    SHORTCUT = "shortcut"  # keyboard shortcut, no inline prefix


class CommandCategory(str, Enum):
    """Command palette grouping."""

    NODE_TYPE = "node-type"
    CONTENT = "content"
    MEDIA = "media"
    INTERACTIVE = "interactive"
    ANNOTATION = "annotation"
    PATTERN = "pattern"
    FORMAT = "format"
    TEMPLATE = "template"


@dataclass(frozen=True, slots=True)
class PatternMatch:
    """One embedded pattern found in a text.

    Offsets are a half-open span in the original text.
    """

    type: PatternType
    raw_value: str
    display_value: str
    start_offset: int
    end_offset: int
    raw: str = ""
    resolved_date: Optional[date] = None

    def overlaps(self, other: "PatternMatch") -> bool:
        return self.start_offset < other.end_offset and other.start_offset < self.end_offset


@dataclass(slots=True)
class TaskItem:
    """A checkbox line such as ``[x] Ship release``."""

    text: str
    is_complete: bool


@dataclass(slots=True)
class ExtractionResult:
    """Outcome of embedded pattern extraction."""

    clean_text: str
    patterns: list[PatternMatch] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class CompletionItem:
    """A single completion candidate."""

    label: str
    value: str
    description: str = ""
    category: str = ""
    boost: Optional[float] = None


@dataclass(slots=True)
class PartialDate:
    """A date being typed as ``YYYY-MM-`` or ``YYYY-MM-D``."""

    year: int
    month: int
    partial_day: str
    is_valid: bool
    days_in_month: Optional[int] = None


@dataclass(slots=True)
class PatternContext:
    """The pattern currently being typed at the cursor.

    ``match_start`` is where the replaced span begins (absolute offset in the
    full text); ``match_end`` is the cursor.
    """

    type: PatternType
    pattern: str
    query: str
    match_start: int
    match_end: int
    partial_date: Optional[PartialDate] = None


@dataclass(frozen=True, slots=True)
class CompletionResult:
    """Completion list anchored at ``[start, end)`` in the full text.

    ``pattern_type`` is None for command (``$``/``/``) completions.
    """

    start: int
    end: int
    pattern_type: Optional[PatternType]
    query: str
    items: tuple[CompletionItem, ...]
    valid_for: str = ""

    def anchored(self, start: int, end: int) -> "CompletionResult":
        return CompletionResult(
            start=start,
            end=end,
            pattern_type=self.pattern_type,
            query=self.query,
            items=self.items,
            valid_for=self.valid_for,
        )
