"""Embedded metadata patterns: registry, formatting, extraction, validation."""

from inkline.patterns.extractor import (
    build_metadata,
    extract_embedded_patterns,
    has_embedded_patterns,
    iter_pattern_matches,
    parse_task_list,
)
from inkline.patterns.formatters import (
    NAMED_COLORS,
    PRIORITY_DISPLAY_MAP,
    format_color,
    format_date,
    format_priority,
    resolve_date,
)
from inkline.patterns.registry import PATTERN_REGISTRY, PatternSpec, get_pattern_spec
from inkline.patterns.validators import ValidationIssue, validate_patterns

__all__ = [
    "NAMED_COLORS",
    "PATTERN_REGISTRY",
    "PRIORITY_DISPLAY_MAP",
    "PatternSpec",
    "ValidationIssue",
    "build_metadata",
    "extract_embedded_patterns",
    "format_color",
    "format_date",
    "format_priority",
    "get_pattern_spec",
    "has_embedded_patterns",
    "iter_pattern_matches",
    "parse_task_list",
    "resolve_date",
    "validate_patterns",
]
