"""Value resolution and display formatting for embedded patterns.

Dates resolve relative to ``today`` (injectable for tests); colors map named
values to hex; priorities get an emoji-prefixed label.
"""

import re
from datetime import date, datetime, timedelta
from typing import Optional

WEEKDAYS: tuple[str, ...] = (
    "monday",
    "tuesday",
    "wednesday",
    "thursday",
    "friday",
    "saturday",
    "sunday",
)

NAMED_COLORS: dict[str, str] = {
    "red": "#FF0000",
    "blue": "#0000FF",
    "green": "#008000",
    "yellow": "#FFFF00",
    "orange": "#FFA500",
    "purple": "#800080",
    "pink": "#FFC0CB",
    "black": "#000000",
    "white": "#FFFFFF",
    "gray": "#808080",
    "grey": "#808080",
}

PRIORITY_DISPLAY_MAP: dict[str, str] = {
    "critical": "🔴 Critical",
    "high": "🔴 High",
    "medium": "🟡 Medium",
    "low": "🟢 Low",
    "urgent": "⚡ Urgent",
    "asap": "🚨 ASAP",
    "blocked": "⛔ Blocked",
    "waiting": "⏳ Waiting",
}

# strptime formats tried in order by the generic date parser
_DATE_FORMATS: tuple[str, ...] = (
    "%Y-%m-%d",
    "%Y/%m/%d",
    "%m/%d/%Y",
    "%b %d %Y",
    "%B %d %Y",
    "%b-%d-%Y",
    "%d %b %Y",
)
# Formats without a year; the current year is appended before parsing
_YEARLESS_FORMATS: tuple[str, ...] = (
    "%b %d",
    "%B %d",
    "%b-%d",
    "%B-%d",
)

_HEX_COLOR = re.compile(r"^#(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6}|[0-9a-fA-F]{8})$")


def _parse_generic_date(value: str, today: date) -> Optional[date]:
    candidate = value.replace(",", " ").strip()
    candidate = re.sub(r"\s+", " ", candidate)
    for fmt in _DATE_FORMATS:
        try:
            return datetime.strptime(candidate, fmt).date()
        except ValueError:
            continue
    for fmt in _YEARLESS_FORMATS:
        try:
            return datetime.strptime(f"{candidate} {today.year}", f"{fmt} %Y").date()
        except ValueError:
            continue
    return None


def resolve_date(value: str, today: Optional[date] = None) -> Optional[date]:
    """
    Resolve a date pattern value to a calendar date.

    Supports ``today``/``tomorrow``/``yesterday``, weekday names (next
    occurrence strictly after today) and a handful of absolute formats.

    Args:
        value: Raw value without the ``@`` prefix
        today: Reference day, defaults to ``date.today()``

    Returns:
        The resolved date, or None if the value cannot be parsed
    """
    if today is None:
        today = date.today()
    lowered = value.strip().lower()
    if not lowered:
        return None

    if lowered == "today":
        return today
    if lowered == "tomorrow":
        return today + timedelta(days=1)
    if lowered == "yesterday":
        return today - timedelta(days=1)

    if lowered in WEEKDAYS:
        target = WEEKDAYS.index(lowered)
        # Same weekday as today means next week, never today
        days_ahead = (target - today.weekday() + 7) % 7 or 7
        return today + timedelta(days=days_ahead)

    return _parse_generic_date(value, today)


def format_resolved_date(resolved: date, original: str, today: Optional[date] = None) -> str:
    """Relative, human-friendly label for a resolved date."""
    if today is None:
        today = date.today()
    diff_days = (resolved - today).days

    if diff_days == 0:
        return "Today"
    if diff_days == 1:
        return "Tomorrow"
    if diff_days == -1:
        return "Yesterday"
    if 0 < diff_days <= 7:
        return f"In {diff_days} days"
    if -7 <= diff_days < 0:
        return f"{abs(diff_days)} days ago"

    if original.lower() in WEEKDAYS:
        return original.capitalize()

    label = f"{resolved.strftime('%b')} {resolved.day}"
    if resolved.year != today.year:
        label = f"{label}, {resolved.year}"
    return label


def format_date(value: str, today: Optional[date] = None) -> str:
    """Display label for a date value; unresolvable values are returned as-is."""
    resolved = resolve_date(value, today)
    if resolved is None:
        return value
    return format_resolved_date(resolved, value, today)


def format_color(value: str) -> str:
    """Named colors become hex, hex is upper-cased, anything else is untouched."""
    named = NAMED_COLORS.get(value.lower())
    if named:
        return named
    if _HEX_COLOR.match(value):
        return value.upper()
    return value


def format_priority(value: str) -> str:
    display = PRIORITY_DISPLAY_MAP.get(value.lower())
    if display:
        return display
    return value[:1].upper() + value[1:]


def format_tag(value: str) -> str:
    return value.strip()


def format_assignee(value: str) -> str:
    return f"@{value}"
