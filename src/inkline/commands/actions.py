"""Command action kinds.

Every command carries exactly one action object. :func:`run_action` dispatches
on the action's kind; an object that is not one of the kinds below is rejected
with ``TypeError``.
"""

import re
from dataclasses import dataclass
from typing import TYPE_CHECKING, Awaitable, Callable, Optional, Union

from inkline.commands.models import CommandContext, CommandResult

if TYPE_CHECKING:
    from inkline.commands.models import Command

# Fallback trigger shape when the command's own trigger is not in the text
TRIGGER_STRIP_REGEX = re.compile(r"[$/]\w+\s*")

# Marker pairs for wrapping styles; ``align-*`` styles append an ``align:`` marker
WRAP_MARKERS: dict[str, str] = {
    "bold": "**",
    "italic": "*",
}
PLACEHOLDERS: dict[str, str] = {
    "bold": "bold text",
    "italic": "italic text",
}
ALIGNMENTS: tuple[str, ...] = ("left", "center", "right")

ActionOutcome = Union[CommandResult, Awaitable[CommandResult]]


@dataclass(frozen=True, slots=True)
class SwitchNodeType:
    """Change the node type and drop the trigger from the text."""

    node_type: str


@dataclass(frozen=True, slots=True)
class InsertPattern:
    """Replace the trigger with a pattern snippet such as ``@today``."""

    template: str


@dataclass(frozen=True, slots=True)
class FormatSelection:
    """Apply a formatting style (``bold``, ``italic``, ``align-left``...)."""

    style: str


@dataclass(frozen=True, slots=True)
class InsertTemplate:
    """Replace the trigger with a multi-line template.

    ``template`` may be a callable so templates can embed the current date.
    The cursor lands right after the first ``cursor_marker`` in the rendered
    text, or at the end of the template when the marker is absent.
    """

    template: Union[str, Callable[[], str]]
    cursor_marker: Optional[str] = None

    def render(self) -> str:
        return self.template() if callable(self.template) else self.template


@dataclass(frozen=True, slots=True)
class CustomAction:
    """Arbitrary host supplied behaviour, sync or async."""

    fn: Callable[[CommandContext], ActionOutcome]


CommandAction = Union[SwitchNodeType, InsertPattern, FormatSelection, InsertTemplate, CustomAction]
ACTION_KINDS = (SwitchNodeType, InsertPattern, FormatSelection, InsertTemplate, CustomAction)


def locate_trigger(trigger: str, context: CommandContext) -> Optional[tuple[int, int]]:
    """
    Find the span of ``trigger`` in the context text.

    The occurrence closest before the cursor is preferred; otherwise the first
    one in the text. Matching is case-insensitive and whole-word.
    Shortcut commands have no inline trigger text and never match.

    Returns:
        ``(start, end)`` of the trigger, or None when it is absent
    """
    if not trigger or trigger[0] not in "$/":
        return None
    pattern = re.compile(re.escape(trigger) + r"(?!\w)", re.IGNORECASE)
    spans = [(m.start(), m.end()) for m in pattern.finditer(context.text)]
    if not spans:
        return None
    before = [span for span in spans if span[0] < context.cursor_position]
    return before[-1] if before else spans[0]


def strip_trigger(text: str, trigger: Optional[str] = None) -> str:
    """
    Remove one trigger occurrence (and the whitespace after it) and trim.

    ``trigger`` is tried first; when it is missing, the first ``$word`` or
    ``/word`` in the text is removed instead.
    """
    if trigger:
        own = re.compile(re.escape(trigger) + r"(?!\w)\s*", re.IGNORECASE)
        stripped, count = own.subn("", text, count=1)
        if count:
            return stripped.strip()
    return TRIGGER_STRIP_REGEX.sub("", text, count=1).strip()


def _replace_trigger(command: "Command", context: CommandContext, insertion: str) -> tuple[str, int]:
    span = locate_trigger(command.trigger, context)
    start, end = span if span else (context.cursor_position, context.cursor_position)
    text = context.text
    return f"{text[:start]}{insertion}{text[end:]}", start


def _switch_node_type(action: SwitchNodeType, command: "Command", context: CommandContext) -> CommandResult:
    remainder = strip_trigger(context.text, command.trigger)
    return CommandResult(
        success=True,
        replacement_text=remainder,
        cursor_position=len(remainder),
        node_type=action.node_type,
        close_panel=True,
    )


def _insert_pattern(action: InsertPattern, command: "Command", context: CommandContext) -> CommandResult:
    new_text, start = _replace_trigger(command, context, action.template)
    return CommandResult(
        success=True,
        replacement_text=new_text,
        cursor_position=start + len(action.template),
        close_panel=True,
    )


def _format_selection(action: FormatSelection, command: "Command", context: CommandContext) -> CommandResult:
    style = action.style.lower()

    if style.startswith("align-"):
        alignment = style.removeprefix("align-")
        if alignment not in ALIGNMENTS:
            raise ValueError(f"Unknown alignment: {alignment}")
        span = locate_trigger(command.trigger, context)
        text = context.text
        if span:
            text = f"{text[:span[0]]}{text[span[1]:]}"
        base = re.sub(r"[ \t]{2,}", " ", text).strip()
        new_text = f"{base} align:{alignment}" if base else f"align:{alignment}"
        return CommandResult(
            success=True,
            replacement_text=new_text,
            cursor_position=len(new_text),
            close_panel=True,
        )

    marker = WRAP_MARKERS.get(style)
    if marker is None:
        raise ValueError(f"Unknown format style: {action.style}")

    selection = context.selection
    if selection is None or not selection.text:
        snippet = f"{marker}{PLACEHOLDERS[style]}{marker}"
        new_text, start = _replace_trigger(command, context, snippet)
        return CommandResult(
            success=True,
            replacement_text=new_text,
            cursor_position=start + len(marker),
            close_panel=True,
        )

    wrapped = f"{marker}{selection.text}{marker}"
    edits = [(selection.start, selection.end, wrapped)]
    span = locate_trigger(command.trigger, context)
    if span and (span[1] <= selection.start or span[0] >= selection.end):
        tail = context.text[span[1]:]
        trigger_end = span[1] + len(tail) - len(tail.lstrip(" \t"))
        if span[1] <= selection.start:
            trigger_end = min(trigger_end, selection.start)
        span = (span[0], trigger_end)
        edits.append((span[0], span[1], ""))

    new_text = context.text
    for start, end, replacement in sorted(edits, reverse=True):
        new_text = f"{new_text[:start]}{replacement}{new_text[end:]}"

    cursor = selection.start + len(wrapped)
    if span and span[1] <= selection.start:
        cursor -= span[1] - span[0]
    return CommandResult(
        success=True,
        replacement_text=new_text,
        cursor_position=cursor,
        close_panel=True,
    )


def _insert_template(action: InsertTemplate, command: "Command", context: CommandContext) -> CommandResult:
    rendered = action.render()
    new_text, start = _replace_trigger(command, context, rendered)
    offset = len(rendered)
    if action.cursor_marker and action.cursor_marker in rendered:
        offset = rendered.index(action.cursor_marker) + len(action.cursor_marker)
    return CommandResult(
        success=True,
        replacement_text=new_text,
        cursor_position=start + offset,
        close_panel=True,
    )


def run_action(command: "Command", context: CommandContext) -> ActionOutcome:
    """
    Run a command's action against a context.

    Returns:
        A CommandResult, or an awaitable of one for async custom actions

    Raises:
        TypeError: If the action is not a known action kind
        Exception: Whatever the action itself raises
    """
    action = command.action
    if isinstance(action, SwitchNodeType):
        return _switch_node_type(action, command, context)
    if isinstance(action, InsertPattern):
        return _insert_pattern(action, command, context)
    if isinstance(action, FormatSelection):
        return _format_selection(action, command, context)
    if isinstance(action, InsertTemplate):
        return _insert_template(action, command, context)
    if isinstance(action, CustomAction):
        return action.fn(context)
    raise TypeError(f"Unsupported action kind: {type(action).__name__}")
