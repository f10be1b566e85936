"""Built-in command set: node types, pattern snippets, formatting, templates."""

from datetime import date, timedelta

from inkline.commands.actions import (
    FormatSelection,
    InsertPattern,
    InsertTemplate,
    SwitchNodeType,
)
from inkline.commands.models import Command
from inkline.domain.types import CommandCategory, TriggerType
from inkline.logger import get_logger

logger = get_logger("commands.defaults")

# Trigger -> node type understood by the host editor
NODE_TYPE_COMMANDS: dict[str, str] = {
    "$note": "defaultNode",
    "$text": "textNode",
    "$task": "taskNode",
    "$question": "questionNode",
    "$code": "codeNode",
    "$image": "imageNode",
    "$link": "resourceNode",
    "$resource": "resourceNode",
    "$annotation": "annotationNode",
    "$reference": "referenceNode",
}


def _node_command(
    name: str,
    label: str,
    description: str,
    category: CommandCategory,
    priority: int,
    keywords: tuple[str, ...],
    examples: tuple[str, ...] = (),
) -> Command:
    trigger = f"${name}"
    node_type = NODE_TYPE_COMMANDS[trigger]
    return Command(
        id=f"node-type-{name}",
        trigger=trigger,
        trigger_type=TriggerType.NODE_TYPE,
        category=category,
        label=label,
        description=description,
        keywords=frozenset(keywords),
        priority=priority,
        node_type=node_type,
        action=SwitchNodeType(node_type),
        examples=examples,
    )


NODE_TYPE_DEFAULTS: tuple[Command, ...] = (
    _node_command("note", "Note", "Create a basic note", CommandCategory.CONTENT, 1, ("note", "basic", "default")),
    _node_command(
        "task",
        "Task List",
        "Create a task list with checkboxes",
        CommandCategory.INTERACTIVE,
        2,
        ("task", "todo", "checklist", "checkbox"),
        ("$task Buy milk @today", "[ ] First item"),
    ),
    _node_command("code", "Code Block", "Create a code snippet", CommandCategory.CONTENT, 3, ("code", "snippet", "program")),
    _node_command("image", "Image", "Embed an image from a URL", CommandCategory.MEDIA, 4, ("image", "picture", "photo")),
    _node_command("link", "Resource Link", "Link to an external resource", CommandCategory.MEDIA, 5, ("link", "url", "resource")),
    _node_command("question", "Question", "Ask a question to get an answer", CommandCategory.INTERACTIVE, 6, ("question", "ask", "poll")),
    _node_command("annotation", "Annotation", "Add a note, idea or warning", CommandCategory.ANNOTATION, 7, ("annotation", "comment", "idea")),
    _node_command("text", "Text", "Plain formatted text", CommandCategory.CONTENT, 8, ("text", "plain", "paragraph")),
    _node_command("reference", "Reference", "Reference another node or map", CommandCategory.CONTENT, 9, ("reference", "ref", "cross-link")),
    _node_command("resource", "Resource", "Alias of $link", CommandCategory.MEDIA, 10, ("resource", "link", "url")),
)


def _pattern_command(name: str, label: str, description: str, template: str, priority: int, keywords: tuple[str, ...]) -> Command:
    return Command(
        id=f"pattern-{name}",
        trigger=f"/{name}",
        trigger_type=TriggerType.SLASH,
        category=CommandCategory.PATTERN,
        label=label,
        description=description,
        keywords=frozenset(keywords),
        priority=priority,
        action=InsertPattern(template),
        examples=(template,),
    )


PATTERN_DEFAULTS: tuple[Command, ...] = (
    _pattern_command("date", "Date", "Add a due date (@today, @friday)", "@today", 10, ("date", "due", "deadline", "when")),
    _pattern_command("priority", "Priority", "Set a priority (#high, #low)", "#medium", 11, ("priority", "importance", "urgent")),
    _pattern_command("tag", "Tag", "Add tags ([meeting, notes])", "[tag]", 12, ("tag", "label", "category")),
    _pattern_command("assignee", "Assignee", "Assign someone (+alice)", "+user", 13, ("assignee", "owner", "person")),
    _pattern_command("color", "Color", "Set text color (color:blue)", "color:blue", 14, ("color", "colour", "highlight")),
)


def _format_command(style: str, label: str, description: str, priority: int, keywords: tuple[str, ...], shortcuts: tuple[str, ...] = ()) -> Command:
    return Command(
        id=f"format-{style}",
        trigger=style,
        trigger_type=TriggerType.SHORTCUT,
        category=CommandCategory.FORMAT,
        label=label,
        description=description,
        keywords=frozenset(keywords),
        priority=priority,
        action=FormatSelection(style),
        shortcuts=shortcuts,
    )


FORMAT_DEFAULTS: tuple[Command, ...] = (
    _format_command("bold", "Bold", "Make text bold", 20, ("bold", "strong", "emphasis"), ("mod+b",)),
    _format_command("italic", "Italic", "Make text italic", 21, ("italic", "emphasis", "style"), ("mod+i",)),
    _format_command("align-left", "Align Left", "Align text to the left", 22, ("align", "left", "alignment")),
    _format_command("align-center", "Align Center", "Center text", 23, ("align", "center", "alignment")),
    _format_command("align-right", "Align Right", "Align text to the right", 24, ("align", "right", "alignment")),
)


def _meeting_template() -> str:
    today = date.today().isoformat()
    return (
        f"Meeting Notes {today} [meeting]\n"
        "Attendees: +\n"
        "Agenda:\n"
        "- [ ] \n"
        "Action Items:\n"
        f"- [ ] Follow up @{(date.today() + timedelta(days=1)).isoformat()}"
    )


def _checklist_template() -> str:
    return "- [ ] \n- [ ] \n- [ ] "


TEMPLATE_DEFAULTS: tuple[Command, ...] = (
    Command(
        id="template-meeting",
        trigger="/meeting",
        trigger_type=TriggerType.SLASH,
        category=CommandCategory.TEMPLATE,
        label="Meeting Notes",
        description="Insert meeting notes template",
        keywords=frozenset(("meeting", "notes", "agenda", "minutes")),
        priority=30,
        action=InsertTemplate(_meeting_template, cursor_marker="Attendees: +"),
    ),
    Command(
        id="template-checklist",
        trigger="/checklist",
        trigger_type=TriggerType.SLASH,
        category=CommandCategory.TEMPLATE,
        label="Checklist",
        description="Insert a three item checklist",
        keywords=frozenset(("checklist", "todo", "list")),
        priority=31,
        action=InsertTemplate(_checklist_template, cursor_marker="- [ ] "),
    ),
)

DEFAULT_COMMANDS: tuple[Command, ...] = NODE_TYPE_DEFAULTS + PATTERN_DEFAULTS + FORMAT_DEFAULTS + TEMPLATE_DEFAULTS


def register_default_commands(registry, replace: bool = False) -> int:
    """
    Register the built-in commands.

    Returns:
        Number of commands that were registered
    """
    registered = sum(1 for command in DEFAULT_COMMANDS if registry.register(command, replace=replace))
    logger.info(f"Registered {registered} default command(s)")
    return registered
