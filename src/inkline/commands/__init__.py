"""Commands: models, action kinds, trigger detection, registry, switching."""

from inkline.commands.actions import (
    CommandAction,
    CustomAction,
    FormatSelection,
    InsertPattern,
    InsertTemplate,
    SwitchNodeType,
    run_action,
    strip_trigger,
)
from inkline.commands.defaults import DEFAULT_COMMANDS, NODE_TYPE_COMMANDS, register_default_commands
from inkline.commands.models import Command, CommandContext, CommandResult, Selection
from inkline.commands.registry import CommandRegistry
from inkline.commands.switch import NodeTypeSwitchProcessor
from inkline.commands.trigger import TriggerDetector, TriggerResult, detect_trigger, is_valid_trigger

__all__ = [
    "Command",
    "CommandAction",
    "CommandContext",
    "CommandRegistry",
    "CommandResult",
    "CustomAction",
    "DEFAULT_COMMANDS",
    "FormatSelection",
    "InsertPattern",
    "InsertTemplate",
    "NODE_TYPE_COMMANDS",
    "NodeTypeSwitchProcessor",
    "Selection",
    "SwitchNodeType",
    "TriggerDetector",
    "TriggerResult",
    "detect_trigger",
    "is_valid_trigger",
    "register_default_commands",
    "run_action",
    "strip_trigger",
]
