"""Node type switching driven by ``$type`` triggers."""

from typing import Optional

from inkline.commands.models import CommandContext, CommandResult
from inkline.commands.registry import CommandRegistry
from inkline.domain.types import TriggerType
from inkline.logger import get_logger
from inkline.utils import clamp_cursor

logger = get_logger("commands.switch")


class NodeTypeSwitchProcessor:
    """Turns a ``$type`` trigger into a node type change plus cleaned text.

    Example:
        >>> processor = NodeTypeSwitchProcessor(CommandRegistry.create())
        >>> result = processor.process_switch("Buy milk $task", 14)
        >>> result.node_type, result.replacement_text, result.cursor_position
        ('taskNode', 'Buy milk', 8)
    """

    def __init__(self, registry: CommandRegistry):
        self._registry = registry

    def process_switch(self, text: str, cursor_position: Optional[int] = None) -> CommandResult:
        """
        Apply the node type trigger found in ``text``.

        Args:
            text: Editor buffer
            cursor_position: Cursor offset; defaults to the end of the text

        Returns:
            The switch command's result, or a failed result when there is no
            ``$`` trigger or it names an unknown node type
        """
        if cursor_position is None:
            cursor_position = len(text)
        cursor = clamp_cursor(text, cursor_position)

        detection = self._registry.detector.detect(text, cursor, prefixes="$")
        if not detection.has_trigger:
            return CommandResult.failure("No node type trigger found")

        command = self._registry.get_by_trigger(detection.full_trigger, TriggerType.NODE_TYPE)
        if command is None:
            logger.debug(f"Unknown node type trigger {detection.full_trigger!r}")
            return CommandResult.failure(f"Unknown node type: {detection.full_trigger}")

        logger.debug(f"Switching node type via {command.trigger} -> {command.node_type}")
        return self._registry.execute(command.id, CommandContext(text=text, cursor_position=cursor))

    def node_type_for_trigger(self, trigger: str) -> Optional[str]:
        """Node type bound to a ``$type`` trigger, if registered."""
        command = self._registry.get_by_trigger(trigger, TriggerType.NODE_TYPE)
        return command.node_type if command else None

    def should_auto_switch(self, text: str, current_node_type: Optional[str] = None) -> bool:
        """
        Whether ``text`` holds a completed trigger for a different node type.

        A trigger counts as completed once it is followed by whitespace or
        closes the text, so ``$ta`` never switches while ``$task`` does.
        """
        detection = self._registry.detector.detect(text, prefixes="$")
        if not detection.has_trigger:
            return False
        end = detection.trigger_end_offset
        if end < len(text) and not text[end].isspace():
            return False
        node_type = self.node_type_for_trigger(detection.full_trigger)
        return node_type is not None and node_type != current_node_type
