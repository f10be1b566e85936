"""
Command completion strategy for ``$`` and ``/`` triggers.
"""

from __future__ import annotations

import re
from typing import Optional

from inkline.commands.models import Command
from inkline.commands.registry import CommandRegistry
from inkline.commands.trigger import TRIGGER_TYPES
from inkline.domain.types import CompletionItem, CompletionResult
from inkline.logger import get_logger

from .strategy import CompletionRequest

logger = get_logger("completion.command")

# Trigger being typed right at the cursor; the word may still be empty
_TYPING_TRIGGER = re.compile(r"(\$|(?<![\w$/:])/)(\w*)$")


class CommandCompletionStrategy:
    """Provides command suggestions while the user types ``$word`` or ``/word``."""

    def __init__(self, registry: CommandRegistry, limit: int = 15) -> None:
        self._registry = registry
        self._limit = limit

    def _typing(self, request: CompletionRequest) -> Optional[re.Match]:
        line_start = request.text_before_cursor.rfind("\n") + 1
        return _TYPING_TRIGGER.search(request.text_before_cursor, line_start)

    def can_handle(self, request: CompletionRequest) -> bool:
        return self._typing(request) is not None

    def get_candidates(self, request: CompletionRequest) -> Optional[CompletionResult]:
        m = self._typing(request)
        if m is None:
            return None

        trigger_char, word = m.group(1), m.group(2)
        typed = m.group(0).lower()
        commands = [
            command
            for command in self._registry.search(trigger_type=TRIGGER_TYPES[trigger_char])
            if command.trigger.lower().startswith(typed)
        ]

        logger.debug(f"CommandCompletionStrategy triggered (prefix={typed!r}, matches={len(commands)})")
        if not commands:
            return None

        return CompletionResult(
            start=m.start(),
            end=request.cursor_position,
            pattern_type=None,
            query=word,
            items=tuple(self._to_item(command) for command in commands[: self._limit]),
            valid_for=r"^[$/]\w*$",
        )

    @staticmethod
    def _to_item(command: Command) -> CompletionItem:
        return CompletionItem(
            label=command.label,
            value=command.trigger,
            description=command.description,
            category=command.category.value,
        )
