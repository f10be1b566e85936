"""Trigger detection for ``$word`` (node type) and ``/word`` (slash) prefixes.

The scan works like a tiny lexer over the buffer: every ``$`` followed by at
least one word character is a trigger candidate, even when glued to a word
(``milk$task``). A ``/`` only counts when it does not follow a word, ``:`` or
another ``/``, so ``and/or`` and URLs are ignored.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Optional

from inkline.domain.types import TriggerType
from inkline.logger import get_logger
from inkline.utils import clamp_cursor

if TYPE_CHECKING:
    from inkline.commands.models import Command
    from inkline.commands.registry import CommandRegistry

logger = get_logger("commands.trigger")

TRIGGER_PATTERN = re.compile(r"(\$|(?<![\w$/:])/)(\w+)")
VALID_TRIGGER = re.compile(r"^[$/][A-Za-z][\w-]*$")

TRIGGER_TYPES: dict[str, TriggerType] = {
    "$": TriggerType.NODE_TYPE,
    "/": TriggerType.SLASH,
}


@dataclass(slots=True)
class TriggerResult:
    """What trigger (if any) was found in a text."""

    has_trigger: bool
    trigger_type: Optional[TriggerType] = None
    trigger_char: Optional[str] = None
    command_word: Optional[str] = None
    trigger_start_offset: int = -1
    full_trigger: Optional[str] = None
    matches: list["Command"] = field(default_factory=list)

    @property
    def trigger_end_offset(self) -> int:
        if not self.has_trigger or self.full_trigger is None:
            return -1
        return self.trigger_start_offset + len(self.full_trigger)

    @classmethod
    def none(cls) -> TriggerResult:
        return cls(has_trigger=False)


def is_valid_trigger(trigger: str) -> bool:
    """Whether ``trigger`` is a well-formed ``$name`` or ``/name`` trigger."""
    return bool(VALID_TRIGGER.match(trigger or ""))


def _pick_nearest(candidates: list[re.Match], cursor: int) -> re.Match:
    def distance(m: re.Match) -> tuple[int, int]:
        # Zero when the cursor sits inside or right after the trigger
        gap = cursor - m.end() if m.end() < cursor else 0
        return gap, 0 if m.group(1) == "$" else 1

    return min(candidates, key=distance)


class TriggerDetector:
    """
    Finds trigger prefixes and the commands they could refer to.

    Precedence: without a cursor, the first ``$`` trigger wins over the first
    ``/`` trigger. With a cursor, only triggers starting before the cursor are
    considered and the one nearest the cursor wins (``$`` on a tie).

    Example:
        >>> detector = TriggerDetector(CommandRegistry.create())
        >>> result = detector.detect("Buy milk $ta")
        >>> result.command_word, [c.trigger for c in result.matches]
        ('ta', ['$task'])
    """

    def __init__(self, registry: Optional[CommandRegistry] = None):
        self._registry = registry

    def detect(
        self,
        text: str,
        cursor_position: Optional[int] = None,
        prefixes: str = "$/",
    ) -> TriggerResult:
        """
        Detect the governing trigger in ``text``.

        Args:
            text: Buffer to scan
            cursor_position: Optional cursor offset
            prefixes: Which trigger characters to consider

        Returns:
            TriggerResult; ``has_trigger`` is False when nothing was found
        """
        if not text:
            return TriggerResult.none()

        candidates = [m for m in TRIGGER_PATTERN.finditer(text) if m.group(1) in prefixes]
        if cursor_position is not None:
            cursor = clamp_cursor(text, cursor_position)
            candidates = [m for m in candidates if m.start() < cursor]
            if not candidates:
                return TriggerResult.none()
            chosen = _pick_nearest(candidates, cursor)
        else:
            if not candidates:
                return TriggerResult.none()
            dollar = next((m for m in candidates if m.group(1) == "$"), None)
            chosen = dollar or candidates[0]

        trigger_char, word = chosen.group(1), chosen.group(2)
        trigger_type = TRIGGER_TYPES[trigger_char]
        full_trigger = chosen.group(0)
        logger.debug(f"Detected trigger {full_trigger!r} at offset {chosen.start()}")

        return TriggerResult(
            has_trigger=True,
            trigger_type=trigger_type,
            trigger_char=trigger_char,
            command_word=word,
            trigger_start_offset=chosen.start(),
            full_trigger=full_trigger,
            matches=self._matching_commands(full_trigger, trigger_type),
        )

    def _matching_commands(self, full_trigger: str, trigger_type: TriggerType) -> list[Command]:
        if self._registry is None:
            return []
        prefix = full_trigger.lower()
        return [
            command
            for command in self._registry.search(trigger_type=trigger_type)
            if command.trigger.lower().startswith(prefix)
        ]


def detect_trigger(
    text: str,
    registry: Optional[CommandRegistry] = None,
    cursor_position: Optional[int] = None,
) -> TriggerResult:
    """Convenience wrapper around :meth:`TriggerDetector.detect`."""
    return TriggerDetector(registry).detect(text, cursor_position)
