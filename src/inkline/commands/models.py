"""Command data model."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Optional

from inkline.domain.types import CommandCategory, TriggerType

if TYPE_CHECKING:
    from inkline.commands.actions import CommandAction

DEFAULT_PRIORITY = 100


@dataclass(frozen=True, slots=True)
class Selection:
    """A selected range in the editor buffer."""

    start: int
    end: int
    text: str


@dataclass(slots=True)
class CommandContext:
    """Everything an action may look at when it runs.

    ``cursor_position`` is clamped into ``0 <= pos <= len(text)``.
    """

    text: str
    cursor_position: int = 0
    selection: Optional[Selection] = None
    current_node_type: Optional[str] = None
    metadata: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        self.cursor_position = max(0, min(self.cursor_position, len(self.text)))


@dataclass(slots=True)
class CommandResult:
    """Outcome of running a command.

    When ``success`` is False callers must ignore ``replacement_text`` and
    ``node_type``.
    """

    success: bool
    replacement_text: Optional[str] = None
    cursor_position: Optional[int] = None
    node_type: Optional[str] = None
    node_data: Optional[dict[str, Any]] = None
    message: Optional[str] = None
    close_panel: bool = False

    @classmethod
    def failure(cls, message: str) -> CommandResult:
        return cls(success=False, message=message)


@dataclass(frozen=True, slots=True)
class Command:
    """An immutable command definition. Identity is ``id``."""

    id: str
    trigger: str
    trigger_type: TriggerType
    category: CommandCategory
    label: str
    action: CommandAction
    description: str = ""
    keywords: frozenset[str] = frozenset()
    priority: int = DEFAULT_PRIORITY
    node_type: Optional[str] = None
    examples: tuple[str, ...] = ()
    shortcuts: tuple[str, ...] = ()

    def searchable_text(self) -> tuple[str, ...]:
        return (self.trigger, self.label, self.description, *self.keywords)
