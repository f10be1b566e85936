"""Event types published by the command registry.

Hosts subscribe to these through an :class:`~inkline.domain.event_bus.EventBus`
to refresh command palettes or audit executions.
"""

import time
from dataclasses import dataclass, field


@dataclass
class Event:
    """Base class for all events.

    The timestamp field is automatically set when the event is created.
    """

    timestamp: float = field(default_factory=time.time, init=False)
    """Timestamp when the event was created (Unix timestamp)."""


@dataclass
class CommandRegistered(Event):
    """Published after a command is added to (or replaced in) a registry."""

    command_id: str
    """Id of the registered command."""
    trigger: str
    """Trigger string such as ``$task`` or ``/date``."""
    replaced: bool = False
    """True when an existing command with the same id was overwritten."""


@dataclass
class CommandUnregistered(Event):
    """Published after a command is removed from a registry."""

    command_id: str
    trigger: str


@dataclass
class CommandExecuted(Event):
    """Published after every execution attempt, successful or not.

    Attributes:
        command_id: Id that was requested
        success: Whether the action produced a successful result
        message: Result message, if any
    """

    command_id: str
    success: bool
    message: str | None = None


@dataclass
class RegistryCleared(Event):
    """Published when a registry drops all of its commands."""

    removed: int = 0
    """Number of commands that were removed."""
