"""Command registry.

Stores command definitions keyed by id and answers lookup, search and
execution requests from the host editor.

Key features:
- Id uniqueness unless ``replace=True`` is given
- Boolean results for validation failures (never raises)
- Execution errors contained and reported as failed CommandResults
- Change and execution events published on an optional EventBus
"""

import asyncio
import dataclasses
import inspect
import threading
from collections import Counter
from typing import Any, Awaitable, Optional

from inkline.commands.actions import ACTION_KINDS, CustomAction, run_action
from inkline.commands.models import Command, CommandContext, CommandResult
from inkline.commands.trigger import TriggerDetector
from inkline.domain.event_bus import EventBus
from inkline.domain.events import (
    CommandExecuted,
    CommandRegistered,
    CommandUnregistered,
    Event,
    RegistryCleared,
)
from inkline.domain.types import CommandCategory, TriggerType
from inkline.logger import get_logger

logger = get_logger("commands.registry")


async def _await_result(awaitable: Awaitable[CommandResult]) -> CommandResult:
    return await awaitable


class CommandRegistry:
    """Central registry for editor commands.

    Instances are independent; hosts create one per editing session and pass
    it to the components that need it.

    Example:
        >>> registry = CommandRegistry.create()
        >>> registry.get("node-type-task").trigger
        '$task'
        >>> result = registry.execute("node-type-task", CommandContext("Buy milk $task", 14))
        >>> result.node_type, result.replacement_text
        ('taskNode', 'Buy milk')
    """

    def __init__(self, event_bus: Optional[EventBus] = None, register_defaults: bool = False):
        """Initialize the registry.

        Args:
            event_bus: Bus receiving registry events; None disables publishing
            register_defaults: Populate the built-in command set
        """
        self._commands: dict[str, Command] = {}
        self._lock = threading.RLock()
        self._event_bus = event_bus
        self._detector = TriggerDetector(self)
        self._executions = 0
        self._failures = 0

        if register_defaults:
            from inkline.commands.defaults import register_default_commands

            register_default_commands(self)

    @classmethod
    def create(cls, event_bus: Optional[EventBus] = None) -> "CommandRegistry":
        """Create a registry pre-populated with the default command set."""
        return cls(event_bus=event_bus, register_defaults=True)

    @property
    def detector(self) -> TriggerDetector:
        return self._detector

    def _publish(self, event: Event) -> None:
        if self._event_bus is not None:
            self._event_bus.publish(event)

    @staticmethod
    def _validation_error(command: Command) -> Optional[str]:
        for name in ("id", "trigger", "label"):
            value = getattr(command, name, None)
            if not isinstance(value, str) or not value.strip():
                return f"missing {name}"
        action = getattr(command, "action", None)
        if action is None:
            return "missing action"
        if not isinstance(action, ACTION_KINDS) and not callable(action):
            return f"unsupported action {type(action).__name__}"
        category = getattr(command, "category", None)
        try:
            CommandCategory(category)
        except ValueError:
            return f"invalid category {category!r}"
        trigger_type = getattr(command, "trigger_type", None)
        try:
            TriggerType(trigger_type)
        except ValueError:
            return f"invalid trigger type {trigger_type!r}"
        return None

    @staticmethod
    def _normalize(command: Command) -> Command:
        if not isinstance(command, Command):
            raise TypeError(f"expected Command, got {type(command).__name__}")
        changes: dict[str, Any] = {}
        if not isinstance(command.action, ACTION_KINDS):
            changes["action"] = CustomAction(command.action)
        if not isinstance(command.category, CommandCategory):
            changes["category"] = CommandCategory(command.category)
        if not isinstance(command.trigger_type, TriggerType):
            changes["trigger_type"] = TriggerType(command.trigger_type)
        if not isinstance(command.keywords, frozenset):
            changes["keywords"] = frozenset(command.keywords)
        return dataclasses.replace(command, **changes) if changes else command

    def register(self, command: Command, replace: bool = False, validate: bool = True) -> bool:
        """
        Register a command.

        Args:
            command: Command definition
            replace: Overwrite an existing command with the same id
            validate: Check required fields before registering

        Returns:
            True if registered, False on id collision or invalid definition
        """
        if validate:
            error = self._validation_error(command)
            if error is not None:
                logger.warning(f"Rejected command {getattr(command, 'id', None)!r}: {error}")
                return False
        try:
            command = self._normalize(command)
        except (TypeError, ValueError) as e:
            logger.warning(f"Rejected command {getattr(command, 'id', None)!r}: {e}")
            return False

        with self._lock:
            exists = command.id in self._commands
            if exists and not replace:
                logger.warning(f"Command '{command.id}' already registered")
                return False
            self._commands[command.id] = command
            logger.debug(f"Registered command '{command.id}' ({command.trigger})")
            self._publish(CommandRegistered(command_id=command.id, trigger=command.trigger, replaced=exists))
        return True

    def unregister(self, command_id: str) -> bool:
        with self._lock:
            command = self._commands.pop(command_id, None)
            if command is None:
                return False
            logger.debug(f"Unregistered command '{command_id}'")
            self._publish(CommandUnregistered(command_id=command_id, trigger=command.trigger))
        return True

    def get(self, command_id: str) -> Optional[Command]:
        with self._lock:
            return self._commands.get(command_id)

    def all(self) -> list[Command]:
        """All commands in search order (priority, then label)."""
        return self.search()

    def get_by_trigger(self, trigger: str, trigger_type: Optional[TriggerType | str] = None) -> Optional[Command]:
        """Exact, case-insensitive trigger lookup; the best ranked command wins."""
        wanted = trigger.lower()
        for command in self.search(trigger_type=trigger_type):
            if command.trigger.lower() == wanted:
                return command
        return None

    def clear(self) -> None:
        with self._lock:
            removed = len(self._commands)
            self._commands.clear()
            self._executions = 0
            self._failures = 0
            logger.debug(f"Cleared {removed} command(s)")
            self._publish(RegistryCleared(removed=removed))

    def stats(self) -> dict[str, Any]:
        """Counts by category and trigger type plus execution totals."""
        with self._lock:
            commands = list(self._commands.values())
            return {
                "total": len(commands),
                "by_category": dict(Counter(c.category.value for c in commands)),
                "by_trigger_type": dict(Counter(c.trigger_type.value for c in commands)),
                "executions": self._executions,
                "failures": self._failures,
            }

    def search(
        self,
        query: Optional[str] = None,
        category: Optional[CommandCategory | str] = None,
        trigger_type: Optional[TriggerType | str] = None,
        trigger_pattern: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> list[Command]:
        """
        Search commands; all given filters must hold.

        Args:
            query: Case-insensitive substring of trigger, label, description or a keyword
            category: Only this category
            trigger_type: Only this trigger type
            trigger_pattern: Case-insensitive substring of the trigger
            limit: Maximum number of results, applied after sorting

        Returns:
            Commands sorted by priority ascending, then label
        """
        with self._lock:
            commands = list(self._commands.values())

        try:
            wanted_category = CommandCategory(category) if category is not None else None
            wanted_type = TriggerType(trigger_type) if trigger_type is not None else None
        except ValueError:
            logger.debug(f"Unknown search filter: category={category!r} trigger_type={trigger_type!r}")
            return []

        if wanted_category is not None:
            commands = [c for c in commands if c.category == wanted_category]
        if wanted_type is not None:
            commands = [c for c in commands if c.trigger_type == wanted_type]
        if trigger_pattern:
            needle = trigger_pattern.lower()
            commands = [c for c in commands if needle in c.trigger.lower()]
        if query:
            needle = query.lower()
            commands = [
                c for c in commands if any(needle in field.lower() for field in c.searchable_text())
            ]

        commands.sort(key=lambda c: (c.priority, c.label.lower(), c.label))
        if limit is not None:
            commands = commands[: max(limit, 0)]
        return commands

    def find_matching(self, text: str, cursor_position: Optional[int] = None) -> list[Command]:
        """Commands matching whichever trigger governs ``text``."""
        return self._detector.detect(text, cursor_position).matches

    @staticmethod
    def _finish(result: Any) -> CommandResult:
        if not isinstance(result, CommandResult):
            raise TypeError(f"action returned {type(result).__name__}, expected CommandResult")
        return result

    def _record(self, command_id: str, result: CommandResult) -> CommandResult:
        with self._lock:
            self._executions += 1
            if not result.success:
                self._failures += 1
            self._publish(CommandExecuted(command_id=command_id, success=result.success, message=result.message))
        return result

    def _failed(self, command_id: str, error: BaseException) -> CommandResult:
        logger.opt(exception=error).error(f"Command '{command_id}' failed: {error}")
        return CommandResult.failure(f"Failed to execute command: {error}")

    def execute(self, command_id: str, context: CommandContext) -> CommandResult:
        """
        Execute a command and contain any error it raises.

        Async actions are run to completion when no event loop is running in
        this thread; inside a running loop use :meth:`execute_async`.

        Returns:
            The action's result, or a failed result for unknown ids and errors
        """
        command = self.get(command_id)
        if command is None:
            logger.warning(f"Command not found: {command_id}")
            return CommandResult.failure(f"Command not found: {command_id}")

        try:
            outcome = run_action(command, context)
            if inspect.isawaitable(outcome):
                try:
                    asyncio.get_running_loop()
                except RuntimeError:
                    outcome = asyncio.run(_await_result(outcome))
                else:
                    if inspect.iscoroutine(outcome):
                        outcome.close()
                    raise RuntimeError("async action invoked from a running event loop; use execute_async")
            result = self._finish(outcome)
        except Exception as e:
            result = self._failed(command_id, e)
        return self._record(command_id, result)

    async def execute_async(self, command_id: str, context: CommandContext) -> CommandResult:
        """Async variant of :meth:`execute` that awaits async actions."""
        command = self.get(command_id)
        if command is None:
            logger.warning(f"Command not found: {command_id}")
            return CommandResult.failure(f"Command not found: {command_id}")

        try:
            outcome = run_action(command, context)
            if inspect.isawaitable(outcome):
                outcome = await outcome
            result = self._finish(outcome)
        except Exception as e:
            result = self._failed(command_id, e)
        return self._record(command_id, result)

    def __len__(self) -> int:
        with self._lock:
            return len(self._commands)

    def __contains__(self, command_id: str) -> bool:
        with self._lock:
            return command_id in self._commands
