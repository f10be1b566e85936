"""Tests for CommandRegistry."""

import asyncio

import pytest

from inkline.commands.actions import CustomAction, InsertPattern, SwitchNodeType
from inkline.commands.defaults import DEFAULT_COMMANDS, register_default_commands
from inkline.commands.models import Command, CommandContext, CommandResult
from inkline.commands.registry import CommandRegistry
from inkline.domain.event_bus import EventBus
from inkline.domain.events import (
    CommandExecuted,
    CommandRegistered,
    CommandUnregistered,
    RegistryCleared,
)
from inkline.domain.types import CommandCategory, TriggerType


def make_command(command_id="test", trigger="/test", **overrides):
    values = dict(
        id=command_id,
        trigger=trigger,
        trigger_type=TriggerType.SLASH,
        category=CommandCategory.PATTERN,
        label=command_id.title(),
        action=InsertPattern("@today"),
    )
    values.update(overrides)
    return Command(**values)


class TestRegistration:
    def test_register_and_get(self):
        registry = CommandRegistry()
        command = make_command()

        assert registry.register(command)
        assert registry.get("test") is command
        assert "test" in registry
        assert len(registry) == 1

    def test_duplicate_id_is_rejected(self):
        registry = CommandRegistry()
        registry.register(make_command(label="First"))

        assert not registry.register(make_command(label="Second"))
        assert registry.get("test").label == "First"

    def test_replace_overwrites(self):
        registry = CommandRegistry()
        registry.register(make_command(label="First"))

        assert registry.register(make_command(label="Second"), replace=True)
        assert registry.get("test").label == "Second"

    @pytest.mark.parametrize(
        "overrides",
        [
            {"id": ""},
            {"trigger": "  "},
            {"label": ""},
            {"action": None},
            {"action": 42},
            {"category": "bogus"},
            {"trigger_type": "telepathy"},
        ],
    )
    def test_invalid_definitions_are_rejected(self, overrides):
        registry = CommandRegistry()
        assert not registry.register(make_command(**overrides))
        assert len(registry) == 0

    @pytest.mark.parametrize("validate", [True, False])
    def test_objects_missing_fields_are_rejected(self, validate):
        class Partial:
            id = "partial"
            trigger = "/partial"
            label = "Partial"

        registry = CommandRegistry()

        assert not registry.register(Partial(), validate=validate)
        assert len(registry) == 0

    def test_bare_callable_and_strings_are_normalized(self):
        registry = CommandRegistry()
        command = make_command(
            action=lambda ctx: CommandResult(success=True),
            category="pattern",
            trigger_type="slash",
            keywords=["a", "b"],
        )

        assert registry.register(command)
        stored = registry.get("test")
        assert isinstance(stored.action, CustomAction)
        assert stored.category is CommandCategory.PATTERN
        assert stored.trigger_type is TriggerType.SLASH
        assert stored.keywords == frozenset({"a", "b"})

    def test_unregister(self):
        registry = CommandRegistry()
        registry.register(make_command())

        assert registry.unregister("test")
        assert not registry.unregister("test")
        assert registry.get("test") is None

    def test_instances_are_independent(self):
        first = CommandRegistry()
        second = CommandRegistry()
        first.register(make_command())

        assert "test" not in second


class TestSearch:
    @pytest.fixture
    def registry(self):
        registry = CommandRegistry()
        registry.register(
            make_command(
                "testnote",
                "$testnote",
                trigger_type=TriggerType.NODE_TYPE,
                category=CommandCategory.NODE_TYPE,
                action=SwitchNodeType("testNode"),
                priority=5,
                keywords=frozenset({"memo"}),
            )
        )
        registry.register(make_command("testdate", "/testdate", priority=5, description="Insert a due date"))
        registry.register(make_command("zeta", "/zeta", priority=1))
        return registry

    def test_search_by_category(self, registry):
        assert [c.id for c in registry.search(category=CommandCategory.NODE_TYPE)] == ["testnote"]
        assert [c.id for c in registry.search(category="pattern")] == ["zeta", "testdate"]

    def test_search_by_trigger_type(self, registry):
        assert [c.id for c in registry.search(trigger_type=TriggerType.NODE_TYPE)] == ["testnote"]

    def test_unknown_filter_value_returns_nothing(self, registry):
        assert registry.search(category="nope") == []
        assert registry.search(trigger_type="nope") == []

    def test_query_matches_label_description_and_keywords(self, registry):
        assert [c.id for c in registry.search(query="MEMO")] == ["testnote"]
        assert [c.id for c in registry.search(query="due date")] == ["testdate"]

    def test_trigger_pattern(self, registry):
        assert [c.id for c in registry.search(trigger_pattern="test")] == ["testdate", "testnote"]

    def test_ordering_and_limit(self, registry):
        assert [c.id for c in registry.all()] == ["zeta", "testdate", "testnote"]
        assert [c.id for c in registry.search(limit=1)] == ["zeta"]
        assert registry.search(limit=0) == []

    def test_get_by_trigger_is_case_insensitive(self, registry):
        assert registry.get_by_trigger("$TESTNOTE").id == "testnote"
        assert registry.get_by_trigger("$testnote", TriggerType.SLASH) is None
        assert registry.get_by_trigger("/missing") is None


class TestExecution:
    def test_unknown_command(self):
        result = CommandRegistry().execute("missing", CommandContext("text"))

        assert not result.success
        assert result.message == "Command not found: missing"

    def test_errors_are_contained(self):
        registry = CommandRegistry()

        def boom(ctx):
            raise ValueError("boom")

        registry.register(make_command(action=boom))
        result = registry.execute("test", CommandContext("text"))

        assert not result.success
        assert result.message == "Failed to execute command: boom"
        assert registry.stats()["failures"] == 1

    def test_non_result_return_is_a_failure(self):
        registry = CommandRegistry()
        registry.register(make_command(action=lambda ctx: "oops"))

        result = registry.execute("test", CommandContext("text"))
        assert not result.success
        assert "expected CommandResult" in result.message

    def test_custom_action_sees_context(self):
        registry = CommandRegistry()
        seen = []

        def action(ctx):
            seen.append((ctx.text, ctx.cursor_position))
            return CommandResult(success=True, message="done")

        registry.register(make_command(action=action))
        result = registry.execute("test", CommandContext("hello", 99))

        assert result.success
        assert seen == [("hello", 5)]

    def test_async_action_runs_without_loop(self):
        registry = CommandRegistry()

        async def action(ctx):
            await asyncio.sleep(0)
            return CommandResult(success=True, replacement_text=ctx.text.upper())

        registry.register(make_command(action=action))
        result = registry.execute("test", CommandContext("abc"))

        assert result.success
        assert result.replacement_text == "ABC"

    @pytest.mark.asyncio
    async def test_execute_async(self):
        registry = CommandRegistry()

        async def action(ctx):
            return CommandResult(success=True, message="async")

        registry.register(make_command(action=action))
        result = await registry.execute_async("test", CommandContext("abc"))

        assert result.success
        assert result.message == "async"

    @pytest.mark.asyncio
    async def test_sync_execute_inside_loop_reports_failure(self):
        registry = CommandRegistry()

        async def action(ctx):
            return CommandResult(success=True)

        registry.register(make_command(action=action))
        result = registry.execute("test", CommandContext("abc"))

        assert not result.success
        assert "execute_async" in result.message

    @pytest.mark.asyncio
    async def test_execute_async_contains_errors(self):
        registry = CommandRegistry()

        async def action(ctx):
            raise RuntimeError("late failure")

        registry.register(make_command(action=action))
        result = await registry.execute_async("test", CommandContext("abc"))

        assert not result.success
        assert result.message == "Failed to execute command: late failure"


class TestEvents:
    def test_lifecycle_events_are_published(self):
        bus = EventBus()
        events = []
        for event_type in (CommandRegistered, CommandUnregistered, CommandExecuted, RegistryCleared):
            bus.subscribe(event_type, events.append)

        registry = CommandRegistry(event_bus=bus)
        registry.register(make_command())
        registry.register(make_command(), replace=True)
        registry.execute("test", CommandContext("Due /test", 9))
        registry.unregister("test")
        registry.register(make_command("other", "/other"))
        registry.clear()

        assert [type(e).__name__ for e in events] == [
            "CommandRegistered",
            "CommandRegistered",
            "CommandExecuted",
            "CommandUnregistered",
            "CommandRegistered",
            "RegistryCleared",
        ]
        assert events[0].replaced is False
        assert events[1].replaced is True
        assert events[2].success is True
        assert events[-1].removed == 1

    def test_failing_handler_does_not_break_registry(self):
        bus = EventBus()

        def bad_handler(event):
            raise RuntimeError("handler failed")

        bus.subscribe(CommandRegistered, bad_handler)
        registry = CommandRegistry(event_bus=bus)

        assert registry.register(make_command())


class TestDefaults:
    def test_create_registers_defaults(self):
        registry = CommandRegistry.create()

        assert len(registry) == len(DEFAULT_COMMANDS)
        assert registry.get("node-type-task").node_type == "taskNode"
        assert registry.get_by_trigger("/date").id == "pattern-date"

    def test_register_defaults_is_idempotent(self):
        registry = CommandRegistry.create()
        assert register_default_commands(registry) == 0
        assert register_default_commands(registry, replace=True) == len(DEFAULT_COMMANDS)

    def test_default_triggers_are_unique(self):
        triggers = [c.trigger.lower() for c in DEFAULT_COMMANDS]
        assert len(triggers) == len(set(triggers))

    def test_stats(self):
        registry = CommandRegistry.create()
        registry.execute("missing", CommandContext(""))
        registry.execute("node-type-task", CommandContext("$task x"))
        stats = registry.stats()

        assert stats["total"] == len(DEFAULT_COMMANDS)
        assert stats["by_trigger_type"]["node-type"] == 10
        assert stats["by_category"]["pattern"] == 5
        assert stats["executions"] == 1
        assert stats["failures"] == 0

    def test_find_matching(self):
        registry = CommandRegistry.create()
        assert [c.id for c in registry.find_matching("Note /da")] == ["pattern-date"]
        assert registry.find_matching("no trigger") == []

    def test_clear_resets_counters(self):
        registry = CommandRegistry.create()
        registry.execute("node-type-task", CommandContext("$task"))
        registry.clear()

        assert len(registry) == 0
        assert registry.stats()["executions"] == 0
