"""Tests for trigger detection."""

import pytest

from inkline.commands.registry import CommandRegistry
from inkline.commands.trigger import TriggerDetector, detect_trigger, is_valid_trigger
from inkline.domain.types import TriggerType


@pytest.fixture
def registry():
    return CommandRegistry.create()


class TestDetectTrigger:
    """Tests for detect_trigger without a registry."""

    def test_node_type_trigger(self):
        result = detect_trigger("Buy milk $task")

        assert result.has_trigger
        assert result.trigger_type is TriggerType.NODE_TYPE
        assert result.trigger_char == "$"
        assert result.command_word == "task"
        assert result.full_trigger == "$task"
        assert result.trigger_start_offset == 9
        assert result.trigger_end_offset == 14
        assert result.matches == []

    def test_slash_trigger(self):
        result = detect_trigger("Due /date")

        assert result.trigger_type is TriggerType.SLASH
        assert result.command_word == "date"

    @pytest.mark.parametrize("text", ["", "plain words", "and/or", "http://example.com/path", "cost $", "a / b"])
    def test_no_trigger(self, text):
        result = detect_trigger(text)

        assert not result.has_trigger
        assert result.trigger_start_offset == -1
        assert result.trigger_end_offset == -1

    @pytest.mark.parametrize(
        "text,offset",
        [("Buy milk$task", 8), ("note:$task", 5), ("a/$task", 2)],
    )
    def test_dollar_trigger_glued_to_preceding_text(self, text, offset):
        result = detect_trigger(text)

        assert result.full_trigger == "$task"
        assert result.trigger_start_offset == offset

    def test_dollar_beats_slash_without_cursor(self):
        result = detect_trigger("/date then $task")
        assert result.full_trigger == "$task"

    def test_nearest_trigger_before_cursor_wins(self):
        text = "$note text /date"

        assert detect_trigger(text, cursor_position=len(text)).full_trigger == "/date"
        assert detect_trigger(text, cursor_position=5).full_trigger == "$note"

    def test_triggers_after_cursor_are_ignored(self):
        assert not detect_trigger("$task", cursor_position=0).has_trigger
        assert not detect_trigger("hello $task", cursor_position=3).has_trigger

    def test_cursor_is_clamped(self):
        assert detect_trigger("x $task", cursor_position=999).full_trigger == "$task"


class TestDetectorWithRegistry:
    """Matches come from the registry, filtered by trigger prefix."""

    def test_partial_word_matches(self, registry):
        result = TriggerDetector(registry).detect("Buy milk $ta")
        assert [c.trigger for c in result.matches] == ["$task"]

    def test_matches_are_ordered_by_priority(self, registry):
        result = detect_trigger("$t", registry)
        assert [c.trigger for c in result.matches] == ["$task", "$text"]

    def test_slash_matches_only_slash_commands(self, registry):
        result = detect_trigger("x /d", registry)
        assert [c.id for c in result.matches] == ["pattern-date"]

    def test_prefix_filter(self, registry):
        result = registry.detector.detect("/date $task", prefixes="/")
        assert result.full_trigger == "/date"


@pytest.mark.parametrize(
    "trigger,expected",
    [
        ("$task", True),
        ("/align-left", True),
        ("task", False),
        ("$1x", False),
        ("$", False),
        ("", False),
    ],
)
def test_is_valid_trigger(trigger, expected):
    assert is_valid_trigger(trigger) is expected
