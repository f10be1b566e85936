"""Tests for command action handlers."""

import pytest

from inkline.commands.actions import (
    FormatSelection,
    InsertTemplate,
    locate_trigger,
    run_action,
    strip_trigger,
)
from inkline.commands.models import Command, CommandContext, Selection
from inkline.commands.registry import CommandRegistry
from inkline.domain.types import CommandCategory, TriggerType


@pytest.fixture
def registry():
    return CommandRegistry.create()


def test_context_clamps_cursor():
    assert CommandContext("abc", 10).cursor_position == 3
    assert CommandContext("abc", -4).cursor_position == 0


class TestTriggerHelpers:
    def test_strip_own_trigger(self):
        assert strip_trigger("$task Buy milk", "$task") == "Buy milk"
        assert strip_trigger("Buy milk $TASK", "$task") == "Buy milk"

    def test_strip_falls_back_to_any_trigger(self):
        assert strip_trigger("Hello /foo world", "$task") == "Hello world"
        assert strip_trigger("Hello /foo world") == "Hello world"

    def test_locate_prefers_last_occurrence_before_cursor(self):
        text = "/date a /date b"

        assert locate_trigger("/date", CommandContext(text, 14)) == (8, 13)
        assert locate_trigger("/date", CommandContext(text, 0)) == (0, 5)

    def test_locate_is_whole_word(self):
        assert locate_trigger("/date", CommandContext("/dates", 6)) is None

    def test_shortcut_triggers_are_never_located(self):
        assert locate_trigger("bold", CommandContext("bold move", 4)) is None


class TestInsertPattern:
    def test_replaces_trigger(self, registry):
        result = registry.execute("pattern-date", CommandContext("Due /date", 9))

        assert result.success
        assert result.replacement_text == "Due @today"
        assert result.cursor_position == 10
        assert result.close_panel

    def test_inserts_at_cursor_without_trigger(self, registry):
        result = registry.execute("pattern-priority", CommandContext("Fix it", 3))

        assert result.replacement_text == "Fix#medium it"
        assert result.cursor_position == 10


class TestFormatSelection:
    def test_bold_wraps_selection(self, registry):
        context = CommandContext("make this bold", 14, selection=Selection(10, 14, "bold"))
        result = registry.execute("format-bold", context)

        assert result.replacement_text == "make this **bold**"
        assert result.cursor_position == 18

    def test_italic_placeholder_without_selection(self, registry):
        result = registry.execute("format-italic", CommandContext("Hello ", 6))

        assert result.replacement_text == "Hello *italic text*"
        assert result.cursor_position == 7

    def test_slash_trigger_is_removed_when_wrapping(self):
        registry = CommandRegistry()
        registry.register(
            Command(
                id="bold-slash",
                trigger="/bold",
                trigger_type=TriggerType.SLASH,
                category=CommandCategory.FORMAT,
                label="Bold",
                action=FormatSelection("bold"),
            )
        )
        context = CommandContext("/bold make this", 15, selection=Selection(6, 10, "make"))
        result = registry.execute("bold-slash", context)

        assert result.replacement_text == "**make** this"
        assert result.cursor_position == 8

    def test_alignment_appends_marker(self, registry):
        result = registry.execute("format-align-center", CommandContext("Title", 5))

        assert result.replacement_text == "Title align:center"
        assert result.cursor_position == len("Title align:center")

    def test_unknown_style_fails(self):
        registry = CommandRegistry()
        registry.register(
            Command(
                id="underline",
                trigger="underline",
                trigger_type=TriggerType.SHORTCUT,
                category=CommandCategory.FORMAT,
                label="Underline",
                action=FormatSelection("underline"),
            )
        )
        result = registry.execute("underline", CommandContext("x"))

        assert not result.success
        assert result.message == "Failed to execute command: Unknown format style: underline"


class TestInsertTemplate:
    def test_checklist(self, registry):
        result = registry.execute("template-checklist", CommandContext("/checklist", 10))

        assert result.replacement_text == "- [ ] \n- [ ] \n- [ ] "
        assert result.cursor_position == 6

    def test_meeting_cursor_after_attendees(self, registry):
        result = registry.execute("template-meeting", CommandContext("/meeting", 8))
        text = result.replacement_text

        assert text.startswith("Meeting Notes ")
        assert "[meeting]" in text
        assert result.cursor_position == text.index("Attendees: +") + len("Attendees: +")

    def test_marker_absent_puts_cursor_at_end(self):
        registry = CommandRegistry()
        registry.register(
            Command(
                id="sig",
                trigger="/sig",
                trigger_type=TriggerType.SLASH,
                category=CommandCategory.TEMPLATE,
                label="Signature",
                action=InsertTemplate("-- Ada", cursor_marker="missing"),
            )
        )
        result = registry.execute("sig", CommandContext("Hi /sig", 7))

        assert result.replacement_text == "Hi -- Ada"
        assert result.cursor_position == 9


def test_run_action_rejects_unknown_kind():
    command = Command(
        id="weird",
        trigger="/weird",
        trigger_type=TriggerType.SLASH,
        category=CommandCategory.CONTENT,
        label="Weird",
        action=object(),
    )
    with pytest.raises(TypeError):
        run_action(command, CommandContext(""))
