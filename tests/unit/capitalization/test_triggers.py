#!/usr/bin/env python3
"""Tests for deciding which edits start a capitalization pass."""

import pytest

from sqlup.capitalization.triggers import TriggerDetector
from sqlup.host.events import DELETE_BACKWARD, MOVE, NEWLINE, SELF_INSERT, YANK, InputEvent


@pytest.fixture
def detector():
    return TriggerDetector()


class TestTriggerCharacters:
    """Single self-inserted delimiters trigger a pass."""

    @pytest.mark.parametrize("char", [" ", ";", ",", "(", "'"])
    def test_delimiters_trigger(self, detector, char):
        assert detector.should_trigger(InputEvent(SELF_INSERT, char))

    @pytest.mark.parametrize("char", ["a", "Z", "_", "1", ")", ".", "=", '"'])
    def test_other_characters_do_not_trigger(self, detector, char):
        assert not detector.should_trigger(InputEvent(SELF_INSERT, char))

    def test_delimiter_from_another_command_does_not_trigger(self, detector):
        """A pasted comma is not a typed comma."""
        assert not detector.should_trigger(InputEvent(YANK, ","))

    def test_multi_key_insert_does_not_trigger(self, detector):
        assert not detector.should_trigger(InputEvent(SELF_INSERT, "; "))

    def test_custom_trigger_set(self):
        detector = TriggerDetector(frozenset(("|",)))
        assert detector.should_trigger(InputEvent(SELF_INSERT, "|"))
        assert not detector.should_trigger(InputEvent(SELF_INSERT, " "))


class TestEnterKey:
    """Enter triggers whatever command produced it."""

    @pytest.mark.parametrize("key", ["\r", "\n"])
    def test_enter_triggers(self, detector, key):
        assert detector.should_trigger(InputEvent.typed(key))
        assert detector.should_trigger(InputEvent(NEWLINE, key))

    def test_typed_enter_becomes_newline_command(self):
        assert InputEvent.typed("\n").command == NEWLINE
        assert InputEvent.typed("\r").last_key_code == 13

    def test_yanked_lines_do_not_trigger(self, detector):
        assert not detector.should_trigger(InputEvent(YANK, "select\n"))


class TestNonEvents:
    def test_missing_event(self, detector):
        assert not detector.should_trigger(None)

    @pytest.mark.parametrize("command", [DELETE_BACKWARD, MOVE])
    def test_keyless_commands(self, detector, command):
        assert not detector.should_trigger(InputEvent(command, ""))
        assert InputEvent(command, "").last_key_code is None
