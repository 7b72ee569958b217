#!/usr/bin/env python3
"""Decide whether the last input event warrants a capitalization pass."""
from __future__ import annotations

from ..host.events import SELF_INSERT, InputEvent
from .constants import ENTER_KEY_CODES, TRIGGER_CHARACTERS


class TriggerDetector:
    """Classifies the input event that produced the latest edit."""

    def __init__(self, trigger_characters: frozenset[str] = TRIGGER_CHARACTERS):
        self.trigger_characters = trigger_characters

    @staticmethod
    def is_enter(event: InputEvent) -> bool:
        return len(event.keys) == 1 and event.last_key_code in ENTER_KEY_CODES

    def is_trigger_insert(self, event: InputEvent) -> bool:
        return event.command == SELF_INSERT and len(event.keys) == 1 and event.keys in self.trigger_characters

    def should_trigger(self, event: InputEvent | None) -> bool:
        if event is None:
            return False
        return self.is_enter(event) or self.is_trigger_insert(event)
