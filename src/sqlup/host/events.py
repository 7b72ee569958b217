#!/usr/bin/env python3
"""Input events reported to edit listeners after each buffer change."""
from __future__ import annotations

from dataclasses import dataclass

SELF_INSERT = "self-insert"
NEWLINE = "newline"
DELETE_BACKWARD = "delete-backward"
DELETE_FORWARD = "delete-forward"
YANK = "yank"
MOVE = "move"


@dataclass(frozen=True)
class InputEvent:
    """The command and keys that produced the most recent edit"""

    command: str
    keys: str = ""

    @property
    def last_key_code(self) -> int | None:
        """Character code of the final key, or None for an empty event"""
        if not self.keys:
            return None
        return ord(self.keys[-1])

    @classmethod
    def typed(cls, char: str) -> "InputEvent":
        """Event for a single typed character; CR and LF become a newline command"""
        if char in ("\r", "\n"):
            return cls(NEWLINE, char)
        return cls(SELF_INSERT, char)
