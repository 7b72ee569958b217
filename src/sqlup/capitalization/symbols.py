#!/usr/bin/env python3
"""Locate the word-like symbol adjacent to a buffer position."""
from __future__ import annotations

import re
from dataclasses import dataclass

# Unicode word characters; underscore is a word character in Python's \w
SYMBOL_CHAR_PATTERN = re.compile(r"\w")

BACKWARD = -1
FORWARD = 1


@dataclass(frozen=True)
class Token:
    """A maximal run of symbol characters and its ``[start, end)`` offsets"""

    text: str
    start: int
    end: int


def is_symbol_char(char: str) -> bool:
    return bool(SYMBOL_CHAR_PATTERN.match(char))


def _symbol_start(text: str, position: int) -> int:
    while position > 0 and is_symbol_char(text[position - 1]):
        position -= 1
    return position


def _symbol_end(text: str, position: int) -> int:
    while position < len(text) and is_symbol_char(text[position]):
        position += 1
    return position


def locate(text: str, position: int, direction: int) -> Token | None:
    """
    Find the symbol one unit away from ``position`` in ``direction``.

    Backward (-1) returns the symbol ending at or before ``position``; forward
    (+1) returns the first symbol ending after it. A symbol that ``position``
    falls inside is always returned whole.

    Args:
        text: Buffer content
        position: Character offset, clamped to the text
        direction: BACKWARD or FORWARD

    Returns:
        The Token, or None when no symbol exists in that direction

    """
    position = max(0, min(position, len(text)))

    if direction < 0:
        end = position
        while end > 0 and not is_symbol_char(text[end - 1]):
            end -= 1
        if end == 0:
            return None
        start = _symbol_start(text, end)
        end = _symbol_end(text, end)
    else:
        start = position
        while start < len(text) and not is_symbol_char(text[start]):
            start += 1
        if start == len(text):
            return None
        end = _symbol_end(text, start)
        start = _symbol_start(text, start)

    return Token(text[start:end], start, end)
