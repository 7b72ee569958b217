#!/usr/bin/env python3
"""Mutable text buffer with a cursor and post-edit notification."""
from __future__ import annotations

from contextlib import contextmanager
from typing import Callable, Iterator, Sequence

from .events import DELETE_BACKWARD, YANK, InputEvent

EditListener = Callable[[InputEvent], None]


class TextBuffer:
    """
    A named text buffer with a cursor (``point``) measured in characters.

    Edits made through ``insert``, ``type`` and ``delete_backward`` notify every
    registered edit listener with the InputEvent that produced them.
    ``replace_uppercase`` is a plain span rewrite and notifies nobody.
    """

    def __init__(
        self,
        text: str = "",
        name: str = "*scratch*",
        mode: str = "sql",
        mode_keywords: Sequence[str] | None = None,
    ) -> None:
        self.name = name
        self.mode = mode
        # Keyword metadata published by the major mode, None when it has none
        self.mode_keywords = list(mode_keywords) if mode_keywords is not None else None
        self._text = text
        self._point = len(text)
        self._listeners: list[EditListener] = []

    def __len__(self) -> int:
        return len(self._text)

    def __repr__(self) -> str:
        return f"TextBuffer(name={self.name!r}, mode={self.mode!r}, point={self._point})"

    @property
    def text(self) -> str:
        return self._text

    @property
    def point(self) -> int:
        return self._point

    @point.setter
    def point(self, position: int) -> None:
        self._point = self._clamp(position)

    def goto(self, position: int) -> None:
        self.point = position

    def _clamp(self, position: int) -> int:
        return max(0, min(position, len(self._text)))

    def _check_span(self, start: int, end: int) -> None:
        if not 0 <= start <= end <= len(self._text):
            raise ValueError(f"Span [{start}, {end}) outside buffer of length {len(self._text)}")

    def read(self, start: int = 0, end: int | None = None) -> str:
        """Return the text in ``[start, end)``; ``end`` defaults to the buffer end"""
        if end is None:
            end = len(self._text)
        self._check_span(start, end)
        return self._text[start:end]

    def replace_uppercase(self, start: int, end: int) -> None:
        """Uppercase ``[start, end)`` in place without moving the cursor"""
        self._check_span(start, end)
        span = self._text[start:end]
        upper = span.upper()
        # str.upper can change length (e.g. German sharp s); keep offsets stable
        if len(upper) != len(span):
            upper = "".join(ch.upper() if len(ch.upper()) == 1 else ch for ch in span)
        self._text = self._text[:start] + upper + self._text[end:]

    @contextmanager
    def save_excursion(self) -> Iterator[int]:
        """Restore the cursor on exit, whatever happens inside the block"""
        saved = self._point
        try:
            yield saved
        finally:
            self._point = self._clamp(saved)

    def add_edit_listener(self, listener: EditListener) -> None:
        if listener not in self._listeners:
            self._listeners.append(listener)

    def remove_edit_listener(self, listener: EditListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def has_edit_listener(self, listener: EditListener) -> bool:
        return listener in self._listeners

    def _notify(self, event: InputEvent) -> None:
        for listener in list(self._listeners):
            listener(event)

    def insert(self, text: str, event: InputEvent | None = None) -> None:
        """Insert ``text`` at point, leave point after it and notify listeners"""
        if not text:
            return
        if event is None:
            event = InputEvent.typed(text) if len(text) == 1 else InputEvent(YANK, text)
        self._text = self._text[: self._point] + text + self._text[self._point :]
        self._point += len(text)
        self._notify(event)

    def type(self, keys: str) -> None:
        """Simulate typing ``keys`` one character at a time"""
        for char in keys:
            self.insert(char, InputEvent.typed(char))

    def delete_backward(self, count: int = 1) -> None:
        start = max(0, self._point - count)
        if start == self._point:
            return
        self._text = self._text[:start] + self._text[self._point :]
        self._point = start
        self._notify(InputEvent(DELETE_BACKWARD, ""))
