#!/usr/bin/env python3
"""Per-buffer dialect (SQL product) selection with change notification."""
from __future__ import annotations

from typing import Callable

DialectListener = Callable[[str, str], None]


class DialectSelector:
    """Holds the active dialect and tells subscribers when it changes.

    Listeners are called with ``(old_dialect, new_dialect)`` after the switch.
    """

    def __init__(self, dialect: str | None = None) -> None:
        self._dialect = dialect.lower() if dialect else None
        self._listeners: list[DialectListener] = []

    @property
    def active_dialect(self) -> str | None:
        return self._dialect

    def set_dialect(self, dialect: str | None) -> None:
        new = dialect.lower() if dialect else None
        if new == self._dialect:
            return
        old, self._dialect = self._dialect, new
        for listener in list(self._listeners):
            listener(old, new)

    def subscribe(self, listener: DialectListener) -> None:
        if listener not in self._listeners:
            self._listeners.append(listener)

    def unsubscribe(self, listener: DialectListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def is_subscribed(self, listener: DialectListener) -> bool:
        return listener in self._listeners
