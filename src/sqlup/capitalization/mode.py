#!/usr/bin/env python3
"""Per-buffer minor mode that uppercases SQL keywords as you type."""
from __future__ import annotations

from typing import TYPE_CHECKING

from ..core.config import setup_logging
from ..core.logging import LogContext
from ..host.dialect import DialectSelector
from .classifier import Classifier, ContextClassifier
from .engine import CapitalizationEngine
from .keywords import KeywordSetResolver
from .lexer import classify_at
from .region import RegionCapitalizer
from .symbols import BACKWARD
from .triggers import TriggerDetector

if TYPE_CHECKING:
    from ..core.config import ConfigLoader
    from ..host.buffer import TextBuffer
    from ..host.events import InputEvent

logger = setup_logging(__name__)


class SqlupMode:
    """Wires trigger detection, keyword resolution and capitalization to one buffer.

    Each buffer gets its own mode instance and therefore its own keyword cache.
    """

    def __init__(
        self,
        buffer: "TextBuffer",
        dialects: DialectSelector | None = None,
        config: "ConfigLoader | None" = None,
        classify: Classifier = classify_at,
    ):
        self.buffer = buffer
        self.dialects = dialects if dialects is not None else DialectSelector()
        self.triggers = TriggerDetector()
        self.resolver = KeywordSetResolver(buffer, self.dialects, config)
        self.classifier = ContextClassifier(buffer, classify, config)
        self.engine = CapitalizationEngine(buffer, self.resolver, self.classifier)
        self.region = RegionCapitalizer(self.engine)
        self._enabled = False

    @property
    def enabled(self) -> bool:
        return self._enabled

    @property
    def dialect(self) -> str:
        return self.resolver.dialect

    def enable(self) -> None:
        """Start capitalizing as the user types; resets cached keyword state."""
        self.resolver.invalidate()
        if self._enabled:
            return
        self.buffer.add_edit_listener(self._on_edit)
        self.dialects.subscribe(self._on_dialect_change)
        self._enabled = True
        logger.debug(f"Enabled in buffer '{self.buffer.name}' (dialect {self.dialect})")

    def disable(self) -> None:
        if not self._enabled:
            return
        self.buffer.remove_edit_listener(self._on_edit)
        self.dialects.unsubscribe(self._on_dialect_change)
        self._enabled = False
        logger.debug(f"Disabled in buffer '{self.buffer.name}'")

    def _on_edit(self, event: "InputEvent") -> None:
        if not self.triggers.should_trigger(event):
            return
        with LogContext(buffer=self.buffer.name):
            self.engine.maybe_capitalize(self.buffer.point, BACKWARD)

    def _on_dialect_change(self, old: str | None, new: str | None) -> None:
        logger.info(f"Dialect of '{self.buffer.name}' changed from {old} to {new}, rebuilding keywords")
        self.resolver.invalidate()

    def _refresh_if_detached(self) -> None:
        # Without the dialect subscription a cached set may belong to an old dialect
        if not self._enabled:
            self.resolver.invalidate()

    def capitalize_region(self, start: int, end: int) -> int:
        """Uppercase eligible keywords in ``[start, end)``, enabled or not."""
        self._refresh_if_detached()
        with LogContext(buffer=self.buffer.name):
            return self.region.capitalize_region(start, end)

    def capitalize_buffer(self) -> int:
        self._refresh_if_detached()
        with LogContext(buffer=self.buffer.name):
            return self.region.capitalize_buffer()
