#!/usr/bin/env python3
"""Apply keyword capitalization across an explicit span."""
from __future__ import annotations

from typing import TYPE_CHECKING

from ..core.config import setup_logging
from .symbols import FORWARD

if TYPE_CHECKING:
    from .engine import CapitalizationEngine

logger = setup_logging(__name__)


class RegionCapitalizer:
    """Walks a span token by token, independent of input triggers."""

    def __init__(self, engine: "CapitalizationEngine"):
        self.engine = engine

    def capitalize_region(self, start: int, end: int) -> int:
        """
        Uppercase every eligible keyword whose first character lies before ``end``,
        scanning forward from ``start``.

        Each step resumes at the end of the token just examined, so the walk
        always makes forward progress and stops when no symbol is left.

        Returns:
            Number of tokens rewritten
        """
        buffer = self.engine.buffer
        start = max(0, start)
        end = min(end, len(buffer))
        position = start
        changed = 0

        with buffer.save_excursion():
            while position < end:
                token = self.engine.locate(position, FORWARD)
                if token is None or token.start >= end:
                    break
                if self.engine.capitalize_token(token):
                    changed += 1
                position = token.end

        logger.debug(f"Capitalized {changed} keyword(s) in [{start}, {end}) of '{buffer.name}'")
        return changed

    def capitalize_buffer(self) -> int:
        return self.capitalize_region(0, len(self.engine.buffer))
