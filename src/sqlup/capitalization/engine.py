#!/usr/bin/env python3
"""Uppercase the keyword adjacent to a position when its context allows it."""
from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from ..core.config import setup_logging
from .symbols import Token, locate

if TYPE_CHECKING:
    from ..host.buffer import TextBuffer
    from .classifier import ContextClassifier
    from .keywords import KeywordSetResolver

logger = setup_logging(__name__)


@dataclass(frozen=True)
class CapitalizationResult:
    """The token examined by one pass and whether the buffer was rewritten"""

    token: Token | None
    changed: bool = False


class CapitalizationEngine:
    """Runs locate, match, classify and transform for a single token."""

    def __init__(
        self,
        buffer: "TextBuffer",
        resolver: "KeywordSetResolver",
        classifier: "ContextClassifier",
    ):
        self.buffer = buffer
        self.resolver = resolver
        self.classifier = classifier

    def locate(self, position: int, direction: int) -> Token | None:
        return locate(self.buffer.read(), position, direction)

    def capitalize_token(self, token: Token) -> bool:
        """
        Uppercase ``token`` if it is a keyword in code or in an eval string.

        Uppercasing rewrites the span directly, so no edit event is generated.
        A keyword that is already uppercase is rewritten to the same text.
        """
        if not token.text:
            return False

        if token.text not in self.resolver.resolve():
            return False

        if not self.classifier.is_capitalizable(token.start, self.resolver.dialect):
            logger.debug(f"Keyword '{token.text}' at {token.start} is in a string or comment")
            return False

        self.buffer.replace_uppercase(token.start, token.end)
        return True

    def capitalize_adjacent(self, position: int, direction: int) -> CapitalizationResult:
        """
        Examine the symbol next to ``position`` and uppercase it when eligible.

        The cursor is restored on every exit path.

        Args:
            position: Character offset to search from
            direction: -1 for the symbol before ``position``, +1 for the one after

        Returns:
            CapitalizationResult with the examined token (None when there is none)
        """
        with self.buffer.save_excursion():
            token = self.locate(position, direction)
            if token is None:
                return CapitalizationResult(None)
            return CapitalizationResult(token, self.capitalize_token(token))

    def maybe_capitalize(self, position: int, direction: int) -> bool:
        """Return True if the keyword next to ``position`` was uppercased."""
        return self.capitalize_adjacent(position, direction).changed
