#!/usr/bin/env python3
"""Decide whether a buffer position is in a context where keywords get uppercased."""
from __future__ import annotations

import re
from typing import TYPE_CHECKING, Callable, Optional

from ..core.config import get_config, setup_logging
from .constants import get_eval_keywords
from .lexer import SyntaxState, classify_at

if TYPE_CHECKING:
    from ..core.config import ConfigLoader
    from ..host.buffer import TextBuffer

logger = setup_logging(__name__)

Classifier = Callable[[str, int, Optional[str]], SyntaxState]

_WHITESPACE = re.compile(r"\s+")


def _squeeze(text: str) -> str:
    """Lowercase and drop whitespace, so `EXEC (` and `exec(` compare equal"""
    return _WHITESPACE.sub("", text).lower()


class ContextClassifier:
    """Classifies positions of one buffer as code, comment, plain string or eval string."""

    def __init__(
        self,
        buffer: "TextBuffer",
        classify: Classifier = classify_at,
        config: "ConfigLoader | None" = None,
    ):
        """Initialize the classifier.

        Args:
            buffer: Buffer whose positions are classified
            classify: Lexical classification primitive, SQL rules by default
            config: Configuration supplying extra eval markers (global config if None)
        """
        self.buffer = buffer
        self.classify = classify
        self.config = config

    def eval_markers(self, dialect: str | None) -> tuple[str, ...]:
        config = self.config or get_config()
        return get_eval_keywords(dialect, config.get_eval_keywords(dialect or ""))

    def is_eval_string(self, content: str, string_start: int, dialect: str | None) -> bool:
        """Check whether the string opening at ``string_start`` follows an eval marker."""
        preceding = _squeeze(content[:string_start])
        return any(preceding.endswith(_squeeze(marker)) for marker in self.eval_markers(dialect))

    def is_capitalizable(self, position: int, dialect: str | None) -> bool:
        """
        Check if a keyword at ``position`` may be uppercased.

        The scan runs over a snapshot of the buffer text under SQL rules,
        whatever the buffer's mode. Comments, quoted identifiers and plain
        strings are excluded; strings introduced by an eval marker are not.

        Args:
            position: Character offset in the buffer
            dialect: Active dialect name

        Returns:
            True if the position is in code or in an eval string
        """
        snapshot = self.buffer.read()

        try:
            state = self.classify(snapshot, position, dialect)
        except Exception as e:
            logger.debug(f"Syntax scan failed at {position}, leaving token alone: {e}")
            return False

        if state.in_comment or state.in_identifier:
            return False

        if state.in_string:
            if state.string_start is None:
                logger.debug(f"String at {position} has no opening delimiter, leaving token alone")
                return False
            return self.is_eval_string(snapshot, state.string_start, dialect)

        return True
