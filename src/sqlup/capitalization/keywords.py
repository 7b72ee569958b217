#!/usr/bin/env python3
"""Keyword sets and their per-buffer resolution."""
from __future__ import annotations

import re
from typing import TYPE_CHECKING, Iterable, Iterator

from ..core.config import get_config, setup_logging
from .constants import (
    DEFAULT_DIALECT,
    REDIS_MODE,
    get_dialect_resources,
    get_mode_keywords,
    normalize_dialect,
)

if TYPE_CHECKING:
    from ..core.config import ConfigLoader
    from ..host.buffer import TextBuffer
    from ..host.dialect import DialectSelector

logger = setup_logging(__name__)


class KeywordSet:
    """Unordered set of keywords with case-insensitive whole-token membership.

    Entries are literal words or regular expressions; a pattern matches only
    when it covers the entire token.
    """

    def __init__(
        self,
        words: Iterable[str] = (),
        patterns: Iterable[str | re.Pattern[str]] = (),
        excluded: Iterable[str] = (),
        source: str = "",
    ):
        self.words = frozenset(word.lower() for word in words)
        self.patterns = tuple(
            p if isinstance(p, re.Pattern) else re.compile(p, re.IGNORECASE) for p in patterns
        )
        self.excluded = frozenset(word.lower() for word in excluded)
        self.source = source

    def __contains__(self, token: object) -> bool:
        if not isinstance(token, str) or not token:
            return False
        lowered = token.lower()
        if lowered in self.excluded:
            return False
        if lowered in self.words:
            return True
        return any(pattern.fullmatch(lowered) for pattern in self.patterns)

    def __len__(self) -> int:
        return len(self.words - self.excluded)

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self.words - self.excluded))

    def __repr__(self) -> str:
        return f"KeywordSet(source={self.source!r}, words={len(self)}, patterns={len(self.patterns)})"


class KeywordSetResolver:
    """Resolves and caches the keyword set of one buffer.

    The cache lives until ``invalidate()`` is called, which the mode does
    whenever the buffer's dialect changes.
    """

    def __init__(
        self,
        buffer: "TextBuffer",
        dialects: "DialectSelector",
        config: "ConfigLoader | None" = None,
    ):
        self.buffer = buffer
        self.dialects = dialects
        self.config = config
        self._keywords: KeywordSet | None = None

    @property
    def is_resolved(self) -> bool:
        return self._keywords is not None

    @property
    def dialect(self) -> str:
        """The active dialect, falling back to the configured default and then to ANSI"""
        config = self.config or get_config()
        return normalize_dialect(self.dialects.active_dialect or config.default_dialect or DEFAULT_DIALECT)

    def resolve(self) -> KeywordSet:
        """Return the cached keyword set, building it on first use."""
        if self._keywords is None:
            self._keywords = self._build()
            logger.debug(f"Resolved {self._keywords!r} for buffer '{self.buffer.name}'")
        return self._keywords

    def invalidate(self) -> None:
        if self._keywords is not None:
            logger.debug(f"Dropping cached keywords of buffer '{self.buffer.name}'")
        self._keywords = None

    def _build(self) -> KeywordSet:
        config = self.config or get_config()
        blacklist = config.blacklist

        if self.buffer.mode == REDIS_MODE:
            return KeywordSet(get_mode_keywords(REDIS_MODE), excluded=blacklist, source=REDIS_MODE)

        if self.buffer.mode_keywords is not None:
            return KeywordSet(self.buffer.mode_keywords, excluded=blacklist, source=f"mode:{self.buffer.mode}")

        dialect = self.dialect
        resources = get_dialect_resources(dialect)
        words = list(resources["keywords"]) + config.get_extra_keywords(dialect)
        return KeywordSet(words, resources["patterns"], excluded=blacklist, source=dialect)
