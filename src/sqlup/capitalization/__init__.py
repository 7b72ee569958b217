"""
Keyword capitalization engine.

- triggers: which input events start a pass
- symbols: the word-like token next to a position
- lexer / classifier: code, comment, string or eval-string context
- keywords: per-buffer keyword set resolution and caching
- engine / region: single-token and span capitalization
- mode: the per-buffer enable/disable surface
"""

from .engine import CapitalizationEngine
from .keywords import KeywordSet, KeywordSetResolver
from .mode import SqlupMode
from .region import RegionCapitalizer

__all__ = [
    "CapitalizationEngine",
    "KeywordSet",
    "KeywordSetResolver",
    "RegionCapitalizer",
    "SqlupMode",
]
