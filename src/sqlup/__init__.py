"""
SQLUP - Uppercase SQL keywords as you type.

This package provides:
- A per-buffer mode that capitalizes keywords after trigger keystrokes
- Region and whole-buffer capitalization
- Dialect keyword sets (ANSI, PostgreSQL, MySQL, Oracle, SQL Server, SQLite)
- Protection for strings and comments, with eval-string awareness
"""

__version__ = "1.0.0"

from .capitalization.mode import SqlupMode
from .host.buffer import TextBuffer
from .host.dialect import DialectSelector

__all__ = [
    "DialectSelector",
    "SqlupMode",
    "TextBuffer",
]
