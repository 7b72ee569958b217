"""
In-memory host editing environment.

The capitalization engine only talks to these collaborators:
- TextBuffer: text, cursor, mode identity, edit listeners
- DialectSelector: the active dialect plus change notification
- InputEvent: the keystroke or command behind the latest edit
"""

from .buffer import TextBuffer
from .dialect import DialectSelector
from .events import InputEvent

__all__ = ["DialectSelector", "InputEvent", "TextBuffer"]
