"""
Comment & visibility tracking.

Comments are collected line by line and handed to the next declaration.  The
state machine calls :meth:`CommentTracker.reset` after every line holding
code, so only comments *immediately* preceding a declaration document it and
a ``[Show]`` / ``[Hide]`` directive applies to exactly the next declaration.
"""
from __future__ import annotations

from typing import List, Optional

SHOW_DIRECTIVE = "[Show]"
HIDE_DIRECTIVE = "[Hide]"
WARNING_IGNORE_PREFIX = "warning-ignore:"


class CommentTracker:
    """Pending doc-comment lines plus a one-shot visibility override."""

    def __init__(self) -> None:
        self._buffer: List[str] = []
        #: ``True`` forces the next symbol visible, ``False`` hides it.
        self.override: Optional[bool] = None

    @property
    def pending(self) -> List[str]:
        return list(self._buffer)

    def add(self, comment: str) -> None:
        """Record the text of one comment (without the ``#``)."""
        text = comment.strip()
        if text == SHOW_DIRECTIVE:
            self.override = True
        elif text == HIDE_DIRECTIVE:
            self.override = False
        elif not text.startswith(WARNING_IGNORE_PREFIX):
            self._buffer.append(text)

    def drain(self) -> List[str]:
        """Hand the pending lines to a symbol and empty the buffer."""
        text, self._buffer = self._buffer, []
        return text

    def reset(self) -> None:
        self._buffer = []
        self.override = None

    def is_visible(self, name: str, show_private: bool = False) -> bool:
        """
        Decide whether a symbol called *name* is documented.

        A ``[Hide]`` override always excludes and a ``[Show]`` override always
        includes; otherwise ``_``-prefixed names need *show_private*.
        """
        if self.override is not None:
            return self.override
        return show_private or not name.startswith("_")
