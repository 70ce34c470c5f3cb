"""
LineContinuationPass
====================

Collapses GDScript backslash continuations into single logical lines.

GDScript line continuation rules (as handled here):
  * A physical line ending in ``\\`` continues on the next physical line.
  * The marker only counts when the line holds no ``#``; a backslash at the
    end of a comment is comment text.
  * The joined line is checked again, so several continuations chain.

Each logical line keeps a 1-based line number: the number of the *last*
physical line consumed, which is where reading stopped when an error is
raised later on.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import List

from ..errors import UnterminatedContinuationError

_CONTINUATION_MARKER = "\\"


@dataclass
class LogicalLine:
    """One logical source line."""

    lineno: int
    text: str


class LineContinuationPass:
    """Joins backslash-continued lines with their successors."""

    def run(self, lines: List[str], filename: str = "<inline>") -> List[LogicalLine]:
        """
        Collapse continuation lines.

        Parameters
        ----------
        lines:
            Sanitised physical source lines.
        filename:
            Source identifier used in error messages.

        Returns
        -------
        List[LogicalLine]
            Possibly shorter list with continuation lines merged in.

        Raises
        ------
        UnterminatedContinuationError
            The input ends while a line still expects a continuation.
        """
        result: List[LogicalLine] = []
        lineno = 0
        total = len(lines)

        while lineno < total:
            text = lines[lineno]
            lineno += 1
            while self._is_continued(text):
                if lineno >= total:
                    raise UnterminatedContinuationError(
                        "unexpected end of file, expected a line after '\\'",
                        filename=filename,
                        lineno=lineno,
                    )
                text = text[: -len(_CONTINUATION_MARKER)] + lines[lineno]
                lineno += 1
            result.append(LogicalLine(lineno=lineno, text=text))

        return result

    @staticmethod
    def _is_continued(text: str) -> bool:
        return text.endswith(_CONTINUATION_MARKER) and "#" not in text
