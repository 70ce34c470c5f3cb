"""
SanitisePass
============

Light-weight normalisation of GDScript source lines before logical-line
reading.

Currently performs:
  * Removal of ``\\r`` / ``\\n`` line terminators left by file iteration.
  * Removal of a UTF-8 byte-order mark on the first line.
  * Trailing-whitespace removal (leading whitespace is the indentation and
    is preserved).
"""
from __future__ import annotations

from typing import Iterable, List

_BOM = "\ufeff"


class SanitisePass:
    """Sanitises physical source lines."""

    def run(self, lines: Iterable[str]) -> List[str]:
        """
        Apply sanitisation to all lines.

        Parameters
        ----------
        lines:
            Physical source lines, with or without line terminators.

        Returns
        -------
        List[str]
            Sanitised lines (same number of lines; none are dropped).
        """
        result = [self._sanitise(line) for line in lines]
        if result and result[0].startswith(_BOM):
            result[0] = result[0][len(_BOM):]
        return result

    # ------------------------------------------------------------------

    @staticmethod
    def _sanitise(line: str) -> str:
        return line.rstrip()
