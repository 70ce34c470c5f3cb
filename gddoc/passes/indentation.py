"""
Indentation measurement.

The depth of a line is the number of leading repetitions of the indent unit
(one tab by default).  Any other character ends the count, so a space in tab
mode or mixed indentation stops counting at that point.
"""
from __future__ import annotations

DEFAULT_INDENT_UNIT = "\t"


def indentation_level(text: str, unit: str = DEFAULT_INDENT_UNIT) -> int:
    """
    Return the indentation depth of *text*.

    >>> indentation_level("\\t\\tvar x")
    2
    >>> indentation_level("\\t  \\tvar x")
    1
    >>> indentation_level("        var x", unit="    ")
    2
    """
    if not unit:
        raise ValueError("indent unit must not be empty")
    level = 0
    pos = 0
    width = len(unit)
    while text.startswith(unit, pos):
        level += 1
        pos += width
    return level
