"""
Scanner
=======

Bracket- and string-literal-aware search over a single line of GDScript.

:func:`find` is the single authority used to locate the comment character,
so that a ``#`` inside a string literal is never mistaken for a comment.  It
is also used by the declaration parsers to locate ``=``, ``:`` and
``" setget "`` outside strings and nested brackets.

Scanning rules, evaluated left to right:

* A ``"`` or ``'`` outside any string opens a string of that kind; the same
  quote closes it.  A backslash inside a string escapes the next character.
  Quote state never carries over to the next line.
* Outside strings, ``(``, ``[`` and ``{`` are pushed on the bracket stack; a
  closing bracket must match the innermost opener.
* The pattern is only tested outside strings (and, with ``nested=False``,
  only at the bracket depth the scan started at).

The bracket stack is threaded in and out so that callers can track nesting
across lines, e.g. through a multi-line enum body.
"""
from __future__ import annotations

from typing import List, Optional, Sequence, Tuple

from ..errors import BracketMismatchError

OPENING_BRACKETS = {"(": ")", "[": "]", "{": "}"}
CLOSING_BRACKETS = {")": "(", "]": "[", "}": "{"}
QUOTES = ("'", '"')


def find(
    line: str,
    pattern: str,
    brackets: Sequence[str] = (),
    *,
    nested: bool = True,
    filename: Optional[str] = None,
    lineno: Optional[int] = None,
) -> Tuple[Optional[int], List[str]]:
    """
    Find the first unquoted occurrence of *pattern* in *line*.

    Parameters
    ----------
    line:
        The text to scan.
    pattern:
        A single character or a literal string.
    brackets:
        Bracket stack (open bracket characters, innermost last) at the start
        of *line*.
    nested:
        When ``False`` the pattern only matches at the starting bracket depth.
    filename, lineno:
        Location attached to a :class:`BracketMismatchError`.

    Returns
    -------
    Tuple[Optional[int], List[str]]
        The match position (or ``None``) and the bracket stack at that point
        (or at end of line when nothing matched).
    """
    if not pattern:
        raise ValueError("pattern must not be empty")

    stack = list(brackets)
    base_depth = len(stack)
    quote: Optional[str] = None
    escaped = False

    for pos, ch in enumerate(line):
        if quote is not None:
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == quote:
                quote = None
            continue

        if (nested or len(stack) == base_depth) and line.startswith(pattern, pos):
            return pos, stack

        if ch in QUOTES:
            quote = ch
        elif ch in OPENING_BRACKETS:
            stack.append(ch)
        elif ch in CLOSING_BRACKETS:
            if not stack:
                raise BracketMismatchError(
                    f"extra '{ch}'", filename=filename, lineno=lineno
                )
            opener = stack.pop()
            if opener != CLOSING_BRACKETS[ch]:
                raise BracketMismatchError(
                    f"closing '{ch}' does not match opening '{opener}'",
                    filename=filename,
                    lineno=lineno,
                )

    return None, stack


def split(text: str, separator: str = ",") -> List[str]:
    """
    Split *text* on top-level, unquoted occurrences of *separator*.

    >>> split('int, "A,B", foo(1, 2)')
    ['int', ' "A,B"', ' foo(1, 2)']
    """
    parts: List[str] = []
    rest = text
    while True:
        pos, _ = find(rest, separator, nested=False)
        if pos is None:
            parts.append(rest)
            return parts
        parts.append(rest[:pos])
        rest = rest[pos + len(separator):]
