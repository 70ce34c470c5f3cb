"""
Declaration dispatch.

Recognises a declaration by its line prefix and turns it into a
:class:`~gddoc.models.Symbol` in the current frame, or into a new frame for
block declarations:

+----------------+------------------------------------------------------+
| Prefix         | Result                                               |
+================+======================================================+
| ``class``      | new :class:`ClassMode` frame                         |
+----------------+------------------------------------------------------+
| ``signal``     | Signal symbol (name is the whole signal text)        |
+----------------+------------------------------------------------------+
| ``func``       | Function symbol                                      |
+----------------+------------------------------------------------------+
| ``var``        | Variable symbol                                      |
+----------------+------------------------------------------------------+
| ``const``      | Constant symbol                                      |
+----------------+------------------------------------------------------+
| ``export``     | Export symbol                                        |
+----------------+------------------------------------------------------+
| ``enum``       | Enum symbol, or a new :class:`EnumMode` frame when   |
|                | the closing ``}`` is on a later line                 |
+----------------+------------------------------------------------------+

Any other line is ordinary code and is ignored.
"""
from __future__ import annotations

import logging
import re
from typing import Optional, Tuple

from ..errors import InvalidDeclarationSyntaxError
from ..models import (
    CONSTANT,
    ENUM,
    EXPORT,
    FUNCTION,
    SIGNAL,
    VARIABLE,
    EnumPayload,
    Symbol,
)
from .assignment_parser import AssignmentParser
from .comments import CommentTracker
from .enum_parser import EnumBodyParser
from .frames import ClassMode, EnumMode, Mode, SymbolFrame
from .function_parser import FunctionParser
from .scanner import find

logger = logging.getLogger(__name__)

_EXPORT_RE = re.compile(r"export\b")
_ENUM_RE = re.compile(r"enum\b")
_EXTENDS = " extends "


def opens_enum(text: str) -> bool:
    """True when *text* (trimmed or not) is an ``enum`` header."""
    return bool(_ENUM_RE.match(text.lstrip()))


class DeclarationDispatcher:
    """
    Dispatches one line of a frame to the matching declaration parser.

    Parameters
    ----------
    comments:
        Tracker providing doc comments and the visibility override.
    show_private:
        Include ``_``-prefixed symbols.
    """

    def __init__(self, comments: CommentTracker, show_private: bool = False) -> None:
        self._comments = comments
        self._show_private = show_private
        self._functions = FunctionParser()
        self._assignments = AssignmentParser()

    def is_visible(self, name: str) -> bool:
        return self._comments.is_visible(name, self._show_private)

    def dispatch(self, line: str, indent: int, frame: SymbolFrame) -> Optional[Mode]:
        """
        Handle one declaration line.

        Parameters
        ----------
        line:
            Line text without its trailing comment.
        indent:
            Indentation level of the line (the opening indent of a class).
        frame:
            Frame receiving finished symbols.

        Returns
        -------
        Optional[Mode]
            A new frame to push, or ``None``.
        """
        if line.startswith("class "):
            return self._class(line[len("class "):], indent)
        if line.startswith("signal "):
            name = line[len("signal "):].strip()
            self._add(frame, SIGNAL, Symbol(name=name))
        elif line.startswith("func "):
            name, payload = self._functions.parse(line[len("func "):])
            self._add(frame, FUNCTION, Symbol(name=name, payload=payload))
        elif line.startswith("var "):
            name, payload = self._assignments.parse(line[len("var "):])
            self._add(frame, VARIABLE, Symbol(name=name, payload=payload))
        elif line.startswith("const "):
            name, payload = self._assignments.parse(line[len("const "):])
            self._add(frame, CONSTANT, Symbol(name=name, payload=payload))
        elif _EXPORT_RE.match(line):
            name, export = self._assignments.parse_export(line)
            self._add(frame, EXPORT, Symbol(name=name, payload=export))
        elif _ENUM_RE.match(line):
            return self._enum(line, frame)
        return None

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _add(self, frame: SymbolFrame, category: str, symbol: Symbol) -> None:
        if not self.is_visible(symbol.name):
            logger.debug("Skipping hidden %s %r", category, symbol.name)
            return
        symbol.text = self._comments.drain()
        frame.add(category, symbol)

    def _class(self, header: str, indent: int) -> ClassMode:
        name, base = self._split_class_header(header)
        visible = self.is_visible(name)
        logger.debug("Opening class %r at indent %d (visible=%s)", name, indent, visible)
        return ClassMode(
            name=name,
            opening_indent=indent,
            base=base,
            text=self._comments.drain(),
            visible=visible,
        )

    @staticmethod
    def _split_class_header(header: str) -> Tuple[str, Optional[str]]:
        colon, _ = find(header, ":", nested=False)
        head = (header if colon is None else header[:colon]).strip()
        name, sep, base = head.partition(_EXTENDS)
        name = name.strip()
        if not name:
            raise InvalidDeclarationSyntaxError(f"missing class name: 'class {header.strip()}'")
        return name, (base.strip() or None) if sep else None

    def _enum(self, line: str, frame: SymbolFrame) -> Optional[EnumMode]:
        start = line.find("{")
        if start < 0:
            raise InvalidDeclarationSyntaxError(f"expected '{{' in enum: '{line.strip()}'")

        name = line[len("enum"):start].strip()
        visible = self.is_visible(name)
        body = EnumBodyParser(self.is_visible)
        closed = body.feed(line[start + 1:])

        if not closed:
            logger.debug("Opening enum %r", name)
            return EnumMode(name=name, body=body, text=self._comments.drain(), visible=visible)
        if visible:
            frame.add(
                ENUM,
                Symbol(
                    name=name,
                    payload=EnumPayload(values=body.values),
                    text=self._comments.drain(),
                ),
            )
        return None
