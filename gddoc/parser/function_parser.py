"""
FunctionParser
==============

Parses the text following the ``func`` keyword into a function name and a
:class:`~gddoc.models.FunctionPayload`.

Grammar::

    signature := name '(' [param (',' param)*] ')'
                 ['.' '(' [param (',' param)*] ')']
                 ['->' type] ':' [body]
    param     := name [':' type] ['=' default]

The second parenthesised group is only legal for ``_init`` and records the
arguments passed to the parent constructor, e.g.::

    func _init(a: int, b).(a) -> void:

The parser is a single left-to-right character scan with an explicit *side*
(which part of a parameter or header is being read) and a parenthesis depth.
Whitespace is ignored except inside string literals and nested brackets of a
default value or type, which are kept verbatim.  Text after the terminating
``:`` is the body of a one-line function and is not inspected.
"""
from __future__ import annotations

from typing import List, Optional, Tuple

from ..errors import InvalidDeclarationSyntaxError
from ..models import FunctionArgument, FunctionPayload
from .scanner import CLOSING_BRACKETS, OPENING_BRACKETS, QUOTES

# Sides of the scan
_NAME = "NAME"
_TYPE = "TYPE"
_ASSIGNMENT = "ASSIGNMENT"
_INVALID = "INVALID"

_CONSTRUCTOR = "_init"


class _Argument:
    """Mutable accumulator for the parameter being read."""

    def __init__(self) -> None:
        self.name = ""
        self.value_type: Optional[str] = None
        self.default_value: Optional[str] = None

    def is_empty(self) -> bool:
        return not self.name and self.value_type is None and self.default_value is None

    def append(self, side: str, ch: str) -> None:
        if side == _NAME:
            self.name += ch
        elif side == _TYPE:
            self.value_type = (self.value_type or "") + ch
        else:
            self.default_value = (self.default_value or "") + ch

    def build(self, text: str) -> FunctionArgument:
        if not self.name:
            raise InvalidDeclarationSyntaxError(f"missing parameter name: func {text}")
        if self.value_type == "" and self.default_value:
            # "name := default" infers the type
            self.value_type = None
        if self.value_type == "" or self.default_value == "":
            raise InvalidDeclarationSyntaxError(f"incomplete parameter '{self.name}': func {text}")
        return FunctionArgument(
            name=self.name,
            value_type=self.value_type,
            default_value=self.default_value,
        )


class FunctionParser:
    """Stateless parser for ``func`` headers."""

    def parse(self, text: str) -> Tuple[str, FunctionPayload]:
        """
        Parse a function header.

        Parameters
        ----------
        text:
            Everything after the ``func`` keyword, e.g.
            ``" move(dir: Vector2, speed = 1.0) -> void:"``.

        Returns
        -------
        Tuple[str, FunctionPayload]
            The function name and its parsed signature.

        Raises
        ------
        InvalidDeclarationSyntaxError
            The header does not match the grammar.
        """

        def fail(reason: str) -> InvalidDeclarationSyntaxError:
            return InvalidDeclarationSyntaxError(f"{reason}: func {text.strip()}")

        name = ""
        groups: List[List[FunctionArgument]] = []
        return_type: Optional[str] = None

        side = _NAME
        depth = 0
        expect_group = False
        finished = False
        current = _Argument()
        inner: List[str] = []       # brackets opened inside a type / default
        quote: Optional[str] = None
        escaped = False
        last_char: Optional[str] = None

        for ch in text:
            # -- verbatim regions of a parameter ---------------------------
            if quote is not None:
                current.append(side, ch)
                if escaped:
                    escaped = False
                elif ch == "\\":
                    escaped = True
                elif ch == quote:
                    quote = None
                last_char = ch
                continue

            if inner:
                current.append(side, ch)
                if ch in QUOTES:
                    quote = ch
                elif ch in OPENING_BRACKETS:
                    inner.append(ch)
                elif ch in CLOSING_BRACKETS:
                    if inner.pop() != CLOSING_BRACKETS[ch]:
                        raise fail(f"unbalanced '{ch}'")
                last_char = ch
                continue

            if ch.isspace():
                last_char = ch
                continue

            # -- structure ---------------------------------------------------
            if ch == "(":
                if depth != 0:
                    if side == _NAME:
                        raise fail("unexpected '('")
                    inner.append(ch)
                    current.append(side, ch)
                elif not name or len(groups) >= 2:
                    raise fail("unexpected '('")
                elif len(groups) == 1 and not expect_group:
                    raise fail("unexpected '('")
                else:
                    depth = 1
                    side = _NAME
                    expect_group = False
                    groups.append([])
                    current = _Argument()

            elif expect_group:
                raise fail("expected '(' after '.'")

            elif ch == ")":
                if depth == 0:
                    raise fail("extra ')'")
                if not current.is_empty():
                    groups[-1].append(current.build(text))
                current = _Argument()
                depth = 0
                side = _INVALID

            elif ch == "," and depth == 1:
                groups[-1].append(current.build(text))
                current = _Argument()
                side = _NAME

            elif ch == "." and depth == 0:
                if name != _CONSTRUCTOR or len(groups) != 1 or return_type is not None:
                    raise fail("unexpected '.'")
                expect_group = True

            elif ch == ":" and depth == 0:
                if not groups:
                    raise fail("missing parameter list")
                if return_type == "":
                    raise fail("missing return type")
                finished = True
                break

            elif ch == ":":
                if side != _NAME or current.value_type is not None:
                    raise fail("unexpected ':'")
                side = _TYPE
                current.value_type = ""

            elif ch == "-" and depth == 0:
                if side != _INVALID or return_type is not None:
                    raise fail("unexpected '-'")

            elif ch == ">" and depth == 0:
                if last_char != "-" or side != _INVALID or return_type is not None:
                    raise fail("unexpected '>'")
                side = _TYPE
                return_type = ""

            elif ch == "=" and depth == 1:
                if side == _ASSIGNMENT:
                    current.append(side, ch)
                else:
                    side = _ASSIGNMENT
                    current.default_value = ""

            elif depth == 0:
                if side == _NAME and not groups and (ch.isalnum() or ch == "_"):
                    name += ch
                elif side == _TYPE:
                    return_type = (return_type or "") + ch
                else:
                    raise fail(f"unexpected '{ch}'")

            elif side == _NAME:
                if ch in QUOTES or ch in OPENING_BRACKETS or ch in CLOSING_BRACKETS:
                    raise fail(f"unexpected '{ch}'")
                current.append(side, ch)

            else:
                current.append(side, ch)
                if ch in QUOTES:
                    quote = ch
                elif ch in OPENING_BRACKETS:
                    inner.append(ch)
                elif ch in CLOSING_BRACKETS:
                    raise fail(f"unbalanced '{ch}'")

            last_char = ch

        if not finished:
            raise fail("expected ':' at the end of the signature")

        return name, FunctionPayload(
            arguments=groups[0],
            super_arguments=groups[1] if len(groups) > 1 else None,
            return_type=return_type,
        )
