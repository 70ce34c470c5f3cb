"""
AssignmentParser
================

Parses the typed-declaration bodies shared by ``var``, ``const`` and
``export ... var``::

    name [':' type] ['=' value] [' setget ' setter [',' getter]]

The first top-level, unquoted occurrences of ``=``, ``:`` and ``" setget "``
are located with :func:`~gddoc.parser.scanner.find`; their presence and
relative order decide which fields are filled in.  Legal shapes:

+------------------------------+---------------------------------------------+
| Shape                        | Example                                     |
+==============================+=============================================+
| name                         | ``var speed``                               |
+------------------------------+---------------------------------------------+
| name : type                  | ``var speed: float``                        |
+------------------------------+---------------------------------------------+
| name = value                 | ``var speed = 1.0``                         |
+------------------------------+---------------------------------------------+
| name : type = value          | ``var speed: float = 1.0``                  |
+------------------------------+---------------------------------------------+
| any of the above + setget    | ``var speed = 1.0 setget set_speed``        |
+------------------------------+---------------------------------------------+

Every other ordering (a type after the value, a value after ``setget``)
is an :class:`~gddoc.errors.InvalidDeclarationSyntaxError`.

``export`` declarations may carry a parenthesised argument list before
``var``: the first argument is the exported type, the rest are hint options.
That type wins over a type written in the body.
"""
from __future__ import annotations

from typing import List, Optional, Tuple

from ..errors import InvalidDeclarationSyntaxError
from ..models import ExportPayload, VariablePayload
from .scanner import find, split

SETGET_KEYWORD = " setget "
EXPORT_KEYWORD = "export"
EXPORT_VAR_MARKER = " var "


class AssignmentParser:
    """Stateless parser for variable, constant and export bodies."""

    # ------------------------------------------------------------------
    # Public interface
    # ------------------------------------------------------------------

    def parse(self, text: str) -> Tuple[str, VariablePayload]:
        """
        Parse the text following ``var`` or ``const``.

        Parameters
        ----------
        text:
            Declaration body, e.g. ``"health: int = 10 setget set_health"``.
            One trailing ``:`` is ignored.

        Returns
        -------
        Tuple[str, VariablePayload]
        """
        body = text.strip()
        if body.endswith(":"):
            body = body[:-1].rstrip()

        apos, _ = find(body, "=", nested=False)
        tpos, _ = find(body, ":", nested=False)
        spos, _ = find(body, SETGET_KEYWORD, nested=False)

        setter: Optional[str] = None
        getter: Optional[str] = None
        head_end = len(body)
        if spos is not None:
            setter, getter = self._parse_setget(body[spos + len(SETGET_KEYWORD):], text)
            head_end = spos

        if apos is not None and apos > head_end:
            raise self._invalid(text, "value after setget")
        if tpos is not None and tpos > head_end:
            raise self._invalid(text, "type after setget")
        if tpos is not None and apos is not None and tpos > apos:
            raise self._invalid(text, "type after value")

        name_end = min(p for p in (tpos, apos, head_end) if p is not None)
        name = body[:name_end].strip()
        if not name:
            raise self._invalid(text, "missing name")

        value_type: Optional[str] = None
        if tpos is not None:
            type_end = apos if apos is not None else head_end
            # "name := value" infers the type; an empty type is no type
            value_type = body[tpos + 1:type_end].strip() or None

        assignment: Optional[str] = None
        if apos is not None:
            assignment = body[apos + 1:head_end].strip()
            if not assignment:
                raise self._invalid(text, "missing value")

        return name, VariablePayload(
            value_type=value_type,
            assignment=assignment,
            setter=setter,
            getter=getter,
        )

    def parse_export(self, line: str) -> Tuple[str, ExportPayload]:
        """
        Parse a whole ``export`` line.

        Parameters
        ----------
        line:
            E.g. ``'export(int, "A", "B") var mode = 2 setget set_mode'``.

        Returns
        -------
        Tuple[str, ExportPayload]
        """
        stripped = line.strip()
        if not stripped.startswith(EXPORT_KEYWORD):
            raise self._invalid(line, "not an export declaration")
        rest = stripped[len(EXPORT_KEYWORD):]

        var_pos, _ = find(rest, EXPORT_VAR_MARKER, nested=False)
        if var_pos is None:
            raise self._invalid(line, "expected 'var' after 'export'")

        export_type, options = self._parse_export_arguments(rest[:var_pos].strip(), line)
        name, variable = self.parse(rest[var_pos + len(EXPORT_VAR_MARKER):])

        return name, ExportPayload(
            value_type=export_type if export_type is not None else variable.value_type,
            options=options,
            assignment=variable.assignment,
            setter=variable.setter,
            getter=variable.getter,
        )

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _parse_export_arguments(
        self, arguments: str, line: str
    ) -> Tuple[Optional[str], List[str]]:
        if not arguments:
            return None, []
        if not (arguments.startswith("(") and arguments.endswith(")")):
            raise self._invalid(line, "malformed export arguments")

        parts = [p.strip() for p in split(arguments[1:-1])]
        if parts == [""]:
            return None, []
        if any(not p for p in parts):
            raise self._invalid(line, "empty export argument")
        return parts[0], parts[1:]

    def _parse_setget(self, clause: str, text: str) -> Tuple[Optional[str], Optional[str]]:
        parts = [p.strip() for p in clause.split(",")]
        if len(parts) == 1 and parts[0]:
            return parts[0], None
        if len(parts) == 2:
            setter, getter = parts
            if setter or getter:
                return setter or None, getter or None
        raise self._invalid(text, "malformed setget clause")

    @staticmethod
    def _invalid(text: str, reason: str) -> InvalidDeclarationSyntaxError:
        return InvalidDeclarationSyntaxError(f"invalid syntax ({reason}): '{text.strip()}'")
