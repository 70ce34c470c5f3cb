"""
Enum-body parsing.

Shared by single-line ``enum Name {A, B = 5, C}`` declarations and by the
multi-line Enum mode of the state machine.  Each entry is ``name [= value]``;
an explicit value sets the running counter to ``value + 1``, an omitted value
takes the running counter, which starts at 0 for every enum body.  A value
that is not an integer literal (an expression or a constant name) is not
evaluated and also takes the running counter.
"""
from __future__ import annotations

import logging
from typing import Callable, List, Optional, Tuple

from ..errors import InvalidDeclarationSyntaxError
from ..models import EnumValue
from .scanner import split

logger = logging.getLogger(__name__)

ENUM_CLOSE = "}"


def _parse_int(text: str) -> Optional[int]:
    literal = text.replace("_", "")
    sign = 1
    if literal[:1] in ("-", "+"):
        sign = -1 if literal[0] == "-" else 1
        literal = literal[1:].strip()
    try:
        if literal[:2].lower() in ("0x", "0b", "0o"):
            return sign * int(literal, 0)
        return sign * int(literal, 10)
    except ValueError:
        return None


class EnumBodyParser:
    """
    Accumulates the values of one enum body.

    Parameters
    ----------
    is_visible:
        Called with each value name; hidden values still advance the counter.
    """

    def __init__(self, is_visible: Callable[[str], bool]) -> None:
        self._is_visible = is_visible
        self.next_value = 0
        self.values: List[EnumValue] = []

    def feed(
        self,
        text: str,
        comment: Optional[Callable[[], List[str]]] = None,
    ) -> bool:
        """
        Parse the entries in *text*.

        Parameters
        ----------
        text:
            A piece of the enum body; anything after a ``}`` is ignored.
        comment:
            Supplies the doc comment of each visible value.

        Returns
        -------
        bool
            ``True`` when *text* contained the closing ``}``.
        """
        end = text.find(ENUM_CLOSE)
        body = text if end < 0 else text[:end]

        for entry in split(body):
            if not entry.strip():
                continue
            name, value = self._parse_entry(entry)
            if value is None:
                value = self.next_value
            self.next_value = value + 1
            if self._is_visible(name):
                self.values.append(
                    EnumValue(name=name, value=value, text=comment() if comment else [])
                )

        return end >= 0

    @staticmethod
    def _parse_entry(entry: str) -> Tuple[str, Optional[int]]:
        name, sep, raw_value = entry.partition("=")
        name = name.strip()
        if not name or " " in name:
            raise InvalidDeclarationSyntaxError(f"invalid enum entry: '{entry.strip()}'")
        if not sep:
            return name, None
        value = _parse_int(raw_value.strip())
        if value is None:
            logger.debug(
                "Enum value of %r is not an integer literal (%r), using the counter",
                name,
                raw_value.strip(),
            )
        return name, value
