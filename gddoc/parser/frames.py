"""
Mode-stack frames of the documentation state machine.

The stack always holds a :class:`NormalMode` at the bottom; :class:`ClassMode`
and :class:`EnumMode` frames are pushed on top while a block is being read.
Only Normal and Class frames own a :class:`SymbolFrame` and can receive a
finished class or enum symbol.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Union

from ..models import CATEGORY_ORDER, DocumentationEntry, Symbol
from .enum_parser import EnumBodyParser


class SymbolFrame:
    """Symbols collected for one class body or for the whole file."""

    def __init__(self) -> None:
        self._symbols: Dict[str, List[Symbol]] = {c: [] for c in CATEGORY_ORDER}

    def add(self, category: str, symbol: Symbol) -> None:
        self._symbols[category].append(symbol)

    def symbols(self, category: str) -> List[Symbol]:
        return list(self._symbols[category])

    def entries(self) -> List[DocumentationEntry]:
        """Non-empty categories in the fixed output order."""
        return [
            DocumentationEntry(category=category, symbols=list(self._symbols[category]))
            for category in CATEGORY_ORDER
            if self._symbols[category]
        ]


@dataclass
class NormalMode:
    """Top-level frame of a file."""

    frame: SymbolFrame = field(default_factory=SymbolFrame)


@dataclass
class ClassMode:
    """
    An inner class being read.

    ``body_indent`` stays ``None`` until the first non-blank body line fixes
    it.  ``text`` is the doc comment captured when the header was read.
    """

    name: str
    opening_indent: int
    base: Optional[str] = None
    text: List[str] = field(default_factory=list)
    visible: bool = True
    body_indent: Optional[int] = None
    frame: SymbolFrame = field(default_factory=SymbolFrame)


@dataclass
class EnumMode:
    """A multi-line enum body being read."""

    name: str
    body: EnumBodyParser
    text: List[str] = field(default_factory=list)
    visible: bool = True


Mode = Union[NormalMode, ClassMode, EnumMode]
