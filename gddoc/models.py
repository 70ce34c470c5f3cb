"""
Core data models for the GDScript documentation extractor.

One parsed source file becomes a :class:`DocumentationTree`; its entries are
grouped by category and always emitted in :data:`CATEGORY_ORDER`.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union


# ---------------------------------------------------------------------------
# Categories
# ---------------------------------------------------------------------------

CLASS = "Class"
ENUM = "Enum"
SIGNAL = "Signal"
EXPORT = "Export"
CONSTANT = "Constant"
FUNCTION = "Function"
VARIABLE = "Variable"

# Output order of the category sections, independent of source order
CATEGORY_ORDER = (CLASS, ENUM, SIGNAL, EXPORT, CONSTANT, FUNCTION, VARIABLE)

CATEGORY_TITLES = {
    CLASS: "Classes",
    ENUM: "Enums",
    SIGNAL: "Signals",
    EXPORT: "Exports",
    CONSTANT: "Constants",
    FUNCTION: "Functions",
    VARIABLE: "Variables",
}


# ---------------------------------------------------------------------------
# Payloads
# ---------------------------------------------------------------------------


@dataclass
class FunctionArgument:
    """One parameter of a function or of an inherited-constructor call."""

    name: str
    value_type: Optional[str] = None
    default_value: Optional[str] = None

    def __str__(self) -> str:
        text = self.name
        if self.value_type is not None:
            text += f": {self.value_type}"
        if self.default_value is not None:
            text += f" = {self.default_value}"
        return text

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "value_type": self.value_type,
            "default_value": self.default_value,
        }


@dataclass
class FunctionPayload:
    """
    Parsed ``func`` header.

    ``super_arguments`` is ``None`` when the signature has no
    ``.(...)`` inherited-constructor group, otherwise the (possibly empty)
    list of arguments passed to the parent ``_init``.
    """

    arguments: List[FunctionArgument] = field(default_factory=list)
    super_arguments: Optional[List[FunctionArgument]] = None
    return_type: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind": "function",
            "arguments": [a.to_dict() for a in self.arguments],
            "super_arguments": (
                None
                if self.super_arguments is None
                else [a.to_dict() for a in self.super_arguments]
            ),
            "return_type": self.return_type,
        }


@dataclass
class VariablePayload:
    """Parsed ``var`` / ``const`` body."""

    value_type: Optional[str] = None
    assignment: Optional[str] = None
    setter: Optional[str] = None
    getter: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind": "variable",
            "value_type": self.value_type,
            "assignment": self.assignment,
            "setter": self.setter,
            "getter": self.getter,
        }


@dataclass
class ExportPayload:
    """Parsed ``export[(type, options...)] var`` declaration."""

    value_type: Optional[str] = None
    options: List[str] = field(default_factory=list)
    assignment: Optional[str] = None
    setter: Optional[str] = None
    getter: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind": "export",
            "value_type": self.value_type,
            "options": list(self.options),
            "assignment": self.assignment,
            "setter": self.setter,
            "getter": self.getter,
        }


@dataclass
class EnumValue:
    name: str
    value: int
    text: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "value": self.value, "text": list(self.text)}


@dataclass
class EnumPayload:
    values: List[EnumValue] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {"kind": "enum", "values": [v.to_dict() for v in self.values]}


@dataclass
class ClassPayload:
    """Body of an inner ``class``; ``base`` holds its ``extends`` clause."""

    entries: List[DocumentationEntry] = field(default_factory=list)
    base: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind": "class",
            "base": self.base,
            "entries": [e.to_dict() for e in self.entries],
        }


Payload = Union[FunctionPayload, VariablePayload, ExportPayload, EnumPayload, ClassPayload]


# ---------------------------------------------------------------------------
# Tree
# ---------------------------------------------------------------------------


@dataclass
class Symbol:
    """One documented declaration plus the comment lines preceding it."""

    name: str
    payload: Optional[Payload] = None
    text: List[str] = field(default_factory=list)

    def __repr__(self) -> str:
        kind = type(self.payload).__name__ if self.payload is not None else None
        return f"Symbol(name={self.name!r}, payload={kind}, text={len(self.text)} lines)"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "payload": self.payload.to_dict() if self.payload is not None else None,
            "text": list(self.text),
        }


@dataclass
class DocumentationEntry:
    """All symbols of one category, in source encounter order."""

    category: str
    symbols: List[Symbol] = field(default_factory=list)

    @property
    def title(self) -> str:
        return CATEGORY_TITLES[self.category]

    def __repr__(self) -> str:
        return f"DocumentationEntry(category={self.category!r}, symbols={len(self.symbols)})"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "category": self.category,
            "symbols": [s.to_dict() for s in self.symbols],
        }


@dataclass
class DocumentationTree:
    """Root of one parsed source file."""

    source_file: str
    entries: List[DocumentationEntry] = field(default_factory=list)

    def entry(self, category: str) -> Optional[DocumentationEntry]:
        """Return the entry for *category*, or ``None`` when it has no symbols."""
        for entry in self.entries:
            if entry.category == category:
                return entry
        return None

    def symbols(self, category: str) -> List[Symbol]:
        entry = self.entry(category)
        return list(entry.symbols) if entry is not None else []

    def to_dict(self) -> Dict[str, Any]:
        return {
            "source_file": self.source_file,
            "entries": [e.to_dict() for e in self.entries],
        }
