"""
Markdown renderer.

Layout of one rendered file::

    ## player.gd

    ### Functions:
    * move(direction: Vector2, speed = 1.0) -> void

        ```
        Moves the player.
        ```

Inner classes render their own category lists indented under the class
item.  Names, types and other free text are escaped; initialisers are shown
as inline code.
"""
from __future__ import annotations

from typing import List

from ..models import (
    ClassPayload,
    DocumentationEntry,
    DocumentationTree,
    EnumPayload,
    ExportPayload,
    FunctionArgument,
    FunctionPayload,
    Symbol,
    VariablePayload,
)

_INDENT = "    "
_LINE_BREAK = "  \n"
_ESCAPED = ("\\", "_", "#", "*", "`", "(", ")", "[", "]")


def sanitize(text: str) -> str:
    """Escape Markdown control characters in free text."""
    for ch in _ESCAPED:
        text = text.replace(ch, "\\" + ch)
    return text


def sanitize_quoted(text: str) -> str:
    """Escape the characters that break inline code spans."""
    return text.replace("*", "\\*").replace("`", "\\`")


def _join_arguments(arguments: List[FunctionArgument]) -> str:
    return ", ".join(sanitize(str(a)) for a in arguments)


class MarkdownBackend:
    """Renders a documentation tree as Markdown."""

    extension = "md"

    def render(self, tree: DocumentationTree) -> str:
        parts: List[str] = [f"## {sanitize(tree.source_file)}\n\n"]
        for entry in tree.entries:
            parts.append(f"### {entry.title}:{_LINE_BREAK}")
            for symbol in entry.symbols:
                parts.append(self._symbol(symbol, ""))
            parts.append("\n")
        return "".join(parts)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _entries(self, entries: List[DocumentationEntry], prefix: str) -> str:
        parts: List[str] = []
        for entry in entries:
            parts.append(f"{prefix}* **{entry.title}**:{_LINE_BREAK}")
            for symbol in entry.symbols:
                parts.append(self._symbol(symbol, prefix + _INDENT))
        return "".join(parts)

    def _symbol(self, symbol: Symbol, prefix: str) -> str:
        name = sanitize(symbol.name)
        payload = symbol.payload
        head = f"{prefix}* {name}"
        details: List[str] = []

        if isinstance(payload, FunctionPayload):
            head += f"({_join_arguments(payload.arguments)})"
            if payload.return_type is not None:
                head += f" -> {sanitize(payload.return_type)}"
            if payload.super_arguments is not None:
                details.append(
                    f"**Calls**: super.{name}({_join_arguments(payload.super_arguments)})"
                )

        elif isinstance(payload, (VariablePayload, ExportPayload)):
            if payload.value_type is not None:
                options = payload.options if isinstance(payload, ExportPayload) else []
                if options:
                    head += f": ({sanitize(payload.value_type)}, {sanitize(', '.join(options))})"
                else:
                    head += f": {sanitize(payload.value_type)}"
            if payload.assignment is not None:
                head += f" = `{sanitize_quoted(payload.assignment)}`"
            if payload.getter is not None:
                details.append(f"**Getter**: {sanitize(payload.getter)}")
            if payload.setter is not None:
                details.append(f"**Setter**: {sanitize(payload.setter)}")

        elif isinstance(payload, ClassPayload):
            if payload.base is not None:
                head += f" (extends {sanitize(payload.base)})"
            return (
                head
                + _LINE_BREAK
                + self._comments(symbol.text, prefix)
                + self._entries(payload.entries, prefix + _INDENT)
            )

        elif isinstance(payload, EnumPayload):
            out = [head, _LINE_BREAK, self._comments(symbol.text, prefix)]
            out.append(f"{prefix}{_INDENT}**Values**:{_LINE_BREAK}")
            for value in payload.values:
                out.append(f"{prefix}{_INDENT}* {sanitize(value.name)} = {value.value}{_LINE_BREAK}")
                out.append(self._comments(value.text, prefix + _INDENT))
            return "".join(out)

        lines = [head + _LINE_BREAK]
        lines.extend(f"{prefix}{_INDENT}{d}{_LINE_BREAK}" for d in details)
        lines.append(self._comments(symbol.text, prefix))
        return "".join(lines)

    @staticmethod
    def _comments(text: List[str], prefix: str) -> str:
        if not text:
            return ""
        indent = prefix + _INDENT
        body = "".join(f"{indent}{line}\n" for line in text)
        return f"\n{indent}```\n{body}{indent}```\n\n"
