"""
DocumentParser
==============

The block/mode state machine turning logical GDScript lines into a
:class:`~gddoc.models.DocumentationTree`.

Block structure is tracked purely from indentation with an explicit stack of
frames (see :mod:`gddoc.parser.frames`):

+-----------+--------------------------------------------------------------+
| Mode      | Line handling                                                |
+===========+==============================================================+
| Normal    | Dispatch the line as-is; only unindented declarations match. |
+-----------+--------------------------------------------------------------+
| Class     | Skip blank lines.  The first body line fixes the body        |
|           | indentation (must be deeper than the header).  Lines at the  |
|           | body indentation are dispatched, deeper lines are ignored,   |
|           | shallower lines close the class and are re-evaluated against |
|           | the enclosing frame.                                         |
+-----------+--------------------------------------------------------------+
| Enum      | Parse ``name [= value]`` entries until the closing ``}``.    |
+-----------+--------------------------------------------------------------+

Before a line reaches its mode, its trailing comment is located with the
bracket/quote-aware scanner (threading the bracket stack from line to line)
and fed to the :class:`~gddoc.parser.comments.CommentTracker`.  A line that
leaves brackets open (other than an ``enum`` header) is joined with the
following lines until they close, so that multi-line signatures and literals
reach the declaration parsers in one piece.

Closed frames are folded into their parent; a finished class or enum may only
be folded into a Normal or Class frame.
"""
from __future__ import annotations

import logging
from typing import Iterable, List, Optional

from ..errors import GdDocError, IndentationExpectedError, ParserInternalError
from ..models import CLASS, ENUM, ClassPayload, DocumentationTree, EnumPayload, Symbol
from ..passes.indentation import DEFAULT_INDENT_UNIT, indentation_level
from ..passes.line_continuation import LogicalLine
from .comments import CommentTracker
from .declarations import DeclarationDispatcher, opens_enum
from .frames import ClassMode, EnumMode, Mode, NormalMode, SymbolFrame
from .scanner import find

logger = logging.getLogger(__name__)

COMMENT_CHAR = "#"


class DocumentParser:
    """
    Parses the logical lines of one source file.

    Parameters
    ----------
    filename:
        Source identifier stored in the tree and used in error messages.
    show_private:
        Include ``_``-prefixed symbols.
    indent_unit:
        String counted as one indentation level.

    A parser instance keeps per-file state while :meth:`parse` runs; use one
    instance per file when parsing files concurrently.
    """

    def __init__(
        self,
        filename: str = "<inline>",
        show_private: bool = False,
        indent_unit: str = DEFAULT_INDENT_UNIT,
    ) -> None:
        self.filename = filename
        self.show_private = show_private
        self.indent_unit = indent_unit
        self._reset()

    # ------------------------------------------------------------------
    # Public interface
    # ------------------------------------------------------------------

    def parse(self, lines: Iterable[LogicalLine]) -> DocumentationTree:
        """
        Parse *lines* and return the documentation tree.

        Raises
        ------
        GdDocError
            Any parse error; there is no partial result for a failing file.
        """
        self._reset()
        for line in lines:
            try:
                self._feed(line)
            except GdDocError as exc:
                exc.locate(self.filename, line.lineno)
                raise

        if self._pending is not None:
            pending, self._pending = self._pending, None
            logger.debug("Unclosed brackets at end of %s", self.filename)
            self._process(pending)

        return self._finish()

    # ------------------------------------------------------------------
    # Line handling
    # ------------------------------------------------------------------

    def _reset(self) -> None:
        self._comments = CommentTracker()
        self._dispatcher = DeclarationDispatcher(self._comments, self.show_private)
        self._stack: List[Mode] = [NormalMode()]
        self._brackets: List[str] = []
        self._pending: Optional[LogicalLine] = None
        self._pending_depth = 0

    def _feed(self, line: LogicalLine) -> None:
        depth_before = len(self._brackets)
        pos, self._brackets = find(
            line.text,
            COMMENT_CHAR,
            self._brackets,
            filename=self.filename,
            lineno=line.lineno,
        )
        code = line.text if pos is None else line.text[:pos]

        if self._pending is not None:
            # Continuation of an open bracket; comments in here are not docs
            part = code.strip()
            if part:
                self._pending.text = f"{self._pending.text} {part}"
            if len(self._brackets) > self._pending_depth:
                return
            joined, self._pending = self._pending, None
            self._process(joined)
            return

        if pos is not None:
            self._comments.add(line.text[pos + len(COMMENT_CHAR):])

        current = LogicalLine(lineno=line.lineno, text=code.rstrip())
        if len(self._brackets) > depth_before and not opens_enum(code):
            self._pending = current
            self._pending_depth = depth_before
            return

        self._process(current)

    def _process(self, line: LogicalLine) -> None:
        indent = indentation_level(line.text, self.indent_unit)
        try:
            self._handle(line.text, indent)
        except GdDocError as exc:
            exc.locate(self.filename, line.lineno)
            raise
        if line.text.strip():
            self._comments.reset()

    def _handle(self, text: str, indent: int) -> None:
        while True:
            mode = self._stack[-1]

            if isinstance(mode, EnumMode):
                self._enum_line(mode, text)
                return

            if isinstance(mode, NormalMode):
                self._push(self._dispatcher.dispatch(text, indent, mode.frame))
                return

            if not text.strip():
                return
            if mode.body_indent is None:
                if indent <= mode.opening_indent:
                    raise IndentationExpectedError(
                        f"indented block expected after class '{mode.name}'"
                    )
                mode.body_indent = indent

            if indent == mode.body_indent:
                self._push(self._dispatcher.dispatch(text.strip(), indent, mode.frame))
                return
            if indent > mode.body_indent:
                return

            # Dedent: close the class, then offer the line to the parent
            self._fold_class()

    def _enum_line(self, mode: EnumMode, text: str) -> None:
        if mode.body.feed(text, comment=self._comments.drain):
            self._stack.pop()
            self._fold_enum(mode)

    def _push(self, mode: Optional[Mode]) -> None:
        if mode is not None:
            self._stack.append(mode)

    # ------------------------------------------------------------------
    # Folding
    # ------------------------------------------------------------------

    def _parent_frame(self) -> SymbolFrame:
        parent = self._stack[-1] if self._stack else None
        if isinstance(parent, (NormalMode, ClassMode)):
            return parent.frame
        raise ParserInternalError(
            f"cannot attach a finished block to {type(parent).__name__}",
            filename=self.filename,
        )

    def _fold_class(self) -> None:
        mode = self._stack.pop()
        if not isinstance(mode, ClassMode):
            raise ParserInternalError(
                f"expected a class frame, found {type(mode).__name__}",
                filename=self.filename,
            )
        logger.debug("Closing class %r", mode.name)
        frame = self._parent_frame()
        if mode.visible:
            frame.add(
                CLASS,
                Symbol(
                    name=mode.name,
                    payload=ClassPayload(entries=mode.frame.entries(), base=mode.base),
                    text=mode.text,
                ),
            )

    def _fold_enum(self, mode: EnumMode) -> None:
        logger.debug("Closing enum %r", mode.name)
        frame = self._parent_frame()
        if mode.visible:
            frame.add(
                ENUM,
                Symbol(
                    name=mode.name,
                    payload=EnumPayload(values=mode.body.values),
                    text=mode.text,
                ),
            )

    def _finish(self) -> DocumentationTree:
        while len(self._stack) > 1:
            mode = self._stack[-1]
            if isinstance(mode, ClassMode):
                self._fold_class()
            elif isinstance(mode, EnumMode):
                logger.debug("Enum %r not closed at end of %s", mode.name, self.filename)
                self._stack.pop()
                self._fold_enum(mode)
            else:
                raise ParserInternalError(
                    f"unexpected {type(mode).__name__} above the file frame",
                    filename=self.filename,
                )

        root = self._stack.pop()
        if not isinstance(root, NormalMode):
            raise ParserInternalError(
                f"mode stack ended with {type(root).__name__}", filename=self.filename
            )
        return DocumentationTree(source_file=self.filename, entries=root.frame.entries())
