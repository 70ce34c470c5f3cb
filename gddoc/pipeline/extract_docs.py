"""
ExtractDocsTask
===============

Runs the GDScript source-processing pipeline for one file and returns its
:class:`~gddoc.models.DocumentationTree`.

Pipeline stages:

1. :class:`~gddoc.passes.sanitise.SanitisePass`
   – Strip line terminators, a leading BOM and trailing whitespace.
2. :class:`~gddoc.passes.line_continuation.LineContinuationPass`
   – Join ``\\`` continuation lines into logical lines.
3. :class:`~gddoc.parser.document_parser.DocumentParser`
   – Indentation-driven state machine producing the documentation tree.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Optional

from ..config import DocConfig
from ..errors import GdDocError
from ..models import DocumentationTree
from ..parser.document_parser import DocumentParser
from ..passes.line_continuation import LineContinuationPass
from ..passes.sanitise import SanitisePass

logger = logging.getLogger(__name__)


class ExtractDocsTask:
    """
    High-level entry point for parsing one source file.

    Parameters
    ----------
    config:
        Run configuration; only ``show_private`` and ``indent_unit`` are used
        here.  Defaults to :class:`~gddoc.config.DocConfig` defaults.
    """

    def __init__(self, config: Optional[DocConfig] = None) -> None:
        self.config = config if config is not None else DocConfig()

    # ------------------------------------------------------------------
    # Public interface
    # ------------------------------------------------------------------

    def parse_file(self, file_path: str, name: Optional[str] = None) -> DocumentationTree:
        """
        Parse a GDScript source **file**.

        Parameters
        ----------
        file_path:
            Path to the ``.gd`` file.
        name:
            Identifier stored in the tree; defaults to the file name.

        Returns
        -------
        DocumentationTree

        Raises
        ------
        GdDocError
            The file cannot be read, or fails to parse.
        """
        logger.info("Parsing file: %s", file_path)
        source_path = Path(file_path)
        try:
            text = source_path.read_text(encoding="utf-8", errors="replace")
        except OSError as exc:
            raise GdDocError(
                f"failed to open input file {file_path}: {exc.strerror or exc}"
            ) from exc
        return self.parse_lines(text.splitlines(), name or source_path.name)

    def parse_text(self, source: str, name: str = "<inline>") -> DocumentationTree:
        """Parse GDScript source supplied as a **string**."""
        return self.parse_lines(source.splitlines(), name)

    def parse_lines(self, lines: Iterable[str], name: str = "<inline>") -> DocumentationTree:
        """
        Parse physical source lines.

        Parameters
        ----------
        lines:
            Source lines, with or without line terminators.
        name:
            Source identifier stored in the tree and used in errors.

        Returns
        -------
        DocumentationTree
        """
        # Stage 1 – sanitise
        sanitised = SanitisePass().run(lines)

        # Stage 2 – join continuation lines
        logical = LineContinuationPass().run(sanitised, filename=name)

        # Stage 3 – state machine
        parser = DocumentParser(
            filename=name,
            show_private=self.config.show_private,
            indent_unit=self.config.indent_unit,
        )
        tree = parser.parse(logical)

        logger.debug(
            "Extracted %d categories from %s (%d logical lines)",
            len(tree.entries),
            name,
            len(logical),
        )
        return tree
