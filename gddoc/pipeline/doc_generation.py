"""
DocGeneration
=============

Documents a whole directory tree of GDScript sources.

Combines :class:`~gddoc.pipeline.extract_docs.ExtractDocsTask` (one tree per
file) with a renderer from :mod:`gddoc.output.backends`.  Every source file
``<input>/<dir>/<name>.gd`` is written to
``<output>/<dir>/<name>.gd.<extension>``.

Paths are matched against the configured exclusion globs relative to the
input directory, with POSIX separators (``addons/*``, ``*_test.gd``).  An
excluded directory is not descended into.
"""
from __future__ import annotations

import fnmatch
import logging
from dataclasses import dataclass
from pathlib import Path, PurePosixPath
from typing import Dict, List, Optional

from ..config import DocConfig
from ..errors import GdDocError
from ..models import DocumentationTree
from ..output.backends import Backend, get_backend
from .extract_docs import ExtractDocsTask

logger = logging.getLogger(__name__)


@dataclass
class FailedFile:
    """A source file that could not be documented (``keep_going`` mode)."""

    source_file: str
    error: str

    def to_dict(self) -> Dict[str, str]:
        return {"source_file": self.source_file, "error": self.error}

    def __str__(self) -> str:
        return f"{self.source_file}: {self.error}"


class DocGeneration:
    """
    High-level facade for documenting a directory.

    Parameters
    ----------
    config:
        Run configuration.
    backend:
        Renderer; defaults to the one named by ``config.backend``.
    keep_going:
        Log failing files and continue instead of stopping at the first one.
    """

    def __init__(
        self,
        config: Optional[DocConfig] = None,
        backend: Optional[Backend] = None,
        keep_going: bool = False,
    ) -> None:
        self.config = config if config is not None else DocConfig()
        self.backend = backend if backend is not None else get_backend(self.config.backend)
        self.keep_going = keep_going
        self._extractor = ExtractDocsTask(self.config)
        #: Populated by :meth:`generate` when ``keep_going`` is set.
        self.failures: List[FailedFile] = []

    # ------------------------------------------------------------------
    # Primary API
    # ------------------------------------------------------------------

    def generate(self, input_dir: str, output_dir: str) -> Dict[str, str]:
        """
        Document every source file below *input_dir*.

        Parameters
        ----------
        input_dir:
            Root of the project to document.
        output_dir:
            Directory receiving the rendered files.

        Returns
        -------
        Dict[str, str]
            Mapping from relative source path to the written output path.

        Raises
        ------
        GdDocError
            First unreadable or unparsable source, unless ``keep_going`` is
            set.  An output file that cannot be written always stops the run.
        """
        self.failures = []
        root = Path(input_dir)
        if not root.is_dir():
            raise GdDocError(f"input directory not found: {input_dir}")

        written: Dict[str, str] = {}
        for relative in self.collect_sources(input_dir):
            source = root / relative
            target = Path(output_dir) / relative.parent / f"{relative.name}.{self.backend.extension}"
            try:
                tree = self._extractor.parse_file(str(source), name=relative.name)
            except GdDocError as exc:
                if not self.keep_going:
                    raise
                failure = FailedFile(source_file=relative.as_posix(), error=str(exc))
                self.failures.append(failure)
                logger.warning("Skipping %s", failure)
                continue
            self._write(tree, target)
            written[relative.as_posix()] = str(target)

        if self.failures:
            logger.warning(
                "%d file%s could not be documented",
                len(self.failures),
                "" if len(self.failures) == 1 else "s",
            )
        return written

    def render(self, tree: DocumentationTree) -> str:
        return self.backend.render(tree)

    def collect_sources(self, input_dir: str) -> List[PurePosixPath]:
        """
        Return the source files below *input_dir*, relative and sorted.

        Excluded paths and files without the configured extension are
        skipped.
        """
        root = Path(input_dir)
        found: List[PurePosixPath] = []
        self._walk(root, PurePosixPath(), found)
        return found

    def is_excluded(self, relative: PurePosixPath) -> bool:
        path = relative.as_posix()
        return any(fnmatch.fnmatchcase(path, pattern) for pattern in self.config.excluded_files)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _walk(self, directory: Path, relative: PurePosixPath, found: List[PurePosixPath]) -> None:
        suffix = f".{self.config.extension}"
        try:
            entries = sorted(directory.iterdir(), key=lambda p: p.name)
        except OSError as exc:
            raise GdDocError(
                f"failed to read input directory {directory}: {exc.strerror or exc}"
            ) from exc
        for entry in entries:
            rel = relative / entry.name
            if self.is_excluded(rel):
                logger.debug("Excluded: %s", rel)
                continue
            if entry.is_dir():
                self._walk(entry, rel, found)
            elif entry.is_file() and entry.suffix == suffix:
                found.append(rel)

    def _write(self, tree: DocumentationTree, target: Path) -> None:
        text = self.render(tree)
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(text, encoding="utf-8")
        except OSError as exc:
            raise GdDocError(
                f"failed to open output file {target}: {exc.strerror or exc}"
            ) from exc
        logger.info("Wrote %s", target)
