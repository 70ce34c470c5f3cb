"""
gddoc
=====

A documentation generator for GDScript.  Extracts class, signal, function,
variable, constant, export and enum declarations together with the comments
written directly above them, and renders them as Markdown or JSON.

Quick start
-----------
>>> from gddoc import ExtractDocsTask, MarkdownBackend
>>> tree = ExtractDocsTask().parse_file("player.gd")
>>> for entry in tree.entries:
...     print(entry.title, [s.name for s in entry.symbols])
>>> print(MarkdownBackend().render(tree))
"""

from .config import DocConfig, load_config
from .errors import GdDocError
from .models import DocumentationEntry, DocumentationTree, Symbol
from .output.json_backend import JsonBackend
from .output.markdown_backend import MarkdownBackend
from .parser.document_parser import DocumentParser
from .pipeline.doc_generation import DocGeneration
from .pipeline.extract_docs import ExtractDocsTask

__version__ = "0.1.0"
__all__ = [
    "DocConfig",
    "load_config",
    "GdDocError",
    "DocumentationEntry",
    "DocumentationTree",
    "Symbol",
    "JsonBackend",
    "MarkdownBackend",
    "DocumentParser",
    "DocGeneration",
    "ExtractDocsTask",
]
