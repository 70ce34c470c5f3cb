"""
JSON renderer: the documentation tree as produced by
:meth:`~gddoc.models.DocumentationTree.to_dict`.
"""
from __future__ import annotations

import json

from ..models import DocumentationTree


class JsonBackend:
    """Renders a tree as indented JSON."""

    extension = "json"

    def render(self, tree: DocumentationTree) -> str:
        return json.dumps(tree.to_dict(), indent=2) + "\n"
