"""
Renderer registry.

A backend turns one :class:`~gddoc.models.DocumentationTree` into text and
names the extension of the files it produces.
"""
from __future__ import annotations

from typing import Dict, List, Type, Union

from ..errors import ConfigError
from .json_backend import JsonBackend
from .markdown_backend import MarkdownBackend

Backend = Union[MarkdownBackend, JsonBackend]

_BACKENDS: Dict[str, Type[Backend]] = {
    "markdown": MarkdownBackend,
    "json": JsonBackend,
}

DEFAULT_BACKEND = "markdown"


def available_backends() -> List[str]:
    return sorted(_BACKENDS)


def get_backend(name: str = DEFAULT_BACKEND) -> Backend:
    """Instantiate the backend registered as *name*."""
    try:
        return _BACKENDS[name]()
    except KeyError:
        raise ConfigError(
            f"unsupported backend {name!r} (choose from {', '.join(available_backends())})"
        ) from None
