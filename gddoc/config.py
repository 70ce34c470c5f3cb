"""
Configuration for a documentation run.

Settings come from an optional ``godotdoc_config.json`` in the input
directory, e.g.::

    {
        "backend": "markdown",
        "excluded_files": ["addons/*", "*_test.gd"],
        "show_private": false
    }

Command-line flags override values read from the file.
"""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

from .errors import ConfigError

logger = logging.getLogger(__name__)

CONFIG_FILE_NAME = "godotdoc_config.json"


@dataclass(frozen=True)
class DocConfig:
    """
    Read-only settings shared by every file of a run.

    Attributes
    ----------
    backend:
        Renderer name, see :func:`gddoc.output.backends.get_backend`.
    excluded_files:
        Tuple of glob patterns matched against paths relative to the input
        directory.
    show_private:
        Include ``_``-prefixed symbols.
    indent_unit:
        The string counted as one indentation level (a tab by default).
    extension:
        Extension of the source files to document (without the dot).
    """

    backend: str = "markdown"
    excluded_files: Tuple[str, ...] = ()
    show_private: bool = False
    indent_unit: str = "\t"
    extension: str = "gd"

    def merged(self, **overrides: Any) -> DocConfig:
        """Return a copy with every non-``None`` override applied."""
        changes = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **changes)


_EXPECTED_TYPES: Dict[str, type] = {
    "backend": str,
    "excluded_files": list,
    "show_private": bool,
    "indent_unit": str,
    "extension": str,
}


def config_from_dict(data: Dict[str, Any], source: str = "<config>") -> DocConfig:
    """Validate a decoded JSON object and build a :class:`DocConfig`."""
    if not isinstance(data, dict):
        raise ConfigError("configuration must be a JSON object", filename=source)

    known = {f.name for f in fields(DocConfig)}
    values: Dict[str, Any] = {}
    for key, value in data.items():
        if key not in known:
            raise ConfigError(f"unknown configuration key {key!r}", filename=source)
        if value is None:
            continue
        if not isinstance(value, _EXPECTED_TYPES[key]):
            raise ConfigError(
                f"{key!r} must be of type {_EXPECTED_TYPES[key].__name__}",
                filename=source,
            )
        values[key] = value

    patterns = values.get("excluded_files", ())
    if not all(isinstance(p, str) for p in patterns):
        raise ConfigError("'excluded_files' must be a list of strings", filename=source)
    if "excluded_files" in values:
        values["excluded_files"] = tuple(patterns)
    if values.get("indent_unit") == "":
        raise ConfigError("'indent_unit' must not be empty", filename=source)

    return DocConfig(**values)


def load_config(input_dir: str, config_path: Optional[str] = None) -> DocConfig:
    """
    Load the configuration for *input_dir*.

    Parameters
    ----------
    input_dir:
        Directory being documented; ``godotdoc_config.json`` is looked up here.
    config_path:
        Explicit configuration file.  Must exist when given.

    Returns
    -------
    DocConfig
        Defaults when no configuration file is present.
    """
    if config_path:
        path = Path(config_path)
        if not path.is_file():
            raise ConfigError(f"configuration file not found: {config_path}")
    else:
        path = Path(input_dir) / CONFIG_FILE_NAME
        if not path.is_file():
            logger.debug("No %s in %s, using defaults", CONFIG_FILE_NAME, input_dir)
            return DocConfig()

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        raise ConfigError(f"cannot read configuration: {exc}", filename=str(path)) from exc

    logger.info("Loaded configuration from %s", path)
    return config_from_dict(data, source=str(path))
