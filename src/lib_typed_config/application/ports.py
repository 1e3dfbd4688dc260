"""Application-layer ports describing adapter responsibilities.

Purpose
-------
Define the structural contracts the composition root relies on so file
discovery and parsing can be swapped without touching the decoding logic.

Contents
--------
* :class:`FileLoader` – parses one document into a generic value tree.
* :class:`ConfigSource` – supplies the (cached) generic tree for a
  configuration instance.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class FileLoader(Protocol):
    """Parse a structured configuration file into a generic value tree.

    Why
    ----
    Segregate parsing concerns (YAML/JSON/TOML) from discovery and decoding.
    """

    def load(self, path: str) -> Any:
        """Read *path* and return its tree or raise ``ReadError`` / ``ParseError``."""


@runtime_checkable
class ConfigSource(Protocol):
    """Provide the generic tree backing a configuration instance.

    Why
    ----
    :class:`lib_typed_config.core.TypedConfig` only needs a tree; tests and
    embedding applications may hand in in-memory sources.
    """

    @property
    def path(self) -> Path | None:
        """File the current tree was loaded from, ``None`` if not loaded."""

    def tree(self) -> Any:
        """Return the parsed tree, loading it on first use."""
