"""In-memory configuration source.

Satisfies :class:`lib_typed_config.application.ports.ConfigSource` for an
already parsed tree, which keeps tests and embedding applications free of
temporary files.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from ...domain.generic import clone


class MemoryConfigSource:
    """Serve a private copy of *tree*.

    Examples
    --------
    >>> MemoryConfigSource({"a": 1}).tree()
    {'a': 1}
    """

    def __init__(self, tree: Any) -> None:
        self._tree = clone(tree)

    @property
    def path(self) -> Path | None:
        return None

    def tree(self) -> Any:
        return self._tree
