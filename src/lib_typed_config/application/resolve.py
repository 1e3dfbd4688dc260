"""Key path resolution over generic value trees.

Purpose
-------
Walk an ordered list of keys through nested mappings to locate the sub-tree a
caller wants decoded. Remains free of I/O so it works on any generic tree,
whatever loader produced it.

Contents
    - ``resolve``: public entry point.
    - ``_ensure_hashable``: argument check run before the walk starts.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Sequence

from ..domain.errors import InvalidArgument, KeyNotFound, NotAMap, format_location
from ..domain.generic import has_key, is_hashable, kind_of


def resolve(tree: Any, keys: Sequence[Any]) -> Any:
    """Return the value found under *keys* in *tree*.

    Why
    ----
    Callers address nested configuration by key path; failing fast with the
    offending key keeps diagnostics precise.

    What
    ----
    Starting from *tree*, requires a mapping at every step and looks the next
    key up by equality within the same kind (``True``, ``1`` and ``1.0`` are
    distinct keys). An empty key list returns *tree* itself. The
    tree is only read, never modified.

    Raises
    ------
    InvalidArgument
        A key is unhashable.
    NotAMap
        Keys remain but the current value is not a mapping.
    KeyNotFound
        The current mapping has no entry for the key.

    Examples
    --------
    >>> resolve({"db": {"port": 5432}}, ["db", "port"])
    5432
    >>> resolve({"db": 1}, [])
    {'db': 1}
    >>> resolve({"db": 1}, ["db", "port"])
    Traceback (most recent call last):
    ...
    lib_typed_config.domain.errors.NotAMap: Cannot look up 'port' at <root>['db']: value is int, not a mapping
    """

    _ensure_hashable(keys)
    current = tree
    walked: tuple[Any, ...] = ()
    for key in keys:
        if not isinstance(current, Mapping):
            raise NotAMap(
                f"Cannot look up {key!r} at {format_location(walked)}: value is {kind_of(current)}, not a mapping",
                key=key,
                walked=walked,
            )
        if not has_key(current, key):
            raise KeyNotFound(f"Key {key!r} not found at {format_location(walked)}", key=key, walked=walked)
        current = current[key]
        walked += (key,)
    return current


def _ensure_hashable(keys: Sequence[Any]) -> None:
    for key in keys:
        if not is_hashable(key):
            raise InvalidArgument(f"Lookup key {key!r} is not hashable")
