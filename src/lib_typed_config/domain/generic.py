"""Generic value tree helpers.

Purpose
-------
Name the structurally dynamic representation produced by the file loaders and
offer the read-only helpers the rest of the package needs: describing a
value's kind for error messages and cloning a sub-tree before it is handed to
callers.

Contents
--------
* :data:`GenericValue` – type alias for parsed documents.
* :func:`kind_of` – human-readable kind name of a generic value.
* :func:`clone` – deep copy of a generic value.
* :func:`has_key` – key membership that keeps bool, int and float apart.
* :func:`is_hashable` – whether a value can serve as a mapping key.

System Role
-----------
The cached tree owned by :class:`lib_typed_config.adapters.sources.file.FileConfigSource`
is never mutated. Decoders only read it; whenever a sub-tree leaves the
package unchanged (``Any`` destinations, :meth:`TypedConfig.tree`) it is
copied with :func:`clone` first.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Union

GenericValue = Union[None, bool, int, float, str, "list[GenericValue]", "dict[GenericValue, GenericValue]"]


def kind_of(value: Any) -> str:
    """Return the kind name used in error messages for *value*.

    ``bool`` is checked before ``int`` because it is an ``int`` subclass.

    Examples
    --------
    >>> [kind_of(v) for v in (None, True, 1, 1.5, "x", [1], {"a": 1})]
    ['null', 'bool', 'int', 'float', 'str', 'sequence', 'mapping']
    """

    if value is None:
        return "null"
    if isinstance(value, bool):
        return "bool"
    if isinstance(value, int):
        return "int"
    if isinstance(value, float):
        return "float"
    if isinstance(value, str):
        return "str"
    if isinstance(value, Mapping):
        return "mapping"
    if isinstance(value, (list, tuple)):
        return "sequence"
    return type(value).__name__


def clone(value: Any) -> Any:
    """Clone nested values so callers receive a tree they may mutate.

    Examples
    --------
    >>> tree = {"nested": [1, {"a": 2}]}
    >>> copy = clone(tree)
    >>> copy["nested"][1]["a"] = 3
    >>> tree["nested"][1]["a"]
    2
    """

    if isinstance(value, Mapping):
        return {key: clone(item) for key, item in value.items()}
    if isinstance(value, list):
        return [clone(item) for item in value]
    if isinstance(value, tuple):
        return tuple(clone(item) for item in value)
    return value


def has_key(mapping: Mapping[Any, Any], key: Any) -> bool:
    """Return whether *mapping* holds *key* with the same kind.

    Python hashes ``True``, ``1`` and ``1.0`` alike, so plain ``in`` would
    match across kinds. The stored key must compare equal and share the kind
    of *key*.

    Examples
    --------
    >>> has_key({1: "one"}, 1)
    True
    >>> has_key({1: "one"}, True), has_key({1: "one"}, 1.0)
    (False, False)
    """

    if key not in mapping:
        return False
    kind = kind_of(key)
    return any(found == key and kind_of(found) == kind for found in mapping)


def is_hashable(value: Any) -> bool:
    """Return whether *value* can be used as a mapping key.

    Unlike ``isinstance(value, Hashable)`` this also rejects tuples holding
    unhashable items.

    >>> is_hashable(("a", 1)), is_hashable(("a", [1])), is_hashable(["a"])
    (True, False, False)
    """

    try:
        hash(value)
    except TypeError:
        return False
    return True
