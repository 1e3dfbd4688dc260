"""Typed destination slots.

Purpose
-------
Give callers an assignable handle that carries both the destination type and
the current value, so :meth:`lib_typed_config.core.TypedConfig.config` can
decode "into" it the way output parameters work elsewhere.

Contents
--------
* :class:`Slot` – mutable holder with ``target`` and ``value`` attributes.
"""

from __future__ import annotations

from typing import Any, Generic, TypeVar

from .decoder import MISSING, compile_shape

T = TypeVar("T")


class Slot(Generic[T]):
    """Assignable destination for decoded configuration values.

    Why
    ----
    Python has no pointers; a slot plays that role while keeping the
    destination type available for shape compilation.

    What
    ----
    ``value`` starts as *initial* or, when omitted, the zero value of
    *target*'s shape (``""``, ``0``, ``[]``, a zero dataclass, ...). Decoding
    replaces ``value`` only after the whole conversion succeeded.

    Parameters
    ----------
    target:
        Destination type such as ``int``, ``list[str]`` or a dataclass.
    initial:
        Optional starting value; mappings and records decoded into the slot
        keep entries the source does not mention.

    Raises
    ------
    UnsupportedKind
        When *target* has no decoding rule.

    Examples
    --------
    >>> slot = Slot(list[str])
    >>> slot.value
    []
    >>> Slot(int, 7).value
    7
    """

    __slots__ = ("target", "value")

    def __init__(self, target: type[T] | Any, initial: Any = MISSING) -> None:
        self.target = target
        self.value: T = compile_shape(target).zero() if initial is MISSING else initial

    def __repr__(self) -> str:
        return f"Slot({self.target!r}, {self.value!r})"
