"""Value decoder turning generic trees into typed Python values.

Purpose
-------
Convert the untyped tree produced by the file loaders into the shape a caller
asks for. Destination types are compiled once into a closed set of shape
variants; decoding then dispatches on the shape instead of re-inspecting the
type for every value.

Contents
--------
* :data:`MISSING` – sentinel for "no current value".
* :data:`TAG_METADATA_KEY` / :func:`tagged` – per-field lookup key overrides
  for dataclass records.
* :class:`Shape` and its variants :class:`AnyShape`, :class:`ScalarShape`,
  :class:`OptionalShape`, :class:`SequenceShape`, :class:`MappingShape`,
  :class:`RecordShape`.
* :func:`compile_shape` – cached type-to-shape compiler.
* :func:`decode` – public entry point.

System Role
-----------
Pure domain logic: no I/O, no logging. Every decode builds a fresh value and
never mutates the source tree or the ``current`` value it starts from, so the
composition root can commit the result atomically.
"""

from __future__ import annotations

import dataclasses
import math
import types
import typing
from collections.abc import Mapping, MutableMapping, MutableSequence, Sequence
from functools import lru_cache
from typing import Any, Final

from .errors import InvalidArgument, TypeMismatch, UnsupportedKind
from .generic import clone, has_key, is_hashable, kind_of


class _Missing:
    """Type of :data:`MISSING`."""

    __slots__ = ()

    def __repr__(self) -> str:
        return "MISSING"


MISSING: Final = _Missing()
"""Marks the absence of a current value (distinct from ``None``)."""

TAG_METADATA_KEY: Final[str] = "config_key"
"""Dataclass field metadata entry holding an explicit lookup key."""

Location = tuple[Any, ...]


def tagged(key: Any, **kwargs: Any) -> Any:
    """Return a dataclass ``field`` whose lookup key is *key*.

    Remaining keyword arguments are passed through to :func:`dataclasses.field`;
    existing ``metadata`` is preserved. *key* must be hashable.

    Examples
    --------
    >>> from dataclasses import dataclass
    >>> @dataclass
    ... class Server:
    ...     port: int = tagged("listen_port", default=80)
    >>> decode({"listen_port": 8080}, Server)
    Server(port=8080)
    """

    if not is_hashable(key):
        raise InvalidArgument(f"Record key {key!r} is not hashable")
    metadata = dict(kwargs.pop("metadata", None) or {})
    metadata[TAG_METADATA_KEY] = key
    return dataclasses.field(metadata=metadata, **kwargs)


class Shape:
    """Compiled description of a destination type.

    Subclasses implement :meth:`zero` and :meth:`_convert`; :meth:`decode`
    applies the shared rule that a null source yields the zero value.
    """

    name: str = "value"

    def zero(self) -> Any:
        raise NotImplementedError

    def decode(self, source: Any, current: Any = MISSING, location: Location = ()) -> Any:
        if source is None:
            return self.zero()
        return self._convert(source, current, location)

    def _convert(self, source: Any, current: Any, location: Location) -> Any:
        raise NotImplementedError

    def _mismatch(self, source: Any, location: Location) -> TypeMismatch:
        return TypeMismatch(expected=self.name, actual=kind_of(source), location=location)


class AnyShape(Shape):
    """Keep the source value unchanged; null stays ``None``."""

    name = "any"

    def zero(self) -> Any:
        return None

    def decode(self, source: Any, current: Any = MISSING, location: Location = ()) -> Any:
        return clone(source)


class ScalarShape(Shape):
    """``str``, ``int``, ``float`` or ``bool``."""

    def __init__(self, kind: type) -> None:
        self.kind = kind
        self.name = kind.__name__

    def zero(self) -> Any:
        return self.kind()

    def _convert(self, source: Any, current: Any, location: Location) -> Any:
        kind = self.kind
        if kind is str:
            if isinstance(source, str):
                return source
        elif kind is bool:
            if isinstance(source, bool):
                return source
        elif isinstance(source, (int, float)) and not isinstance(source, bool):
            if kind is float:
                try:
                    return float(source)
                except OverflowError as exc:
                    raise TypeMismatch(expected="float", actual="int out of float range", location=location) from exc
            # int() truncates floats; no range checks are applied
            if isinstance(source, float) and not math.isfinite(source):
                raise TypeMismatch(expected="finite number", actual=repr(source), location=location)
            return int(source)
        raise self._mismatch(source, location)


class OptionalShape(Shape):
    """``T | None``: null decodes to ``None``, anything else into ``T``."""

    def __init__(self, inner: Shape) -> None:
        self.inner = inner
        self.name = f"optional {inner.name}"

    def zero(self) -> Any:
        return None

    def _convert(self, source: Any, current: Any, location: Location) -> Any:
        return self.inner.decode(source, current, location)


class SequenceShape(Shape):
    """Homogeneous sequence rebuilt from empty on every decode."""

    name = "sequence"

    def __init__(self, element: Shape, container: type = list) -> None:
        self.element = element
        self.container = container

    def zero(self) -> Any:
        return self.container()

    def _convert(self, source: Any, current: Any, location: Location) -> Any:
        if not isinstance(source, (list, tuple)):
            raise self._mismatch(source, location)
        items = [self.element.decode(item, MISSING, location + (index,)) for index, item in enumerate(source)]
        return items if self.container is list else self.container(items)


class MappingShape(Shape):
    """Dictionary whose keys and values are decoded independently.

    Entries are inserted into a copy of the current mapping, so decoding on top
    of a pre-populated destination keeps entries the source does not mention.
    """

    name = "mapping"

    def __init__(self, key: Shape, value: Shape) -> None:
        self.key = key
        self.value = value

    def zero(self) -> Any:
        return {}

    def _convert(self, source: Any, current: Any, location: Location) -> Any:
        if not isinstance(source, Mapping):
            raise self._mismatch(source, location)
        result: dict[Any, Any] = dict(current) if isinstance(current, Mapping) else {}
        for raw_key, raw_value in source.items():
            where = location + (raw_key,)
            key = self.key.decode(raw_key, MISSING, where)
            value = self.value.decode(raw_value, MISSING, where)
            try:
                result[key] = value
            except TypeError as exc:
                raise TypeMismatch(expected="hashable key", actual=kind_of(key), location=where) from exc
        return result


@dataclasses.dataclass(frozen=True)
class RecordField:
    """One decodable dataclass field and the source key it is read from."""

    name: str
    key: Any
    shape: Shape


class RecordShape(Shape):
    """Dataclass record filled from a mapping, field by field.

    Field shapes are compiled on first use so records may refer to themselves
    (``children: list[Node]``) or to classes defined later in their module.
    """

    def __init__(self, cls: type) -> None:
        self.cls = cls
        self.name = f"mapping for {cls.__name__}"
        self._fields: tuple[RecordField, ...] | None = None

    @property
    def fields(self) -> tuple[RecordField, ...]:
        if self._fields is None:
            self._fields = tuple(_record_fields(self.cls))
        return self._fields

    def zero(self) -> Any:
        kwargs: dict[str, Any] = {}
        by_name = {f.name: f for f in self.fields}
        for declared in dataclasses.fields(self.cls):
            if not declared.init:
                continue
            if declared.default is not dataclasses.MISSING:
                kwargs[declared.name] = declared.default
            elif declared.default_factory is not dataclasses.MISSING:
                kwargs[declared.name] = declared.default_factory()
            else:
                kwargs[declared.name] = by_name[declared.name].shape.zero()
        return self.cls(**kwargs)

    def _convert(self, source: Any, current: Any, location: Location) -> Any:
        if not isinstance(source, Mapping):
            raise self._mismatch(source, location)
        base = current if isinstance(current, self.cls) else self.zero()
        changes: dict[str, Any] = {}
        for field in self.fields:
            if not has_key(source, field.key):
                continue
            changes[field.name] = field.shape.decode(
                source[field.key], getattr(base, field.name), location + (field.key,)
            )
        return dataclasses.replace(base, **changes)


def _record_fields(cls: type) -> list[RecordField]:
    try:
        hints = typing.get_type_hints(cls)
    except (NameError, TypeError) as exc:
        raise UnsupportedKind(cls) from exc
    fields = [
        RecordField(
            name=declared.name,
            key=declared.metadata.get(TAG_METADATA_KEY, declared.name),
            shape=compile_shape(hints.get(declared.name, Any)),
        )
        for declared in dataclasses.fields(cls)
        if declared.init
    ]
    for field in fields:
        if not is_hashable(field.key):
            raise UnsupportedKind(cls, location=(field.name,))
    return fields


_SCALARS: Final = (str, int, float, bool)
_SEQUENCE_ORIGINS: Final = (list, Sequence, MutableSequence)
_MAPPING_ORIGINS: Final = (dict, Mapping, MutableMapping)


def compile_shape(target: Any) -> Shape:
    """Return the cached :class:`Shape` for destination type *target*.

    Raises
    ------
    UnsupportedKind
        When *target* (or a type nested in it) has no decoding rule.

    Examples
    --------
    >>> compile_shape(list[int]).element.name
    'int'
    >>> compile_shape(complex)
    Traceback (most recent call last):
    ...
    lib_typed_config.domain.errors.UnsupportedKind: No decoding rule for destination type <class 'complex'>
    """

    try:
        return _compile(target)
    except TypeError as exc:
        # unhashable type objects cannot be cached or dispatched on
        raise UnsupportedKind(target) from exc


@lru_cache(maxsize=None)
def _compile(target: Any) -> Shape:
    if target is Any or target is object:
        return AnyShape()
    if target in _SCALARS:
        return ScalarShape(target)
    if isinstance(target, type) and dataclasses.is_dataclass(target):
        return RecordShape(target)
    if target is list:
        return SequenceShape(AnyShape(), list)
    if target is tuple:
        return SequenceShape(AnyShape(), tuple)
    if target is dict:
        return MappingShape(AnyShape(), AnyShape())

    origin = typing.get_origin(target)
    args = typing.get_args(target)
    if origin is typing.Union or origin is types.UnionType:
        members = [arg for arg in args if arg is not type(None)]
        if len(members) == 1 and len(members) < len(args):
            return OptionalShape(compile_shape(members[0]))
    elif origin in _SEQUENCE_ORIGINS:
        return SequenceShape(compile_shape(args[0]) if args else AnyShape(), list)
    elif origin is tuple:
        if len(args) == 2 and args[1] is Ellipsis:
            return SequenceShape(compile_shape(args[0]), tuple)
    elif origin in _MAPPING_ORIGINS:
        if args:
            return MappingShape(compile_shape(args[0]), compile_shape(args[1]))
        return MappingShape(AnyShape(), AnyShape())
    raise UnsupportedKind(target)


def decode(source: Any, target: Any, *, current: Any = MISSING) -> Any:
    """Convert generic *source* into a fresh value shaped like *target*.

    Parameters
    ----------
    source:
        Generic value (null, bool, int, float, str, list, mapping).
    target:
        Destination type, e.g. ``int``, ``list[str]``, ``dict[str, Any]`` or a
        dataclass.
    current:
        Optional existing value; mappings and records start from it so entries
        and fields absent from *source* keep their values.

    Raises
    ------
    TypeMismatch
        When a source value's kind does not fit the destination shape.
    UnsupportedKind
        When *target* has no decoding rule.

    Examples
    --------
    >>> decode(None, list[str])
    []
    >>> decode({"a": 1}, dict[str, float])
    {'a': 1.0}
    >>> decode(3.9, int)
    3
    """

    return compile_shape(target).decode(source, current, ())
