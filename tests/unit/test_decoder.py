"""Unit tests for the value decoder.

Covers the per-shape decoding policy: scalars, the null-to-zero rule, ``Any``
passthrough, sequences, mappings, tagged dataclass records, and error context.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence

import pytest

from lib_typed_config.domain.decoder import (
    MISSING,
    AnyShape,
    MappingShape,
    OptionalShape,
    RecordShape,
    ScalarShape,
    SequenceShape,
    compile_shape,
    decode,
    tagged,
)
from lib_typed_config.domain.errors import InvalidArgument, TypeMismatch, UnsupportedKind


@dataclass
class Inner:
    first: int = tagged("first", default=0)
    second: float = tagged("second", default=0.0)
    third: bool = tagged("third", default=False)


@dataclass
class Outer:
    match_field_name: bool
    need_a_tag: bool = tagged("need_a_tag")
    inner: Inner = tagged("recursive", default_factory=Inner)


@dataclass
class WithDefaults:
    host: str = "localhost"
    port: int = 80
    tags: list[str] = field(default_factory=lambda: ["default"])


@dataclass(frozen=True)
class Frozen:
    name: str


@dataclass
class Node:
    name: str
    children: list[Node] = field(default_factory=list)


@dataclass
class Broken:
    callback: Callable[[], None]


@dataclass
class NumberTagged:
    value: str = tagged(1, default="")


@dataclass
class ListTagged:
    value: int = field(default=0, metadata={"config_key": ["a"]})


@pytest.mark.parametrize(
    ("source", "target", "expected"),
    [
        ("SingleString", str, "SingleString"),
        (42, int, 42),
        (3.141, float, 3.141),
        (42, float, 42.0),
        (3.9, int, 3),
        (True, bool, True),
        (False, bool, False),
    ],
)
def test_scalar_matching_kind(source: Any, target: type, expected: Any) -> None:
    result = decode(source, target)
    assert result == expected
    assert type(result) is target


@pytest.mark.parametrize(
    ("source", "target"),
    [
        ("42", int),
        ("3.1", float),
        (42, str),
        (1, bool),
        ("true", bool),
        (True, int),
        (False, float),
        ([1], int),
        ({"a": 1}, str),
    ],
)
def test_scalar_kind_mismatch(source: Any, target: type) -> None:
    with pytest.raises(TypeMismatch) as info:
        decode(source, target)
    assert info.value.expected == target.__name__
    assert info.value.location == ()


def test_non_finite_float_into_int_is_mismatch() -> None:
    with pytest.raises(TypeMismatch):
        decode(float("inf"), int)


def test_int_beyond_float_range_is_mismatch() -> None:
    with pytest.raises(TypeMismatch) as info:
        decode({"big": 10**400}, dict[str, float])
    assert info.value.expected == "float"
    assert info.value.location == ("big",)


@pytest.mark.parametrize(
    ("target", "zero"),
    [
        (str, ""),
        (int, 0),
        (float, 0.0),
        (bool, False),
        (list[str], []),
        (tuple[int, ...], ()),
        (dict[str, int], {}),
        (Optional[int], None),
        (WithDefaults, WithDefaults()),
        (Inner, Inner(first=0, second=0.0, third=False)),
    ],
)
def test_null_decodes_to_zero_value(target: Any, zero: Any) -> None:
    assert decode(None, target) == zero


def test_null_into_any_stays_none() -> None:
    assert decode(None, Any) is None
    assert decode(None, object) is None


def test_any_keeps_natural_representation_as_copy() -> None:
    source = {"a": [1, 2.5, "x", None, True]}
    result = decode(source, Any)
    assert result == source
    result["a"].append("mutated")
    assert source == {"a": [1, 2.5, "x", None, True]}


def test_sequence_preserves_order_and_decodes_elements() -> None:
    assert decode(["first", "second", "third"], list[str]) == ["first", "second", "third"]
    assert decode([1, 2.7], List[float]) == [1.0, 2.7]
    assert decode([1, 2], Sequence[int]) == [1, 2]
    assert decode([1, 2], tuple[int, ...]) == (1, 2)
    assert decode([], list[int]) == []


def test_sequence_is_rebuilt_not_appended() -> None:
    assert decode(["b"], list[str], current=["a"]) == ["b"]


def test_sequence_element_mismatch_reports_index() -> None:
    with pytest.raises(TypeMismatch) as info:
        decode(["ok", 2], list[str])
    assert info.value.location == (1,)


def test_sequence_requires_sequence_source() -> None:
    with pytest.raises(TypeMismatch):
        decode("first", list[str])
    with pytest.raises(TypeMismatch):
        decode({"a": 1}, list[Any])


def test_mapping_decodes_keys_and_values() -> None:
    source = {"first": 1, "second": 2, "third": 3}
    assert decode(source, dict[str, int]) == source
    assert decode({1: "first", 2: "second"}, Dict[int, str]) == {1: "first", 2: "second"}
    assert decode({"a": 1}, Mapping[str, float]) == {"a": 1.0}
    assert decode({"a": [1]}, dict) == {"a": [1]}


def test_mapping_merges_into_current_without_mutating_it() -> None:
    current = {"kept": 1, "first": 0}
    result = decode({"first": 1}, dict[str, int], current=current)
    assert result == {"kept": 1, "first": 1}
    assert current == {"kept": 1, "first": 0}


def test_mapping_key_conversion_failure_is_mismatch() -> None:
    with pytest.raises(TypeMismatch) as info:
        decode({"a": 1, 2: 2}, dict[str, int])
    assert info.value.location == (2,)


def test_mapping_value_mismatch_reports_key() -> None:
    with pytest.raises(TypeMismatch) as info:
        decode({"outer": {"port": "eighty"}}, dict[str, dict[str, int]])
    assert info.value.location == ("outer", "port")
    assert "<root>['outer']['port']" in str(info.value)


def test_mapping_requires_mapping_source() -> None:
    with pytest.raises(TypeMismatch):
        decode(["a"], dict[str, Any])


def test_record_uses_field_names_and_tags() -> None:
    source = {
        "match_field_name": True,
        "need_a_tag": True,
        "recursive": {"first": 1, "second": 2.0, "third": True},
        "not_a_field": "ignored",
    }
    assert decode(source, Outer) == Outer(
        match_field_name=True,
        need_a_tag=True,
        inner=Inner(first=1, second=2.0, third=True),
    )


def test_record_tagged_field_ignores_its_own_name() -> None:
    assert decode({"inner": {"first": 5}}, Outer).inner == Inner(first=0, second=0.0, third=False)


def test_record_missing_fields_keep_current_values() -> None:
    current = WithDefaults(host="example.org", port=8080)
    result = decode({"port": 9090}, WithDefaults, current=current)
    assert result == WithDefaults(host="example.org", port=9090)
    assert current.port == 8080


def test_record_missing_fields_use_defaults_without_current() -> None:
    assert decode({"port": 1}, WithDefaults) == WithDefaults(port=1)


def test_record_nested_current_is_merged() -> None:
    current = Outer(match_field_name=False, need_a_tag=False, inner=Inner(first=7, second=1.5, third=True))
    result = decode({"recursive": {"third": False}}, Outer, current=current)
    assert result.inner == Inner(first=7, second=1.5, third=False)


def test_frozen_record() -> None:
    assert decode({"name": "x"}, Frozen) == Frozen(name="x")


def test_self_referencing_record() -> None:
    tree = {"name": "root", "children": [{"name": "leaf"}]}
    assert decode(tree, Node) == Node(name="root", children=[Node(name="leaf")])


def test_record_requires_mapping_source() -> None:
    with pytest.raises(TypeMismatch) as info:
        decode([1, 2], Inner)
    assert info.value.expected == "mapping for Inner"
    assert info.value.actual == "sequence"


def test_record_field_mismatch_reports_tag() -> None:
    with pytest.raises(TypeMismatch) as info:
        decode({"recursive": {"first": "one"}}, Outer)
    assert info.value.location == ("recursive", "first")


def test_optional_decodes_inner_value() -> None:
    assert decode(3, Optional[int]) == 3
    assert decode("x", str | None) == "x"
    assert decode([None, 1], list[Optional[int]]) == [None, 1]


def test_list_of_any_keeps_nulls() -> None:
    assert decode([None, 1], list[Any]) == [None, 1]


def test_list_of_int_turns_nulls_into_zero() -> None:
    assert decode([None, 1], list[int]) == [0, 1]


@pytest.mark.parametrize("target", [complex, bytes, set[int], Callable[[], None], int | str, tuple[int, str], Broken])
def test_unsupported_destinations(target: Any) -> None:
    with pytest.raises(UnsupportedKind):
        decode({"callback": None}, target)


def test_compile_shape_variants() -> None:
    assert isinstance(compile_shape(Any), AnyShape)
    assert isinstance(compile_shape(int), ScalarShape)
    assert isinstance(compile_shape(Optional[str]), OptionalShape)
    assert isinstance(compile_shape(list[int]), SequenceShape)
    assert isinstance(compile_shape(dict[str, Any]), MappingShape)
    assert isinstance(compile_shape(Outer), RecordShape)


def test_compile_shape_is_cached() -> None:
    assert compile_shape(list[int]) is compile_shape(list[int])


def test_record_fields_expose_lookup_keys() -> None:
    shape = compile_shape(Outer)
    assert [(f.name, f.key) for f in shape.fields] == [
        ("match_field_name", "match_field_name"),
        ("need_a_tag", "need_a_tag"),
        ("inner", "recursive"),
    ]


def test_tagged_preserves_metadata() -> None:
    declared = tagged("key", default=1, metadata={"doc": "x"})
    assert declared.metadata == {"doc": "x", "config_key": "key"}


def test_missing_sentinel_repr() -> None:
    assert repr(MISSING) == "MISSING"


def test_record_tag_matches_only_same_kind_key() -> None:
    assert decode({1: "one"}, NumberTagged) == NumberTagged(value="one")
    assert decode({True: "yes"}, NumberTagged) == NumberTagged(value="")
    assert decode({1.0: "float"}, NumberTagged) == NumberTagged(value="")


def test_tagged_rejects_unhashable_key() -> None:
    with pytest.raises(InvalidArgument):
        tagged(["a"])


def test_unhashable_field_metadata_key_is_unsupported() -> None:
    with pytest.raises(UnsupportedKind) as info:
        decode({"a": 1}, ListTagged)
    assert info.value.location == ("value",)
