"""Shared fixtures: a sample document covering every decoding shape."""

from __future__ import annotations

from pathlib import Path

import pytest

SAMPLE_DOCUMENT = """\
single_string: SingleString
single_int: 42
single_float: 3.141
single_bool: true
map_null:
map_string_to_int:
  first: 1
  second: 2
  third: 3
map_int_to_string:
  1: first
  2: second
  3: third
array_null:
array_string:
  - first
  - second
  - third
record:
  match_field_name: true
  need_a_tag: true
  recursive:
    first: 1
    second: 2.0
    third: true
  not_a_field: ignored
complex_type:
  map:
    first: 1
    second: 2
    third: 3
  array:
    - first
    - second
    - third
  float: 3.141
"""


@pytest.fixture()
def sample_path(tmp_path: Path) -> Path:
    """Write the sample document and return its path."""

    path = tmp_path / "config.yaml"
    path.write_text(SAMPLE_DOCUMENT, encoding="utf-8")
    return path
