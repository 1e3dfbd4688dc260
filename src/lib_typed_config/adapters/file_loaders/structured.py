"""Structured configuration file loaders.

Purpose
-------
Convert on-disk documents into generic value trees (null, bool, int, float,
str, list, dict). Adapters are small wrappers around ``yaml``/``json``/
``tomllib`` so read errors, parse errors, and logging live in one place.

Contents
--------
* :class:`BaseFileLoader` – shared helper for reading files.
* :class:`YAMLFileLoader` – default loader; leaves timestamps as strings.
* :class:`JSONFileLoader` – loader for ``.json`` files.
* :class:`TOMLFileLoader` – loader for ``.toml`` files; dates become ISO strings.
* :func:`loader_for` – pick a loader from the file suffix.

System Role
-----------
Invoked by :class:`lib_typed_config.adapters.sources.file.FileConfigSource`
once the candidate file has been selected.
"""

from __future__ import annotations

import datetime as dt
import json
from pathlib import Path
from typing import Any

try:  # Python >= 3.11
    import tomllib
except ModuleNotFoundError:  # pragma: no cover - fallback for <3.11
    import tomli as tomllib  # type: ignore[no-redef]

import yaml

from ...application.ports import FileLoader
from ...domain.errors import ParseError, ReadError
from ...observability import log_debug, log_error, make_event

_TIMESTAMP_TAG = "tag:yaml.org,2002:timestamp"


class _GenericYAMLLoader(yaml.SafeLoader):
    """``SafeLoader`` that keeps timestamp-looking scalars as plain strings."""


_GenericYAMLLoader.yaml_implicit_resolvers = {
    first: [(tag, regexp) for tag, regexp in resolvers if tag != _TIMESTAMP_TAG]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}


class BaseFileLoader:
    """Common utilities shared by the structured file loaders."""

    format = "text"

    def _read(self, path: str) -> bytes:
        """Read *path* as bytes, raising :class:`ReadError` on any OS failure.

        Side Effects
        ------------
        Emits ``config_file_read`` debug events.
        """

        try:
            payload = Path(path).read_bytes()
        except OSError as exc:
            log_error("config_file_unreadable", **make_event(path, {"error": str(exc)}))
            raise ReadError(f"Unable to read configuration file {path}: {exc}", path=path) from exc
        log_debug("config_file_read", **make_event(path, {"size": len(payload)}))
        return payload

    def _invalid(self, path: str, exc: Exception) -> ParseError:
        log_error("config_file_invalid", **make_event(path, {"format": self.format, "error": str(exc)}))
        return ParseError(f"Invalid {self.format.upper()} in {path}: {exc}", path=path)

    def _loaded(self, path: str, data: Any) -> Any:
        log_debug("config_file_loaded", **make_event(path, {"format": self.format}))
        return data


class YAMLFileLoader(BaseFileLoader):
    """Load YAML documents; an empty document yields ``None``.

    Examples
    --------
    >>> from tempfile import NamedTemporaryFile
    >>> tmp = NamedTemporaryFile('w', suffix='.yaml', delete=False, encoding='utf-8')
    >>> _ = tmp.write('released: 2021-03-04')
    >>> tmp.close()
    >>> YAMLFileLoader().load(tmp.name)
    {'released': '2021-03-04'}
    >>> Path(tmp.name).unlink()
    """

    format = "yaml"

    def load(self, path: str) -> Any:
        payload = self._read(path)
        try:
            data = yaml.load(payload, Loader=_GenericYAMLLoader)  # noqa: S506 - SafeLoader subclass
        except yaml.YAMLError as exc:
            raise self._invalid(path, exc) from exc
        return self._loaded(path, data)


class JSONFileLoader(BaseFileLoader):
    """Load JSON documents."""

    format = "json"

    def load(self, path: str) -> Any:
        payload = self._read(path)
        try:
            data = json.loads(payload)
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            raise self._invalid(path, exc) from exc
        return self._loaded(path, data)


class TOMLFileLoader(BaseFileLoader):
    """Load TOML documents using the standard library parser.

    TOML date and time values are not part of the generic value model and are
    converted to ISO-8601 strings.
    """

    format = "toml"

    def load(self, path: str) -> Any:
        payload = self._read(path)
        try:
            data = tomllib.loads(payload.decode("utf-8"))
        except (tomllib.TOMLDecodeError, UnicodeDecodeError) as exc:
            raise self._invalid(path, exc) from exc
        return self._loaded(path, _stringify_temporal(data))


def _stringify_temporal(value: Any) -> Any:
    """Replace date/time objects in a parsed TOML tree with ISO strings."""

    if isinstance(value, dict):
        return {key: _stringify_temporal(item) for key, item in value.items()}
    if isinstance(value, list):
        return [_stringify_temporal(item) for item in value]
    if isinstance(value, (dt.date, dt.time)):
        return value.isoformat()
    return value


_LOADERS_BY_SUFFIX: dict[str, FileLoader] = {
    ".json": JSONFileLoader(),
    ".toml": TOMLFileLoader(),
}
_DEFAULT_LOADER: FileLoader = YAMLFileLoader()


def loader_for(path: str) -> FileLoader:
    """Return the loader matching the suffix of *path*; YAML is the default.

    Examples
    --------
    >>> type(loader_for("app.toml")).__name__
    'TOMLFileLoader'
    >>> type(loader_for("app.conf")).__name__
    'YAMLFileLoader'
    """

    return _LOADERS_BY_SUFFIX.get(Path(path).suffix.lower(), _DEFAULT_LOADER)
