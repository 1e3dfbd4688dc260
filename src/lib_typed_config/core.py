"""Composition root for ``lib_typed_config``.

Purpose
-------
Provide the entry point that orchestrates destination validation, lazy file
loading, key path resolution, and value decoding.

Contents
--------
* :class:`TypedConfig` – configuration instance bound to a candidate list.

System Role
-----------
Connects the file source adapter with the path resolver and the domain decoder
while emitting structured observability signals. Each instance is
self-contained; there is no process-wide configuration state.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from .adapters.sources.file import FileConfigSource, StrPath
from .application.ports import ConfigSource
from .application.resolve import resolve
from .domain.decoder import MISSING, decode
from .domain.destination import Slot
from .domain.errors import InvalidArgument, KeyNotFound, NotAssignable
from .domain.generic import clone
from .observability import log_debug


class TypedConfig:
    """Decode values from the first existing configuration file.

    Why
    ----
    Applications want typed values (``int``, ``list[str]``, dataclasses) out of
    a loosely typed document without repeating lookup and conversion code.

    What
    ----
    Stores the ordered candidate list; nothing is read until the first query.
    The parsed tree is cached after a successful load and never mutated.

    Parameters
    ----------
    *candidates:
        Candidate file paths in priority order.
    source:
        Alternative :class:`~lib_typed_config.application.ports.ConfigSource`;
        mutually exclusive with *candidates*.

    Examples
    --------
    >>> from tempfile import TemporaryDirectory
    >>> tmp = TemporaryDirectory()
    >>> path = Path(tmp.name) / "config.yaml"
    >>> _ = path.write_text("server:\\n  port: 8080\\n", encoding="utf-8")
    >>> cfg = TypedConfig(Path(tmp.name) / "missing.yaml", path)
    >>> port = Slot(int)
    >>> cfg.config(port, "server", "port")
    >>> port.value
    8080
    >>> cfg.get(str, "server", "host", default="localhost")
    'localhost'
    >>> tmp.cleanup()
    """

    def __init__(self, *candidates: StrPath, source: ConfigSource | None = None) -> None:
        if source is not None and candidates:
            raise InvalidArgument("Pass either candidate paths or a source, not both")
        self._source: ConfigSource = source if source is not None else FileConfigSource(candidates)

    @property
    def source_path(self) -> Path | None:
        """File the configuration was read from; ``None`` before the first load."""

        return self._source.path

    def config(self, destination: Slot[Any], *keys: Any) -> None:
        """Decode the value under *keys* into *destination*.

        Why
        ----
        Mirrors output-parameter style APIs: the caller owns the slot, the
        library fills it.

        What
        ----
        1. Validate *destination* before any file access.
        2. Load the tree on first use.
        3. Resolve *keys* (an empty path addresses the whole document).
        4. Decode into a fresh value starting from ``destination.value`` and
           assign it only once decoding fully succeeded.

        Raises
        ------
        NotAssignable
            *destination* is ``None``.
        InvalidArgument
            *destination* is not a :class:`Slot` or a key is unhashable.
        SourceUnavailable / ParseError
            The configuration file could not be located, read, or parsed.
        KeyNotFound / NotAMap
            The key path does not exist.
        TypeMismatch / UnsupportedKind
            The value cannot be converted to the slot's type.
        """

        if destination is None:
            raise NotAssignable("Destination is None, expected a Slot")
        if not isinstance(destination, Slot):
            raise InvalidArgument(f"Destination is {type(destination).__name__}, expected a Slot")
        located = resolve(self._source.tree(), keys)
        destination.value = decode(located, destination.target, current=destination.value)
        log_debug("config_decoded", keys=list(keys), target=repr(destination.target))

    def get(self, target: Any, *keys: Any, default: Any = MISSING) -> Any:
        """Return the value under *keys* decoded as *target*.

        *default* is returned only when a key along the path is missing
        (:class:`KeyNotFound`); every other error propagates.

        Examples
        --------
        >>> from lib_typed_config.adapters.sources.memory import MemoryConfigSource
        >>> cfg = TypedConfig(source=MemoryConfigSource({"ports": [80, 443]}))
        >>> cfg.get(list[int], "ports")
        [80, 443]
        """

        slot = Slot(target)
        try:
            self.config(slot, *keys)
        except KeyNotFound as exc:
            if default is MISSING:
                raise
            log_debug("config_key_missing", keys=list(keys), key=repr(exc.key))
            return default
        return slot.value

    def tree(self) -> Any:
        """Return a copy of the whole parsed document."""

        return clone(self._source.tree())
