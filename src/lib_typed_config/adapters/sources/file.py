"""Candidate-list file source.

Purpose
-------
Implement the :class:`lib_typed_config.application.ports.ConfigSource`
protocol: pick the first usable file from an ordered candidate list, parse it
once, and hand out the cached tree.

Contents
--------
* :func:`resolve_file` – first existing regular file among the candidates.
* :func:`load` – read and parse a single file.
* :class:`FileConfigSource` – lazily loading, caching source.

System Role
-----------
Leaf adapter under :class:`lib_typed_config.core.TypedConfig`. Only a
successful load is cached; after a failure the next call tries again, so a
configuration file that appears later is picked up.
"""

from __future__ import annotations

import os
import stat
from pathlib import Path
from typing import Any, Iterable

from ...domain.errors import NotFound, StatError
from ...observability import log_debug, log_error, log_info, make_event
from ..file_loaders.structured import loader_for

StrPath = str | os.PathLike[str]


def resolve_file(candidates: Iterable[StrPath]) -> Path:
    """Return the first candidate that exists as a regular file.

    Why
    ----
    Applications ship several well-known locations; the first present one wins
    in caller order.

    What
    ----
    Missing candidates and non-regular entries (directories, sockets, ...) are
    skipped. Any other ``os.stat`` failure (for example a permission problem on
    a parent directory, or a path with an embedded NUL byte) stops the search.

    Raises
    ------
    StatError
        A candidate could not be inspected for a reason other than absence.
    NotFound
        No candidate names an existing regular file.

    Examples
    --------
    >>> from tempfile import TemporaryDirectory
    >>> tmp = TemporaryDirectory()
    >>> target = Path(tmp.name) / "config.yaml"
    >>> _ = target.write_text("a: 1", encoding="utf-8")
    >>> resolve_file([Path(tmp.name) / "missing.yaml", tmp.name, target]) == target
    True
    >>> tmp.cleanup()
    """

    tried: list[str] = []
    for candidate in candidates:
        path = Path(candidate)
        tried.append(str(path))
        try:
            info = os.stat(path)
        except (FileNotFoundError, NotADirectoryError):
            log_debug("config_candidate_skipped", **make_event(str(path), {"reason": "missing"}))
            continue
        except (OSError, ValueError) as exc:
            log_error("config_source_error", **make_event(str(path), {"error": str(exc)}))
            raise StatError(f"Unable to stat {path}: {exc}", path=str(path)) from exc
        if not stat.S_ISREG(info.st_mode):
            log_debug("config_candidate_skipped", **make_event(str(path), {"reason": "not a regular file"}))
            continue
        log_debug("config_file_selected", **make_event(str(path)))
        return path
    raise NotFound(f"No configuration file found among: {', '.join(tried) or '<no candidates>'}")


def load(path: StrPath) -> Any:
    """Parse *path* with the loader matching its suffix."""

    return loader_for(str(path)).load(str(path))


class FileConfigSource:
    """Lazily load and cache the first usable file among *candidates*.

    Why
    ----
    Construction must not touch the filesystem; the file is read on first
    demand and reused afterwards.

    Examples
    --------
    >>> source = FileConfigSource(["/nonexistent/config.yaml"])
    >>> source.path is None
    True
    """

    def __init__(self, candidates: Iterable[StrPath]) -> None:
        self.candidates: tuple[StrPath, ...] = tuple(candidates)
        self._path: Path | None = None
        self._tree: Any = None
        self._loaded = False

    @property
    def path(self) -> Path | None:
        return self._path

    @property
    def loaded(self) -> bool:
        return self._loaded

    def tree(self) -> Any:
        """Return the parsed tree, loading it first when not yet cached.

        Raises
        ------
        SourceUnavailable
            No candidate usable or the chosen file unreadable.
        ParseError
            The chosen file is malformed.
        """

        if not self._loaded:
            path = resolve_file(self.candidates)
            tree = load(path)
            self._path, self._tree, self._loaded = path, tree, True
            log_info("config_source_loaded", **make_event(str(path)))
        return self._tree
