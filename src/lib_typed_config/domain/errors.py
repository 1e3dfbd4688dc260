"""Domain-level exception hierarchy.

Purpose
-------
Expose the stable error taxonomy shared by adapters, the path resolver, the
value decoder, and consuming applications. The hierarchy lives in the domain
layer so every other layer may depend on it without creating cycles.

Contents
--------
* :class:`ConfigError` – umbrella base class for all library failures.
* :class:`InvalidArgument` / :class:`NotAssignable` – the caller handed in a
  destination or key that cannot be used.
* :class:`SourceUnavailable` and its children :class:`NotFound`,
  :class:`StatError`, :class:`ReadError` – the configuration file could not be
  located or read.
* :class:`ParseError` – the document is malformed.
* :class:`LookupFailure` and its children :class:`KeyNotFound`,
  :class:`NotAMap` – key path resolution failed.
* :class:`DecodeError` and its children :class:`TypeMismatch`,
  :class:`UnsupportedKind` – the located value cannot be converted.

System Role
-----------
Callers catch :class:`ConfigError` to handle every library failure uniformly
or one of the intermediate classes for finer-grained handling. The library
never exits the process; exit decisions belong to the caller (see
:mod:`lib_typed_config.cli`).
"""

from __future__ import annotations

from typing import Any


class ConfigError(Exception):
    """Base type for all exceptions emitted by ``lib_typed_config``.

    Why
    ----
    Provide a single catch-all type for consumers that do not need fine-grained
    handling.
    """


class InvalidArgument(ConfigError, TypeError):
    """Raised when a destination or key is structurally unusable.

    Why
    ----
    Argument problems are detected before any file is touched, so callers can
    tell programming mistakes apart from environment problems.
    """


class NotAssignable(InvalidArgument):
    """Raised when the destination handle is ``None`` instead of a slot."""


class SourceUnavailable(ConfigError):
    """Umbrella for failures to locate or read the configuration file."""


class NotFound(SourceUnavailable):
    """None of the candidate paths names an existing regular file."""


class StatError(SourceUnavailable):
    """A candidate exists but ``os.stat`` failed for a reason other than absence.

    Attributes
    ----------
    path:
        Candidate that could not be inspected.
    """

    def __init__(self, message: str, *, path: str) -> None:
        super().__init__(message)
        self.path = path


class ReadError(SourceUnavailable):
    """The selected file could not be read (permissions, I/O error)."""

    def __init__(self, message: str, *, path: str) -> None:
        super().__init__(message)
        self.path = path


class ParseError(ConfigError):
    """Raised when a document cannot be parsed into a generic value tree.

    Typical Sources
    ---------------
    Structured file loaders (:mod:`yaml`, :mod:`json`, :mod:`tomllib`).
    """

    def __init__(self, message: str, *, path: str | None = None) -> None:
        super().__init__(message)
        self.path = path


class LookupFailure(ConfigError):
    """Key path resolution stopped before reaching the requested value.

    Attributes
    ----------
    key:
        Key that could not be followed.
    walked:
        Keys successfully followed before the failure.
    """

    def __init__(self, message: str, *, key: Any, walked: tuple[Any, ...]) -> None:
        super().__init__(message)
        self.key = key
        self.walked = walked


class KeyNotFound(LookupFailure):
    """The current mapping has no entry for the requested key."""


class NotAMap(LookupFailure):
    """Keys remain but the current value is not a mapping."""


class DecodeError(ConfigError):
    """Base for failures while converting a generic value into a destination.

    Attributes
    ----------
    location:
        Keys and sequence indices leading from the decoded value to the
        offending element; empty when the root itself failed.
    """

    def __init__(self, message: str, *, location: tuple[Any, ...] = ()) -> None:
        super().__init__(message)
        self.location = location


class TypeMismatch(DecodeError):
    """The source value's kind is incompatible with the destination shape."""

    def __init__(self, *, expected: str, actual: str, location: tuple[Any, ...] = ()) -> None:
        where = format_location(location)
        super().__init__(f"Expected {expected} at {where}, got {actual}", location=location)
        self.expected = expected
        self.actual = actual


class UnsupportedKind(DecodeError):
    """The destination type has no decoding rule."""

    def __init__(self, target: Any, *, location: tuple[Any, ...] = ()) -> None:
        super().__init__(f"No decoding rule for destination type {target!r}", location=location)
        self.target = target


def format_location(location: tuple[Any, ...]) -> str:
    """Render *location* the way error messages print it.

    Examples
    --------
    >>> format_location(())
    '<root>'
    >>> format_location(("servers", 0, "port"))
    "<root>['servers'][0]['port']"
    """

    return "<root>" + "".join(f"[{part!r}]" for part in location)
