"""Public package surface for ``lib_typed_config``.

Load the first existing configuration file from a candidate list and decode
values found under a key path into typed destinations::

    cfg = TypedConfig("./app.yaml", "/etc/app/config.yaml")
    port = Slot(int)
    cfg.config(port, "server", "port")
"""

from __future__ import annotations

from .application.resolve import resolve
from .core import TypedConfig
from .domain.decoder import MISSING, TAG_METADATA_KEY, compile_shape, decode, tagged
from .domain.destination import Slot
from .domain.errors import (
    ConfigError,
    DecodeError,
    InvalidArgument,
    KeyNotFound,
    LookupFailure,
    NotAMap,
    NotAssignable,
    NotFound,
    ParseError,
    ReadError,
    SourceUnavailable,
    StatError,
    TypeMismatch,
    UnsupportedKind,
)
from .observability import bind_trace_id, get_logger

__all__ = [
    "ConfigError",
    "DecodeError",
    "InvalidArgument",
    "KeyNotFound",
    "LookupFailure",
    "MISSING",
    "NotAMap",
    "NotAssignable",
    "NotFound",
    "ParseError",
    "ReadError",
    "Slot",
    "SourceUnavailable",
    "StatError",
    "TAG_METADATA_KEY",
    "TypeMismatch",
    "TypedConfig",
    "UnsupportedKind",
    "bind_trace_id",
    "compile_shape",
    "decode",
    "get_logger",
    "resolve",
    "tagged",
]
