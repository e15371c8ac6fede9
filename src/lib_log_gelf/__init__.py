"""Public package surface for building and encoding GELF messages.

Typical write path::

    write = LogWrite(host_name="api01", facility="shop", file=__file__, line=12,
                     payload=b"0a1|shop|cart|checkout|INFO|paid")
    data = encode_message(build_message(write))
"""

from __future__ import annotations

from .adapters import (
    GelfDecodeError,
    GelfEncodeError,
    GelfFieldTypeError,
    GelfFormatter,
    decode_message,
    encode_message,
)
from .application.use_cases import build_message, create_build_message
from .config import GelfSettings, load_settings
from .domain import (
    GELF_VERSION,
    LEGACY_LOG_FORMAT,
    LOG_FORMAT,
    GelfMessage,
    LineFormat,
    LogWrite,
    Parts,
    SyslogLevel,
    parse_line,
    render_line,
)

__all__ = [
    "GELF_VERSION",
    "GelfDecodeError",
    "GelfEncodeError",
    "GelfFieldTypeError",
    "GelfFormatter",
    "GelfMessage",
    "GelfSettings",
    "LEGACY_LOG_FORMAT",
    "LOG_FORMAT",
    "LineFormat",
    "LogWrite",
    "Parts",
    "SyslogLevel",
    "build_message",
    "create_build_message",
    "decode_message",
    "encode_message",
    "load_settings",
    "parse_line",
    "render_line",
]
