"""Domain types for GELF message construction."""

from __future__ import annotations

from .levels import SyslogLevel
from .message import GELF_VERSION, SCHEMA_FIELDS, GelfMessage, split_message
from .parts import LEGACY_LOG_FORMAT, LOG_FORMAT, LineFormat, Parts, parse_line, render_line
from .write import LogWrite

__all__ = [
    "GELF_VERSION",
    "GelfMessage",
    "LEGACY_LOG_FORMAT",
    "LOG_FORMAT",
    "LineFormat",
    "LogWrite",
    "Parts",
    "SCHEMA_FIELDS",
    "SyslogLevel",
    "parse_line",
    "render_line",
    "split_message",
]
