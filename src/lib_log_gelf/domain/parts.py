"""Parser for pipe-delimited log lines.

Purpose
-------
Split the formatted payload produced by an application logger into the typed
fields the message builder needs.

Contents
--------
* :data:`LOG_FORMAT` / :data:`LEGACY_LOG_FORMAT` - producer layouts.
* :class:`LineFormat` - layout resolved from the field count.
* :class:`Parts` - parsed fields.
* :func:`parse_line` / :func:`render_line` - parse and produce lines.

System Role
-----------
First stage of the write path. Parsing is best effort: a line in an unknown
layout yields empty :class:`Parts` so a logging call never fails here.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum

logger = logging.getLogger(__name__)

DELIMITER = "|"

LOG_FORMAT = "{id:03x}|{module}|{package}|{function}|{level:.4s}|{message}"
"""Extended layout callers should log with so every field can be extracted."""

LEGACY_LOG_FORMAT = "{id:03x}|{function}|{level:.4s}|{message}"
"""Older four-field layout still accepted from producers not yet migrated."""


class LineFormat(Enum):
    """Layout of a log line, resolved once from its field count."""

    EXTENDED = 6
    LEGACY = 4
    UNKNOWN = 0

    @classmethod
    def from_field_count(cls, count: int) -> "LineFormat":
        for member in (cls.EXTENDED, cls.LEGACY):
            if member.value == count:
                return member
        return cls.UNKNOWN


@dataclass(slots=True, frozen=True)
class Parts:
    """Fields extracted from one log line.

    ``module`` and ``package`` stay empty for legacy lines; every field stays
    empty when the layout is unknown.
    """

    request_id: str = ""
    module: str = ""
    package: str = ""
    function: str = ""
    level: str = ""
    message: bytes = b""
    line_format: LineFormat = LineFormat.UNKNOWN


def parse_line(payload: bytes | str) -> Parts:
    """Parse ``payload`` into :class:`Parts`.

    The payload is split as bytes. Only the message is kept as bytes, with
    surrounding ASCII whitespace removed; the other fields are decoded as
    UTF-8.

    Examples
    --------
    >>> parts = parse_line(b"0a1|app|pkg|run|INFO| hello ")
    >>> parts.function, parts.level, parts.message
    ('run', 'INFO', b'hello')
    >>> parse_line(b"no delimiters here") == Parts()
    True
    """
    data = payload.encode("utf-8") if isinstance(payload, str) else bytes(payload)
    fields = data.split(DELIMITER.encode("ascii"))
    line_format = LineFormat.from_field_count(len(fields))

    if line_format is LineFormat.UNKNOWN:
        logger.debug("unrecognised log line layout with %d fields", len(fields))
        return Parts()

    *head, message = fields
    text = [chunk.decode("utf-8", errors="replace") for chunk in head]
    if line_format is LineFormat.EXTENDED:
        request_id, module, package, function, level = text
    else:
        request_id, function, level = text
        module = package = ""
    return Parts(
        request_id=request_id,
        module=module,
        package=package,
        function=function,
        level=level,
        message=message.strip(),
        line_format=line_format,
    )


def render_line(*, id: int, module: str, package: str, function: str, level: str, message: str) -> str:
    """Render one line in :data:`LOG_FORMAT`.

    Examples
    --------
    >>> render_line(id=10, module="app", package="pkg", function="run", level="WARNING", message="hi")
    '00a|app|pkg|run|WARN|hi'
    """
    return LOG_FORMAT.format(id=id, module=module, package=package, function=function, level=level, message=message)


__all__ = ["LEGACY_LOG_FORMAT", "LOG_FORMAT", "LineFormat", "Parts", "parse_line", "render_line"]
