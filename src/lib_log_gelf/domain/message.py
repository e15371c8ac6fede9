"""Canonical GELF message record.

Purpose
-------
Hold one log event in GELF 1.1 shape: the fixed schema fields plus a flat map
of underscore-prefixed extra fields.

Contents
--------
* :data:`GELF_VERSION` and :data:`SCHEMA_FIELDS`.
* :func:`split_message` - short/full message rule.
* :class:`GelfMessage` dataclass.

System Role
-----------
Produced by :mod:`lib_log_gelf.application.use_cases.build_message` and
consumed by :mod:`lib_log_gelf.adapters.codec`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

GELF_VERSION = "1.1"

SCHEMA_FIELDS = ("version", "host", "short_message", "full_message", "timestamp", "level", "facility")
"""Fixed GELF field names in serialisation order."""


def split_message(body: str) -> tuple[str, str]:
    """Return ``(short, full)`` for ``body``.

    A body with a newline after its first character keeps the first line as
    the short message and the whole body as the full message. Anything else
    goes entirely into the short message.

    Examples
    --------
    >>> split_message("hello\\nworld")
    ('hello', 'hello\\nworld')
    >>> split_message("hello")
    ('hello', '')
    """
    index = body.find("\n")
    if index > 0:
        return body[:index], body
    return body, ""


@dataclass(slots=True)
class GelfMessage:
    """GELF message ready for serialisation.

    ``extra`` keys carry their leading underscore. ``raw_extra`` holds a JSON
    object text whose members are merged into the output as-is; it is only
    set when re-encoding a message received from elsewhere.
    """

    host: str
    short: str
    timestamp: float
    full: str = ""
    level: int = 0
    facility: str = ""
    version: str = GELF_VERSION
    extra: dict[str, Any] = field(default_factory=dict)
    raw_extra: str | None = None

    def schema_fields(self) -> dict[str, Any]:
        """Return the fixed-schema portion in GELF field order.

        ``full_message``, ``level`` and ``facility`` are omitted when empty.
        """

        data: dict[str, Any] = {
            "version": self.version,
            "host": self.host,
            "short_message": self.short,
        }
        if self.full:
            data["full_message"] = self.full
        data["timestamp"] = self.timestamp
        if self.level:
            data["level"] = self.level
        if self.facility:
            data["facility"] = self.facility
        return data


__all__ = ["GELF_VERSION", "GelfMessage", "SCHEMA_FIELDS", "split_message"]
