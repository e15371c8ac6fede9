"""Syslog severity abstraction used by GELF messages.

Purpose
-------
Translate the four-character severity tokens embedded in formatted log lines
(and stdlib :mod:`logging` levels) into the syslog numbers GELF expects.

Contents
--------
* :class:`SyslogLevel` enum with conversion helpers.
* ``_TOKEN_TABLE`` constant mapping severity tokens to levels.

System Role
-----------
Consulted by the message builder when resolving ``level`` and by the stdlib
formatter when rendering a record's token.
"""

from __future__ import annotations

import logging
from enum import IntEnum


class SyslogLevel(IntEnum):
    """Syslog severities, most severe first."""

    EMERGENCY = 0
    ALERT = 1
    CRITICAL = 2
    ERROR = 3
    WARNING = 4
    NOTICE = 5
    INFO = 6
    DEBUG = 7

    @property
    def token(self) -> str:
        """Return the four-character token written into log lines."""

        return self.name[:4]

    @classmethod
    def from_token(cls, token: str) -> "SyslogLevel":
        """Resolve a severity token; unknown tokens fall back to ``EMERGENCY``.

        Examples
        --------
        >>> SyslogLevel.from_token("WARN")
        <SyslogLevel.WARNING: 4>
        >>> SyslogLevel.from_token("????")
        <SyslogLevel.EMERGENCY: 0>
        """
        return _TOKEN_TABLE.get(token, cls.EMERGENCY)

    @classmethod
    def from_python_level(cls, level: int) -> "SyslogLevel":
        """Translate a stdlib logging level integer into :class:`SyslogLevel`."""
        if level >= logging.CRITICAL:
            return cls.CRITICAL
        if level >= logging.ERROR:
            return cls.ERROR
        if level >= logging.WARNING:
            return cls.WARNING
        if level >= logging.INFO:
            return cls.INFO
        return cls.DEBUG


_TOKEN_TABLE = {
    "DEBU": SyslogLevel.DEBUG,
    "INFO": SyslogLevel.INFO,
    "NOTI": SyslogLevel.NOTICE,
    "WARN": SyslogLevel.WARNING,
    "ERRO": SyslogLevel.ERROR,
    "CRIT": SyslogLevel.CRITICAL,
}
# EMERGENCY and ALERT are never produced from a token.


__all__ = ["SyslogLevel"]
