"""Bridge from stdlib :mod:`logging` records to GELF JSON.

Purpose
-------
Let applications using :mod:`logging` produce GELF messages without writing
pipe-delimited lines themselves.

Contents
--------
* :class:`GelfFormatter` - :class:`logging.Formatter` returning GELF JSON text.

System Role
-----------
Caller of the message engine: renders a record through
:data:`lib_log_gelf.domain.LOG_FORMAT`, wraps it in a :class:`LogWrite`, then
builds and encodes it. Attaching the formatter to a handler, and shipping its
output, stays with the host application.
"""

from __future__ import annotations

import itertools
import logging
import sys
from collections.abc import Mapping
from pathlib import Path

from lib_log_gelf.adapters.codec import encode_message
from lib_log_gelf.application.use_cases.build_message import BuildCallable, build_message
from lib_log_gelf.config import GelfSettings
from lib_log_gelf.domain import LogWrite, SyslogLevel, render_line
from lib_log_gelf.domain.parts import DELIMITER

GELF_RECORD_ATTR = "gelf"
"""Record attribute (``extra={"gelf": {...}}``) carrying per-call fields."""


def _default_facility() -> str:
    return Path(sys.argv[0]).stem if sys.argv and sys.argv[0] else "python"


def _escape_delimiter(value: str) -> str:
    # a literal delimiter would change the field count
    return value.replace(DELIMITER, "\u00a6")


class GelfFormatter(logging.Formatter):
    """Format log records as GELF JSON strings.

    Parameters
    ----------
    settings:
        Application tags and metadata; defaults to an empty :class:`GelfSettings`.
    facility:
        Fallback for ``_app`` when ``settings.app_name`` is unset; defaults to
        the executable name.
    builder:
        Message builder, replaceable for deterministic tests.

    Examples
    --------
    >>> import json
    >>> record = logging.makeLogRecord({"name": "shop", "levelno": logging.WARNING, "msg": "low stock",
    ...                                 "pathname": "/srv/shop/stock.py", "lineno": 7, "funcName": "reserve"})
    >>> formatter = GelfFormatter(GelfSettings(host_name="api01"), facility="shop")
    >>> payload = json.loads(formatter.format(record))
    >>> payload["short_message"], payload["level"], payload["_file"]
    ('low stock', 4, 'stock')
    """

    def __init__(
        self,
        settings: GelfSettings | None = None,
        *,
        facility: str | None = None,
        builder: BuildCallable | None = None,
    ) -> None:
        super().__init__()
        self._settings = settings or GelfSettings()
        self._facility = facility or _default_facility()
        self._build = builder or build_message
        self._sequence = itertools.count(1)

    def format(self, record: logging.LogRecord) -> str:
        message = record.getMessage()
        if record.exc_info:
            record.exc_text = record.exc_text or self.formatException(record.exc_info)
        if record.exc_text:
            message = f"{message}\n{record.exc_text}"
        if record.stack_info:
            message = f"{message}\n{self.formatStack(record.stack_info)}"

        line = render_line(
            id=next(self._sequence),
            module=_escape_delimiter(record.name),
            package=_escape_delimiter(record.module),
            function=_escape_delimiter(record.funcName or ""),
            level=SyslogLevel.from_python_level(record.levelno).token,
            message=_escape_delimiter(message),
        )
        write = LogWrite(
            host_name=self._settings.host_name,
            facility=self._facility,
            file=record.pathname,
            line=record.lineno,
            payload=line.encode("utf-8"),
            app_name=self._settings.app_name,
            environment=self._settings.environment,
            version=self._settings.version,
            meta=self._record_meta(record),
        )
        return encode_message(self._build(write)).decode("utf-8")

    def _record_meta(self, record: logging.LogRecord) -> dict[str, str]:
        meta = dict(self._settings.meta)
        fields = getattr(record, GELF_RECORD_ATTR, None)
        if isinstance(fields, Mapping):
            meta.update(fields)
        return meta


__all__ = ["GELF_RECORD_ATTR", "GelfFormatter"]
