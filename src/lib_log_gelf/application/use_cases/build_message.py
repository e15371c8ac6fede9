"""Use case turning a :class:`LogWrite` into a :class:`GelfMessage`.

Purpose
-------
Combine the parsed log line with caller context (host, app name, environment,
source location, metadata) into one GELF record.

Contents
--------
* :class:`SystemClock` / :class:`SystemProcessId` - default port adapters.
* :func:`create_build_message` - factory freezing the clock and pid sources.
* :func:`build_message` - default builder using the system adapters.

System Role
-----------
Second stage of the write path, between :func:`lib_log_gelf.domain.parse_line`
and :func:`lib_log_gelf.adapters.codec.encode_message`. The builder never
raises for missing or malformed input; absent fields degrade to empty values.
"""

from __future__ import annotations

import os
import posixpath
import time
from collections.abc import Callable
from typing import Any

from lib_log_gelf.application.ports import ClockPort, ProcessIdPort
from lib_log_gelf.domain import GELF_VERSION, GelfMessage, LogWrite, SyslogLevel, parse_line, split_message

BuildCallable = Callable[[LogWrite], GelfMessage]

_SOURCE_SUFFIXES = (".py", ".pyw", ".go")


class SystemClock(ClockPort):
    """Wall clock with sub-second precision."""

    def now(self) -> float:
        return time.time()


class SystemProcessId(ProcessIdPort):
    """Read the current process id on every call."""

    def __call__(self) -> int:
        return os.getpid()


def _short_file_name(path: str) -> str:
    """Return the base name of ``path`` without a known source suffix.

    Examples
    --------
    >>> _short_file_name("/srv/app/handlers/orders.py")
    'orders'
    >>> _short_file_name("notes.txt")
    'notes.txt'
    """
    base = posixpath.basename(path.replace("\\", "/"))
    for suffix in _SOURCE_SUFFIXES:
        if base.endswith(suffix) and len(base) > len(suffix):
            return base[: -len(suffix)]
    return base


def create_build_message(*, clock: ClockPort, process_id: ProcessIdPort) -> BuildCallable:
    """Build the message constructor bound to ``clock`` and ``process_id``.

    Parameters
    ----------
    clock:
        Source of the ``timestamp`` field.
    process_id:
        Source of the ``_pid`` extra field, queried once per message.

    Returns
    -------
    Callable[[LogWrite], GelfMessage]
        Function producing a fresh message per call.
    """

    def build(write: LogWrite) -> GelfMessage:
        parts = parse_line(write.payload)
        body = parts.message.decode("utf-8", errors="replace")
        short, full = split_message(body)

        extra: dict[str, Any] = {
            "_app": write.app_name if write.app_name is not None else write.facility,
            "_env": write.environment if write.environment is not None else "",
            "_filename": write.file,
            "_file": _short_file_name(write.file),
            "_function": parts.function,
            "_id": parts.request_id,
            "_line": write.line,
            "_module": parts.module,
            "_pid": process_id(),
            "_pkg": parts.package,
            "_version": write.version if write.version is not None else "",
        }
        extra.update(write.meta)

        # facility is deprecated in GELF 1.1; ``_app`` carries it instead.
        return GelfMessage(
            version=GELF_VERSION,
            host=write.host_name,
            short=short,
            full=full,
            timestamp=clock.now(),
            level=int(SyslogLevel.from_token(parts.level)),
            extra=extra,
        )

    return build


def build_message(write: LogWrite) -> GelfMessage:
    """Build a message using the system clock and the current process id.

    Examples
    --------
    >>> write = LogWrite(host_name="api01", facility="shop", file="/srv/shop/cart.py", line=42,
    ...                  payload=b"0a1|shop|cart|checkout|INFO|paid\\ndetails")
    >>> message = build_message(write)
    >>> message.short, message.full, message.level, message.extra["_function"]
    ('paid', 'paid\\ndetails', 6, 'checkout')
    """
    return create_build_message(clock=SystemClock(), process_id=SystemProcessId())(write)


__all__ = ["BuildCallable", "SystemClock", "SystemProcessId", "build_message", "create_build_message"]
