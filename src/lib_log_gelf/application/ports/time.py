"""Ports for wall-clock time and process identity."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class ClockPort(Protocol):
    """Provide the current time as fractional seconds since the epoch."""

    def now(self) -> float: ...


@runtime_checkable
class ProcessIdPort(Protocol):
    """Return the identifier of the process emitting the message."""

    def __call__(self) -> int: ...


__all__ = ["ClockPort", "ProcessIdPort"]
