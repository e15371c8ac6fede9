"""Protocols the application layer depends on."""

from __future__ import annotations

from .time import ClockPort, ProcessIdPort

__all__ = ["ClockPort", "ProcessIdPort"]
