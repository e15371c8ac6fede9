"""Use cases exposed by the application layer."""

from __future__ import annotations

from .build_message import SystemClock, SystemProcessId, build_message, create_build_message

__all__ = ["SystemClock", "SystemProcessId", "build_message", "create_build_message"]
