"""Input request handed to the message builder for one log call."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping


@dataclass(slots=True, frozen=True)
class LogWrite:
    """Immutable description of a single log call.

    Attributes
    ----------
    host_name:
        Host reported in the GELF ``host`` field.
    facility:
        Application name used for ``_app`` unless ``app_name`` overrides it.
    file, line:
        Source location of the log call.
    payload:
        Formatted log line (see :data:`lib_log_gelf.domain.parts.LOG_FORMAT`).
    app_name, environment, version:
        Optional tags; ``None`` renders as the facility or an empty string.
    meta:
        Extra fields overlaid last onto the message; copied on construction.
    """

    host_name: str
    facility: str
    file: str
    line: int
    payload: bytes
    app_name: str | None = None
    environment: str | None = None
    version: str | None = None
    meta: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if isinstance(self.payload, str):
            object.__setattr__(self, "payload", self.payload.encode("utf-8"))
        object.__setattr__(self, "meta", dict(self.meta or {}))


__all__ = ["LogWrite"]
