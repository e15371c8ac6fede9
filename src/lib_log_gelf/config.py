"""Settings for callers that wrap the GELF message engine.

Purpose
-------
Resolve the per-application values every :class:`LogWrite` carries (app name,
environment, version tag, metadata, host name) plus the backend address a
transport would use, from keyword arguments, environment variables and an
optional ``.env`` file.

Contents
--------
* :class:`GelfSettings` - resolved settings.
* :func:`load_settings` - keyword arguments layered over ``GELF_*`` variables.
* :func:`enable_dotenv` - load the nearest ``.env`` once per process.

System Role
-----------
Consumed by the CLI and by :class:`lib_log_gelf.adapters.stdlib.GelfFormatter`.
The message engine itself takes no configuration.
"""

from __future__ import annotations

import os
import socket
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping

from dotenv import find_dotenv, load_dotenv

DOTENV_ENV_VAR = "GELF_USE_DOTENV"
"""Environment toggle asking the CLI to load ``.env`` before running."""

_TRUTHY = {"1", "true", "yes", "on"}

_DOTENV_LOADED: Path | None = None


def _default_host_name() -> str:
    hostname = socket.gethostname() or ""
    return hostname.split(".", 1)[0]


@dataclass(slots=True, frozen=True)
class GelfSettings:
    """Resolved settings applied to every log write.

    Attributes
    ----------
    address:
        ``host:port`` of the GELF input; informational for transports.
    app_name, environment, version:
        Optional tags copied onto each :class:`LogWrite`.
    meta:
        Additional fields merged into every message.
    host_name:
        Value for the GELF ``host`` field.
    """

    address: str = ""
    app_name: str | None = None
    environment: str | None = None
    version: str | None = None
    meta: Mapping[str, str] = field(default_factory=dict)
    host_name: str = field(default_factory=_default_host_name)

    def __post_init__(self) -> None:
        object.__setattr__(self, "meta", dict(self.meta))


def parse_meta(raw: str | None) -> dict[str, str]:
    """Parse ``key=value`` pairs separated by commas.

    Examples
    --------
    >>> parse_meta("_team=core, _region=eu")
    {'_team': 'core', '_region': 'eu'}
    >>> parse_meta(None)
    {}
    """
    if not raw:
        return {}
    result: dict[str, str] = {}
    for chunk in raw.split(","):
        if not chunk.strip():
            continue
        if "=" not in chunk:
            raise ValueError(f"GELF_META entries must look like key=value: {chunk.strip()!r}")
        key, value = chunk.split("=", 1)
        result[key.strip()] = value.strip()
    return result


def load_settings(
    *,
    address: str | None = None,
    app_name: str | None = None,
    environment: str | None = None,
    version: str | None = None,
    meta: Mapping[str, str] | None = None,
    host_name: str | None = None,
) -> GelfSettings:
    """Return settings with explicit arguments taking precedence over ``GELF_*`` variables.

    ``meta`` from the argument is merged over ``GELF_META`` rather than
    replacing it.
    """

    merged_meta = parse_meta(os.getenv("GELF_META"))
    if meta:
        merged_meta.update(meta)
    return GelfSettings(
        address=address if address is not None else os.getenv("GELF_ADDRESS", ""),
        app_name=app_name if app_name is not None else os.getenv("GELF_APP_NAME"),
        environment=environment if environment is not None else os.getenv("GELF_ENVIRONMENT"),
        version=version if version is not None else os.getenv("GELF_VERSION"),
        meta=merged_meta,
        host_name=host_name or os.getenv("GELF_HOST_NAME") or _default_host_name(),
    )


def dotenv_requested() -> bool:
    """Return ``True`` when :data:`DOTENV_ENV_VAR` holds a truthy value."""
    return os.getenv(DOTENV_ENV_VAR, "").strip().lower() in _TRUTHY


def enable_dotenv() -> Path | None:
    """Load the nearest ``.env`` upwards from the working directory.

    Existing environment variables keep precedence. Returns the loaded path,
    or ``None`` when no file was found.
    """

    global _DOTENV_LOADED
    if _DOTENV_LOADED is not None:
        return _DOTENV_LOADED
    found = find_dotenv(usecwd=True)
    if not found:
        return None
    path = Path(found).resolve()
    load_dotenv(path, override=False)
    _DOTENV_LOADED = path
    return path


def _reset_dotenv_state_for_testing() -> None:
    global _DOTENV_LOADED
    _DOTENV_LOADED = None


__all__ = [
    "DOTENV_ENV_VAR",
    "GelfSettings",
    "dotenv_requested",
    "enable_dotenv",
    "load_settings",
    "parse_meta",
]
