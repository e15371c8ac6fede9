"""Static package metadata surfaced by the CLI ``info`` command."""

from __future__ import annotations

name = "lib_log_gelf"
title = "Turn pipe-delimited log lines into GELF 1.1 messages"
version = "0.1.0"
shell_command = "lib_log_gelf"


def summary_info() -> str:
    """Return the metadata banner terminated by a newline.

    Examples
    --------
    >>> summary_info().splitlines()[0]
    'Info for lib_log_gelf:'
    """

    fields = [
        ("name", name),
        ("title", title),
        ("version", version),
        ("shell_command", shell_command),
    ]
    pad = max(len(label) for label, _ in fields)
    lines = [f"Info for {name}:", ""]
    lines.extend(f"    {label.ljust(pad)} = {value}" for label, value in fields)
    return "\n".join(lines) + "\n"


__all__ = ["summary_info"]
