"""Click command line for inspecting the GELF message engine.

Purpose
-------
Give developers a way to see what a log line turns into, and to read GELF
payloads captured from the wire, without wiring a logger.

Contents
--------
* :func:`cli` - command group with ``info``, ``encode`` and ``decode``.
* :func:`main` - entry point running the group through ``lib_cli_exit_tools``.

System Role
-----------
Presentation layer only; every command delegates to the public API.
"""

from __future__ import annotations

from typing import Sequence

import click
import lib_cli_exit_tools
from rich.console import Console

from . import __init__conf__
from . import config as gelf_config
from .adapters.codec import GelfDecodeError, GelfFieldTypeError, decode_message, encode_message
from .application.use_cases.build_message import build_message
from .domain import LogWrite

CLICK_CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}


def _parse_meta_options(values: Sequence[str]) -> dict[str, str]:
    meta: dict[str, str] = {}
    for value in values:
        key, sep, item = value.partition("=")
        if not sep or not key:
            raise click.BadParameter(f"expected key=value, got {value!r}", param_hint="--meta")
        meta[key] = item
    return meta


@click.group(invoke_without_command=True, context_settings=CLICK_CONTEXT_SETTINGS)
@click.version_option(__init__conf__.version, "--version", "-V", prog_name=__init__conf__.shell_command)
@click.option(
    "--traceback/--no-traceback",
    default=None,
    help="Show full Python tracebacks on errors.",
)
@click.option(
    "--use-dotenv/--no-use-dotenv",
    default=None,
    help=f"Load the nearest .env before running (default: ${gelf_config.DOTENV_ENV_VAR}).",
)
@click.pass_context
def cli(ctx: click.Context, traceback: bool | None, use_dotenv: bool | None) -> None:
    """Build, encode and decode GELF messages."""

    if use_dotenv is None:
        use_dotenv = gelf_config.dotenv_requested()
    if use_dotenv:
        gelf_config.enable_dotenv()

    if traceback is not None:
        lib_cli_exit_tools.config.traceback = traceback
        lib_cli_exit_tools.config.traceback_force_color = traceback

    if ctx.invoked_subcommand is None:
        click.echo(__init__conf__.summary_info(), nl=False)


@cli.command("info", context_settings=CLICK_CONTEXT_SETTINGS)
def cli_info() -> None:
    """Print package metadata."""

    click.echo(__init__conf__.summary_info(), nl=False)


@cli.command("encode", context_settings=CLICK_CONTEXT_SETTINGS)
@click.argument("line")
@click.option("--host", "host_name", default=None, help="GELF host field (default: $GELF_HOST_NAME or hostname).")
@click.option("--facility", default=__init__conf__.shell_command, show_default=True, help="Fallback application name.")
@click.option("--file", "file_path", default="", help="Source file of the log call.")
@click.option("--line-number", type=int, default=0, show_default=True, help="Source line of the log call.")
@click.option("--app-name", default=None, help="Override for the _app field.")
@click.option("--env", "environment", default=None, help="Value for the _env field.")
@click.option("--format-version", default=None, help="Value for the _version field.")
@click.option("--meta", multiple=True, help="Extra field as key=value; repeatable.")
def cli_encode(
    line: str,
    host_name: str | None,
    facility: str,
    file_path: str,
    line_number: int,
    app_name: str | None,
    environment: str | None,
    format_version: str | None,
    meta: tuple[str, ...],
) -> None:
    """Build a GELF message from LINE and print its JSON encoding."""

    settings = gelf_config.load_settings(
        app_name=app_name,
        environment=environment,
        version=format_version,
        meta=_parse_meta_options(meta),
        host_name=host_name,
    )
    write = LogWrite(
        host_name=settings.host_name,
        facility=facility,
        file=file_path,
        line=line_number,
        payload=line.encode("utf-8"),
        app_name=settings.app_name,
        environment=settings.environment,
        version=settings.version,
        meta=settings.meta,
    )
    click.echo(encode_message(build_message(write)).decode("utf-8"))


@cli.command("decode", context_settings=CLICK_CONTEXT_SETTINGS)
@click.argument("payload", required=False)
def cli_decode(payload: str | None) -> None:
    """Decode a GELF JSON PAYLOAD (or stdin) and pretty-print it."""

    if payload is None:
        payload = click.get_text_stream("stdin").read()
    try:
        message = decode_message(payload)
    except (GelfDecodeError, GelfFieldTypeError) as exc:
        raise click.ClickException(str(exc)) from exc
    Console().print_json(encode_message(message).decode("utf-8"))


def main(argv: Sequence[str] | None = None, *, restore_traceback: bool = True) -> int:
    """Run the CLI and return its exit code.

    Traceback preferences changed by ``--traceback`` are restored afterwards
    unless ``restore_traceback`` is ``False``.
    """

    previous_traceback = getattr(lib_cli_exit_tools.config, "traceback", False)
    previous_force_color = getattr(lib_cli_exit_tools.config, "traceback_force_color", False)
    try:
        return lib_cli_exit_tools.run_cli(
            cli,
            argv=list(argv) if argv is not None else None,
            prog_name=__init__conf__.shell_command,
        )
    finally:
        if restore_traceback:
            lib_cli_exit_tools.config.traceback = previous_traceback
            lib_cli_exit_tools.config.traceback_force_color = previous_force_color


__all__ = ["cli", "main"]
