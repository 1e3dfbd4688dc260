"""CLI adapter for ``lib_typed_config`` built on ``lib_cli_exit_tools``.

Purpose
-------
Expose typed lookups through a command line interface so operators can check
what an application will read from its configuration files without writing
Python code.

Contents
--------
* :data:`CLICK_CONTEXT_SETTINGS` – shared Click settings ensuring ``-h`` works.
* :data:`TYPE_CHOICES` – ``--type`` names mapped to destination types.
* :func:`cli` – root command that wires global traceback handling into
  ``lib_cli_exit_tools``.
* :func:`cli_info` – prints distribution metadata for quick diagnostics.
* :func:`cli_get` – decodes the value under a key path and prints it as JSON.
* :func:`main` – entry point used by ``console_scripts`` registration.

System Role
-----------
Outermost layer. It calls :class:`lib_typed_config.core.TypedConfig` and leaves
exit code mapping to ``lib_cli_exit_tools`` so every command behaves the same
across shells and CI.
"""

from __future__ import annotations

import json
import sys
from importlib import metadata
from pathlib import Path
from typing import Any, Final, Optional, Sequence

import lib_cli_exit_tools
import rich_click as click

from .core import TypedConfig
from .observability import bind_trace_id

CLICK_CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}
_TRACEBACK_SUMMARY_LIMIT: Final[int] = 500
_TRACEBACK_VERBOSE_LIMIT: Final[int] = 10_000

TYPE_CHOICES: Final[dict[str, Any]] = {
    "any": Any,
    "str": str,
    "int": int,
    "float": float,
    "bool": bool,
    "list": list,
    "dict": dict,
}


def _resolve_version() -> str:
    """Return the installed package version, ``"0.0.0"`` when not installed."""

    try:
        return metadata.version("lib_typed_config")
    except metadata.PackageNotFoundError:
        return "0.0.0"


@click.group(
    help="Typed lookups into the first existing configuration file",
    context_settings=CLICK_CONTEXT_SETTINGS,
    invoke_without_command=False,
)
@click.version_option(
    version=_resolve_version(),
    prog_name="lib_typed_config",
    message="lib_typed_config version %(version)s",
)
@click.option(
    "--traceback/--no-traceback",
    is_flag=True,
    default=False,
    help="Show full Python traceback on errors",
)
@click.pass_context
def cli(ctx: click.Context, traceback: bool) -> None:
    """Root command configuring traceback handling for all subcommands.

    Side Effects
        Mutates ``lib_cli_exit_tools.config.traceback`` and
        ``lib_cli_exit_tools.config.traceback_force_color``.
    """

    ctx.ensure_object(dict)
    ctx.obj["traceback"] = traceback
    lib_cli_exit_tools.config.traceback = traceback
    lib_cli_exit_tools.config.traceback_force_color = traceback


@cli.command("info", context_settings=CLICK_CONTEXT_SETTINGS)
def cli_info() -> None:
    """Print basic distribution metadata so users can confirm installation."""

    try:
        meta = metadata.metadata("lib_typed_config")
    except metadata.PackageNotFoundError:
        click.echo("lib_typed_config (metadata unavailable)")
        return
    click.echo(f"Info for {meta.get('Name', 'lib_typed_config')}:")
    click.echo(f"  Version         : {meta.get('Version', _resolve_version())}")
    click.echo(f"  Requires-Python : {meta.get('Requires-Python', '>=3.10')}")
    summary = meta.get("Summary")
    if summary:
        click.echo(f"  Summary         : {summary}")


@cli.command("get", context_settings=CLICK_CONTEXT_SETTINGS)
@click.option(
    "--config",
    "candidates",
    multiple=True,
    required=True,
    type=click.Path(path_type=Path, dir_okay=True, file_okay=True),
    help="Candidate configuration file; repeat in priority order, first existing file wins",
)
@click.option(
    "--type",
    "type_name",
    type=click.Choice(tuple(TYPE_CHOICES), case_sensitive=False),
    default="any",
    show_default=True,
    help="Destination type the value is decoded into",
)
@click.option(
    "--int-keys/--no-int-keys",
    default=False,
    help="Treat all-digit keys as integers (for documents with numeric keys)",
)
@click.option(
    "--indent",
    type=int,
    default=None,
    help="Pretty-print JSON output with the provided indent size",
)
@click.option("--trace-id", default=None, help="Trace identifier attached to log records")
@click.argument("keys", nargs=-1)
def cli_get(
    candidates: Sequence[Path],
    type_name: str,
    int_keys: bool,
    indent: Optional[int],
    trace_id: Optional[str],
    keys: Sequence[str],
) -> None:
    """Decode the value under KEYS and print it as JSON.

    Without KEYS the whole document is printed.
    """

    bind_trace_id(trace_id)
    config = TypedConfig(*candidates)
    value = config.get(TYPE_CHOICES[type_name.lower()], *_normalize_keys(keys, int_keys))
    click.echo(json.dumps(value, indent=indent, ensure_ascii=False, default=str))


def _normalize_keys(keys: Sequence[str], int_keys: bool) -> tuple[Any, ...]:
    """Return *keys* with all-digit entries converted to ``int`` when requested.

    Examples
    --------
    >>> _normalize_keys(["servers", "0"], True)
    ('servers', 0)
    >>> _normalize_keys(["servers", "0"], False)
    ('servers', '0')
    """

    if not int_keys:
        return tuple(keys)
    return tuple(int(key) if key.isdigit() else key for key in keys)


def main(argv: Optional[Sequence[str]] = None, *, restore_traceback: bool = True) -> int:
    """Execute the CLI with shared exit handling and return the exit code."""

    previous_traceback = getattr(lib_cli_exit_tools.config, "traceback", False)
    previous_force_color = getattr(lib_cli_exit_tools.config, "traceback_force_color", False)
    try:
        try:
            return lib_cli_exit_tools.run_cli(
                cli,
                argv=list(argv) if argv is not None else None,
                prog_name="lib_typed_config",
            )
        except BaseException as exc:  # noqa: BLE001 - funnel through shared printers
            lib_cli_exit_tools.print_exception_message(
                trace_back=lib_cli_exit_tools.config.traceback,
                length_limit=(
                    _TRACEBACK_VERBOSE_LIMIT if lib_cli_exit_tools.config.traceback else _TRACEBACK_SUMMARY_LIMIT
                ),
            )
            return lib_cli_exit_tools.get_system_exit_code(exc)
    finally:
        if restore_traceback:
            lib_cli_exit_tools.config.traceback = previous_traceback
            lib_cli_exit_tools.config.traceback_force_color = previous_force_color


if __name__ == "__main__":  # pragma: no cover - exercised via console entry point
    raise SystemExit(main(sys.argv[1:]))
