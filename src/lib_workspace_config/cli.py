"""CLI adapter for ``lib_workspace_config`` built on ``lib_cli_exit_tools``.

Purpose
-------
Expose the configuration engine over snapshot files so fixtures can be
inspected and edited from a shell or CI job without writing Python.

Contents
--------
* :data:`CLICK_CONTEXT_SETTINGS` – shared Click settings ensuring ``-h`` works.
* :func:`cli` – root command that wires global traceback handling into
  ``lib_cli_exit_tools``.
* :func:`cli_info` – prints distribution metadata for quick diagnostics.
* :func:`cli_get` / :func:`cli_has` – read a setting from a snapshot.
* :func:`cli_update` – write a setting and emit the resulting snapshot.
* :func:`cli_inspect` – present for parity with the editor API; always fails.
* :func:`main` – entry point used by ``console_scripts`` registration.

System Role
-----------
The CLI lives in the outermost layer. It calls the composition root
(:mod:`lib_workspace_config.core`) and lets ``lib_cli_exit_tools`` turn
:class:`~lib_workspace_config.domain.errors.ConfigError` failures into exit
codes and summarised tracebacks.
"""

from __future__ import annotations

import json
import sys
from importlib import metadata
from pathlib import Path
from typing import Any, Final, Optional, Sequence

import lib_cli_exit_tools
import rich_click as click

from .application.configuration import LayeredConfiguration
from .application.snapshot import dumps
from .application.targets import TARGET_CHOICES, parse_target
from .application.view import ScopedConfigurationView
from .core import dump_configuration, load_configuration

CLICK_CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}
_TRACEBACK_SUMMARY_LIMIT: Final[int] = 500
_TRACEBACK_VERBOSE_LIMIT: Final[int] = 10_000

_SNAPSHOT_PATH = click.Path(path_type=Path, exists=True, file_okay=True, dir_okay=False, readable=True)


def _resolve_version() -> str:
    """Return the installed package version, or ``"0.0.0"`` for source checkouts."""

    try:
        return metadata.version("lib_workspace_config")
    except metadata.PackageNotFoundError:
        return "0.0.0"


@click.group(
    help="Layered workspace configuration engine",
    context_settings=CLICK_CONTEXT_SETTINGS,
    invoke_without_command=False,
)
@click.version_option(
    version=_resolve_version(),
    prog_name="lib_workspace_config",
    message="lib_workspace_config version %(version)s",
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
        meta = metadata.metadata("lib_workspace_config")
    except metadata.PackageNotFoundError:
        click.echo("lib_workspace_config (metadata unavailable)")
        return
    click.echo(f"Info for {meta.get('Name', 'lib_workspace_config')}:")
    click.echo(f"  Version         : {meta.get('Version', _resolve_version())}")
    click.echo(f"  Requires-Python : {meta.get('Requires-Python', '>=3.10')}")
    summary = meta.get("Summary")
    if summary:
        click.echo(f"  Summary         : {summary}")
    for entry in meta.get_all("Project-URL") or []:
        click.echo(f"  {entry}")


@cli.command("get", context_settings=CLICK_CONTEXT_SETTINGS)
@click.argument("section", default="")
@click.option("--snapshot", "snapshot", type=_SNAPSHOT_PATH, default=None, help="Snapshot file (.json/.toml/.yaml)")
@click.option("--prefix", default="", help="Section the view is rooted at")
@click.option("--language", "language_id", default=None, help="Language identifier bound to the view")
@click.option("--default", "default", default=None, help="JSON value printed when the section is missing")
@click.option("--indent", type=int, default=None, help="Pretty-print JSON output with the provided indent size")
def cli_get(
    section: str,
    snapshot: Optional[Path],
    prefix: str,
    language_id: Optional[str],
    default: Optional[str],
    indent: Optional[int],
) -> None:
    """Print the value at SECTION as JSON (``null`` when missing and no default)."""

    view = _view(snapshot, prefix, language_id)
    fallback = _parse_json_option(default, "--default") if default is not None else None
    click.echo(json.dumps(view.get(section, fallback), indent=indent, ensure_ascii=False))


@cli.command("has", context_settings=CLICK_CONTEXT_SETTINGS)
@click.argument("section", default="")
@click.option("--snapshot", "snapshot", type=_SNAPSHOT_PATH, default=None, help="Snapshot file (.json/.toml/.yaml)")
@click.option("--prefix", default="", help="Section the view is rooted at")
@click.option("--language", "language_id", default=None, help="Language identifier bound to the view")
def cli_has(section: str, snapshot: Optional[Path], prefix: str, language_id: Optional[str]) -> None:
    """Print ``true`` when SECTION exists in any consulted scope, else ``false``."""

    view = _view(snapshot, prefix, language_id)
    click.echo("true" if view.has(section) else "false")


@cli.command("update", context_settings=CLICK_CONTEXT_SETTINGS)
@click.argument("section")
@click.argument("value")
@click.option("--snapshot", "snapshot", type=_SNAPSHOT_PATH, default=None, help="Starting snapshot file")
@click.option("--prefix", default="", help="Section the view is rooted at")
@click.option(
    "--target",
    type=click.Choice(TARGET_CHOICES, case_sensitive=False),
    default=None,
    help="Scope to write (defaults to the workspace folder)",
)
@click.option(
    "--override-in-language/--no-override-in-language",
    default=False,
    help="Write into the language overlay selected by --language",
)
@click.option("--language", "language_id", default=None, help="Language identifier bound to the view")
@click.option("--json-value/--string-value", default=False, help="Parse VALUE as JSON instead of a plain string")
@click.option(
    "--output",
    type=click.Path(path_type=Path, file_okay=True, dir_okay=False, writable=True),
    default=None,
    help="Write the resulting snapshot here instead of printing it",
)
@click.option("--indent", type=int, default=2, show_default=True, help="JSON indent for the resulting snapshot")
def cli_update(
    section: str,
    value: str,
    snapshot: Optional[Path],
    prefix: str,
    target: Optional[str],
    override_in_language: bool,
    language_id: Optional[str],
    json_value: bool,
    output: Optional[Path],
    indent: int,
) -> None:
    """Set SECTION to VALUE and emit the resulting snapshot as JSON."""

    configuration = _configuration(snapshot)
    parsed = _parse_json_option(value, "VALUE") if json_value else value
    view = configuration.scoped(prefix, language_id)
    view.update(section, parsed, parse_target(target), override_in_language)
    if output is not None:
        click.echo(str(dump_configuration(configuration, output, indent=indent)))
        return
    click.echo(dumps(configuration, indent=indent))


@cli.command("inspect", context_settings=CLICK_CONTEXT_SETTINGS)
@click.argument("section")
@click.option("--snapshot", "snapshot", type=_SNAPSHOT_PATH, default=None, help="Snapshot file (.json/.toml/.yaml)")
def cli_inspect(section: str, snapshot: Optional[Path]) -> None:
    """Per-scope introspection; not supported, always exits with an error."""

    _configuration(snapshot).inspect(section)


def _configuration(snapshot: Optional[Path]) -> LayeredConfiguration:
    if snapshot is None:
        return LayeredConfiguration()
    return load_configuration(snapshot)


def _view(snapshot: Optional[Path], prefix: str, language_id: Optional[str]) -> ScopedConfigurationView:
    return _configuration(snapshot).scoped(prefix, language_id)


def _parse_json_option(raw: str, param_hint: str) -> Any:
    try:
        return json.loads(raw)
    except json.JSONDecodeError as exc:
        raise click.BadParameter(f"Not valid JSON: {exc}", param_hint=param_hint) from exc


def main(argv: Optional[Sequence[str]] = None, *, restore_traceback: bool = True) -> int:
    """Execute the CLI with shared exit handling and return the exit code."""

    previous_traceback = getattr(lib_cli_exit_tools.config, "traceback", False)
    previous_force_color = getattr(lib_cli_exit_tools.config, "traceback_force_color", False)
    try:
        try:
            return lib_cli_exit_tools.run_cli(
                cli,
                argv=list(argv) if argv is not None else None,
                prog_name="lib_workspace_config",
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
