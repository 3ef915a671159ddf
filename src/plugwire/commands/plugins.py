"""Plugins commands -- inspect what discovery and analysis see.

Provides the ``plugwire plugins`` sub-command group with read-only
commands:

* ``list`` -- the plugins implemented for the target platform.
* ``entrypoints`` -- the entry-point functions of one file.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

from plugwire.commands import load_project
from plugwire.discovery import find_plugins
from plugwire.entrypoint import find_entrypoints
from plugwire.exceptions import PlugwireError
from plugwire.exit_codes import EXIT_INVALID_USAGE
from plugwire.output import OutputFormat, error, get_output, info, print_data


plugins_app = typer.Typer(no_args_is_help=True)


@plugins_app.command("list")
def list_plugins(
    project: Path = typer.Option(
        Path("."), "--project", help="Application project directory.", file_okay=False
    ),
    platform: Optional[str] = typer.Option(
        None, "--platform", "-p", help="Target platform (overrides plugwire.json)."
    ),
    native: bool = typer.Option(
        False, "--native", help="Only plugins with native code."
    ),
    script: bool = typer.Option(
        False, "--script", help="Only plugins registered from script code."
    ),
) -> None:
    """List the plugins implemented for the target platform.

    Example::

        plugwire plugins list
        plugwire --json plugins list --script
    """
    if native and script:
        error("--native and --script are mutually exclusive.")
        raise typer.Exit(code=EXIT_INVALID_USAGE)

    config, layout = load_project(project, platform)

    try:
        plugins = find_plugins(
            layout.resolver().resolve(),
            config.platform,
            native_only=native,
            script_only=script,
            manifest_name=config.manifest_name,
        )
    except PlugwireError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None

    if not plugins:
        info(f"No {config.platform} plugins found.")
        return

    headers = ["Name", "Plugin Class", "Script Plugin Class", "File"]
    rows = [
        [
            p.name,
            p.plugin_class or "-",
            p.script_plugin_class or "-",
            p.file_name or "-",
        ]
        for p in plugins
    ]
    get_output().print_table(
        headers, rows, title=f"{config.platform} plugins ({len(rows)})"
    )


@plugins_app.command("entrypoints")
def list_entrypoints(
    file: Path = typer.Argument(
        ..., help="Source file to analyse.", exists=True, dir_okay=False
    ),
    project: Path = typer.Option(
        Path("."), "--project", help="Project directory (for the marker config).",
        file_okay=False,
    ),
) -> None:
    """Print the entry-point functions of FILE, ``main`` first.

    Example::

        plugwire plugins entrypoints src/my_app/main.py
    """
    config, _ = load_project(project)

    try:
        names = find_entrypoints(file, config.entrypoint_marker)
    except PlugwireError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None

    output = get_output()
    if output.format == OutputFormat.JSON:
        output.print_json(names)
    else:
        for name in names:
            print_data(name)
