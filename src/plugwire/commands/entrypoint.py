"""Entrypoint command -- resolve the entry file a build should use.

Prints a single path to stdout: the generated wrapper when any dependency
registers a plugin from script code, or the target file unchanged.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

from plugwire.commands import load_project
from plugwire.exceptions import PlugwireError
from plugwire.injector import resolve_entrypoint
from plugwire.output import debug, error, print_data


def entrypoint_command(
    target: Path = typer.Argument(
        ..., help="The application's entry file.", exists=True, dir_okay=False
    ),
    project: Path = typer.Option(
        Path("."), "--project", help="Application project directory.", file_okay=False
    ),
    platform: Optional[str] = typer.Option(
        None, "--platform", "-p", help="Target platform (overrides plugwire.json)."
    ),
) -> None:
    """Write the entry-point wrapper and print the entry file to build.

    Example::

        plugwire entrypoint src/my_app/main.py
        plugwire entrypoint main.py --project path/to/app
    """
    config, layout = load_project(project, platform)

    try:
        entry = resolve_entrypoint(layout, layout.resolver(), config, target.absolute())
    except PlugwireError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None

    if entry == target.absolute():
        debug("No script plugins; using the entry file unchanged.")
    print_data(str(entry))
