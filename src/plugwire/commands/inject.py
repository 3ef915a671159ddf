"""Inject command -- write the plugin registrants for a project.

Runs :func:`~plugwire.injector.ensure_ready` against the project, the
step a build tool performs after resolving dependencies. The written file
paths go to stdout, one per line (or as a JSON document with ``--json``);
status and missing-companion warnings go to stderr.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

from plugwire.commands import load_project
from plugwire.exceptions import PlugwireError
from plugwire.injector import ensure_ready
from plugwire.output import OutputFormat, error, get_output, info, print_data, success


def inject_command(
    project: Path = typer.Argument(
        Path("."), help="Application project directory.", file_okay=False
    ),
    platform: Optional[str] = typer.Option(
        None, "--platform", "-p", help="Target platform (overrides plugwire.json)."
    ),
) -> None:
    """Write the plugin registrants for the target platform.

    Nothing is generated for a plugin project, a project with an
    ``example/`` app, or a project without a platform directory.

    Example::

        plugwire inject
        plugwire inject path/to/app --platform tizen
    """
    config, layout = load_project(project, platform)

    try:
        result = ensure_ready(layout, layout.resolver(), config)
    except PlugwireError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None

    if result is None:
        info(f"Nothing to inject for {layout.project_directory} ({config.platform}).")
        return

    output = get_output()
    if output.format == OutputFormat.JSON:
        output.print_json(result.model_dump(mode="json"))
    else:
        for path in result.written:
            print_data(str(path))

    count = len(set(result.script_plugins) | set(result.native_plugins))
    success(f"Registered {count} plugin(s) for {config.platform}.")
