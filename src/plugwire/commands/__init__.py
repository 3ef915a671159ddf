"""Built-in CLI sub-commands for plugwire.

This package groups all Typer sub-command modules that form the CLI's
top-level command tree:

* :mod:`~plugwire.commands.inject` -- write the plugin registrants.
* :mod:`~plugwire.commands.entrypoint` -- write the entry-point wrapper
  and print the entry file the build should use.
* :mod:`~plugwire.commands.plugins` -- list discovered plugins and the
  entry points of a file.

Each module either exports a :class:`typer.Typer` sub-application (for
multi-command groups like ``plugins``) or a plain callback function
registered directly on the root app (for single commands like
``inject``).
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

from plugwire.config import resolve_config
from plugwire.exceptions import PlugwireError
from plugwire.models import ProjectConfig
from plugwire.output import error
from plugwire.project import PlatformProject


def load_project(
    project_dir: Path,
    platform: Optional[str] = None,
) -> tuple[ProjectConfig, PlatformProject]:
    """Resolve the effective config and layout for *project_dir*.

    Raises:
        typer.Exit: With the error's exit code when ``plugwire.json`` is
            invalid.
    """
    project_dir = project_dir.absolute()
    try:
        config = resolve_config(project_dir, cli_platform=platform)
    except PlugwireError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None
    layout = PlatformProject(
        project_dir, platform=config.platform, package_config=config.package_config
    )
    return config, layout
