"""Synthesize the plugin-registering entry-point wrapper.

When at least one dependency registers a plugin from script code, the
application cannot be started from its own entry file: the plugins must be
registered first. :func:`create_entrypoint` writes a wrapper module to the
platform's generated directory that, for every entry point of the original
file, calls ``register_plugins()`` and then delegates to the original
function of the same name.

The generated wrapper imports the original entry file by module path when
it lives inside a package under the project (``import my_app.main as
entrypoint``), and otherwise loads it from its absolute file path.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path
from typing import Optional

from plugwire.entrypoint.analyzer import entrypoints_from_tree, future_features, parse_module
from plugwire.models import EntrypointMarker, PluginDescriptor
from plugwire.project import ProjectLayout
from plugwire.renderer import render_to_file

logger = logging.getLogger(__name__)

ENTRYPOINT_FILENAME = "main.py"
"""Name of the generated wrapper inside the generated directory."""

_SOURCE_ROOTS = ("src", "")


def create_entrypoint(
    layout: ProjectLayout,
    target_file: Path,
    script_plugins: Sequence[PluginDescriptor],
    *,
    marker: Optional[EntrypointMarker] = None,
) -> Path:
    """Write the entry-point wrapper for *target_file* and return its path.

    Generation is skipped, and *target_file* returned unchanged, when there
    are no script-capable plugins or the project has no platform subtree.
    Otherwise the wrapper is rendered to
    ``<generated directory>/main.py``, overwriting any previous version.

    Args:
        layout: The project's directory layout.
        target_file: The application's current entry file.
        script_plugins: Plugins that register themselves from script code.
        marker: Decorator convention marking extra entry points.

    Returns:
        The path the build should use as the application entry point.

    Raises:
        EntrypointParseError: If *target_file* cannot be parsed.
    """
    if not script_plugins:
        return target_file
    if not layout.platform_directory.is_dir():
        return target_file

    target_file = target_file.absolute()
    tree = parse_module(target_file)
    entrypoints = entrypoints_from_tree(tree, marker or EntrypointMarker())
    located = _locate_module(layout.project_directory, target_file)

    context = {
        "main_module": located[1] if located else None,
        "source_root_repr": repr(str(located[0])) if located else None,
        "main_path_repr": repr(str(target_file)),
        "future_features": future_features(tree),
        "entrypoints": [{"name": name} for name in entrypoints],
    }
    output_path = layout.generated_directory / ENTRYPOINT_FILENAME
    render_to_file("main.py.j2", context, output_path)
    logger.debug(
        "Wrote entrypoint %s for %s (%s)",
        output_path, target_file, ", ".join(entrypoints),
    )
    return output_path


def module_reference(project_directory: Path, target_file: Path) -> Optional[str]:
    """Return the dotted module path of *target_file*, or ``None``.

    The file is resolved against ``<project>/src`` when it lives there,
    otherwise against the project directory itself. A reference is only
    returned for code inside a package (a module in a package directory, or
    a package ``__init__.py``) whose every dotted part is a valid
    identifier. A bare top-level module such as ``main.py`` would be
    shadowed by the generated wrapper and falls back to loading by file
    path.

    Example::

        >>> module_reference(Path("/app"), Path("/app/src/my_app/main.py"))
        'my_app.main'
    """
    located = _locate_module(project_directory, target_file)
    return located[1] if located else None


def _locate_module(project_directory: Path, target_file: Path) -> Optional[tuple[Path, str]]:
    """Return ``(source root, dotted module path)`` for *target_file*."""
    if target_file.suffix != ".py":
        return None
    project_directory = project_directory.absolute()
    target_file = target_file.absolute()
    for root_name in _SOURCE_ROOTS:
        root = project_directory / root_name if root_name else project_directory
        try:
            relative = target_file.relative_to(root)
        except ValueError:
            continue
        parts = list(relative.with_suffix("").parts)
        is_package = parts[-1] == "__init__"
        if is_package:
            parts.pop()
        if not parts or not all(part.isidentifier() for part in parts):
            return None
        if len(parts) < 2 and not is_package:
            return None
        return root, ".".join(parts)
    return None
