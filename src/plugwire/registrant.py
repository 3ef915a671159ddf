"""Generate the three plugin registrant files from one plugin list.

Each downstream runtime gets its own registrant, written to a fixed name in
the generated directory:

* ``generated_plugin_registrant.py`` -- script-capable plugins. One
  ``import`` and one ``<Class>.register()`` call per plugin, inside
  ``register_plugins()``.
* ``generated_plugin_registrant.h`` -- native plugins. One ``#include`` and
  one ``<Class>RegisterWithRegistrar(...)`` call per plugin, inside
  ``RegisterPlugins()``.
* ``GeneratedPluginRegistrant.cs`` -- native plugins. One ``DllImport``
  binding and one registration call per plugin.

Plugins appear in every file in the order they were discovered, which keeps
diffs reproducible and native link/initialisation order deterministic.
Writes always overwrite; the three writes are independent, and a failure in
one leaves the files already written in place.
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

from plugwire.models import PluginDescriptor
from plugwire.renderer import render_to_file

SCRIPT_REGISTRANT = "generated_plugin_registrant.py"
NATIVE_REGISTRANT = "generated_plugin_registrant.h"
MANAGED_REGISTRANT = "GeneratedPluginRegistrant.cs"


def write_registrants(directory: Path, plugins: Sequence[PluginDescriptor]) -> list[Path]:
    """Write all three registrants for *plugins* into *directory*.

    The script registrant receives the script-capable plugins; the native
    and managed registrants receive the native-capable ones.

    Args:
        directory: The generated-output directory (created if missing).
        plugins: Every discovered plugin for the target platform.

    Returns:
        The written paths: script, native, managed.
    """
    script_plugins = [p for p in plugins if p.is_script()]
    native_plugins = [p for p in plugins if p.is_native()]
    return [
        write_script_registrant(directory, script_plugins),
        write_native_registrant(directory, native_plugins),
        write_managed_registrant(directory, native_plugins),
    ]


def write_script_registrant(directory: Path, plugins: Sequence[PluginDescriptor]) -> Path:
    """Write ``generated_plugin_registrant.py`` for script-capable *plugins*."""
    return render_to_file(
        "generated_plugin_registrant.py.j2",
        _context([p for p in plugins if p.is_script()]),
        directory / SCRIPT_REGISTRANT,
    )


def write_native_registrant(directory: Path, plugins: Sequence[PluginDescriptor]) -> Path:
    """Write ``generated_plugin_registrant.h`` for native *plugins*."""
    return render_to_file(
        "generated_plugin_registrant.h.j2",
        _context([p for p in plugins if p.is_native()]),
        directory / NATIVE_REGISTRANT,
    )


def write_managed_registrant(directory: Path, plugins: Sequence[PluginDescriptor]) -> Path:
    """Write ``GeneratedPluginRegistrant.cs`` for native *plugins*."""
    return render_to_file(
        "GeneratedPluginRegistrant.cs.j2",
        _context([p for p in plugins if p.is_native()]),
        directory / MANAGED_REGISTRANT,
    )


def _context(plugins: Sequence[PluginDescriptor]) -> dict[str, object]:
    return {"plugins": [plugin.to_template_context() for plugin in plugins]}
