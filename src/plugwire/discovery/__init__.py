"""Plugin discovery -- manifest loading and platform plugin scanning.

Typical usage::

    from plugwire.discovery import find_plugins

    plugins = find_plugins(resolver.resolve(), "tizen", script_only=True)

Sub-modules:

* :mod:`~plugwire.discovery.manifest` -- Manifest I/O with JSON/YAML
  detection, plus lookups for the ``plugin`` section and platform entries.
* :mod:`~plugwire.discovery.scanner` -- Builds validated
  :class:`~plugwire.models.PluginDescriptor` objects and checks for
  missing companion packages.
"""

from plugwire.discovery.manifest import load_manifest
from plugwire.discovery.scanner import (
    find_all_plugin_names,
    find_missing_companions,
    find_plugins,
)

__all__ = [
    "find_all_plugin_names",
    "find_missing_companions",
    "find_plugins",
    "load_manifest",
]
