"""Load package manifests and look up their plugin declarations.

Every resolved package may ship a manifest at its root (``plugwire.yaml`` by
default). A package that implements a plugin for one or more platforms
declares it under a ``plugin`` section::

    name: foo
    plugin:
      platforms:
        tizen:
          pluginClass: FooPlugin
          fileName: foo_plugin.h
        other:
          pythonPluginClass: FooOtherPlugin

Manifests are parsed as JSON or YAML with automatic format detection.
Parsing never executes anything: YAML goes through :func:`yaml.safe_load`.

The public functions are:

* :func:`load_manifest` -- Read and parse a manifest file.
* :func:`plugin_section` -- Return the ``plugin`` section, if any.
* :func:`platform_entry` -- Return ``plugin.platforms.<platform>``, if any.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Optional

import yaml

from plugwire.exceptions import ManifestError


def load_manifest(path: Path) -> dict[str, Any]:
    """Load a package manifest from a local file.

    Supports .json, .yaml, and .yml extensions. Falls back to content-based
    detection if the extension is not recognized.

    Args:
        path: Path to the manifest file.

    Returns:
        The parsed manifest as a dictionary.

    Raises:
        ManifestError: If the file cannot be read, is empty, or does not
            contain a JSON/YAML mapping.
    """
    try:
        content = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ManifestError(f"Failed to read manifest {path}: {exc}") from exc

    if not content.strip():
        raise ManifestError(f"Manifest is empty: {path}")

    suffix = path.suffix.lower()
    hint = ""
    if suffix == ".json":
        hint = "json"
    elif suffix in (".yaml", ".yml"):
        hint = "yaml"

    return _parse_content(content, hint=hint)


def _parse_content(content: str, hint: str = "") -> dict[str, Any]:
    """Parse content as JSON or YAML.

    Tries JSON first (unless hint is 'yaml'), then falls back to YAML.

    Args:
        content: The raw string content.
        hint: Optional format hint ('json' or 'yaml').

    Returns:
        The parsed dictionary.

    Raises:
        ManifestError: If the content cannot be parsed as either format,
            or parses to something other than a mapping.
    """
    json_error: Exception | None = None

    if hint != "yaml":
        try:
            result = json.loads(content)
        except json.JSONDecodeError as exc:
            json_error = exc
            if hint == "json":
                raise ManifestError(f"Invalid JSON: {exc}") from exc
        else:
            if not isinstance(result, dict):
                raise ManifestError(
                    f"Manifest must be a mapping (got {type(result).__name__})"
                )
            return result

    try:
        result = yaml.safe_load(content)
    except yaml.YAMLError as exc:
        msg = "Failed to parse manifest as JSON or YAML"
        if json_error:
            msg += f"\n  JSON error: {json_error}"
        msg += f"\n  YAML error: {exc}"
        raise ManifestError(msg) from exc

    if not isinstance(result, dict):
        raise ManifestError(
            "Manifest must be a mapping (got "
            f"{type(result).__name__ if result is not None else 'empty document'})"
        )
    return result


def plugin_section(manifest: dict[str, Any]) -> Optional[dict[str, Any]]:
    """Return the manifest's ``plugin`` section, or ``None``.

    A ``plugin`` key whose value is not a mapping (e.g. ``plugin:`` with no
    body) is treated as absent.
    """
    section = manifest.get("plugin")
    if not isinstance(section, dict):
        return None
    return section


def platform_entry(manifest: dict[str, Any], platform: str) -> Optional[dict[str, Any]]:
    """Return the ``plugin.platforms.<platform>`` entry, or ``None``.

    Args:
        manifest: A parsed manifest.
        platform: The platform key (e.g. ``"tizen"``).

    Returns:
        The platform entry mapping, or ``None`` when the manifest has no
        plugin section, no ``platforms`` mapping, or no entry for
        *platform*.
    """
    section = plugin_section(manifest)
    if section is None:
        return None
    platforms = section.get("platforms")
    if not isinstance(platforms, dict):
        return None
    entry = platforms.get(platform)
    if not isinstance(entry, dict):
        return None
    return entry
