"""Plugin discovery over a resolved dependency list.

Walks the packages supplied by a
:class:`~plugwire.project.PackageResolver`, reads each package's manifest,
and builds a :class:`~plugwire.models.PluginDescriptor` for every package
that declares an implementation for the target platform.

Error policy:

* A package without a manifest is not a plugin and is skipped silently.
* A manifest that cannot be parsed is logged at debug level and skipped,
  so a broken manifest in an unrelated dependency never aborts discovery.
* A manifest that declares the platform but supplies neither
  ``pluginClass`` nor ``pythonPluginClass`` raises
  :class:`~plugwire.exceptions.InvalidPluginError` -- that is a packaging
  error in the plugin itself.

A separate check, :func:`find_missing_companions`, compares the
platform-agnostic plugin list against a table of plugins known to have a
``<name>_<platform>`` companion package and reports companions the project
forgot to depend on.
"""

from __future__ import annotations

import logging
from collections.abc import Collection, Iterable
from typing import Optional

from pydantic import ValidationError

from plugwire.discovery.manifest import load_manifest, platform_entry, plugin_section
from plugwire.exceptions import InvalidPluginError, ManifestError
from plugwire.models import (
    DEFAULT_MANIFEST_NAME,
    PluginDescriptor,
    ResolvedPackage,
)

logger = logging.getLogger(__name__)


def find_plugins(
    packages: Iterable[ResolvedPackage],
    platform: str,
    *,
    native_only: bool = False,
    script_only: bool = False,
    manifest_name: str = DEFAULT_MANIFEST_NAME,
) -> list[PluginDescriptor]:
    """Return the plugins implemented for *platform*, in package order.

    Args:
        packages: The resolved dependency list.
        platform: Platform key looked up under ``plugin.platforms``.
        native_only: Keep only plugins with a ``pluginClass``.
        script_only: Keep only plugins with a ``pythonPluginClass``.
        manifest_name: Manifest file name at each package root.

    Returns:
        One descriptor per package that declares *platform*, filtered by
        the flags above.

    Raises:
        InvalidPluginError: If a package declares *platform* without any
            entry class.
    """
    plugins: list[PluginDescriptor] = []
    for package in packages:
        plugin = _plugin_from_package(package, platform, manifest_name)
        if plugin is None:
            continue
        if native_only and not plugin.is_native():
            continue
        if script_only and not plugin.is_script():
            continue
        plugins.append(plugin)
    return plugins


def find_all_plugin_names(
    packages: Iterable[ResolvedPackage],
    manifest_name: str = DEFAULT_MANIFEST_NAME,
) -> list[str]:
    """Return the names of all packages that declare a ``plugin`` section.

    This is the platform-agnostic plugin list: a package counts even if it
    implements no platform at all.
    """
    names: list[str] = []
    for package in packages:
        manifest = _read_manifest(package, manifest_name)
        if manifest is not None and plugin_section(manifest) is not None:
            names.append(package.name)
    return names


def find_missing_companions(
    plugin_names: Collection[str],
    known_plugins: Collection[str],
    platform: str,
) -> list[str]:
    """Return companion packages that are published but not depended on.

    For every plugin in *plugin_names* that appears in *known_plugins*, the
    companion ``<name>_<platform>`` is expected to be a dependency too.

    Args:
        plugin_names: The platform-agnostic plugin list of the project.
        known_plugins: Lookup table of plugins with a known companion.
        platform: Platform key used to build the companion name.

    Returns:
        Missing companion names in the order of *plugin_names*.

    Example::

        >>> find_missing_companions(["camera", "camera_tizen", "share"],
        ...                         ["camera", "share"], "tizen")
        ['share_tizen']
    """
    present = set(plugin_names)
    known = set(known_plugins)
    missing: list[str] = []
    for name in plugin_names:
        companion = f"{name}_{platform}"
        if name in known and companion not in present and companion not in missing:
            missing.append(companion)
    return missing


def _read_manifest(package: ResolvedPackage, manifest_name: str) -> Optional[dict]:
    """Load a package's manifest, or ``None`` if it is absent or unparseable."""
    manifest_path = package.root / manifest_name
    if not manifest_path.is_file():
        return None
    try:
        return load_manifest(manifest_path)
    except ManifestError as exc:
        logger.debug("Failed to parse plugin manifest for %s: %s", package.name, exc)
        return None


def _plugin_from_package(
    package: ResolvedPackage,
    platform: str,
    manifest_name: str,
) -> Optional[PluginDescriptor]:
    """Build the descriptor for *package*, or ``None`` if it is not a plugin for *platform*."""
    manifest = _read_manifest(package, manifest_name)
    if manifest is None or plugin_section(manifest) is None:
        return None

    logger.debug("Found plugin %s at %s", package.name, package.root)

    entry = platform_entry(manifest, platform)
    if entry is None:
        return None

    try:
        return PluginDescriptor.model_validate(
            {
                **entry,
                "name": package.name,
                "directory": package.root / platform,
            }
        )
    except ValidationError as exc:
        raise InvalidPluginError(
            f"Invalid '{platform}' plugin declaration in {package.name} "
            f"({package.root / manifest_name}): {exc}"
        ) from exc
