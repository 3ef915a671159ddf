"""Pipeline driver tying discovery, synthesis and registrant generation together.

Three hooks are exposed to the surrounding build tool:

* :func:`ensure_ready` -- called once the project's dependencies have been
  resolved. Creates the generated directory and writes the registrants,
  unless the project is not an application targeting the platform.
* :func:`inject_plugins` -- writes the registrants and reports plugins
  whose platform companion package is missing.
* :func:`resolve_entrypoint` -- called before a build or run. Returns the
  entry file the build should use in place of the application's own.
"""

from __future__ import annotations

import logging
from pathlib import Path

from plugwire import output
from plugwire.discovery.scanner import (
    find_all_plugin_names,
    find_missing_companions,
    find_plugins,
)
from plugwire.entrypoint.synthesizer import create_entrypoint
from plugwire.models import InjectionResult, ProjectConfig
from plugwire.project import PackageResolver, PlatformProject, ProjectLayout
from plugwire.registrant import write_registrants

logger = logging.getLogger(__name__)


def inject_plugins(
    layout: ProjectLayout,
    resolver: PackageResolver,
    config: ProjectConfig,
) -> InjectionResult:
    """Write the plugin registrants and warn about missing companions.

    Registrants are only written when the platform subtree exists. The
    companion check runs regardless, so a project is told about a missing
    ``<plugin>_<platform>`` dependency before it creates the subtree.

    Args:
        layout: The project's directory layout.
        resolver: Supplies the resolved dependency list.
        config: The effective project configuration.

    Returns:
        An :class:`~plugwire.models.InjectionResult` summarising the pass.

    Raises:
        InvalidPluginError: If a dependency declares the platform without
            an entry class.
        GenerationError: If a registrant template fails to render.
    """
    packages = resolver.resolve()
    result = InjectionResult()

    if layout.platform_directory.is_dir():
        plugins = find_plugins(
            packages, config.platform, manifest_name=config.manifest_name
        )
        result.written = write_registrants(layout.generated_directory, plugins)
        result.script_plugins = [p.name for p in plugins if p.is_script()]
        result.native_plugins = [p.name for p in plugins if p.is_native()]
        logger.debug(
            "Wrote registrants for %d plugin(s) to %s",
            len(plugins), layout.generated_directory,
        )

    plugin_names = find_all_plugin_names(packages, config.manifest_name)
    result.missing_companions = find_missing_companions(
        plugin_names, config.known_plugins, config.platform
    )
    for companion in result.missing_companions:
        output.warning(
            f"{companion} is available. Did you forget to add it to your dependencies?"
        )
    return result


def ensure_ready(
    layout: PlatformProject,
    resolver: PackageResolver,
    config: ProjectConfig,
) -> InjectionResult | None:
    """Prepare an application project for platform tooling.

    Nothing is done, and ``None`` returned, when the project directory does
    not exist, the project is itself a plugin, the project contains an
    ``example/`` application (the example is prepared instead), or the
    project has no platform subtree.
    """
    if not layout.project_directory.is_dir():
        logger.debug("Project directory %s does not exist", layout.project_directory)
        return None
    if layout.is_plugin(config.manifest_name):
        logger.debug("Skipping plugin project %s", layout.project_directory)
        return None
    if layout.has_example_app(config.manifest_name):
        logger.debug("Skipping project with example app %s", layout.project_directory)
        return None
    if not layout.exists():
        logger.debug("No %s directory in %s", config.platform, layout.project_directory)
        return None

    layout.generated_directory.mkdir(parents=True, exist_ok=True)
    return inject_plugins(layout, resolver, config)


def resolve_entrypoint(
    layout: ProjectLayout,
    resolver: PackageResolver,
    config: ProjectConfig,
    target_file: Path,
) -> Path:
    """Return the entry file a build should use for *target_file*.

    This is the generated wrapper when any dependency registers a plugin
    from script code, and *target_file* itself otherwise.
    """
    script_plugins = find_plugins(
        resolver.resolve(),
        config.platform,
        script_only=True,
        manifest_name=config.manifest_name,
    )
    return create_entrypoint(
        layout, target_file, script_plugins, marker=config.entrypoint_marker
    )
