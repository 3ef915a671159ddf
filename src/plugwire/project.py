"""Collaborator interfaces between plugwire and the surrounding build tool.

The generation pipeline depends on exactly two narrow interfaces:

* :class:`PackageResolver` -- supplies the resolved dependency list.
* :class:`ProjectLayout` -- supplies the fixed paths of the project.

Build tools implement (or reuse) these and pass them in; nothing in the
pipeline inherits from or hooks into a host framework. This module also
ships the default implementations used by the ``plugwire`` CLI:

* :class:`PackageConfigResolver` -- reads a package-config JSON document
  written by the dependency resolver.
* :class:`StaticPackageResolver` -- returns a fixed list (tests, embedding).
* :class:`PlatformProject` -- the standard ``<project>/<platform>/`` layout.
"""

from __future__ import annotations

import json
from collections.abc import Iterable
from pathlib import Path
from typing import Optional, Protocol
from urllib.parse import urlparse
from urllib.request import url2pathname

from plugwire.discovery.manifest import load_manifest, plugin_section
from plugwire.exceptions import ConfigError, ManifestError
from plugwire.models import DEFAULT_MANIFEST_NAME, DEFAULT_PLATFORM, ResolvedPackage

PACKAGE_CONFIG_PATH = Path(".plugwire") / "package_config.json"
"""Default package-config location, relative to the project directory."""

GENERATED_DIRNAME = "generated"
"""Name of the generated-output directory inside the platform subtree."""


class PackageResolver(Protocol):
    """Supplies the project's resolved dependency list."""

    def resolve(self) -> list[ResolvedPackage]:
        """Return every resolved package, in resolution order."""
        ...


class ProjectLayout(Protocol):
    """Supplies the fixed paths the generators read from and write to."""

    @property
    def project_directory(self) -> Path:
        """Root of the application project."""
        ...

    @property
    def platform_directory(self) -> Path:
        """The target platform's subtree; generation is skipped when absent."""
        ...

    @property
    def generated_directory(self) -> Path:
        """Directory receiving all generated files."""
        ...


# ------------------------------------------------------------------ #
# Package resolvers
# ------------------------------------------------------------------ #


class StaticPackageResolver:
    """A :class:`PackageResolver` over a fixed list of packages."""

    def __init__(self, packages: Iterable[ResolvedPackage]) -> None:
        self._packages = list(packages)

    def resolve(self) -> list[ResolvedPackage]:
        return list(self._packages)


class PackageConfigResolver:
    """A :class:`PackageResolver` backed by a package-config JSON document.

    The document lists one entry per resolved dependency::

        {
          "configVersion": 2,
          "packages": [
            {"name": "foo", "rootUri": "file:///home/me/.cache/foo-1.0.0/"},
            {"name": "my_app", "rootUri": "../"}
          ]
        }

    ``rootUri`` may be a ``file:`` URI or a plain path. Relative values are
    resolved against the directory containing the document.

    Args:
        path: Location of the package-config document.
    """

    def __init__(self, path: Path) -> None:
        self._path = path

    @property
    def path(self) -> Path:
        """The package-config document this resolver reads."""
        return self._path

    def resolve(self) -> list[ResolvedPackage]:
        """Read the document and return its packages in listed order.

        Raises:
            ConfigError: If the document is missing, is not valid JSON, or
                has malformed package entries.
        """
        if not self._path.is_file():
            raise ConfigError(
                f"Package config not found at {self._path}. "
                "Resolve the project's dependencies first."
            )
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            raise ConfigError(f"Invalid package config at {self._path}: {exc}") from exc

        entries = data.get("packages") if isinstance(data, dict) else None
        if not isinstance(entries, list):
            raise ConfigError(f"Package config at {self._path} has no 'packages' list")

        packages: list[ResolvedPackage] = []
        for entry in entries:
            if (
                not isinstance(entry, dict)
                or not isinstance(entry.get("name"), str)
                or not isinstance(entry.get("rootUri"), str)
            ):
                raise ConfigError(
                    f"Malformed package entry in {self._path}: {entry!r}"
                )
            packages.append(
                ResolvedPackage(name=entry["name"], root=self._root_path(entry["rootUri"]))
            )
        return packages

    def _root_path(self, root_uri: str) -> Path:
        """Convert a ``rootUri`` value to an absolute directory path."""
        parsed = urlparse(root_uri)
        if parsed.scheme == "file":
            return Path(url2pathname(parsed.path))
        root = Path(root_uri)
        if not root.is_absolute():
            root = (self._path.parent / root).resolve()
        return root


# ------------------------------------------------------------------ #
# Project layout
# ------------------------------------------------------------------ #


class PlatformProject:
    """The standard project layout for one target platform.

    Layout::

        <project>/
            plugwire.json                      # optional project config
            plugwire.yaml                      # the project's own manifest
            .plugwire/package_config.json      # written by the resolver
            <platform>/                        # platform subtree
                generated/                     # all generated files

    Args:
        project_directory: Root of the application project.
        platform: Target platform key (also the subtree name).
        package_config: Optional package-config path overriding the
            default, relative to *project_directory* unless absolute.
    """

    def __init__(
        self,
        project_directory: Path,
        platform: str = DEFAULT_PLATFORM,
        package_config: Optional[str | Path] = None,
    ) -> None:
        self._project_directory = Path(project_directory)
        self._platform = platform
        self._package_config = Path(package_config) if package_config else PACKAGE_CONFIG_PATH

    @property
    def platform(self) -> str:
        return self._platform

    @property
    def project_directory(self) -> Path:
        return self._project_directory

    @property
    def platform_directory(self) -> Path:
        return self._project_directory / self._platform

    @property
    def generated_directory(self) -> Path:
        return self.platform_directory / GENERATED_DIRNAME

    @property
    def package_config_path(self) -> Path:
        if self._package_config.is_absolute():
            return self._package_config
        return self._project_directory / self._package_config

    def exists(self) -> bool:
        """Whether the platform subtree exists."""
        return self.platform_directory.is_dir()

    def is_plugin(self, manifest_name: str = DEFAULT_MANIFEST_NAME) -> bool:
        """Whether the project is itself a plugin package.

        A project whose manifest cannot be parsed is treated as an
        application.
        """
        manifest_path = self._project_directory / manifest_name
        if not manifest_path.is_file():
            return False
        try:
            return plugin_section(load_manifest(manifest_path)) is not None
        except ManifestError:
            return False

    def has_example_app(self, manifest_name: str = DEFAULT_MANIFEST_NAME) -> bool:
        """Whether the project contains an ``example/`` application."""
        return (self._project_directory / "example" / manifest_name).is_file()

    def resolver(self) -> PackageConfigResolver:
        """Return a resolver reading this project's package config."""
        return PackageConfigResolver(self.package_config_path)
