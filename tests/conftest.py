"""Shared test fixtures for plugwire.

Provides reusable fixtures for building plugin packages and application
projects on ``tmp_path``, managing output state, and running CLI commands.
These fixtures are automatically discovered by pytest and available to
all test modules without explicit imports.
"""

from __future__ import annotations

import json
from collections.abc import Callable
from pathlib import Path
from typing import Any, Optional

import pytest
import yaml

from plugwire.models import ResolvedPackage
from plugwire.output import OutputFormat, OutputManager, reset_output, set_output


# ---------------------------------------------------------------------------
# Auto-reset global output state between tests
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_output_between_tests() -> None:
    """Reset the global OutputManager after every test.

    The OutputManager caches references to sys.stdout/sys.stderr at
    creation time.  When Typer's CliRunner redirects those streams during
    a test and the test finishes, the cached references become stale
    ("I/O operation on closed file").  Resetting forces a fresh manager
    to be created on next use.
    """
    yield
    reset_output()


@pytest.fixture
def plain_output() -> OutputManager:
    """Install a plain, colourless OutputManager as the global instance."""
    mgr = OutputManager(format=OutputFormat.PLAIN, no_color=True)
    set_output(mgr)
    return mgr


# ---------------------------------------------------------------------------
# Package and project builders
# ---------------------------------------------------------------------------


def write_manifest(root: Path, data: Any, name: str = "plugwire.yaml") -> Path:
    """Write *data* as a YAML manifest at *root*, creating the directory."""
    root.mkdir(parents=True, exist_ok=True)
    path = root / name
    path.write_text(yaml.safe_dump(data, sort_keys=False), encoding="utf-8")
    return path


@pytest.fixture
def make_package(tmp_path: Path) -> Callable[..., ResolvedPackage]:
    """Factory building a package directory with an optional manifest.

    Usage::

        pkg = make_package("foo", platforms={"tizen": {"pluginClass": "FooPlugin"}})
        pkg = make_package("bar", plugin=False)         # no plugin section
        pkg = make_package("baz", has_manifest=False)   # no manifest at all
        pkg = make_package("qux", raw="plugin: [")      # unparseable manifest
    """
    packages_dir = tmp_path / "packages"

    def _make(
        name: str,
        platforms: Optional[dict[str, Any]] = None,
        *,
        plugin: bool = True,
        has_manifest: bool = True,
        raw: Optional[str] = None,
    ) -> ResolvedPackage:
        root = packages_dir / name
        root.mkdir(parents=True, exist_ok=True)
        if raw is not None:
            (root / "plugwire.yaml").write_text(raw, encoding="utf-8")
        elif has_manifest:
            data: dict[str, Any] = {"name": name}
            if plugin:
                data["plugin"] = {"platforms": platforms or {}}
            write_manifest(root, data)
        return ResolvedPackage(name=name, root=root)

    return _make


@pytest.fixture
def make_project(tmp_path: Path) -> Callable[..., Path]:
    """Factory building an application project with a package config.

    The package config lists *packages* (in order) with absolute
    ``file:`` URIs, as written by the dependency resolver.

    Usage::

        project = make_project([foo, bar])                     # with tizen/
        project = make_project([foo], platform_dir=False)      # no tizen/
    """

    def _make(
        packages: list[ResolvedPackage],
        *,
        name: str = "my_app",
        platform: str = "tizen",
        platform_dir: bool = True,
        config: Optional[dict[str, Any]] = None,
    ) -> Path:
        project = tmp_path / name
        project.mkdir(parents=True, exist_ok=True)
        write_manifest(project, {"name": name, "dependencies": [p.name for p in packages]})
        if platform_dir:
            (project / platform).mkdir(exist_ok=True)
        if config is not None:
            (project / "plugwire.json").write_text(json.dumps(config), encoding="utf-8")

        package_config = project / ".plugwire" / "package_config.json"
        package_config.parent.mkdir(parents=True, exist_ok=True)
        package_config.write_text(
            json.dumps(
                {
                    "configVersion": 2,
                    "packages": [
                        {"name": p.name, "rootUri": p.root.as_uri()} for p in packages
                    ],
                },
                indent=2,
            ),
            encoding="utf-8",
        )
        return project

    return _make


@pytest.fixture
def entry_file(tmp_path: Path) -> Callable[[Path, str], Path]:
    """Factory writing ``src/my_app/main.py`` (and its package) under a project."""

    def _make(project: Path, source: str) -> Path:
        package = project / "src" / "my_app"
        package.mkdir(parents=True, exist_ok=True)
        (package / "__init__.py").write_text("", encoding="utf-8")
        path = package / "main.py"
        path.write_text(source, encoding="utf-8")
        return path

    return _make


# ---------------------------------------------------------------------------
# CLI runner fixture
# ---------------------------------------------------------------------------


@pytest.fixture
def cli_runner():
    """Typer CLI test runner.

    Returns a CliRunner instance that captures stdout/stderr and
    provides a consistent interface for invoking Typer apps in tests.
    """
    from typer.testing import CliRunner

    return CliRunner()
