"""Canonical Pydantic models shared across all plugwire modules.

This is the single source of truth for data shapes in the project. Every other
module imports from here rather than defining its own models. The models fall
into three groups:

**Configuration models** -- serialised as JSON in the project's
``plugwire.json``:
    :class:`EntrypointMarker` and :class:`ProjectConfig`.

**Discovery models** -- produced from the resolved dependency list and
consumed by the generators:
    :class:`ResolvedPackage` and :class:`PluginDescriptor`.

**Pipeline results** -- returned by :mod:`plugwire.injector`:
    :class:`InjectionResult`.

All models use Pydantic v2. Discovery models are frozen: they are built
fresh on every generation pass and never mutated afterwards.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator, model_validator


DEFAULT_PLATFORM = "tizen"
"""Platform key looked up under ``plugin.platforms`` when none is configured."""

DEFAULT_MANIFEST_NAME = "plugwire.yaml"
"""File name of the per-package plugin manifest."""

DEFAULT_KNOWN_PLUGINS: tuple[str, ...] = (
    "audioplayers",
    "battery",
    "battery_plus",
    "camera",
    "connectivity",
    "connectivity_plus",
    "device_info",
    "device_info_plus",
    "flutter_tts",
    "image_picker",
    "integration_test",
    "network_info_plus",
    "package_info",
    "package_info_plus",
    "path_provider",
    "permission_handler",
    "sensors",
    "sensors_plus",
    "share",
    "share_plus",
    "shared_preferences",
    "url_launcher",
    "video_player",
    "wakelock",
    "webview_flutter",
    "wifi_info_flutter",
)
"""Plugins known to have a published ``<name>_<platform>`` companion package."""


# --- Configuration ---


class EntrypointMarker(BaseModel):
    """The decorator convention marking a top-level function as an entry point.

    A function is an entry point when it carries a decorator call whose
    callee is named :attr:`name` and whose first argument's source text
    contains :attr:`value`::

        @pragma("vm:entry-point")
        def background_main():
            ...
    """

    name: str = Field(default="pragma", description="Decorator name")
    value: str = Field(
        default="vm:entry-point",
        description="Substring the decorator's first argument must contain",
    )


class ProjectConfig(BaseModel):
    """Project-level configuration persisted at ``<project>/plugwire.json``.

    Loaded by :func:`~plugwire.config.load_project_config`. Fields here have
    the lowest precedence and can be overridden by environment variables or
    CLI flags. See :func:`~plugwire.config.resolve_config` for the full
    precedence chain.
    """

    model_config = ConfigDict(extra="allow")

    platform: str = Field(
        default=DEFAULT_PLATFORM,
        description="Platform key looked up under plugin.platforms in each manifest",
    )
    manifest_name: str = Field(
        default=DEFAULT_MANIFEST_NAME,
        description="Name of the plugin manifest file at each package root",
    )
    entrypoint_marker: EntrypointMarker = Field(default_factory=EntrypointMarker)
    known_plugins: list[str] = Field(
        default_factory=lambda: list(DEFAULT_KNOWN_PLUGINS),
        description="Plugins with a known <name>_<platform> companion package",
    )
    package_config: Optional[str] = Field(
        default=None,
        description="Path to the package config (relative to the project directory)",
    )


# --- Discovery ---


class ResolvedPackage(BaseModel):
    """A dependency resolved by the package-resolution collaborator.

    Read-only input to :func:`~plugwire.discovery.scanner.find_plugins`.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    root: Path = Field(description="Package root directory (holds the manifest)")


class PluginDescriptor(BaseModel):
    """One plugin implementation discovered for the target platform.

    Built from the ``plugin.platforms.<platform>`` entry of a package
    manifest. Field aliases match the manifest keys, so a descriptor can be
    validated straight from the parsed entry::

        PluginDescriptor.model_validate(
            {"name": "foo", "directory": root / "tizen", **entry}
        )

    Either :attr:`plugin_class` (native code) or :attr:`script_plugin_class`
    (script-level registration) must be non-empty; constructing a descriptor
    with neither raises :class:`pydantic.ValidationError`. When
    :attr:`plugin_class` is set, :attr:`file_name` names the header that
    declares the native registration function.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str
    directory: Path = Field(description="The plugin's platform-specific subtree")
    plugin_class: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("plugin_class", "pluginClass"),
    )
    script_plugin_class: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices(
            "script_plugin_class", "pythonPluginClass", "dartPluginClass"
        ),
    )
    file_name: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("file_name", "fileName"),
    )

    @field_validator("plugin_class", "script_plugin_class", "file_name")
    @classmethod
    def _empty_to_none(cls, value: Optional[str]) -> Optional[str]:
        if value is not None and not value.strip():
            return None
        return value

    @model_validator(mode="after")
    def _require_entry_class(self) -> PluginDescriptor:
        if self.plugin_class is None and self.script_plugin_class is None:
            raise ValueError(
                f"Plugin '{self.name}' must declare pluginClass or pythonPluginClass"
            )
        return self

    @property
    def import_name(self) -> str:
        """The Python module name the script registrant imports."""
        return self.name.replace("-", "_")

    def is_native(self) -> bool:
        """Whether the plugin ships native code registered by symbol."""
        return self.plugin_class is not None

    def is_script(self) -> bool:
        """Whether the plugin registers itself from script code."""
        return self.script_plugin_class is not None

    def to_template_context(self) -> dict[str, Any]:
        """Return the record rendered by the registrant templates.

        Keys are only present when the corresponding manifest value is set,
        except ``file`` which is always present (``None`` when absent).
        """
        record: dict[str, Any] = {
            "name": self.name,
            "import_name": self.import_name,
        }
        if self.plugin_class is not None:
            record["class"] = self.plugin_class
        if self.script_plugin_class is not None:
            record["scriptPluginClass"] = self.script_plugin_class
        record["file"] = self.file_name
        return record


# --- Pipeline results ---


class InjectionResult(BaseModel):
    """Summary of one :func:`~plugwire.injector.inject_plugins` pass."""

    written: list[Path] = Field(default_factory=list)
    script_plugins: list[str] = Field(default_factory=list)
    native_plugins: list[str] = Field(default_factory=list)
    missing_companions: list[str] = Field(default_factory=list)
