"""Tests for plugwire.discovery.scanner -- plugin discovery and companion checks."""

from __future__ import annotations

import logging

import pytest

from plugwire.discovery.scanner import (
    find_all_plugin_names,
    find_missing_companions,
    find_plugins,
)
from plugwire.exceptions import InvalidPluginError


# ---------------------------------------------------------------------------
# find_plugins
# ---------------------------------------------------------------------------


class TestFindPlugins:
    """One descriptor per package declaring the platform; none for the rest."""

    def test_single_script_plugin(self, make_package) -> None:
        foo = make_package("foo", {"x": {"dartPluginClass": "FooPlugin"}})
        plugins = find_plugins([foo], "x")
        assert len(plugins) == 1
        assert plugins[0].name == "foo"
        assert plugins[0].script_plugin_class == "FooPlugin"
        assert plugins[0].directory == foo.root / "x"

    def test_mixed_package_list(self, make_package) -> None:
        packages = [
            make_package("native", {"tizen": {"pluginClass": "NativePlugin", "fileName": "n.h"}}),
            make_package("no_manifest", has_manifest=False),
            make_package("not_a_plugin", plugin=False),
            make_package("other_platform", {"other": {"pluginClass": "OtherPlugin"}}),
            make_package("broken", raw="plugin: [unclosed\n"),
            make_package("script", {"tizen": {"pythonPluginClass": "ScriptPlugin"}}),
        ]
        plugins = find_plugins(packages, "tizen")
        assert [p.name for p in plugins] == ["native", "script"]
        assert plugins[0].file_name == "n.h"

    def test_preserves_package_order(self, make_package) -> None:
        names = ["c", "a", "b"]
        packages = [make_package(n, {"tizen": {"pluginClass": f"{n.upper()}Plugin"}}) for n in names]
        assert [p.name for p in find_plugins(packages, "tizen")] == names

    def test_empty_package_list(self) -> None:
        assert find_plugins([], "tizen") == []

    def test_native_only(self, make_package) -> None:
        packages = [
            make_package("n", {"tizen": {"pluginClass": "N"}}),
            make_package("s", {"tizen": {"pythonPluginClass": "S"}}),
            make_package("both", {"tizen": {"pluginClass": "B", "pythonPluginClass": "BS"}}),
        ]
        assert [p.name for p in find_plugins(packages, "tizen", native_only=True)] == ["n", "both"]

    def test_script_only(self, make_package) -> None:
        packages = [
            make_package("n", {"tizen": {"pluginClass": "N"}}),
            make_package("s", {"tizen": {"pythonPluginClass": "S"}}),
            make_package("both", {"tizen": {"pluginClass": "B", "pythonPluginClass": "BS"}}),
        ]
        assert [p.name for p in find_plugins(packages, "tizen", script_only=True)] == ["s", "both"]

    def test_declared_without_class_raises(self, make_package) -> None:
        packages = [
            make_package("good", {"tizen": {"pluginClass": "Good"}}),
            make_package("bad", {"tizen": {"fileName": "bad.h"}}),
        ]
        with pytest.raises(InvalidPluginError, match="bad") as exc_info:
            find_plugins(packages, "tizen")
        assert exc_info.value.exit_code == 7

    def test_validation_runs_before_filtering(self, make_package) -> None:
        packages = [make_package("bad", {"tizen": {"pluginClass": ""}})]
        with pytest.raises(InvalidPluginError):
            find_plugins(packages, "tizen", script_only=True)

    def test_custom_manifest_name(self, make_package, tmp_path) -> None:
        pkg = make_package("foo", has_manifest=False)
        (pkg.root / "plugin.json").write_text(
            '{"plugin": {"platforms": {"tizen": {"pluginClass": "FooPlugin"}}}}'
        )
        assert find_plugins([pkg], "tizen") == []
        assert len(find_plugins([pkg], "tizen", manifest_name="plugin.json")) == 1

    def test_logs_found_and_skipped(self, make_package, caplog) -> None:
        packages = [
            make_package("foo", {"tizen": {"pluginClass": "FooPlugin"}}),
            make_package("broken", raw="plugin: [unclosed\n"),
        ]
        with caplog.at_level(logging.DEBUG, logger="plugwire.discovery.scanner"):
            find_plugins(packages, "tizen")
        messages = [r.getMessage() for r in caplog.records]
        assert any(m.startswith("Found plugin foo") for m in messages)
        assert any(m.startswith("Failed to parse plugin manifest for broken") for m in messages)


# ---------------------------------------------------------------------------
# find_all_plugin_names
# ---------------------------------------------------------------------------


class TestFindAllPluginNames:
    def test_platform_agnostic(self, make_package) -> None:
        packages = [
            make_package("camera", {"android": {"pluginClass": "CameraPlugin"}}),
            make_package("bare"),
            make_package("lib", plugin=False),
            make_package("nothing", has_manifest=False),
            make_package("broken", raw="plugin: [unclosed\n"),
        ]
        assert find_all_plugin_names(packages) == ["camera", "bare"]


# ---------------------------------------------------------------------------
# find_missing_companions
# ---------------------------------------------------------------------------


class TestFindMissingCompanions:
    def test_reports_missing_companion(self) -> None:
        assert find_missing_companions(["camera"], ["camera"], "tizen") == ["camera_tizen"]

    def test_present_companion_not_reported(self) -> None:
        assert find_missing_companions(["camera", "camera_tizen"], ["camera"], "tizen") == []

    def test_unknown_plugin_not_reported(self) -> None:
        assert find_missing_companions(["my_plugin"], ["camera"], "tizen") == []

    def test_order_and_deduplication(self) -> None:
        result = find_missing_companions(
            ["share", "camera", "share"], ["camera", "share"], "tizen"
        )
        assert result == ["share_tizen", "camera_tizen"]

    def test_platform_in_companion_name(self) -> None:
        assert find_missing_companions(["camera"], ["camera"], "other") == ["camera_other"]
