"""Tests for plugwire.registrant -- the three generated registrant files."""

from __future__ import annotations

import ast
from pathlib import Path

import pytest

from plugwire.models import PluginDescriptor
from plugwire.registrant import (
    MANAGED_REGISTRANT,
    NATIVE_REGISTRANT,
    SCRIPT_REGISTRANT,
    write_managed_registrant,
    write_native_registrant,
    write_registrants,
    write_script_registrant,
)


def _native(name: str, cls: str, file_name: str | None = None) -> PluginDescriptor:
    return PluginDescriptor(
        name=name, directory=Path("/p") / name, plugin_class=cls, file_name=file_name
    )


def _script(name: str, cls: str) -> PluginDescriptor:
    return PluginDescriptor(name=name, directory=Path("/p") / name, script_plugin_class=cls)


@pytest.fixture
def mixed_plugins() -> list[PluginDescriptor]:
    return [
        _native("zeta", "ZetaPlugin", "zeta_plugin.h"),
        _script("alpha", "AlphaPlugin"),
        _native("mid", "MidPlugin", "mid_plugin.h"),
        _script("omega", "OmegaPlugin"),
    ]


# ---------------------------------------------------------------------------
# write_registrants
# ---------------------------------------------------------------------------


class TestWriteRegistrants:
    """All three files from one plugin list."""

    def test_writes_three_files(self, tmp_path: Path, mixed_plugins) -> None:
        written = write_registrants(tmp_path / "generated", mixed_plugins)
        assert [p.name for p in written] == [SCRIPT_REGISTRANT, NATIVE_REGISTRANT, MANAGED_REGISTRANT]
        assert all(p.is_file() for p in written)

    def test_idempotent(self, tmp_path: Path, mixed_plugins) -> None:
        first = [p.read_bytes() for p in write_registrants(tmp_path, mixed_plugins)]
        second = [p.read_bytes() for p in write_registrants(tmp_path, mixed_plugins)]
        assert first == second

    def test_empty_list_still_writes_files(self, tmp_path: Path) -> None:
        written = write_registrants(tmp_path, [])
        assert all(p.is_file() for p in written)
        script = (tmp_path / SCRIPT_REGISTRANT).read_text()
        assert "def register_plugins():" in script
        ast.parse(script)

    def test_script_plugins_only_in_script_registrant(self, tmp_path: Path, mixed_plugins) -> None:
        write_registrants(tmp_path, mixed_plugins)
        header = (tmp_path / NATIVE_REGISTRANT).read_text()
        managed = (tmp_path / MANAGED_REGISTRANT).read_text()
        for text in (header, managed):
            assert "AlphaPlugin" not in text
            assert "OmegaPlugin" not in text

    def test_native_plugins_not_in_script_registrant(self, tmp_path: Path, mixed_plugins) -> None:
        write_registrants(tmp_path, mixed_plugins)
        script = (tmp_path / SCRIPT_REGISTRANT).read_text()
        assert "ZetaPlugin" not in script
        assert "import zeta" not in script


# ---------------------------------------------------------------------------
# Script registrant
# ---------------------------------------------------------------------------


class TestScriptRegistrant:
    def test_one_import_and_one_call_per_plugin(self, tmp_path: Path) -> None:
        path = write_script_registrant(tmp_path, [_script("foo", "FooPlugin")])
        text = path.read_text()
        lines = text.splitlines()
        assert lines.count("import foo") == 1
        assert text.count("foo.FooPlugin.register()") == 1

    def test_preserves_input_order(self, tmp_path: Path, mixed_plugins) -> None:
        text = write_script_registrant(tmp_path, mixed_plugins).read_text()
        assert text.index("import alpha") < text.index("import omega")
        assert text.index("alpha.AlphaPlugin.register()") < text.index("omega.OmegaPlugin.register()")

    def test_hyphenated_name_imports_module_name(self, tmp_path: Path) -> None:
        text = write_script_registrant(tmp_path, [_script("foo-bar", "FooBarPlugin")]).read_text()
        assert "import foo_bar" in text.splitlines()
        assert "foo_bar.FooBarPlugin.register()" in text

    def test_output_is_valid_python(self, tmp_path: Path, mixed_plugins) -> None:
        tree = ast.parse(write_script_registrant(tmp_path, mixed_plugins).read_text())
        functions = [n.name for n in tree.body if isinstance(n, ast.FunctionDef)]
        assert functions == ["register_plugins"]

    def test_generated_header(self, tmp_path: Path) -> None:
        text = write_script_registrant(tmp_path, []).read_text()
        assert "Generated file. Do not edit." in text

    def test_empty_body_is_pass(self, tmp_path: Path) -> None:
        tree = ast.parse(write_script_registrant(tmp_path, []).read_text())
        (function,) = [n for n in tree.body if isinstance(n, ast.FunctionDef)]
        assert isinstance(function.body[-1], ast.Pass)

    def test_no_pass_with_plugins(self, tmp_path: Path) -> None:
        tree = ast.parse(write_script_registrant(tmp_path, [_script("foo", "FooPlugin")]).read_text())
        (function,) = [n for n in tree.body if isinstance(n, ast.FunctionDef)]
        assert not any(isinstance(stmt, ast.Pass) for stmt in function.body)


# ---------------------------------------------------------------------------
# Native registrant
# ---------------------------------------------------------------------------


class TestNativeRegistrant:
    def test_include_and_registration(self, tmp_path: Path) -> None:
        text = write_native_registrant(tmp_path, [_native("foo", "FooPlugin", "foo_plugin.h")]).read_text()
        assert '#include "foo_plugin.h"' in text
        assert "FooPluginRegisterWithRegistrar(" in text
        assert 'registry->GetRegistrarForPlugin("FooPlugin")' in text
        assert "void RegisterPlugins(flutter::PluginRegistry *registry) {" in text

    def test_no_include_without_file_name(self, tmp_path: Path) -> None:
        text = write_native_registrant(tmp_path, [_native("foo", "FooPlugin")]).read_text()
        assert '#include "' not in text
        assert "FooPluginRegisterWithRegistrar(" in text

    def test_preserves_input_order(self, tmp_path: Path, mixed_plugins) -> None:
        text = write_native_registrant(tmp_path, mixed_plugins).read_text()
        assert text.index('#include "zeta_plugin.h"') < text.index('#include "mid_plugin.h"')
        assert text.index("ZetaPluginRegisterWithRegistrar(") < text.index("MidPluginRegisterWithRegistrar(")

    def test_script_only_list_has_no_plugin_lines(self, tmp_path: Path) -> None:
        text = write_native_registrant(tmp_path, [_script("foo", "FooPlugin")]).read_text()
        assert "FooPlugin" not in text
        assert "RegisterWithRegistrar" not in text
        assert "#include <flutter/plugin_registry.h>" in text


# ---------------------------------------------------------------------------
# Managed registrant
# ---------------------------------------------------------------------------


class TestManagedRegistrant:
    def test_binding_and_call_per_plugin(self, tmp_path: Path) -> None:
        text = write_managed_registrant(tmp_path, [_native("foo", "FooPlugin")]).read_text()
        assert text.count('[DllImport("flutter_plugins.so")]') == 1
        assert "public static extern void FooPluginRegisterWithRegistrar(" in text
        assert 'registry.GetRegistrarForPlugin("FooPlugin")' in text

    def test_preserves_input_order(self, tmp_path: Path, mixed_plugins) -> None:
        text = write_managed_registrant(tmp_path, mixed_plugins).read_text()
        assert text.index("extern void ZetaPlugin") < text.index("extern void MidPlugin")
        assert text.index('GetRegistrarForPlugin("ZetaPlugin")') < text.index(
            'GetRegistrarForPlugin("MidPlugin")'
        )

    def test_fixed_file_name(self, tmp_path: Path) -> None:
        assert write_managed_registrant(tmp_path, []).name == "GeneratedPluginRegistrant.cs"
