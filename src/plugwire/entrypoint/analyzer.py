"""AST-based analysis of an application's entry file.

Parses a Python module with :mod:`ast` (the file is never imported or
executed) and lists the top-level functions that must stay externally
callable. ``main`` is always the first entry point. Every other top-level
function is an entry point only when it carries the marker decorator::

    @pragma("vm:entry-point")
    def background_main():
        ...

The marker is configurable through :class:`~plugwire.models.EntrypointMarker`.
The decorator may be referenced directly (``@pragma(...)``) or through a
module (``@runtime.pragma(...)``); the first positional argument's source
text must contain the marker value.

See :func:`find_entrypoints` for the main entry point.
"""

from __future__ import annotations

import ast
from pathlib import Path
from typing import Optional

from plugwire.exceptions import EntrypointParseError
from plugwire.models import EntrypointMarker

MAIN_ENTRYPOINT = "main"


def parse_module(path: Path) -> ast.Module:
    """Parse *path* into an AST module.

    Args:
        path: Python source file to parse.

    Returns:
        The parsed module.

    Raises:
        EntrypointParseError: If the file is not valid Python, contains
            null bytes, or cannot be decoded.
        OSError: If the file cannot be read.
    """
    try:
        source = path.read_bytes()
        return ast.parse(source, filename=str(path))
    except (SyntaxError, ValueError, UnicodeDecodeError) as exc:
        raise EntrypointParseError(f"Failed to parse entry file {path}: {exc}") from exc


def find_entrypoints(
    path: Path,
    marker: Optional[EntrypointMarker] = None,
) -> list[str]:
    """Return the entry-point function names declared in *path*.

    Args:
        path: The application's entry file.
        marker: Decorator convention that marks an entry point. Defaults to
            ``@pragma("vm:entry-point")``.

    Returns:
        Distinct function names in declaration order, with ``"main"``
        always first.

    Raises:
        EntrypointParseError: If the file cannot be parsed.

    Example::

        >>> find_entrypoints(Path("app/main.py"))
        ['main', 'background_main']
    """
    marker = marker or EntrypointMarker()
    tree = parse_module(path)
    return entrypoints_from_tree(tree, marker)


def entrypoints_from_tree(tree: ast.Module, marker: EntrypointMarker) -> list[str]:
    """Collect entry points from an already parsed module."""
    names: list[str] = [MAIN_ENTRYPOINT]
    for node in tree.body:
        if not isinstance(node, (ast.FunctionDef, ast.AsyncFunctionDef)):
            continue
        if node.name == MAIN_ENTRYPOINT or node.name in names:
            continue
        if any(_is_marker(decorator, marker) for decorator in node.decorator_list):
            names.append(node.name)
    return names


def future_features(tree: ast.Module) -> list[str]:
    """Return the ``from __future__ import ...`` feature names of a module.

    Future imports are the per-file language-level declaration in Python;
    the generated wrapper carries them over so it is compiled with the same
    language features as the original entry file.

    Future imports must open the module, after at most a docstring.

    Raises:
        EntrypointParseError: If a future import follows any other
            statement, which would fail to compile.
    """
    features: list[str] = []
    in_header = True
    for index, node in enumerate(tree.body):
        is_future = isinstance(node, ast.ImportFrom) and node.module == "__future__"
        if not is_future:
            if not (index == 0 and _is_docstring(node)):
                in_header = False
            continue
        if not in_header:
            raise EntrypointParseError(
                f"from __future__ imports must occur at the beginning of the file (line {node.lineno})"
            )
        for alias in node.names:
            if alias.name not in features:
                features.append(alias.name)
    return features


def _is_docstring(node: ast.stmt) -> bool:
    return (
        isinstance(node, ast.Expr)
        and isinstance(node.value, ast.Constant)
        and isinstance(node.value.value, str)
    )


def _is_marker(decorator: ast.expr, marker: EntrypointMarker) -> bool:
    """Whether *decorator* is ``@<marker.name>(<arg containing marker.value>, ...)``."""
    if not isinstance(decorator, ast.Call):
        return False
    if _callee_name(decorator) != marker.name:
        return False
    if not decorator.args:
        return False
    return marker.value in ast.unparse(decorator.args[0])


def _callee_name(call: ast.Call) -> str | None:
    """Return the simple name of a Call node's function."""
    if isinstance(call.func, ast.Name):
        return call.func.id
    if isinstance(call.func, ast.Attribute):
        return call.func.attr
    return None
