"""Template rendering for generated source files.

All generated artifacts (the entry-point wrapper and the three plugin
registrants) are produced from Jinja2 templates stored in
``plugwire/templates/``. Rendering is a pure function of the template and
its context:

* autoescaping is disabled -- the output is source code, not HTML;
* undefined placeholders raise instead of rendering as empty strings;
* ``{% for %}`` sections iterate their list in order, so identical inputs
  always produce identical bytes.

Rendering failures are reported as :class:`~plugwire.exceptions.GenerationError`.
Filesystem errors from :func:`render_to_file` propagate unchanged.
"""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, StrictUndefined, TemplateError

from plugwire.exceptions import GenerationError


TEMPLATE_DIR = Path(__file__).parent / "templates"
"""Path to the Jinja2 template directory (``plugwire/templates/``)."""


def _create_jinja_env() -> Environment:
    """Create the Jinja2 environment shared by all renders.

    Block trimming and lstrip keep ``{% for %}`` tags out of the generated
    output, and the trailing newline of each template is preserved.
    """
    return Environment(
        loader=FileSystemLoader(str(TEMPLATE_DIR)),
        autoescape=False,
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
        undefined=StrictUndefined,
    )


_env = _create_jinja_env()


def render_template(template: str, context: Mapping[str, Any]) -> str:
    """Render an inline template string with *context*.

    Args:
        template: Jinja2 template source.
        context: Placeholder values. Scalars are substituted as-is; lists
            of mappings drive ``{% for %}`` sections.

    Returns:
        The rendered text.

    Raises:
        GenerationError: If the template is invalid or references a
            placeholder missing from *context*.

    Example::

        >>> render_template("{% for p in plugins %}{{ p.name }};{% endfor %}",
        ...                 {"plugins": [{"name": "a"}, {"name": "b"}]})
        'a;b;'
    """
    try:
        return _env.from_string(template).render(**context)
    except TemplateError as exc:
        raise GenerationError(f"Failed to render template: {exc}") from exc


def render_template_file(template_name: str, context: Mapping[str, Any]) -> str:
    """Render one of the packaged templates by name.

    Args:
        template_name: File name under :data:`TEMPLATE_DIR`
            (e.g. ``"generated_plugin_registrant.py.j2"``).
        context: Template variables.

    Returns:
        The rendered text.

    Raises:
        GenerationError: If the template is missing, invalid, or references
            an undefined placeholder.
    """
    try:
        return _env.get_template(template_name).render(**context)
    except TemplateError as exc:
        raise GenerationError(
            f"Failed to render template {template_name}: {exc}"
        ) from exc


def render_to_file(
    template_name: str,
    context: Mapping[str, Any],
    output_path: Path,
) -> Path:
    """Render a packaged template and write it to *output_path*.

    Parent directories are created as needed and any existing file is
    overwritten without comparison.

    Args:
        template_name: File name under :data:`TEMPLATE_DIR`.
        context: Template variables.
        output_path: Destination file.

    Returns:
        *output_path*.
    """
    rendered = render_template_file(template_name, context)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(rendered, encoding="utf-8")
    return output_path
