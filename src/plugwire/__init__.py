"""plugwire -- wire platform-specific plugins into an application build.

This package extends an application build pipeline with support for a
secondary target platform. It discovers dependency packages that declare a
plugin implementation for that platform and generates the glue code that
registers those plugins in three runtimes:

* a script-level (Python) registrant imported by the application,
* a native C++ registrant header,
* a managed C# registrant class,

plus a rewritten application entry point that registers plugins before
delegating to every exported entry function of the original entry file.

Typical workflow::

    plugwire inject ./my_app                # write the three registrants
    plugwire entrypoint ./my_app/src/my_app/main.py --project ./my_app

Modules:
    app: Typer application factory and CLI entry point.
    models: Pydantic models shared across the entire package.
    config: Project-local configuration loading and precedence resolution.
    project: Collaborator interfaces (package resolution, project layout).
    discovery: Plugin manifest loading and plugin discovery.
    entrypoint: Entry-point analysis and wrapper synthesis.
    registrant: Registrant file generation.
    renderer: Jinja2-based template rendering.
    injector: The end-to-end generation pipeline.
    exceptions: Exception hierarchy with exit-code mapping.
    exit_codes: Numeric exit codes.
    output: stdout/stderr formatting system with Rich support.
"""

__version__ = "0.3.0"
