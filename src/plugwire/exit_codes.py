"""Numeric process exit codes following `clig.dev <https://clig.dev/>`_ conventions.

Each constant maps to a specific error category and is referenced by the
corresponding :class:`~plugwire.exceptions.PlugwireError` subclass.
Build tools that shell out to ``plugwire`` can inspect the exit code to
tell a broken plugin manifest from an unparseable entry file without
parsing stderr.

Example::

    $ plugwire inject ./my_app
    $ echo $?
    7   # EXIT_INVALID_PLUGIN -- a dependency declares the platform without a class
"""

EXIT_GENERIC_FAILURE = 1
"""An unclassified error occurred."""

EXIT_INVALID_USAGE = 2
"""The command was invoked with invalid arguments or missing required parameters."""

EXIT_INVALID_PLUGIN = 7
"""A plugin manifest declares the target platform but no usable entry class."""

EXIT_ENTRYPOINT_PARSE_ERROR = 8
"""The application's entry file could not be parsed."""

EXIT_GENERATION_ERROR = 9
"""A generated file could not be rendered from its template."""
