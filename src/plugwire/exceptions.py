"""Exception hierarchy for plugwire.

All exceptions inherit from :class:`PlugwireError`, which carries an
``exit_code`` attribute mapped to a constant from :mod:`plugwire.exit_codes`.
The top-level error handler in :func:`plugwire.app.main` catches
``PlugwireError`` and exits with the appropriate code, while unexpected
exceptions produce a crash log and exit with :data:`EXIT_GENERIC_FAILURE`.

Filesystem errors raised while writing generated files are *not* wrapped:
``OSError`` propagates unchanged so the caller sees the original cause.

Subclass hierarchy::

    PlugwireError (exit 1)
    +-- ConfigError           (exit 1)
    +-- ManifestError         (exit 1)
    +-- InvalidPluginError    (exit 7)
    +-- EntrypointParseError  (exit 8)
    +-- GenerationError       (exit 9)
"""

from plugwire.exit_codes import (
    EXIT_ENTRYPOINT_PARSE_ERROR,
    EXIT_GENERATION_ERROR,
    EXIT_GENERIC_FAILURE,
    EXIT_INVALID_PLUGIN,
)


class PlugwireError(Exception):
    """Base exception for all plugwire errors.

    Every subclass sets a class-level ``exit_code`` corresponding to one of
    the constants in :mod:`plugwire.exit_codes`. The entry point catches
    this exception type and calls ``sys.exit(exc.exit_code)``.

    Args:
        message: Human-readable error description printed to stderr.
        exit_code: Optional override for the class-level exit code.
    """

    exit_code: int = EXIT_GENERIC_FAILURE

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class ConfigError(PlugwireError):
    """Raised for configuration problems (invalid ``plugwire.json``, missing package config)."""

    exit_code = EXIT_GENERIC_FAILURE


class InvalidPluginError(PlugwireError):
    """Raised when a manifest declares the target platform but supplies no entry class.

    Unlike a malformed manifest, which is skipped, this indicates a packaging
    error in the plugin itself and aborts discovery for the whole project.
    """

    exit_code = EXIT_INVALID_PLUGIN


class EntrypointParseError(PlugwireError):
    """Raised when the application's entry file cannot be parsed."""

    exit_code = EXIT_ENTRYPOINT_PARSE_ERROR


class ManifestError(PlugwireError):
    """Raised when a package manifest cannot be read or parsed.

    The discovery scanner catches this, logs it at debug level, and skips
    the package: a broken manifest in an unrelated dependency must not abort
    discovery for the whole project.
    """

    exit_code = EXIT_GENERIC_FAILURE


class GenerationError(PlugwireError):
    """Raised when a template cannot be rendered (syntax error or undefined placeholder)."""

    exit_code = EXIT_GENERATION_ERROR
