"""Project configuration with atomic writes and precedence resolution.

plugwire reads an optional ``plugwire.json`` from the project directory,
deserialised into :class:`~plugwire.models.ProjectConfig`. A project
without one uses the defaults (platform ``tizen``, manifest
``plugwire.yaml``, the ``@pragma("vm:entry-point")`` marker and the
built-in table of plugins with known platform companions).

* **Loading** -- :func:`load_project_config`.
* **Saving** -- :func:`save_project_config`, using a temp-file-then-rename
  strategy (:func:`_atomic_write`) so a crash never leaves a truncated
  config behind.
* **Precedence resolution** -- :func:`resolve_config` layers the
  ``PLUGWIRE_PLATFORM`` environment variable and CLI flags on top.
* **Data directory** -- :func:`get_data_dir`, XDG compliant on Linux/BSD,
  holds crash logs written by the CLI.
"""

from __future__ import annotations

import json
import os
import platform
import tempfile
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from plugwire.exceptions import ConfigError
from plugwire.models import ProjectConfig

_APP_NAME = "plugwire"

PROJECT_CONFIG_FILENAME = "plugwire.json"
PLATFORM_ENV_VAR = "PLUGWIRE_PLATFORM"


# --- Data directory (crash logs) ---


def _is_xdg_platform() -> bool:
    """Return True if the platform supports XDG Base Directory spec (Linux/FreeBSD)."""
    return platform.system() == "Linux" or platform.system().endswith("BSD")


def get_data_dir() -> Path:
    """Return the data directory (crash logs), creating it if necessary.

    On Linux/BSD: ``$XDG_DATA_HOME/plugwire/`` (default ``~/.local/share/plugwire/``).
    On macOS/Windows: ``~/.plugwire/``.

    Returns:
        Absolute path to the data directory (guaranteed to exist).
    """
    if _is_xdg_platform():
        env_value = os.environ.get("XDG_DATA_HOME", "")
        base = Path(env_value) if env_value else Path.home() / ".local" / "share"
        path = base / _APP_NAME
    else:
        path = Path.home() / f".{_APP_NAME}"
    path.mkdir(parents=True, exist_ok=True)
    return path


# --- Atomic file writes ---


def _atomic_write(path: Path, data: str) -> None:
    """Write data to file atomically using temp file + rename.

    The temporary file is created in the same directory as *path* so that
    ``os.replace`` is guaranteed to be an atomic rename on POSIX systems.
    On success the temp file is renamed over *path*; on any failure the temp
    file is cleaned up.
    """
    path.parent.mkdir(parents=True, exist_ok=True)

    fd = None
    tmp_path: Optional[str] = None
    try:
        fd = tempfile.NamedTemporaryFile(
            mode="w",
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            delete=False,
            encoding="utf-8",
        )
        tmp_path = fd.name
        fd.write(data)
        fd.flush()
        os.fsync(fd.fileno())
        fd.close()
        fd = None  # prevent double-close in finally
        os.replace(tmp_path, path)
    except BaseException:
        # Clean up the temp file on any error (including KeyboardInterrupt).
        if fd is not None:
            fd.close()
        if tmp_path is not None:
            try:
                os.unlink(tmp_path)
            except OSError:
                pass
        raise


# --- Project config ---


def project_config_path(project_dir: Path) -> Path:
    """Path to the project's ``plugwire.json``."""
    return project_dir / PROJECT_CONFIG_FILENAME


def load_project_config(project_dir: Path) -> ProjectConfig:
    """Load ``plugwire.json`` from *project_dir*.

    Returns:
        The deserialised :class:`~plugwire.models.ProjectConfig`. If the
        file does not exist, a default instance is returned.

    Raises:
        ConfigError: If the file exists but contains invalid JSON or fails
            Pydantic validation.
    """
    path = project_config_path(project_dir)
    if not path.is_file():
        return ProjectConfig()
    try:
        text = path.read_text(encoding="utf-8")
        data = json.loads(text)
        return ProjectConfig.model_validate(data)
    except (json.JSONDecodeError, ValidationError) as exc:
        raise ConfigError(f"Invalid project config at {path}: {exc}") from exc


def save_project_config(project_dir: Path, config: ProjectConfig) -> None:
    """Persist the project configuration atomically to disk."""
    data = config.model_dump(mode="json")
    _atomic_write(project_config_path(project_dir), json.dumps(data, indent=2) + "\n")


# --- Precedence resolution ---


def resolve_config(
    project_dir: Path,
    cli_platform: Optional[str] = None,
) -> ProjectConfig:
    """Resolve config with full precedence chain.

    Precedence (high to low):
        1. CLI flags (``cli_platform``)
        2. Environment variables (``PLUGWIRE_PLATFORM``)
        3. Project config (``<project>/plugwire.json``)
        4. Defaults

    Returns:
        The effective :class:`~plugwire.models.ProjectConfig`.
    """
    config = load_project_config(project_dir)

    env_platform = os.environ.get(PLATFORM_ENV_VAR)
    if env_platform:
        config.platform = env_platform
    if cli_platform is not None:
        config.platform = cli_platform

    return config
