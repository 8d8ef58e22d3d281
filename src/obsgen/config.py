"""Configuration resolution with project files, environment variables and XDG paths.

This module handles all configuration for obsgen:

* **Project config** -- an optional ``./obsgen.json`` next to the client
  library, deserialised into :class:`~obsgen.models.GeneratorConfig`. See
  :func:`load_project_config`.
* **Precedence resolution** -- :func:`resolve_config` merges CLI flags,
  environment variables, the project config and defaults into the effective
  configuration.
* **Data directory** -- XDG compliant location for crash logs, see
  :func:`get_data_dir`.

Recognised environment variables:

``GH_COMMIT``
    Git ref of obs-websocket to generate from.
``GH_TOKEN``
    GitHub token, sent to avoid API rate limits.
``OBSGEN_OUTPUT``
    Destination path of the generated module.
"""

from __future__ import annotations

import json
import os
import platform
from pathlib import Path
from typing import Any, Optional

from pydantic import ValidationError

from obsgen.exceptions import ConfigError
from obsgen.models import GeneratorConfig

_APP_NAME = "obsgen"
_PROJECT_CONFIG_FILENAME = "obsgen.json"


# --- XDG path resolution ---


def _is_xdg_platform() -> bool:
    """Return True if the platform supports XDG Base Directory spec (Linux/FreeBSD)."""
    return platform.system() == "Linux" or platform.system().endswith("BSD")


def get_data_dir() -> Path:
    """Return the data directory (crash logs), creating it if necessary.

    On Linux/BSD: ``$XDG_DATA_HOME/obsgen/`` (default ``~/.local/share/obsgen/``).
    On macOS/Windows: ``~/.obsgen/``.

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


# --- Project-local config ---


def load_project_config(directory: Optional[Path] = None) -> Optional[dict[str, Any]]:
    """Load ``obsgen.json`` from *directory* (default: the working directory).

    Returns:
        The parsed JSON object, or ``None`` if the file does not exist.

    Raises:
        ConfigError: If the file exists but is not a JSON object.
    """
    path = (directory or Path.cwd()) / _PROJECT_CONFIG_FILENAME
    if not path.is_file():
        return None
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, OSError) as exc:
        raise ConfigError(f"Invalid project config at {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"Invalid project config at {path}: expected a JSON object")
    return data


# --- Precedence resolution ---


def resolve_config(
    cli_commit: Optional[str] = None,
    cli_output: Optional[str] = None,
    cli_lint: Optional[bool] = None,
    cli_strict: Optional[bool] = None,
    cli_overrides: Optional[bool] = None,
) -> GeneratorConfig:
    """Resolve the generator config with the full precedence chain.

    Precedence (high to low):
        1. CLI flags (``cli_*`` arguments that are not ``None``)
        2. Environment variables (``GH_COMMIT``, ``GH_TOKEN``, ``OBSGEN_OUTPUT``)
        3. Project config (``./obsgen.json``)
        4. Defaults

    Returns:
        The effective :class:`~obsgen.models.GeneratorConfig`.

    Raises:
        ConfigError: If the project config is unreadable or fails validation.
    """
    data: dict[str, Any] = load_project_config() or {}

    env_commit = os.environ.get("GH_COMMIT")
    if env_commit is not None:
        data["commit"] = env_commit
    env_token = os.environ.get("GH_TOKEN")
    if env_token:
        data["github_token"] = env_token
    env_output = os.environ.get("OBSGEN_OUTPUT")
    if env_output:
        data["output_file"] = env_output

    try:
        config = GeneratorConfig.model_validate(data)
    except ValidationError as exc:
        raise ConfigError(f"Invalid configuration: {exc}") from exc

    if cli_commit is not None:
        config.commit = cli_commit
    if cli_output is not None:
        config.output_file = cli_output
    if cli_lint is not None:
        config.lint.enabled = cli_lint
    if cli_strict is not None:
        config.strict = cli_strict
    if cli_overrides is not None:
        config.overrides = cli_overrides

    return config
