"""Configuration management with XDG paths, atomic writes, and env overrides.

This module handles all persistent configuration for jsonfetch:

* **Directory layout** -- XDG Base Directory compliant on Linux/BSD,
  ``~/.jsonfetch/`` on macOS and Windows. See :func:`get_config_dir`,
  :func:`get_cache_dir`, :func:`get_data_dir`.
* **Global config** -- A single :class:`~jsonfetch.models.GlobalConfig`
  JSON file holding cache, request, and output settings.
* **Precedence resolution** -- :func:`resolve_config` layers environment
  variables over the config file, which is layered over model defaults.

All file writes use an atomic temp-file-then-rename strategy
(:func:`_atomic_write`).
"""

from __future__ import annotations

import json
import os
import platform
import tempfile
from pathlib import Path
from typing import Callable, Optional

from pydantic import ValidationError

from jsonfetch.exceptions import ConfigError
from jsonfetch.models import GlobalConfig

_APP_NAME = "jsonfetch"
_CONFIG_FILENAME = "config.json"
_ENV_PREFIX = "JSONFETCH_"


# --- XDG path resolution ---


def _is_xdg_platform() -> bool:
    """Return True if the platform supports XDG Base Directory spec (Linux/FreeBSD)."""
    return platform.system() == "Linux" or platform.system().endswith("BSD")


def _fallback_base_dir() -> Path:
    """Fallback base directory for non-XDG platforms (macOS, Windows)."""
    return Path.home() / f".{_APP_NAME}"


def _xdg_base(env_var: str, default_segments: tuple[str, ...]) -> Path:
    """Resolve an XDG base directory from an env var with fallback segments under $HOME."""
    env_value = os.environ.get(env_var, "")
    if env_value:
        return Path(env_value)
    base = Path.home()
    for seg in default_segments:
        base = base / seg
    return base


def get_config_dir() -> Path:
    """Return the configuration directory, creating it if necessary.

    On Linux/BSD: ``$XDG_CONFIG_HOME/jsonfetch/`` (default ``~/.config/jsonfetch/``).
    On macOS/Windows: ``~/.jsonfetch/``.
    """
    if _is_xdg_platform():
        path = _xdg_base("XDG_CONFIG_HOME", (".config",)) / _APP_NAME
    else:
        path = _fallback_base_dir()
    path.mkdir(parents=True, exist_ok=True)
    return path


def get_cache_dir() -> Path:
    """Return the cache directory used by the ``disk`` backend, creating it if necessary.

    On Linux/BSD: ``$XDG_CACHE_HOME/jsonfetch/`` (default ``~/.cache/jsonfetch/``).
    On macOS/Windows: ``~/.jsonfetch/cache/``.
    """
    if _is_xdg_platform():
        path = _xdg_base("XDG_CACHE_HOME", (".cache",)) / _APP_NAME
    else:
        path = _fallback_base_dir() / "cache"
    path.mkdir(parents=True, exist_ok=True)
    return path


def get_data_dir() -> Path:
    """Return the data directory (crash logs), creating it if necessary.

    On Linux/BSD: ``$XDG_DATA_HOME/jsonfetch/`` (default ``~/.local/share/jsonfetch/``).
    On macOS/Windows: ``~/.jsonfetch/``.
    """
    if _is_xdg_platform():
        path = _xdg_base("XDG_DATA_HOME", (".local", "share")) / _APP_NAME
    else:
        path = _fallback_base_dir()
    path.mkdir(parents=True, exist_ok=True)
    return path


# --- Atomic file writes ---


def _atomic_write(path: Path, data: str) -> None:
    """Write data to file atomically using temp file + rename.

    The temporary file is created in the same directory as *path* so that
    ``os.replace`` is an atomic rename on POSIX systems. On any failure the
    temp file is cleaned up.
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
        fd = None
        os.replace(tmp_path, path)
    except BaseException:
        if fd is not None:
            fd.close()
        if tmp_path is not None:
            try:
                os.unlink(tmp_path)
            except OSError:
                pass
        raise


# --- Global config ---


def global_config_path() -> Path:
    """Path to the global config file."""
    return get_config_dir() / _CONFIG_FILENAME


def load_global_config() -> GlobalConfig:
    """Load the global configuration from the config directory.

    Returns:
        The deserialised :class:`~jsonfetch.models.GlobalConfig`, or a
        default instance when the file does not exist.

    Raises:
        ConfigError: If the file contains invalid JSON or fails validation.
    """
    path = global_config_path()
    if not path.is_file():
        return GlobalConfig()
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
        return GlobalConfig.model_validate(data)
    except (json.JSONDecodeError, ValueError) as exc:
        raise ConfigError(f"Invalid global config at {path}: {exc}") from exc


def save_global_config(config: GlobalConfig) -> None:
    """Persist the global configuration atomically to disk."""
    data = config.model_dump(mode="json")
    _atomic_write(global_config_path(), json.dumps(data, indent=2) + "\n")


# --- Environment overrides ---


def _parse_bool(value: str) -> bool:
    lowered = value.strip().lower()
    if lowered in ("1", "true", "yes", "on"):
        return True
    if lowered in ("0", "false", "no", "off"):
        return False
    raise ValueError(f"not a boolean: {value!r}")


# env suffix -> (section, field, converter)
_ENV_OVERRIDES: dict[str, tuple[str, str, Callable[[str], object]]] = {
    "CACHE_ENABLED": ("cache", "enabled", _parse_bool),
    "CACHE_BACKEND": ("cache", "backend", str),
    "CACHE_TTL": ("cache", "ttl_seconds", int),
    "REDIS_HOST": ("cache", "host", str),
    "REDIS_PORT": ("cache", "port", int),
    "REDIS_DB": ("cache", "db", int),
    "TIMEOUT": ("request", "timeout", int),
}


def apply_env_overrides(config: GlobalConfig) -> GlobalConfig:
    """Apply ``JSONFETCH_*`` environment variables on top of *config*.

    The merged settings are validated again, so the model's bounds apply to
    environment values as well as to the config file.

    Raises:
        ConfigError: If a variable holds a value of the wrong type or one
            outside the allowed range.
    """
    data = config.model_dump()
    # (section, field) -> variable name, for error messages
    applied: dict[tuple[str, str], str] = {}
    for suffix, (section, field, convert) in _ENV_OVERRIDES.items():
        var = f"{_ENV_PREFIX}{suffix}"
        raw = os.environ.get(var)
        if raw is None or raw == "":
            continue
        try:
            value = convert(raw)
        except ValueError as exc:
            raise ConfigError(f"Invalid value for {var}: {exc}") from exc
        data[section][field] = value
        applied[(section, field)] = var

    if not applied:
        return config
    try:
        return GlobalConfig.model_validate(data)
    except ValidationError as exc:
        offending = [
            applied[loc]
            for loc in (tuple(err["loc"][:2]) for err in exc.errors())
            if loc in applied
        ]
        names = ", ".join(offending or applied.values())
        raise ConfigError(f"Invalid value for {names}: {exc}") from exc


def resolve_config(
    no_cache: bool = False,
    strict: Optional[bool] = None,
    cli_format: Optional[str] = None,
) -> GlobalConfig:
    """Resolve the effective configuration.

    Precedence (high to low):
        1. CLI flags (``no_cache``, ``strict``, ``cli_format``)
        2. Environment variables (``JSONFETCH_REDIS_HOST``, ``JSONFETCH_CACHE_TTL``, ...)
        3. User config (``~/.config/jsonfetch/config.json``)
        4. Defaults
    """
    config = apply_env_overrides(load_global_config())

    if no_cache:
        config.cache.enabled = False
    if strict is not None:
        config.request.raise_on_error = strict
    if cli_format is not None:
        config.output.format = cli_format

    return config
