"""Shared test fixtures for jsonfetch.

Provides an in-memory cache store that records every call, isolated XDG
config directories, and output-manager setup. These fixtures are
automatically discovered by pytest.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Optional

import pytest

from jsonfetch.cache.base import CacheStore
from jsonfetch.exceptions import CacheError
from jsonfetch.output import OutputFormat, OutputManager, reset_output, set_output


class RecordingStore(CacheStore):
    """Dict-backed :class:`CacheStore` that records reads and writes.

    ``fail`` makes every operation raise :class:`CacheError`, standing in
    for an unreachable server.
    """

    backend = "memory"

    def __init__(self, fail: bool = False) -> None:
        self.data: dict[str, str] = {}
        self.gets: list[str] = []
        self.sets: list[tuple[str, str, int]] = []
        self.fail = fail
        self.closed = False

    def set_value(self, key: str, value: str, ttl_seconds: int) -> bool:
        self.sets.append((key, value, ttl_seconds))
        if self.fail:
            raise CacheError("store down")
        self.data[key] = value
        return True

    def get_value(self, key: str) -> Optional[str]:
        self.gets.append(key)
        if self.fail:
            raise CacheError("store down")
        return self.data.get(key)

    def stats(self) -> dict[str, Any]:
        return {"backend": self.backend, "size": len(self.data)}

    def close(self) -> None:
        self.closed = True


# ---------------------------------------------------------------------------
# Auto-reset global output state between tests
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_output_between_tests() -> None:
    """Reset the global OutputManager after every test.

    Rich consoles cache sys.stdout/sys.stderr at creation time, so a
    manager created under one test's capture must not leak into the next.
    """
    yield
    reset_output()


@pytest.fixture
def store() -> RecordingStore:
    """A fresh, working in-memory store."""
    return RecordingStore()


@pytest.fixture
def failing_store() -> RecordingStore:
    """An in-memory store whose every operation raises CacheError."""
    return RecordingStore(fail=True)


@pytest.fixture
def quiet_output() -> OutputManager:
    """Install a quiet, colourless PLAIN output manager."""
    output = OutputManager(format=OutputFormat.PLAIN, no_color=True, quiet=True)
    set_output(output)
    return output


@pytest.fixture
def verbose_output() -> OutputManager:
    """Install a verbose, colourless PLAIN output manager (debug lines on stderr)."""
    output = OutputManager(format=OutputFormat.PLAIN, no_color=True, verbose=True)
    set_output(output)
    return output


@pytest.fixture
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Isolate configuration to a temporary directory.

    Points XDG_CONFIG_HOME, XDG_CACHE_HOME, and XDG_DATA_HOME at
    subdirectories of tmp_path, forces the XDG code path, and clears all
    JSONFETCH_* environment variables.

    Returns:
        The tmp_path root directory.
    """
    monkeypatch.setattr("jsonfetch.config._is_xdg_platform", lambda: True)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.setenv("XDG_CACHE_HOME", str(tmp_path / "cache"))
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "data"))

    for var in [
        "JSONFETCH_CACHE_ENABLED",
        "JSONFETCH_CACHE_BACKEND",
        "JSONFETCH_CACHE_TTL",
        "JSONFETCH_REDIS_HOST",
        "JSONFETCH_REDIS_PORT",
        "JSONFETCH_REDIS_DB",
        "JSONFETCH_TIMEOUT",
    ]:
        monkeypatch.delenv(var, raising=False)

    monkeypatch.chdir(tmp_path)
    return tmp_path
