"""Tests for jsonfetch.config -- XDG paths, atomic writes, env overrides."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from jsonfetch.config import (
    _atomic_write,
    apply_env_overrides,
    get_cache_dir,
    get_config_dir,
    get_data_dir,
    global_config_path,
    load_global_config,
    resolve_config,
    save_global_config,
)
from jsonfetch.exceptions import ConfigError
from jsonfetch.models import CacheConfig, GlobalConfig


# ---------------------------------------------------------------------------
# XDG path resolution
# ---------------------------------------------------------------------------


class TestXDGPaths:
    def test_dirs_follow_xdg_env(self, isolated_config: Path) -> None:
        assert get_config_dir() == isolated_config / "config" / "jsonfetch"
        assert get_cache_dir() == isolated_config / "cache" / "jsonfetch"
        assert get_data_dir() == isolated_config / "data" / "jsonfetch"
        assert get_config_dir().is_dir()

    def test_xdg_default_under_home(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr("jsonfetch.config._is_xdg_platform", lambda: True)
        monkeypatch.delenv("XDG_CONFIG_HOME", raising=False)
        monkeypatch.setattr(Path, "home", classmethod(lambda cls: tmp_path))
        assert get_config_dir() == tmp_path / ".config" / "jsonfetch"

    def test_non_xdg_fallback(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr("jsonfetch.config._is_xdg_platform", lambda: False)
        monkeypatch.setattr(Path, "home", classmethod(lambda cls: tmp_path))
        assert get_config_dir() == tmp_path / ".jsonfetch"
        assert get_cache_dir() == tmp_path / ".jsonfetch" / "cache"
        assert get_data_dir() == tmp_path / ".jsonfetch"


# ---------------------------------------------------------------------------
# Atomic writes
# ---------------------------------------------------------------------------


class TestAtomicWrite:
    def test_writes_content(self, tmp_path: Path) -> None:
        target = tmp_path / "sub" / "file.json"
        _atomic_write(target, "hello\n")
        assert target.read_text(encoding="utf-8") == "hello\n"

    def test_no_temp_files_left(self, tmp_path: Path) -> None:
        target = tmp_path / "file.json"
        _atomic_write(target, "a")
        _atomic_write(target, "b")
        assert [p.name for p in tmp_path.iterdir()] == ["file.json"]
        assert target.read_text(encoding="utf-8") == "b"


# ---------------------------------------------------------------------------
# Global config
# ---------------------------------------------------------------------------


class TestGlobalConfig:
    def test_missing_file_gives_defaults(self, isolated_config: Path) -> None:
        assert load_global_config() == GlobalConfig()

    def test_save_then_load(self, isolated_config: Path) -> None:
        cfg = GlobalConfig(cache=CacheConfig(backend="disk", ttl_seconds=120))
        save_global_config(cfg)
        assert json.loads(global_config_path().read_text())["cache"]["backend"] == "disk"
        assert load_global_config() == cfg

    def test_invalid_json(self, isolated_config: Path) -> None:
        global_config_path().write_text("{not json", encoding="utf-8")
        with pytest.raises(ConfigError, match="Invalid global config"):
            load_global_config()

    def test_invalid_field_type(self, isolated_config: Path) -> None:
        global_config_path().write_text(json.dumps({"cache": {"port": "abc"}}), encoding="utf-8")
        with pytest.raises(ConfigError):
            load_global_config()

    @pytest.mark.parametrize(
        "data",
        [
            {"cache": {"ttl_seconds": 0}},
            {"cache": {"socket_timeout": -1}},
            {"request": {"timeout": -30}},
            {"output": {"format": "yaml"}},
        ],
    )
    def test_out_of_range_value(self, isolated_config: Path, data) -> None:
        global_config_path().write_text(json.dumps(data), encoding="utf-8")
        with pytest.raises(ConfigError, match="Invalid global config"):
            load_global_config()


# ---------------------------------------------------------------------------
# Environment overrides and precedence
# ---------------------------------------------------------------------------


class TestEnvOverrides:
    def test_all_overrides(self, isolated_config: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("JSONFETCH_CACHE_ENABLED", "no")
        monkeypatch.setenv("JSONFETCH_CACHE_BACKEND", "disk")
        monkeypatch.setenv("JSONFETCH_CACHE_TTL", "60")
        monkeypatch.setenv("JSONFETCH_REDIS_HOST", "cache.local")
        monkeypatch.setenv("JSONFETCH_REDIS_PORT", "6380")
        monkeypatch.setenv("JSONFETCH_REDIS_DB", "3")
        monkeypatch.setenv("JSONFETCH_TIMEOUT", "5")

        cfg = apply_env_overrides(GlobalConfig())

        assert cfg.cache.enabled is False
        assert cfg.cache.backend == "disk"
        assert cfg.cache.ttl_seconds == 60
        assert (cfg.cache.host, cfg.cache.port, cfg.cache.db) == ("cache.local", 6380, 3)
        assert cfg.request.timeout == 5

    def test_empty_value_ignored(self, isolated_config: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("JSONFETCH_REDIS_PORT", "")
        assert apply_env_overrides(GlobalConfig()).cache.port == 6379

    @pytest.mark.parametrize(
        "var,value",
        [
            ("JSONFETCH_REDIS_PORT", "six"),
            ("JSONFETCH_CACHE_ENABLED", "maybe"),
            ("JSONFETCH_CACHE_TTL", "-5"),
            ("JSONFETCH_CACHE_TTL", "0"),
            ("JSONFETCH_REDIS_PORT", "70000"),
            ("JSONFETCH_REDIS_DB", "-1"),
            ("JSONFETCH_TIMEOUT", "0"),
        ],
    )
    def test_bad_value(self, isolated_config: Path, monkeypatch: pytest.MonkeyPatch, var, value) -> None:
        monkeypatch.setenv(var, value)
        with pytest.raises(ConfigError, match=var):
            apply_env_overrides(GlobalConfig())

    def test_bad_value_names_only_offending_var(
        self, isolated_config: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("JSONFETCH_REDIS_HOST", "cache.local")
        monkeypatch.setenv("JSONFETCH_CACHE_TTL", "-5")
        with pytest.raises(ConfigError) as excinfo:
            resolve_config()
        message = str(excinfo.value)
        assert "JSONFETCH_CACHE_TTL" in message
        assert "JSONFETCH_REDIS_HOST" not in message

    def test_overrides_return_validated_copy(
        self, isolated_config: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("JSONFETCH_REDIS_PORT", "6380")
        original = GlobalConfig()
        cfg = apply_env_overrides(original)
        assert cfg.cache.port == 6380
        assert original.cache.port == 6379

    def test_env_beats_file(self, isolated_config: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        save_global_config(GlobalConfig(cache=CacheConfig(host="from-file")))
        monkeypatch.setenv("JSONFETCH_REDIS_HOST", "from-env")
        assert resolve_config().cache.host == "from-env"

    def test_cli_flags_beat_env(self, isolated_config: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("JSONFETCH_CACHE_ENABLED", "true")
        cfg = resolve_config(no_cache=True, strict=True, cli_format="json")
        assert cfg.cache.enabled is False
        assert cfg.request.raise_on_error is True
        assert cfg.output.format == "json"

    def test_strict_none_keeps_file_value(self, isolated_config: Path) -> None:
        cfg = GlobalConfig()
        cfg.request.raise_on_error = True
        save_global_config(cfg)
        assert resolve_config(strict=None).request.raise_on_error is True
