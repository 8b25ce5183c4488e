"""Tests for TOML configuration loading."""

from pathlib import Path

import pytest
import toml

from stockvision.config import (
    CONFIG_ENV_VAR,
    DEFAULT_CONFIG,
    ConfigError,
    get_config_path,
    load_config,
    write_default_config,
)


class TestLoadConfig:
    def test_missing_file_gives_defaults(self, tmp_path: Path):
        config = load_config(tmp_path / "missing.toml")
        assert config == DEFAULT_CONFIG

        config["backtest"]["fast_period"] = 3
        assert DEFAULT_CONFIG["backtest"]["fast_period"] == 20

    def test_user_values_merge_over_defaults(self, tmp_path: Path):
        path = tmp_path / "config.toml"
        path.write_text('[backtest]\nfast_period = 10\n\n[data]\ndb_path = "/tmp/sv.db"\n')

        config = load_config(path)
        assert config["backtest"]["fast_period"] == 10
        assert config["backtest"]["slow_period"] == 50
        assert config["data"]["db_path"] == "/tmp/sv.db"
        assert config["data"]["timeframe"] == "1day"
        assert config["scan"] == DEFAULT_CONFIG["scan"]

    def test_invalid_toml(self, tmp_path: Path):
        path = tmp_path / "config.toml"
        path.write_text("[backtest\nfast_period = = 1\n")

        with pytest.raises(ConfigError):
            load_config(path)


class TestConfigPath:
    def test_explicit_path_wins(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv(CONFIG_ENV_VAR, str(tmp_path / "env.toml"))
        assert get_config_path(tmp_path / "explicit.toml") == tmp_path / "explicit.toml"

    def test_env_var(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv(CONFIG_ENV_VAR, str(tmp_path / "env.toml"))
        assert get_config_path() == tmp_path / "env.toml"

    def test_default_location(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
        path = get_config_path()
        assert path.name == "config.toml"
        assert path.parent.name == "stockvision"


class TestWriteDefaultConfig:
    def test_writes_loadable_defaults(self, tmp_path: Path):
        path = write_default_config(tmp_path / "nested" / "config.toml")

        assert path.exists()
        assert toml.load(path) == DEFAULT_CONFIG

    def test_existing_file_untouched(self, tmp_path: Path):
        path = tmp_path / "config.toml"
        path.write_text("[scan]\nlimit = 5\n")

        write_default_config(path)
        assert path.read_text() == "[scan]\nlimit = 5\n"
