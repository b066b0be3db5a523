import datetime as dt
import importlib
import logging
import os
import sys
import types

import pytest

from penalty import config
from penalty.config import AppConfig, BanPolicyConfig, configure_logging, load_config

_ensure_env_loaded = config._ensure_env_loaded


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    monkeypatch.delenv("BAN_DECAY_DAYS", raising=False)
    monkeypatch.delenv("LOG_LEVEL", raising=False)
    monkeypatch.setattr(config, "_ensure_env_loaded", lambda: None)


class TestLoadConfig:
    def test_defaults(self) -> None:
        app_config = load_config()
        assert app_config.ban_policy.decay_days == 720
        assert app_config.ban_policy.decay_horizon == dt.timedelta(days=720)
        assert app_config.log_level == "INFO"

    def test_env_override(self, monkeypatch) -> None:
        monkeypatch.setenv("BAN_DECAY_DAYS", "30")
        monkeypatch.setenv("LOG_LEVEL", "debug")
        app_config = load_config()
        assert app_config.ban_policy.decay_horizon == dt.timedelta(days=30)
        assert app_config.log_level == "DEBUG"

    @pytest.mark.parametrize("raw", ["abc", "0", "-5"])
    def test_bad_decay_days_fall_back(self, monkeypatch, raw) -> None:
        monkeypatch.setenv("BAN_DECAY_DAYS", raw)
        assert load_config().ban_policy.decay_days == 720

    def test_dotenv_file_loaded(self, monkeypatch, tmp_path) -> None:
        monkeypatch.setattr(config, "_ensure_env_loaded", _ensure_env_loaded)
        (tmp_path / ".env").write_text("BAN_DECAY_DAYS=90\n")
        monkeypatch.chdir(tmp_path)
        try:
            assert load_config().ban_policy.decay_days == 90
        finally:
            os.environ.pop("BAN_DECAY_DAYS", None)


def test_configure_logging(monkeypatch) -> None:
    calls = []
    monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: calls.append(kwargs))
    configure_logging(AppConfig(ban_policy=BanPolicyConfig(), log_level="WARNING"))
    assert calls == [{"level": "WARNING"}]


class TestPackageConfigModule:
    def test_lives_inside_package(self) -> None:
        assert config.__name__ == "penalty.config"
        assert "penalty" in config.__file__

    def test_unrelated_top_level_config_is_ignored(self, monkeypatch) -> None:
        # A caller's own `config` module must not be picked up by the ban timer.
        monkeypatch.setitem(sys.modules, "config", types.ModuleType("config"))
        ban_timer = importlib.reload(importlib.import_module("penalty.services.ban_timer"))
        assert ban_timer.BanPolicyConfig is BanPolicyConfig

    def test_dotenv_outside_cwd_not_read(self, monkeypatch, tmp_path) -> None:
        monkeypatch.setattr(config, "_ensure_env_loaded", _ensure_env_loaded)
        project = tmp_path / "project"
        project.mkdir()
        (tmp_path / ".env").write_text("BAN_DECAY_DAYS=45\n")
        monkeypatch.chdir(project)
        try:
            assert load_config().ban_policy.decay_days == 720
        finally:
            os.environ.pop("BAN_DECAY_DAYS", None)
