"""Tests for environment-driven settings."""
import pytest

from strategic_performance.config import Config


@pytest.fixture
def fresh_config(monkeypatch):
    monkeypatch.delenv("DISPLAY_DECIMALS", raising=False)
    monkeypatch.delenv("ENABLE_DEBUG_TIMING", raising=False)
    yield monkeypatch
    monkeypatch.undo()
    Config.reset()


def test_defaults(fresh_config):
    config = Config.reset()
    assert config.get_app_setting("DISPLAY_DECIMALS") == 2
    assert not config.is_feature_enabled("DEBUG_TIMING")
    assert config.get_app_setting("MISSING", "fallback") == "fallback"


def test_environment_overrides(fresh_config):
    fresh_config.setenv("DISPLAY_DECIMALS", "4")
    fresh_config.setenv("ENABLE_DEBUG_TIMING", "True")
    config = Config.reset()
    assert config.get_app_setting("DISPLAY_DECIMALS") == 4
    assert config.is_feature_enabled("debug_timing")


def test_invalid_decimals_fall_back(fresh_config):
    fresh_config.setenv("DISPLAY_DECIMALS", "two")
    assert Config.reset().get_app_setting("DISPLAY_DECIMALS") == 2


def test_singleton():
    assert Config() is Config()


def test_reset_updates_shared_instance(fresh_config):
    shared = Config()
    fresh_config.setenv("DISPLAY_DECIMALS", "3")
    assert Config.reset() is shared
    assert shared.get_app_setting("DISPLAY_DECIMALS") == 3
