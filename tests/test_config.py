"""Tests for settings loading."""

import logging
from pathlib import Path

import pytest

from storenav.config import LOG_FORMAT, Settings, load_settings
from storenav.core.enums import Algorithm
from storenav.core.exceptions import ConfigurationError


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch, tmp_path):
    """Fixture isolating settings from the developer's environment."""
    for name in ("DATA_DIR", "HOST", "PORT", "ALGORITHM", "QUERY_TIMEOUT", "CACHE_SIZE", "CACHE_TTL", "LOG_LEVEL"):
        monkeypatch.delenv(f"STORENAV_{name}", raising=False)
    monkeypatch.chdir(tmp_path)


def test_defaults():
    settings = load_settings()

    assert settings.data_dir == Path("data")
    assert settings.port == 5000
    assert settings.algorithm is Algorithm.DIJKSTRA
    assert settings.query_timeout is None
    assert settings.cache_size == 256
    assert settings.log_level == "INFO"


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("STORENAV_PORT", "6000")
    monkeypatch.setenv("STORENAV_ALGORITHM", "A*")
    monkeypatch.setenv("STORENAV_QUERY_TIMEOUT", "2.5")
    monkeypatch.setenv("storenav_log_level", "debug")

    settings = load_settings()

    assert settings.port == 6000
    assert settings.algorithm is Algorithm.A_STAR
    assert settings.query_timeout == 2.5
    assert settings.log_level == "DEBUG"


def test_env_file(tmp_path):
    (tmp_path / ".env").write_text("STORENAV_CACHE_SIZE=0\n", encoding="utf-8")
    assert load_settings().cache_size == 0


def test_explicit_overrides_win(monkeypatch, tmp_path):
    monkeypatch.setenv("STORENAV_ALGORITHM", "dijkstra")

    settings = load_settings(algorithm="astar", data_dir=str(tmp_path), port=None)

    assert settings.algorithm is Algorithm.A_STAR
    assert settings.data_dir == tmp_path
    assert settings.port == 5000


@pytest.mark.parametrize(
    "overrides",
    [
        {"algorithm": "floyd"},
        {"port": 70000},
        {"log_level": "LOUD"},
        {"cache_ttl": 0},
        {"query_timeout": -1},
    ],
)
def test_invalid_values(overrides):
    with pytest.raises(ConfigurationError, match="Invalid configuration"):
        load_settings(**overrides)


def test_logging_config():
    config = Settings(log_level="warning").logging_config
    assert config == {"level": "WARNING", "format": LOG_FORMAT}
    assert logging.getLevelName(config["level"]) == logging.WARNING
