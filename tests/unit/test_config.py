"""
Unit tests for configuration module.

Tests configuration loading from environment variables.
"""

import dataclasses

import pytest

from src.core import config

ENV_VARS = [
    "BUNNY_STREAM_HOSTNAME",
    "BUNNY_STREAM_LIBRARY_ID",
    "BUNNY_STREAM_API_KEY",
    "BUNNY_STREAM_API_BASE_URL",
    "BUNNY_STREAM_TIMEOUT",
    "BUNNY_STREAM_ITEMS_PER_PAGE",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Start every test without stream variables."""
    for name in ENV_VARS:
        # setenv first so teardown also removes values loaded from .env files
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)


def _set_required(monkeypatch):
    monkeypatch.setenv("BUNNY_STREAM_HOSTNAME", "vz-abc.b-cdn.net")
    monkeypatch.setenv("BUNNY_STREAM_LIBRARY_ID", "1234")
    monkeypatch.setenv("BUNNY_STREAM_API_KEY", "secret")


def test_load_config_default_values(monkeypatch):
    """Test load_config() with only the required variables set."""
    _set_required(monkeypatch)

    cfg = config.load_config()

    assert cfg.hostname == "vz-abc.b-cdn.net"
    assert cfg.library_id == 1234
    assert cfg.api_key == "secret"
    assert cfg.api_base_url == "https://video.bunnycdn.com"
    assert cfg.timeout == 60.0
    assert cfg.items_per_page == 1000
    assert cfg.cdn_base_url == "https://vz-abc.b-cdn.net"


def test_load_config_custom_values(monkeypatch):
    """Test load_config() with optional variables overridden."""
    _set_required(monkeypatch)
    monkeypatch.setenv("BUNNY_STREAM_API_BASE_URL", "http://localhost:8080/")
    monkeypatch.setenv("BUNNY_STREAM_TIMEOUT", "2.5")
    monkeypatch.setenv("BUNNY_STREAM_ITEMS_PER_PAGE", "50")

    cfg = config.load_config()

    assert cfg.api_base_url == "http://localhost:8080"
    assert cfg.timeout == 2.5
    assert cfg.items_per_page == 50


def test_load_config_missing_required(monkeypatch):
    """Missing required variables are all named in the error."""
    monkeypatch.setenv("BUNNY_STREAM_HOSTNAME", "vz-abc.b-cdn.net")

    with pytest.raises(ValueError) as exc_info:
        config.load_config()

    assert "library_id" in str(exc_info.value)
    assert "api_key" in str(exc_info.value)


def test_load_config_reads_env_file(tmp_path):
    """Variables can come from a .env file."""
    env_file = tmp_path / "stream.env"
    env_file.write_text(
        "BUNNY_STREAM_HOSTNAME=vz-file.b-cdn.net\n"
        "BUNNY_STREAM_LIBRARY_ID=77\n"
        "BUNNY_STREAM_API_KEY=from-file\n"
    )

    cfg = config.load_config(str(env_file))

    assert cfg.library_id == 77
    assert cfg.api_key == "from-file"


def test_load_config_returns_fresh_values(monkeypatch):
    """Each call reads the environment again."""
    _set_required(monkeypatch)
    first = config.load_config()

    monkeypatch.setenv("BUNNY_STREAM_LIBRARY_ID", "5678")
    second = config.load_config()

    assert first.library_id == 1234
    assert second.library_id == 5678


def test_config_is_immutable(monkeypatch):
    _set_required(monkeypatch)
    cfg = config.load_config()

    with pytest.raises(dataclasses.FrozenInstanceError):
        cfg.api_key = "other"


def test_from_mapping_non_numeric_library_id():
    with pytest.raises(ValueError):
        config.StreamConfig.from_mapping({"hostname": "h", "library_id": "abc", "api_key": "k"})
