"""Tests for config loading."""

from pathlib import Path

import pytest

from aiconcert.config import AppConfig, ServerConfig, init_config, load_config
from aiconcert.errors import InvalidArgumentError


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in (
        "AICONCERT_API_URL",
        "AICONCERT_WS_URL",
        "AICONCERT_AUTH_TOKEN",
        "AICONCERT_SYSTEM_PROMPT",
    ):
        monkeypatch.delenv(name, raising=False)


class TestConfig:
    def test_load_defaults(self):
        """Loading with no file should return defaults."""
        config = load_config(Path("/nonexistent/config.toml"))
        assert config.server.api_url == ""
        assert config.server.ws_url == ""
        assert config.commands.timeout == 30.0
        assert config.http.timeout == 30.0
        assert config.tool.system_prompt == ""

    def test_env_overlay(self, monkeypatch):
        monkeypatch.setenv("AICONCERT_API_URL", "http://localhost:8080")
        monkeypatch.setenv("AICONCERT_WS_URL", "ws://localhost:8080/ws")
        monkeypatch.setenv("AICONCERT_AUTH_TOKEN", "test_auth_token")
        monkeypatch.setenv("AICONCERT_SYSTEM_PROMPT", "custom prompt")
        config = load_config(Path("/nonexistent/config.toml"))
        assert config.server.api_url == "http://localhost:8080"
        assert config.server.ws_url == "ws://localhost:8080/ws"
        assert config.server.auth_token == "test_auth_token"
        assert config.tool.system_prompt == "custom prompt"
        config.require_urls()

    def test_custom_token_env(self, tmp_path, monkeypatch):
        path = tmp_path / "config.toml"
        path.write_text('[server]\napi_url = "http://h"\nws_url = "ws://h"\nauth_token_env = "MY_TOKEN"\n')
        monkeypatch.setenv("MY_TOKEN", "abc")
        config = load_config(path)
        assert config.server.auth_token == "abc"
        assert config.server.api_url == "http://h"

    def test_missing_api_url(self):
        with pytest.raises(InvalidArgumentError, match="Missing AICONCERT_API_URL environment variable."):
            AppConfig().require_urls()

    def test_missing_ws_url(self):
        config = AppConfig(server=ServerConfig(api_url="http://localhost:8080"))
        with pytest.raises(InvalidArgumentError, match="Missing AICONCERT_WS_URL environment variable."):
            config.require_urls()

    def test_init_config(self, tmp_path):
        path = tmp_path / "config.toml"
        result = init_config(path)
        assert result == path
        assert path.exists()
        # Should be loadable
        config = load_config(path)
        assert config.commands.open_timeout == 10.0
        assert config.config_path == path
