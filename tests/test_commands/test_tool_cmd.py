"""Tests for the exec/call/schema CLI commands."""

from __future__ import annotations

import json

import pytest
from click.testing import CliRunner

from aiconcert.cli import cli
from aiconcert.services.tool import DEFAULT_MODEL_PROMPT


@pytest.fixture
def no_server_env(monkeypatch, tmp_path):
    monkeypatch.setattr("aiconcert.config.DEFAULT_CONFIG_PATH", tmp_path / "config.toml")
    for name in ("AICONCERT_API_URL", "AICONCERT_WS_URL", "AICONCERT_SYSTEM_PROMPT"):
        monkeypatch.delenv(name, raising=False)


class TestSchemaCommand:
    def test_prints_definition_without_server_urls(self, no_server_env):
        result = CliRunner().invoke(cli, ["schema"])
        assert result.exit_code == 0, result.output
        definition = json.loads(result.output)
        assert definition["name"] == "aiconcert"
        assert definition["description"].endswith(DEFAULT_MODEL_PROMPT)
        assert definition["parameters"]["required"] == ["action"]

    def test_uses_system_prompt_override(self, no_server_env, monkeypatch):
        monkeypatch.setenv("AICONCERT_SYSTEM_PROMPT", "Use wisely")
        result = CliRunner().invoke(cli, ["schema"])
        assert json.loads(result.output)["description"].endswith("\nUse wisely")


class TestCallCommand:
    def test_missing_urls_exit(self, no_server_env):
        result = CliRunner().invoke(cli, ["call", "project", "--operation", "list"])
        assert result.exit_code != 0
        assert "Missing AICONCERT_API_URL environment variable." in result.output

    def test_params_must_be_json(self, no_server_env):
        result = CliRunner().invoke(cli, ["call", "test", "--params", "{not json"])
        assert result.exit_code == 2
        assert "not valid JSON" in result.output
