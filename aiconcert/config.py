"""Configuration loading: TOML file + environment variable overlay."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

try:
    import tomllib
except ImportError:
    import tomli as tomllib  # type: ignore[no-redef]

from aiconcert.errors import InvalidArgumentError

DEFAULT_CONFIG_DIR = Path.home() / ".config" / "aiconcert"
DEFAULT_CONFIG_PATH = DEFAULT_CONFIG_DIR / "config.toml"

API_URL_ENV = "AICONCERT_API_URL"
WS_URL_ENV = "AICONCERT_WS_URL"
AUTH_TOKEN_ENV = "AICONCERT_AUTH_TOKEN"
SYSTEM_PROMPT_ENV = "AICONCERT_SYSTEM_PROMPT"


DEFAULT_CONFIG_TOML = """\
[server]
# Both URLs may also come from AICONCERT_API_URL / AICONCERT_WS_URL
api_url = ""
ws_url = ""
auth_token_env = "AICONCERT_AUTH_TOKEN"

[commands]
timeout = 30.0
open_timeout = 10.0

[http]
timeout = 30.0

[tool]
# Overrides the usage text shown to the model; AICONCERT_SYSTEM_PROMPT wins
system_prompt = ""
"""


@dataclass
class ServerConfig:
    api_url: str = ""
    ws_url: str = ""
    auth_token_env: str = AUTH_TOKEN_ENV
    auth_token: str = ""


@dataclass
class CommandConfig:
    timeout: float = 30.0
    open_timeout: float = 10.0


@dataclass
class HttpConfig:
    timeout: float = 30.0


@dataclass
class ToolConfig:
    system_prompt: str = ""


@dataclass
class AppConfig:
    server: ServerConfig = field(default_factory=ServerConfig)
    commands: CommandConfig = field(default_factory=CommandConfig)
    http: HttpConfig = field(default_factory=HttpConfig)
    tool: ToolConfig = field(default_factory=ToolConfig)
    config_path: Path = DEFAULT_CONFIG_PATH

    def require_urls(self) -> None:
        """Raise InvalidArgumentError if either server URL is missing."""
        if not self.server.api_url:
            raise InvalidArgumentError(f"Missing {API_URL_ENV} environment variable.")
        if not self.server.ws_url:
            raise InvalidArgumentError(f"Missing {WS_URL_ENV} environment variable.")


def _env_overlay(config: AppConfig) -> None:
    """Override config values with environment variables where applicable."""
    if url := os.environ.get(API_URL_ENV):
        config.server.api_url = url
    if url := os.environ.get(WS_URL_ENV):
        config.server.ws_url = url
    if config.server.auth_token_env:
        config.server.auth_token = os.environ.get(config.server.auth_token_env, "")
    if prompt := os.environ.get(SYSTEM_PROMPT_ENV):
        config.tool.system_prompt = prompt


def load_config(config_path: Path | None = None) -> AppConfig:
    """Load configuration from TOML file with env var overlay."""
    path = config_path or DEFAULT_CONFIG_PATH

    if path.exists():
        with open(path, "rb") as f:
            raw = tomllib.load(f)
    else:
        raw = tomllib.loads(DEFAULT_CONFIG_TOML)

    server_raw = raw.get("server", {})
    commands_raw = raw.get("commands", {})
    http_raw = raw.get("http", {})
    tool_raw = raw.get("tool", {})

    config = AppConfig(
        server=ServerConfig(
            api_url=server_raw.get("api_url", ""),
            ws_url=server_raw.get("ws_url", ""),
            auth_token_env=server_raw.get("auth_token_env", AUTH_TOKEN_ENV),
        ),
        commands=CommandConfig(
            timeout=float(commands_raw.get("timeout", 30.0)),
            open_timeout=float(commands_raw.get("open_timeout", 10.0)),
        ),
        http=HttpConfig(
            timeout=float(http_raw.get("timeout", 30.0)),
        ),
        tool=ToolConfig(
            system_prompt=tool_raw.get("system_prompt", ""),
        ),
        config_path=path,
    )

    _env_overlay(config)
    return config


def init_config(config_path: Path | None = None) -> Path:
    """Create default config file."""
    path = config_path or DEFAULT_CONFIG_PATH
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(DEFAULT_CONFIG_TOML)
    return path
