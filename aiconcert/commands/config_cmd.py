"""CLI handlers for config commands."""

from __future__ import annotations

import click

from aiconcert.config import DEFAULT_CONFIG_PATH, init_config, load_config


@click.group("config")
def config_group():
    """Manage configuration."""
    pass


@config_group.command("init")
def config_init():
    """Create default configuration file."""
    path = init_config()
    click.echo(f"Configuration created at: {path}")


@config_group.command("show")
def config_show():
    """Show current configuration."""
    config = load_config()
    click.echo(f"Config file: {config.config_path}")
    click.echo(f"  API URL: {config.server.api_url or '(not set)'}")
    click.echo(f"  WebSocket URL: {config.server.ws_url or '(not set)'}")
    has_token = "configured" if config.server.auth_token else "not set"
    click.echo(f"  Auth token ({config.server.auth_token_env}): {has_token}")
    click.echo(f"  Command timeout: {config.commands.timeout:g}s")
    click.echo(f"  Connect timeout: {config.commands.open_timeout:g}s")
    click.echo(f"  HTTP timeout: {config.http.timeout:g}s")
    prompt = "custom" if config.tool.system_prompt else "default"
    click.echo(f"  System prompt: {prompt}")


@config_group.command("set")
@click.argument("key")
@click.argument("value")
def config_set(key: str, value: str):
    """Set a configuration value.

    Modifies the TOML config file. Key uses dot notation, e.g.:
    server.api_url, commands.timeout
    """
    import tomli_w

    path = DEFAULT_CONFIG_PATH
    if not path.exists():
        click.echo("No config file found. Run 'aiconcert config init' first.", err=True)
        return

    try:
        import tomllib
    except ImportError:
        import tomli as tomllib  # type: ignore[no-redef]

    with open(path, "rb") as f:
        data = tomllib.load(f)

    parts = key.split(".")
    target = data
    for part in parts[:-1]:
        target = target.setdefault(part, {})

    final_key = parts[-1]
    if value.lower() in ("true", "false"):
        target[final_key] = value.lower() == "true"
    else:
        try:
            target[final_key] = float(value) if "." in value else int(value)
        except ValueError:
            target[final_key] = value

    with open(path, "wb") as f:
        tomli_w.dump(data, f)

    click.echo(f"Set {key} = {value}")
