"""
Configuration management commands.
"""

from pathlib import Path
from typing import Any

import click
import yaml
from pydantic import ValidationError

from repoman.cli.base import handle_errors
from repoman.config import CONFIG_PATHS, Settings, load_yaml_config


def _convert_value(value: str) -> Any:
    """Best-effort conversion of a command line string to a YAML scalar."""
    lowered = value.lower()
    if lowered in ("true", "yes", "on"):
        return True
    if lowered in ("false", "no", "off"):
        return False
    if lowered in ("null", "none", "~"):
        return None
    try:
        return int(value)
    except ValueError:
        pass
    try:
        return float(value)
    except ValueError:
        return value


def _key_path(key: str) -> list[str]:
    """Split a dotted key; color keys keep their own dots (``colors..cs``)."""
    section, _, rest = key.partition(".")
    if section == "colors" and rest:
        return [section, rest]
    return key.split(".")


@click.group()
def config():
    """Configuration management."""
    pass


@config.command("show")
@click.pass_obj
def config_show(obj: dict):
    """Display the effective configuration as JSON."""
    settings: Settings = obj["settings"]
    click.echo(settings.model_dump_json(indent=2))


@config.command("set")
@click.argument("key")
@click.argument("value")
@click.pass_obj
@handle_errors
def config_set(obj: dict, key: str, value: str):
    """
    Set a configuration value in the YAML config file.

    KEY is a dot-separated path like 'diagram.type'. Color mappings take the
    file key after 'colors.', so '.cs' is set with 'colors..cs'.

    Examples:
        repoman config set diagram.type risk
        repoman config set crawler.git_timeout 300
        repoman config set colors..rs orange
    """
    config_path: Path = obj.get("config_path") or CONFIG_PATHS[0]
    data = load_yaml_config(config_path)

    keys = _key_path(key)
    current = data
    for k in keys[:-1]:
        if k not in current:
            current[k] = {}
        elif not isinstance(current[k], dict):
            raise click.ClickException(f"Cannot set nested key under non-mapping value at '{k}'")
        current = current[k]

    converted = _convert_value(value)
    current[keys[-1]] = converted

    try:
        Settings(**data)
    except ValidationError as e:
        raise click.ClickException(f"Invalid value for {key}: {e.errors()[0]['msg']}") from e

    config_path.parent.mkdir(parents=True, exist_ok=True)
    with open(config_path, "w", encoding="utf-8") as f:
        yaml.safe_dump(data, f, default_flow_style=False, sort_keys=False)

    click.echo(f"Set {key} = {converted}")
    click.echo(f"Config saved to: {config_path}")
