"""
repo-man CLI entry point.

Usage:
    repoman render [REPO_PATH] [-o OUTPUT] [--type size|risk] [--layout folder|flat]
    repoman files [REPO_PATH] [--risk] [-f table|json|csv]
    repoman config show
    repoman config set KEY VALUE
"""

from pathlib import Path
from typing import Optional

import click

from repoman import __version__
from repoman.cli.commands import config, files, render
from repoman.config import find_config_file, load_settings
from repoman.exceptions import ConfigurationError
from repoman.logging_config import setup_logging


@click.group()
@click.version_option(version=__version__, prog_name="repoman")
@click.option("--config", "config_file", type=click.Path(dir_okay=False), default=None,
              help="YAML config file (default: first of repoman.yaml, config/repoman.yaml, ~/.repoman/config.yaml)")
@click.option("--log-level", type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
              default=None, help="Override the configured log level")
@click.option("--log-json", is_flag=True, default=False, help="Emit logs as JSON lines")
@click.pass_context
def cli(ctx: click.Context, config_file: Optional[str], log_level: Optional[str], log_json: bool):
    """repo-man - draw a git repository as nested bubbles."""
    config_path = Path(config_file) if config_file else find_config_file()
    try:
        settings = load_settings(config_path)
    except ConfigurationError as e:
        raise click.ClickException(str(e)) from e

    setup_logging(
        level=log_level or settings.logging.level,
        json_format=log_json or settings.logging.json_format,
        log_file=settings.logging.file,
    )
    ctx.obj = {"settings": settings, "config_path": config_path}


cli.add_command(render)
cli.add_command(files)
cli.add_command(config)


def main():
    """Main entry point."""
    cli()


if __name__ == "__main__":
    main()
