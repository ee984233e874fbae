"""Configuration file commands."""

from __future__ import annotations

import asyncio
from pathlib import Path

import click

from bitbucket_lifecycle.config import LifecycleConfig
from bitbucket_lifecycle.paths import get_config_path


@click.group()
def config() -> None:
    """Manage the bitbucket-lifecycle config file."""
    pass


@config.command()
@click.option(
    "--path",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Where to write the file (defaults to the user config directory)",
)
@click.option("--force", is_flag=True, help="Overwrite an existing config file")
def init(config_path: Path | None, force: bool) -> None:
    """Write a config file with default settings."""
    target = config_path or get_config_path()
    if target.exists() and not force:
        raise click.ClickException(f"{target} already exists (use --force to overwrite)")
    asyncio.run(LifecycleConfig().save(target))
    click.echo(f"Wrote {target}")


@config.command()
def path() -> None:
    """Print the default config file location."""
    click.echo(get_config_path())
