"""Root CLI command registration."""

from __future__ import annotations

import logging

import click

from bitbucket_lifecycle.version import get_version

from .command import command
from .config import config
from .render import render


@click.group()
@click.version_option(version=get_version(), prog_name="bitbucket-lifecycle")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging on stderr")
def cli(verbose: bool) -> None:
    """Render and run Bitbucket lifecycle chat actions."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


cli.add_command(render)
cli.add_command(command)
cli.add_command(config)
