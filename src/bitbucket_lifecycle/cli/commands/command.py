"""Run a lifecycle command the way a clicked action would."""

from __future__ import annotations

import asyncio
import json
from pathlib import Path
from typing import Any

import click

from bitbucket_lifecycle.config import LifecycleConfig
from bitbucket_lifecycle.pack import open_pack


class ConsoleMessageClient:
    """``MessageClient`` that writes chat responses to stderr as JSON."""

    async def respond(self, message: dict[str, Any], *, message_id: str | None = None) -> None:
        payload = {"message_id": message_id, **message} if message_id else message
        click.echo(json.dumps(payload, ensure_ascii=False), err=True)


def parse_params(values: tuple[str, ...]) -> dict[str, str]:
    params: dict[str, str] = {}
    for value in values:
        key, sep, raw = value.partition("=")
        if not sep or not key.strip():
            raise click.BadParameter(f"expected KEY=VALUE, got {value!r}", param_hint="--param")
        params[key.strip()] = raw
    return params


async def _dispatch(config: LifecycleConfig, name: str, params: dict[str, str]) -> dict[str, Any]:
    async with open_pack(config, ConsoleMessageClient()) as pack:
        return await pack.dispatch(name, params)


@click.command()
@click.argument("name")
@click.option("-p", "--param", "params", multiple=True, help="Command parameter as KEY=VALUE")
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Config file (defaults to the user config directory)",
)
def command(name: str, params: tuple[str, ...], config_path: Path | None) -> None:
    """Validate and run command NAME against Bitbucket.

    \b
    Examples:
        bitbucket-lifecycle command DeleteBitbucketBranch -p branch=feature -p repo=app
        bitbucket-lifecycle command CreateBitbucketTag -p tag=v1.2.0 -p sha=0a1b2c3
    """
    parsed = parse_params(params)
    config = LifecycleConfig.load(config_path)
    result = asyncio.run(_dispatch(config, name, parsed))
    click.echo(json.dumps(result, indent=2, ensure_ascii=False))
    if not result.get("success"):
        raise SystemExit(1)
