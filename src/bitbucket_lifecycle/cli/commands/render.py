"""Render the actions offered for a lifecycle node payload."""

from __future__ import annotations

import asyncio
import json
from pathlib import Path
from typing import Any

import click

from bitbucket_lifecycle.bitbucket.api import BitbucketApi
from bitbucket_lifecycle.bitbucket.queries import BitbucketLifecycleQueries
from bitbucket_lifecycle.config import LifecycleConfig
from bitbucket_lifecycle.core.models.entities import parse_node
from bitbucket_lifecycle.core.models.enums import NodeKind, RendererId
from bitbucket_lifecycle.core.rendering import RenderedActions
from bitbucket_lifecycle.pack import LifecyclePack, parse_entities


def read_json(path: Path) -> dict[str, Any]:
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise click.ClickException(f"{path} is not valid JSON: {exc}") from exc
    if not isinstance(payload, dict):
        raise click.ClickException(f"{path} must contain a JSON object")
    return payload


async def _render(
    config: LifecycleConfig,
    kind: str,
    renderer: str,
    node_payload: dict[str, Any],
    context_payload: dict[str, Any] | None,
    active_renderers: tuple[str, ...],
    *,
    offline: bool,
) -> RenderedActions:
    node = parse_node(kind, node_payload)
    entities = parse_entities(context_payload)
    if offline:
        return await LifecyclePack(config).render(
            node,
            renderer,
            entities=entities,
            active_renderers=active_renderers,
        )
    async with BitbucketApi(config.bitbucket) as api:
        pack = LifecyclePack(config, queries=BitbucketLifecycleQueries(api))
        return await pack.render(
            node,
            renderer,
            entities=entities,
            active_renderers=active_renderers,
        )


@click.command()
@click.argument(
    "node_file",
    type=click.Path(exists=True, dir_okay=False, readable=True, path_type=Path),
)
@click.option(
    "--kind",
    type=click.Choice([kind.value for kind in NodeKind]),
    required=True,
    help="Lifecycle node variant contained in NODE_FILE",
)
@click.option(
    "--renderer",
    type=click.Choice([renderer.value for renderer in RendererId]),
    required=True,
    help="Render pass to collect actions for",
)
@click.option(
    "--context",
    "context_file",
    type=click.Path(exists=True, dir_okay=False, readable=True, path_type=Path),
    default=None,
    help="JSON object with ancestor entities (repo, push, goalSets, deleted)",
)
@click.option(
    "--active-renderer",
    "active_renderers",
    multiple=True,
    help="Renderer id active for the channel (repeatable)",
)
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Config file (defaults to the user config directory)",
)
@click.option(
    "--offline",
    is_flag=True,
    help="Do not query Bitbucket; freshness checks fail closed",
)
def render(
    node_file: Path,
    kind: str,
    renderer: str,
    context_file: Path | None,
    active_renderers: tuple[str, ...],
    config_path: Path | None,
    offline: bool,
) -> None:
    """Print the actions rendered for NODE_FILE as JSON.

    \b
    Examples:
        bitbucket-lifecycle render pr.json --kind pull_request --renderer status
        bitbucket-lifecycle render push.json --kind push --renderer commit --context ctx.json
    """
    config = LifecycleConfig.load(config_path)
    node_payload = read_json(node_file)
    context_payload = read_json(context_file) if context_file is not None else None
    try:
        actions = asyncio.run(
            _render(
                config,
                kind,
                renderer,
                node_payload,
                context_payload,
                active_renderers,
                offline=offline,
            )
        )
    except ValueError as exc:
        raise click.ClickException(f"Invalid {kind} payload: {exc}") from exc

    click.echo(json.dumps(actions.to_dict(), indent=2, ensure_ascii=False))
