"""Bitbucket lifecycle extension pack: default contributors, commands and rendering."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from bitbucket_lifecycle.bitbucket.api import BitbucketApi
from bitbucket_lifecycle.bitbucket.queries import BitbucketLifecycleQueries
from bitbucket_lifecycle.commands.handlers import BitbucketCommandHandlers
from bitbucket_lifecycle.commands.models import (
    CreateTagParameters,
    DeleteBranchParameters,
    MergePullRequestParameters,
    RaisePullRequestParameters,
)
from bitbucket_lifecycle.commands.registry import CommandRegistry, CommandSpec
from bitbucket_lifecycle.config import LifecycleConfig
from bitbucket_lifecycle.contract import (
    BITBUCKET_PROVIDER_TYPE,
    CREATE_TAG_COMMAND,
    DELETE_BRANCH_COMMAND,
    MERGE_PULL_REQUEST_COMMAND,
    RAISE_PULL_REQUEST_COMMAND,
)
from bitbucket_lifecycle.core.contributors import (
    ApproveGoalActionContributor,
    CancelGoalSetActionContributor,
    ContributorRegistry,
    DeleteActionContributor,
    DisplayGoalActionContributor,
    ExpandAttachmentsActionContributor,
    MergeActionContributor,
    PullRequestActionContributor,
    RaisePrActionContributor,
    TagPushActionContributor,
)
from bitbucket_lifecycle.core.models.entities import GoalSet, Push, Repo
from bitbucket_lifecycle.core.rendering import RenderContext, RenderedActions, render_actions

if TYPE_CHECKING:
    from collections.abc import AsyncIterator, Iterable, Mapping

    from bitbucket_lifecycle.core.contributors import ActionContributor
    from bitbucket_lifecycle.core.models.entities import LifecycleNode
    from bitbucket_lifecycle.core.models.enums import RendererId
    from bitbucket_lifecycle.core.ports import LifecycleQueries, MessageClient

logger = logging.getLogger(__name__)


def default_contributors() -> list[ActionContributor]:
    """Built-in contributors in registration (and therefore display) order."""
    return [
        RaisePrActionContributor(),
        MergeActionContributor(),
        DeleteActionContributor(),
        PullRequestActionContributor(),
        TagPushActionContributor(),
        ApproveGoalActionContributor(),
        CancelGoalSetActionContributor(),
        DisplayGoalActionContributor(),
        ExpandAttachmentsActionContributor(),
    ]


def register_bitbucket_commands(
    registry: CommandRegistry,
    handlers: BitbucketCommandHandlers,
) -> None:
    registry.register(
        CommandSpec(
            name=RAISE_PULL_REQUEST_COMMAND,
            parameters=RaisePullRequestParameters,
            handler=handlers.raise_pull_request,
            intent=("raise bitbucket pr", "raise bitbucket pullrequest"),
            description="Raise a Bitbucket pull request",
        )
    )
    registry.register(
        CommandSpec(
            name=MERGE_PULL_REQUEST_COMMAND,
            parameters=MergePullRequestParameters,
            handler=handlers.merge_pull_request,
            intent=("merge bitbucket pr", "merge bitbucket pullrequest"),
            description="Merge a Bitbucket pull request",
        )
    )
    registry.register(
        CommandSpec(
            name=DELETE_BRANCH_COMMAND,
            parameters=DeleteBranchParameters,
            handler=handlers.delete_branch,
            intent=("delete bitbucket branch",),
            description="Delete a Bitbucket branch",
        )
    )
    registry.register(
        CommandSpec(
            name=CREATE_TAG_COMMAND,
            parameters=CreateTagParameters,
            handler=handlers.create_tag,
            intent=("create bitbucket tag",),
            description="Create an annotated tag on a Bitbucket commit",
        )
    )


def parse_entities(raw: Mapping[str, Any] | None) -> dict[str, Any]:
    """Parse the ancestor payloads a render pass may consult."""
    raw = raw or {}
    entities: dict[str, Any] = {}
    if isinstance(raw.get("repo"), dict):
        entities["repo"] = Repo.from_dict(raw["repo"])
    if isinstance(raw.get("push"), dict):
        entities["push"] = Push.from_dict(raw["push"])
    if isinstance(raw.get("goalSets"), list):
        entities["goalSets"] = tuple(
            GoalSet.from_dict(item) for item in raw["goalSets"] if isinstance(item, dict)
        )
    if "deleted" in raw:
        entities["deleted"] = bool(raw["deleted"])
    return entities


def node_repo(node: LifecycleNode, entities: Mapping[str, Any]) -> Repo | None:
    """The repository a node belongs to, preferring the render-pass ancestor."""
    repo = entities.get("repo")
    if isinstance(repo, Repo):
        return repo
    match node:
        case GoalSet(push=Push(repo=push_repo)):
            return push_repo
        case GoalSet(goals=goals) if goals:
            return goals[0].repo
        case GoalSet():
            push = entities.get("push")
            return push.repo if isinstance(push, Push) else None
        case _:
            return node.repo


class LifecyclePack:
    """Wires contributors, queries and commands for Bitbucket-hosted repositories."""

    def __init__(
        self,
        config: LifecycleConfig | None = None,
        *,
        queries: LifecycleQueries | None = None,
        handlers: BitbucketCommandHandlers | None = None,
        contributors: Iterable[ActionContributor] | None = None,
    ) -> None:
        self.config = config or LifecycleConfig()
        self.queries = queries
        self.contributors = ContributorRegistry(self.config)
        self.contributors.register_all(
            default_contributors() if contributors is None else contributors
        )
        self.commands = CommandRegistry()
        if handlers is not None:
            register_bitbucket_commands(self.commands, handlers)

    @staticmethod
    def supports_repo(repo: Repo | None) -> bool:
        return repo is not None and repo.provider_type == BITBUCKET_PROVIDER_TYPE

    def context_for(
        self,
        renderer_id: RendererId | str,
        *,
        entities: Mapping[str, Any] | None = None,
        active_renderers: Iterable[str] = (),
    ) -> RenderContext:
        """Build a fresh render context for one pass."""
        return RenderContext(
            renderer_id=renderer_id,
            entities=MappingProxyType(dict(entities or {})),
            rendering_style=self.config.rendering.style,
            active_renderers=frozenset(active_renderers),
            queries=self.queries,
        )

    async def render(
        self,
        node: LifecycleNode,
        renderer_id: RendererId | str,
        *,
        entities: Mapping[str, Any] | None = None,
        active_renderers: Iterable[str] = (),
    ) -> RenderedActions:
        """Render the actions for ``node``; repos on other providers get none."""
        entities = entities or {}
        repo = node_repo(node, entities)
        if not self.supports_repo(repo):
            logger.debug("Skipping %s: provider is not %s", node.kind, BITBUCKET_PROVIDER_TYPE)
            return RenderedActions()
        context = self.context_for(
            renderer_id,
            entities=entities,
            active_renderers=active_renderers,
        )
        return await render_actions(self.contributors, node, context)

    async def dispatch(self, name: str, parameters: Mapping[str, Any]) -> dict[str, Any]:
        return await self.commands.dispatch(name, parameters)


@asynccontextmanager
async def open_pack(
    config: LifecycleConfig,
    messages: MessageClient,
) -> AsyncIterator[LifecyclePack]:
    """Yield a pack backed by a live Bitbucket client, closing it afterwards."""
    async with BitbucketApi(config.bitbucket) as api:
        yield LifecyclePack(
            config,
            queries=BitbucketLifecycleQueries(api),
            handlers=BitbucketCommandHandlers(api, messages, config),
        )


__all__ = [
    "LifecyclePack",
    "default_contributors",
    "node_repo",
    "open_pack",
    "parse_entities",
    "register_bitbucket_commands",
]
