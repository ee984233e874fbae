"""Action contributors for push lifecycle nodes."""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING

from bitbucket_lifecycle.contract import (
    CREATE_TAG_COMMAND,
    PUSH_EXPAND_ATTACHMENTS_ID,
    PUSH_RAISE_PULL_REQUEST_ID,
    PUSH_TAG_ID,
    RAISE_PULL_REQUEST_COMMAND,
    UPDATE_GOAL_DISPLAY_STATE_COMMAND,
)
from bitbucket_lifecycle.core.contributors.sdk import (
    Action,
    ActionOption,
    BaseContributor,
    CommandInvocation,
)
from bitbucket_lifecycle.core.freshness import should_offer_raise_pr
from bitbucket_lifecycle.core.models.entities import GoalDisplayPreference, Push
from bitbucket_lifecycle.core.models.enums import (
    GoalDisplayFormat,
    NodeKind,
    RendererId,
)
from bitbucket_lifecycle.core.rendering import PUSH_EXPAND_RENDERER_ID

if TYPE_CHECKING:
    from bitbucket_lifecycle.core.models.entities import LifecycleNode
    from bitbucket_lifecycle.core.rendering import RenderContext

logger = logging.getLogger(__name__)

_SEMVER_TAG = re.compile(r"^(?P<prefix>v?)(?P<major>\d+)\.(?P<minor>\d+)\.(?P<patch>\d+)$")


def next_release_tags(tag: str) -> list[str]:
    """Return the next patch, minor and major versions after a semver ``tag``."""
    match = _SEMVER_TAG.fullmatch(tag.strip())
    if match is None:
        return []
    prefix = match["prefix"]
    major, minor, patch = int(match["major"]), int(match["minor"]), int(match["patch"])
    return [
        f"{prefix}{major}.{minor}.{patch + 1}",
        f"{prefix}{major}.{minor + 1}.0",
        f"{prefix}{major + 1}.0.0",
    ]


def current_display_preference(push: Push) -> GoalDisplayPreference:
    return push.goals_display_state or GoalDisplayPreference()


def display_state_command(push: Push, preference: GoalDisplayPreference) -> CommandInvocation:
    """Command that persists ``preference`` as the push's goal display state."""
    return CommandInvocation.of(
        UPDATE_GOAL_DISPLAY_STATE_COMMAND,
        state=preference.state.value,
        format=preference.format.value if preference.format else None,
        owner=push.repo.owner,
        name=push.repo.name,
        branch=push.branch,
        sha=push.after.sha,
    )


class PullRequestActionContributor(BaseContributor):
    """Offer "Raise PR" for pushes to a non-default branch without a pull request."""

    id = PUSH_RAISE_PULL_REQUEST_ID
    node_kind = NodeKind.PUSH
    renderer_ids = frozenset({RendererId.COMMIT})

    def supports(self, node: LifecycleNode) -> bool:
        if not isinstance(node, Push):
            return False
        fallback = self.config.rendering.default_branch_fallback
        return node.branch != node.repo.default_branch_or(fallback)

    async def buttons_for(self, node: LifecycleNode, context: RenderContext) -> list[Action]:
        if not isinstance(node, Push) or not self.renders_in(context):
            return []

        repo = context.repo or node.repo
        if not await should_offer_raise_pr(context.queries, repo, node.branch, node.after.sha):
            return []

        fallback = self.config.rendering.default_branch_fallback
        return [
            Action(
                text="Raise PR",
                role="global",
                command=CommandInvocation.of(
                    RAISE_PULL_REQUEST_COMMAND,
                    owner=repo.owner,
                    repo=repo.name,
                    title=node.after.title_or(node.branch),
                    body=node.after.body,
                    base=node.repo.default_branch_or(fallback),
                    head=node.branch,
                ),
            )
        ]


class TagPushActionContributor(BaseContributor):
    """Offer a release tag menu on pushes to the default branch."""

    id = PUSH_TAG_ID
    node_kind = NodeKind.PUSH
    renderer_ids = frozenset({RendererId.COMMIT})

    def supports(self, node: LifecycleNode) -> bool:
        if not isinstance(node, Push):
            return False
        fallback = self.config.rendering.default_branch_fallback
        return node.branch == node.repo.default_branch_or(fallback)

    async def menus_for(self, node: LifecycleNode, context: RenderContext) -> list[Action]:
        if not isinstance(node, Push) or not self.renders_in(context):
            return []
        if context.queries is None:
            return []

        repo = context.repo or node.repo
        try:
            latest = await context.queries.latest_tag(repo.owner, repo.name)
        except Exception as exc:  # quality-allow-broad-except
            logger.warning("Tag query failed for %s/%s: %s", repo.owner, repo.name, exc)
            return []
        if not latest:
            return []

        tags = next_release_tags(latest)
        if not tags:
            return []
        return [
            Action(
                text="Tag",
                role="global",
                command=CommandInvocation.of(
                    CREATE_TAG_COMMAND,
                    sha=node.after.sha,
                    repo=repo.name,
                    owner=repo.owner,
                ),
                options=tuple(
                    ActionOption(
                        text=tag,
                        command=CommandInvocation.of(
                            CREATE_TAG_COMMAND,
                            tag=tag,
                            sha=node.after.sha,
                            repo=repo.name,
                            owner=repo.owner,
                        ),
                    )
                    for tag in tags
                ),
            )
        ]


class ExpandAttachmentsActionContributor(BaseContributor):
    """Toggle goal attachments between compact and full display."""

    id = PUSH_EXPAND_ATTACHMENTS_ID
    node_kind = NodeKind.PUSH
    renderer_ids = frozenset({RendererId.EXPAND_ATTACHMENTS})

    async def buttons_for(self, node: LifecycleNode, context: RenderContext) -> list[Action]:
        if not isinstance(node, Push) or not self.renders_in(context):
            return []
        if PUSH_EXPAND_RENDERER_ID in context.active_renderers:
            return []
        style = context.rendering_style
        if style != GoalDisplayFormat.COMPACT:
            return []

        push = context.push or node
        current = current_display_preference(push)
        if (current.format or style) == GoalDisplayFormat.FULL:
            text, target = "Less ˄", GoalDisplayFormat.COMPACT
        else:
            text, target = "More ˅", GoalDisplayFormat.FULL
        return [
            Action(
                text=text,
                command=display_state_command(push, current.apply(format=target)),
            )
        ]


__all__ = [
    "ExpandAttachmentsActionContributor",
    "PullRequestActionContributor",
    "TagPushActionContributor",
    "current_display_preference",
    "display_state_command",
    "next_release_tags",
]
