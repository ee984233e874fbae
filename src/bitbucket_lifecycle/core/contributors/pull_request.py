"""Action contributors for pull request lifecycle nodes."""

from __future__ import annotations

from typing import TYPE_CHECKING

from bitbucket_lifecycle.contract import (
    DELETE_BRANCH_COMMAND,
    MERGE_PULL_REQUEST_COMMAND,
    PULL_REQUEST_DELETE_ID,
    PULL_REQUEST_MERGE_ID,
)
from bitbucket_lifecycle.core.contributors.sdk import Action, BaseContributor, CommandInvocation
from bitbucket_lifecycle.core.merge import (
    is_open_and_approved,
    merge_options,
    statuses_allow_merge,
)
from bitbucket_lifecycle.core.models.entities import PullRequest
from bitbucket_lifecycle.core.models.enums import NodeKind, PullRequestState, RendererId

if TYPE_CHECKING:
    from bitbucket_lifecycle.core.models.entities import LifecycleNode
    from bitbucket_lifecycle.core.rendering import RenderContext


class MergeActionContributor(BaseContributor):
    """Offer merge methods once checks and reviews allow it."""

    id = PULL_REQUEST_MERGE_ID
    node_kind = NodeKind.PULL_REQUEST
    renderer_ids = frozenset({RendererId.STATUS})

    def supports(self, node: LifecycleNode) -> bool:
        return isinstance(node, PullRequest) and is_open_and_approved(node)

    async def buttons_for(self, node: LifecycleNode, context: RenderContext) -> list[Action]:
        if not isinstance(node, PullRequest) or not self.renders_in(context):
            return []
        if node.head is None or not statuses_allow_merge(node):
            return []

        repo = context.repo or node.repo
        options = merge_options(
            node,
            repo,
            generated_marker=self.config.rendering.generated_commit_marker,
        )
        return [
            Action(
                text=option.label,
                role="global",
                command=CommandInvocation.of(
                    MERGE_PULL_REQUEST_COMMAND,
                    pr=node.number,
                    title=option.title,
                    message=option.message,
                    sha=node.head.sha,
                    repo=repo.name,
                    project=repo.owner,
                    merge_method=option.method.value,
                ),
            )
            for option in options
        ]


class DeleteActionContributor(BaseContributor):
    """Offer branch deletion for closed pull requests off non-default branches."""

    id = PULL_REQUEST_DELETE_ID
    node_kind = NodeKind.PULL_REQUEST
    renderer_ids = frozenset({RendererId.PULL_REQUEST})

    def supports(self, node: LifecycleNode) -> bool:
        if not isinstance(node, PullRequest):
            return False
        fallback = self.config.rendering.default_branch_fallback
        return (
            node.state == PullRequestState.CLOSED
            and node.branch is not None
            and node.branch.name != node.repo.default_branch_or(fallback)
        )

    async def buttons_for(self, node: LifecycleNode, context: RenderContext) -> list[Action]:
        if not isinstance(node, PullRequest) or node.branch is None:
            return []
        if not self.renders_in(context):
            return []

        repo = context.repo or node.repo
        return [
            Action(
                text="Delete Branch",
                role="global",
                command=CommandInvocation.of(
                    DELETE_BRANCH_COMMAND,
                    branch=node.branch.name,
                    repo=repo.name,
                    owner=repo.owner,
                ),
            )
        ]


__all__ = ["DeleteActionContributor", "MergeActionContributor"]
