"""Action contributors for branch lifecycle nodes."""

from __future__ import annotations

from typing import TYPE_CHECKING

from bitbucket_lifecycle.contract import BRANCH_RAISE_PULL_REQUEST_ID, RAISE_PULL_REQUEST_COMMAND
from bitbucket_lifecycle.core.contributors.sdk import Action, BaseContributor, CommandInvocation
from bitbucket_lifecycle.core.freshness import should_offer_raise_pr
from bitbucket_lifecycle.core.models.entities import Branch
from bitbucket_lifecycle.core.models.enums import NodeKind, RendererId

if TYPE_CHECKING:
    from bitbucket_lifecycle.core.models.entities import LifecycleNode
    from bitbucket_lifecycle.core.rendering import RenderContext


class RaisePrActionContributor(BaseContributor):
    """Offer "Raise PR" for a live branch that has no pull request yet."""

    id = BRANCH_RAISE_PULL_REQUEST_ID
    node_kind = NodeKind.BRANCH
    renderer_ids = frozenset({RendererId.BRANCH})

    def supports(self, node: LifecycleNode) -> bool:
        match node:
            case Branch(commit=commit, pull_requests=pull_requests):
                return commit is not None and not pull_requests
            case _:
                return False

    async def buttons_for(self, node: LifecycleNode, context: RenderContext) -> list[Action]:
        if not isinstance(node, Branch) or node.commit is None:
            return []
        if not self.renders_in(context) or context.deleted:
            return []
        if not await should_offer_raise_pr(context.queries, node.repo, node.name, node.commit.sha):
            return []

        fallback = self.config.rendering.default_branch_fallback
        return [
            Action(
                text="Raise PR",
                role="global",
                command=CommandInvocation.of(
                    RAISE_PULL_REQUEST_COMMAND,
                    head=node.name,
                    base=node.repo.default_branch_or(fallback),
                    repo=node.repo.name,
                    owner=node.repo.owner,
                    title=node.commit.message if node.commit.message.strip() else node.name,
                ),
            )
        ]


__all__ = ["RaisePrActionContributor"]
