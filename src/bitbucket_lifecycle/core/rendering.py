"""Render-pass context and the action rendering engine."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, Final

from bitbucket_lifecycle.core.models.enums import GoalDisplayFormat, RendererId

if TYPE_CHECKING:
    from collections.abc import Mapping

    from bitbucket_lifecycle.core.contributors.sdk import (
        Action,
        ActionContributor,
        ContributorRegistry,
    )
    from bitbucket_lifecycle.core.models.entities import GoalSet, LifecycleNode, Push, Repo
    from bitbucket_lifecycle.core.ports import LifecycleQueries

logger = logging.getLogger(__name__)

# Channel-level renderer that always shows goal attachments expanded.
PUSH_EXPAND_RENDERER_ID: Final = "push.expand"


@dataclass(frozen=True, slots=True)
class RenderContext:
    """Everything a contributor may consult while rendering one node.

    Built fresh for every render call and never retained.
    """

    renderer_id: RendererId | str
    entities: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))
    rendering_style: GoalDisplayFormat = GoalDisplayFormat.FULL
    active_renderers: frozenset[str] = frozenset()
    queries: LifecycleQueries | None = None

    def extract(self, key: str) -> Any:
        """Look up an ancestor entity (``repo``, ``push``, ``goalSets``, ``deleted``)."""
        return self.entities.get(key)

    @property
    def repo(self) -> Repo | None:
        return self.extract("repo")

    @property
    def push(self) -> Push | None:
        return self.extract("push")

    @property
    def goal_sets(self) -> tuple[GoalSet, ...]:
        return tuple(self.extract("goalSets") or ())

    @property
    def deleted(self) -> bool:
        return bool(self.extract("deleted"))


@dataclass(frozen=True, slots=True)
class RenderedActions:
    buttons: tuple[Action, ...] = ()
    menus: tuple[Action, ...] = ()

    def __bool__(self) -> bool:
        return bool(self.buttons or self.menus)

    def to_dict(self) -> dict[str, list[dict[str, Any]]]:
        return {
            "buttons": [action.to_dict() for action in self.buttons],
            "menus": [action.to_dict() for action in self.menus],
        }


async def _contribute(
    contributor: ActionContributor,
    node: LifecycleNode,
    context: RenderContext,
) -> tuple[list[Action], list[Action]]:
    try:
        buttons, menus = await asyncio.gather(
            contributor.buttons_for(node, context),
            contributor.menus_for(node, context),
        )
    except Exception:  # quality-allow-broad-except
        logger.exception(
            "Contributor %s failed while rendering %s in %s",
            contributor.id,
            node.kind,
            context.renderer_id,
        )
        return [], []
    return buttons, menus


async def render_actions(
    registry: ContributorRegistry,
    node: LifecycleNode,
    context: RenderContext,
) -> RenderedActions:
    """Collect the actions every applicable contributor offers for ``node``.

    Contributors run concurrently; results keep registration order, then the
    order each contributor produced them in. A failing contributor contributes
    nothing instead of failing the pass.
    """
    accepted = [
        contributor
        for contributor in registry.contributors_for(node.kind, context.renderer_id)
        if contributor.supports(node)
    ]
    if not accepted:
        return RenderedActions()

    results = await asyncio.gather(
        *(_contribute(contributor, node, context) for contributor in accepted)
    )
    buttons = tuple(action for contributed, _ in results for action in contributed)
    menus = tuple(action for _, contributed in results for action in contributed)
    logger.debug(
        "Rendered %d button(s) and %d menu(s) for %s in %s",
        len(buttons),
        len(menus),
        node.kind,
        context.renderer_id,
    )
    return RenderedActions(buttons=buttons, menus=menus)


__all__ = ["PUSH_EXPAND_RENDERER_ID", "RenderContext", "RenderedActions", "render_actions"]
