"""Tests for the action rendering engine."""

from __future__ import annotations

import logging

import pytest

from bitbucket_lifecycle.core.contributors.sdk import (
    Action,
    BaseContributor,
    CommandInvocation,
    ContributorRegistry,
)
from bitbucket_lifecycle.core.models.enums import NodeKind, RendererId
from bitbucket_lifecycle.core.rendering import RenderContext, RenderedActions, render_actions
from tests.helpers.factories import make_push

pytestmark = pytest.mark.unit


class _StaticContributor(BaseContributor):
    node_kind = NodeKind.PUSH
    renderer_ids = frozenset({RendererId.COMMIT})

    def __init__(
        self,
        contributor_id: str,
        *,
        buttons: tuple[str, ...] = (),
        menus: tuple[str, ...] = (),
        applicable: bool = True,
    ) -> None:
        super().__init__()
        self.id = contributor_id
        self._buttons = buttons
        self._menus = menus
        self._applicable = applicable
        self.calls = 0

    def supports(self, node) -> bool:
        return self._applicable

    async def buttons_for(self, node, context) -> list[Action]:
        self.calls += 1
        return [Action(text=text, command=CommandInvocation.of("Noop")) for text in self._buttons]

    async def menus_for(self, node, context) -> list[Action]:
        return [Action(text=text, command=CommandInvocation.of("Noop")) for text in self._menus]


class _FailingContributor(_StaticContributor):
    async def buttons_for(self, node, context) -> list[Action]:
        raise RuntimeError("contributor exploded")


def _registry(*contributors: BaseContributor) -> ContributorRegistry:
    registry = ContributorRegistry()
    registry.register_all(contributors)
    return registry


class TestRenderActions:
    @pytest.mark.asyncio()
    async def test_preserves_registration_and_production_order(self) -> None:
        registry = _registry(
            _StaticContributor("push.first", buttons=("a", "b"), menus=("m1",)),
            _StaticContributor("push.second", buttons=("c",), menus=("m2",)),
        )

        rendered = await render_actions(
            registry, make_push(), RenderContext(renderer_id=RendererId.COMMIT)
        )

        assert [action.text for action in rendered.buttons] == ["a", "b", "c"]
        assert [action.text for action in rendered.menus] == ["m1", "m2"]

    @pytest.mark.asyncio()
    async def test_failing_contributor_contributes_nothing(
        self, caplog: pytest.LogCaptureFixture
    ) -> None:
        registry = _registry(
            _StaticContributor("push.before", buttons=("ok",)),
            _FailingContributor("push.broken", buttons=("never",)),
            _StaticContributor("push.after", buttons=("also ok",)),
        )

        with caplog.at_level(logging.ERROR):
            rendered = await render_actions(
                registry, make_push(), RenderContext(renderer_id=RendererId.COMMIT)
            )

        assert [action.text for action in rendered.buttons] == ["ok", "also ok"]
        assert "push.broken" in caplog.text

    @pytest.mark.asyncio()
    async def test_unsupported_contributors_are_skipped(self) -> None:
        skipped = _StaticContributor("push.skipped", buttons=("x",), applicable=False)
        registry = _registry(skipped)

        rendered = await render_actions(
            registry, make_push(), RenderContext(renderer_id=RendererId.COMMIT)
        )

        assert rendered == RenderedActions()
        assert not rendered
        assert skipped.calls == 0

    @pytest.mark.asyncio()
    async def test_other_render_pass_selects_no_contributors(self) -> None:
        contributor = _StaticContributor("push.commit_only", buttons=("x",))
        registry = _registry(contributor)

        rendered = await render_actions(
            registry, make_push(), RenderContext(renderer_id=RendererId.GOALS)
        )

        assert not rendered
        assert contributor.calls == 0

    def test_rendered_actions_serialize(self) -> None:
        rendered = RenderedActions(
            buttons=(Action(text="Go", command=CommandInvocation.of("Noop", flag=True)),)
        )

        assert rendered.to_dict() == {
            "buttons": [{"text": "Go", "command": {"name": "Noop", "parameters": {"flag": True}}}],
            "menus": [],
        }


class TestRenderContext:
    def test_extracts_ancestor_entities(self) -> None:
        push = make_push()
        context = RenderContext(
            renderer_id=RendererId.GOALS,
            entities={"push": push, "deleted": True, "goalSets": [1, 2]},
        )

        assert context.push is push
        assert context.repo is None
        assert context.deleted
        assert context.goal_sets == (1, 2)
        assert context.extract("missing") is None

    def test_defaults_are_empty(self) -> None:
        context = RenderContext(renderer_id=RendererId.COMMIT)

        assert context.goal_sets == ()
        assert not context.deleted
        assert context.queries is None
