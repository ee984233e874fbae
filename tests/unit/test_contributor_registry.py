"""Tests for contributor registration and resolution."""

from __future__ import annotations

import pytest

from bitbucket_lifecycle.config import LifecycleConfig
from bitbucket_lifecycle.core.contributors.sdk import (
    Action,
    ActionOption,
    BaseContributor,
    CommandInvocation,
    ConfirmDialog,
    ContributorRegistry,
)
from bitbucket_lifecycle.core.models.enums import NodeKind, RendererId
from bitbucket_lifecycle.pack import default_contributors

pytestmark = pytest.mark.unit


def _contributor(contributor_id: str, kind: NodeKind, *renderers: RendererId) -> BaseContributor:
    contributor = BaseContributor()
    contributor.id = contributor_id
    contributor.node_kind = kind
    contributor.renderer_ids = frozenset(renderers)
    return contributor


class TestContributorRegistry:
    def test_resolves_by_kind_and_pass_in_registration_order(self) -> None:
        registry = ContributorRegistry()
        first = _contributor("push.first", NodeKind.PUSH, RendererId.COMMIT)
        other_pass = _contributor("push.other", NodeKind.PUSH, RendererId.GOALS)
        second = _contributor("push.second", NodeKind.PUSH, RendererId.COMMIT)
        other_kind = _contributor("branch.first", NodeKind.BRANCH, RendererId.COMMIT)
        registry.register_all([first, other_pass, second, other_kind])

        assert registry.contributors_for(NodeKind.PUSH, RendererId.COMMIT) == (first, second)
        assert registry.contributors_for(NodeKind.GOAL_SET, RendererId.COMMIT) == ()

    def test_rejects_duplicate_ids(self) -> None:
        registry = ContributorRegistry()
        registry.register(_contributor("push.same", NodeKind.PUSH, RendererId.COMMIT))

        with pytest.raises(ValueError, match="already registered"):
            registry.register(_contributor("push.same", NodeKind.PUSH, RendererId.GOALS))

    @pytest.mark.parametrize("contributor_id", ["", "Push.Upper", "p", "push-dash", "1push"])
    def test_rejects_malformed_ids(self, contributor_id: str) -> None:
        registry = ContributorRegistry()

        with pytest.raises(ValueError, match="must match"):
            registry.register(_contributor(contributor_id, NodeKind.PUSH, RendererId.COMMIT))

    def test_rejects_objects_without_contract(self) -> None:
        registry = ContributorRegistry()

        with pytest.raises(TypeError, match="does not implement"):
            registry.register(object())  # type: ignore[arg-type]

    def test_configures_contributors_on_registration(self) -> None:
        config = LifecycleConfig.model_validate({"rendering": {"default_branch_fallback": "main"}})
        registry = ContributorRegistry(config)
        contributor = _contributor("push.configured", NodeKind.PUSH, RendererId.COMMIT)

        registry.register(contributor)

        assert contributor.config is config

    def test_default_contributor_ids_are_unique_and_valid(self) -> None:
        registry = ContributorRegistry()
        registry.register_all(default_contributors())

        assert registry.registered_ids() == (
            "branch.raise_pullrequest",
            "pull_request.merge",
            "pull_request.delete",
            "push.raise_pullrequest",
            "push.tag",
            "push.expand_attachments",
            "push.approve_goal",
            "push.cancel_goal_set",
            "push.display_goals",
        )


class TestActionModel:
    def test_invocation_drops_none_parameters(self) -> None:
        invocation = CommandInvocation.of("RaiseBitbucketPullRequest", title="t", body=None)

        assert dict(invocation.parameters) == {"title": "t"}

    def test_invocation_accepts_name_parameter(self) -> None:
        invocation = CommandInvocation.of("UpdateGoalDisplayState", name="app", owner="PRJ")

        assert invocation.name == "UpdateGoalDisplayState"
        assert dict(invocation.parameters) == {"name": "app", "owner": "PRJ"}

    def test_invocation_parameters_are_read_only(self) -> None:
        invocation = CommandInvocation.of("DeleteBitbucketBranch", branch="feature")

        with pytest.raises(TypeError):
            invocation.parameters["branch"] = "main"  # type: ignore[index]

    def test_action_serialization(self) -> None:
        action = Action(
            text="Tag",
            role="global",
            command=CommandInvocation.of("CreateBitbucketTag", sha="abc1234"),
            confirm=ConfirmDialog(title="Sure?", text="Really?"),
            options=(
                ActionOption(
                    text="v1.0.1",
                    command=CommandInvocation.of("CreateBitbucketTag", tag="v1.0.1"),
                ),
            ),
        )

        assert action.is_menu
        assert action.to_dict() == {
            "text": "Tag",
            "role": "global",
            "command": {"name": "CreateBitbucketTag", "parameters": {"sha": "abc1234"}},
            "confirm": {
                "title": "Sure?",
                "text": "Really?",
                "ok_text": "Yes",
                "dismiss_text": "No",
            },
            "options": [
                {
                    "text": "v1.0.1",
                    "command": {"name": "CreateBitbucketTag", "parameters": {"tag": "v1.0.1"}},
                }
            ],
        }
