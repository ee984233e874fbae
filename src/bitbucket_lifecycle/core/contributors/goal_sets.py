"""Action contributors for goal set lifecycle nodes."""

from __future__ import annotations

from typing import TYPE_CHECKING

from bitbucket_lifecycle.contract import (
    CANCEL_GOAL_SETS_COMMAND,
    PUSH_APPROVE_GOAL_ID,
    PUSH_CANCEL_GOAL_SET_ID,
    PUSH_DISPLAY_GOALS_ID,
    UPDATE_GOAL_STATE_COMMAND,
)
from bitbucket_lifecycle.core.contributors.push import (
    current_display_preference,
    display_state_command,
)
from bitbucket_lifecycle.core.contributors.sdk import (
    Action,
    BaseContributor,
    CommandInvocation,
    ConfirmDialog,
)
from bitbucket_lifecycle.core.goals import (
    is_cancelable,
    is_full_rendering_enabled,
    latest_goals,
    transitions_for,
)
from bitbucket_lifecycle.core.models.entities import GoalSet
from bitbucket_lifecycle.core.models.enums import GoalDisplayState, NodeKind, RendererId

if TYPE_CHECKING:
    from bitbucket_lifecycle.core.models.entities import LifecycleNode, Push
    from bitbucket_lifecycle.core.rendering import RenderContext


def _has_goals(node: LifecycleNode) -> bool:
    return isinstance(node, GoalSet) and bool(node.goal_set_id) and bool(node.goals)


def _push_for(goal_set: GoalSet, context: RenderContext) -> Push | None:
    return context.push or goal_set.push


class CancelGoalSetActionContributor(BaseContributor):
    """Offer cancellation while any goal of the set is still in flight."""

    id = PUSH_CANCEL_GOAL_SET_ID
    node_kind = NodeKind.GOAL_SET
    renderer_ids = frozenset({RendererId.GOALS})

    def supports(self, node: LifecycleNode) -> bool:
        return _has_goals(node)

    async def buttons_for(self, node: LifecycleNode, context: RenderContext) -> list[Action]:
        if not isinstance(node, GoalSet) or not self.renders_in(context):
            return []
        push = _push_for(node, context)
        if push is None:
            return []
        if not is_full_rendering_enabled(context.rendering_style, push.goals_display_state):
            return []
        if not is_cancelable(latest_goals(node.goals)):
            return []

        return [
            Action(
                text="Cancel",
                confirm=ConfirmDialog(
                    title="Cancel Goal Set",
                    text=(
                        f"Do you really want to cancel goal set {node.goal_set_id[:7]} on commit "
                        f"{push.after.sha[:7]} of {push.repo.owner}/{push.repo.name}?"
                    ),
                ),
                command=CommandInvocation.of(CANCEL_GOAL_SETS_COMMAND, goalSetId=node.goal_set_id),
            )
        ]


class ApproveGoalActionContributor(BaseContributor):
    """Offer Restart, Start and Approve transitions for individual goals."""

    id = PUSH_APPROVE_GOAL_ID
    node_kind = NodeKind.GOAL_SET
    renderer_ids = frozenset({RendererId.GOALS})

    def supports(self, node: LifecycleNode) -> bool:
        return _has_goals(node)

    async def buttons_for(self, node: LifecycleNode, context: RenderContext) -> list[Action]:
        if not isinstance(node, GoalSet) or not self.renders_in(context):
            return []

        actions: list[Action] = []
        for goal, transition in transitions_for(node.goals):
            name = goal.name.replace("`", "")
            actions.append(
                Action(
                    text=f"{transition.label} _{name}_",
                    role="global",
                    command=CommandInvocation.of(
                        UPDATE_GOAL_STATE_COMMAND,
                        id=goal.id,
                        state=transition.target.value,
                        owner=goal.repo.owner or None,
                    ),
                )
            )
        return actions


class DisplayGoalActionContributor(BaseContributor):
    """Toggle between the current goal set and the push's full goal set history."""

    id = PUSH_DISPLAY_GOALS_ID
    node_kind = NodeKind.GOAL_SET
    renderer_ids = frozenset({RendererId.GOALS})

    def supports(self, node: LifecycleNode) -> bool:
        return _has_goals(node)

    async def buttons_for(self, node: LifecycleNode, context: RenderContext) -> list[Action]:
        if not isinstance(node, GoalSet) or not self.renders_in(context):
            return []
        goal_sets = context.goal_sets
        push = _push_for(node, context)
        if len(goal_sets) < 2 or push is None:
            return []

        current = current_display_preference(push)
        count = len(goal_sets) - 1
        noun = "sets" if count > 1 else "set"

        if current.state == GoalDisplayState.SHOW_CURRENT:
            text, target = f"{count} additional goal {noun} ˅", GoalDisplayState.SHOW_ALL
        elif goal_sets[-1].goal_set_id == node.goal_set_id:
            text, target = f"{count} additional goal {noun} ˄", GoalDisplayState.SHOW_CURRENT
        else:
            return []
        return [
            Action(
                text=text,
                command=display_state_command(
                    push,
                    current.apply(state=target, format=current.format or context.rendering_style),
                ),
            )
        ]


__all__ = [
    "ApproveGoalActionContributor",
    "CancelGoalSetActionContributor",
    "DisplayGoalActionContributor",
]
