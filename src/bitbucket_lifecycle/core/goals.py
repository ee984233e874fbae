"""Goal state model: cancelable states, manual transitions and display rules."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Final

from bitbucket_lifecycle.core.models.enums import GoalDisplayFormat, GoalState

if TYPE_CHECKING:
    from collections.abc import Iterable

    from bitbucket_lifecycle.core.models.entities import Goal, GoalDisplayPreference

CANCELABLE_GOAL_STATES: Final[frozenset[GoalState]] = frozenset(
    {
        GoalState.IN_PROCESS,
        GoalState.REQUESTED,
        GoalState.PLANNED,
        GoalState.WAITING_FOR_APPROVAL,
        GoalState.APPROVED,
        GoalState.WAITING_FOR_PRE_APPROVAL,
        GoalState.PRE_APPROVED,
    }
)


@dataclass(frozen=True, slots=True)
class GoalTransition:
    """A manual goal transition exposed as an action."""

    source: GoalState
    target: GoalState
    label: str
    requires_retry_feasible: bool = False

    def applies_to(self, goal: Goal) -> bool:
        if goal.state != self.source:
            return False
        return goal.retry_feasible or not self.requires_retry_feasible


GOAL_TRANSITIONS: Final[tuple[GoalTransition, ...]] = (
    GoalTransition(GoalState.FAILURE, GoalState.REQUESTED, "Restart", requires_retry_feasible=True),
    GoalTransition(GoalState.WAITING_FOR_PRE_APPROVAL, GoalState.PRE_APPROVED, "Start"),
    GoalTransition(GoalState.WAITING_FOR_APPROVAL, GoalState.APPROVED, "Approve"),
)


def latest_goals(goals: Iterable[Goal]) -> list[Goal]:
    """Keep the most recent record of each goal name, sorted by name."""
    latest: dict[str, Goal] = {}
    for goal in goals:
        current = latest.get(goal.name)
        if current is None or goal.ts > current.ts:
            latest[goal.name] = goal
    return sorted(latest.values(), key=lambda goal: goal.name)


def is_cancelable(goals: Iterable[Goal]) -> bool:
    """Return whether any goal is still in flight."""
    return any(goal.state in CANCELABLE_GOAL_STATES for goal in goals)


def transitions_for(goals: Iterable[Goal]) -> list[tuple[Goal, GoalTransition]]:
    """Return applicable manual transitions, grouped in ``GOAL_TRANSITIONS`` order."""
    ordered = latest_goals(goals)
    return [
        (goal, transition)
        for transition in GOAL_TRANSITIONS
        for goal in ordered
        if transition.applies_to(goal)
    ]


def is_full_rendering_enabled(
    style: GoalDisplayFormat,
    preference: GoalDisplayPreference | None,
) -> bool:
    """Full rendering is on when configured, or when the push asked for it."""
    if style == GoalDisplayFormat.FULL:
        return True
    return preference is not None and preference.format == GoalDisplayFormat.FULL


__all__ = [
    "CANCELABLE_GOAL_STATES",
    "GOAL_TRANSITIONS",
    "GoalTransition",
    "is_cancelable",
    "is_full_rendering_enabled",
    "latest_goals",
    "transitions_for",
]
