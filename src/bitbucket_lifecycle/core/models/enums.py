"""Core domain enums."""

from __future__ import annotations

from enum import StrEnum


class NodeKind(StrEnum):
    """Variant tag of a lifecycle node."""

    BRANCH = "branch"
    PULL_REQUEST = "pull_request"
    PUSH = "push"
    GOAL_SET = "goal_set"


class RendererId(StrEnum):
    """Render passes (visual slots) a node can be displayed in."""

    BRANCH = "branch"
    PULL_REQUEST = "pull_request"
    STATUS = "status"
    COMMIT = "commit"
    GOALS = "goals"
    EXPAND_ATTACHMENTS = "expand_attachments"


class GoalState(StrEnum):
    """Build goal states."""

    REQUESTED = "requested"
    PLANNED = "planned"
    IN_PROCESS = "in_process"
    WAITING_FOR_PRE_APPROVAL = "waiting_for_pre_approval"
    PRE_APPROVED = "pre_approved"
    WAITING_FOR_APPROVAL = "waiting_for_approval"
    APPROVED = "approved"
    SUCCESS = "success"
    FAILURE = "failure"
    SKIPPED = "skipped"

    @property
    def is_terminal(self) -> bool:
        return self in TERMINAL_GOAL_STATES


TERMINAL_GOAL_STATES: frozenset[GoalState] = frozenset(
    {GoalState.SUCCESS, GoalState.FAILURE, GoalState.SKIPPED}
)


class GoalDisplayState(StrEnum):
    """Which goal sets of a push are displayed."""

    SHOW_CURRENT = "show_current"
    SHOW_ALL = "show_all"


class GoalDisplayFormat(StrEnum):
    """How much detail goal attachments are rendered with."""

    COMPACT = "compact"
    FULL = "full"


class MergeMethod(StrEnum):
    """Pull request merge strategies, in display order."""

    MERGE = "merge"
    SQUASH = "squash"
    REBASE = "rebase"


class PullRequestState(StrEnum):
    OPEN = "open"
    CLOSED = "closed"
    MERGED = "merged"


__all__ = [
    "TERMINAL_GOAL_STATES",
    "GoalDisplayFormat",
    "GoalDisplayState",
    "GoalState",
    "MergeMethod",
    "NodeKind",
    "PullRequestState",
    "RendererId",
]
