"""Lifecycle node models and enums."""

from __future__ import annotations

from bitbucket_lifecycle.core.models.entities import (
    Branch,
    BranchPullRequest,
    BranchRef,
    Commit,
    Goal,
    GoalDisplayPreference,
    GoalSet,
    LifecycleNode,
    PullRequest,
    Push,
    Repo,
    Review,
    Status,
    parse_node,
)
from bitbucket_lifecycle.core.models.enums import (
    GoalDisplayFormat,
    GoalDisplayState,
    GoalState,
    MergeMethod,
    NodeKind,
    RendererId,
)

__all__ = [
    "Branch",
    "BranchPullRequest",
    "BranchRef",
    "Commit",
    "Goal",
    "GoalDisplayFormat",
    "GoalDisplayPreference",
    "GoalDisplayState",
    "GoalSet",
    "GoalState",
    "LifecycleNode",
    "MergeMethod",
    "NodeKind",
    "PullRequest",
    "Push",
    "RendererId",
    "Repo",
    "Review",
    "Status",
    "parse_node",
]
