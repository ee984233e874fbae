"""Test helpers package."""

from tests.helpers.factories import (
    HEAD_SHA,
    branch_pull_request,
    make_branch,
    make_commit,
    make_goal,
    make_goal_set,
    make_pull_request,
    make_push,
    make_repo,
)
from tests.helpers.mocks import make_api, make_failing_queries, make_queries

__all__ = [
    "HEAD_SHA",
    "branch_pull_request",
    "make_api",
    "make_branch",
    "make_commit",
    "make_failing_queries",
    "make_goal",
    "make_goal_set",
    "make_pull_request",
    "make_push",
    "make_queries",
    "make_repo",
]
