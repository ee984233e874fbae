"""Lifecycle node builders with sensible defaults."""

from __future__ import annotations

from typing import Any

from bitbucket_lifecycle.core.models.entities import (
    Branch,
    BranchPullRequest,
    BranchRef,
    Commit,
    Goal,
    GoalDisplayPreference,
    GoalSet,
    PullRequest,
    Push,
    Repo,
    Review,
    Status,
)
from bitbucket_lifecycle.core.models.enums import GoalState

HEAD_SHA = "a1b2c3d4e5f60718293a4b5c6d7e8f9012345678"


def make_repo(**overrides: Any) -> Repo:
    fields: dict[str, Any] = {
        "owner": "PRJ",
        "name": "app",
        "default_branch": "master",
    }
    fields.update(overrides)
    return Repo(**fields)


def make_commit(
    sha: str = HEAD_SHA,
    message: str = "Add feature\n\nLonger description",
    *,
    timestamp: str | None = "2019-04-01T10:00:00Z",
    statuses: tuple[str, ...] = (),
) -> Commit:
    return Commit(
        sha=sha,
        message=message,
        timestamp=timestamp,
        statuses=tuple(Status(context=f"ci/{i}", state=state) for i, state in enumerate(statuses)),
    )


def make_pull_request(**overrides: Any) -> PullRequest:
    head = overrides.pop("head", make_commit())
    fields: dict[str, Any] = {
        "number": 7,
        "state": "open",
        "repo": make_repo(),
        "title": "Add feature",
        "base_branch_name": "master",
        "branch": BranchRef(name="feature"),
        "head": head,
        "commits": (head,) if head is not None else (),
        "reviews": (Review(state="approved"),),
    }
    fields.update(overrides)
    return PullRequest(**fields)


def make_branch(**overrides: Any) -> Branch:
    fields: dict[str, Any] = {
        "name": "feature",
        "repo": make_repo(),
        "commit": make_commit(),
        "pull_requests": (),
    }
    fields.update(overrides)
    return Branch(**fields)


def make_push(
    branch: str = "feature",
    *,
    message: str = "Add feature\n\nLonger description",
    preference: GoalDisplayPreference | None = None,
    repo: Repo | None = None,
) -> Push:
    return Push(
        branch=branch,
        after=make_commit(message=message),
        repo=repo or make_repo(),
        goals_display_state=preference,
    )


def make_goal(
    name: str,
    state: GoalState,
    *,
    retry_feasible: bool = False,
    ts: int = 0,
    goal_id: str | None = None,
) -> Goal:
    return Goal(
        id=goal_id or f"goal-{name}",
        name=name,
        state=state,
        repo=make_repo(),
        retry_feasible=retry_feasible,
        ts=ts,
    )


def make_goal_set(
    *goals: Goal,
    goal_set_id: str = "0f1e2d3c4b5a69788796a5b4c3d2e1f0",
    push: Push | None = None,
) -> GoalSet:
    return GoalSet(goal_set_id=goal_set_id, goals=tuple(goals), push=push)


def branch_pull_request(number: int, state: str, *commits: str) -> BranchPullRequest:
    return BranchPullRequest(number=number, state=state, commits=tuple(commits))
