"""Lifecycle node snapshots.

Nodes are immutable views of the payloads delivered by the lifecycle graph.
They are parsed once with ``from_dict`` and never mutated afterwards.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, ClassVar, Final

from bitbucket_lifecycle.core.models.enums import (
    GoalDisplayFormat,
    GoalDisplayState,
    GoalState,
    NodeKind,
)

if TYPE_CHECKING:
    from collections.abc import Mapping

logger = logging.getLogger(__name__)

DEFAULT_BRANCH_FALLBACK: Final = "master"


def _mapping(value: object) -> Mapping[str, Any]:
    return value if isinstance(value, dict) else {}


def _items(value: object) -> list[Mapping[str, Any]]:
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, dict)]


def _optional_bool(value: object) -> bool | None:
    return value if isinstance(value, bool) else None


@dataclass(frozen=True, slots=True)
class Repo:
    """Repository reference shared by all nodes."""

    owner: str
    name: str
    default_branch: str = ""
    provider_type: str = "bitbucket"
    allow_merge_commit: bool | None = None
    allow_squash: bool | None = None
    allow_rebase: bool | None = None

    def default_branch_or(self, fallback: str = DEFAULT_BRANCH_FALLBACK) -> str:
        return self.default_branch or fallback

    @property
    def has_merge_permissions(self) -> bool:
        """Whether any merge-method permission flag is set."""
        return bool(self.allow_merge_commit or self.allow_squash or self.allow_rebase)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> Repo:
        data = _mapping(data)
        org = _mapping(data.get("org"))
        provider = _mapping(org.get("provider"))
        return cls(
            owner=str(data.get("owner") or ""),
            name=str(data.get("name") or ""),
            default_branch=str(data.get("defaultBranch") or ""),
            provider_type=str(
                provider.get("providerType") or data.get("providerType") or "bitbucket"
            ),
            allow_merge_commit=_optional_bool(data.get("allowMergeCommit")),
            allow_squash=_optional_bool(data.get("allowSquashMerge")),
            allow_rebase=_optional_bool(data.get("allowRebaseMerge")),
        )


@dataclass(frozen=True, slots=True)
class Status:
    context: str
    state: str

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Status:
        return cls(context=str(data.get("context") or ""), state=str(data.get("state") or ""))


@dataclass(frozen=True, slots=True)
class Commit:
    sha: str
    message: str = ""
    timestamp: str | None = None
    statuses: tuple[Status, ...] = ()

    @property
    def title(self) -> str:
        """First line of the commit message."""
        return self.message.split("\n")[0]

    def title_or(self, fallback: str) -> str:
        """First line of the message, or ``fallback`` when that line is blank."""
        return self.title if self.title.strip() else fallback

    @property
    def body(self) -> str | None:
        """Message lines after the first, with line endings normalized."""
        lines = self.message.split("\n")
        if len(lines) < 2:
            return None
        return "\n".join(lines[1:]).replace("\r\n", "\n").replace("\r", "")

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> Commit | None:
        if not data:
            return None
        timestamp = data.get("timestamp")
        return cls(
            sha=str(data.get("sha") or ""),
            message=str(data.get("message") or ""),
            timestamp=str(timestamp) if timestamp else None,
            statuses=tuple(Status.from_dict(item) for item in _items(data.get("statuses"))),
        )


@dataclass(frozen=True, slots=True)
class Review:
    state: str

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Review:
        return cls(state=str(data.get("state") or ""))


@dataclass(frozen=True, slots=True)
class BranchRef:
    name: str


@dataclass(frozen=True, slots=True)
class BranchPullRequest:
    """A pull request as seen from one of its branches."""

    number: int
    state: str
    commits: tuple[str, ...] = ()

    @property
    def is_open(self) -> bool:
        return self.state.lower() == "open"

    def contains(self, sha: str) -> bool:
        return sha in self.commits

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> BranchPullRequest:
        return cls(
            number=int(data.get("number") or 0),
            state=str(data.get("state") or ""),
            commits=tuple(str(c.get("sha") or "") for c in _items(data.get("commits"))),
        )


@dataclass(frozen=True, slots=True)
class Branch:
    """Branch lifecycle node."""

    kind: ClassVar[NodeKind] = NodeKind.BRANCH

    name: str
    repo: Repo
    commit: Commit | None = None
    pull_requests: tuple[BranchPullRequest, ...] = ()

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Branch:
        return cls(
            name=str(data.get("name") or ""),
            repo=Repo.from_dict(data.get("repo")),
            commit=Commit.from_dict(data.get("commit")),
            pull_requests=tuple(
                BranchPullRequest.from_dict(item) for item in _items(data.get("pullRequests"))
            ),
        )


@dataclass(frozen=True, slots=True)
class PullRequest:
    """Pull request lifecycle node."""

    kind: ClassVar[NodeKind] = NodeKind.PULL_REQUEST

    number: int
    state: str
    repo: Repo
    title: str = ""
    base_branch_name: str = ""
    branch: BranchRef | None = None
    head: Commit | None = None
    commits: tuple[Commit, ...] = ()
    reviews: tuple[Review, ...] = ()

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> PullRequest:
        branch = _mapping(data.get("branch"))
        return cls(
            number=int(data.get("number") or 0),
            state=str(data.get("state") or ""),
            repo=Repo.from_dict(data.get("repo")),
            title=str(data.get("title") or ""),
            base_branch_name=str(data.get("baseBranchName") or ""),
            branch=BranchRef(name=str(branch["name"])) if branch.get("name") else None,
            head=Commit.from_dict(data.get("head")),
            commits=tuple(
                commit
                for commit in (Commit.from_dict(item) for item in _items(data.get("commits")))
                if commit is not None
            ),
            reviews=tuple(Review.from_dict(item) for item in _items(data.get("reviews"))),
        )


@dataclass(frozen=True, slots=True)
class GoalDisplayPreference:
    """Persisted per-push goal display preference."""

    state: GoalDisplayState = GoalDisplayState.SHOW_CURRENT
    format: GoalDisplayFormat | None = None

    def apply(
        self,
        *,
        state: GoalDisplayState | None = None,
        format: GoalDisplayFormat | None = None,
    ) -> GoalDisplayPreference:
        """Return the preference with the given fields set; applying twice is a no-op."""
        return GoalDisplayPreference(
            state=state if state is not None else self.state,
            format=format if format is not None else self.format,
        )

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> GoalDisplayPreference | None:
        if not data:
            return None
        raw_format = data.get("format")
        return cls(
            state=GoalDisplayState(data.get("state") or GoalDisplayState.SHOW_CURRENT),
            format=GoalDisplayFormat(raw_format) if raw_format else None,
        )


@dataclass(frozen=True, slots=True)
class Push:
    """Push lifecycle node."""

    kind: ClassVar[NodeKind] = NodeKind.PUSH

    branch: str
    after: Commit
    repo: Repo
    goals_display_state: GoalDisplayPreference | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Push:
        after = Commit.from_dict(data.get("after"))
        if after is None:
            raise ValueError("push payload requires an 'after' commit")
        display_states = _items(data.get("goalsDisplayState"))
        return cls(
            branch=str(data.get("branch") or ""),
            after=after,
            repo=Repo.from_dict(data.get("repo")),
            goals_display_state=GoalDisplayPreference.from_dict(
                display_states[0] if display_states else None
            ),
        )


@dataclass(frozen=True, slots=True)
class Goal:
    id: str
    name: str
    state: GoalState
    repo: Repo
    retry_feasible: bool = False
    ts: int = 0

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Goal:
        return cls(
            id=str(data.get("id") or ""),
            name=str(data.get("name") or ""),
            state=GoalState(data.get("state")),
            repo=Repo.from_dict(data.get("repo")),
            retry_feasible=data.get("retryFeasible") is True,
            ts=int(data.get("ts") or 0),
        )


def _parse_goals(items: list[Mapping[str, Any]]) -> tuple[Goal, ...]:
    goals: list[Goal] = []
    for item in items:
        try:
            goals.append(Goal.from_dict(item))
        except ValueError as exc:
            logger.warning("Skipping goal %s: %s", item.get("id"), exc)
    return tuple(goals)


@dataclass(frozen=True, slots=True)
class GoalSet:
    """Goal set lifecycle node: the goals planned for one push."""

    kind: ClassVar[NodeKind] = NodeKind.GOAL_SET

    goal_set_id: str
    goals: tuple[Goal, ...] = field(default_factory=tuple)
    push: Push | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> GoalSet:
        push = data.get("push")
        return cls(
            goal_set_id=str(data.get("goalSetId") or ""),
            goals=_parse_goals(_items(data.get("goals"))),
            push=Push.from_dict(push) if isinstance(push, dict) and push.get("after") else None,
        )


type LifecycleNode = Branch | PullRequest | Push | GoalSet

_NODE_TYPES: Final[dict[NodeKind, Any]] = {
    NodeKind.BRANCH: Branch,
    NodeKind.PULL_REQUEST: PullRequest,
    NodeKind.PUSH: Push,
    NodeKind.GOAL_SET: GoalSet,
}


def parse_node(kind: NodeKind | str, data: Mapping[str, Any]) -> LifecycleNode:
    """Parse a raw graph payload into the lifecycle node variant named by ``kind``."""
    node_type = _NODE_TYPES.get(NodeKind(kind))
    if node_type is None:
        raise ValueError(f"Unsupported lifecycle node kind: {kind}")
    return node_type.from_dict(data)


__all__ = [
    "DEFAULT_BRANCH_FALLBACK",
    "Branch",
    "BranchPullRequest",
    "BranchRef",
    "Commit",
    "Goal",
    "GoalDisplayPreference",
    "GoalSet",
    "LifecycleNode",
    "PullRequest",
    "Push",
    "Repo",
    "Review",
    "Status",
    "parse_node",
]
