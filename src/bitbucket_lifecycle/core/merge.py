"""Merge eligibility for pull requests."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Final

from bitbucket_lifecycle.config import DEFAULT_GENERATED_COMMIT_MARKER
from bitbucket_lifecycle.core.models.enums import MergeMethod, PullRequestState

if TYPE_CHECKING:
    from collections.abc import Callable

    from bitbucket_lifecycle.core.models.entities import Commit, PullRequest, Repo

APPROVED_REVIEW_STATE: Final = "approved"
SUCCESS_STATUS_STATE: Final = "success"

MAX_MERGE_TITLE_LENGTH: Final = 100
MAX_MERGE_MESSAGE_LENGTH: Final = 1000
_ELLIPSIS: Final = "..."


@dataclass(frozen=True, slots=True)
class MergeOption:
    """One merge method that may be offered, with its pre-filled commit text."""

    method: MergeMethod
    label: str
    title: str
    message: str


def is_open_and_approved(pr: PullRequest) -> bool:
    """Open, and no review is in a state other than approved."""
    if pr.state != PullRequestState.OPEN:
        return False
    return not any(review.state != APPROVED_REVIEW_STATE for review in pr.reviews)


def latest_status_commit(pr: PullRequest) -> Commit | None:
    """Most recently timestamped commit carrying at least one status."""
    with_statuses = [commit for commit in pr.commits if commit.statuses]
    if not with_statuses:
        return None
    # Missing timestamps compare as "0" so they sort last.
    with_statuses.sort(key=lambda commit: commit.timestamp or "0", reverse=True)
    return with_statuses[0]


def statuses_allow_merge(pr: PullRequest) -> bool:
    commit = latest_status_commit(pr)
    if commit is None:
        return True
    return all(status.state == SUCCESS_STATUS_STATE for status in commit.statuses)


def can_offer_merge(pr: PullRequest) -> bool:
    return is_open_and_approved(pr) and statuses_allow_merge(pr)


def is_generated_commit(
    commit: Commit | None,
    marker: str = DEFAULT_GENERATED_COMMIT_MARKER,
) -> bool:
    if commit is None or not marker:
        return False
    return marker in commit.message


def truncate(text: str, limit: int) -> str:
    """Cut ``text`` to at most ``limit`` characters, marking the cut with an ellipsis."""
    if len(text) <= limit:
        return text
    return text[: limit - len(_ELLIPSIS)].rstrip() + _ELLIPSIS


def _commit_texts(title: str, message: str) -> tuple[str, str]:
    return (
        truncate(title, MAX_MERGE_TITLE_LENGTH),
        truncate(message, MAX_MERGE_MESSAGE_LENGTH),
    )


def _merge_title(pr: PullRequest) -> tuple[str, str]:
    return _commit_texts(
        f"Merge pull request #{pr.number} from {pr.repo.owner}/{pr.repo.name}",
        pr.title,
    )


def _squash_title(pr: PullRequest) -> tuple[str, str]:
    # The PR number suffix survives truncation of a long title.
    suffix = f" (#{pr.number})"
    title = truncate(pr.title, MAX_MERGE_TITLE_LENGTH - len(suffix)) + suffix
    message = "\n".join(f"* {commit.message}" for commit in pr.commits)
    return _commit_texts(title, message)


def _merge_allowed(repo: Repo, generated: bool) -> bool:
    del generated
    return bool(repo.allow_merge_commit)


def _squash_allowed(repo: Repo, generated: bool) -> bool:
    return bool(repo.allow_squash) and not generated


def _rebase_allowed(repo: Repo, generated: bool) -> bool:
    return bool(repo.allow_rebase) and not generated


type _Eligibility = Callable[[Repo, bool], bool]
type _TitleBuilder = Callable[[PullRequest], tuple[str, str]]

# Display order is the order of this table.
MERGE_METHODS: Final[tuple[tuple[MergeMethod, str, _Eligibility, _TitleBuilder], ...]] = (
    (MergeMethod.MERGE, "Merge", _merge_allowed, _merge_title),
    (MergeMethod.SQUASH, "Squash and Merge", _squash_allowed, _squash_title),
    (MergeMethod.REBASE, "Rebase and Merge", _rebase_allowed, _merge_title),
)


def merge_options(
    pr: PullRequest,
    repo: Repo | None = None,
    *,
    generated_marker: str = DEFAULT_GENERATED_COMMIT_MARKER,
) -> list[MergeOption]:
    """Return the merge methods that may be offered, in Merge/Squash/Rebase order.

    Without any permission flag on the repo only a plain merge is offered; this
    also covers repos that report every flag as disabled.
    """
    repo = repo or pr.repo
    options: list[MergeOption] = []
    if not repo.has_merge_permissions:
        title, message = _merge_title(pr)
        return [MergeOption(MergeMethod.MERGE, "Merge", title, message)]

    generated = is_generated_commit(pr.head, generated_marker)
    for method, label, eligible, build_title in MERGE_METHODS:
        if not eligible(repo, generated):
            continue
        title, message = build_title(pr)
        options.append(MergeOption(method, label, title, message))
    return options


__all__ = [
    "MAX_MERGE_MESSAGE_LENGTH",
    "MAX_MERGE_TITLE_LENGTH",
    "MERGE_METHODS",
    "MergeOption",
    "can_offer_merge",
    "is_generated_commit",
    "is_open_and_approved",
    "latest_status_commit",
    "merge_options",
    "statuses_allow_merge",
    "truncate",
]
