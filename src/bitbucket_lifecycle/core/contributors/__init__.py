"""Built-in action contributors and the contributor SDK."""

from __future__ import annotations

from bitbucket_lifecycle.core.contributors.branch import RaisePrActionContributor
from bitbucket_lifecycle.core.contributors.goal_sets import (
    ApproveGoalActionContributor,
    CancelGoalSetActionContributor,
    DisplayGoalActionContributor,
)
from bitbucket_lifecycle.core.contributors.pull_request import (
    DeleteActionContributor,
    MergeActionContributor,
)
from bitbucket_lifecycle.core.contributors.push import (
    ExpandAttachmentsActionContributor,
    PullRequestActionContributor,
    TagPushActionContributor,
)
from bitbucket_lifecycle.core.contributors.sdk import (
    Action,
    ActionContributor,
    ActionOption,
    BaseContributor,
    CommandInvocation,
    ConfirmDialog,
    ContributorRegistry,
)

__all__ = [
    "Action",
    "ActionContributor",
    "ActionOption",
    "ApproveGoalActionContributor",
    "BaseContributor",
    "CancelGoalSetActionContributor",
    "CommandInvocation",
    "ConfirmDialog",
    "ContributorRegistry",
    "DeleteActionContributor",
    "DisplayGoalActionContributor",
    "ExpandAttachmentsActionContributor",
    "MergeActionContributor",
    "PullRequestActionContributor",
    "RaisePrActionContributor",
    "TagPushActionContributor",
]
