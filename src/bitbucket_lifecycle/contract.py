"""Canonical command names and contributor ids."""

from __future__ import annotations

from typing import Final

BITBUCKET_PROVIDER_TYPE: Final = "bitbucket"

# Commands bound to rendered actions.
RAISE_PULL_REQUEST_COMMAND: Final = "RaiseBitbucketPullRequest"
MERGE_PULL_REQUEST_COMMAND: Final = "MergeBitbucketPullRequest"
DELETE_BRANCH_COMMAND: Final = "DeleteBitbucketBranch"
CREATE_TAG_COMMAND: Final = "CreateBitbucketTag"
UPDATE_GOAL_STATE_COMMAND: Final = "UpdateGoalState"
UPDATE_GOAL_DISPLAY_STATE_COMMAND: Final = "UpdateGoalDisplayState"
CANCEL_GOAL_SETS_COMMAND: Final = "CancelGoalSets"

# Contributor ids, also used as per-channel action preference keys.
BRANCH_RAISE_PULL_REQUEST_ID: Final = "branch.raise_pullrequest"
PULL_REQUEST_MERGE_ID: Final = "pull_request.merge"
PULL_REQUEST_DELETE_ID: Final = "pull_request.delete"
PUSH_RAISE_PULL_REQUEST_ID: Final = "push.raise_pullrequest"
PUSH_TAG_ID: Final = "push.tag"
PUSH_CANCEL_GOAL_SET_ID: Final = "push.cancel_goal_set"
PUSH_APPROVE_GOAL_ID: Final = "push.approve_goal"
PUSH_DISPLAY_GOALS_ID: Final = "push.display_goals"
PUSH_EXPAND_ATTACHMENTS_ID: Final = "push.expand_attachments"

__all__ = [
    "BITBUCKET_PROVIDER_TYPE",
    "BRANCH_RAISE_PULL_REQUEST_ID",
    "CANCEL_GOAL_SETS_COMMAND",
    "CREATE_TAG_COMMAND",
    "DELETE_BRANCH_COMMAND",
    "MERGE_PULL_REQUEST_COMMAND",
    "PULL_REQUEST_DELETE_ID",
    "PULL_REQUEST_MERGE_ID",
    "PUSH_APPROVE_GOAL_ID",
    "PUSH_CANCEL_GOAL_SET_ID",
    "PUSH_DISPLAY_GOALS_ID",
    "PUSH_EXPAND_ATTACHMENTS_ID",
    "PUSH_RAISE_PULL_REQUEST_ID",
    "PUSH_TAG_ID",
    "RAISE_PULL_REQUEST_COMMAND",
    "UPDATE_GOAL_DISPLAY_STATE_COMMAND",
    "UPDATE_GOAL_STATE_COMMAND",
]
