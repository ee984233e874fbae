"""Bitbucket lifecycle commands."""

from __future__ import annotations

from bitbucket_lifecycle.commands.handlers import BitbucketCommandHandlers
from bitbucket_lifecycle.commands.models import (
    CreateTagParameters,
    DeleteBranchParameters,
    MergePullRequestParameters,
    RaisePullRequestParameters,
)
from bitbucket_lifecycle.commands.registry import CommandRegistry, CommandSpec

__all__ = [
    "BitbucketCommandHandlers",
    "CommandRegistry",
    "CommandSpec",
    "CreateTagParameters",
    "DeleteBranchParameters",
    "MergePullRequestParameters",
    "RaisePullRequestParameters",
]
