"""Validated parameter models for the Bitbucket commands."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator

from bitbucket_lifecycle.core.merge import MAX_MERGE_MESSAGE_LENGTH, MAX_MERGE_TITLE_LENGTH
from bitbucket_lifecycle.core.models.enums import MergeMethod


class CommandParameters(BaseModel):
    """Base for command parameter models: immutable, unknown keys rejected."""

    model_config = ConfigDict(extra="forbid", frozen=True)


class RaisePullRequestParameters(CommandParameters):
    title: str = Field(min_length=1, description="pull request title")
    body: str | None = Field(default=None, description="pull request body")
    base: str = Field(min_length=1, description="branch the changes should get pulled into")
    head: str = Field(min_length=1, description="branch containing the changes")
    repo: str = Field(min_length=1)
    owner: str = Field(min_length=1)


class MergePullRequestParameters(CommandParameters):
    pr: int = Field(gt=0, lt=10**10, description="pull request number, with no leading #")
    title: str | None = Field(default=None, max_length=MAX_MERGE_TITLE_LENGTH)
    message: str | None = Field(default=None, max_length=MAX_MERGE_MESSAGE_LENGTH)
    sha: str = Field(min_length=1)
    repo: str = Field(min_length=1)
    project: str = Field(min_length=1)
    merge_method: MergeMethod | None = None


class DeleteBranchParameters(CommandParameters):
    branch: str = Field(min_length=1, description="branch name")
    repo: str = Field(min_length=1)
    owner: str = Field(min_length=1)

    @field_validator("branch")
    @classmethod
    def strip_branch(cls, value: str) -> str:
        stripped = value.strip()
        if not stripped:
            msg = "branch must not be blank"
            raise ValueError(msg)
        return stripped


class CreateTagParameters(CommandParameters):
    tag: str = Field(
        min_length=1,
        max_length=100,
        pattern=r"^\w(?:[-.\w/]*\w)*$",
        description="git tag starting and ending with an alphanumeric character",
    )
    sha: str = Field(min_length=7, max_length=40, pattern=r"^[a-f0-9]+$")
    message: str = Field(default="", max_length=200, pattern=r"^.*$")
    repo: str = Field(min_length=1)
    owner: str = Field(min_length=1)
    msg_id: str | None = None


__all__ = [
    "CommandParameters",
    "CreateTagParameters",
    "DeleteBranchParameters",
    "MergePullRequestParameters",
    "RaisePullRequestParameters",
]
