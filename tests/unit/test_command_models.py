"""Tests for command parameter validation."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from bitbucket_lifecycle.commands.models import (
    CreateTagParameters,
    DeleteBranchParameters,
    MergePullRequestParameters,
    RaisePullRequestParameters,
)
from bitbucket_lifecycle.core.models.enums import MergeMethod

pytestmark = pytest.mark.unit

TAG_DEFAULTS = {"sha": "0a1b2c3", "repo": "app", "owner": "PRJ"}


class TestCreateTagParameters:
    @pytest.mark.parametrize("tag", ["v1.2.0", "release/2019-04", "1", "a_b"])
    def test_accepts_valid_tags(self, tag: str) -> None:
        params = CreateTagParameters.model_validate({"tag": tag, **TAG_DEFAULTS})

        assert params.tag == tag
        assert params.message == ""
        assert params.msg_id is None

    @pytest.mark.parametrize("tag", ["", "-v1", "v1.", "v1 2", "x" * 101, "/leading"])
    def test_rejects_invalid_tags(self, tag: str) -> None:
        with pytest.raises(ValidationError):
            CreateTagParameters.model_validate({"tag": tag, **TAG_DEFAULTS})

    @pytest.mark.parametrize("sha", ["abc", "ABCDEF0", "0a1b2c3z", "a" * 41])
    def test_rejects_invalid_sha(self, sha: str) -> None:
        with pytest.raises(ValidationError):
            CreateTagParameters.model_validate({**TAG_DEFAULTS, "tag": "v1.0.0", "sha": sha})

    def test_rejects_long_or_multiline_message(self) -> None:
        with pytest.raises(ValidationError):
            CreateTagParameters.model_validate(
                {**TAG_DEFAULTS, "tag": "v1.0.0", "message": "m" * 201}
            )
        with pytest.raises(ValidationError):
            CreateTagParameters.model_validate(
                {**TAG_DEFAULTS, "tag": "v1.0.0", "message": "line\nline"}
            )

    def test_rejects_unknown_parameters(self) -> None:
        with pytest.raises(ValidationError):
            CreateTagParameters.model_validate({**TAG_DEFAULTS, "tag": "v1", "force": "true"})


class TestMergePullRequestParameters:
    def test_coerces_string_number_and_method(self) -> None:
        params = MergePullRequestParameters.model_validate(
            {"pr": "7", "sha": "abc", "repo": "app", "project": "PRJ", "merge_method": "squash"}
        )

        assert params.pr == 7
        assert params.merge_method is MergeMethod.SQUASH

    @pytest.mark.parametrize("pr", [0, -1, 10**10])
    def test_rejects_out_of_range_numbers(self, pr: int) -> None:
        with pytest.raises(ValidationError):
            MergePullRequestParameters.model_validate(
                {"pr": pr, "sha": "abc", "repo": "app", "project": "PRJ"}
            )

    def test_rejects_long_title(self) -> None:
        with pytest.raises(ValidationError):
            MergePullRequestParameters.model_validate(
                {"pr": 1, "sha": "abc", "repo": "app", "project": "PRJ", "title": "t" * 101}
            )


class TestDeleteBranchParameters:
    def test_strips_branch(self) -> None:
        params = DeleteBranchParameters(branch="  feature ", repo="app", owner="PRJ")

        assert params.branch == "feature"

    def test_rejects_blank_branch(self) -> None:
        with pytest.raises(ValidationError, match="blank"):
            DeleteBranchParameters(branch="   ", repo="app", owner="PRJ")


class TestRaisePullRequestParameters:
    def test_body_is_optional(self) -> None:
        params = RaisePullRequestParameters(
            title="Add", base="master", head="feature", repo="app", owner="PRJ"
        )

        assert params.body is None

    def test_parameters_are_immutable(self) -> None:
        params = RaisePullRequestParameters(
            title="Add", base="master", head="feature", repo="app", owner="PRJ"
        )

        with pytest.raises(ValidationError):
            params.title = "Changed"  # type: ignore[misc]
