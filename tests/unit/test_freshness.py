"""Tests for the render-time Raise PR freshness check."""

from __future__ import annotations

import pytest

from bitbucket_lifecycle.bitbucket.errors import BitbucketApiError
from bitbucket_lifecycle.core.freshness import should_offer_raise_pr
from tests.helpers.factories import HEAD_SHA, branch_pull_request, make_repo
from tests.helpers.mocks import make_failing_queries, make_queries

pytestmark = pytest.mark.unit


class TestShouldOfferRaisePr:
    @pytest.mark.asyncio()
    async def test_offered_when_branch_has_no_pull_requests(self) -> None:
        queries = make_queries()

        assert await should_offer_raise_pr(queries, make_repo(), "feature", HEAD_SHA)
        queries.branch_pull_requests.assert_awaited_once_with("PRJ", "app", "feature")

    @pytest.mark.asyncio()
    async def test_suppressed_by_open_pull_request(self) -> None:
        queries = make_queries((branch_pull_request(3, "open", "other"),))

        assert not await should_offer_raise_pr(queries, make_repo(), "feature", HEAD_SHA)

    @pytest.mark.asyncio()
    async def test_suppressed_when_closed_pull_request_contains_sha(self) -> None:
        queries = make_queries((branch_pull_request(3, "merged", "old", HEAD_SHA),))

        assert not await should_offer_raise_pr(queries, make_repo(), "feature", HEAD_SHA)

    @pytest.mark.asyncio()
    async def test_offered_when_closed_pull_requests_predate_sha(self) -> None:
        queries = make_queries(
            (
                branch_pull_request(3, "merged", "old"),
                branch_pull_request(4, "declined", "older"),
            )
        )

        assert await should_offer_raise_pr(queries, make_repo(), "feature", HEAD_SHA)

    @pytest.mark.asyncio()
    @pytest.mark.parametrize(
        "error",
        [BitbucketApiError(500, "boom"), BitbucketApiError(None, "timeout"), KeyError("id")],
    )
    async def test_query_failure_fails_closed(self, error: Exception) -> None:
        queries = make_failing_queries(error)

        assert not await should_offer_raise_pr(queries, make_repo(), "feature", HEAD_SHA)

    @pytest.mark.asyncio()
    async def test_no_query_source_fails_closed(self) -> None:
        assert not await should_offer_raise_pr(None, make_repo(), "feature", HEAD_SHA)

    @pytest.mark.asyncio()
    async def test_queried_on_every_call(self) -> None:
        queries = make_queries()

        await should_offer_raise_pr(queries, make_repo(), "feature", HEAD_SHA)
        await should_offer_raise_pr(queries, make_repo(), "feature", HEAD_SHA)

        assert queries.branch_pull_requests.await_count == 2
