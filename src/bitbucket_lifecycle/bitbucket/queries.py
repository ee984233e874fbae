"""Read-only lifecycle queries backed by the Bitbucket REST API."""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, Any, Final

from bitbucket_lifecycle.core.models.entities import BranchPullRequest

if TYPE_CHECKING:
    from bitbucket_lifecycle.bitbucket.api import BitbucketApi

logger = logging.getLogger(__name__)

PAGE_LIMIT: Final = 100


class BitbucketLifecycleQueries:
    """``LifecycleQueries`` implementation; every call goes to the server uncached."""

    def __init__(self, api: BitbucketApi) -> None:
        self._api = api

    async def _paged_values(self, path: str, params: dict[str, Any]) -> list[dict[str, Any]]:
        values: list[dict[str, Any]] = []
        start = 0
        while True:
            response = await self._api.request(
                "GET",
                path,
                params={**params, "start": start, "limit": PAGE_LIMIT},
            )
            page = response.json()
            values.extend(item for item in page.get("values", []) if isinstance(item, dict))
            if page.get("isLastPage", True) or page.get("nextPageStart") is None:
                return values
            start = int(page["nextPageStart"])

    async def _commit_shas(self, base: str, pr_id: int) -> tuple[str, ...]:
        commits = await self._paged_values(f"{base}/pull-requests/{pr_id}/commits", {})
        return tuple(str(commit.get("id") or "") for commit in commits)

    async def branch_pull_requests(
        self,
        owner: str,
        repo: str,
        branch: str,
    ) -> tuple[BranchPullRequest, ...]:
        base = f"rest/api/1.0/projects/{owner}/repos/{repo}"
        pull_requests = await self._paged_values(
            f"{base}/pull-requests",
            {"state": "ALL", "at": f"refs/heads/{branch}", "direction": "OUTGOING"},
        )
        commits = await asyncio.gather(
            *(self._commit_shas(base, int(pr["id"])) for pr in pull_requests)
        )
        result = tuple(
            BranchPullRequest(
                number=int(pr["id"]),
                state=str(pr.get("state") or "").lower(),
                commits=shas,
            )
            for pr, shas in zip(pull_requests, commits, strict=True)
        )
        logger.debug("Found %d pull request(s) for %s/%s@%s", len(result), owner, repo, branch)
        return result

    async def latest_tag(self, owner: str, repo: str) -> str | None:
        response = await self._api.request(
            "GET",
            f"rest/api/1.0/projects/{owner}/repos/{repo}/tags",
            params={"orderBy": "MODIFICATION", "limit": 1},
        )
        values = response.json().get("values") or []
        if not values:
            return None
        return str(values[0].get("displayId") or "") or None


__all__ = ["BitbucketLifecycleQueries"]
