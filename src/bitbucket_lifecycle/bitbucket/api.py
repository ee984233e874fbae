"""Bitbucket Server REST adapter."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Final, Self

import httpx

from bitbucket_lifecycle.bitbucket.errors import BitbucketApiError
from bitbucket_lifecycle.core.models.enums import MergeMethod

if TYPE_CHECKING:
    from types import TracebackType

    from bitbucket_lifecycle.config import BitbucketConfig

logger = logging.getLogger(__name__)

# Bitbucket Server merge strategy ids for each offered merge method.
MERGE_STRATEGY_IDS: Final[dict[MergeMethod, str]] = {
    MergeMethod.MERGE: "no-ff",
    MergeMethod.SQUASH: "squash",
    MergeMethod.REBASE: "rebase-no-ff",
}


def _repo_path(api: str, project: str, repo: str) -> str:
    return f"rest/{api}/1.0/projects/{project}/repos/{repo}"


def _error_message(response: httpx.Response) -> str:
    try:
        payload = response.json()
    except ValueError:
        return response.text
    errors = payload.get("errors") if isinstance(payload, dict) else None
    if isinstance(errors, list) and errors and isinstance(errors[0], dict):
        return str(errors[0].get("message") or "")
    return response.text


class BitbucketApi:
    """Async client for the Bitbucket Server endpoints the commands need."""

    def __init__(
        self,
        config: BitbucketConfig,
        *,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            base_url=config.api_url,
            auth=httpx.BasicAuth(config.username, config.password.get_secret_value()),
            timeout=config.timeout_seconds,
            headers={"Accept": "application/json"},
        )

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def request(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        """Send one request; any transport failure or non-2xx status raises."""
        try:
            response = await self._client.request(method, path, **kwargs)
        except httpx.HTTPError as exc:
            logger.warning("Bitbucket %s %s failed: %s", method, path, exc)
            raise BitbucketApiError(None, str(exc)) from exc

        if not response.is_success:
            message = _error_message(response)
            logger.warning(
                "Bitbucket %s %s returned HTTP %d: %s",
                method,
                path,
                response.status_code,
                message,
            )
            raise BitbucketApiError(response.status_code, message)
        return response

    async def delete_branch(self, project: str, repo: str, branch: str) -> int:
        response = await self.request(
            "DELETE",
            f"{_repo_path('branch-utils', project, repo)}/branches",
            json={"name": f"refs/heads/{branch.strip()}", "dryRun": False},
        )
        return response.status_code

    async def get_pr_version(self, project: str, repo: str, pr: int) -> int:
        response = await self.request(
            "GET",
            f"{_repo_path('api', project, repo)}/pull-requests/{pr}",
        )
        return int(response.json()["version"])

    async def merge_pr(
        self,
        project: str,
        repo: str,
        pr: int,
        *,
        merge_method: MergeMethod | None = None,
    ) -> int:
        """Merge ``pr`` at its current version.

        Two sequential calls: the version read is not retried if the pull
        request changes in between.
        """
        version = await self.get_pr_version(project, repo, pr)
        body = {"strategyId": MERGE_STRATEGY_IDS[merge_method]} if merge_method else None
        response = await self.request(
            "POST",
            f"{_repo_path('api', project, repo)}/pull-requests/{pr}/merge",
            params={"version": version},
            json=body,
        )
        return response.status_code

    async def can_merge(self, project: str, repo: str, pr: int) -> bool:
        response = await self.request(
            "GET",
            f"{_repo_path('api', project, repo)}/pull-requests/{pr}/merge",
        )
        return bool(response.json().get("canMerge"))

    async def raise_pr(
        self,
        project: str,
        repo: str,
        *,
        title: str,
        origin: str,
        target: str,
        body: str | None = None,
    ) -> int:
        """Open a pull request from ``origin`` into ``target`` and return its id."""
        repository = {"slug": repo, "project": {"key": project}}
        response = await self.request(
            "POST",
            f"{_repo_path('api', project, repo)}/pull-requests",
            json={
                "title": title,
                "description": body,
                "state": "OPEN",
                "open": True,
                "closed": False,
                "fromRef": {"id": f"refs/heads/{origin}", "repository": repository},
                "toRef": {"id": f"refs/heads/{target}", "repository": repository},
                "locked": False,
            },
        )
        return int(response.json()["id"])

    async def create_tag(
        self,
        project: str,
        repo: str,
        *,
        tag: str,
        sha: str,
        message: str,
    ) -> int:
        response = await self.request(
            "POST",
            f"{_repo_path('git', project, repo)}/tags",
            json={"message": message, "name": tag, "startPoint": sha, "type": "ANNOTATED"},
        )
        return response.status_code


__all__ = ["MERGE_STRATEGY_IDS", "BitbucketApi"]
