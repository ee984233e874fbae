"""Use cases behind the Bitbucket lifecycle commands."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Final

from bitbucket_lifecycle.bitbucket.errors import BitbucketApiError, handle_error
from bitbucket_lifecycle.chat import code_line, success_message, warning_message

if TYPE_CHECKING:
    from bitbucket_lifecycle.bitbucket.api import BitbucketApi
    from bitbucket_lifecycle.commands.models import (
        CreateTagParameters,
        DeleteBranchParameters,
        MergePullRequestParameters,
        RaisePullRequestParameters,
    )
    from bitbucket_lifecycle.config import LifecycleConfig
    from bitbucket_lifecycle.core.ports import MessageClient

logger = logging.getLogger(__name__)

PR_RAISED: Final = "PR_RAISED"
PR_MERGED: Final = "PR_MERGED"
PR_NOT_MERGEABLE: Final = "PR_NOT_MERGEABLE"
BRANCH_DELETED: Final = "BRANCH_DELETED"
TAG_CREATED: Final = "TAG_CREATED"

RAISE_PULL_REQUEST_TITLE: Final = "Raise Pull Request"
MERGE_PULL_REQUEST_TITLE: Final = "Merge Pull Request"
DELETE_BRANCH_TITLE: Final = "Delete Branch or Reference"
CREATE_TAG_TITLE: Final = "Create Tag"


class BitbucketCommandHandlers:
    """Run the mutations bound to rendered actions once a user triggers them."""

    def __init__(
        self,
        api: BitbucketApi,
        messages: MessageClient,
        config: LifecycleConfig,
    ) -> None:
        self._api = api
        self._messages = messages
        self._config = config

    async def raise_pull_request(self, params: RaisePullRequestParameters) -> dict[str, Any]:
        try:
            pr_id = await self._api.raise_pr(
                params.owner,
                params.repo,
                title=params.title,
                origin=params.head,
                target=params.base,
                body=params.body,
            )
        except BitbucketApiError as exc:
            return await handle_error(RAISE_PULL_REQUEST_TITLE, exc, self._messages)

        logger.info("Raised pull request #%s in %s/%s", pr_id, params.owner, params.repo)
        return {
            "success": True,
            "code": PR_RAISED,
            "message": f"Raised pull request #{pr_id} from {params.head} into {params.base}",
            "pr": pr_id,
        }

    async def merge_pull_request(self, params: MergePullRequestParameters) -> dict[str, Any]:
        """Merge when the server reports the pull request mergeable, else warn."""
        try:
            mergeable = await self._api.can_merge(params.project, params.repo, params.pr)
            if not mergeable:
                text = (
                    f"Pull request #{params.pr} can not be merged at this time. "
                    "Please review the pull request for potential conflicts."
                )
                await self._messages.respond(warning_message(MERGE_PULL_REQUEST_TITLE, text))
                return {"success": False, "code": PR_NOT_MERGEABLE, "message": text}

            await self._api.merge_pr(
                params.project,
                params.repo,
                params.pr,
                merge_method=params.merge_method,
            )
        except BitbucketApiError as exc:
            return await handle_error(MERGE_PULL_REQUEST_TITLE, exc, self._messages)

        logger.info("Merged pull request #%s in %s/%s", params.pr, params.project, params.repo)
        return {
            "success": True,
            "code": PR_MERGED,
            "message": f"Merged pull request #{params.pr}",
        }

    async def delete_branch(self, params: DeleteBranchParameters) -> dict[str, Any]:
        try:
            await self._api.delete_branch(params.owner, params.repo, params.branch)
        except BitbucketApiError as exc:
            return await handle_error(DELETE_BRANCH_TITLE, exc, self._messages)

        return {
            "success": True,
            "code": BRANCH_DELETED,
            "message": f"Deleted branch {params.branch}",
        }

    async def create_tag(self, params: CreateTagParameters) -> dict[str, Any]:
        message = params.message or self._config.bitbucket.tagger_message
        try:
            await self._api.create_tag(
                params.owner,
                params.repo,
                tag=params.tag,
                sha=params.sha,
                message=message,
            )
        except BitbucketApiError as exc:
            return await handle_error(CREATE_TAG_TITLE, exc, self._messages)

        text = (
            f"Successfully created new tag {code_line(params.tag)} "
            f"on commit {code_line(params.sha[:7])}"
        )
        if params.msg_id:
            await self._messages.respond(
                success_message(CREATE_TAG_TITLE, text),
                message_id=params.msg_id,
            )
        return {"success": True, "code": TAG_CREATED, "message": text}


__all__ = [
    "BRANCH_DELETED",
    "PR_MERGED",
    "PR_NOT_MERGEABLE",
    "PR_RAISED",
    "TAG_CREATED",
    "BitbucketCommandHandlers",
]
