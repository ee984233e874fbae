"""Render-time freshness checks against the secondary data source."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from bitbucket_lifecycle.core.models.entities import Repo
    from bitbucket_lifecycle.core.ports import LifecycleQueries

logger = logging.getLogger(__name__)


async def should_offer_raise_pr(
    queries: LifecycleQueries | None,
    repo: Repo,
    branch: str,
    sha: str,
) -> bool:
    """Return whether a "Raise PR" action is still legal for ``branch`` at ``sha``.

    The branch's pull requests are re-read on every call. The action is withheld
    when any of them is open or already contains ``sha``, and also when the
    lookup fails or no data source is available.
    """
    if queries is None:
        logger.debug("No lifecycle query source; withholding Raise PR for %s", branch)
        return False
    try:
        pull_requests = await queries.branch_pull_requests(repo.owner, repo.name, branch)
    except Exception as exc:  # quality-allow-broad-except
        logger.warning(
            "Branch query failed for %s/%s@%s: %s", repo.owner, repo.name, branch, exc
        )
        return False

    if any(pr.is_open for pr in pull_requests):
        return False
    return not any(pr.contains(sha) for pr in pull_requests)


__all__ = ["should_offer_raise_pr"]
