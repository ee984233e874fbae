"""External ports consumed by the engine and the command handlers."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from bitbucket_lifecycle.core.models.entities import BranchPullRequest


class LifecycleQueries(Protocol):
    """Read-only secondary data source re-queried at render time."""

    async def branch_pull_requests(
        self,
        owner: str,
        repo: str,
        branch: str,
    ) -> tuple[BranchPullRequest, ...]:
        """Return every pull request whose source is ``branch``, uncached."""
        ...

    async def latest_tag(self, owner: str, repo: str) -> str | None:
        """Return the most recently created tag name, if any."""
        ...


class MessageClient(Protocol):
    """Port for responding to the chat user that triggered a command."""

    async def respond(self, message: dict[str, Any], *, message_id: str | None = None) -> None:
        """Send ``message``, replacing the message ``message_id`` when given."""
        ...


__all__ = ["LifecycleQueries", "MessageClient"]
