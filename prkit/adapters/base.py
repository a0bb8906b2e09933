"""Abstract base for hosted pull request providers."""

from abc import ABC, abstractmethod
from typing import List

from prkit.models import ForkRecord, PullRequestRecord


class PullRequestProvider(ABC):
    """The four provider operations a PRKit run needs.

    ``repo`` is always an ``owner/name`` identifier.
    """

    @abstractmethod
    def fork_repository(self, repo: str) -> ForkRecord:
        """Fork ``repo`` into the authenticated account (idempotent on the
        provider side)."""
        ...

    @abstractmethod
    def list_pull_requests(self, repo: str, state: str = "open") -> List[PullRequestRecord]:
        """List pull requests in the given state (open, closed, all)."""
        ...

    @abstractmethod
    def create_pull_request(
        self,
        repo: str,
        base: str,
        head: str,
        title: str,
        body: str = "",
    ) -> PullRequestRecord:
        """Open a pull request from ``head`` (``owner:branch``) into ``base``."""
        ...

    @abstractmethod
    def close_pull_request(self, repo: str, number: int) -> None:
        """Close a pull request without merging."""
        ...

    def find_open_pull_request(self, repo: str, title: str) -> PullRequestRecord | None:
        """Return the first open PR whose title matches exactly, or None."""
        for pr in self.list_pull_requests(repo, state="open"):
            if pr.title == title:
                return pr
        return None
