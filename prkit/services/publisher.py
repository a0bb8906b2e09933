"""Push the work branch and open a pull request unless one is already open."""

import logging

from pydantic import BaseModel

from prkit.adapters.base import PullRequestProvider
from prkit.models import BranchDescriptor
from prkit.services.fork import ensure_fork_remote
from prkit.services.git import GitRepository, authoritative_repo


class PublishResult(BaseModel):
    created: bool
    number: int | None = None
    html_url: str | None = None


class PullRequestPublisher:
    """Pushes ``branch`` to its fork remote and files the PR on the
    canonical repository.

    Pushing to a branch with an open PR updates that PR; no second PR is
    opened. The open-PR lookup and the create call are not atomic, so two
    concurrent runs can still open duplicates.
    """

    def __init__(
        self,
        branch: BranchDescriptor,
        base_branch: str,
        git: GitRepository,
        provider: PullRequestProvider,
        body: str = "",
        log: logging.Logger | None = None,
    ) -> None:
        self.branch = branch
        self.base_branch = base_branch
        self.body = body
        self._git = git
        self._provider = provider
        self._log = log or logging.getLogger("prkit.publisher")

    def head_spec(self) -> str:
        """``owner:branch`` of the pushed branch, owner taken from the fork
        remote URL."""
        owner = authoritative_repo(self._git, self.branch.fork_to_remote).split("/")[0]
        return f"{owner}:{self.branch.name}"

    def push(self) -> None:
        self._log.info("Pushing %s...", self.branch.remote_ref)
        ensure_fork_remote(self.branch, self._git, self._provider, log=self._log)
        self._git.push(self.branch.fork_to_remote, self.branch.name)

    def publish(self) -> PublishResult:
        self.push()
        repo = authoritative_repo(self._git, self.branch.remote)
        existing = self._provider.find_open_pull_request(repo, self.branch.title)
        if existing is not None:
            self._log.info("PR #%s already open, updated by push", existing.number)
            return PublishResult(created=False, number=existing.number, html_url=existing.html_url)
        pr = self._provider.create_pull_request(
            repo,
            base=self.base_branch,
            head=self.head_spec(),
            title=self.branch.title,
            body=self.body,
        )
        self._log.info("Created PR #%s", pr.number)
        return PublishResult(created=True, number=pr.number, html_url=pr.html_url)
