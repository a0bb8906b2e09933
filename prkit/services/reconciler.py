"""Bring local and remote branches in line with the open pull request.

Three sources of truth drift independently between runs: local refs,
remote refs and the provider's open PRs. The reconciler re-reads all of
them live and leaves the work tree on the work branch, ready for new
commits. Branches are only deleted when no open PR has the branch title.
"""

import logging

from pydantic import BaseModel

from prkit.adapters.base import PullRequestProvider
from prkit.models import BranchDescriptor, PullRequestRecord
from prkit.services.fork import ensure_fork_remote
from prkit.services.git import GitRepository, authoritative_repo


class ReconcileOutcome(BaseModel):
    """What prepare() observed and changed."""

    open_pr: PullRequestRecord | None = None
    deleted_remote: bool = False
    deleted_local: bool = False
    tracking: bool = False
    pulled_remote: bool = False


class Reconciler:
    """Prepares the work branch for one run."""

    def __init__(
        self,
        branch: BranchDescriptor,
        base_branch: str,
        git: GitRepository,
        provider: PullRequestProvider,
        log: logging.Logger | None = None,
    ) -> None:
        self.branch = branch
        self.base_branch = base_branch
        self._git = git
        self._provider = provider
        self._log = log or logging.getLogger("prkit.reconciler")

    def _prune_remote_branches(self) -> None:
        # Remote branches deleted elsewhere (e.g. auto-delete on merge) would
        # otherwise still show up as remote-tracking refs.
        self._git.fetch(self.branch.fork_to_remote, prune=True)

    def _existing_pull_request(self) -> PullRequestRecord | None:
        repo = authoritative_repo(self._git, self.branch.remote)
        return self._provider.find_open_pull_request(repo, self.branch.title)

    def prepare(self) -> ReconcileOutcome:
        """Check out ``branch.name``, tracking the fork remote when a remote
        copy survives cleanup.

        Order matters: each query runs after the mutations before it.
        """
        branch = self.branch
        git = self._git
        outcome = ReconcileOutcome()

        ensure_fork_remote(branch, git, self._provider, log=self._log)
        self._prune_remote_branches()

        git.checkout(self.base_branch)
        self._log.info("Pulling latest %s from %s...", self.base_branch, branch.remote)
        git.pull(branch.remote, self.base_branch)

        outcome.open_pr = self._existing_pull_request()
        existing_remote = git.has_remote_branch(branch.fork_to_remote, branch.name)

        if outcome.open_pr is None and existing_remote:
            self._log.info("No existing PR, removing remote branch %s", branch.remote_ref)
            git.delete_remote_branch(branch.fork_to_remote, branch.name)
            self._prune_remote_branches()
            existing_remote = False
            outcome.deleted_remote = True

        existing_local = git.has_local_branch(branch.name)

        # Left over from an aborted run or a PR closed by hand
        if outcome.open_pr is None and existing_local:
            self._log.info("No existing PR, removing local branch %s", branch.name)
            git.delete_local_branch(branch.name)
            existing_local = False
            outcome.deleted_local = True

        if existing_remote and not existing_local:
            self._log.info("Making tracking branch for %s", branch.remote_ref)
            git.checkout(branch.name, track=branch.remote_ref)
            outcome.tracking = True
        else:
            git.checkout(branch.name, create=not existing_local)

        if existing_remote:
            git.pull(branch.fork_to_remote, branch.name)
            outcome.pulled_remote = True

        if outcome.open_pr is not None:
            self._log.info("Reusing open PR #%s (%s)", outcome.open_pr.number, branch.title)
        return outcome
