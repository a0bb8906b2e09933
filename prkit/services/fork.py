"""Fork the canonical repository and register it as the push remote."""

import logging
import re

from prkit.adapters.base import PullRequestProvider
from prkit.errors import GitOperationFailure, RemoteRegistrationFailure
from prkit.models import BranchDescriptor
from prkit.services.git import GitRepository, authoritative_repo

_ALREADY_EXISTS_RE = re.compile(r"remote.*already.*exists", re.IGNORECASE)


def ensure_fork_remote(
    branch: BranchDescriptor,
    git: GitRepository,
    provider: PullRequestProvider,
    log: logging.Logger | None = None,
) -> None:
    """Make sure ``branch.fork_to_remote`` points at a fork of the canonical
    repository.

    No-op when the branch is pushed to the canonical remote. Forking is
    idempotent on the provider; an existing remote is left untouched.

    Raises:
        RemoteRegistrationFailure: Adding the remote failed for any reason
            other than the remote already existing.
        ProviderAPIFailure: The fork request failed.
    """
    if not branch.needs_fork:
        return
    fork = provider.fork_repository(authoritative_repo(git, branch.remote))
    try:
        git.add_remote(branch.fork_to_remote, fork.ssh_url)
    except GitOperationFailure as e:
        if _ALREADY_EXISTS_RE.search(str(e)):
            if log:
                log.debug("Remote %s already registered", branch.fork_to_remote)
            return
        raise RemoteRegistrationFailure(f"Cannot register remote {branch.fork_to_remote}: {e}") from e
