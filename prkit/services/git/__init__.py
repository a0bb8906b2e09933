"""Git operations: status, branches, commits, push/pull, remotes."""

from prkit.services.git.branches import (
    checkout_branch,
    current_branch,
    delete_local_branch,
    list_local_branches,
    list_remote_tracking_branches,
)
from prkit.services.git.commits import commit, stage_all
from prkit.services.git.push_pull import delete_remote_branch, fetch, push, run_git_pull
from prkit.services.git.remotes import add_remote, authoritative_repo, read_remote_url, repository_slug
from prkit.services.git.status import parse_porcelain, read_status
from prkit.services.git.repository import GitRepository

__all__ = [
    "GitRepository",
    "add_remote",
    "authoritative_repo",
    "checkout_branch",
    "commit",
    "current_branch",
    "delete_local_branch",
    "delete_remote_branch",
    "fetch",
    "list_local_branches",
    "list_remote_tracking_branches",
    "parse_porcelain",
    "push",
    "read_remote_url",
    "read_status",
    "repository_slug",
    "run_git_pull",
    "stage_all",
]
