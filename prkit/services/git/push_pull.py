"""Fetch, pull from and push to remotes."""

import logging
from pathlib import Path

from prkit.services.git._run import _run_git


def fetch(
    remote: str,
    prune: bool = False,
    repo_dir: Path | None = None,
    log: logging.Logger | None = None,
    timeout: float | None = None,
) -> None:
    """Run git fetch <remote>, optionally pruning deleted remote branches."""
    cwd = Path(repo_dir) if repo_dir is not None else Path.cwd()
    args = ["fetch", remote]
    if prune:
        args.append("--prune")
    _run_git(args, cwd=cwd, log=log, timeout=timeout)


def run_git_pull(
    remote: str | None = None,
    branch: str | None = None,
    author_name: str | None = None,
    author_email: str | None = None,
    repo_dir: Path | None = None,
    log: logging.Logger | None = None,
    timeout: float | None = None,
) -> None:
    """Run git pull [<remote> [<branch>]] in the repository.

    Divergent histories are merged (``--no-rebase``); conflicts surface as
    GitOperationFailure. The merge commit is made as ``author_name`` /
    ``author_email`` when given.
    """
    cwd = Path(repo_dir) if repo_dir is not None else Path.cwd()
    args: list[str] = []
    if author_name:
        args += ["-c", f"user.name={author_name}"]
    if author_email:
        args += ["-c", f"user.email={author_email}"]
    args += ["pull", "--no-rebase"]
    if remote:
        args.append(remote)
        if branch:
            args.append(branch)
    _run_git(args, cwd=cwd, log=log, timeout=timeout)
    if log:
        log.info("Pulled %s", f"{remote}/{branch}" if remote and branch else remote or "upstream")


def push(
    remote: str,
    refspec: str,
    repo_dir: Path | None = None,
    log: logging.Logger | None = None,
    timeout: float | None = None,
) -> None:
    """Push a refspec to a remote. Never forces."""
    cwd = Path(repo_dir) if repo_dir is not None else Path.cwd()
    _run_git(["push", remote, refspec], cwd=cwd, log=log, timeout=timeout)


def delete_remote_branch(
    branch_name: str,
    remote: str = "origin",
    repo_dir: Path | None = None,
    log: logging.Logger | None = None,
    timeout: float | None = None,
) -> None:
    """Delete a branch on the remote (``git push <remote> :<branch>``)."""
    push(remote, f":{branch_name}", repo_dir=repo_dir, log=log, timeout=timeout)
    if log:
        log.info("Deleted remote branch %s/%s", remote, branch_name)
