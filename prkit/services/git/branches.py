"""Local and remote-tracking branch queries and operations (checkout,
delete)."""

import logging
from pathlib import Path

from prkit.services.git._run import _run_git

_HEADS = "refs/heads/"
_REMOTES = "refs/remotes/"


def _list_refs(prefix: str, cwd: Path, log: logging.Logger | None, timeout: float | None) -> list[str]:
    out = _run_git(["for-each-ref", "--format=%(refname)", prefix], cwd=cwd, log=log, timeout=timeout)
    return [line[len(prefix) :] for line in out.splitlines() if line.startswith(prefix)]


def list_local_branches(
    repo_dir: Path | None = None,
    log: logging.Logger | None = None,
    timeout: float | None = None,
) -> list[str]:
    """Names of local branches (``refs/heads/*``)."""
    cwd = Path(repo_dir) if repo_dir is not None else Path.cwd()
    return _list_refs(_HEADS, cwd, log, timeout)


def list_remote_tracking_branches(
    repo_dir: Path | None = None,
    log: logging.Logger | None = None,
    timeout: float | None = None,
) -> list[tuple[str, str]]:
    """(remote, branch) pairs for every remote-tracking ref.

    Symbolic ``<remote>/HEAD`` refs are skipped. The remote name is taken
    as the first path component, so remotes containing ``/`` are not
    supported.
    """
    cwd = Path(repo_dir) if repo_dir is not None else Path.cwd()
    pairs: list[tuple[str, str]] = []
    for name in _list_refs(_REMOTES, cwd, log, timeout):
        remote, _, branch = name.partition("/")
        if not branch or branch == "HEAD":
            continue
        pairs.append((remote, branch))
    return pairs


def current_branch(
    repo_dir: Path | None = None,
    log: logging.Logger | None = None,
    timeout: float | None = None,
) -> str:
    """Name of the checked-out branch ("HEAD" when detached)."""
    cwd = Path(repo_dir) if repo_dir is not None else Path.cwd()
    return _run_git(["rev-parse", "--abbrev-ref", "HEAD"], cwd=cwd, log=log, timeout=timeout).strip()


def checkout_branch(
    branch_name: str,
    create: bool = False,
    track: str | None = None,
    repo_dir: Path | None = None,
    log: logging.Logger | None = None,
    timeout: float | None = None,
) -> None:
    """Checkout a branch.

    Args:
        branch_name: Local branch to check out.
        create: Create the branch from HEAD (``checkout -b``).
        track: Remote-tracking ref (e.g. ``origin/prkit``); when given, a new
            local branch named after it is created to track it
            (``checkout -t``) and ``create`` is ignored.
        repo_dir: Repository directory; uses cwd if None.
        log: Optional logger.
        timeout: Optional git timeout in seconds.
    """
    cwd = Path(repo_dir) if repo_dir is not None else Path.cwd()
    if track:
        args = ["checkout", "-t", track]
    elif create:
        args = ["checkout", "-b", branch_name]
    else:
        args = ["checkout", branch_name]
    _run_git(args, cwd=cwd, log=log, timeout=timeout)
    if log:
        log.info("Checked out branch %s", branch_name)


def delete_local_branch(
    branch_name: str,
    repo_dir: Path | None = None,
    log: logging.Logger | None = None,
    timeout: float | None = None,
) -> None:
    """Force-delete a local branch (must not be checked out)."""
    cwd = Path(repo_dir) if repo_dir is not None else Path.cwd()
    _run_git(["branch", "-D", branch_name], cwd=cwd, log=log, timeout=timeout)
    if log:
        log.info("Deleted local branch %s", branch_name)
